"""
Bill storage for downloaded Nicor Gas PDFs.

Bills are stored as:
  {download_dir}/{account_number}-{YYYY-MM-DD}.pdf

The date is the day the bill was actually found on, not the month that
was searched. Example:
  data/nicor-gas-bills/1234567890-2024-03-18.pdf
"""
import logging
from datetime import date
from pathlib import Path
from typing import Union

logger = logging.getLogger(__name__)


def get_project_root() -> Path:
    """Get the project root directory."""
    # Go up from scripts/nicor_gas to project root
    return Path(__file__).parent.parent.parent


def get_bills_directory() -> Path:
    """Get the default bills directory."""
    return get_project_root() / "data" / "nicor-gas-bills"


def get_bill_filename(account_number: str, bill_date: date, ext: str = "pdf") -> str:
    """
    File name for a bill.
    ("1234567890", date(2024, 3, 18)) -> "1234567890-2024-03-18.pdf"
    """
    return f"{account_number}-{bill_date.strftime('%Y-%m-%d')}.{ext}"


def get_bill_path(directory: Union[str, Path], account_number: str, bill_date: date) -> Path:
    """Get the full path for a bill PDF."""
    return Path(directory) / get_bill_filename(account_number, bill_date)


def save_bill_pdf(
    directory: Union[str, Path],
    account_number: str,
    bill_date: date,
    pdf_content: bytes
) -> str:
    """
    Save a bill PDF under its standard name.

    Args:
        directory: Directory to save into (created if missing)
        account_number: Account number, used as the file name prefix
        bill_date: Date the bill was issued on
        pdf_content: The PDF content as bytes

    Returns:
        The path where the file was saved

    Raises:
        OSError: if the directory or file cannot be written
    """
    Path(directory).mkdir(parents=True, exist_ok=True)
    file_path = get_bill_path(directory, account_number, bill_date)

    with open(file_path, 'wb') as f:
        f.write(pdf_content)

    logger.info(f"Saved bill: {file_path}")
    return str(file_path)


class FileStorage:
    """Writes located bills into a single directory."""

    def __init__(self, directory: Union[str, Path, None] = None):
        self.directory = Path(directory) if directory else get_bills_directory()

    def save(self, account_number: str, bill_date: date, content: bytes) -> str:
        return save_bill_pdf(self.directory, account_number, bill_date, content)
