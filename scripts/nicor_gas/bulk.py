"""Bulk download: run the locator for every month in a date range."""
import logging
from datetime import date
from typing import Optional

from .bill_storage import FileStorage
from .dates import each_month_of_interval
from .locator import BillLocator
from .models import BulkResult, PollingOptions, SessionCredential

logger = logging.getLogger(__name__)


def bulk_locate(
    locator: BillLocator,
    start: date,
    end: date,
    account_number: str,
    billing_id: str,
    credential: SessionCredential,
    options: Optional[PollingOptions] = None,
    storage: Optional[FileStorage] = None,
) -> BulkResult:
    """
    Locate and save the bill for each month from start through end.

    A month that fails, for any reason including a rejected session, is
    recorded in the result and the next month is tried. Storage errors
    are not caught.

    Returns:
        BulkResult; success is True if at least one bill was saved
    """
    storage = storage or FileStorage()
    result = BulkResult()

    months = list(each_month_of_interval(start, end))
    logger.info(f"Polling {len(months)} month(s) for account {account_number}")

    for i, month in enumerate(months, start=1):
        logger.info(f"--- Month {i}/{len(months)}: {month.strftime('%m/%Y')} ---")
        located = locator.locate(month, account_number, billing_id, credential, options)
        result.results.append(located)

        if not located.success:
            logger.warning(f"Skipping {month.strftime('%m/%Y')}: {located.message}")
            result.errors.append(located.message)
            continue

        logger.info("Bill found! Saving PDF to disk.")
        located.pdf_path = storage.save(account_number, located.bill_date, located.content)
        # Saved to disk; only the size is kept
        located.content = None
        result.downloaded_pdfs.append(located.pdf_path)

    result.success = len(result.downloaded_pdfs) > 0
    logger.info(f"COMPLETED: {len(result.downloaded_pdfs)} bills downloaded, {len(result.errors)} errors")
    return result
