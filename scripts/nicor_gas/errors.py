"""Exceptions raised by the Nicor Gas bill downloader."""
from datetime import date
from typing import Optional


class NicorGasError(Exception):
    """Base class for downloader errors."""


class AuthenticationError(NicorGasError):
    """Login failed, or the portal rejected the session."""


class BillNotFoundError(NicorGasError):
    """No bill could be located within the polling window for a month."""

    def __init__(self, message: str, month: Optional[date] = None):
        super().__init__(message)
        self.month = month
