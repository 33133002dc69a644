"""Nicor Gas utility bill downloader package."""
from .bill_storage import FileStorage, get_bill_filename, save_bill_pdf
from .bulk import bulk_locate
from .classify import classify_response, is_authentication_redirect
from .errors import AuthenticationError, BillNotFoundError, NicorGasError
from .fetcher import DocumentFetcher, build_bill_url
from .locator import BillLocator
from .models import (
    BulkResult,
    FailureReason,
    LocateResult,
    PollingOptions,
    ProbeOutcome,
    ProbeResponse,
    ProbeStatus,
    SessionCredential,
)

__all__ = [
    "AuthenticationError",
    "BillLocator",
    "BillNotFoundError",
    "BulkResult",
    "DocumentFetcher",
    "FailureReason",
    "FileStorage",
    "LocateResult",
    "NicorGasError",
    "PollingOptions",
    "ProbeOutcome",
    "ProbeResponse",
    "ProbeStatus",
    "SessionCredential",
    "build_bill_url",
    "bulk_locate",
    "classify_response",
    "get_bill_filename",
    "is_authentication_redirect",
    "save_bill_pdf",
]
