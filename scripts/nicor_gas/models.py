"""Data models for Nicor Gas bill polling."""
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Iterable, Optional

from .errors import AuthenticationError, BillNotFoundError


MIN_DAY = 0
MAX_DAY = 31


def _clamp_day(day: int) -> int:
    return min(MAX_DAY, max(MIN_DAY, int(day)))


@dataclass(frozen=True)
class SessionCredential:
    """Authenticated portal session as ordered cookie (name, value) pairs."""
    cookies: tuple[tuple[str, str], ...] = ()

    @classmethod
    def from_playwright_cookies(cls, cookies: Iterable[dict]) -> "SessionCredential":
        """Build a credential from the cookie dicts Playwright returns."""
        return cls(tuple((c["name"], c["value"]) for c in cookies))

    def cookie_header(self) -> str:
        """Serialize as a Cookie header value: "a=1; b=2"."""
        return "; ".join(f"{name}={value}" for name, value in self.cookies)

    def as_dict(self) -> dict[str, str]:
        return {name: value for name, value in self.cookies}

    def __bool__(self) -> bool:
        return bool(self.cookies)


@dataclass(frozen=True)
class PollingOptions:
    """
    Day-of-month window to poll for a bill.

    Bounds may be given outside [0, 31]; they are clamped before use.
    An inverted window yields no candidate days.
    """
    start_trying_on: int = 14
    stop_trying_on: int = 20

    def clamped(self) -> tuple[int, int]:
        return _clamp_day(self.start_trying_on), _clamp_day(self.stop_trying_on)

    def days(self) -> range:
        """Candidate days in ascending order, both bounds inclusive."""
        start, stop = self.clamped()
        return range(start, stop + 1)


@dataclass(frozen=True)
class ProbeResponse:
    """What the portal answered for a single bill request."""
    redirected: bool = False
    final_url: str = ""
    content_type: str = ""
    body: Optional[bytes] = None
    status: int = 0
    error: Optional[str] = None


class ProbeStatus(Enum):
    FOUND = "found"
    NOT_FOUND = "not_found"
    AUTH_FAILED = "auth_failed"


@dataclass(frozen=True)
class ProbeOutcome:
    """Classification of one probe. Exactly one status; content only when FOUND."""
    status: ProbeStatus
    content: Optional[bytes] = None
    reason: Optional[str] = None
    transport_error: bool = False

    @classmethod
    def found(cls, content: bytes) -> "ProbeOutcome":
        return cls(ProbeStatus.FOUND, content=content)

    @classmethod
    def not_found(cls, reason: Optional[str] = None, transport_error: bool = False) -> "ProbeOutcome":
        return cls(ProbeStatus.NOT_FOUND, reason=reason, transport_error=transport_error)

    @classmethod
    def auth_failed(cls, reason: str) -> "ProbeOutcome":
        return cls(ProbeStatus.AUTH_FAILED, reason=reason)


class FailureReason(Enum):
    EXHAUSTED = "exhausted"
    AUTHENTICATION = "authentication"


@dataclass
class LocateResult:
    """Result of searching one month for a bill."""
    month: date
    success: bool
    account_number: str = ""
    bill_date: Optional[date] = None
    content: Optional[bytes] = None
    size: int = 0
    failure: Optional[FailureReason] = None
    message: Optional[str] = None
    probes: int = 0
    transport_errors: int = 0
    pdf_path: Optional[str] = None

    def raise_for_failure(self) -> None:
        """Raise the matching NicorGasError subclass if this result is a failure."""
        if self.success:
            return
        if self.failure is FailureReason.AUTHENTICATION:
            raise AuthenticationError(self.message or "Authentication failed")
        raise BillNotFoundError(self.message or "Bill not found", month=self.month)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "month": self.month.strftime("%Y-%m"),
            "account_number": self.account_number,
            "success": self.success,
            "bill_date": self.bill_date.isoformat() if self.bill_date else None,
            "failure": self.failure.value if self.failure else None,
            "message": self.message,
            "probes": self.probes,
            "transport_errors": self.transport_errors,
            "size": self.size,
            "pdf_path": self.pdf_path,
        }


@dataclass
class BulkResult:
    """Result of polling a range of months."""
    success: bool = False
    results: list[LocateResult] = field(default_factory=list)
    downloaded_pdfs: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    @property
    def failed_months(self) -> list[date]:
        return [r.month for r in self.results if not r.success]

    def to_dict(self) -> dict:
        return {
            "success": self.success,
            "count": len(self.downloaded_pdfs),
            "results": [r.to_dict() for r in self.results],
            "errors": self.errors,
            "downloaded_pdfs": self.downloaded_pdfs,
        }
