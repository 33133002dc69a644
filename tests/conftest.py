"""Shared fakes for the locator and bulk tests."""
from datetime import date
from typing import Optional

import pytest

from nicor_gas.fetcher import build_bill_url
from nicor_gas.models import ProbeResponse, SessionCredential

PORTAL = "https://portal.example.com"
PDF_BYTES = b"%PDF-1.7 fake bill"


def pdf_response(body: bytes = PDF_BYTES) -> ProbeResponse:
    return ProbeResponse(final_url=f"{PORTAL}/Billing/ViewBill", content_type="application/pdf",
                         body=body, status=200)


def auth_failed_response() -> ProbeResponse:
    return ProbeResponse(redirected=True, final_url=f"{PORTAL}/Error/Generic",
                         content_type="text/html; charset=utf-8", body=b"<html>error</html>", status=200)


def missing_response() -> ProbeResponse:
    return ProbeResponse(final_url=f"{PORTAL}/Billing/ViewBill", content_type="text/html; charset=utf-8",
                         body=b"<html>no bill</html>", status=200)


def transport_error_response() -> ProbeResponse:
    return ProbeResponse(final_url=f"{PORTAL}/Billing/ViewBill", error="Connection reset by peer")


class FakeFetcher:
    """Answers bill requests from a {date: ProbeResponse} script; unknown dates are missing."""

    def __init__(self, responses: Optional[dict] = None):
        self.base_url = PORTAL
        self.responses = responses or {}
        self.requested: list[date] = []
        self.credentials: list[SessionCredential] = []
        self._dates_by_url: dict[str, date] = {}

    def bill_url(self, bill_date: date, billing_id: str) -> str:
        url = build_bill_url(self.base_url, bill_date, billing_id)
        self._dates_by_url[url] = bill_date
        return url

    def fetch(self, url: str, credential: SessionCredential) -> ProbeResponse:
        bill_date = self._dates_by_url[url]
        self.requested.append(bill_date)
        self.credentials.append(credential)
        return self.responses.get(bill_date, missing_response())


class FakeStorage:
    def __init__(self, fail: bool = False):
        self.saved: list[tuple[str, date, bytes]] = []
        self.fail = fail

    def save(self, account_number: str, bill_date: date, content: bytes) -> str:
        if self.fail:
            raise OSError("disk full")
        self.saved.append((account_number, bill_date, content))
        return f"/bills/{account_number}-{bill_date.isoformat()}.pdf"


@pytest.fixture
def credential():
    return SessionCredential((("ASP.NET_SessionId", "abc123"), ("auth", "xyz")))
