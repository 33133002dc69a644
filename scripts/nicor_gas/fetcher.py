"""
HTTP transport for bill requests.

Requests go out with the session cookies captured from the browser login
and the navigation headers a desktop Chrome would send.
"""
import logging
from datetime import date
from typing import Optional

import requests

from .models import ProbeResponse, SessionCredential

logger = logging.getLogger(__name__)

BASE_URL = "https://customerportal.southerncompany.com"
BILL_PATH = "/Billing/ViewBill"

DEFAULT_HEADERS = {
    "accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/avif,image/webp,"
              "image/apng,*/*;q=0.8,application/signed-exchange;v=b3;q=0.7",
    "accept-language": "en-US,en;q=0.9",
    "cache-control": "max-age=0",
    "priority": "u=0, i",
    "sec-ch-ua": '"Chromium";v="128", "Not;A=Brand";v="24", "Google Chrome";v="128"',
    "sec-ch-ua-mobile": "?0",
    "sec-ch-ua-platform": '"Windows"',
    "sec-fetch-dest": "document",
    "sec-fetch-mode": "navigate",
    "sec-fetch-site": "none",
    "sec-fetch-user": "?1",
    "upgrade-insecure-requests": "1",
}


def build_bill_url(base_url: str, bill_date: date, billing_id: str) -> str:
    """URL of the bill issued on bill_date. BillDate is MM/dd/yyyy, unescaped."""
    bill_date_str = bill_date.strftime("%m/%d/%Y")
    return f"{base_url.rstrip('/')}{BILL_PATH}?BillDate={bill_date_str}&BillId={billing_id}&BillRoutingNum=1"


class DocumentFetcher:
    """Fetches bill documents over a pooled requests session."""

    def __init__(self, base_url: str = BASE_URL, timeout: float = 30,
                 session: Optional[requests.Session] = None):
        self.base_url = base_url
        self.timeout = timeout
        self.session = session or requests.Session()

    def bill_url(self, bill_date: date, billing_id: str) -> str:
        return build_bill_url(self.base_url, bill_date, billing_id)

    def fetch(self, url: str, credential: SessionCredential) -> ProbeResponse:
        """
        GET url with the session's cookies, following redirects.

        Network failures never raise; they come back as a ProbeResponse
        with error set.
        """
        headers = dict(DEFAULT_HEADERS)
        if credential:
            headers["cookie"] = credential.cookie_header()

        logger.debug(f"GET {url}")
        try:
            response = self.session.get(url, headers=headers, timeout=self.timeout, allow_redirects=True)
        except requests.RequestException as e:
            logger.warning(f"Request failed for {url}: {e}")
            return ProbeResponse(final_url=url, error=str(e) or e.__class__.__name__)

        return ProbeResponse(
            redirected=bool(response.history),
            final_url=response.url or url,
            content_type=response.headers.get("Content-Type", ""),
            body=response.content or None,
            status=response.status_code,
        )

    def close(self):
        self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
