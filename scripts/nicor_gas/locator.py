"""
Bill locator: polls the portal for a bill within a month's issuance window.

The portal only serves a bill when asked for the exact day it was issued,
and that day drifts by a few days from cycle to cycle. Instead of working
out the billing cycle, the locator walks a short window of days in the
month, one request at a time, and stops at the first PDF.
"""
import logging
from datetime import date
from typing import Optional

from .classify import classify_response
from .dates import candidate_date
from .fetcher import DocumentFetcher
from .models import (
    FailureReason,
    LocateResult,
    PollingOptions,
    ProbeStatus,
    SessionCredential,
)

logger = logging.getLogger(__name__)


class BillLocator:
    """Finds the bill issued in a given month by probing candidate days."""

    def __init__(self, fetcher: DocumentFetcher):
        self.fetcher = fetcher

    def locate(
        self,
        month: date,
        account_number: str,
        billing_id: str,
        credential: SessionCredential,
        options: Optional[PollingOptions] = None,
    ) -> LocateResult:
        """
        Search month for a bill, day by day across the polling window.

        Stops at the first PDF or the first authentication failure. Days
        are never probed in parallel.

        Returns:
            LocateResult; on failure, failure is AUTHENTICATION or EXHAUSTED
        """
        options = options or PollingOptions()
        month_label = month.strftime("%m/%Y")
        logger.info(f"Trying to download bill issued in the month of {month_label}")

        probes = 0
        transport_errors = 0
        for day in options.days():
            bill_date = candidate_date(month, day)
            logger.info(f"- Trying {bill_date.strftime('%m/%d/%Y')}")

            response = self.fetcher.fetch(self.fetcher.bill_url(bill_date, billing_id), credential)
            probes += 1
            outcome = classify_response(response)

            if outcome.status is ProbeStatus.FOUND:
                logger.info(f"Bill found for {bill_date.strftime('%m/%d/%Y')}")
                return LocateResult(
                    month=month,
                    account_number=account_number,
                    success=True,
                    bill_date=bill_date,
                    content=outcome.content,
                    size=len(outcome.content),
                    probes=probes,
                    transport_errors=transport_errors,
                )

            if outcome.status is ProbeStatus.AUTH_FAILED:
                logger.error(outcome.reason)
                return LocateResult(
                    month=month,
                    account_number=account_number,
                    success=False,
                    failure=FailureReason.AUTHENTICATION,
                    message=outcome.reason,
                    probes=probes,
                    transport_errors=transport_errors,
                )

            if outcome.transport_error:
                transport_errors += 1
                logger.warning(f"  {outcome.reason}")
            else:
                logger.debug(f"  Not found: {outcome.reason}")

        message = f"Unable to find and/or download a bill for the month of {month_label}"
        if transport_errors:
            message += f" ({transport_errors} of {probes} requests failed to reach the portal)"
        logger.warning(message)
        return LocateResult(
            month=month,
            account_number=account_number,
            success=False,
            failure=FailureReason.EXHAUSTED,
            message=message,
            probes=probes,
            transport_errors=transport_errors,
        )
