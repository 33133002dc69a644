"""Classify portal responses to bill requests."""
from .models import ProbeOutcome, ProbeResponse

PDF_CONTENT_TYPE = "application/pdf"

# The portal bounces unauthenticated requests to its generic error page
AUTH_FAILURE_MARKER = "Generic"


def is_authentication_redirect(response: ProbeResponse) -> bool:
    """True if the portal redirected the request to its generic error page."""
    return response.redirected and AUTH_FAILURE_MARKER in (response.final_url or "")


def is_pdf(response: ProbeResponse) -> bool:
    media_type = (response.content_type or "").split(";")[0].strip().lower()
    return media_type == PDF_CONTENT_TYPE and bool(response.body)


def classify_response(response: ProbeResponse) -> ProbeOutcome:
    """
    Map a portal response to a probe outcome.

    Auth redirects win over everything else. A PDF body means the bill
    exists. Anything else, transport errors included, counts as not found.
    """
    if is_authentication_redirect(response):
        return ProbeOutcome.auth_failed(
            "Unable to make the bill request. An authentication issue has likely occurred."
        )
    if is_pdf(response):
        return ProbeOutcome.found(response.body)
    if response.error:
        return ProbeOutcome.not_found(f"transport error: {response.error}", transport_error=True)
    return ProbeOutcome.not_found(f"HTTP {response.status} ({response.content_type or 'no content type'})")
