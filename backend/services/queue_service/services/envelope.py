"""
Response Envelope Builder

Turns a classification, the merged stores and the fetch bookkeeping into the
response body and status code the dashboard consumes. Messages are fixed per
outcome; per-store queue errors are truncated to keep payloads bounded.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime, timezone

from common.exceptions import HTTP_500_INTERNAL_SERVER_ERROR
from services.queue_service.models import QueueErrorResponse, Store, StoreListEnvelope
from services.queue_service.services.classification import Classification
from services.queue_service.services.fetch_orchestrator import QueueFetchReport

MAX_REPORTED_QUEUE_ERRORS = 5

INTERNAL_ERROR_CODE = "INTERNAL_SERVER_ERROR"
INTERNAL_ERROR_MESSAGE = "An unexpected error occurred. Please try again later."

INCOMPLETE_QUEUE_NOTE = " Note: Queue data may be incomplete for some stores."

_FAILURE_MESSAGES = {
    Classification.STORE_LIST_UNAVAILABLE: "Unable to fetch store information. Please try again later.",
    Classification.NO_STORES_FOUND: "No stores available for the specified parameters",
}


@dataclass(frozen=True)
class EnvelopeResult:
    """Status code plus body for one response."""

    status_code: int
    body: StoreListEnvelope


def _now() -> datetime:
    return datetime.now(timezone.utc)


def build_envelope(
    classification: Classification,
    stores: Sequence[Store],
    report: QueueFetchReport | None = None,
    max_errors: int = MAX_REPORTED_QUEUE_ERRORS,
    timestamp: datetime | None = None,
) -> EnvelopeResult:
    """
    Build the response for a classified aggregation run.

    Args:
        classification: Outcome of ``classify``.
        stores: Merged stores (ignored for the error tier, which always returns []).
        report: Queue fetch bookkeeping; None when no queue fetch ran.
        max_errors: Maximum ``queueErrors`` entries to include.
        timestamp: Response timestamp; defaults to now (UTC).

    Returns:
        EnvelopeResult with the contract's status code and a populated body.
    """
    report = report or QueueFetchReport()
    timestamp = timestamp or _now()
    contract = classification.contract

    if classification in _FAILURE_MESSAGES:
        body = StoreListEnvelope(
            success=contract.success,
            data=[],
            timestamp=timestamp,
            message=_FAILURE_MESSAGES[classification],
            error=contract.error_code,
        )
        return EnvelopeResult(status_code=contract.status_code, body=body)

    store_count = len(stores)
    warnings = None
    partial_data = None

    if classification is Classification.PARTIAL_SUCCESS:
        message = (
            "Store data available but queue data is currently unavailable. "
            f"Showing {store_count} stores with limited information."
        )
        warnings = [
            f"Queue data unavailable for {store_count - report.successful_fetches} stores"
        ]
        partial_data = True
    else:
        message = f"Successfully fetched complete data for {store_count} stores"
        if report.successful_fetches < len(report.outcomes):
            message += INCOMPLETE_QUEUE_NOTE

    queue_errors = None
    if report.errors:
        queue_errors = [
            QueueErrorResponse(storeId=item.store_id, error=item.error)
            for item in report.errors[:max_errors]
        ]

    body = StoreListEnvelope(
        success=contract.success,
        data=list(stores),
        timestamp=timestamp,
        message=message,
        error=contract.error_code,
        warnings=warnings,
        partialData=partial_data,
        queueErrors=queue_errors,
    )
    return EnvelopeResult(status_code=contract.status_code, body=body)


def internal_error_envelope(timestamp: datetime | None = None) -> EnvelopeResult:
    """Generic 500 response; never carries exception details."""
    return rejection_envelope(
        HTTP_500_INTERNAL_SERVER_ERROR, INTERNAL_ERROR_CODE, INTERNAL_ERROR_MESSAGE, timestamp
    )


def rejection_envelope(
    status_code: int,
    error_code: str,
    message: str,
    timestamp: datetime | None = None,
) -> EnvelopeResult:
    """Envelope-shaped failure with no store data (gating rejections, internal errors)."""
    body = StoreListEnvelope(
        success=False,
        data=[],
        timestamp=timestamp or _now(),
        message=message,
        error=error_code,
    )
    return EnvelopeResult(status_code=status_code, body=body)
