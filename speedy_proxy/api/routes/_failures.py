"""Logging and error raising shared by the forwarding routes."""

import logging

from speedy_proxy.errors.formatter import ProxyError
from speedy_proxy.errors.translation import failure_to_error
from speedy_proxy.services.classifier import FailureResult, TransportFailure
from speedy_proxy.services.speedy_constants import LABEL_CONTENT_TYPE
from speedy_proxy.utils.redaction import sanitize_error_message

logger = logging.getLogger("speedy_proxy.api.routes")


def raise_failure(
    result: FailureResult,
    operation: str,
    expected_content_type: str = LABEL_CONTENT_TYPE,
    **extra: object,
) -> None:
    """Log a classified Speedy failure and raise it as a ProxyError.

    Args:
        result: Failure variant returned by the gateway.
        operation: Speedy operation name, e.g. "location/office".
        expected_content_type: Configured label media type, for E-3004.
        **extra: Fields merged into the error body (e.g. ``offices=[]``).

    Raises:
        ProxyError: Always.
    """
    error: ProxyError = failure_to_error(result, operation, expected_content_type)
    error.details.update(extra)

    if isinstance(result, TransportFailure):
        logger.error("Speedy %s unreachable: %s", operation, result.reason)
    else:
        logger.warning(
            "Speedy %s failed (%s, status=%s): %s",
            operation,
            result.kind,
            result.status,
            sanitize_error_message(result.raw, max_length=500),
        )
    raise error
