"""Speedy failure translation to proxy error codes.

Maps the failure variants of ForwardResult onto registry codes and the
HTTP status the routing layer should answer with. Carrier payloads are
kept in ``details`` so an operator sees exactly what Speedy said.
"""

from typing import Any

from speedy_proxy.errors.formatter import ProxyError
from speedy_proxy.services.classifier import (
    FailureResult,
    HttpFailure,
    LogicalFailure,
    TransportFailure,
)
from speedy_proxy.services.speedy_constants import LABEL_CONTENT_TYPE

# Status used when Speedy gave no usable HTTP status of its own
BAD_GATEWAY = 502


def extract_speedy_error(body: Any) -> str | None:
    """Extract a human-readable message from a Speedy error body.

    Handles the shapes Speedy is known to use:
    - {"error": {"message": "...", "context": "...", "code": ...}}
    - {"error": "..."}
    - {"errors": [{"message": "..."}, ...]} or {"errors": ["..."]}
    - {"message": "..."}

    Args:
        body: Parsed response body.

    Returns:
        The message, or None when none could be found.
    """
    if not isinstance(body, dict):
        return None

    error = body.get("error")
    if isinstance(error, dict):
        message = error.get("message") or error.get("context")
        if message:
            return str(message)
    elif isinstance(error, str) and error:
        return error

    errors = body.get("errors")
    if isinstance(errors, list) and errors:
        first = errors[0]
        if isinstance(first, dict):
            message = first.get("message") or first.get("context")
            if message:
                return str(message)
        elif first:
            return str(first)

    for key in ("message", "context"):
        value = body.get(key)
        if isinstance(value, str) and value:
            return value
    return None


def failure_to_error(
    result: FailureResult,
    operation: str,
    expected_content_type: str = LABEL_CONTENT_TYPE,
) -> ProxyError:
    """Translate a classified failure into a ProxyError.

    Args:
        result: TransportFailure, HttpFailure or LogicalFailure.
        operation: Speedy operation name for the message, e.g. "location/site".
        expected_content_type: Label media type named in E-3004 messages.

    Returns:
        ProxyError whose status_code is the upstream 4xx/5xx status for
        HttpFailure and 502 otherwise.
    """
    if isinstance(result, TransportFailure):
        return ProxyError.from_code(
            "E-3001",
            status_code=BAD_GATEWAY,
            operation=operation,
            reason=result.reason,
            details={"status": None, "details": result.reason, "json": None},
        )

    details = {
        "status": result.status,
        "contentType": result.content_type,
        "details": result.raw,
        "json": result.json,
    }

    if isinstance(result, HttpFailure):
        return ProxyError.from_code(
            "E-3002",
            status_code=result.status if result.status >= 400 else BAD_GATEWAY,
            operation=operation,
            status=result.status,
            details=details,
        )

    if isinstance(result, LogicalFailure) and result.json is None:
        # Binary path answered with an HTML page or other non-label body
        return ProxyError.from_code(
            "E-3004",
            status_code=BAD_GATEWAY,
            operation=operation,
            expected=expected_content_type,
            content_type=result.content_type,
            details=details,
        )

    carrier_message = extract_speedy_error(result.json) or "request rejected"
    return ProxyError.from_code(
        "E-3003",
        status_code=BAD_GATEWAY,
        operation=operation,
        carrier_message=carrier_message,
        details=details,
    )
