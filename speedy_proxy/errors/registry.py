"""Error code registry with E-XXXX format codes.

Errors are grouped into categories:
- E-2xxx: Request validation errors
- E-3xxx: Speedy API errors
- E-4xxx: System/internal errors
- E-5xxx: Authentication errors

Each error includes a code, title, message template, and remediation steps.
"""

from dataclasses import dataclass
from enum import Enum


class ErrorCategory(str, Enum):
    """Categories for error codes."""

    VALIDATION = "validation"  # E-2xxx
    CARRIER = "carrier"  # E-3xxx
    SYSTEM = "system"  # E-4xxx
    AUTH = "auth"  # E-5xxx


@dataclass
class ErrorCode:
    """Definition of an error code with metadata.

    Attributes:
        code: Error code in E-XXXX format.
        category: Error category for grouping.
        title: Short title for display.
        message_template: Message with {placeholders} for context.
        remediation: Action user should take to resolve.
        is_retryable: Whether the operation can be retried without user action.
    """

    code: str
    category: ErrorCategory
    title: str
    message_template: str
    remediation: str
    is_retryable: bool = False


ERROR_REGISTRY: dict[str, ErrorCode] = {
    # Validation errors (E-2xxx)
    "E-2001": ErrorCode(
        code="E-2001",
        category=ErrorCategory.VALIDATION,
        title="Invalid Request",
        message_template="{reason}",
        remediation="Correct the request payload and retry.",
    ),
    "E-2002": ErrorCode(
        code="E-2002",
        category=ErrorCategory.VALIDATION,
        title="Request Too Large",
        message_template="Request body exceeds {max_bytes} bytes.",
        remediation="Send a smaller payload.",
    ),
    "E-2003": ErrorCode(
        code="E-2003",
        category=ErrorCategory.VALIDATION,
        title="Endpoint Disabled",
        message_template="Use POST {replacement} with credentials in body. "
        "{path} is disabled to avoid credential leaks.",
        remediation="Switch the caller to the POST endpoint.",
    ),
    # Speedy API errors (E-3xxx)
    "E-3001": ErrorCode(
        code="E-3001",
        category=ErrorCategory.CARRIER,
        title="Speedy Unreachable",
        message_template="Speedy {operation} failed: {reason}",
        remediation="Wait a few minutes and retry. Check Speedy system status if issue persists.",
        is_retryable=True,
    ),
    "E-3002": ErrorCode(
        code="E-3002",
        category=ErrorCategory.CARRIER,
        title="Speedy HTTP Error",
        message_template="Speedy {operation} failed with HTTP {status}.",
        remediation="Inspect the carrier response details and correct the request.",
    ),
    "E-3003": ErrorCode(
        code="E-3003",
        category=ErrorCategory.CARRIER,
        title="Speedy Rejected Request",
        message_template="Speedy {operation} failed: {carrier_message}",
        remediation="Correct the shipment data reported by Speedy and retry.",
    ),
    "E-3004": ErrorCode(
        code="E-3004",
        category=ErrorCategory.CARRIER,
        title="Label Not Rendered",
        message_template="Speedy {operation} failed: expected {expected}, got '{content_type}'.",
        remediation="Check the parcel identifiers sent for printing.",
    ),
    # System errors (E-4xxx)
    "E-4001": ErrorCode(
        code="E-4001",
        category=ErrorCategory.SYSTEM,
        title="Configuration Error",
        message_template="Could not load configuration: {reason}",
        remediation="Fix the configuration file and restart the proxy.",
    ),
    # Auth errors (E-5xxx)
    "E-5001": ErrorCode(
        code="E-5001",
        category=ErrorCategory.AUTH,
        title="Speedy Credentials Missing",
        message_template="Speedy credentials are not configured.",
        remediation="Set SPEEDY_USERNAME and SPEEDY_PASSWORD or pass userName/password in the request body.",
    ),
}


def get_error(code: str) -> ErrorCode | None:
    """Get error definition by code.

    Args:
        code: Error code in E-XXXX format.

    Returns:
        ErrorCode if found, None otherwise.
    """
    return ERROR_REGISTRY.get(code)


def get_errors_by_category(category: ErrorCategory) -> list[ErrorCode]:
    """Get all errors in a category."""
    return [e for e in ERROR_REGISTRY.values() if e.category == category]
