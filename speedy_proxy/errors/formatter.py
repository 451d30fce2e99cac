"""Proxy error type and formatting.

ProxyError is what the routing layer raises; the FastAPI exception
handler renders it as a JSON body carrying the error code.
"""

from dataclasses import dataclass, field

from speedy_proxy.errors.registry import get_error


@dataclass
class ProxyError(Exception):
    """Application error with code, message, and context.

    Attributes:
        code: Error code in E-XXXX format.
        message: Human-readable error message.
        remediation: Action user should take to resolve.
        status_code: HTTP status the routing layer responds with.
        is_retryable: Whether the operation can be retried without user action.
        details: Additional context dictionary.
    """

    code: str
    message: str
    remediation: str
    status_code: int = 500
    is_retryable: bool = False
    details: dict = field(default_factory=dict)

    def __str__(self) -> str:
        """Return string representation of the error."""
        return f"{self.code}: {self.message}"

    @classmethod
    def from_code(
        cls, code: str, status_code: int = 500, **kwargs: object
    ) -> "ProxyError":
        """Create error from registry code with context substitution.

        Args:
            code: Error code in E-XXXX format.
            status_code: HTTP status for the response.
            **kwargs: Context values for message template substitution.
                The special key 'details' is stored on the error when it
                is a dict rather than substituted into the message.

        Returns:
            ProxyError instance with formatted message.
        """
        details = kwargs.get("details", {})
        if not isinstance(details, dict):
            details = {}

        error_def = get_error(code)
        if not error_def:
            return cls(
                code=code,
                message=f"Unknown error: {code}",
                remediation="Contact support.",
                status_code=status_code,
                details=details,
            )

        message = error_def.message_template
        try:
            message = message.format(**kwargs)
        except KeyError:
            # Keep template if some placeholders are missing
            pass

        return cls(
            code=error_def.code,
            message=message,
            remediation=error_def.remediation,
            status_code=status_code,
            is_retryable=error_def.is_retryable,
            details=details,
        )


def format_error(error: ProxyError, include_remediation: bool = True) -> str:
    """Format error for display to a human operator.

    Args:
        error: The ProxyError to format.
        include_remediation: Whether to include remediation steps.

    Returns:
        Multi-line formatted string.
    """
    lines = [f"{error.code}: {error.message}"]
    if error.details.get("status") is not None:
        lines.append(f"  Upstream status: {error.details['status']}")
    if include_remediation:
        lines.append(f"  Action: {error.remediation}")
    return "\n".join(lines)
