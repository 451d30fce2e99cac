"""Typed domain exceptions for API error mapping.

These are raised before any network call is attempted. Routes catch the
specific types to return the appropriate HTTP status codes.

Usage:
    # In service layer
    raise InvalidRequestError("siteId", "Office lookup requires 'siteId'")

    # In route handler
    try:
        result = await gateway.lookup("office", query)
    except InvalidRequestError as e:
        raise HTTPException(status_code=400, detail=str(e))
"""


class DomainError(Exception):
    """Base exception for all domain errors."""

    def __init__(self, message: str) -> None:
        super().__init__(message)


class MissingCredentialsError(DomainError):
    """No usable Speedy credentials on either the override or config path."""

    def __init__(self, missing: list[str]) -> None:
        super().__init__(
            f"Speedy credentials are not configured (missing: {', '.join(missing)})"
        )
        self.missing = missing


class InvalidRequestError(DomainError):
    """Malformed caller input. Maps to HTTP 400."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(message)
        self.field = field
