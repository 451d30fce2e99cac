"""Error handling framework for the Speedy proxy.

This package provides:
- Typed domain exceptions raised before any network call
- Error code registry with E-XXXX format codes
- Translation of classified Speedy failures to proxy errors

Error categories:
- E-2xxx: Request validation errors
- E-3xxx: Speedy API errors
- E-4xxx: System/internal errors
- E-5xxx: Authentication errors
"""

from speedy_proxy.errors.domain import (
    DomainError,
    InvalidRequestError,
    MissingCredentialsError,
)
from speedy_proxy.errors.registry import (
    ERROR_REGISTRY,
    ErrorCategory,
    ErrorCode,
    get_error,
    get_errors_by_category,
)
from speedy_proxy.errors.formatter import ProxyError, format_error
from speedy_proxy.errors.translation import extract_speedy_error, failure_to_error

__all__ = [
    # Domain
    "DomainError",
    "InvalidRequestError",
    "MissingCredentialsError",
    # Registry
    "ErrorCode",
    "ErrorCategory",
    "ERROR_REGISTRY",
    "get_error",
    "get_errors_by_category",
    # Formatter
    "ProxyError",
    "format_error",
    # Translation
    "extract_speedy_error",
    "failure_to_error",
]
