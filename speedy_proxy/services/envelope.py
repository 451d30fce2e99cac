"""Outbound envelope construction.

The envelope is the exact JSON object posted to Speedy: the caller's
business fields plus the resolved credentials and a language. Credential
keys in the business fields are dropped before the resolved values are
set, so a caller can never shadow them.
"""

from typing import Any

from speedy_proxy.services.credentials import Credentials
from speedy_proxy.services.speedy_constants import (
    CREDENTIAL_FIELDS,
    DEFAULT_LANGUAGE,
    IDENTITY_FIELD,
    LOCALE_FIELD,
    SECRET_FIELD,
)


def build_envelope(
    resolved: Credentials,
    business_fields: dict[str, Any] | None = None,
    language: str | None = None,
    default_language: str = DEFAULT_LANGUAGE,
) -> dict[str, Any]:
    """Merge business fields with credentials and language.

    Args:
        resolved: Credentials returned by resolve_credentials().
        business_fields: Caller payload. Not mutated.
        language: Caller-supplied language; used when non-empty.
        default_language: Language used when the caller gave none.

    Returns:
        New dict ready to be JSON-encoded.
    """
    envelope = {
        key: value
        for key, value in (business_fields or {}).items()
        if key not in CREDENTIAL_FIELDS
    }
    envelope[IDENTITY_FIELD] = resolved.identity
    envelope[SECRET_FIELD] = resolved.secret

    if isinstance(language, str) and language.strip():
        envelope[LOCALE_FIELD] = language
    elif not envelope.get(LOCALE_FIELD):
        envelope[LOCALE_FIELD] = default_language
    return envelope
