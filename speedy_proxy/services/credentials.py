"""Credential resolution for outbound Speedy calls.

Resolution order: the per-call override when both fields are non-empty,
otherwise the process-wide defaults loaded at startup, otherwise
MissingCredentialsError. No caching and no validation against Speedy; bad
credentials surface as a classified failure from the carrier.
"""

from dataclasses import dataclass

from speedy_proxy.errors.domain import MissingCredentialsError


@dataclass(frozen=True)
class Credentials:
    """Speedy API user name and password pair."""

    identity: str
    secret: str

    @property
    def is_complete(self) -> bool:
        """Whether both fields are non-empty strings."""
        return _non_empty(self.identity) and _non_empty(self.secret)


def _non_empty(value: object) -> bool:
    return isinstance(value, str) and value != ""


def credentials_from_fields(
    identity: object, secret: object
) -> Credentials | None:
    """Build an override from raw caller fields.

    Returns None unless both values are non-empty strings, so a half-filled
    override falls through to the configured defaults.
    """
    if _non_empty(identity) and _non_empty(secret):
        return Credentials(identity=identity, secret=secret)  # type: ignore[arg-type]
    return None


def resolve_credentials(
    override: Credentials | None = None,
    defaults: Credentials | None = None,
) -> Credentials:
    """Pick the credentials used to authenticate one outbound call.

    Args:
        override: Caller-scoped credentials (multi-tenant mode).
        defaults: Process-wide credentials from configuration.

    Returns:
        The resolved Credentials.

    Raises:
        MissingCredentialsError: If neither source yields a complete pair.
    """
    if override is not None and override.is_complete:
        return override

    if defaults is not None and defaults.is_complete:
        return defaults

    missing = []
    if defaults is None or not _non_empty(defaults.identity):
        missing.append("identity")
    if defaults is None or not _non_empty(defaults.secret):
        missing.append("secret")
    raise MissingCredentialsError(missing)
