"""Tests for credential resolution."""

import pytest

from speedy_proxy.errors.domain import MissingCredentialsError
from speedy_proxy.services.credentials import (
    Credentials,
    credentials_from_fields,
    resolve_credentials,
)

DEFAULTS = Credentials(identity="env-user", secret="env-pass")


class TestResolveCredentials:
    """Tests for resolve_credentials()."""

    def test_complete_override_wins(self):
        """A complete override is used verbatim."""
        override = Credentials(identity="tenant", secret="tenant-pass")
        assert resolve_credentials(override, DEFAULTS) is override

    def test_defaults_used_without_override(self):
        """Configured defaults apply when no override is given."""
        assert resolve_credentials(None, DEFAULTS) == DEFAULTS

    @pytest.mark.parametrize(
        "override",
        [
            Credentials(identity="tenant", secret=""),
            Credentials(identity="", secret="tenant-pass"),
            Credentials(identity="", secret=""),
        ],
    )
    def test_partial_override_falls_back_to_defaults(self, override):
        """An override missing either field is ignored."""
        assert resolve_credentials(override, DEFAULTS) == DEFAULTS

    def test_missing_everywhere_raises(self):
        """No override and no defaults fails closed."""
        with pytest.raises(MissingCredentialsError) as exc_info:
            resolve_credentials(None, None)
        assert exc_info.value.missing == ["identity", "secret"]

    def test_half_configured_defaults_raise(self):
        """Defaults with an empty secret are not usable."""
        with pytest.raises(MissingCredentialsError) as exc_info:
            resolve_credentials(None, Credentials(identity="env-user", secret=""))
        assert exc_info.value.missing == ["secret"]

    def test_override_rescues_missing_defaults(self):
        """A complete override works even when nothing is configured."""
        override = Credentials(identity="tenant", secret="tenant-pass")
        assert resolve_credentials(override, None) == override


class TestCredentialsFromFields:
    """Tests for credentials_from_fields()."""

    def test_both_present(self):
        assert credentials_from_fields("u", "p") == Credentials(identity="u", secret="p")

    @pytest.mark.parametrize(
        "identity,secret",
        [("u", None), (None, "p"), ("", "p"), ("u", ""), (123, "p")],
    )
    def test_incomplete_returns_none(self, identity, secret):
        assert credentials_from_fields(identity, secret) is None
