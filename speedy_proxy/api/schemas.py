"""Pydantic request models for the proxy API.

Callers post the Speedy request body as-is. ``userName`` / ``password``
act as a per-call credential override and ``language`` as the locale;
every other field is business payload forwarded untouched.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict

from speedy_proxy.services.credentials import Credentials, credentials_from_fields


class ForwardRequest(BaseModel):
    """Body accepted by every forwarding endpoint."""

    model_config = ConfigDict(extra="allow")

    userName: str | None = None
    password: str | None = None
    language: str | None = None

    def override(self) -> Credentials | None:
        """Caller-scoped credentials, when both fields are filled in."""
        return credentials_from_fields(self.userName, self.password)

    def business_fields(self) -> dict[str, Any]:
        """Everything except credentials and language."""
        return dict(self.model_extra or {})
