"""Speedy forwarding pipeline.

Every operation runs the same steps: resolve credentials, build the
envelope (normalizing shipment payloads first), post it, and classify
the response. Credential and request problems raise before the
transport is touched; everything after that comes back as a
ForwardResult and is never retried here.

Example:
    gateway = SpeedyGateway(settings.speedy, transport)
    result = await gateway.lookup("office", {"siteId": 68134})
    if isinstance(result, JsonSuccess):
        offices = result.data
"""

import dataclasses
from datetime import date
from typing import Any, Literal

from speedy_proxy.config import SpeedyConfig
from speedy_proxy.errors.domain import InvalidRequestError
from speedy_proxy.services.classifier import ForwardResult, JsonSuccess, classify
from speedy_proxy.services.credentials import Credentials, resolve_credentials
from speedy_proxy.services.envelope import build_envelope
from speedy_proxy.services.shipment_normalizer import normalize_shipment
from speedy_proxy.services.speedy_constants import (
    OFFICE_PATH,
    PRINT_PATH,
    SHIPMENT_PATH,
    SITE_PATH,
)
from speedy_proxy.services.transport import Expect, SpeedyTransport

LookupKind = Literal["site", "office"]

# kind -> (path, required query field, collection key in the response)
_LOOKUPS: dict[str, tuple[str, str, str]] = {
    "site": (SITE_PATH, "name", "sites"),
    "office": (OFFICE_PATH, "siteId", "offices"),
}


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


class SpeedyGateway:
    """Credential-injecting client for the three Speedy operations."""

    def __init__(self, config: SpeedyConfig, transport: SpeedyTransport) -> None:
        self._config = config
        self._defaults = config.default_credentials()
        self._transport = transport

    async def _forward(
        self,
        path: str,
        business_fields: dict[str, Any],
        expect: Expect,
        override: Credentials | None,
        language: str | None,
    ) -> ForwardResult:
        resolved = resolve_credentials(override, self._defaults)
        envelope = build_envelope(
            resolved,
            business_fields,
            language=language,
            default_language=self._config.language,
        )
        raw = await self._transport.send(path, envelope, expect=expect)
        return classify(raw, expect, binary_content_type=self._config.label_content_type)

    async def lookup(
        self,
        kind: LookupKind,
        query: dict[str, Any],
        override: Credentials | None = None,
        language: str | None = None,
    ) -> ForwardResult:
        """Look up Speedy sites by name or offices by site ID.

        On JsonSuccess the ``sites`` / ``offices`` collection is unwrapped
        into ``data`` (None when Speedy omitted it). Other variants are
        returned unchanged.

        Raises:
            InvalidRequestError: Unknown kind or missing required field.
            MissingCredentialsError: No usable credentials.
        """
        if kind not in _LOOKUPS:
            raise InvalidRequestError("kind", f"Unknown lookup kind: {kind!r}")
        path, required, collection = _LOOKUPS[kind]

        if _is_blank(query.get(required)):
            raise InvalidRequestError(
                required, f"{kind.capitalize()} lookup requires '{required}'"
            )

        fields = dict(query)
        if kind == "site" and _is_blank(fields.get("countryId")):
            fields["countryId"] = self._config.default_country_id

        result = await self._forward(path, fields, "json", override, language)
        if isinstance(result, JsonSuccess):
            data = result.data.get(collection) if isinstance(result.data, dict) else None
            return dataclasses.replace(result, data=data)
        return result

    async def create_shipment(
        self,
        payload: dict[str, Any],
        override: Credentials | None = None,
        language: str | None = None,
        today: date | None = None,
    ) -> ForwardResult:
        """Create a shipment with payer roles and date normalized.

        The full parsed Speedy response is returned on success.
        """
        normalized = normalize_shipment(payload, today=today)
        return await self._forward(SHIPMENT_PATH, normalized, "json", override, language)

    async def render_label(
        self,
        payload: dict[str, Any],
        override: Credentials | None = None,
        language: str | None = None,
    ) -> ForwardResult:
        """Render shipping labels; BinarySuccess carries the PDF bytes."""
        return await self._forward(PRINT_PATH, payload, "binary", override, language)
