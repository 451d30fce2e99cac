"""HTTP transport to the Speedy REST API.

Thin wrapper around httpx. Posts one JSON envelope per call and captures
the status, declared content type and full body without interpreting
them. A non-2xx status is data, not an exception; only a failed
connection, failed read or deadline overrun is reported as an error,
and that is recorded on the result rather than raised.
"""

from dataclasses import dataclass
from typing import Any, Literal

import httpx

from speedy_proxy.services.speedy_constants import (
    DEFAULT_TIMEOUT_SECONDS,
    LABEL_CONTENT_TYPE,
    SPEEDY_BASE_URL,
)

Expect = Literal["json", "binary"]


@dataclass(frozen=True)
class RawTransportResult:
    """Uninterpreted outcome of one outbound call.

    Attributes:
        status_code: HTTP status, or None when no response was obtained.
        content_type: Declared Content-Type header ("" when absent).
        content: Full response body.
        error: Transport error description when no response was obtained.
    """

    status_code: int | None = None
    content_type: str = ""
    content: bytes = b""
    error: str | None = None

    @property
    def responded(self) -> bool:
        """Whether a complete response was read."""
        return self.error is None and self.status_code is not None


class SpeedyTransport:
    """Async POST-only client for the Speedy API.

    Example usage:
        async with SpeedyTransport(timeout=10.0) as transport:
            raw = await transport.send("/location/office/", envelope)
    """

    def __init__(
        self,
        base_url: str = SPEEDY_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        client: httpx.AsyncClient | None = None,
        label_content_type: str = LABEL_CONTENT_TYPE,
    ) -> None:
        """Initialize the transport.

        Args:
            base_url: Speedy API root, e.g. https://api.speedy.bg/v1.
            timeout: Per-call deadline in seconds.
            client: Pre-built client (tests inject one with a fake
                transport). When omitted a client is created lazily and
                owned by this instance.
            label_content_type: Accept value for binary (label) calls.
        """
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._client = client
        self._owns_client = client is None
        self._label_content_type = label_content_type

    async def __aenter__(self) -> "SpeedyTransport":
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.aclose()

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self._base_url,
                timeout=self._timeout,
            )
        return self._client

    async def aclose(self) -> None:
        """Close the underlying client if this transport created it."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    async def send(
        self,
        path: str,
        envelope: dict[str, Any],
        expect: Expect = "json",
    ) -> RawTransportResult:
        """POST an envelope and read the whole response.

        Args:
            path: Endpoint path relative to the base URL.
            envelope: JSON-serializable request body.
            expect: "binary" asks for the label media type via Accept.

        Returns:
            RawTransportResult; error is set when no response was read.
        """
        headers = {
            "Content-Type": "application/json",
            "Accept": self._label_content_type if expect == "binary" else "application/json",
        }
        try:
            response = await self._get_client().post(
                path,
                json=envelope,
                headers=headers,
                timeout=self._timeout,
            )
        except httpx.TimeoutException as e:
            return RawTransportResult(error=f"Timed out after {self._timeout}s: {e!r}")
        except httpx.HTTPError as e:
            return RawTransportResult(error=f"Request failed: {e!r}")

        return RawTransportResult(
            status_code=response.status_code,
            content_type=response.headers.get("content-type", ""),
            content=response.content,
        )
