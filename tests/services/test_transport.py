"""Tests for SpeedyTransport: mocked HTTP responses."""

import asyncio

import httpx
import pytest

from speedy_proxy.services.transport import RawTransportResult, SpeedyTransport


class _StalledTransport(httpx.AsyncBaseTransport):
    """Accepts a request and never answers."""

    def __init__(self) -> None:
        self.started = asyncio.Event()

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        self.started.set()
        await asyncio.Event().wait()
        raise AssertionError("unreachable")


class TestSend:
    """Tests for SpeedyTransport.send()."""

    @pytest.mark.asyncio
    async def test_posts_json_envelope(self, transport, mock_speedy):
        """Envelope is sent as a JSON POST to base URL + path."""
        mock_speedy.configure_json("/location/office/", {"offices": []})

        await transport.send("/location/office/", {"siteId": 68134, "userName": "u"})

        call = mock_speedy.calls[0]
        assert call.path == "/v1/location/office/"
        assert call.body == {"siteId": 68134, "userName": "u"}
        assert call.headers["content-type"] == "application/json"

    @pytest.mark.asyncio
    async def test_captures_status_type_and_body(self, transport, mock_speedy):
        mock_speedy.configure_json("/shipment/", {"id": "299"}, status=201)

        raw = await transport.send("/shipment/", {})

        assert raw.status_code == 201
        assert raw.content_type == "application/json"
        assert raw.content == b'{"id": "299"}'
        assert raw.responded is True

    @pytest.mark.asyncio
    async def test_non_2xx_is_not_an_error(self, transport, mock_speedy):
        """HTTP errors are returned as data, never raised."""
        mock_speedy.configure_raw("/print/", b"boom", "text/plain", status=500)

        raw = await transport.send("/print/", {}, expect="binary")

        assert raw.status_code == 500
        assert raw.error is None
        assert raw.content == b"boom"

    @pytest.mark.asyncio
    async def test_binary_expect_sets_accept(self, transport, mock_speedy):
        mock_speedy.configure_raw("/print/", b"%PDF-1.4", "application/pdf")

        await transport.send("/print/", {}, expect="binary")

        assert mock_speedy.calls[0].headers["accept"] == "application/pdf"

    @pytest.mark.asyncio
    async def test_binary_accept_follows_configured_label_type(self, mock_speedy):
        client = httpx.AsyncClient(transport=mock_speedy, base_url="https://example.test/v1")
        transport = SpeedyTransport(client=client, label_content_type="application/zpl")
        mock_speedy.configure_raw("/print/", b"^XA^XZ", "application/zpl")

        await transport.send("/print/", {}, expect="binary")

        assert mock_speedy.calls[0].headers["accept"] == "application/zpl"
        await client.aclose()

    @pytest.mark.asyncio
    async def test_connection_error_captured(self, transport, mock_speedy):
        mock_speedy.configure_failure("/shipment/", httpx.ConnectError("refused"))

        raw = await transport.send("/shipment/", {})

        assert raw.responded is False
        assert raw.status_code is None
        assert "refused" in raw.error

    @pytest.mark.asyncio
    async def test_timeout_captured(self, transport, mock_speedy):
        mock_speedy.configure_failure("/shipment/", httpx.ReadTimeout("slow"))

        raw = await transport.send("/shipment/", {})

        assert raw.responded is False
        assert raw.error.startswith("Timed out")

    @pytest.mark.asyncio
    async def test_cancellation_propagates(self):
        """Cancelling the caller abandons the call instead of returning a result."""
        stalled = _StalledTransport()
        client = httpx.AsyncClient(transport=stalled, base_url="https://example.test/v1")
        transport = SpeedyTransport(client=client)

        task = asyncio.create_task(transport.send("/shipment/", {}))
        await stalled.started.wait()
        task.cancel()

        with pytest.raises(asyncio.CancelledError):
            await task
        await client.aclose()


class TestLifecycle:
    """Tests for client ownership."""

    @pytest.mark.asyncio
    async def test_injected_client_not_closed(self, mock_speedy):
        client = httpx.AsyncClient(transport=mock_speedy, base_url="https://example.test")
        async with SpeedyTransport(client=client):
            pass
        assert client.is_closed is False
        await client.aclose()

    @pytest.mark.asyncio
    async def test_owned_client_closed(self):
        transport = SpeedyTransport(base_url="https://example.test/v1/")
        client = transport._get_client()
        await transport.aclose()
        assert client.is_closed is True


def test_raw_result_without_status_not_responded():
    assert RawTransportResult(error="x").responded is False
    assert RawTransportResult(status_code=200).responded is True
