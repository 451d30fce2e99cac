"""Classification of raw Speedy responses into one result type.

Speedy mixes HTTP status codes with error objects embedded in HTTP 200
bodies, and the print endpoint answers with either a PDF or a JSON/HTML
error. Every call site goes through classify() instead of inspecting the
raw response itself.

Result variants:
- TransportFailure: no response was obtained.
- HttpFailure: non-2xx status.
- LogicalFailure: 2xx, but the body carries an error marker (or the
  binary path got something other than the label media type).
- JsonSuccess: 2xx structured body without error markers.
- BinarySuccess: 2xx label bytes with the expected media type.
"""

import json
from dataclasses import dataclass
from typing import Any, ClassVar, Union

from speedy_proxy.services.speedy_constants import (
    ERROR_MARKER_FIELDS,
    LABEL_CONTENT_TYPE,
)
from speedy_proxy.services.transport import Expect, RawTransportResult


@dataclass(frozen=True)
class TransportFailure:
    """The call to Speedy could not be completed or read."""

    reason: str

    ok: ClassVar[bool] = False
    kind: ClassVar[str] = "transport_failure"


@dataclass(frozen=True)
class HttpFailure:
    """Speedy answered with a non-2xx status."""

    status: int
    raw: str
    json: Any = None
    content_type: str = ""

    ok: ClassVar[bool] = False
    kind: ClassVar[str] = "http_failure"


@dataclass(frozen=True)
class LogicalFailure:
    """Speedy answered 2xx but rejected the request in-band."""

    status: int
    json: Any
    raw: str
    content_type: str = ""

    ok: ClassVar[bool] = False
    kind: ClassVar[str] = "logical_failure"


@dataclass(frozen=True)
class JsonSuccess:
    """Speedy answered 2xx with a structured body and no error marker."""

    status: int
    data: Any

    ok: ClassVar[bool] = True
    kind: ClassVar[str] = "json_success"


@dataclass(frozen=True)
class BinarySuccess:
    """Speedy answered 2xx with the expected binary artifact."""

    status: int
    content: bytes
    content_type: str

    ok: ClassVar[bool] = True
    kind: ClassVar[str] = "binary_success"


ForwardResult = Union[
    TransportFailure, HttpFailure, LogicalFailure, JsonSuccess, BinarySuccess
]

FailureResult = Union[TransportFailure, HttpFailure, LogicalFailure]


def media_type(content_type: str) -> str:
    """Strip parameters from a Content-Type value and lowercase it."""
    return content_type.split(";", 1)[0].strip().lower()


def parse_json_body(text: str) -> Any:
    """Parse a response body, returning None when it is not JSON."""
    if not text.strip():
        return None
    try:
        return json.loads(text)
    except ValueError:
        return None


def _has_value(value: Any) -> bool:
    # [] and {} count as markers; only null and "" are skipped
    return value is not None and value != ""


def find_error_marker(body: Any) -> str | None:
    """Return the first top-level error marker present in a parsed body.

    Only top-level keys of an object body are inspected. A marker set to
    null or "" does not count; any other value, including [] and {}, does.
    """
    if not isinstance(body, dict):
        return None
    for marker in ERROR_MARKER_FIELDS:
        if _has_value(body.get(marker)):
            return marker
    return None


def _is_2xx(status: int) -> bool:
    return 200 <= status < 300


def classify(
    raw: RawTransportResult,
    expect: Expect = "json",
    binary_content_type: str = LABEL_CONTENT_TYPE,
) -> ForwardResult:
    """Turn a raw transport result into exactly one ForwardResult.

    Args:
        raw: Result of SpeedyTransport.send().
        expect: "json" for structured endpoints, "binary" for label printing.
        binary_content_type: Media type that counts as a rendered label.

    Returns:
        The classified result.
    """
    status = raw.status_code
    if status is None or not raw.responded:
        return TransportFailure(reason=raw.error or "No response from Speedy")

    if (
        expect == "binary"
        and _is_2xx(status)
        and media_type(raw.content_type) == media_type(binary_content_type)
    ):
        return BinarySuccess(
            status=status,
            content=raw.content,
            content_type=raw.content_type,
        )

    text = raw.content.decode("utf-8", errors="replace")
    parsed = parse_json_body(text)

    if not _is_2xx(status):
        return HttpFailure(
            status=status, raw=text, json=parsed, content_type=raw.content_type
        )

    # A 2xx on the binary path without the label media type is an error
    # page or an in-band error object.
    if expect == "binary" or find_error_marker(parsed) is not None:
        return LogicalFailure(
            status=status, json=parsed, raw=text, content_type=raw.content_type
        )

    return JsonSuccess(status=status, data=parsed)
