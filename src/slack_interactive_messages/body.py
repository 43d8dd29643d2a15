"""
Raw body acquisition and payload decoding.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Mapping, Protocol
from urllib.parse import parse_qs

from .errors import TransportError
from .headers import extract_forwarded_headers
from .models import IncomingRequest, ParsedEvent

logger = logging.getLogger(__name__)


class RawBodyReader(Protocol):
    """Reads the complete raw body of a request."""

    async def read(self, request: IncomingRequest) -> bytes:
        """Return all body bytes, raising TransportError on failure."""
        ...


class StreamBodyReader:
    """
    Default reader: buffers `request.stream` until it is exhausted.

    Any error raised by the stream (client disconnect, truncated read, ...)
    is re-raised as TransportError with the original error chained.
    """

    async def read(self, request: IncomingRequest) -> bytes:
        if request.stream is None:
            return b""

        chunks: list[bytes] = []
        try:
            async for chunk in request.stream:
                if chunk:
                    chunks.append(chunk)
        except TransportError:
            raise
        except Exception as e:
            raise TransportError(str(e)) from e

        body = b"".join(chunks)
        logger.debug("Read %d body bytes from stream", len(body))
        return body


def _flatten_form(form: dict[str, list[str]]) -> dict[str, Any]:
    return {
        key: values[0] if len(values) == 1 else values
        for key, values in form.items()
    }


def decode_body(raw_body: str) -> Any:
    """
    Decode a form-encoded Slack body.

    Interactive payloads arrive as `payload=<url-encoded JSON>`; the JSON
    value is returned. Bodies without a payload field are returned as the
    flat form mapping.

    Raises:
        ValueError: If the payload field is not valid JSON

    Examples:
        >>> decode_body("payload=%7B%22type%22%3A%22block_actions%22%7D")
        {'type': 'block_actions'}
        >>> decode_body("ssl_check=1&token=abc")
        {'ssl_check': '1', 'token': 'abc'}
    """
    form = _flatten_form(parse_qs(raw_body, keep_blank_values=True))
    payload = form.get("payload")
    if isinstance(payload, str):
        return json.loads(payload)
    return form


def parse_event(raw_body: bytes, headers: Mapping[str, str]) -> ParsedEvent:
    """Build a ParsedEvent from a verified raw body."""
    text = raw_body.decode("utf-8")
    return ParsedEvent(
        raw_body=text,
        body=decode_body(text),
        headers=extract_forwarded_headers(headers),
    )
