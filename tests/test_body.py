"""Tests for body reading and decoding."""

import pytest

from conftest import chunks, failing_stream
from slack_interactive_messages import (
    IncomingRequest,
    StreamBodyReader,
    TransportError,
    decode_body,
    parse_event,
)


class TestStreamBodyReader:
    """Tests for StreamBodyReader."""

    @pytest.mark.asyncio
    async def test_reads_all_chunks(self):
        request = IncomingRequest(method="POST", headers={}, stream=chunks(b"pay", b"", b"load=1"))
        assert await StreamBodyReader().read(request) == b"payload=1"

    @pytest.mark.asyncio
    async def test_no_stream(self):
        request = IncomingRequest(method="POST", headers={})
        assert await StreamBodyReader().read(request) == b""

    @pytest.mark.asyncio
    async def test_stream_error_becomes_transport_error(self):
        """Stream failures are raised as TransportError with the cause chained."""
        request = IncomingRequest(method="POST", headers={}, stream=failing_stream("connection reset"))

        with pytest.raises(TransportError) as exc_info:
            await StreamBodyReader().read(request)

        assert str(exc_info.value) == "connection reset"
        assert isinstance(exc_info.value.__cause__, OSError)


class TestDecodeBody:
    """Tests for decode_body."""

    def test_payload_json(self):
        body = decode_body("payload=%7B%22type%22%3A%22interactive_message%22%7D")
        assert body == {"type": "interactive_message"}

    def test_nested_payload(self):
        body = decode_body(
            "payload=%7B%22actions%22%3A%5B%7B%22value%22%3A%22a%20b%22%7D%5D%7D"
        )
        assert body == {"actions": [{"value": "a b"}]}

    def test_form_without_payload(self):
        assert decode_body("command=%2Fdeploy&text=prod") == {"command": "/deploy", "text": "prod"}

    def test_repeated_form_field(self):
        assert decode_body("a=1&a=2") == {"a": ["1", "2"]}

    def test_blank_value_kept(self):
        assert decode_body("text=") == {"text": ""}

    def test_invalid_json(self):
        with pytest.raises(ValueError):
            decode_body("payload=%7Bbroken")


class TestParseEvent:
    """Tests for parse_event."""

    def test_fields(self):
        raw = b"payload=%7B%22type%22%3A%22block_actions%22%2C%22response_url%22%3A%22https%3A%2F%2Fhooks.slack.com%2Fx%22%7D"
        event = parse_event(raw, {
            "X-Slack-Signature": "v0=abc",
            "X-Slack-Request-Timestamp": "123",
            "Content-Type": "application/x-www-form-urlencoded",
        })

        assert event.raw_body == raw.decode()
        assert event.type == "block_actions"
        assert event.response_url == "https://hooks.slack.com/x"
        assert event.is_ssl_check is False

    def test_signature_headers_not_forwarded(self):
        event = parse_event(b"a=1", {"X-Slack-Signature": "v0=abc", "X-Slack-Request-Timestamp": "123"})
        assert event.headers == {"x-slack-request-timestamp": "123"}

    def test_ssl_check(self):
        event = parse_event(b"payload=%7B%22ssl_check%22%3A%221%22%7D", {})
        assert event.is_ssl_check is True

    def test_non_object_payload(self):
        event = parse_event(b"payload=%5B1%2C2%5D", {})
        assert event.body == [1, 2]
        assert event.type is None
        assert event.is_ssl_check is False
