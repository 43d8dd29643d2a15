"""Shared fixtures for signing test requests."""

import time

import pytest

from slack_interactive_messages import IncomingRequest, compute_signature

SIGNING_SECRET = "SIGNING_SECRET"
CORRECT_RAW_BODY = "payload=%7B%22type%22%3A%22interactive_message%22%7D"
SSL_CHECK_RAW_BODY = "payload=%7B%22ssl_check%22%3A%221%22%7D"


def signed_headers(secret: str, timestamp: int, raw_body: str) -> dict[str, str]:
    """Headers Slack would send for `raw_body` signed with `secret`."""
    return {
        "X-Slack-Request-Timestamp": str(timestamp),
        "X-Slack-Signature": compute_signature(secret, str(timestamp), raw_body.encode()),
        "Content-Type": "application/x-www-form-urlencoded",
    }


async def chunks(*parts: bytes):
    for part in parts:
        yield part


async def failing_stream(message: str):
    raise OSError(message)
    yield b""  # pragma: no cover


@pytest.fixture
def now() -> int:
    return int(time.time())


@pytest.fixture
def create_request():
    """Build an IncomingRequest whose body is read from a stream."""
    def _create(secret: str, timestamp: int, raw_body: str) -> IncomingRequest:
        return IncomingRequest(
            method="POST",
            headers=signed_headers(secret, timestamp, raw_body),
            stream=chunks(raw_body.encode()),
        )
    return _create


@pytest.fixture
def create_raw_body_request():
    """Build an IncomingRequest with the raw body already buffered."""
    def _create(secret: str, timestamp: int, raw_body: str) -> IncomingRequest:
        return IncomingRequest(
            method="POST",
            headers=signed_headers(secret, timestamp, raw_body),
            raw_body=raw_body.encode(),
        )
    return _create
