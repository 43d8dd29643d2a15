"""
WSGI adapter for Slack interactive messages (Flask).
"""

from __future__ import annotations

import asyncio
from http import HTTPStatus
from typing import Any, AsyncIterator, Callable, Iterable

from ..config import Dispatch, Environment, VerifierConfig, build_config
from ..handler import BufferedResponse, RequestHandler
from ..models import IncomingRequest

READ_CHUNK_SIZE = 64 * 1024


def _extract_headers(environ: dict[str, Any]) -> dict[str, str]:
    """Extract HTTP headers from WSGI environ."""
    headers: dict[str, str] = {}
    for key, value in environ.items():
        if key.startswith("HTTP_"):
            # HTTP_X_SLACK_SIGNATURE -> x-slack-signature
            header_name = key[5:].replace("_", "-").lower()
            headers[header_name] = value
        elif key == "CONTENT_TYPE":
            headers["content-type"] = value
        elif key == "CONTENT_LENGTH":
            headers["content-length"] = value
    return headers


async def _read_input(environ: dict[str, Any]) -> AsyncIterator[bytes]:
    """Yield wsgi.input in chunks, bounded by CONTENT_LENGTH."""
    stream = environ.get("wsgi.input")
    if stream is None:
        return

    content_length = environ.get("CONTENT_LENGTH")
    remaining = int(content_length) if content_length else 0
    while remaining > 0:
        chunk = stream.read(min(READ_CHUNK_SIZE, remaining))
        if not chunk:
            raise OSError(
                f"Request body truncated: {remaining} bytes missing"
            )
        remaining -= len(chunk)
        yield chunk


def _status_line(status_code: int) -> str:
    try:
        return f"{status_code} {HTTPStatus(status_code).phrase}"
    except ValueError:
        return f"{status_code} Unknown"


class InteractiveMessagesWSGIApp:
    """
    WSGI app that verifies and dispatches Slack interactive requests.

    Each request runs the async handler to completion with asyncio.run, so
    dispatch callbacks may be plain functions or coroutine functions.

    Args:
        config: Ready VerifierConfig. Alternatively pass signing_secret and dispatch.
        signing_secret: Slack app signing secret
        dispatch: Callback receiving each verified ParsedEvent
        environment: PRODUCTION (default) or DEVELOPMENT

    Example (Flask):
        >>> from flask import Flask
        >>> from werkzeug.middleware.dispatcher import DispatcherMiddleware
        >>> from slack_interactive_messages.middleware.wsgi import InteractiveMessagesWSGIApp
        >>>
        >>> app = Flask(__name__)
        >>> slack = InteractiveMessagesWSGIApp(signing_secret="...", dispatch=dispatch)
        >>> app.wsgi_app = DispatcherMiddleware(app.wsgi_app, {"/slack/actions": slack})
    """

    def __init__(
        self,
        config: VerifierConfig | None = None,
        *,
        signing_secret: str | None = None,
        dispatch: Dispatch | None = None,
        environment: Environment | None = None,
    ):
        self.config = build_config(config, signing_secret, dispatch, environment)
        self.handler = RequestHandler(self.config)

    def __call__(
        self,
        environ: dict[str, Any],
        start_response: Callable[..., Any],
    ) -> Iterable[bytes]:
        incoming = IncomingRequest(
            method=environ.get("REQUEST_METHOD", "GET"),
            headers=_extract_headers(environ),
            stream=_read_input(environ),
        )
        sink = BufferedResponse()
        asyncio.run(self.handler.handle(incoming, sink))

        body = sink.body_bytes()
        response_headers = list(sink.headers.items())
        response_headers.append(("Content-Length", str(len(body))))
        start_response(_status_line(sink.status_code), response_headers)
        return [body]
