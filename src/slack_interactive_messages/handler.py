"""
Request verifier and dispatcher.

Authenticates a Slack request, decodes it, hands it to the dispatch
callback and writes the callback's directive back as an HTTP response.

Outcomes on the wire:
    body read error / unexpected error    500 (message only in development)
    stale timestamp / bad signature        404
    ssl_check probe                        200, dispatch not called
    dispatch declines or returns nothing   404
    dispatch result                        result.status and content
"""

from __future__ import annotations

import inspect
import json
import logging
from typing import Any, Mapping, Protocol

from ._version import __version__
from .body import parse_event
from .config import VerifierConfig
from .errors import BodyParserNotPermittedError, HandlerError
from .headers import (
    CONTENT_TYPE_HEADER,
    POWERED_BY_HEADER,
    check_header,
    package_identifier,
)
from .models import (
    DispatchEmpty,
    DispatchFailed,
    DispatchOk,
    DispatchOutcome,
    DispatchResult,
    IncomingRequest,
    ParsedEvent,
    Rejected,
)
from .signature import verify_request

logger = logging.getLogger(__name__)


class ResponseSink(Protocol):
    """Writable response: status, headers, then exactly one end()."""

    status_code: int

    def set_header(self, name: str, value: str) -> None: ...

    def end(self, body: str | None = None) -> None: ...


class BufferedResponse:
    """
    In-memory ResponseSink used by the framework adapters.

    Attributes:
        status_code: HTTP status (defaults to 200)
        headers: Headers in the order they were set
        body: Body passed to end(), or None
        finished: Whether end() was called
    """

    def __init__(self) -> None:
        self.status_code = 200
        self.headers: dict[str, str] = {}
        self.body: str | None = None
        self.finished = False

    def set_header(self, name: str, value: str) -> None:
        if self.finished:
            raise RuntimeError("Response already ended")
        check_header(name, value)
        self.headers[name] = value

    def end(self, body: str | None = None) -> None:
        if self.finished:
            raise RuntimeError("Response already ended")
        self.body = body
        self.finished = True

    def body_bytes(self) -> bytes:
        return self.body.encode("utf-8") if self.body is not None else b""


def coerce_dispatch_result(value: Any) -> DispatchOutcome:
    """Map whatever a dispatch callback returned onto the dispatch outcomes."""
    if isinstance(value, DispatchResult):
        return DispatchOk(value)
    if isinstance(value, Mapping):
        status = value.get("status")
        if isinstance(status, int) and not isinstance(status, bool):
            return DispatchOk(DispatchResult(
                status=status,
                content=value.get("content"),
                headers=dict(value.get("headers") or {}),
            ))
    return DispatchEmpty(returned=value)


class RequestHandler:
    """
    Verifies and dispatches Slack interactive message requests.

    Args:
        config: Immutable verifier configuration

    Example:
        >>> handler = RequestHandler(VerifierConfig(
        ...     signing_secret=os.environ["SLACK_SIGNING_SECRET"],
        ...     dispatch=lambda event: {"status": 200},
        ... ))
        >>> response = BufferedResponse()
        >>> await handler.handle(request, response)
    """

    def __init__(self, config: VerifierConfig):
        self.config = config
        self.identifier = package_identifier(__version__)

    async def handle(self, request: IncomingRequest, response: ResponseSink) -> None:
        """Process one request and end `response` exactly once."""
        try:
            # Identification header goes on every response path
            response.set_header(POWERED_BY_HEADER, self.identifier)

            raw_body = await self._acquire_body(request)

            outcome = verify_request(
                self.config.signing_secret,
                request.headers,
                raw_body,
                tolerance_seconds=self.config.tolerance_seconds,
            )
            if isinstance(outcome, Rejected):
                logger.warning(
                    "Rejected request: %s (%s)", outcome.reason, outcome.code.value
                )
                self._respond(response, 404)
                return

            event = parse_event(outcome.raw_body, request.headers)
            if event.is_ssl_check:
                logger.debug("Acknowledged ssl_check probe")
                self._respond(response, 200)
                return

            dispatched = await self._dispatch(event)
            if isinstance(dispatched, DispatchFailed):
                logger.warning("Dispatch declined event: %s", dispatched.error)
                self._respond(response, 404)
                return
            if isinstance(dispatched, DispatchEmpty):
                logger.warning(
                    "Dispatch returned no usable result (%s)",
                    type(dispatched.returned).__name__,
                )
                self._respond(response, 404)
                return

            logger.debug("Dispatch result status %d", dispatched.result.status)
            self._write_result(response, dispatched.result)

        except Exception as e:
            logger.exception("Unexpected error handling request")
            if getattr(response, "finished", False):
                return
            if self.config.development:
                self._respond(response, 500, str(e))
            else:
                self._respond(response, 500)

    async def _acquire_body(self, request: IncomingRequest) -> bytes:
        if request.raw_body is not None:
            logger.debug("Using pre-buffered raw body")
            return request.raw_body
        if request.parsed_body is not None:
            raise BodyParserNotPermittedError(
                "The request body was parsed before verification; "
                "attach the raw body bytes or disable the upstream body parser"
            )
        return await self.config.body_reader.read(request)

    async def _dispatch(self, event: ParsedEvent) -> DispatchOutcome:
        try:
            value = self.config.dispatch(event)
            if inspect.isawaitable(value):
                value = await value
        except HandlerError as e:
            return DispatchFailed(e)
        return coerce_dispatch_result(value)

    def _write_result(self, response: ResponseSink, result: DispatchResult) -> None:
        # Serialize and validate everything before touching the response
        body: str | None = None
        is_json = False
        if isinstance(result.content, str):
            body = result.content
        elif result.content is not None:
            body = json.dumps(result.content)
            is_json = True

        for name, value in result.headers.items():
            check_header(name, value)

        if is_json:
            response.set_header(CONTENT_TYPE_HEADER, "application/json")
        for name, value in result.headers.items():
            response.set_header(name, value)
        self._respond(response, result.status, body)

    @staticmethod
    def _respond(response: ResponseSink, status: int, body: str | None = None) -> None:
        response.status_code = status
        response.end(body)


def create_http_handler(config: VerifierConfig) -> RequestHandler:
    """Create a RequestHandler for `config`."""
    return RequestHandler(config)
