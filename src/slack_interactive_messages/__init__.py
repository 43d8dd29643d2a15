"""
Slack Interactive Messages for Python

Verify Slack request signatures, decode interactive payloads and dispatch
them to your handler.
"""

from ._version import __version__
from .body import RawBodyReader, StreamBodyReader, decode_body, parse_event
from .client import ResponseUrlClient, ResponseUrlResult
from .config import Environment, VerifierConfig
from .errors import (
    AuthenticationError,
    BodyParserNotPermittedError,
    ErrorCode,
    HandlerError,
    SlackInteractionsError,
    TransportError,
)
from .handler import BufferedResponse, RequestHandler, ResponseSink, create_http_handler
from .models import DispatchResult, IncomingRequest, ParsedEvent, Rejected, Verified
from .signature import compute_signature, constant_time_equals, verify_request

__all__ = [
    "__version__",
    "AuthenticationError",
    "BodyParserNotPermittedError",
    "BufferedResponse",
    "DispatchResult",
    "Environment",
    "ErrorCode",
    "HandlerError",
    "IncomingRequest",
    "ParsedEvent",
    "RawBodyReader",
    "Rejected",
    "RequestHandler",
    "ResponseSink",
    "ResponseUrlClient",
    "ResponseUrlResult",
    "SlackInteractionsError",
    "StreamBodyReader",
    "TransportError",
    "Verified",
    "VerifierConfig",
    "compute_signature",
    "constant_time_equals",
    "create_http_handler",
    "decode_body",
    "parse_event",
    "verify_request",
]

# ASGI adapter - optional, requires starlette
try:
    from .middleware.asgi import InteractiveMessagesASGIApp
    __all__.append("InteractiveMessagesASGIApp")
except ImportError:
    pass

from .middleware.wsgi import InteractiveMessagesWSGIApp

__all__.append("InteractiveMessagesWSGIApp")
