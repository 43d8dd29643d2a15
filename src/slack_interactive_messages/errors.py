"""
Errors raised while verifying and dispatching interactive message requests.
"""

from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    """Stable codes attached to every library error."""

    SIGNATURE_VERIFICATION_FAILURE = "SIGNATURE_VERIFICATION_FAILURE"
    REQUEST_TIME_FAILURE = "REQUEST_TIME_FAILURE"
    BODY_PARSER_NOT_PERMITTED = "BODY_PARSER_NOT_PERMITTED"
    BODY_READ_FAILURE = "BODY_READ_FAILURE"
    HANDLER_FAILURE = "HANDLER_FAILURE"


class SlackInteractionsError(Exception):
    """Base class for errors raised by this package."""

    code: ErrorCode = ErrorCode.HANDLER_FAILURE

    def __init__(self, message: str, code: ErrorCode | None = None):
        if code is not None:
            self.code = code
        super().__init__(message)


class TransportError(SlackInteractionsError):
    """The raw request body could not be acquired."""

    code = ErrorCode.BODY_READ_FAILURE


class BodyParserNotPermittedError(TransportError):
    """The body was parsed upstream and the raw bytes are gone."""

    code = ErrorCode.BODY_PARSER_NOT_PERMITTED


class AuthenticationError(SlackInteractionsError):
    """
    Request authentication failed.

    Attributes:
        code: SIGNATURE_VERIFICATION_FAILURE or REQUEST_TIME_FAILURE
        reason: Short machine-readable reason, safe to log
    """

    code = ErrorCode.SIGNATURE_VERIFICATION_FAILURE

    def __init__(self, reason: str, code: ErrorCode | None = None):
        self.reason = reason
        super().__init__(f"Request verification failed: {reason}", code)


class HandlerError(SlackInteractionsError):
    """Raised by a dispatch callback to decline an event."""

    code = ErrorCode.HANDLER_FAILURE
