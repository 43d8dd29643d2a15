"""
Data models for request verification and dispatch.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, AsyncIterable, Union

from .errors import ErrorCode, HandlerError


@dataclass
class IncomingRequest:
    """
    Transport-level request handed to the verifier.

    Attributes:
        method: HTTP method (normally POST)
        headers: Request headers (looked up case-insensitively)
        raw_body: Body bytes already buffered by an upstream framework
        stream: Async iterable of body chunks, consumed when raw_body is None
        parsed_body: Body already parsed by an upstream framework, if any
    """
    method: str
    headers: dict[str, str]
    raw_body: bytes | None = None
    stream: AsyncIterable[bytes] | None = None
    parsed_body: Any = None


@dataclass
class ParsedEvent:
    """
    Verified and decoded event handed to the dispatch callback.

    Attributes:
        raw_body: Body exactly as received, decoded as UTF-8
        body: Decoded payload (JSON value of the `payload` field, or the form)
        headers: Request headers needed downstream (lowercase keys)
    """
    raw_body: str
    body: Any
    headers: dict[str, str] = field(default_factory=dict)

    @property
    def is_ssl_check(self) -> bool:
        return isinstance(self.body, dict) and bool(self.body.get("ssl_check"))

    @property
    def type(self) -> str | None:
        if isinstance(self.body, dict):
            return self.body.get("type")
        return None

    @property
    def response_url(self) -> str | None:
        if isinstance(self.body, dict):
            return self.body.get("response_url")
        return None


@dataclass
class DispatchResult:
    """
    Response directive returned by a dispatch callback.

    Attributes:
        status: HTTP status code
        content: None, a literal string body, or a JSON-serializable value
        headers: Extra response headers
    """
    status: int
    content: Any = None
    headers: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class Verified:
    raw_body: bytes


@dataclass(frozen=True)
class Rejected:
    reason: str
    code: ErrorCode = ErrorCode.SIGNATURE_VERIFICATION_FAILURE


VerificationOutcome = Union[Verified, Rejected]


@dataclass(frozen=True)
class DispatchOk:
    result: DispatchResult


@dataclass(frozen=True)
class DispatchFailed:
    error: HandlerError


@dataclass(frozen=True)
class DispatchEmpty:
    """The callback produced nothing usable."""
    returned: Any = None


DispatchOutcome = Union[DispatchOk, DispatchFailed, DispatchEmpty]
