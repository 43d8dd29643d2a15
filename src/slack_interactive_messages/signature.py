"""
Slack request signature verification.

Slack signs every request with HMAC-SHA256:
- Base string: v0:{timestamp}:{raw body}
- Signature header (X-Slack-Signature): v0={hex digest}
- Timestamp header (X-Slack-Request-Timestamp): UNIX seconds

Requests older or newer than the tolerance are refused to bound replay.
"""

from __future__ import annotations

import hashlib
import hmac
import time
from typing import Mapping

from .errors import AuthenticationError, ErrorCode
from .headers import SIGNATURE_HEADER, TIMESTAMP_HEADER, get_header
from .models import Rejected, VerificationOutcome, Verified

SIGNATURE_VERSION = "v0"
DEFAULT_TOLERANCE_SECONDS = 300


def _to_bytes(value: str | bytes) -> bytes:
    if isinstance(value, bytes):
        return value
    return value.encode("utf-8")


def build_base_string(timestamp: str, raw_body: bytes) -> bytes:
    """Build the signed base string `v0:<timestamp>:<body>`."""
    return b":".join([
        SIGNATURE_VERSION.encode("ascii"),
        timestamp.encode("ascii"),
        raw_body,
    ])


def compute_signature(
    signing_secret: str | bytes,
    timestamp: str,
    raw_body: bytes,
) -> str:
    """
    Compute the versioned signature for a request.

    Args:
        signing_secret: Slack app signing secret
        timestamp: X-Slack-Request-Timestamp header value
        raw_body: Body bytes exactly as received

    Returns:
        Signature in header format, e.g. "v0=5f2b..."
    """
    digest = hmac.new(
        _to_bytes(signing_secret),
        build_base_string(timestamp, raw_body),
        hashlib.sha256,
    ).hexdigest()
    return f"{SIGNATURE_VERSION}={digest}"


def constant_time_equals(a: str | bytes, b: str | bytes) -> bool:
    """
    Compare two values without short-circuiting on the first difference.

    Lengths are compared up front; the signature format has a fixed length
    so this leaks nothing about the secret.
    """
    left = _to_bytes(a)
    right = _to_bytes(b)
    if len(left) != len(right):
        return False
    result = 0
    for x, y in zip(left, right):
        result |= x ^ y
    return result == 0


def parse_timestamp(timestamp: str | None) -> int:
    """Parse the timestamp header, raising AuthenticationError if unusable."""
    if not timestamp:
        raise AuthenticationError("missing_timestamp_header", ErrorCode.REQUEST_TIME_FAILURE)
    value = timestamp.strip()
    if not (value.isascii() and value.isdigit()):
        raise AuthenticationError("invalid_timestamp", ErrorCode.REQUEST_TIME_FAILURE)
    return int(value)


def check_freshness(
    timestamp: int,
    now: float | None = None,
    tolerance_seconds: int = DEFAULT_TOLERANCE_SECONDS,
) -> None:
    """Raise AuthenticationError if the timestamp is outside the tolerance."""
    current = time.time() if now is None else now
    if abs(int(current) - timestamp) > tolerance_seconds:
        raise AuthenticationError("stale_timestamp", ErrorCode.REQUEST_TIME_FAILURE)


def verify_signature(
    *,
    signing_secret: str | bytes,
    timestamp: str | None,
    signature: str | None,
    raw_body: bytes,
    now: float | None = None,
    tolerance_seconds: int = DEFAULT_TOLERANCE_SECONDS,
) -> None:
    """
    Verify a Slack request signature.

    Args:
        signing_secret: Slack app signing secret
        timestamp: X-Slack-Request-Timestamp header
        signature: X-Slack-Signature header
        raw_body: Raw request body bytes
        now: Current UNIX time (defaults to time.time())
        tolerance_seconds: Allowed clock skew in either direction

    Raises:
        AuthenticationError: If verification fails
    """
    if not signing_secret:
        raise AuthenticationError("missing_signing_secret")

    ts = parse_timestamp(timestamp)
    check_freshness(ts, now=now, tolerance_seconds=tolerance_seconds)

    if not signature:
        raise AuthenticationError("missing_signature_header")

    expected = compute_signature(signing_secret, timestamp.strip(), raw_body)
    if not constant_time_equals(expected, signature.strip()):
        raise AuthenticationError("bad_signature")


def verify_request(
    signing_secret: str | bytes,
    headers: Mapping[str, str],
    raw_body: bytes,
    now: float | None = None,
    tolerance_seconds: int = DEFAULT_TOLERANCE_SECONDS,
) -> VerificationOutcome:
    """
    Decide whether a request is authentic.

    Returns:
        Verified carrying the raw body, or Rejected with a loggable reason.
        Never raises for bad input.
    """
    try:
        verify_signature(
            signing_secret=signing_secret,
            timestamp=get_header(headers, TIMESTAMP_HEADER),
            signature=get_header(headers, SIGNATURE_HEADER),
            raw_body=raw_body,
            now=now,
            tolerance_seconds=tolerance_seconds,
        )
    except AuthenticationError as e:
        return Rejected(reason=e.reason, code=e.code)
    except (UnicodeEncodeError, TypeError):
        return Rejected(reason="malformed_headers")
    return Verified(raw_body=raw_body)
