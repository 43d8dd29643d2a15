"""
Header names, case-insensitive lookup and the identification header value.
"""

import platform
import sys
from typing import Mapping


TIMESTAMP_HEADER = "x-slack-request-timestamp"
SIGNATURE_HEADER = "x-slack-signature"
POWERED_BY_HEADER = "X-Slack-Powered-By"
CONTENT_TYPE_HEADER = "Content-Type"

# Headers carried into ParsedEvent.headers
FORWARDED_HEADERS = frozenset({
    "content-type",
    TIMESTAMP_HEADER,
})

PACKAGE_NAME = "slack-interactive-messages"


def normalize_headers(headers: Mapping[str, str]) -> dict[str, str]:
    """
    Lowercase all header names.

    Args:
        headers: Request headers with arbitrary name casing

    Returns:
        New dict with lowercase keys

    Examples:
        >>> normalize_headers({"X-Slack-Signature": "v0=abc"})
        {'x-slack-signature': 'v0=abc'}
    """
    return {key.lower(): value for key, value in headers.items()}


def get_header(headers: Mapping[str, str], name: str) -> str | None:
    """Look up a header by name, ignoring case."""
    wanted = name.lower()
    for key, value in headers.items():
        if key.lower() == wanted:
            return value
    return None


def extract_forwarded_headers(headers: Mapping[str, str]) -> dict[str, str]:
    """
    Select the headers that downstream handlers may see.

    Signature headers are dropped once verification is done.
    """
    normalized = normalize_headers(headers)
    return {
        name: value
        for name, value in normalized.items()
        if name in FORWARDED_HEADERS
    }


def package_identifier(version: str) -> str:
    """
    Build the X-Slack-Powered-By value.

    Examples:
        >>> package_identifier("0.1.0")  # doctest: +SKIP
        'slack-interactive-messages/0.1.0 python/3.12.1 linux/6.5.0'
    """
    python_version = ".".join(str(part) for part in sys.version_info[:3])
    system = platform.system().lower() or "unknown"
    release = platform.release() or "unknown"
    return f"{PACKAGE_NAME}/{version} python/{python_version} {system}/{release}"


def check_header(name: object, value: object) -> None:
    """
    Raise ValueError unless name and value can go on the wire.

    Both must be str, latin-1 encodable and free of CR/LF; names must be
    non-empty.
    """
    for part in (name, value):
        if not isinstance(part, str):
            raise ValueError(f"Header parts must be str, got {type(part).__name__}")
        if "\r" in part or "\n" in part:
            raise ValueError("Header parts must not contain CR or LF")
        try:
            part.encode("latin-1")
        except UnicodeEncodeError:
            raise ValueError("Header parts must be latin-1 encodable") from None
    if not name:
        raise ValueError("Header name must not be empty")
