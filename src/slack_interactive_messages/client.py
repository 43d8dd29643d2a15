"""
Client for posting follow-up messages to an interaction's response_url.
"""

from dataclasses import dataclass
from typing import Any, Mapping
from urllib.parse import urlparse

import httpx


@dataclass
class ResponseUrlResult:
    """
    Result of posting to a response_url.

    Attributes:
        ok: Whether Slack accepted the message
        status_code: HTTP status returned by Slack
        error: Error text returned by Slack, if any
    """
    ok: bool
    status_code: int
    error: str | None = None


def _check_response_url(response_url: str) -> None:
    """Refuse anything that is not an absolute HTTPS URL."""
    parsed = urlparse(response_url)
    if parsed.scheme != "https" or not parsed.netloc:
        raise ValueError(f"response_url must be an absolute https URL: {response_url!r}")


class ResponseUrlClient:
    """
    Posts messages to the response_url carried by interactive payloads.

    Slack allows a handler to update or follow up on a message for up to
    30 minutes after the interaction by POSTing JSON to that URL.

    Args:
        timeout_s: Request timeout in seconds. Default: 5.0

    Example:
        >>> client = ResponseUrlClient()
        >>> result = await client.send(event.response_url, {"text": "Done!"})
        >>> if not result.ok:
        ...     print(result.error)
    """

    def __init__(self, timeout_s: float = 5.0):
        self.timeout_s = timeout_s

    async def send(
        self,
        response_url: str,
        message: Mapping[str, Any],
    ) -> ResponseUrlResult:
        """
        Post a message asynchronously.

        Args:
            response_url: URL taken from the interaction payload
            message: Message body (text, blocks, replace_original, ...)

        Returns:
            ResponseUrlResult with Slack's verdict

        Raises:
            ValueError: If response_url is not an https URL
            httpx.HTTPError: On network errors
        """
        _check_response_url(response_url)

        async with httpx.AsyncClient(timeout=self.timeout_s) as client:
            response = await client.post(response_url, json=dict(message))

        return self._parse_response(response)

    def send_sync(
        self,
        response_url: str,
        message: Mapping[str, Any],
    ) -> ResponseUrlResult:
        """
        Post a message synchronously.

        Raises:
            ValueError: If response_url is not an https URL
            httpx.HTTPError: On network errors
        """
        _check_response_url(response_url)

        with httpx.Client(timeout=self.timeout_s) as client:
            response = client.post(response_url, json=dict(message))

        return self._parse_response(response)

    def _parse_response(self, response: httpx.Response) -> ResponseUrlResult:
        """Slack answers with plain "ok" or a JSON body with an error field."""
        if response.is_success:
            return ResponseUrlResult(ok=True, status_code=response.status_code)

        try:
            data = response.json()
            error = data.get("error") if isinstance(data, dict) else None
        except ValueError:
            error = response.text or None

        return ResponseUrlResult(
            ok=False,
            status_code=response.status_code,
            error=error or f"HTTP {response.status_code}",
        )
