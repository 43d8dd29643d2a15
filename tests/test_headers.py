"""Tests for header helpers."""

import sys

from slack_interactive_messages.headers import (
    extract_forwarded_headers,
    get_header,
    normalize_headers,
    package_identifier,
)


class TestNormalizeHeaders:
    """Tests for normalize_headers function."""

    def test_lowercases_names(self):
        result = normalize_headers({"X-Slack-Signature": "v0=abc", "Content-Type": "text/plain"})
        assert result == {"x-slack-signature": "v0=abc", "content-type": "text/plain"}

    def test_values_untouched(self):
        result = normalize_headers({"X-Custom": "MixedCase"})
        assert result["x-custom"] == "MixedCase"


class TestGetHeader:
    """Tests for get_header function."""

    def test_case_insensitive(self):
        headers = {"X-SLACK-REQUEST-TIMESTAMP": "123"}
        assert get_header(headers, "x-slack-request-timestamp") == "123"
        assert get_header(headers, "X-Slack-Request-Timestamp") == "123"

    def test_missing(self):
        assert get_header({}, "x-slack-signature") is None


class TestExtractForwardedHeaders:
    """Tests for extract_forwarded_headers function."""

    def test_drops_signature(self):
        headers = {
            "X-Slack-Signature": "v0=abc",
            "X-Slack-Request-Timestamp": "123",
            "Content-Type": "application/x-www-form-urlencoded",
            "Cookie": "session=secret",
        }
        result = extract_forwarded_headers(headers)
        assert result == {
            "x-slack-request-timestamp": "123",
            "content-type": "application/x-www-form-urlencoded",
        }


class TestPackageIdentifier:
    """Tests for package_identifier function."""

    def test_format(self):
        identifier = package_identifier("1.2.3")
        parts = identifier.split(" ")
        assert parts[0] == "slack-interactive-messages/1.2.3"
        assert parts[1] == "python/{}.{}.{}".format(*sys.version_info[:3])
        assert len(parts) == 3
