"""Tests for HTTP error classification."""

import pytest

from crawlclient.core.errors import ApiError, ErrorResponseParseError
from crawlclient.engine.classifier import NO_DETAILS, classify_error


class TestClassifyError:
    """Tests for classify_error."""

    def test_payment_required(self):
        error = classify_error(402, b'{"error":"quota exceeded"}', "scrape URL")
        assert isinstance(error, ApiError)
        assert "Payment Required" in str(error)
        assert "quota exceeded" in str(error)
        assert str(error) == "Payment Required: Failed to scrape URL. quota exceeded"

    def test_conflict(self):
        error = classify_error(
            409, b'{"error":"Idempotency key already used"}', "start crawl job"
        )
        assert str(error) == (
            "Conflict: Failed to start crawl job due to a conflict. "
            "Idempotency key already used"
        )
        assert error.status_code == 409

    def test_request_timeout(self):
        error = classify_error(408, b'{"error":"slow"}', "map")
        assert str(error) == "Request Timeout: Failed to map as the request timed out. slow"

    def test_internal_server_error(self):
        error = classify_error(500, b'{"error":"boom"}', "check crawl status")
        assert str(error) == "Internal Server Error: Failed to check crawl status. boom"

    def test_unexpected_status(self):
        error = classify_error(401, b'{"error":"Unauthorized: Invalid token"}', "scrape URL")
        assert str(error) == (
            "Unexpected error during scrape URL: Status code 401. "
            "Unauthorized: Invalid token"
        )

    def test_missing_error_field(self):
        """Test the fallback detail when the body has no error field."""
        error = classify_error(403, b'{"message":"blocked"}', "scrape URL")
        assert isinstance(error, ApiError)
        assert error.detail == NO_DETAILS
        assert str(error).endswith("No additional error details provided.")

    def test_error_field_present_is_used(self):
        """Test that the fallback is only used when error is truly absent."""
        error = classify_error(403, b'{"error":"URL is blocked."}', "scrape URL")
        assert NO_DETAILS not in str(error)
        assert "URL is blocked." in str(error)

    @pytest.mark.parametrize("body", [b"[1, 2]", b'"text"', b'{"error": 42}', b'{"error": ""}'])
    def test_non_object_or_non_string_error(self, body):
        error = classify_error(400, body, "map")
        assert isinstance(error, ApiError)
        assert error.detail == NO_DETAILS

    @pytest.mark.parametrize("body", [b"<html>Bad Gateway</html>", b""])
    def test_unparsable_body(self, body):
        """Test that non-JSON bodies give a distinct parse error."""
        error = classify_error(502, body, "scrape URL")
        assert isinstance(error, ErrorResponseParseError)
        assert str(error).startswith("failed to parse error response")
        assert error.status_code == 502
