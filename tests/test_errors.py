"""Tests for Firecrawl error classification."""

from __future__ import annotations

import pytest

from pulse_fetch.errors import (
    ErrorCategory,
    FirecrawlAPIError,
    classify_error,
    extract_error_message,
)


class TestExtractErrorMessage:
    """Tests for extract_error_message."""

    def test_error_field(self) -> None:
        assert extract_error_message('{"error": "Invalid API key"}') == "Invalid API key"

    def test_message_field(self) -> None:
        assert extract_error_message('{"message": "Bad input"}') == "Bad input"

    def test_error_preferred_over_message(self) -> None:
        assert extract_error_message('{"error": "first", "message": "second"}') == "first"

    def test_plain_text_body(self) -> None:
        assert extract_error_message("Service Unavailable") == "Service Unavailable"

    def test_json_without_fields(self) -> None:
        assert extract_error_message('{"detail": "x"}') == ""

    def test_empty_body(self) -> None:
        assert extract_error_message("") == ""


class TestClassifyError:
    """Tests for classify_error."""

    @pytest.mark.parametrize("code", [401, 403])
    def test_auth(self, code: int) -> None:
        """Auth failures are never retryable."""
        error = classify_error(code, '{"error": "Invalid API key"}')

        assert error.category is ErrorCategory.AUTH
        assert error.retryable is False
        assert error.retry_after_ms is None
        assert "FIRECRAWL_API_KEY" in error.user_message
        assert error.message == "Invalid API key"

    def test_auth_ignores_body(self) -> None:
        assert classify_error(401, "anything at all").category is ErrorCategory.AUTH

    def test_payment(self) -> None:
        error = classify_error(402, "")

        assert error.category is ErrorCategory.PAYMENT
        assert error.retryable is False
        assert "billing" in error.user_message

    def test_rate_limit(self) -> None:
        error = classify_error(429, '{"error": "Too many requests"}')

        assert error.category is ErrorCategory.RATE_LIMIT
        assert error.retryable is True
        assert error.retry_after_ms == 60000

    @pytest.mark.parametrize("code", [400, 404])
    def test_validation(self, code: int) -> None:
        error = classify_error(code, '{"error": "url is required"}')

        assert error.category is ErrorCategory.VALIDATION
        assert error.retryable is False
        assert error.user_message == "Invalid request parameters: url is required"

    @pytest.mark.parametrize("code", [500, 502, 503, 504, 599])
    def test_server(self, code: int) -> None:
        error = classify_error(code, "upstream failure")

        assert error.category is ErrorCategory.SERVER
        assert error.retryable is True
        assert error.retry_after_ms == 5000

    def test_status_zero_is_network(self) -> None:
        error = classify_error(0, "")

        assert error.category is ErrorCategory.NETWORK
        assert error.code == 0
        assert error.retryable is True
        assert error.retry_after_ms == 5000

    def test_connection_refused_marker(self) -> None:
        error = classify_error(0, "ECONNREFUSED 127.0.0.1:3002")

        assert error.category is ErrorCategory.NETWORK
        assert error.retryable is True

    def test_timeout_marker_overrides_status(self) -> None:
        """A transport marker wins over the status code."""
        error = classify_error(500, '{"error": "ETIMEDOUT while contacting origin"}')

        assert error.category is ErrorCategory.NETWORK

    def test_unknown_client_code(self) -> None:
        error = classify_error(418, "I'm a teapot")

        assert error.category is ErrorCategory.NETWORK
        assert error.retryable is False
        assert error.retry_after_ms is None
        assert "418" in error.user_message

    def test_to_dict(self) -> None:
        data = classify_error(429, "").to_dict()

        assert data["category"] == "rate_limit"
        assert data["retry_after_ms"] == 60000
        assert "retry_after_ms" not in classify_error(401, "").to_dict()


class TestFirecrawlAPIError:
    """Tests for FirecrawlAPIError."""

    def test_classified(self) -> None:
        error = FirecrawlAPIError(402, '{"error": "Insufficient credits"}', operation="crawl")

        assert error.classified.category is ErrorCategory.PAYMENT
        assert error.classified.message == "Insufficient credits"
        assert "crawl" in str(error)
