"""Error types and Firecrawl failure classification."""

from __future__ import annotations

import json
from dataclasses import dataclass
from enum import Enum

# Substrings that mark a transport failure rather than an HTTP-level one
NETWORK_ERROR_MARKERS = ("ECONNREFUSED", "ETIMEDOUT", "Connection refused")

NETWORK_RETRY_AFTER_MS = 5000
SERVER_RETRY_AFTER_MS = 5000
RATE_LIMIT_RETRY_AFTER_MS = 60000


class ConfigurationError(Exception):
    """Raised when the deployment configuration is unusable.

    This is the only error that is allowed to abort startup.
    """


class StrategyUnavailableError(Exception):
    """Raised when a requested scraping strategy is not configured."""


class FirecrawlAPIError(Exception):
    """Non-2xx response from the Firecrawl API."""

    def __init__(self, status_code: int, body: str, operation: str = "request") -> None:
        self.status_code = status_code
        self.body = body
        self.operation = operation
        super().__init__(f"Firecrawl {operation} error ({status_code}): {body}")

    @property
    def classified(self) -> ClassifiedError:
        return classify_error(self.status_code, self.body)


class ErrorCategory(str, Enum):
    """Closed set of backend failure categories."""

    AUTH = "auth"
    RATE_LIMIT = "rate_limit"
    PAYMENT = "payment"
    VALIDATION = "validation"
    SERVER = "server"
    NETWORK = "network"


@dataclass(frozen=True)
class ClassifiedError:
    """Structured description of a backend failure."""

    code: int
    category: ErrorCategory
    message: str
    user_message: str
    retryable: bool
    retry_after_ms: int | None = None

    def to_dict(self) -> dict[str, object]:
        """Convert to a JSON-serializable dictionary."""
        data: dict[str, object] = {
            "code": self.code,
            "category": self.category.value,
            "message": self.message,
            "user_message": self.user_message,
            "retryable": self.retryable,
        }
        if self.retry_after_ms is not None:
            data["retry_after_ms"] = self.retry_after_ms
        return data


def extract_error_message(response_body: str) -> str:
    """Pull the ``error`` or ``message`` field out of a response body.

    Args:
        response_body: Raw response body (JSON or plain text)

    Returns:
        The error detail, or the raw body when it is not JSON
    """
    try:
        parsed = json.loads(response_body)
    except (TypeError, ValueError):
        return response_body or ""

    if isinstance(parsed, dict):
        return str(parsed.get("error") or parsed.get("message") or "")
    return ""


def classify_error(status_code: int, response_body: str) -> ClassifiedError:
    """Categorize a Firecrawl failure.

    Maps HTTP status codes and transport error messages to a category with
    retry guidance and a message suitable for showing to the user.

    Args:
        status_code: HTTP status code, or 0 when no response was received
        response_body: Response body (JSON or plain text) or transport error text

    Returns:
        ClassifiedError describing the failure

    Examples:
        >>> classify_error(401, '{"error": "Invalid API key"}').category
        <ErrorCategory.AUTH: 'auth'>
        >>> classify_error(429, "").retry_after_ms
        60000
    """
    message = extract_error_message(response_body)

    if status_code == 0 or any(marker in message for marker in NETWORK_ERROR_MARKERS):
        return ClassifiedError(
            code=status_code or 0,
            category=ErrorCategory.NETWORK,
            message=message,
            user_message=(
                "Network error connecting to Firecrawl API. Please check your internet "
                "connection and verify the API is accessible."
            ),
            retryable=True,
            retry_after_ms=NETWORK_RETRY_AFTER_MS,
        )

    if status_code in (401, 403):
        return ClassifiedError(
            code=status_code,
            category=ErrorCategory.AUTH,
            message=message,
            user_message=(
                "Authentication failed. Please verify your FIRECRAWL_API_KEY is correct and active."
            ),
            retryable=False,
        )

    if status_code == 402:
        return ClassifiedError(
            code=status_code,
            category=ErrorCategory.PAYMENT,
            message=message,
            user_message=(
                "Payment required. Your Firecrawl account credits may be exhausted or a "
                "plan upgrade is needed. Visit https://firecrawl.dev/billing"
            ),
            retryable=False,
        )

    if status_code == 429:
        return ClassifiedError(
            code=status_code,
            category=ErrorCategory.RATE_LIMIT,
            message=message,
            user_message="Rate limit exceeded. Please wait 60 seconds before retrying.",
            retryable=True,
            retry_after_ms=RATE_LIMIT_RETRY_AFTER_MS,
        )

    if status_code in (400, 404):
        return ClassifiedError(
            code=status_code,
            category=ErrorCategory.VALIDATION,
            message=message,
            user_message=f"Invalid request parameters: {message}",
            retryable=False,
        )

    if 500 <= status_code <= 599:
        return ClassifiedError(
            code=status_code,
            category=ErrorCategory.SERVER,
            message=message,
            user_message=(
                "Firecrawl server error. This is usually temporary - please retry in a few moments."
            ),
            retryable=True,
            retry_after_ms=SERVER_RETRY_AFTER_MS,
        )

    retryable = status_code >= 500
    return ClassifiedError(
        code=status_code,
        category=ErrorCategory.NETWORK,
        message=message,
        user_message=f"Firecrawl API error ({status_code}): {message or 'Unknown error'}",
        retryable=retryable,
        retry_after_ms=SERVER_RETRY_AFTER_MS if retryable else None,
    )
