"""
Custom exceptions for the HTML translator.

Error philosophy:
  - Every failure is FAIL HARD: nothing is retried or recovered locally.
  - MissingCredentialError → raised before any request is built.
  - TransportError         → the request never produced an HTTP response.
  - APIError               → the endpoint answered with a non-200 status.
  - MalformedResponseError → a 200 answer without choices[0].message.content.

A failed chunk aborts the whole document; the orchestrator re-raises the
same exception with the chunk index recorded in ``details``.
"""

from typing import Optional


class TranslationError(Exception):
    """Base exception for all translator errors."""

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    @property
    def user_message(self) -> str:
        """Human-readable text suitable for showing to an end user."""
        return self.message

    def to_response(self) -> dict:
        """Convert to a JSON-ready error record."""
        return {
            "error": type(self).__name__,
            "message": self.user_message,
            "details": self.details
        }


class MissingCredentialError(TranslationError):
    """Raised when no API key is configured."""

    def __init__(self, details: Optional[dict] = None):
        super().__init__("API key not configured", details)

    @property
    def user_message(self) -> str:
        return "Please set your API key first."


class TransportError(TranslationError):
    """
    Raised when the HTTP request fails below the protocol level
    (DNS, connection refused, TLS, timeout).

    The caller may retry; the translator itself never does.
    """

    def __init__(
        self,
        message: str,
        cause: Optional[BaseException] = None,
        details: Optional[dict] = None
    ):
        super().__init__(message, details)
        self.cause = cause

    @property
    def user_message(self) -> str:
        return f"Network error: {self.message}"


class APIError(TranslationError):
    """Raised when the endpoint answers with a non-200 status."""

    def __init__(
        self,
        status_code: int,
        body: str,
        details: Optional[dict] = None
    ):
        super().__init__(f"API returned status {status_code}", details)
        self.status_code = status_code
        # Full body, never truncated: it is the only diagnostic we get back
        self.body = body

    @property
    def user_message(self) -> str:
        return f"API Error ({self.status_code}): {self.body}"

    def to_response(self) -> dict:
        response = super().to_response()
        response["status_code"] = self.status_code
        return response


class MalformedResponseError(TranslationError):
    """Raised when a successful response lacks the expected message content."""

    @property
    def user_message(self) -> str:
        return "Invalid response from translation API."
