"""
Error kinds raised along the prioritization round-trip.

Every error carries the HTTP status it maps to and a user-facing message.
None of them is retried; the caller decides whether to resubmit.
"""

from __future__ import annotations

from typing import Any, Optional


class TodoAIError(Exception):
    status_code: int = 500
    default_message: str = "Failed to prioritize tasks."

    def __init__(self, message: Optional[str] = None, detail: Optional[Any] = None):
        self.message = message or self.default_message
        self.detail = detail
        super().__init__(self.message)

    def to_payload(self) -> dict:
        payload = {"message": self.message}
        if self.detail is not None:
            payload["detail"] = self.detail
        return payload


class ValidationError(TodoAIError):
    """Request shape is wrong (client's fault)."""

    status_code = 400
    default_message = "Please provide at least one todo item."


class ConfigurationError(TodoAIError):
    """Server is missing required configuration (operator's fault)."""

    status_code = 500
    default_message = "Server is missing GEMINI_API_KEY. Add it to your environment variables."


class RemoteServiceError(TodoAIError):
    """The model provider answered with a non-success status."""

    default_message = "Gemini API error"

    def __init__(
        self,
        status_code: int,
        detail: Optional[Any] = None,
        message: Optional[str] = None,
    ):
        super().__init__(message, detail)
        self.status_code = status_code


class NetworkError(TodoAIError):
    """The model provider could not be reached."""

    status_code = 500


class ParseError(TodoAIError):
    """Model output could not be turned into a ranking."""

    status_code = 500
    default_message = "Could not parse AI response."
