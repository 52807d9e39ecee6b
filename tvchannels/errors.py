from __future__ import annotations

from typing import Any


class ChannelApiError(Exception):
    """Failure that maps onto a JSON error envelope and an HTTP status."""

    status_code: int = 500
    error: str = "Internal server error"

    def __init__(
        self,
        error: str | None = None,
        *,
        details: str | None = None,
        message: str | None = None,
    ):
        if error is not None:
            self.error = error
        self.details = details
        self.message = message
        super().__init__(self.error)

    def to_body(self) -> dict[str, Any]:
        body: dict[str, Any] = {"error": self.error}
        if self.details is not None:
            body["details"] = self.details
        if self.message is not None:
            body["message"] = self.message
        return body


class InvalidIdentifier(ChannelApiError):
    status_code = 400
    error = "Invalid channel ID format"


class NotFound(ChannelApiError):
    status_code = 404
    error = "Channel not found"

    def __init__(
        self,
        error: str | None = None,
        *,
        details: str | None = None,
        message: str | None = None,
    ):
        super().__init__(
            error,
            details=details,
            message=message or "No channel exists with the provided ID",
        )


class QueryFailed(ChannelApiError):
    status_code = 500
    error = "Failed to query channels"


class MethodNotAllowed(ChannelApiError):
    status_code = 405
    error = "Method not allowed"


class InternalError(ChannelApiError):
    status_code = 500
    error = "Internal server error"

    def __init__(self):
        super().__init__(message="An unexpected error occurred. Please try again later.")
