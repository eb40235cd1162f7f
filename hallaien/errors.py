"""
Domain errors for Hallaien.

Services raise these; the exception handler in main turns them into JSON
responses carrying status_code and detail.
An access decision of "denied" is a normal value, not an error.
"""

from __future__ import annotations

from uuid import UUID

from fastapi import status


class HallaienError(Exception):
    """Base class for all domain errors."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    detail: str = "Internal error."

    def __init__(self, detail: str | None = None):
        if detail is not None:
            self.detail = detail
        super().__init__(self.detail)


class NotAuthenticated(HallaienError):
    status_code = status.HTTP_401_UNAUTHORIZED
    detail = "Not authenticated. Please sign in."


class NotTeacher(HallaienError):
    status_code = status.HTTP_403_FORBIDDEN
    detail = "Only teachers can manage assistants."


class NotOwner(HallaienError):
    status_code = status.HTTP_403_FORBIDDEN
    detail = "You do not own this assistant."


class AccessDeniedError(HallaienError):
    status_code = status.HTTP_403_FORBIDDEN
    detail = "Access denied."


class AssistantNotFound(HallaienError):
    status_code = status.HTTP_404_NOT_FOUND
    detail = "Assistant not found."

    def __init__(self, assistant_id: UUID | None = None):
        self.assistant_id = assistant_id
        super().__init__()


class InvalidOrExpired(HallaienError):
    status_code = status.HTTP_400_BAD_REQUEST
    detail = "Invalid or expired code."


class ShareCodeExhausted(HallaienError):
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    detail = "Could not generate a unique share code. Try again."


class UpstreamUnavailable(HallaienError):
    status_code = status.HTTP_502_BAD_GATEWAY
    detail = "Voice service unavailable."


class RateLimited(HallaienError):
    status_code = status.HTTP_429_TOO_MANY_REQUESTS
    detail = "Too many attempts. Please wait before trying again."
