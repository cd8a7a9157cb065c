"""
Error taxonomy shared by the services and the API layer.

Every error is scoped to one request. The API renders each one with its
``status_code`` and never retries.
"""

from __future__ import annotations


class LearnMatchError(Exception):
    """Base class for errors raised by learnmatch services."""

    status_code: int = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(LearnMatchError):
    """Referenced module, opportunity, request or user does not exist."""

    status_code = 404


class InvalidInputError(LearnMatchError):
    """Missing required field or malformed value."""

    status_code = 400


class ForbiddenError(LearnMatchError):
    """Role mismatch or targeting violation."""

    status_code = 403


class ConflictError(LearnMatchError):
    """State transition attempted from a state that no longer allows it."""

    status_code = 409


class InternalError(LearnMatchError):
    """Unexpected persistence failure."""

    status_code = 500
