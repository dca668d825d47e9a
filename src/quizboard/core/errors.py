"""Typed failures raised by the Quizboard core.

Every service operation runs as a single unit of work, so raising one of
these errors also means nothing was persisted. The API layer maps
``status_code`` onto the HTTP response; the core itself never formats
responses.
"""

from __future__ import annotations


class QuizboardError(RuntimeError):
    """Base exception for all core failures."""

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(QuizboardError):
    """Raised when caller input has the wrong shape or values."""

    status_code = 400


class InvalidVoteTypeError(ValidationError):
    """Raised when a vote type or target type is not recognised."""


class InvalidMembershipError(ValidationError):
    """Raised when a problem set references missing or inactive questions."""


class NotFoundError(QuizboardError):
    """Raised when a referenced entity is missing or soft-deleted."""

    status_code = 404


class UserNotFoundError(NotFoundError):
    """Raised when a user id does not resolve to an active user."""


class AuthorNotFoundError(NotFoundError):
    """Raised when the author of new content does not exist."""


class ConflictError(QuizboardError):
    """Raised when a unique-key race could not be resolved."""

    status_code = 409


class InsufficientVouchersError(QuizboardError):
    """Raised when an author has no question vouchers left."""

    status_code = 403


class ForbiddenError(QuizboardError):
    """Raised when the caller lacks the capability for an action."""

    status_code = 403


class SelfVoteForbiddenError(ForbiddenError):
    """Raised when a user votes on content they authored."""


class InternalError(QuizboardError):
    """Raised when the store fails while applying a unit of work."""

    status_code = 500


__all__ = [
    "AuthorNotFoundError",
    "ConflictError",
    "ForbiddenError",
    "InsufficientVouchersError",
    "InternalError",
    "InvalidMembershipError",
    "InvalidVoteTypeError",
    "NotFoundError",
    "QuizboardError",
    "SelfVoteForbiddenError",
    "UserNotFoundError",
    "ValidationError",
]
