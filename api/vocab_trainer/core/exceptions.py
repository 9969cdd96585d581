"""
Application exceptions.

Each exception carries the HTTP status it maps to, so the API layer can
translate service failures without knowing every subclass.
"""
from fastapi import status


class VocabTrainerException(Exception):
    """Base exception for all Vocab Trainer application exceptions."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


class ValidationError(VocabTrainerException):
    """Invalid input that passed schema validation, e.g. an empty book name."""
    status_code = status.HTTP_400_BAD_REQUEST


class AuthenticationError(VocabTrainerException):
    """Wrong email or password."""
    status_code = status.HTTP_401_UNAUTHORIZED


class AuthorizationError(VocabTrainerException):
    """The acting user lacks the admin role."""
    status_code = status.HTTP_403_FORBIDDEN


class NotFoundError(VocabTrainerException):
    status_code = status.HTTP_404_NOT_FOUND


class ConflictError(VocabTrainerException):
    """Duplicate entry, e.g. an email that is already registered."""
    status_code = status.HTTP_409_CONFLICT
