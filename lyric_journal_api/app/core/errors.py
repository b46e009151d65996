"""
Error taxonomy shared by the services and the HTTP layer.

Services raise these exceptions; ``main`` registers a handler that
turns any ``JournalError`` into a JSON body ``{"error": message}``
with the exception's ``status_code``.
"""

from typing import Optional


class JournalError(Exception):
    """Base class for errors that map onto an HTTP response."""

    status_code: int = 500

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ValidationError(JournalError):
    """Malformed or missing input."""

    status_code = 400


class ConflictError(JournalError):
    """A username is already taken."""

    status_code = 400


class AuthError(JournalError):
    """Bad credentials or a missing/invalid bearer token.

    The status depends on the phase: 400 for login, 401 for a missing
    token, 403 for a token that fails verification.
    """

    status_code = 401


class NotFoundError(JournalError):
    """No lyric entry with the requested id in the caller's partition."""

    status_code = 404


class StorageError(JournalError):
    """The backing document cannot be read, parsed or written."""

    status_code = 500
