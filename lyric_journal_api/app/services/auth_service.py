"""
Business logic for accounts and bearer tokens.

Usernames are unique case-insensitively: they are stored under their
lowercase form while the casing chosen at registration is kept for
display.  Login failures never say whether the username or the password
was wrong.
"""

import logging
from typing import Dict, Optional

from lyric_journal_api.app.core.errors import AuthError, ConflictError, ValidationError
from lyric_journal_api.app.core.security import (
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)
from lyric_journal_api.app.core.store import CredentialStore, RecordStore, document_transaction, load_document
from lyric_journal_api.app.schemas.user import AuthResponse

MIN_USERNAME_LENGTH = 3
MIN_PASSWORD_LENGTH = 4

INVALID_CREDENTIALS = "Invalid username or password"

logger = logging.getLogger(__name__)


class AuthService:
    """Registers and authenticates users and verifies their tokens."""

    @staticmethod
    def issue_token(username: str) -> str:
        return create_access_token({"sub": username.lower()})

    @classmethod
    async def register(cls, username: Optional[str], password: Optional[str]) -> AuthResponse:
        """Create an account with an empty lyric partition and return a token.

        Raises ``ValidationError`` for missing or too short values and
        ``ConflictError`` if the username exists in any casing.
        """
        if not username or not password:
            raise ValidationError("Username and password required")
        if len(username) < MIN_USERNAME_LENGTH or len(password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(
                f"Username must be {MIN_USERNAME_LENGTH}+ characters, "
                f"password {MIN_PASSWORD_LENGTH}+ characters"
            )

        with document_transaction() as document:
            users = CredentialStore(document)
            if users.exists(username):
                logger.info("Registration rejected, username %s already exists", username)
                raise ConflictError("Username already exists")
            users.add(username, hash_password(password))
            RecordStore(document).ensure_partition(username)

        logger.info("Registered user %s", username)
        return AuthResponse(token=cls.issue_token(username), username=username)

    @classmethod
    async def login(cls, username: Optional[str], password: Optional[str]) -> AuthResponse:
        """Check credentials and return a fresh token.

        Unknown users and wrong passwords both raise ``AuthError`` with
        the same message and status 400.
        """
        if not username or not password:
            raise ValidationError("Username and password required")

        user = CredentialStore(load_document()).get(username)
        if user is None or not verify_password(password, user.get("password", "")):
            logger.warning("Failed login attempt for %s", username)
            raise AuthError(INVALID_CREDENTIALS, status_code=400)

        logger.info("User %s logged in", user["username"])
        return AuthResponse(token=cls.issue_token(username), username=user["username"])

    @classmethod
    async def verify_token(cls, token: Optional[str]) -> Dict[str, str]:
        """Resolve a bearer token to ``{"username": <lowercase name>}``.

        Raises ``AuthError`` with status 401 when no token was presented
        and 403 when the signature, expiry or subject check fails.
        """
        if not token:
            raise AuthError("Access token required", status_code=401)
        payload = decode_access_token(token)
        subject = payload.get("sub") if payload else None
        if not isinstance(subject, str) or not subject:
            raise AuthError("Invalid token", status_code=403)
        if not CredentialStore(load_document()).exists(subject):
            logger.warning("Token presented for unknown user %s", subject)
            raise AuthError("Invalid token", status_code=403)
        return {"username": subject}
