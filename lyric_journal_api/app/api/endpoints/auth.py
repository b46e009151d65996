"""
Registration and login endpoints.

Both return ``{success, token, username}``.  Validation problems,
taken usernames and bad credentials all answer with status 400.
"""

from fastapi import APIRouter

from lyric_journal_api.app.schemas.user import AuthResponse, Credentials
from lyric_journal_api.app.services.auth_service import AuthService

router = APIRouter()


@router.post("/register", response_model=AuthResponse)
async def register(credentials: Credentials) -> AuthResponse:
    """Create an account and return a bearer token for it."""
    return await AuthService.register(credentials.username, credentials.password)


@router.post("/login", response_model=AuthResponse)
async def login(credentials: Credentials) -> AuthResponse:
    """Exchange a username and password for a bearer token."""
    return await AuthService.login(credentials.username, credentials.password)
