"""
Pydantic models for registration and login.
"""

from typing import Optional

from pydantic import BaseModel, Field


class Credentials(BaseModel):
    """Body of ``POST /api/register`` and ``POST /api/login``.

    Both fields are optional at the schema level so that a missing value
    produces the journal's own "Username and password required" error
    instead of a generic schema error.
    """

    username: Optional[str] = Field(None, description="At least 3 characters; compared case-insensitively")
    password: Optional[str] = Field(None, description="At least 4 characters")


class AuthResponse(BaseModel):
    """Successful registration or login."""

    success: bool = True
    token: str
    username: str = Field(..., description="Username with the casing chosen at registration")
