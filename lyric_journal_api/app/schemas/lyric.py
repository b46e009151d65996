"""
Pydantic models for lyric entries.

JSON keys follow the persisted document (``lyricText``, ``dateAdded``);
Python attributes use snake_case and map onto them through aliases.
"""

from typing import Any, List, Optional

from pydantic import BaseModel, Field


class LyricIn(BaseModel):
    """Body of ``POST /api/lyrics`` and ``PUT /api/lyrics/{id}``.

    Every field is accepted as arbitrary JSON.  The service turns
    non-string text values into ``""`` and drops non-list ``tags`` and
    non-string tag items rather than rejecting the request.
    """

    title: Optional[Any] = Field(None, examples=["Yesterday"])
    artist: Optional[Any] = Field(None, examples=["The Beatles"])
    lyric_text: Optional[Any] = Field(None, alias="lyricText")
    note: Optional[Any] = None
    tags: Optional[Any] = Field(None, examples=[["Sad", "Nostalgic"]])

    model_config = {
        "populate_by_name": True,
    }


class LyricRead(BaseModel):
    """A stored lyric entry as returned by the API."""

    id: int
    title: str
    artist: str
    lyric_text: str = Field(..., alias="lyricText")
    note: str = ""
    tags: List[str] = Field(default_factory=list)
    date_added: str = Field(..., alias="dateAdded", description="UTC date the entry was created (YYYY-MM-DD)")

    model_config = {
        "populate_by_name": True,
    }


class TagCount(BaseModel):
    tag: str
    count: int


class SuccessResponse(BaseModel):
    success: bool = True


class HealthResponse(BaseModel):
    status: str = "OK"
    timestamp: str
