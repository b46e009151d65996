"""
Lyric entry endpoints.

All routes require a bearer token and only ever touch the caller's own
partition; an id belonging to another user is reported as not found.
"""

from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, Query

from lyric_journal_api.app.core.security import get_current_user
from lyric_journal_api.app.schemas.lyric import LyricIn, LyricRead, SuccessResponse
from lyric_journal_api.app.services.lyric_service import LyricService

router = APIRouter()


@router.get("", response_model=List[LyricRead])
async def list_lyrics(
    q: Optional[str] = Query(None, description="Case-insensitive text matched against title, artist, lyrics and note"),
    tag: Optional[List[str]] = Query(None, description="Keep entries carrying any of these tags"),
    current_user: Dict[str, str] = Depends(get_current_user),
) -> List[LyricRead]:
    """Return the caller's entries, newest first.

    - **q** narrows the list by free text.
    - **tag** (repeatable) narrows it to entries sharing a tag.
    """
    return await LyricService.list_lyrics(current_user["username"], query=q, tags=tag)


@router.post("", response_model=LyricRead)
async def create_lyric(
    lyric: LyricIn,
    current_user: Dict[str, str] = Depends(get_current_user),
) -> LyricRead:
    """Save a new entry; ``title``, ``artist`` and ``lyricText`` are required."""
    return await LyricService.create_lyric(current_user["username"], lyric)


@router.put("/{lyric_id}", response_model=LyricRead)
async def update_lyric(
    lyric_id: int,
    lyric: LyricIn,
    current_user: Dict[str, str] = Depends(get_current_user),
) -> LyricRead:
    """Replace the editable fields of an entry, keeping its id and date."""
    return await LyricService.update_lyric(current_user["username"], lyric_id, lyric)


@router.delete("/{lyric_id}", response_model=SuccessResponse)
async def delete_lyric(
    lyric_id: int,
    current_user: Dict[str, str] = Depends(get_current_user),
) -> SuccessResponse:
    await LyricService.delete_lyric(current_user["username"], lyric_id)
    return SuccessResponse()
