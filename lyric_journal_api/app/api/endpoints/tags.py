"""Tag usage statistics for the caller's entries."""

from typing import Dict, List

from fastapi import APIRouter, Depends

from lyric_journal_api.app.core.security import get_current_user
from lyric_journal_api.app.schemas.lyric import TagCount
from lyric_journal_api.app.services.lyric_service import LyricService

router = APIRouter()


@router.get("", response_model=List[TagCount])
async def tag_usage(current_user: Dict[str, str] = Depends(get_current_user)) -> List[TagCount]:
    """Return ``[{tag, count}]`` sorted by descending count."""
    return await LyricService.tag_usage_summary(current_user["username"])
