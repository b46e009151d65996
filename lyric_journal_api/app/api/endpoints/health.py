"""Liveness endpoint; does not touch the store and needs no token."""

from fastapi import APIRouter

from lyric_journal_api.app.core.store import utc_timestamp
from lyric_journal_api.app.schemas.lyric import HealthResponse

router = APIRouter()


@router.get("", response_model=HealthResponse)
async def health() -> HealthResponse:
    return HealthResponse(status="OK", timestamp=utc_timestamp())
