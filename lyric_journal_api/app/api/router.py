"""
Top-level router for the journal API.

Domain routers are included here and mounted by ``main`` under
``/api``.  Paths under ``/api`` that match no route fall through to
Starlette's own handling (404, 405 or a trailing-slash redirect); the
client shell never answers for them.
"""

from fastapi import APIRouter

from .endpoints import auth, health, lyrics, tags

router = APIRouter()

router.include_router(auth.router, tags=["auth"])
router.include_router(lyrics.router, prefix="/lyrics", tags=["lyrics"])
router.include_router(tags.router, prefix="/tags", tags=["tags"])
router.include_router(health.router, prefix="/health", tags=["health"])
