"""
Client application shell.

Any path outside ``/api`` is answered from the static directory: an
existing file is served as is, everything else gets ``index.html`` so
the browser client can handle the route itself.
"""

from pathlib import Path

from fastapi import APIRouter
from fastapi.responses import FileResponse
from starlette.convertors import Convertor, register_url_convertor

from lyric_journal_api.app.core.config import settings
from lyric_journal_api.app.core.errors import NotFoundError

BUNDLED_STATIC_DIR = Path(__file__).resolve().parent.parent.parent / "static"


class ClientPathConvertor(Convertor):
    """Like ``path`` but refuses ``api`` and anything below it."""

    regex = r"(?!api(?:/|$)).*"

    def convert(self, value: str) -> str:
        return value

    def to_string(self, value: str) -> str:
        return str(value)


register_url_convertor("client_path", ClientPathConvertor())

router = APIRouter()


def get_static_dir() -> Path:
    if settings.static_dir:
        return Path(settings.static_dir).resolve()
    return BUNDLED_STATIC_DIR


@router.get("/{full_path:client_path}", include_in_schema=False)
async def serve_client(full_path: str) -> FileResponse:
    root = get_static_dir()
    if full_path:
        candidate = (root / full_path).resolve()
        # Never serve anything outside the static directory.
        if candidate.is_file() and root in candidate.parents:
            return FileResponse(candidate)
    index = root / "index.html"
    if not index.is_file():
        raise NotFoundError("Not found")
    return FileResponse(index)
