"""Entry point for the Lyric Journal server.

Starts the FastAPI application with Uvicorn.  Host and port come from
the ``HOST`` and ``PORT`` environment variables (defaults ``0.0.0.0``
and ``3000``).  If the port is already taken the server falls back to
the next one.  Other settings (``JWT_SECRET``, ``DATABASE_FILE``,
``LOG_LEVEL`` ...) are read by ``lyric_journal_api.app.core.config``.

Usage:
    python run.py
"""
import asyncio
import logging
import socket

from uvicorn import Config, Server

from lyric_journal_api.app.core.config import settings
from lyric_journal_api.app.main import app

logger = logging.getLogger("lyric_journal_api.run")


def port_available(host: str, port: int) -> bool:
    """Return True if ``port`` can be bound on ``host`` right now."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        try:
            sock.bind((host, port))
        except OSError:
            return False
    return True


def choose_port(host: str, port: int) -> int:
    if port_available(host, port):
        return port
    logger.warning("Port %s is already in use. Trying port %s...", port, port + 1)
    return port + 1


async def main() -> None:
    """Serve the application until interrupted."""
    port = choose_port(settings.host, settings.port)
    config = Config(app=app, host=settings.host, port=port, reload=False, log_level=settings.log_level.lower())
    server = Server(config)
    logger.info("Server running on port %s", port)
    logger.info("Visit: http://localhost:%s", port)
    await server.serve()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        pass
