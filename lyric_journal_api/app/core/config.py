"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields so the
journal runs out of the box; override them in production, at least
``JWT_SECRET``.
"""

import os
from dataclasses import dataclass
from typing import List, Optional


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Lyric Journal API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    debug: bool = os.getenv("DEBUG", "false").lower() in {"1", "true", "yes"}
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: Optional[str] = os.getenv("LOG_FILE") or None

    secret_key: str = os.getenv("JWT_SECRET", "your-secret-key-change-in-production")
    algorithm: str = os.getenv("ALGORITHM", "HS256")

    # Lifetime of issued tokens.  ``0`` issues tokens without an ``exp``
    # claim, so they stay valid until the secret changes.
    access_token_expire_minutes: int = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "0"))

    # Location of the JSON backing document.  Relative paths are resolved
    # against the current working directory by the ``store`` module.
    database_file: str = os.getenv("DATABASE_FILE", "database.json")

    # Directory holding the client application shell.  Empty means the
    # ``static`` directory bundled with the package.
    static_dir: str = os.getenv("STATIC_DIR", "")

    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "3000"))

    # Comma-separated list of allowed CORS origins.
    cors_origins: str = os.getenv("CORS_ORIGINS", "*")

    def cors_origin_list(self) -> List[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Environment variables must
# be set before this module is imported; tests patch attributes on the
# instance instead.
settings = Settings()
