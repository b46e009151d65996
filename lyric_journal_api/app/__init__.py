"""
Application package initializer.

The application is split into ``core`` (configuration, logging,
security and the JSON document store), ``schemas`` (pydantic payloads),
``services`` (business logic) and ``api`` (HTTP routers).  Importing
this package builds the FastAPI instance exposed as ``app``.
"""

from .main import app  # noqa: F401
