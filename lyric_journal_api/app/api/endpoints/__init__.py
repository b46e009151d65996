"""
Endpoint modules.

Each module defines an ``APIRouter`` for one area (auth, lyrics, tags,
health, client shell).  ``api/router.py`` combines the API routers.
"""
