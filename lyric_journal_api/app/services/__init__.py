"""
Service layer.

``AuthService`` owns accounts and tokens, ``LyricService`` owns the
per-user lyric partitions.  Both go through ``core.store`` and raise
the exceptions defined in ``core.errors``; the HTTP layer only maps
requests onto them.
"""
