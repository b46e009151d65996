"""
Top-level package for the Lyric Journal API.

The web application lives in the ``app`` subpackage and is imported
with fully qualified names such as ``lyric_journal_api.app.main``.
The ``filters`` module sits outside ``app`` so that clients can use
the search contract without building the application.
"""

__all__ = []
