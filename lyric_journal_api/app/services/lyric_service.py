"""
Business logic for lyric entries.

Each user owns one partition of entries, newest first.  Free-text
fields are trimmed and truncated to ``MAX_TEXT_LENGTH`` characters and
tag lists are cleaned and capped at ``MAX_TAGS`` items; oversized input
is cut down, never rejected.  ``id`` and ``dateAdded`` are fixed at
creation.  Every mutation runs inside ``document_transaction``.
"""

import logging
from collections import Counter
from typing import Any, Dict, Iterable, List, Optional

from lyric_journal_api.app.core.errors import NotFoundError, ValidationError
from lyric_journal_api.app.core.store import RecordStore, document_transaction, load_document, utc_today
from lyric_journal_api.app.schemas.lyric import LyricIn, LyricRead, TagCount
from lyric_journal_api.filters import filter_lyrics

MAX_TEXT_LENGTH = 5000
MAX_TAGS = 20

logger = logging.getLogger(__name__)


def sanitize_text(value: Any) -> str:
    """Trim a string and cut it to ``MAX_TEXT_LENGTH``; non-strings become ``""``."""
    if not isinstance(value, str):
        return ""
    return value.strip()[:MAX_TEXT_LENGTH]


def sanitize_tags(tags: Any) -> List[str]:
    """Keep non-blank string tags, sanitized, at most ``MAX_TAGS`` of them."""
    if not isinstance(tags, list):
        return []
    cleaned = [sanitize_text(tag) for tag in tags if isinstance(tag, str) and tag.strip()]
    return cleaned[:MAX_TAGS]


def _editable_fields(data: LyricIn) -> Dict[str, Any]:
    fields = {
        "title": sanitize_text(data.title),
        "artist": sanitize_text(data.artist),
        "lyricText": sanitize_text(data.lyric_text),
        "note": sanitize_text(data.note or ""),
        "tags": sanitize_tags(data.tags or []),
    }
    if not fields["title"] or not fields["artist"] or not fields["lyricText"]:
        raise ValidationError("Title, artist, and lyric text required")
    return fields


class LyricService:
    """CRUD and tag statistics over one user's lyric partition."""

    @classmethod
    async def list_lyrics(
        cls,
        username: str,
        query: Optional[str] = None,
        tags: Optional[Iterable[str]] = None,
    ) -> List[LyricRead]:
        """Return the user's entries, newest first.

        Without ``query`` or ``tags`` the partition is returned as
        stored; otherwise only entries matching both filters.
        """
        entries = RecordStore(load_document()).partition(username)
        if query or tags:
            entries = filter_lyrics(entries, query or "", tags)
        return [LyricRead.model_validate(entry) for entry in entries]

    @classmethod
    async def create_lyric(cls, username: str, data: LyricIn) -> LyricRead:
        """Store a new entry at the front of the user's partition."""
        fields = _editable_fields(data)
        with document_transaction() as document:
            records = RecordStore(document)
            entry = {"id": records.next_id(), **fields, "dateAdded": utc_today()}
            records.prepend(username, entry)
        logger.info("User %s added lyric %s", username, entry["id"])
        return LyricRead.model_validate(entry)

    @classmethod
    async def update_lyric(cls, username: str, lyric_id: int, data: LyricIn) -> LyricRead:
        """Replace the editable fields of an entry in place.

        Raises ``NotFoundError`` (and writes nothing) if the entry is not
        in the user's partition.
        """
        fields = _editable_fields(data)
        with document_transaction() as document:
            records = RecordStore(document)
            index = records.find_index(username, lyric_id)
            if index == -1:
                raise NotFoundError("Lyric not found")
            entry = records.partition(username)[index]
            entry.update(fields)
        logger.info("User %s updated lyric %s", username, lyric_id)
        return LyricRead.model_validate(entry)

    @classmethod
    async def delete_lyric(cls, username: str, lyric_id: int) -> None:
        """Remove an entry; raises ``NotFoundError`` if it is absent."""
        with document_transaction() as document:
            records = RecordStore(document)
            index = records.find_index(username, lyric_id)
            if index == -1:
                raise NotFoundError("Lyric not found")
            records.partition(username).pop(index)
        logger.info("User %s deleted lyric %s", username, lyric_id)

    @classmethod
    async def tag_usage_summary(cls, username: str) -> List[TagCount]:
        """Count tag usage across the partition, most used first.

        Tags with equal counts keep the order in which they were first
        seen, walking the partition newest first.
        """
        counts: Counter = Counter()
        for entry in RecordStore(load_document()).partition(username):
            for tag in entry.get("tags") or []:
                counts[tag] += 1
        return [TagCount(tag=tag, count=count) for tag, count in counts.most_common()]
