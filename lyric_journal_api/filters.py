"""
Search filter shared by the server and the Python client.

Entries are plain mappings with the keys of the persisted document
(``title``, ``artist``, ``lyricText``, ``note``, ``tags``).  The free
text query and the tag filter are independent predicates, so applying
them in either order gives the same result.
"""

from typing import Any, Iterable, List, Mapping, Optional

SEARCH_FIELDS = ("title", "artist", "lyricText", "note")


def matches_query(entry: Mapping[str, Any], query: str) -> bool:
    """Case-insensitive substring match against the searchable fields.

    A blank query matches everything.
    """
    needle = (query or "").strip().lower()
    if not needle:
        return True
    for field in SEARCH_FIELDS:
        value = entry.get(field)
        if isinstance(value, str) and needle in value.lower():
            return True
    return False


def matches_tags(entry: Mapping[str, Any], active_tags: Optional[Iterable[str]]) -> bool:
    """True if the entry carries at least one of ``active_tags``.

    No active tags means no tag filtering.
    """
    wanted = set(active_tags or ())
    if not wanted:
        return True
    return not wanted.isdisjoint(entry.get("tags") or ())


def filter_lyrics(
    entries: Iterable[Mapping[str, Any]],
    query: str = "",
    active_tags: Optional[Iterable[str]] = None,
) -> List[Mapping[str, Any]]:
    """Return the entries matching both the query and the tag filter, in order."""
    active = list(active_tags or ())
    return [entry for entry in entries if matches_query(entry, query) and matches_tags(entry, active)]
