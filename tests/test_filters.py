import pytest

from lyric_journal_api.filters import filter_lyrics, matches_query, matches_tags

ENTRIES = [
    {"id": 3, "title": "Yesterday", "artist": "Beatles", "lyricText": "All my troubles", "note": "", "tags": ["Sad"]},
    {"id": 2, "title": "Help!", "artist": "Beatles", "lyricText": "Won't you please", "note": "loud", "tags": ["Rock", "Happy"]},
    {"id": 1, "title": "Hurt", "artist": "Johnny Cash", "lyricText": "I hurt myself today", "tags": ["Sad", "Cover"]},
]


def ids(entries):
    return [e["id"] for e in entries]


def test_blank_query_and_no_tags_keep_everything():
    assert filter_lyrics(ENTRIES) == ENTRIES
    assert filter_lyrics(ENTRIES, "   ", []) == ENTRIES


@pytest.mark.parametrize(
    "query, expected",
    [
        ("beatles", [3, 2]),
        ("TROUBLES", [3]),
        ("LOUD", [2]),
        ("cash", [1]),
        ("nothing", []),
    ],
)
def test_query_matches_any_text_field_case_insensitively(query, expected):
    assert ids(filter_lyrics(ENTRIES, query)) == expected


def test_missing_note_does_not_break_matching():
    assert not matches_query({"title": "x", "artist": "y", "lyricText": "z", "note": None}, "loud")


def test_tags_keep_entries_sharing_any_active_tag():
    assert ids(filter_lyrics(ENTRIES, active_tags=["Sad"])) == [3, 1]
    assert ids(filter_lyrics(ENTRIES, active_tags=["Happy", "Cover"])) == [2, 1]
    assert not matches_tags({"tags": []}, ["Sad"])


def test_query_and_tags_compose_in_either_order():
    both = filter_lyrics(ENTRIES, "beatles", ["Sad"])
    query_first = filter_lyrics(filter_lyrics(ENTRIES, "beatles"), active_tags=["Sad"])
    tags_first = filter_lyrics(filter_lyrics(ENTRIES, active_tags=["Sad"]), "beatles")
    assert ids(both) == ids(query_first) == ids(tags_first) == [3]
