import json

import pytest
import requests

from lyric_journal_client import JournalSession, LyricJournalAPI

BASE_URL = "http://journal.test"


def make_response(status_code, payload=None):
    response = requests.Response()
    response.status_code = status_code
    response.url = BASE_URL
    if payload is not None:
        response._content = json.dumps(payload).encode("utf-8")
        response.headers["Content-Type"] = "application/json"
    else:
        response._content = b""
    return response


@pytest.fixture
def http(mocker):
    return mocker.Mock(spec=requests.Session)


@pytest.fixture
def api(http):
    return LyricJournalAPI(base_url=BASE_URL + "/", session=http)


@pytest.fixture
def journal_session():
    return JournalSession(token="tok", username="Bob")


def test_login_returns_session(api, http):
    http.request.return_value = make_response(200, {"success": True, "token": "abc", "username": "Bob"})

    session, error = api.login("bob", "secret1")

    assert error is None
    assert session == JournalSession(token="abc", username="Bob")
    kwargs = http.request.call_args.kwargs
    assert kwargs["method"] == "POST"
    assert kwargs["url"] == f"{BASE_URL}/api/login"
    assert kwargs["json"] == {"username": "bob", "password": "secret1"}
    assert "Authorization" not in kwargs["headers"]


def test_register_error_carries_server_message(api, http):
    http.request.return_value = make_response(400, {"error": "Username already exists"})

    session, error = api.register("bob", "secret1")

    assert session is None
    assert error == {"status_code": 400, "message": "Username already exists"}


def test_list_lyrics_sends_token_and_filters(api, http, journal_session):
    http.request.return_value = make_response(200, [{"id": 1, "title": "Yesterday"}])

    lyrics, error = api.list_lyrics(journal_session, query="yes", tags=["Sad"])

    assert error is None
    assert lyrics == [{"id": 1, "title": "Yesterday"}]
    kwargs = http.request.call_args.kwargs
    assert kwargs["headers"] == {"Authorization": "Bearer tok"}
    assert kwargs["params"] == {"q": "yes", "tag": ["Sad"]}


def test_list_lyrics_failure_returns_empty_list(api, http, journal_session):
    http.request.return_value = make_response(403, {"error": "Invalid token"})

    lyrics, error = api.list_lyrics(journal_session)

    assert lyrics == []
    assert error == {"status_code": 403, "message": "Invalid token"}


def test_add_and_update_send_camel_case_body(api, http, journal_session):
    http.request.return_value = make_response(200, {"id": 7})

    api.add_lyric(journal_session, title="T", artist="A", lyric_text="L", tags=["x"])
    assert http.request.call_args.kwargs["json"] == {"title": "T", "artist": "A", "lyricText": "L", "note": "", "tags": ["x"]}

    api.update_lyric(journal_session, 7, title="T", artist="A", lyric_text="L", note="n")
    kwargs = http.request.call_args.kwargs
    assert kwargs["method"] == "PUT"
    assert kwargs["url"] == f"{BASE_URL}/api/lyrics/7"
    assert kwargs["json"]["note"] == "n"


def test_delete_lyric(api, http, journal_session):
    http.request.return_value = make_response(200, {"success": True})
    assert api.delete_lyric(journal_session, 7) == (True, None)

    http.request.return_value = make_response(404, {"error": "Lyric not found"})
    assert api.delete_lyric(journal_session, 7) == (False, {"status_code": 404, "message": "Lyric not found"})


def test_connection_failure_is_reported(api, http):
    http.request.side_effect = requests.ConnectionError("connection refused")

    data, error = api.health()

    assert data is None
    assert error["status_code"] is None
    assert "connection refused" in error["message"]


def test_search_uses_shared_filter():
    lyrics = [
        {"id": 2, "title": "Help!", "artist": "Beatles", "lyricText": "", "note": "", "tags": ["Rock"]},
        {"id": 1, "title": "Yesterday", "artist": "Beatles", "lyricText": "", "note": "", "tags": ["Sad"]},
    ]
    assert [e["id"] for e in LyricJournalAPI.search(lyrics, "beatles", ["Sad"])] == [1]
    assert LyricJournalAPI.search(lyrics) == lyrics
