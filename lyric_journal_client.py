"""Lyric Journal API client.

A thin wrapper around the journal's HTTP API built on ``requests``.
Authentication state is never kept on the client object: ``register``
and ``login`` return a :class:`JournalSession` which the caller passes
to every authenticated call.  This lets one client serve several users
at once and makes logging out a matter of dropping the session.

Every method returns a tuple ``(data, error)``.  On success ``error`` is
``None``; on failure ``data`` is ``None`` (or an empty list) and
``error`` is a dictionary with ``status_code`` and ``message``, where
``message`` is the server's ``{"error": ...}`` text whenever the server
sent one.  A failed call therefore always has something to show the
user.

Example::

    api = LyricJournalAPI(base_url="http://localhost:3000")
    session, error = api.login("bob", "secret1")
    lyrics, error = api.list_lyrics(session)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Tuple

import requests

from lyric_journal_api.filters import filter_lyrics

logger = logging.getLogger(__name__)

Error = Dict[str, Any]


@dataclass(frozen=True)
class JournalSession:
    """Credentials of one logged-in user.

    Attributes:
        token: Bearer token issued by the server.
        username: Username with the casing chosen at registration.
    """

    token: str
    username: str


class LyricJournalAPI:
    """Client for the Lyric Journal HTTP API."""

    def __init__(
        self,
        *,
        base_url: str,
        session: Optional[requests.Session] = None,
        timeout: float = 15,
    ) -> None:
        """Initialise the API client.

        Args:
            base_url: Base URL of the server, e.g. ``http://localhost:3000``.
            session: Optional requests session.  If not supplied a
                session will be created automatically.
            timeout: Per-request timeout in seconds.
        """
        self.base_url = base_url.rstrip("/")
        self.http = session or requests.Session()
        self.timeout = timeout

    # ------------------------------------------------------------------
    # Low level HTTP helpers
    # ------------------------------------------------------------------
    def _request(
        self,
        method: str,
        path: str,
        *,
        journal_session: Optional[JournalSession] = None,
        params: Dict[str, Any] | None = None,
        json_body: Any | None = None,
    ) -> Tuple[Optional[Any], Optional[Error]]:
        """Perform an HTTP request to the API.

        Args:
            method: HTTP method (``GET``, ``POST``, ``PUT``, ``DELETE``).
            path: Path relative to :attr:`base_url` (e.g. ``/api/lyrics``).
            journal_session: Session whose token is sent as a bearer token.
            params: Query parameters to include in the request.
            json_body: JSON body to send with the request.
        Returns:
            A tuple ``(data, error)`` as described in the module docstring.
        """
        url = f"{self.base_url}{path}"
        headers: Dict[str, str] = {}
        if journal_session is not None:
            headers["Authorization"] = f"Bearer {journal_session.token}"
        try:
            logger.debug("Sending %s request to %s", method, url)
            response = self.http.request(
                method=method,
                url=url,
                params=params,
                json=json_body,
                headers=headers,
                timeout=self.timeout,
            )
            response.raise_for_status()
            if response.content:
                return response.json(), None
            return None, None
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else None
            message = ""
            if exc.response is not None:
                try:
                    err_json = exc.response.json()
                    message = err_json.get("error") or str(err_json)
                except ValueError:
                    message = exc.response.text
            if not message:
                message = str(exc)
            logger.error("API request failed (%s): %s", status, message)
            return None, {"status_code": status, "message": message}
        except requests.RequestException as exc:
            logger.error("API request failed: %s", exc)
            return None, {"status_code": None, "message": str(exc)}

    def _authenticate(self, path: str, username: str, password: str) -> Tuple[Optional[JournalSession], Optional[Error]]:
        data, error = self._request("POST", path, json_body={"username": username, "password": password})
        if error:
            return None, error
        return JournalSession(token=data["token"], username=data["username"]), None

    # ------------------------------------------------------------------
    # Accounts
    # ------------------------------------------------------------------
    def register(self, username: str, password: str) -> Tuple[Optional[JournalSession], Optional[Error]]:
        """Create an account and return a session for it."""
        return self._authenticate("/api/register", username, password)

    def login(self, username: str, password: str) -> Tuple[Optional[JournalSession], Optional[Error]]:
        """Log in and return a session."""
        return self._authenticate("/api/login", username, password)

    # ------------------------------------------------------------------
    # Lyrics
    # ------------------------------------------------------------------
    def list_lyrics(
        self,
        journal_session: JournalSession,
        *,
        query: Optional[str] = None,
        tags: Optional[Iterable[str]] = None,
    ) -> Tuple[List[Dict[str, Any]], Optional[Error]]:
        """Retrieve the user's entries, newest first.

        ``query`` and ``tags`` are passed to the server-side filter.
        """
        params: Dict[str, Any] = {}
        if query:
            params["q"] = query
        if tags:
            params["tag"] = list(tags)
        data, error = self._request("GET", "/api/lyrics", journal_session=journal_session, params=params or None)
        if error:
            return [], error
        return data or [], None

    def add_lyric(
        self,
        journal_session: JournalSession,
        *,
        title: str,
        artist: str,
        lyric_text: str,
        note: str = "",
        tags: Optional[List[str]] = None,
    ) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Save a new entry and return it as stored."""
        body = {"title": title, "artist": artist, "lyricText": lyric_text, "note": note, "tags": tags or []}
        return self._request("POST", "/api/lyrics", journal_session=journal_session, json_body=body)

    def update_lyric(
        self,
        journal_session: JournalSession,
        lyric_id: int,
        *,
        title: str,
        artist: str,
        lyric_text: str,
        note: str = "",
        tags: Optional[List[str]] = None,
    ) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Replace an entry's editable fields and return the result."""
        body = {"title": title, "artist": artist, "lyricText": lyric_text, "note": note, "tags": tags or []}
        return self._request("PUT", f"/api/lyrics/{lyric_id}", journal_session=journal_session, json_body=body)

    def delete_lyric(self, journal_session: JournalSession, lyric_id: int) -> Tuple[bool, Optional[Error]]:
        """Delete an entry.

        Returns:
            A tuple ``(success, error)``.
        """
        data, error = self._request("DELETE", f"/api/lyrics/{lyric_id}", journal_session=journal_session)
        if error:
            return False, error
        return bool(data and data.get("success")), None

    def tag_summary(self, journal_session: JournalSession) -> Tuple[List[Dict[str, Any]], Optional[Error]]:
        """Return ``[{tag, count}]`` for the user's entries, most used first."""
        data, error = self._request("GET", "/api/tags", journal_session=journal_session)
        if error:
            return [], error
        return data or [], None

    def health(self) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        return self._request("GET", "/api/health")

    # ------------------------------------------------------------------
    # Local search
    # ------------------------------------------------------------------
    @staticmethod
    def search(
        lyrics: Iterable[Dict[str, Any]],
        query: str = "",
        active_tags: Optional[Iterable[str]] = None,
    ) -> List[Dict[str, Any]]:
        """Filter already downloaded entries without another request.

        Uses the same matching rules as the server's ``q``/``tag`` filter.
        """
        return list(filter_lyrics(lyrics, query, active_tags))
