"""
JSON document store.

All users and all lyric entries live in one JSON document on disk::

    {"users": {"<lowercase name>": {...}}, "lyrics": {"<lowercase name>": [...]}}

This module provides the persistence primitives (``init_store``,
``load_document``, ``save_document``) and the two views over a loaded
document that own its invariants: ``CredentialStore`` for accounts and
``RecordStore`` for the per-user lyric partitions.

Every write replaces the whole document.  Mutating callers should use
``document_transaction`` so that the load, the in-memory change and the
save happen under one process-wide lock; two requests racing through a
plain load/save pair would otherwise silently drop one of the changes.
"""

import json
import logging
import os
import tempfile
import threading
import time
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional

from .config import settings
from .errors import StorageError

logger = logging.getLogger(__name__)

Document = Dict[str, Any]

# Re-entrant so that ``load_document`` can be called while a
# transaction on the same thread already holds the lock.
_lock = threading.RLock()


def get_store_path() -> Path:
    """Resolve ``settings.database_file`` to an absolute path.

    Relative paths are taken relative to the current working directory.
    """
    path = Path(settings.database_file)
    if not path.is_absolute():
        path = Path.cwd() / path
    return path.resolve()


def empty_document() -> Document:
    return {"users": {}, "lyrics": {}}


def utc_timestamp() -> str:
    """Current UTC instant as ISO-8601 with milliseconds and a ``Z`` suffix."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def utc_today() -> str:
    """Current UTC calendar date as ``YYYY-MM-DD``."""
    return datetime.now(timezone.utc).date().isoformat()


def _read(path: Path) -> Document:
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except ValueError as exc:
        raise StorageError(f"Database file {path} is not valid JSON: {exc}") from exc
    except OSError as exc:
        raise StorageError(f"Cannot read database file {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise StorageError(f"Database file {path} does not contain a JSON object")
    data.setdefault("users", {})
    data.setdefault("lyrics", {})
    return data


def _write(path: Path, document: Document) -> None:
    # Write to a sibling temp file and rename over the target so a crash
    # mid-write never leaves a truncated document behind.
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=f"{path.name}.", suffix=".tmp", dir=str(path.parent))
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(document, f, indent=2, ensure_ascii=False)
            os.replace(tmp_name, path)
        except BaseException:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise
    except OSError as exc:
        raise StorageError(f"Cannot write database file {path}: {exc}") from exc


def init_store() -> Path:
    """Create the backing document if it is missing and verify it parses.

    Called once during application startup.  A ``StorageError`` raised
    here is fatal: the application must not serve requests with a
    broken store.
    """
    path = get_store_path()
    with _lock:
        if not path.exists():
            _write(path, empty_document())
            logger.info("Created new database file %s", path)
        else:
            _read(path)
            logger.info("Database file %s exists", path)
    return path


def load_document() -> Document:
    """Read the whole backing document, creating it on first use."""
    path = get_store_path()
    with _lock:
        if not path.exists():
            init_store()
        return _read(path)


def save_document(document: Document) -> None:
    """Overwrite the backing document with ``document``."""
    with _lock:
        _write(get_store_path(), document)


@contextmanager
def document_transaction() -> Iterator[Document]:
    """Hold the store lock for one load -> mutate -> save cycle.

    The yielded document is saved when the block finishes normally.  If
    the block raises, nothing is written and the exception propagates.
    """
    with _lock:
        document = load_document()
        yield document
        save_document(document)


class CredentialStore:
    """Accounts keyed by lowercase username.

    Each record keeps the username with its original casing for display,
    the password hash and the creation time.  The hash is stored under
    ``password`` so documents written by earlier versions of the journal
    stay readable.
    """

    def __init__(self, document: Document) -> None:
        self._users: Dict[str, Dict[str, Any]] = document.setdefault("users", {})

    @staticmethod
    def key(username: str) -> str:
        return username.lower()

    def get(self, username: str) -> Optional[Dict[str, Any]]:
        return self._users.get(self.key(username))

    def exists(self, username: str) -> bool:
        return self.key(username) in self._users

    def add(self, username: str, password_hash: str) -> Dict[str, Any]:
        record = {
            "username": username,
            "password": password_hash,
            "createdAt": utc_timestamp(),
        }
        self._users[self.key(username)] = record
        return record


class RecordStore:
    """Lyric entries partitioned by lowercase owner username.

    Partitions are ordered most-recently-added first.
    """

    def __init__(self, document: Document) -> None:
        self._lyrics: Dict[str, List[Dict[str, Any]]] = document.setdefault("lyrics", {})

    def partition(self, username: str) -> List[Dict[str, Any]]:
        """Return the user's partition, or an empty detached list."""
        return self._lyrics.get(username.lower(), [])

    def ensure_partition(self, username: str) -> List[Dict[str, Any]]:
        return self._lyrics.setdefault(username.lower(), [])

    def prepend(self, username: str, entry: Dict[str, Any]) -> None:
        self.ensure_partition(username).insert(0, entry)

    def find_index(self, username: str, entry_id: int) -> int:
        for index, entry in enumerate(self.partition(username)):
            if entry.get("id") == entry_id:
                return index
        return -1

    def next_id(self) -> int:
        """Allocate an id derived from the current time in milliseconds.

        The value is bumped past the largest id in any partition, which
        keeps ids unique across the whole store and strictly increasing
        even for two entries created within the same millisecond.
        """
        now_ms = int(time.time() * 1000)
        largest = max(
            (
                entry["id"]
                for entries in self._lyrics.values()
                for entry in entries
                if isinstance(entry.get("id"), int)
            ),
            default=0,
        )
        return max(now_ms, largest + 1)
