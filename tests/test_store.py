import json
import threading

import pytest

from lyric_journal_api.app.core.errors import StorageError
from lyric_journal_api.app.core.store import (
    CredentialStore,
    RecordStore,
    document_transaction,
    init_store,
    load_document,
    save_document,
)


def test_first_load_creates_empty_document(store_path):
    assert not store_path.exists()
    document = load_document()
    assert document == {"users": {}, "lyrics": {}}
    assert json.loads(store_path.read_text(encoding="utf-8")) == {"users": {}, "lyrics": {}}


def test_init_store_keeps_existing_document(store_path):
    store_path.write_text(json.dumps({"users": {"bob": {"username": "Bob"}}, "lyrics": {}}), encoding="utf-8")
    init_store()
    assert load_document()["users"]["bob"]["username"] == "Bob"


def test_corrupt_document_is_fatal(store_path):
    store_path.write_text("{not json", encoding="utf-8")
    with pytest.raises(StorageError):
        init_store()
    with pytest.raises(StorageError):
        load_document()


def test_document_must_be_an_object(store_path):
    store_path.write_text("[]", encoding="utf-8")
    with pytest.raises(StorageError):
        load_document()


def test_missing_top_level_keys_are_filled_in(store_path):
    store_path.write_text("{}", encoding="utf-8")
    assert load_document() == {"users": {}, "lyrics": {}}


def test_save_overwrites_whole_document(store_path):
    save_document({"users": {}, "lyrics": {"bob": [{"id": 1}]}})
    save_document({"users": {}, "lyrics": {}})
    assert load_document() == {"users": {}, "lyrics": {}}
    # Pretty printed and no temp files left behind.
    assert store_path.read_text(encoding="utf-8").startswith("{\n  ")
    assert [p.name for p in store_path.parent.iterdir()] == ["database.json"]


def test_transaction_saves_on_success(store_path):
    with document_transaction() as document:
        document["users"]["bob"] = {"username": "bob"}
    assert "bob" in load_document()["users"]


def test_transaction_discards_changes_on_error(store_path):
    init_store()
    before = store_path.read_bytes()
    with pytest.raises(RuntimeError):
        with document_transaction() as document:
            document["users"]["bob"] = {"username": "bob"}
            raise RuntimeError("boom")
    assert store_path.read_bytes() == before


def test_credential_store_is_case_insensitive():
    document = {"users": {}, "lyrics": {}}
    users = CredentialStore(document)
    record = users.add("Alice", "salt$hash")
    assert record["username"] == "Alice"
    assert record["createdAt"].endswith("Z")
    assert "alice" in document["users"]
    assert users.exists("ALICE")
    assert users.get("aLiCe") is record


def test_record_store_prepends_and_finds():
    document = {"users": {}, "lyrics": {}}
    records = RecordStore(document)
    records.prepend("Bob", {"id": 1})
    records.prepend("bob", {"id": 2})
    assert [e["id"] for e in records.partition("BOB")] == [2, 1]
    assert records.find_index("bob", 1) == 1
    assert records.find_index("bob", 3) == -1
    assert records.find_index("carol", 1) == -1
    # Unknown partitions are not created by a lookup.
    assert "carol" not in document["lyrics"]


def test_next_id_is_time_based_and_above_every_existing_id(mocker):
    document = {"users": {}, "lyrics": {"bob": [{"id": 5_000}], "carol": [{"id": 9_000}]}}
    records = RecordStore(document)
    mocker.patch("lyric_journal_api.app.core.store.time.time", return_value=1.0)
    assert records.next_id() == 9_001
    mocker.patch("lyric_journal_api.app.core.store.time.time", return_value=100.0)
    assert records.next_id() == 100_000


def test_concurrent_transactions_do_not_lose_writes(store_path):
    init_store()
    start = threading.Barrier(20)

    def add_entry():
        start.wait()
        with document_transaction() as document:
            records = RecordStore(document)
            records.prepend("bob", {"id": records.next_id()})

    threads = [threading.Thread(target=add_entry) for _ in range(20)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    entries = load_document()["lyrics"]["bob"]
    assert len(entries) == 20
    assert len({e["id"] for e in entries}) == 20
