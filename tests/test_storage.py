from __future__ import annotations

import io

import pytest

from lawoffice.services.storage_service import ObjectStore, StorageError, delete_file_quietly


def test_upload_uses_unique_names_and_keeps_extension(store: ObjectStore):
    a = store.upload("receipts", "scan.PDF", b"one", folder="2024")
    b = store.upload("receipts", "scan.PDF", io.BytesIO(b"two"), folder="2024")
    assert a != b
    assert a.startswith("2024/") and a.endswith(".pdf")
    with store.open("receipts", b) as f:
        assert f.read() == b"two"
    assert store.get_url("receipts", a) == f"/api/files/receipts/{a}"


def test_paths_are_confined_to_their_bucket(store: ObjectStore):
    with pytest.raises(StorageError):
        store.resolve("receipts", "../bills/x.pdf")
    with pytest.raises(StorageError):
        store.upload("unknown", "x.txt", b"")
    assert store.exists("receipts", "../../etc/passwd") is False


def test_delete_and_quiet_delete(store: ObjectStore):
    path = store.upload("bills", "b.txt", b"x")
    assert store.delete("bills", path) is True
    assert store.delete("bills", path) is False
    # nothing raised for a bad path or a missing one
    delete_file_quietly(store, "bills", "../outside")
    delete_file_quietly(store, "bills", None)
