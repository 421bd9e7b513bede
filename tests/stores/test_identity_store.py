"""Tests for the identity stores."""

from __future__ import annotations

import json
import threading
from pathlib import Path

from readmegen.models import RepositoryIdentity
from readmegen.stores import JsonIdentityStore, MemoryIdentityStore


def test_json_store_is_empty_when_file_missing(tmp_path: Path) -> None:
    assert JsonIdentityStore(tmp_path / "missing" / "state.json").get() is None


def test_json_store_persists_under_named_key(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "state.json"
    store = JsonIdentityStore(path)

    store.set(RepositoryIdentity(owner="octo", repo="demo"))

    assert json.loads(path.read_text(encoding="utf-8")) == {
        "currentRepo": {"owner": "octo", "repo": "demo"}
    }
    assert JsonIdentityStore(path).get() == RepositoryIdentity(owner="octo", repo="demo")


def test_json_store_overwrites_and_keeps_other_keys(tmp_path: Path) -> None:
    path = tmp_path / "state.json"
    path.write_text(json.dumps({"theme": "dark"}), encoding="utf-8")
    store = JsonIdentityStore(path)

    store.set(RepositoryIdentity(owner="octo", repo="one"))
    store.set(RepositoryIdentity(owner="octo", repo="two"))

    data = json.loads(path.read_text(encoding="utf-8"))
    assert data == {"theme": "dark", "currentRepo": {"owner": "octo", "repo": "two"}}


def test_json_store_ignores_corrupt_file(tmp_path: Path) -> None:
    path = tmp_path / "state.json"
    path.write_text("{not json", encoding="utf-8")

    assert JsonIdentityStore(path).get() is None

    path.write_text(json.dumps({"currentRepo": {"owner": 3}}), encoding="utf-8")
    assert JsonIdentityStore(path).get() is None


def test_json_store_reads_stay_whole_while_another_store_writes(tmp_path: Path) -> None:
    path = tmp_path / "state.json"
    identity = RepositoryIdentity(owner="octo", repo="demo")
    writer = JsonIdentityStore(path)
    writer.set(identity)
    reader = JsonIdentityStore(path)
    stop = threading.Event()

    def keep_writing() -> None:
        while not stop.is_set():
            writer.set(identity)

    thread = threading.Thread(target=keep_writing)
    thread.start()
    try:
        reads = [reader.get() for _ in range(2000)]
    finally:
        stop.set()
        thread.join()

    assert all(read == identity for read in reads)
    assert sorted(item.name for item in tmp_path.iterdir()) == ["state.json"]


def test_json_store_shared_between_threads(tmp_path: Path) -> None:
    store = JsonIdentityStore(tmp_path / "state.json")
    identity = RepositoryIdentity(owner="octo", repo="demo")
    store.set(identity)
    misses: list[object] = []

    def read_many() -> None:
        for _ in range(500):
            current = store.get()
            if current != identity:
                misses.append(current)

    readers = [threading.Thread(target=read_many) for _ in range(3)]
    for reader in readers:
        reader.start()
    for _ in range(500):
        store.set(identity)
    for reader in readers:
        reader.join()

    assert misses == []


def test_memory_store() -> None:
    store = MemoryIdentityStore()
    assert store.get() is None

    store.set(RepositoryIdentity(owner="octo", repo="demo"))

    assert store.get() == RepositoryIdentity(owner="octo", repo="demo")
