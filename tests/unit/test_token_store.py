from __future__ import annotations

import json

from cryptography.fernet import Fernet

from common.backend import BackendClient
from state.session import SessionManager
from state.store import JsonFileStore, MemoryStore

from fakes import FakeNavigator, FakeTodoBackend


def test_memory_store_set_get_remove():
    store = MemoryStore()
    assert store.get("token") is None
    store.set("token", "abc")
    assert store.get("token") == "abc"
    store.remove("token")
    store.remove("token")  # absent key is fine
    assert store.get("token") is None


def test_json_file_store_persists_across_instances(tmp_path):
    path = tmp_path / "nested" / "session.json"
    JsonFileStore(path).set("token", "T1")

    assert json.loads(path.read_text(encoding="utf-8")) == {"token": "T1"}
    assert JsonFileStore(path).get("token") == "T1"


def test_json_file_store_remove_rewrites_file(tmp_path):
    path = tmp_path / "session.json"
    store = JsonFileStore(path)
    store.set("token", "T1")
    store.set("other", "x")
    store.remove("token")

    assert JsonFileStore(path).get("token") is None
    assert JsonFileStore(path).get("other") == "x"


def test_json_file_store_encrypted_at_rest(tmp_path):
    key = Fernet.generate_key()
    path = tmp_path / "session.bin"
    JsonFileStore(path, fernet_key=key).set("token", "secret-token")

    raw = path.read_bytes()
    assert b"secret-token" not in raw
    assert JsonFileStore(path, fernet_key=key.decode("utf-8")).get("token") == "secret-token"


def test_json_file_store_wrong_key_reads_empty(tmp_path):
    path = tmp_path / "session.bin"
    JsonFileStore(path, fernet_key=Fernet.generate_key()).set("token", "T1")

    store = JsonFileStore(path, fernet_key=Fernet.generate_key())
    assert store.get("token") is None


def test_json_file_store_corrupt_file_reads_empty(tmp_path):
    path = tmp_path / "session.json"
    path.write_text("{not json", encoding="utf-8")

    store = JsonFileStore(path)
    assert store.get("token") is None
    store.set("token", "T2")
    assert JsonFileStore(path).get("token") == "T2"


def test_json_file_store_unreadable_path_reads_empty(tmp_path):
    path = tmp_path / "session.json"
    path.mkdir()

    store = JsonFileStore(path)
    assert store.get("token") is None


def test_session_starts_unauthenticated_when_store_file_unreadable(tmp_path):
    path = tmp_path / "session.json"
    path.mkdir()

    session = SessionManager(BackendClient(client=FakeTodoBackend().client()), JsonFileStore(path), FakeNavigator())

    assert session.is_authenticated() is False
    assert session.authorization_headers() == {}
