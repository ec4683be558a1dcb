from __future__ import annotations

import io
import logging
from pathlib import Path

import pytest
from cryptography.fernet import Fernet

from common.backend import DEFAULT_BASE_URL
from common.config import DEFAULT_STORE_PATH, Settings
from common.logging_setup import setup_logging
from dashboard.app import build_app, open_app
from dashboard.console import EMPTY_TEXT, LOADING_TEXT, ConsoleInteraction, ConsoleListView
from dashboard.synchronizer import Populated
from state.session import LANDING_VIEW, TOKEN_KEY
from state.store import JsonFileStore

from fakes import FakeInteraction, FakeNavigator, FakeTodoBackend


def test_settings_defaults(monkeypatch: pytest.MonkeyPatch):
    for name in ("TODO_API_BASE", "TODO_STORE_PATH", "TODO_FERNET_KEY", "TODO_HTTP_TIMEOUT", "TODO_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)

    s = Settings.from_env()

    assert s.api_base == DEFAULT_BASE_URL == "http://127.0.0.1:8005"
    assert s.store_path == DEFAULT_STORE_PATH
    assert s.fernet_key is None
    assert s.http_timeout is None
    assert s.log_level == "INFO"


def test_settings_from_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
    monkeypatch.setenv("TODO_API_BASE", "http://api.local:9000/")
    monkeypatch.setenv("TODO_STORE_PATH", str(tmp_path / "s.json"))
    monkeypatch.setenv("TODO_HTTP_TIMEOUT", "2.5")
    monkeypatch.setenv("TODO_LOG_LEVEL", "debug")

    s = Settings.from_env()

    assert s.api_base == "http://api.local:9000/"
    assert s.store_path == tmp_path / "s.json"
    assert s.http_timeout == 2.5
    assert s.log_level == "DEBUG"


def test_settings_invalid_timeout(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("TODO_HTTP_TIMEOUT", "soon")
    with pytest.raises(RuntimeError, match="TODO_HTTP_TIMEOUT"):
        Settings.from_env()


def test_setup_logging_replaces_handlers_and_quiets_httpx():
    setup_logging("DEBUG")
    setup_logging(logging.INFO)

    root = logging.getLogger()
    assert len(root.handlers) == 1
    assert root.level == logging.INFO
    assert logging.getLogger("httpx").level == logging.WARNING


def test_build_app_end_to_end_with_encrypted_store(tmp_path: Path):
    fake = FakeTodoBackend()
    key = Fernet.generate_key().decode("utf-8")
    settings = Settings(store_path=tmp_path / "session.bin", fernet_key=key)
    nav = FakeNavigator()
    out = io.StringIO()

    with build_app(
        settings,
        navigator=nav,
        view=ConsoleListView(out),
        interaction=FakeInteraction(),
        client=fake.client(),
    ) as app:
        app.session.login("a@x.com", "p")
        app.repository.create("Buy milk")
        state = app.synchronizer.refresh()

    assert nav.history == [LANDING_VIEW]
    assert isinstance(state, Populated)
    assert [t.title for t in state.tasks] == ["Buy milk"]
    assert out.getvalue().splitlines() == [LOADING_TEXT, "1. Buy milk"]
    assert JsonFileStore(settings.store_path, fernet_key=key).get(TOKEN_KEY) == "T1"


def test_open_app_reads_environment(monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
    path = tmp_path / "session.json"
    JsonFileStore(path).set(TOKEN_KEY, "T7")
    monkeypatch.setenv("TODO_STORE_PATH", str(path))
    for name in ("TODO_API_BASE", "TODO_FERNET_KEY", "TODO_HTTP_TIMEOUT"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("TODO_LOG_LEVEL", "WARNING")

    app = open_app(navigator=FakeNavigator(), view=ConsoleListView(io.StringIO()), interaction=FakeInteraction())
    try:
        assert app.session.token == "T7"
        assert app.backend.base_url == DEFAULT_BASE_URL
    finally:
        app.close()


def test_console_view_renders_states():
    out = io.StringIO()
    view = ConsoleListView(out)

    view.show_loading()
    view.show_empty()
    view.show_error("nope")

    assert out.getvalue().splitlines() == [LOADING_TEXT, EMPTY_TEXT, "Error: nope"]


def test_console_interaction_prompt_confirm_alert():
    answers = iter(["", "typed", "Y"])
    out = io.StringIO()
    ui = ConsoleInteraction(input_fn=lambda _msg: next(answers), stream=out)

    assert ui.prompt("Edit title", "keep") == "keep"
    assert ui.prompt("Edit title", "keep") == "typed"
    assert ui.confirm("Delete?") is True
    ui.alert("failed")
    assert out.getvalue() == "! failed\n"


def test_console_interaction_eof_cancels():
    def raise_eof(_msg: str) -> str:
        raise EOFError

    ui = ConsoleInteraction(input_fn=raise_eof, stream=io.StringIO())
    assert ui.prompt("Edit title", "x") is None
    assert ui.confirm("Delete?") is False
