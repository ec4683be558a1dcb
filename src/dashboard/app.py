from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import httpx

from common.backend import BackendClient
from common.config import Settings
from common.logging_setup import setup_logging
from common.tasks import TaskRepository
from state.session import Navigator, SessionManager
from state.store import JsonFileStore, KeyValueStore

from .synchronizer import InteractionProvider, ListSynchronizer, ListView


@dataclass
class TodoApp:
    backend: BackendClient
    session: SessionManager
    repository: TaskRepository
    synchronizer: ListSynchronizer

    def close(self) -> None:
        self.backend.close()

    def __enter__(self) -> "TodoApp":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


def build_app(
    settings: Settings,
    *,
    navigator: Navigator,
    view: ListView,
    interaction: InteractionProvider,
    store: Optional[KeyValueStore] = None,
    client: Optional[httpx.Client] = None,
) -> TodoApp:
    """
    Wire session manager, task repository and list synchronizer from settings.

    `store` defaults to a `JsonFileStore` at `settings.store_path` (encrypted
    when `settings.fernet_key` is set). `client` is passed to the backend
    transport, mainly for tests.
    """
    backend = BackendClient(settings.api_base, timeout=settings.http_timeout, client=client)
    kv = store if store is not None else JsonFileStore(settings.store_path, fernet_key=settings.fernet_key)
    session = SessionManager(backend, kv, navigator)
    repository = TaskRepository(backend, session)
    synchronizer = ListSynchronizer(repository, session, view, interaction)
    return TodoApp(backend=backend, session=session, repository=repository, synchronizer=synchronizer)


def open_app(
    *,
    navigator: Navigator,
    view: ListView,
    interaction: InteractionProvider,
) -> TodoApp:
    """Build the app from environment settings, configuring logging first."""
    settings = Settings.from_env()
    setup_logging(settings.log_level)
    return build_app(settings, navigator=navigator, view=view, interaction=interaction)


__all__ = ["TodoApp", "build_app", "open_app"]
