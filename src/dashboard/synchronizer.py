from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional, Protocol, Sequence, Tuple, Union

from common.errors import AuthError, TodoClientError
from common.tasks import Task, TaskRepository
from state.session import SessionManager


logger = logging.getLogger(__name__)

EDIT_TITLE_PROMPT = "Edit title"
EDIT_DESCRIPTION_PROMPT = "Edit description"
DELETE_CONFIRMATION = "Delete this task?"


@dataclass(frozen=True)
class Loading:
    pass


@dataclass(frozen=True)
class Populated:
    tasks: Tuple[Task, ...] = ()


@dataclass(frozen=True)
class Failed:
    message: str


SyncState = Union[Loading, Populated, Failed]


@dataclass(frozen=True)
class TaskRow:
    """One rendered task with its edit/delete actions bound."""

    task: Task
    edit: Callable[[], None]
    delete: Callable[[], None]


class ListView(Protocol):
    def show_loading(self) -> None: ...

    def show_empty(self) -> None: ...

    def show_error(self, message: str) -> None: ...

    def show_rows(self, rows: Sequence[TaskRow]) -> None: ...


class InteractionProvider(Protocol):
    def prompt(self, message: str, default: str = "") -> Optional[str]:
        """Ask for a line of text; None when the user cancels."""
        ...

    def confirm(self, message: str) -> bool: ...

    def alert(self, message: str) -> None: ...


class ListSynchronizer:
    """
    Keeps the task list view equal to the last successful fetch.

    Every refresh replaces the whole rendering; mutations are always followed
    by a full refresh rather than a local patch. Row actions that fail alert
    the user and leave the current state as it was.
    """

    def __init__(
        self,
        repository: TaskRepository,
        session: SessionManager,
        view: ListView,
        interaction: InteractionProvider,
    ) -> None:
        self._repository = repository
        self._session = session
        self._view = view
        self._interaction = interaction
        self._state: SyncState = Loading()

    @property
    def state(self) -> SyncState:
        return self._state

    def refresh(self) -> SyncState:
        self._state = Loading()
        self._view.show_loading()

        try:
            tasks = self._repository.fetch_all()
        except TodoClientError as exc:
            message = str(exc) or "Request failed"
            self._state = Failed(message)
            self._view.show_error(message)
            if isinstance(exc, AuthError) and self._session.is_authenticated():
                self._session.logout()
            logger.warning("Task list refresh failed: %s", message)
            return self._state

        self._state = Populated(tuple(tasks))
        if not tasks:
            self._view.show_empty()
        else:
            self._view.show_rows([self._row(t) for t in tasks])
        return self._state

    def edit(self, task: Task) -> None:
        new_title = self._interaction.prompt(EDIT_TITLE_PROMPT, task.title or "")
        if new_title is None:
            return
        # A cancelled description prompt is sent as null
        new_description = self._interaction.prompt(EDIT_DESCRIPTION_PROMPT, task.description or "")

        try:
            self._repository.update(task.id, {"title": new_title, "description": new_description})
        except TodoClientError as exc:
            self._interaction.alert(str(exc) or "Failed to edit task")
            return
        self.refresh()

    def delete(self, task: Task) -> None:
        if not self._interaction.confirm(DELETE_CONFIRMATION):
            return

        try:
            self._repository.delete(task.id)
        except TodoClientError as exc:
            self._interaction.alert(str(exc) or "Failed to delete task")
            return
        self.refresh()

    def _row(self, task: Task) -> TaskRow:
        return TaskRow(task=task, edit=lambda: self.edit(task), delete=lambda: self.delete(task))


__all__ = [
    "ListSynchronizer",
    "ListView",
    "InteractionProvider",
    "TaskRow",
    "Loading",
    "Populated",
    "Failed",
    "SyncState",
]
