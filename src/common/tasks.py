from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional, Protocol

from pydantic import BaseModel, Field

from .backend import BackendClient, error_message, is_success, read_json, read_json_lenient
from .errors import AuthError, error_for_status
from .lookup import TASK_ID_KEYS, TASK_TITLE_KEYS, first_present_str, resolve_identifier


logger = logging.getLogger(__name__)

UNTITLED = "Untitled"


class Task(BaseModel):
    """
    One to-do item as returned by the backend.

    Fields
    - id: backend identifier, resolved from the first present of
      `TASK_ID_KEYS` ("id", "_id", "taskId"). "" when none is present; that
      value is used as-is for later update/delete calls.
    - title: display string, resolved from `TASK_TITLE_KEYS` ("title", "name").
    - description: optional free text.
    - raw: the wire object exactly as received.
    """

    id: str = ""
    title: Optional[str] = None
    description: Optional[str] = None
    raw: Dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_wire(cls, obj: Any) -> "Task":
        data: Dict[str, Any] = dict(obj) if isinstance(obj, Mapping) else {}
        task_id = resolve_identifier(data, TASK_ID_KEYS)
        if not task_id:
            logger.warning("Task without a known identifier field (tried %s)", ", ".join(TASK_ID_KEYS))
        desc = data.get("description")
        return cls(
            id=task_id,
            title=first_present_str(data, TASK_TITLE_KEYS),
            description=desc if isinstance(desc, str) else None,
            raw=data,
        )

    @property
    def display_title(self) -> str:
        return self.title or UNTITLED


class AuthHeaderSource(Protocol):
    def authorization_headers(self) -> Dict[str, str]: ...

    def logout(self) -> None: ...


class TaskRepository:
    """
    CRUD calls against `/tasks`, with the session's Authorization header on each.

    - Non-success statuses raise `RemoteError` (or the `ValidationError` /
      `AuthError` subclasses).
    - Only `fetch_all` logs the session out on an authorization failure;
      the row-level mutations leave the session alone.
    """

    def __init__(self, backend: BackendClient, session: AuthHeaderSource) -> None:
        self._backend = backend
        self._session = session

    # --------------- Public API ---------------
    def fetch_all(self) -> List[Task]:
        resp = self._backend.request("GET", "/tasks", headers=self._session.authorization_headers())
        if not is_success(resp):
            payload = read_json_lenient(resp)
            err = error_for_status(resp.status_code, error_message(payload, "Failed to fetch tasks"), payload)
            if isinstance(err, AuthError):
                logger.info("Task list rejected with %s; logging out", resp.status_code)
                self._session.logout()
            raise err

        data = read_json(resp)
        if not isinstance(data, list):
            logger.warning("Task list payload is %s, not a list; treating as empty", type(data).__name__)
            return []
        tasks: List[Task] = []
        for item in data:
            if not isinstance(item, Mapping):
                logger.warning("Skipping non-object task entry: %r", item)
                continue
            tasks.append(Task.from_wire(item))
        return tasks

    def create(self, title: str, description: Optional[str] = None) -> Task:
        body = {"title": title, "description": description}
        data = self._send("POST", "/tasks", body, "Failed to create task")
        return Task.from_wire(data)

    def update(self, task_id: str, patch: Mapping[str, Any]) -> Task:
        """Replace the task addressed by `task_id` with the fields in `patch`."""
        data = self._send("PUT", self._task_path(task_id), dict(patch), "Failed to update task")
        return Task.from_wire(data)

    def delete(self, task_id: str) -> None:
        resp = self._backend.request(
            "DELETE", self._task_path(task_id), headers=self._session.authorization_headers()
        )
        if is_success(resp):
            return None
        # Error bodies may be empty or plain text
        payload = read_json_lenient(resp)
        raise error_for_status(resp.status_code, error_message(payload, "Failed to delete task"), payload)

    # --------------- Internal ---------------
    @staticmethod
    def _task_path(task_id: str) -> str:
        # Used verbatim; an empty id addresses "/tasks/"
        return f"/tasks/{task_id}"

    def _send(self, method: str, path: str, body: Dict[str, Any], default_error: str) -> Any:
        resp = self._backend.request(method, path, json=body, headers=self._session.authorization_headers())
        if not is_success(resp):
            payload = read_json_lenient(resp)
            raise error_for_status(resp.status_code, error_message(payload, default_error), payload)
        return read_json(resp)


__all__ = ["Task", "TaskRepository", "UNTITLED"]
