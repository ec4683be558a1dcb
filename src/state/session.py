from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Protocol

from common.backend import BackendClient, error_message, is_success, read_json, read_json_lenient
from common.errors import LoginError, RegistrationError, TokenMissingError
from common.lookup import LOGIN_ERROR_MESSAGE_KEYS, TOKEN_KEYS, first_present

from .models import UserRecord
from .store import KeyValueStore


logger = logging.getLogger(__name__)

TOKEN_KEY = "token"

LANDING_VIEW = "dashboard"
ENTRY_VIEW = "login"


def _extract_token(data: Any) -> Optional[str]:
    """Token from the first present of `TOKEN_KEYS`; numeric tokens are stringified."""
    for key in TOKEN_KEYS:
        val = first_present(data, (key,))
        if isinstance(val, str):
            return val
        if isinstance(val, (int, float)) and not isinstance(val, bool) and val:
            return str(val)
    return None


class Navigator(Protocol):
    def go(self, view: str) -> None: ...


class RecordingNavigator:
    """Navigator that records each destination instead of switching screens."""

    def __init__(self) -> None:
        self.history: List[str] = []

    @property
    def current(self) -> Optional[str]:
        return self.history[-1] if self.history else None

    def go(self, view: str) -> None:
        logger.info("Navigating to %s", view)
        self.history.append(view)


class SessionManager:
    """
    Owns the bearer token: its persistence and the headers derived from it.

    Lifecycle
    - Construction reads the token from the store once.
    - `login` writes it; `logout` removes it. The in-memory copy and the store
      are only ever changed together.
    - No expiry is tracked: the token is valid until the backend says otherwise.
    """

    def __init__(self, backend: BackendClient, store: KeyValueStore, navigator: Navigator) -> None:
        self._backend = backend
        self._store = store
        self._navigator = navigator
        self._token: Optional[str] = store.get(TOKEN_KEY) or None

    @property
    def token(self) -> Optional[str]:
        return self._token

    # --------------- Public API ---------------
    def register(self, email: str, password: str, name: str) -> UserRecord:
        resp = self._backend.request(
            "POST", "/auth/register", json={"email": email, "password": password, "name": name}
        )
        if not is_success(resp):
            payload = read_json_lenient(resp)
            raise RegistrationError(
                error_message(payload, "Registration failed"),
                status_code=resp.status_code,
                payload=payload,
            )
        return UserRecord.from_wire(read_json(resp))

    def login(self, email: str, password: str) -> None:
        resp = self._backend.request("POST", "/auth/login", json={"email": email, "password": password})
        if not is_success(resp):
            payload = read_json_lenient(resp)
            raise LoginError(
                error_message(payload, "Login failed", LOGIN_ERROR_MESSAGE_KEYS),
                status_code=resp.status_code,
                payload=payload,
            )

        data = read_json(resp)
        token = _extract_token(data)
        if token is None:
            raise TokenMissingError(
                "Token not received",
                status_code=resp.status_code,
                payload=data,
            )

        self._store.set(TOKEN_KEY, token)
        self._token = token
        logger.info("Logged in as %s", email)
        self._navigator.go(LANDING_VIEW)

    def register_and_login(self, email: str, password: str, name: str) -> UserRecord:
        """Register a new account, then log straight into it."""
        user = self.register(email, password, name)
        self.login(email, password)
        return user

    def logout(self) -> None:
        if self._token is not None:
            logger.info("Logging out")
        self._store.remove(TOKEN_KEY)
        self._token = None
        self._navigator.go(ENTRY_VIEW)

    def is_authenticated(self) -> bool:
        return self._token is not None

    def authorization_headers(self) -> Dict[str, str]:
        if self._token is None:
            return {}
        return {"Authorization": f"Bearer {self._token}"}


__all__ = [
    "SessionManager",
    "Navigator",
    "RecordingNavigator",
    "TOKEN_KEY",
    "LANDING_VIEW",
    "ENTRY_VIEW",
]
