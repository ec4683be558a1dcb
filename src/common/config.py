from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .backend import DEFAULT_BASE_URL


# Environment configuration; every variable is optional
ENV_API_BASE = "TODO_API_BASE"
ENV_STORE_PATH = "TODO_STORE_PATH"
ENV_FERNET_KEY = "TODO_FERNET_KEY"
ENV_HTTP_TIMEOUT = "TODO_HTTP_TIMEOUT"
ENV_LOG_LEVEL = "TODO_LOG_LEVEL"

DEFAULT_STORE_PATH = Path(".local") / "todo" / "session.json"


def _getenv(name: str, default: Optional[str] = None) -> Optional[str]:
    v = os.environ.get(name)
    return v if v not in (None, "") else default


def _getenv_float(name: str) -> Optional[float]:
    raw = _getenv(name)
    if raw is None:
        return None
    try:
        return float(raw)
    except ValueError as exc:
        raise RuntimeError(f"Invalid value for {name}: {raw!r}") from exc


@dataclass(frozen=True)
class Settings:
    """
    Client configuration.

    - api_base: backend base address; all paths are relative to it.
    - store_path: file backing the durable session store.
    - fernet_key: when set, the session file is encrypted at rest.
    - http_timeout: seconds; None means no client-side timeout.
    - log_level: level name passed to `setup_logging`.
    """

    api_base: str = DEFAULT_BASE_URL
    store_path: Path = DEFAULT_STORE_PATH
    fernet_key: Optional[str] = None
    http_timeout: Optional[float] = None
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        store_raw = _getenv(ENV_STORE_PATH)
        return cls(
            api_base=_getenv(ENV_API_BASE, DEFAULT_BASE_URL) or DEFAULT_BASE_URL,
            store_path=Path(store_raw).expanduser() if store_raw else DEFAULT_STORE_PATH,
            fernet_key=_getenv(ENV_FERNET_KEY),
            http_timeout=_getenv_float(ENV_HTTP_TIMEOUT),
            log_level=(_getenv(ENV_LOG_LEVEL, "INFO") or "INFO").upper(),
        )


__all__ = ["Settings", "DEFAULT_STORE_PATH"]
