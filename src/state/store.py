from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Dict, Optional, Protocol

from cryptography.fernet import Fernet, InvalidToken


logger = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    """Durable string key-value storage (the client's local storage)."""

    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...

    def remove(self, key: str) -> None: ...


def _to_fernet(key: str | bytes) -> Fernet:
    """Construct a Fernet instance from a user-provided key.

    The key must be a URL-safe base64-encoded 32-byte key (str or bytes),
    as returned by `cryptography.fernet.Fernet.generate_key()`.
    """
    if isinstance(key, str):
        key_bytes = key.encode("utf-8")
    else:
        key_bytes = key
    return Fernet(key_bytes)


class MemoryStore:
    """Process-local store; nothing survives the process."""

    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)


class JsonFileStore:
    """
    Single JSON object on disk, optionally encrypted at rest with Fernet.

    - Missing file reads as empty.
    - A file that cannot be decrypted or parsed also reads as empty (logged at
      WARNING); the next write replaces it.
    - Every mutation rewrites the whole file.
    """

    def __init__(self, path: os.PathLike[str] | str, *, fernet_key: Optional[str | bytes] = None) -> None:
        self._path = Path(path)
        self._fernet = _to_fernet(fernet_key) if fernet_key else None
        self._data: Dict[str, str] = {}
        self._loaded = False

    @property
    def path(self) -> Path:
        return self._path

    def get(self, key: str) -> Optional[str]:
        self._ensure_loaded()
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._ensure_loaded()
        self._data[key] = value
        self._save()

    def remove(self, key: str) -> None:
        self._ensure_loaded()
        if key in self._data:
            del self._data[key]
            self._save()

    # -------- Internal --------
    def _ensure_loaded(self) -> None:
        if self._loaded:
            return
        self._loaded = True
        if not self._path.exists():
            return
        try:
            body = self._path.read_bytes()
        except OSError as exc:
            logger.warning("Cannot read %s (%s); starting with an empty store", self._path, exc)
            return
        if self._fernet is not None:
            try:
                body = self._fernet.decrypt(body)
            except InvalidToken:
                logger.warning("Cannot decrypt %s; starting with an empty store", self._path)
                return
        try:
            raw = json.loads(body.decode("utf-8"))
        except ValueError:
            logger.warning("Corrupt store file %s; starting with an empty store", self._path)
            return
        if isinstance(raw, dict):
            self._data = {str(k): v for k, v in raw.items() if isinstance(v, str)}

    def _save(self) -> None:
        # Deterministic JSON: stable key order, no extra whitespace
        payload = json.dumps(self._data, separators=(",", ":"), sort_keys=True).encode("utf-8")
        if self._fernet is not None:
            payload = self._fernet.encrypt(payload)
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_bytes(payload)


__all__ = ["KeyValueStore", "MemoryStore", "JsonFileStore"]
