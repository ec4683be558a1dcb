from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional, Sequence

import httpx

from .errors import RemoteError, TransportError
from .lookup import ERROR_MESSAGE_KEYS, first_present_str


DEFAULT_BASE_URL = "http://127.0.0.1:8005"

logger = logging.getLogger(__name__)


class BackendClient:
    """
    Thin JSON-over-HTTP transport for the to-do backend.

    Notes
    - Every request carries `Content-Type: application/json`; callers merge in
      per-request headers (e.g. the session's Authorization header).
    - No retries: transport failures surface immediately as `TransportError`.
    - `timeout=None` disables the client-side timeout, so a silent backend
      blocks the caller until the connection fails.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        *,
        timeout: Optional[float] = None,
        client: Optional[httpx.Client] = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._owns_client = client is None
        self._client = client or httpx.Client(base_url=self._base_url, timeout=self._timeout)

    @property
    def base_url(self) -> str:
        return self._base_url

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> "BackendClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    # --------------- Public API ---------------
    def request(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> httpx.Response:
        merged: Dict[str, str] = {"Content-Type": "application/json"}
        if headers:
            merged.update(headers)
        url = f"{self._base_url}{path}"
        kwargs: Dict[str, Any] = {"headers": merged}
        if json is not None:
            kwargs["json"] = json
        try:
            resp = self._client.request(method, url, **kwargs)
        except httpx.RequestError as exc:
            logger.warning("%s %s failed before a response: %s", method, path, exc)
            raise TransportError(f"{method} {path} failed: {exc}") from exc
        logger.debug("%s %s -> %s", method, path, resp.status_code)
        return resp


def is_success(resp: httpx.Response) -> bool:
    return 200 <= resp.status_code < 300


def read_json(resp: httpx.Response) -> Any:
    """Parse a response body as JSON, raising `RemoteError` when it is not JSON."""
    try:
        return resp.json()
    except ValueError as exc:
        raise RemoteError(
            "Malformed JSON from backend",
            status_code=resp.status_code,
        ) from exc


def read_json_lenient(resp: httpx.Response) -> Any:
    """Parse a response body as JSON; an unparseable body becomes `{}`."""
    try:
        return resp.json()
    except ValueError:
        return {}


def error_message(payload: Any, default: str, keys: Sequence[str] = ERROR_MESSAGE_KEYS) -> str:
    """Pick the backend-provided message out of an error payload.

    Only `message` is read by default; login also accepts `detail` first.
    """
    return first_present_str(payload, keys, default) or default


__all__ = [
    "BackendClient",
    "DEFAULT_BASE_URL",
    "is_success",
    "read_json",
    "read_json_lenient",
    "error_message",
]
