from __future__ import annotations

from typing import Any, Mapping, Optional, Sequence


# Ordered candidate wire names. The backend contract is loose, so each logical
# field is resolved from the first present candidate, in this order.
TOKEN_KEYS = ("access_token", "token", "accessToken")
TASK_ID_KEYS = ("id", "_id", "taskId")
USER_ID_KEYS = ("id", "_id", "userId")
TASK_TITLE_KEYS = ("title", "name")
ERROR_MESSAGE_KEYS = ("message",)
LOGIN_ERROR_MESSAGE_KEYS = ("detail", "message")


def _is_present(value: Any) -> bool:
    # None and "" never win over a later candidate; 0/False do
    return value is not None and value != ""


def first_present(
    payload: Any,
    candidates: Sequence[str],
    default: Optional[Any] = None,
) -> Any:
    """Return the value of the first present key in `candidates`.

    - `payload` that is not a mapping yields `default`.
    - A key is present when it exists and its value is neither None nor "".
    """
    if not isinstance(payload, Mapping):
        return default
    for key in candidates:
        if key in payload and _is_present(payload[key]):
            return payload[key]
    return default


def first_present_str(
    payload: Any,
    candidates: Sequence[str],
    default: Optional[str] = None,
) -> Optional[str]:
    """Like `first_present`, but only string values qualify."""
    if not isinstance(payload, Mapping):
        return default
    for key in candidates:
        val = payload.get(key)
        if isinstance(val, str) and val != "":
            return val
    return default


def resolve_identifier(payload: Mapping[str, Any], candidates: Sequence[str] = TASK_ID_KEYS) -> str:
    """Resolve a backend identifier as a string.

    Missing identifiers resolve to "" rather than raising; callers treat that as
    a data-quality condition and use it verbatim.
    """
    val = first_present(payload, candidates)
    if val is None:
        return ""
    return str(val)


__all__ = [
    "TOKEN_KEYS",
    "TASK_ID_KEYS",
    "USER_ID_KEYS",
    "TASK_TITLE_KEYS",
    "ERROR_MESSAGE_KEYS",
    "LOGIN_ERROR_MESSAGE_KEYS",
    "first_present",
    "first_present_str",
    "resolve_identifier",
]
