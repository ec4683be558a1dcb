from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

from pydantic import BaseModel, Field

from common.lookup import USER_ID_KEYS, first_present, resolve_identifier


class UserRecord(BaseModel):
    """
    Account record returned by the registration endpoint.

    The backend decides the shape; known fields are lifted out when present
    and the whole object is kept in `raw`.
    """

    id: Optional[str] = None
    email: Optional[str] = None
    name: Optional[str] = None
    raw: Dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_wire(cls, obj: Any) -> "UserRecord":
        data: Dict[str, Any] = dict(obj) if isinstance(obj, Mapping) else {}
        email = first_present(data, ("email",))
        name = first_present(data, ("name",))
        return cls(
            id=resolve_identifier(data, USER_ID_KEYS) or None,
            email=email if isinstance(email, str) else None,
            name=name if isinstance(name, str) else None,
            raw=data,
        )
