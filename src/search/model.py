"""User record stored in the demo index and its JSON wire format."""

from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional

# attribute name -> wire key
WIRE_KEYS: Dict[str, str] = {
    "user_id": "id",
    "email": "email",
    "first_name": "firstname",
    "last_name": "lastname",
    "age": "age",
    "is_active": "isActive",
    "balance": "balance",
    "phone": "phone",
    "user_type": "user_type",
    "creation_date": "creation_date",
}


def _parse_datetime(value: Any) -> Optional[datetime]:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    if not isinstance(value, str):
        raise TypeError(f"creation_date must be a string, got {type(value).__name__}")
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    return datetime.fromisoformat(value)


def _to_utc(value: datetime) -> datetime:
    """Convert to UTC; naive values are taken to already be UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _typed(data: Dict[str, Any], key: str, kind: type, default: Any) -> Any:
    value = data.get(key)
    if value is None:
        return default
    # bool is an int subclass; keep numeric and flag fields apart
    if kind is int and isinstance(value, bool):
        raise TypeError(f"'{key}' must be int, got bool")
    if not isinstance(value, kind):
        raise TypeError(f"'{key}' must be {kind.__name__}, got {type(value).__name__}")
    return value


@dataclass
class User:
    """A single user document."""

    user_id: int = 0
    email: str = ""
    first_name: str = ""
    last_name: str = ""
    age: int = 0
    is_active: bool = False
    balance: int = 0
    phone: str = ""
    user_type: str = ""
    creation_date: Optional[datetime] = None

    def to_dict(self) -> Dict[str, Any]:
        doc: Dict[str, Any] = {}
        for attr, key in WIRE_KEYS.items():
            doc[key] = getattr(self, attr)
        if self.creation_date is not None:
            doc["creation_date"] = _to_utc(self.creation_date).isoformat()
        return doc

    @classmethod
    def from_dict(cls, data: Any) -> "User":
        if not isinstance(data, dict):
            raise ValueError(f"user document must be an object, got {type(data).__name__}")
        return cls(
            user_id=_typed(data, "id", int, 0),
            email=_typed(data, "email", str, ""),
            first_name=_typed(data, "firstname", str, ""),
            last_name=_typed(data, "lastname", str, ""),
            age=_typed(data, "age", int, 0),
            is_active=_typed(data, "isActive", bool, False),
            balance=_typed(data, "balance", int, 0),
            phone=_typed(data, "phone", str, ""),
            user_type=_typed(data, "user_type", str, ""),
            creation_date=_parse_datetime(data.get("creation_date")),
        )

    def to_string(self) -> str:
        """JSON with one field per line, used when printing results."""
        return json.dumps(self.to_dict(), indent=0, ensure_ascii=False)


def build_sample_users(count: int = 4, now: Optional[datetime] = None) -> List[User]:
    """Return ``count`` demo users with ids 1..count; odd ids are active."""

    base = _to_utc(now) if now is not None else datetime.now(timezone.utc)
    users: List[User] = []
    for index in range(1, count + 1):
        users.append(
            User(
                user_id=index,
                email=f"test{index}@gmail.com",
                first_name=f"FirstName_{index}",
                last_name=f"LastName_{index}",
                age=20 + index,
                is_active=index % 2 == 1,
                balance=index * 100,
                phone=f"+1-555-010{index % 10}",
                user_type="admin" if index == 1 else "regular",
                creation_date=base - timedelta(minutes=count - index),
            )
        )
    return users


__all__ = ["User", "WIRE_KEYS", "build_sample_users"]
