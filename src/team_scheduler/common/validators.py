from __future__ import annotations

from enum import Enum
from typing import Optional, Type, TypeVar

from ..core.exceptions import ValidationError

E = TypeVar("E", bound=Enum)


def require_non_empty(value: str, field_name: str) -> str:
    if value is None or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def optional_text(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def require_enum(value, enum_cls: Type[E], field_name: str) -> E:
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(m.value for m in enum_cls)
        raise ValidationError(f"{field_name} must be one of: {allowed}")


def require_email(value: str, field_name: str = "Email") -> str:
    value = require_non_empty(value, field_name)
    if "@" not in value or value.startswith("@") or value.endswith("@"):
        raise ValidationError(f"{field_name} is not a valid address")
    return value


def matches_search(search: Optional[str], *fields: Optional[str]) -> bool:
    """Case-insensitive substring match across the given fields."""
    if not search:
        return True
    needle = search.lower()
    return any(f and needle in f.lower() for f in fields)


def optional_bool(value, field_name: str, default: bool) -> bool:
    """Accept only JSON booleans; None means the default."""
    if value is None:
        return default
    if not isinstance(value, bool):
        raise ValidationError(f"{field_name} must be true or false")
    return value
