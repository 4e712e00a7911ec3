from __future__ import annotations

from enum import Enum
from typing import Optional, TypeVar

from ..core.exceptions import ValidationError

E = TypeVar("E", bound=Enum)


def require_non_empty(value: object, field_name: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def optional_text(value: object, field_name: str) -> Optional[str]:
    """Stripped text, or None for missing/blank values; non-text is rejected."""
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationError(f"{field_name} must be text")
    return value.strip() or None


def require_email(value: object, field_name: str = "Email") -> str:
    value = require_non_empty(value, field_name)
    local, _, domain = value.partition("@")
    if not local or not domain:
        raise ValidationError(f"{field_name} is not a valid email address")
    return value


def require_choice(enum_type: type[E], value: object, field_name: str) -> E:
    try:
        return enum_type(value)
    except ValueError:
        allowed = ", ".join(str(m.value) for m in enum_type)
        raise ValidationError(f"{field_name} must be one of: {allowed}") from None
