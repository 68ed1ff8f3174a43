from __future__ import annotations

import math
import re
import uuid
from enum import Enum
from typing import Any, Optional, Type, TypeVar

from ..core.exceptions import ValidationError

E = TypeVar("E", bound=Enum)

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def require_non_empty(value: Any, field_name: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_string(value: Any, field_name: str) -> str:
    if not isinstance(value, str):
        raise ValidationError(f"{field_name} must be a string")
    return value


def require_email(value: Any, field_name: str) -> str:
    value = require_non_empty(value, field_name)
    if not _EMAIL_RE.match(value):
        raise ValidationError(f"{field_name} must be a valid email")
    return value


def require_uuid(value: Any, field_name: str) -> str:
    if not isinstance(value, str):
        raise ValidationError(f"{field_name} must be a valid id")
    try:
        uuid.UUID(value)
    except ValueError:
        raise ValidationError(f"{field_name} must be a valid id") from None
    return value


def require_int_range(value: Any, field_name: str, *, min_value: int, max_value: Optional[int] = None) -> int:
    # bool is an int subclass; JSON true/false is never a valid count.
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValidationError(f"{field_name} must be a whole number")
    if not math.isfinite(value) or int(value) != value:
        raise ValidationError(f"{field_name} must be a whole number")
    value = int(value)
    if value < min_value or (max_value is not None and value > max_value):
        bounds = f"{min_value}..{max_value}" if max_value is not None else f">= {min_value}"
        raise ValidationError(f"{field_name} must be in range {bounds}")
    return value


def require_non_negative_number(value: Any, field_name: str) -> float:
    if isinstance(value, bool):
        raise ValidationError(f"{field_name} must be a number")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a number") from None
    if not math.isfinite(number) or number < 0:
        raise ValidationError(f"{field_name} must be a non-negative number")
    return number


def require_choice(value: Any, enum_cls: Type[E], field_name: str) -> E:
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(str(m.value) for m in enum_cls)
        raise ValidationError(f"Invalid {field_name}. Must be one of: {allowed}") from None


def optional_choice(value: Any, enum_cls: Type[E], field_name: str) -> Optional[E]:
    if value is None or value == "":
        return None
    return require_choice(value, enum_cls, field_name)


def require_string_list(value: Any, field_name: str) -> list[str]:
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ValidationError(f"{field_name} must be a list of strings")
    return list(value)
