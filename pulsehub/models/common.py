"""Helpers shared by the record models."""

import uuid
from datetime import datetime
from enum import Enum
from typing import Optional, Type, TypeVar

E = TypeVar('E', bound=Enum)


def new_id() -> str:
    """Generate a record identifier."""
    return uuid.uuid4().hex


def format_datetime(value: Optional[datetime]) -> Optional[str]:
    """ISO 8601 text for a datetime, None passes through."""
    return value.isoformat() if value is not None else None


def parse_datetime(value: Optional[str]) -> Optional[datetime]:
    """Inverse of format_datetime."""
    return datetime.fromisoformat(value) if value else None


def parse_enum(enum_cls: Type[E], value: str) -> E:
    """Look up an enum member by its stored value."""
    try:
        return enum_cls(value)
    except ValueError:
        raise ValueError(f"Unknown {enum_cls.__name__} value: {value!r}") from None


def pluralize_days(count: int) -> str:
    """Render a day count, e.g. ``1 day`` or ``3 days``."""
    return f"{count} day" if count == 1 else f"{count} days"
