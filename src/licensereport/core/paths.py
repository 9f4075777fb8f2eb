"""Safe navigation over loosely-typed JSON documents.

Application documents arrive with optional, deeply-nested fields whose shape
is not guaranteed. Every accessor here walks a dotted path and returns the
caller's default when any segment is missing, ``None``, or of the wrong type.
None of them raise.
"""

from __future__ import annotations

from datetime import date, datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Any

_MISSING = object()


def resolve(doc: Any, path: str, default: Any = None) -> Any:
    """Walk a dotted *path* through nested dicts (and lists, by integer index).

    >>> resolve({"service": {"natureOfService": {"type": "CV (Private)"}}},
    ...         "service.natureOfService.type")
    'CV (Private)'
    """
    current: Any = doc
    for part in path.split("."):
        if isinstance(current, dict):
            current = current.get(part, _MISSING)
        elif isinstance(current, list) and part.isdigit():
            index = int(part)
            current = current[index] if index < len(current) else _MISSING
        else:
            return default
        if current is _MISSING or current is None:
            return default
    return current


def as_str(value: Any, default: str = "") -> str:
    if isinstance(value, str):
        return value
    # Numeric scalars are rendered the way the source documents print them.
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return default


def as_int(value: Any, default: int = 0) -> int:
    if isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else default
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return default
    return default


def as_decimal(value: Any, default: Decimal | None = None) -> Decimal:
    fallback = Decimal("0") if default is None else default
    if isinstance(value, bool) or not isinstance(value, (int, float, str, Decimal)):
        return fallback
    try:
        result = Decimal(str(value).strip())
    except InvalidOperation:
        return fallback
    return result if result.is_finite() else fallback


def as_datetime(value: Any) -> datetime | None:
    """Coerce an ISO-8601 string (or ``{"$date": ...}`` wrapper) to an aware UTC datetime."""
    if isinstance(value, dict):
        value = value.get("$date")
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str) and value.strip():
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
    else:
        return None
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def as_date(value: Any) -> date | None:
    """Parse a date or datetime string down to its calendar date."""
    if isinstance(value, date) and not isinstance(value, datetime):
        return value
    parsed = as_datetime(value)
    if parsed is not None:
        return parsed.date()
    if isinstance(value, str):
        try:
            return date.fromisoformat(value.strip())
        except ValueError:
            return None
    return None


def get_str(doc: Any, path: str, default: str = "") -> str:
    return as_str(resolve(doc, path), default)


def get_int(doc: Any, path: str, default: int = 0) -> int:
    return as_int(resolve(doc, path), default)


def get_decimal(doc: Any, path: str, default: Decimal | None = None) -> Decimal:
    return as_decimal(resolve(doc, path), default)


def get_datetime(doc: Any, path: str) -> datetime | None:
    return as_datetime(resolve(doc, path))


def get_list(doc: Any, path: str) -> list[Any]:
    value = resolve(doc, path)
    return value if isinstance(value, list) else []


def get_dict(doc: Any, path: str) -> dict[str, Any]:
    value = resolve(doc, path)
    return value if isinstance(value, dict) else {}
