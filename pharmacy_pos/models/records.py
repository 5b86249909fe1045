"""Plain-dict form of lines and documents, as handed to the persistence layer."""

from __future__ import annotations

from dataclasses import fields, is_dataclass
from typing import Any, Dict

from pharmacy_pos.models.values import Blank, Numeric


def _plain(value: Any) -> Any:
    if isinstance(value, Blank):
        return ""
    if isinstance(value, Numeric):
        return value.value
    if is_dataclass(value):
        return to_record(value)
    if isinstance(value, (list, tuple)):
        return [_plain(v) for v in value]
    return value


def to_record(obj: Any) -> Dict[str, Any]:
    """Return a dict with the dataclass' field names; BLANK becomes ``""``."""
    return {f.name: _plain(getattr(obj, f.name)) for f in fields(obj)}
