"""Small helpers: identifiers, record conversion and integer parsing."""

from __future__ import annotations

import dataclasses
import re
import uuid
from typing import Any

_INT_PATTERN = re.compile(r"[+-]?[0-9]+")
_INT64_MIN = -(1 << 63)
_INT64_MAX = (1 << 63) - 1


def new_uuid() -> str:
    """Return a new random (version 4) UUID in canonical text form."""
    return str(uuid.uuid4())


def struct_to_map(obj: Any) -> dict[str, Any]:
    """Convert a dataclass record (recursively) into a dictionary."""
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return dataclasses.asdict(obj)
    raise TypeError(f"not a record: {type(obj).__name__}")


def string_to_int(s: str) -> int:
    """Parse a base-10 signed 64-bit integer, strictly."""
    if not _INT_PATTERN.fullmatch(s):
        raise ValueError(f"invalid syntax: {s!r}")
    value = int(s)
    if not _INT64_MIN <= value <= _INT64_MAX:
        raise ValueError(f"value out of range: {s!r}")
    return value