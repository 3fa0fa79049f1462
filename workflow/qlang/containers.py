"""Container built-ins of the expression language: maps, slices and member access.

Lists play the part of slices, dictionaries the part of maps, and objects
take member assignment either through a ``set_var`` method or as attributes.
The :data:`UNDEFINED` marker stands for a missing value: reading a missing
map key yields it, and storing it into a map deletes the key.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Optional


class QlangPanic(Exception):
    """A built-in was called with arguments it cannot handle."""


class _Undefined:
    """The value of a missing map entry or member."""

    _instance: Optional["_Undefined"] = None

    def __new__(cls) -> "_Undefined":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "undefined"

    def __bool__(self) -> bool:
        return False


UNDEFINED = _Undefined()


def _kind(value: Any) -> Optional[str]:
    if isinstance(value, bool):
        return "bool"
    if isinstance(value, int):
        return "int"
    if isinstance(value, float):
        return "float"
    if isinstance(value, str):
        return "string"
    if isinstance(value, (list, tuple)):
        return "slice"
    if isinstance(value, dict):
        return "map"
    return None


def _common_kind(values: Sequence[Any]) -> Optional[str]:
    """Shared kind of ``values``; ints promote to float when floats are present."""
    kind = _kind(values[0])
    for value in values[1:]:
        other = _kind(value)
        if other == kind:
            continue
        if kind in ("int", "float") and other in ("int", "float"):
            if other == "float":
                kind = "float"
            continue
        return "invalid"
    return kind


def _as_int(value: Any) -> int:
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    raise QlangPanic(f"param `{value}` not a integer")


def panicf(fmt: str, *args: Any) -> None:
    """Raise :class:`QlangPanic` with ``fmt`` formatted by ``args`` (``%`` style)."""
    raise QlangPanic(fmt % args if args else fmt)


def map_from(*args: Any) -> dict[Any, Any]:
    """Build a map from ``key1, val1, key2, val2, ...``.

    Keys must all be strings or all be integers.  When every value is a
    number and at least one is a float, all values become floats.  When the
    values are of mixed kinds, :data:`UNDEFINED` values are left out.
    """
    if len(args) % 2:
        raise QlangPanic("please use `mapFrom(key1, val1, key2, val2, ...)`")
    if not args:
        return {}
    keys, values = args[0::2], args[1::2]
    key_kind = _common_kind(keys)
    if key_kind not in ("string", "int"):
        raise QlangPanic("mapFrom: key type only support `string`, `int` now")
    if key_kind == "int":
        keys = tuple(_as_int(key) for key in keys)
    value_kind = _common_kind(values)
    if value_kind == "float":
        return {key: float(value) for key, value in zip(keys, values)}
    if value_kind == "int":
        return {key: _as_int(value) for key, value in zip(keys, values)}
    if value_kind == "string":
        return dict(zip(keys, values))
    return {key: value for key, value in zip(keys, values) if value is not UNDEFINED}


def delete(m: dict[Any, Any], key: Any) -> None:
    """Remove ``key`` from map ``m``; a missing key is ignored."""
    m.pop(key, None)


def _set_member(obj: Any, pairs: Sequence[tuple[Any, Any]]) -> None:
    setter = getattr(obj, "set_var", None)
    if callable(setter):
        for name, value in pairs:
            setter(name, value)
        return
    if not hasattr(obj, "__dict__"):
        raise QlangPanic(f"type `{type(obj).__name__}` doesn't support `set` operator")
    for name, value in pairs:
        if not isinstance(name, str) or not hasattr(obj, name):
            raise QlangPanic(
                f"struct `{type(obj).__name__}` doesn't has member `{name}`"
            )
        setattr(obj, name, value)


def _set_map(m: dict[Any, Any], key: Any, value: Any) -> None:
    if value is UNDEFINED:
        m.pop(key, None)
    else:
        m[key] = value


def set_items(m: Any, *args: Any) -> None:
    """Assign ``index1, val1, index2, val2, ...`` into a list, map or object."""
    if len(args) % 2:
        raise QlangPanic(
            "call with invalid argument count: please use `set(obj, member1, val1, ...)"
        )
    pairs = list(zip(args[0::2], args[1::2]))
    if isinstance(m, list):
        for index, value in pairs:
            m[_as_int(index)] = value
    elif isinstance(m, dict):
        for key, value in pairs:
            _set_map(m, key, value)
    else:
        _set_member(m, pairs)


def set_index(m: Any, key: Any, value: Any) -> None:
    """Assign ``value`` at ``key`` of a list, map or object."""
    if isinstance(m, dict):
        _set_map(m, key, value)
    elif isinstance(m, list):
        if not isinstance(key, int) or isinstance(key, bool):
            raise QlangPanic("slice index isn't an integer value")
        m[key] = value
    else:
        _set_member(m, [(key, value)])


def get(m: Any, key: Any) -> Any:
    """Read ``key`` from a map, sequence or object; missing map keys give :data:`UNDEFINED`."""
    if isinstance(m, dict):
        return m.get(key, UNDEFINED)
    if isinstance(m, (list, tuple, str, bytes, bytearray)):
        return m[_as_int(key)]
    if isinstance(m, int) and not isinstance(m, bool):
        return UNDEFINED
    if isinstance(key, str) and hasattr(m, key):
        return getattr(m, key)
    raise QlangPanic(f"type `{type(m).__name__}` doesn't has member `{key}`")


def length(a: Any) -> int:
    """Length of a collection; ``None`` has length 0."""
    if a is None:
        return 0
    return len(a)


def capacity(a: Any) -> int:
    """Capacity of a list, tuple or byte buffer; ``None`` has capacity 0."""
    if a is None:
        return 0
    if isinstance(a, (list, tuple, bytes, bytearray)):
        return len(a)
    raise QlangPanic(f"cap of unsupported type `{type(a).__name__}`")


def sub_slice(a: Any, i: Any, j: Any) -> Any:
    """Return ``a[i:j]``; ``i`` of ``None`` means 0 and ``j`` of ``None`` the length."""
    start = 0 if i is None else _as_int(i)
    end = len(a) if j is None else _as_int(j)
    if not 0 <= start <= end <= len(a):
        raise IndexError(f"slice bounds out of range [{start}:{end}] with length {len(a)}")
    return a[start:end]


def append(a: Any, *args: Any) -> Any:
    """Return ``a`` with ``args`` added at the end; ``a`` itself is not changed."""
    if isinstance(a, list):
        return [*a, *args]
    if isinstance(a, tuple):
        return (*a, *args)
    if isinstance(a, (bytes, bytearray)):
        out = bytearray(a)
        for value in args:
            if not isinstance(value, int) or isinstance(value, bool):
                raise QlangPanic(f"unsupported: []byte append {type(value).__name__}")
            out.append(value & 0xFF)
        return type(a)(out)
    raise QlangPanic(f"cannot append to `{type(a).__name__}`")


def slice_from(*args: Any) -> list[Any]:
    """Build a list from ``args``; mixed ints and floats all become floats."""
    if not args:
        return []
    if _common_kind(args) == "float":
        return [float(value) for value in args]
    return list(args)