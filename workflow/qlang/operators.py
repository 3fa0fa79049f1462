"""Arithmetic, bitwise, comparison and conversion operators of the expression language.

Values follow the language's dynamic typing: integers are 64-bit and wrap on
overflow, floats are IEEE doubles, and booleans are never treated as numbers.
Operands of unsupported types raise :class:`UnsupportedOperation`.
"""

from __future__ import annotations

import math
from typing import Any, Optional

_INT_BITS = 64
_INT_MASK = (1 << _INT_BITS) - 1
_INT_SIGN = 1 << (_INT_BITS - 1)


class UnsupportedOperation(TypeError):
    """An operator or conversion was applied to values of unsupported types."""


def _wrap(value: int) -> int:
    """Reduce an integer to the signed 64-bit range, wrapping like machine arithmetic."""
    value &= _INT_MASK
    return value - (1 << _INT_BITS) if value & _INT_SIGN else value


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _kind(value: Any) -> Optional[str]:
    if _is_int(value):
        return "int"
    if isinstance(value, float):
        return "float"
    if isinstance(value, str):
        return "string"
    return None


def _type_name(value: Any) -> str:
    if value is None:
        return "nil"
    if isinstance(value, bool):
        return "bool"
    if isinstance(value, int):
        return "int"
    if isinstance(value, float):
        return "float64"
    if isinstance(value, str):
        return "string"
    if isinstance(value, (bytes, bytearray)):
        return "[]uint8"
    if isinstance(value, (list, tuple)):
        return "[]interface {}"
    if isinstance(value, dict):
        return "map[string]interface {}"
    return type(value).__name__


def _unsupported_op1(op: str, a: Any) -> UnsupportedOperation:
    return UnsupportedOperation(f"unsupported operator: {op}{_type_name(a)}")


def _unsupported_op2(op: str, a: Any, b: Any) -> UnsupportedOperation:
    return UnsupportedOperation(
        f"unsupported operator: {_type_name(a)}{op}{_type_name(b)}"
    )


def _unsupported_fn(fn: str, *args: Any) -> UnsupportedOperation:
    names = ",".join(_type_name(a) for a in args)
    return UnsupportedOperation(f"unsupported function: {fn}({names})")


def _numeric_pair(a: Any, b: Any) -> Optional[tuple[str, Any, Any]]:
    """Classify two numeric operands: both ints, or floats after promotion."""
    ka, kb = _kind(a), _kind(b)
    if ka == "int" and kb == "int":
        return "int", a, b
    if ka in ("int", "float") and kb in ("int", "float"):
        return "float", float(a), float(b)
    return None


# ---------------------------------------------------------------------------
# Unary arithmetic and conversions


def inc(a: Any) -> int:
    """Return ``a + 1`` for an integer."""
    if _is_int(a):
        return _wrap(a + 1)
    raise _unsupported_op1("++", a)


def dec(a: Any) -> int:
    """Return ``a - 1`` for an integer."""
    if _is_int(a):
        return _wrap(a - 1)
    raise _unsupported_op1("--", a)


def neg(a: Any) -> Any:
    """Return ``-a`` for an integer or float."""
    if _is_int(a):
        return _wrap(-a)
    if isinstance(a, float):
        return -a
    raise _unsupported_op1("-", a)


def to_float(a: Any) -> float:
    """Convert an integer or float to float."""
    if _is_int(a) or isinstance(a, float):
        return float(a)
    raise _unsupported_fn("float", a)


def to_int(a: Any) -> int:
    """Convert an integer or float to integer, truncating toward zero."""
    if _is_int(a):
        return a
    if isinstance(a, float):
        if math.isnan(a) or math.isinf(a):
            raise _unsupported_fn("int", a)
        return _wrap(int(a))
    raise _unsupported_fn("int", a)


def to_string(a: Any) -> str:
    """Convert bytes, a code point or a string to a string."""
    if isinstance(a, (bytes, bytearray)):
        return bytes(a).decode("utf-8", errors="replace")
    if _is_int(a):
        if 0 <= a <= 0x10FFFF and not 0xD800 <= a <= 0xDFFF:
            return chr(a)
        return "\ufffd"
    if isinstance(a, str):
        return a
    raise _unsupported_fn("string", a)


def to_bool(a: Any) -> bool:
    """Return ``a`` if it is a boolean."""
    if isinstance(a, bool):
        return a
    raise _unsupported_fn("bool", a)


# ---------------------------------------------------------------------------
# Binary arithmetic


def _trunc_div(a: int, b: int) -> int:
    if b == 0:
        raise ZeroDivisionError("integer divide by zero")
    q = abs(a) // abs(b)
    return q if (a < 0) == (b < 0) else -q


def _float_div(a: float, b: float) -> float:
    if b == 0.0:
        if a == 0.0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)
    return a / b


def mul(a: Any, b: Any) -> Any:
    """Return ``a * b`` for integers and floats."""
    pair = _numeric_pair(a, b)
    if pair is None:
        raise _unsupported_op2("*", a, b)
    kind, x, y = pair
    return _wrap(x * y) if kind == "int" else x * y


def quo(a: Any, b: Any) -> Any:
    """Return ``a / b``; integer division truncates toward zero."""
    pair = _numeric_pair(a, b)
    if pair is None:
        raise _unsupported_op2("/", a, b)
    kind, x, y = pair
    return _wrap(_trunc_div(x, y)) if kind == "int" else _float_div(x, y)


def mod(a: Any, b: Any) -> int:
    """Return ``a % b`` for integers; the result has the sign of ``a``."""
    if _is_int(a) and _is_int(b):
        return _wrap(a - b * _trunc_div(a, b))
    raise _unsupported_op2("%", a, b)


def add(a: Any, b: Any) -> Any:
    """Return ``a + b`` for numbers, or the concatenation of two strings."""
    if isinstance(a, str) and isinstance(b, str):
        return a + b
    pair = _numeric_pair(a, b)
    if pair is None:
        raise _unsupported_op2("+", a, b)
    kind, x, y = pair
    return _wrap(x + y) if kind == "int" else x + y


def sub(a: Any, b: Any) -> Any:
    """Return ``a - b`` for integers and floats."""
    pair = _numeric_pair(a, b)
    if pair is None:
        raise _unsupported_op2("-", a, b)
    kind, x, y = pair
    return _wrap(x - y) if kind == "int" else x - y


def _kind_of_args(args: tuple[Any, ...]) -> Optional[str]:
    """Common kind of all arguments; ints promote to float when mixed with floats."""
    kind = _kind(args[0])
    for arg in args[1:]:
        other = _kind(arg)
        if other == kind:
            continue
        if kind in ("int", "float") and other in ("int", "float"):
            if other == "float":
                kind = "float"
            continue
        return None
    return kind


def _extreme(name: str, pick: Any, args: tuple[Any, ...]) -> Any:
    if not args:
        return 0
    kind = _kind_of_args(args)
    if kind == "int":
        return pick(args)
    if kind == "float":
        return pick(float(a) for a in args)
    raise _unsupported_fn(name, list(args))


def max_of(*args: Any) -> Any:
    """Largest of integer or float arguments; 0 when there are none."""
    return _extreme("max", max, args)


def min_of(*args: Any) -> Any:
    """Smallest of integer or float arguments; 0 when there are none."""
    return _extreme("min", min, args)


# ---------------------------------------------------------------------------
# Bitwise operators


def _int_pair(op: str, a: Any, b: Any) -> tuple[int, int]:
    if _is_int(a) and _is_int(b):
        return a, b
    raise _unsupported_op2(op, a, b)


def lshr(a: Any, b: Any) -> int:
    """Return ``a << b``; the shift count is taken as unsigned."""
    x, y = _int_pair("<<", a, b)
    if y < 0 or y >= _INT_BITS:
        return 0
    return _wrap(x << y)


def rshr(a: Any, b: Any) -> int:
    """Return ``a >> b`` (arithmetic); the shift count is taken as unsigned."""
    x, y = _int_pair(">>", a, b)
    if y < 0 or y >= _INT_BITS:
        return -1 if x < 0 else 0
    return x >> y


def xor(a: Any, b: Any) -> int:
    """Return ``a ^ b``."""
    x, y = _int_pair("^", a, b)
    return _wrap(x ^ y)


def bit_and(a: Any, b: Any) -> int:
    """Return ``a & b``."""
    x, y = _int_pair("&", a, b)
    return _wrap(x & y)


def bit_or(a: Any, b: Any) -> int:
    """Return ``a | b``."""
    x, y = _int_pair("|", a, b)
    return _wrap(x | y)


def bit_not(a: Any) -> int:
    """Return the bitwise complement of ``a``."""
    if _is_int(a):
        return _wrap(~a)
    raise _unsupported_op1("^", a)


def and_not(a: Any, b: Any) -> int:
    """Return ``a &^ b``: the bits of ``a`` not set in ``b``."""
    x, y = _int_pair("&^", a, b)
    return _wrap(x & ~y)


# ---------------------------------------------------------------------------
# Logic and comparison


def not_(a: Any) -> bool:
    """Return the negation of a boolean."""
    if isinstance(a, bool):
        return not a
    raise _unsupported_op1("!", a)


def _compare(op: str, a: Any, b: Any) -> tuple[Any, Any]:
    if isinstance(a, str) and isinstance(b, str):
        return a, b
    pair = _numeric_pair(a, b)
    if pair is None:
        raise _unsupported_op2(op, a, b)
    _, x, y = pair
    return x, y


def lt(a: Any, b: Any) -> bool:
    """Return ``a < b`` for numbers or for two strings."""
    x, y = _compare("<", a, b)
    return x < y


def gt(a: Any, b: Any) -> bool:
    """Return ``a > b`` for numbers or for two strings."""
    x, y = _compare(">", a, b)
    return x > y


def le(a: Any, b: Any) -> bool:
    """Return ``a <= b`` for numbers or for two strings."""
    x, y = _compare("<=", a, b)
    return x <= y


def ge(a: Any, b: Any) -> bool:
    """Return ``a >= b`` for numbers or for two strings."""
    x, y = _compare(">=", a, b)
    return x >= y


def eq(a: Any, b: Any) -> bool:
    """Return whether ``a`` and ``b`` have the same type and equal values."""
    return type(a) is type(b) and a == b


def ne(a: Any, b: Any) -> bool:
    """Return the negation of :func:`eq`."""
    return not eq(a, b)