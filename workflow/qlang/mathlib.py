"""Math helpers and constants exposed to scripts."""

from __future__ import annotations

import math
from typing import Any

from workflow.qlang.operators import to_float

CONSTANTS: dict[str, float] = {
    "e": math.e,
    "pi": math.pi,
    "phi": (1 + math.sqrt(5)) / 2,
    "Inf": math.inf,
    "NaN": math.nan,
}


def cast_float(a: Any) -> float:
    """Convert an integer or float to float; other types raise ``UnsupportedOperation``."""
    return to_float(a)


def mod(a: Any, b: Any) -> float:
    """Floating-point remainder of ``a / b`` with the sign of ``a``.

    The result is NaN when ``a`` is infinite, ``b`` is zero, or either is NaN;
    an infinite ``b`` leaves ``a`` unchanged.
    """
    x, y = cast_float(a), cast_float(b)
    if y == 0.0 or math.isinf(x) or math.isnan(x) or math.isnan(y):
        return math.nan
    if math.isinf(y):
        return x
    return math.fmod(x, y)