# pdf_overlay/services/normalize.py
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Mapping


@dataclass(frozen=True)
class RGB:
    r: float
    g: float
    b: float


def coerce_number(value: Any, default: float) -> float:
    """
    JSON-friendly take on JS `Number(v)`: null / false / blank string -> 0,
    true -> 1, numeric strings parse. Anything that still isn't a finite
    number (junk strings, NaN, inf, huge ints, dicts, lists...) returns
    `default`. Never raises.

    Callers decide what "absent" means; an explicit null is a 0 here.
    """
    if value is None:
        return 0.0
    if isinstance(value, bool):
        return 1.0 if value else 0.0

    if isinstance(value, (int, float)):
        try:
            n = float(value)
        except OverflowError:
            return default
    elif isinstance(value, str):
        s = value.strip()
        if not s:
            return 0.0
        try:
            n = float(s)
        except ValueError:
            return default
    else:
        return default

    if not math.isfinite(n):
        return default
    return n


def clamp_unit(value: Any, default: float) -> float:
    n = coerce_number(value, default)
    return max(0.0, min(1.0, n))


def coerce_color(value: Any, default: RGB) -> RGB:
    # per-channel fallback: {"r": 2, "g": "x"} keeps default.g, clamps r to 1;
    # a missing channel keeps the default, an explicit null is 0
    if not isinstance(value, Mapping):
        return default
    return RGB(
        r=clamp_unit(value["r"], default.r) if "r" in value else default.r,
        g=clamp_unit(value["g"], default.g) if "g" in value else default.g,
        b=clamp_unit(value["b"], default.b) if "b" in value else default.b,
    )
