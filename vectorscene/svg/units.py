"""Length units → pixels, with percentages resolved against a viewport."""

from __future__ import annotations

import enum
import math

from vectorscene.errors import InvalidNumber
from vectorscene.utils.geometry import Bounds

_ROOT2 = math.sqrt(2)

REFERENCE_PPI = 96

# Checked in order with str.endswith; "%" last so "50%" is not mistaken for anything else.
_UNIT_TO_PX: dict[str, float] = {
    "px": 1.0,
    "cm": REFERENCE_PPI / 2.54,
    "mm": REFERENCE_PPI / 25.4,
    "pt": REFERENCE_PPI / 72.0,
    "in": float(REFERENCE_PPI),
    "Q": REFERENCE_PPI / 40.0 / 2.54,
    "pc": REFERENCE_PPI / 6.0,
    "%": 1.0,
}


class PercentageReference(enum.IntEnum):
    """Which viewport dimension a percentage refers to."""

    WIDTH = 0
    HEIGHT = 1
    DIAGONAL = 2


def find_unit(s: str) -> tuple[str, str]:
    """Split a length into (unit, numeric text). No suffix means px."""
    s = s.strip()
    for suffix in _UNIT_TO_PX:
        if s.endswith(suffix):
            return suffix, s[: -len(suffix)].strip()
    return "px", s


def parse_unit(s: str) -> tuple[float, bool]:
    """Convert a length to px. Returns (value, is_percentage); percentages stay unscaled."""
    unit, text = find_unit(s)
    try:
        value = float(text)
    except ValueError:
        raise InvalidNumber(f"unable to parse {s!r} as a length") from None
    return value * _UNIT_TO_PX[unit], unit == "%"


def parse_basic_float(s: str) -> float:
    value, _ = parse_unit(s)
    return value


def read_fraction(v: str) -> float:
    """'50%' → 0.5, '0.5' → 0.5."""
    v = v.strip()
    if v.endswith("%"):
        return parse_basic_float(v[:-1]) / 100
    return parse_basic_float(v)


def resolve_unit(view_box: Bounds, s: str, as_perc: PercentageReference) -> float:
    """Length in px; a percentage refers to view_box per as_perc."""
    value, is_percentage = parse_unit(s)
    if not is_percentage:
        return value
    w, h = view_box.w, view_box.h
    if as_perc == PercentageReference.WIDTH:
        return value / 100 * w
    if as_perc == PercentageReference.HEIGHT:
        return value / 100 * h
    normalized_diag = math.sqrt(w * w + h * h) / _ROOT2
    return value / 100 * normalized_diag
