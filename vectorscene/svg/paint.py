"""Color literals → SolidColor.

Named colors, hex and rgb() percentage triplets are decoded by webcolors.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import webcolors

from vectorscene.errors import ParamMismatch

logger = logging.getLogger(__name__)

NONE = "none"
CURRENT_COLOR = "currentcolor"


@dataclass(frozen=True)
class SolidColor:
    """Non-premultiplied RGBA, 8 bits per channel."""

    r: int
    g: int
    b: int
    a: int = 255

    def hex(self) -> str:
        return f"#{self.r:02x}{self.g:02x}{self.b:02x}"


BLACK = SolidColor(0, 0, 0, 255)
TRANSPARENT = SolidColor(0, 0, 0, 0)


def _channels(vals: list[str]) -> tuple[int, int, int]:
    """Three integer or three percentage channels, clamped to 0..255."""
    vals = [v.strip() for v in vals]
    percent = [v.endswith("%") for v in vals]
    if any(percent) and not all(percent):
        raise ParamMismatch(f"mixed integer and percentage channels in {vals!r}")
    try:
        if all(percent):
            rgb = webcolors.rgb_percent_to_rgb(tuple(vals))
            return rgb.red, rgb.green, rgb.blue
        r, g, b = (max(0, min(255, int(v))) for v in vals)
    except ValueError:
        raise ParamMismatch(f"invalid color channels {vals!r}") from None
    return r, g, b


def _alpha(v: str) -> int:
    v = v.strip()
    try:
        if v.endswith("%"):
            frac = float(v[:-1]) / 100
        else:
            frac = float(v)
    except ValueError:
        raise ParamMismatch(f"invalid alpha value {v!r}") from None
    return round(max(0.0, min(1.0, frac)) * 255)


def parse_svg_color(color_str: str, current_color: SolidColor | None = BLACK) -> SolidColor | None:
    """Parse a paint color. Returns None for ``none``.

    ``url(...)`` cannot be resolved here: it is logged and treated as opaque black.
    """
    s = color_str.strip()
    v = s.lower()
    if v.startswith("url"):
        logger.warning("url() color %r is not a known gradient; using black", color_str)
        return BLACK
    if v == NONE:
        return None
    if v == CURRENT_COLOR:
        return current_color
    if v == "transparent":
        return TRANSPARENT
    if v.startswith("rgb(") or v.startswith("rgba("):
        if not v.endswith(")"):
            raise ParamMismatch(f"unterminated color function {color_str!r}")
        is_rgba = v.startswith("rgba(")
        vals = v[5 if is_rgba else 4 : -1].split(",")
        if len(vals) != (4 if is_rgba else 3):
            raise ParamMismatch(f"wrong number of channels in {color_str!r}")
        r, g, b = _channels(vals[:3])
        a = _alpha(vals[3]) if is_rgba else 255
        return SolidColor(r, g, b, a)
    if v.startswith("#"):
        try:
            rgb = webcolors.hex_to_rgb(v)
        except ValueError:
            raise ParamMismatch(f"invalid hex color {color_str!r}") from None
        return SolidColor(rgb.red, rgb.green, rgb.blue)
    try:
        rgb = webcolors.name_to_rgb(v)
    except ValueError:
        raise ParamMismatch(f"unknown color {color_str!r}") from None
    return SolidColor(rgb.red, rgb.green, rgb.blue)
