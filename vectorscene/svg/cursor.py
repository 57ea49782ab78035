"""Style cascade: a stack of PathStyle snapshots, one per open element.

Entering an element copies the top snapshot, applies the element's
presentation attributes and then its inline ``style`` declarations (so
inline wins), and pushes the result. Leaving the element pops it.
"""

from __future__ import annotations

import logging
import math
import re
from dataclasses import replace

from vectorscene.errors import MalformedPathData, ParamMismatch, UnsupportedReference
from vectorscene.svg.gradients import GradientRegistry
from vectorscene.svg.paint import NONE, parse_svg_color
from vectorscene.svg.path_data import parse_numbers
from vectorscene.svg.scene import DEFAULT_STYLE, CapMode, GapMode, JoinMode, PathStyle
from vectorscene.svg.units import PercentageReference, parse_basic_float, read_fraction, resolve_unit
from vectorscene.utils.geometry import Bounds
from vectorscene.utils.matrix import IDENTITY, Matrix2D

logger = logging.getLogger(__name__)

Attrs = tuple[tuple[str, str], ...]

_TRANSFORM_FN_RE = re.compile(r"[\s,]*([A-Za-z]+)\s*\(([^()]*)\)[\s,]*")

_CAPS = {
    "butt": CapMode.BUTT,
    "round": CapMode.ROUND,
    "square": CapMode.SQUARE,
    "cubic": CapMode.CUBIC,
    "quadratic": CapMode.QUADRATIC,
}
_JOINS = {
    "miter": JoinMode.MITER,
    "miter-clip": JoinMode.MITER_CLIP,
    "arc-clip": JoinMode.ARC_CLIP,
    "round": JoinMode.ROUND,
    "arc": JoinMode.ARC,
    "bevel": JoinMode.BEVEL,
}
_GAPS = {
    "flat": GapMode.FLAT,
    "round": GapMode.ROUND,
    "cubic": GapMode.CUBIC,
    "quadratic": GapMode.QUADRATIC,
}

# Attributes consumed by element handlers rather than the cascade.
GEOMETRY_ATTRS = frozenset(
    {
        "id", "class", "version", "baseprofile", "viewbox", "preserveaspectratio",
        "x", "y", "width", "height", "x1", "y1", "x2", "y2",
        "cx", "cy", "r", "rx", "ry", "fx", "fy", "fr",
        "d", "points", "href", "offset", "stop-color", "stop-opacity",
        "gradientunits", "gradienttransform", "spreadmethod",
        "maskunits", "maskcontentunits", "space", "lang",
    }
)  # fmt: skip


def _transform_fn(name: str, args: list[float]) -> Matrix2D:
    n = len(args)
    match name.lower(), n:
        case "matrix", 6:
            a, b, c, d, e, f = args
            return Matrix2D(scale_x=a, skew_y=b, skew_x=c, scale_y=d, trans_x=e, trans_y=f)
        case "translate", 1 | 2:
            return IDENTITY.translate(args[0], args[1] if n == 2 else 0.0)
        case "scale", 1 | 2:
            return IDENTITY.scale(args[0], args[1] if n == 2 else args[0])
        case "rotate", 1:
            return IDENTITY.rotate(math.radians(args[0]))
        case "rotate", 3:
            angle, cx, cy = args
            return IDENTITY.translate(cx, cy).rotate(math.radians(angle)).translate(-cx, -cy)
        case "skewx", 1:
            return IDENTITY.skew_x_by(math.radians(args[0]))
        case "skewy", 1:
            return IDENTITY.skew_y_by(math.radians(args[0]))
    raise ParamMismatch(f"unsupported transform {name}() with {n} argument(s)")


def parse_transform(v: str) -> Matrix2D:
    """Parse a transform list into a single local matrix.

    ``translate(10) scale(2)`` scales first, then translates: the list is
    folded from its last function backwards, pre-multiplying.
    """
    functions: list[tuple[str, list[float]]] = []
    pos = 0
    while pos < len(v):
        m = _TRANSFORM_FN_RE.match(v, pos)
        if m is None:
            if v[pos:].strip(" \t\r\n,"):
                raise ParamMismatch(f"malformed transform {v!r}")
            break
        try:
            args = parse_numbers(m.group(2))
        except MalformedPathData as err:
            raise ParamMismatch(f"malformed transform arguments in {v!r}") from err
        functions.append((m.group(1), args))
        pos = m.end()

    acc = IDENTITY
    for name, args in reversed(functions):
        acc = _transform_fn(name, args).multiply(acc)
    return acc


def parse_selector(v: str) -> str | None:
    """``url(#id)`` → ``id``; empty or ``none`` → None."""
    v = v.strip()
    if v == "" or v == NONE:
        return None
    if v.startswith("url("):
        close = v.find(")")
        if close < 0:
            raise ParamMismatch(f"unterminated url() in {v!r}")
        target = v[4:close].strip().strip("'\"")
        if not target.startswith("#"):
            raise UnsupportedReference(f"unsupported url selector: {target}")
        return target[1:]
    raise UnsupportedReference(f"unsupported selector: {v}")


def style_pairs(attrs: Attrs) -> list[tuple[str, str]]:
    """Presentation attributes followed by inline style declarations, keys lower-cased."""
    pairs: list[tuple[str, str]] = []
    inline: list[tuple[str, str]] = []
    for name, value in attrs:
        if name.lower() == "style":
            for decl in value.split(";"):
                key, sep, val = decl.partition(":")
                if sep and key.strip():
                    inline.append((key.strip().lower(), val.strip()))
        else:
            pairs.append((name.strip().lower(), value.strip()))
    return pairs + inline


class Cursor:
    """The live style stack of one parse."""

    def __init__(self, gradients: GradientRegistry | None = None) -> None:
        self.gradients = gradients if gradients is not None else GradientRegistry()
        # Percentages in style values resolve against the document viewBox.
        self.view_box = Bounds()
        self._stack: list[PathStyle] = [DEFAULT_STYLE]

    def __len__(self) -> int:
        return len(self._stack)

    @property
    def top(self) -> PathStyle:
        return self._stack[-1]

    def push_style(self, attrs: Attrs) -> PathStyle:
        style = self.top
        pairs = style_pairs(attrs)
        # currentColor anywhere on the element refers to the element's own color
        for key, value in pairs:
            if key == "color":
                style = self.read_style_attr(style, key, value)
        for key, value in pairs:
            if key != "color":
                style = self.read_style_attr(style, key, value)
        self._stack.append(style)
        return style

    def pop_style(self) -> PathStyle:
        if len(self._stack) == 1:
            raise IndexError("cannot pop the default style")
        return self._stack.pop()

    def _unit(self, v: str, axis: PercentageReference) -> float:
        return resolve_unit(self.view_box, v, axis)

    def read_style_attr(self, style: PathStyle, key: str, v: str) -> PathStyle:
        """Return style with one declaration applied."""
        v = v.strip()
        if v == "inherit":
            return style
        match key:
            case "fill":
                grad = self.gradients.resolve_url(v, style.fill)
                if grad is not None:
                    return replace(style, fill=grad)
                return replace(style, fill=parse_svg_color(v, style.current_color))
            case "stroke":
                grad = self.gradients.resolve_url(v, style.stroke)
                if grad is not None:
                    return replace(style, stroke=grad)
                return replace(style, stroke=parse_svg_color(v, style.current_color))
            case "color":
                color = parse_svg_color(v, style.current_color)
                if color is None:
                    return style
                return replace(style, current_color=color)
            case "fill-rule":
                if v in ("evenodd", "nonzero"):
                    return replace(style, use_nonzero_winding=v == "nonzero")
                logger.warning("Unsupported value for fill-rule: %r", v)
            case "stroke-linecap" | "stroke-leadlinecap":
                cap = _CAPS.get(v)
                if cap is None:
                    logger.warning("Unsupported value for %s: %r", key, v)
                elif key == "stroke-linecap":
                    return replace(style, join=replace(style.join, trail_line_cap=cap))
                else:
                    return replace(style, join=replace(style.join, lead_line_cap=cap))
            case "stroke-linegap":
                gap = _GAPS.get(v)
                if gap is None:
                    logger.warning("Unsupported value for stroke-linegap: %r", v)
                else:
                    return replace(style, join=replace(style.join, line_gap=gap))
            case "stroke-linejoin":
                join = _JOINS.get(v)
                if join is None:
                    logger.warning("Unsupported value for stroke-linejoin: %r", v)
                else:
                    return replace(style, join=replace(style.join, line_join=join))
            case "stroke-miterlimit":
                return replace(style, join=replace(style.join, miter_limit=parse_basic_float(v)))
            case "stroke-width":
                return replace(style, line_width=self._unit(v, PercentageReference.WIDTH))
            case "stroke-dashoffset":
                offset = self._unit(v, PercentageReference.DIAGONAL)
                return replace(style, dash=replace(style.dash, offset=offset))
            case "stroke-dasharray":
                if v == NONE:
                    return replace(style, dash=replace(style.dash, dash=()))
                dashes = tuple(
                    self._unit(d, PercentageReference.DIAGONAL) for d in re.split(r"[\s,]+", v) if d
                )
                return replace(style, dash=replace(style.dash, dash=dashes))
            case "opacity":
                op = read_fraction(v)
                return replace(style, fill_opacity=style.fill_opacity * op, line_opacity=style.line_opacity * op)
            case "fill-opacity":
                return replace(style, fill_opacity=style.fill_opacity * read_fraction(v))
            case "stroke-opacity":
                return replace(style, line_opacity=style.line_opacity * read_fraction(v))
            case "transform":
                return replace(style, transform=style.transform.multiply(parse_transform(v)))
            case "mask":
                mask_id = parse_selector(v)
                if mask_id is not None:
                    return replace(style, masks=style.masks + (mask_id,))
            case _ if key in GEOMETRY_ATTRS:
                pass
            case _:
                logger.warning("Ignoring unknown style attribute %r", key)
        return style
