"""Element handlers: one function per supported SVG element.

Handlers are registered with @element and exposed as the read-only
ELEMENT_HANDLERS mapping. A handler of None means the element only takes
part in the style cascade (g, desc, title).

Usage:
    @element("circle", "ellipse")
    def circle_element(p: SvgParser, attrs: Attrs) -> None:
        ...
"""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import TYPE_CHECKING, Callable, Optional

from vectorscene.errors import (
    EmptyIdentifier,
    MalformedPathData,
    ParamMismatch,
    UnresolvedReference,
    UnsupportedReference,
)
from vectorscene.svg.cursor import Attrs, parse_transform, style_pairs
from vectorscene.svg.gradients import (
    LINEAR_DEFAULTS,
    RADIAL_DEFAULTS,
    Gradient,
    GradientUnits,
    GradStop,
    SpreadMethod,
)
from vectorscene.svg.paint import parse_svg_color
from vectorscene.svg.path_data import parse_numbers
from vectorscene.svg.scene import END_GROUP, Mask
from vectorscene.svg.shapes import add_ellipse, add_line, add_polyline, add_round_rect
from vectorscene.svg.units import PercentageReference, parse_basic_float, read_fraction
from vectorscene.utils.geometry import Bounds

if TYPE_CHECKING:
    from vectorscene.svg.parser import SvgParser

logger = logging.getLogger(__name__)

ElementHandler = Callable[["SvgParser", Attrs], None]

_W = PercentageReference.WIDTH
_H = PercentageReference.HEIGHT
_D = PercentageReference.DIAGONAL

_handlers: dict[str, Optional[ElementHandler]] = {"g": None, "desc": None, "title": None}


def element(*names: str):
    """Decorator registering a handler for one or more element names."""

    def decorator(fn: ElementHandler) -> ElementHandler:
        for name in names:
            if name in _handlers:
                raise ValueError(f"Duplicate element handler: {name}")
            _handlers[name] = fn
        return fn

    return decorator


def _numbers(value: str, what: str) -> list[float]:
    try:
        return parse_numbers(value)
    except MalformedPathData as err:
        raise ParamMismatch(f"malformed {what} {value!r}") from err


# ── Document root ─────────────────────────────────────────────────────────


@element("svg")
def svg_element(p: SvgParser, attrs: Attrs) -> None:
    scene = p.scene
    view_box = Bounds()
    width = height = 0.0
    for name, value in attrs:
        match name:
            case "viewBox":
                nums = _numbers(value, "viewBox")
                if len(nums) != 4:
                    raise ParamMismatch(f"viewBox needs 4 numbers, got {len(nums)}")
                view_box = Bounds(*nums)
            case "width":
                scene.width = value
                width = parse_basic_float(value)
            case "height":
                scene.height = value
                height = parse_basic_float(value)
    # Without a viewBox the suggested size defines it, and the other way round.
    if view_box.w == 0:
        view_box.w = width
    if view_box.h == 0:
        view_box.h = height
    scene.suggested_size = (width or view_box.w, height or view_box.h)
    scene.view_box = view_box
    p.cursor.view_box = view_box


# ── Shapes ────────────────────────────────────────────────────────────────


@element("rect")
def rect_element(p: SvgParser, attrs: Attrs) -> None:
    x = y = w = h = rx = ry = 0.0
    for name, value in attrs:
        match name:
            case "x":
                x = p.unit(value, _W)
            case "y":
                y = p.unit(value, _H)
            case "width":
                w = p.unit(value, _W)
            case "height":
                h = p.unit(value, _H)
            case "rx":
                rx = p.unit(value, _W)
            case "ry":
                ry = p.unit(value, _H)
    if w == 0 or h == 0:
        return
    # A single radius applies to both axes
    if rx != 0 and ry == 0:
        ry = rx
    if ry != 0 and rx == 0:
        rx = ry
    ox, oy = p.compiler.offset
    add_round_rect(p.path, x + ox, y + oy, x + w + ox, y + h + oy, rx, ry)


@element("circle", "ellipse")
def circle_element(p: SvgParser, attrs: Attrs) -> None:
    cx = cy = rx = ry = 0.0
    for name, value in attrs:
        match name:
            case "cx":
                cx = p.unit(value, _W)
            case "cy":
                cy = p.unit(value, _H)
            case "r":
                rx = ry = p.unit(value, _D)
            case "rx":
                rx = p.unit(value, _W)
            case "ry":
                ry = p.unit(value, _H)
    if rx == 0 or ry == 0:
        return
    ox, oy = p.compiler.offset
    add_ellipse(p.path, cx + ox, cy + oy, rx, ry)


@element("line")
def line_element(p: SvgParser, attrs: Attrs) -> None:
    x1 = y1 = x2 = y2 = 0.0
    for name, value in attrs:
        match name:
            case "x1":
                x1 = p.unit(value, _W)
            case "y1":
                y1 = p.unit(value, _H)
            case "x2":
                x2 = p.unit(value, _W)
            case "y2":
                y2 = p.unit(value, _H)
    ox, oy = p.compiler.offset
    add_line(p.path, x1 + ox, y1 + oy, x2 + ox, y2 + oy)


def _poly(p: SvgParser, attrs: Attrs, close: bool) -> None:
    coords: list[float] = []
    for name, value in attrs:
        if name == "points":
            coords = _numbers(value, "points")
    ox, oy = p.compiler.offset
    shifted = [v + (ox if i % 2 == 0 else oy) for i, v in enumerate(coords)]
    add_polyline(p.path, shifted, close=close)


@element("polyline")
def polyline_element(p: SvgParser, attrs: Attrs) -> None:
    _poly(p, attrs, close=False)


@element("polygon")
def polygon_element(p: SvgParser, attrs: Attrs) -> None:
    _poly(p, attrs, close=True)


@element("path")
def path_element(p: SvgParser, attrs: Attrs) -> None:
    for name, value in attrs:
        if name == "d":
            p.compiler.compile(value)


# ── Definitions, masks and gradients ──────────────────────────────────────


@element("defs")
def defs_element(p: SvgParser, attrs: Attrs) -> None:
    p.in_defs = True


@element("mask")
def mask_element(p: SvgParser, attrs: Attrs) -> None:
    # Content of a mask that fails to start is discarded up to its end tag
    p.in_mask = True
    p.mask = None
    mask = Mask(id="")
    has_id = False
    for name, value in attrs:
        match name:
            case "id":
                if value == "":
                    raise EmptyIdentifier("mask has an empty id")
                mask.id = value
                has_id = True
            case "x":
                mask.bounds.x = p.unit(value, _W)
            case "y":
                mask.bounds.y = p.unit(value, _H)
            case "width":
                mask.bounds.w = p.unit(value, _W)
            case "height":
                mask.bounds.h = p.unit(value, _H)
    if not has_id:
        logger.warning("mask without id can never be referenced; its content is dropped")
    p.mask = mask if has_id else None


def _gradient_attr(grad: Gradient, name: str, value: str) -> None:
    match name:
        case "gradientTransform":
            grad.matrix = parse_transform(value)
        case "gradientUnits":
            match value.strip():
                case "userSpaceOnUse":
                    grad.units = GradientUnits.USER_SPACE_ON_USE
                case "objectBoundingBox":
                    grad.units = GradientUnits.OBJECT_BOUNDING_BOX
        case "spreadMethod":
            match value.strip():
                case "pad":
                    grad.spread = SpreadMethod.PAD
                case "reflect":
                    grad.spread = SpreadMethod.REFLECT
                case "repeat":
                    grad.spread = SpreadMethod.REPEAT


def _start_gradient(p: SvgParser, attrs: Attrs, radial: bool, coord_names: tuple[str, ...]) -> Gradient:
    # Stops of a gradient that fails to start have nowhere to go
    p.in_grad = True
    p.grad = None
    vb = p.scene.view_box
    grad = Gradient(radial=radial, bounds=Bounds(vb.x, vb.y, vb.w, vb.h))
    grad_id: str | None = None
    raw = list(RADIAL_DEFAULTS if radial else LINEAR_DEFAULTS)
    explicit: set[str] = set()
    for name, value in attrs:
        if name == "id":
            if value == "":
                raise EmptyIdentifier("gradient has an empty id")
            grad_id = value
        elif name in coord_names:
            raw[coord_names.index(name)] = value
            explicit.add(name)
        else:
            _gradient_attr(grad, name, value)
    if radial:
        # The focal point defaults to the center
        if "fx" not in explicit:
            raw[2] = raw[0]
        if "fy" not in explicit:
            raw[3] = raw[1]
    grad.raw_direction = tuple(raw)
    # gradientUnits may come after the coordinates, so resolve only now
    grad.resolve()
    # Only a fully resolved gradient becomes visible to paint references
    p.grad = grad
    if grad_id is not None:
        p.gradients.register(grad_id, grad)
    return grad


@element("linearGradient")
def linear_gradient_element(p: SvgParser, attrs: Attrs) -> None:
    _start_gradient(p, attrs, False, ("x1", "y1", "x2", "y2"))


@element("radialGradient")
def radial_gradient_element(p: SvgParser, attrs: Attrs) -> None:
    _start_gradient(p, attrs, True, ("cx", "cy", "fx", "fy", "r", "fr"))


@element("stop")
def stop_element(p: SvgParser, attrs: Attrs) -> None:
    if not p.in_grad or p.grad is None:
        return
    stop = GradStop(opacity=1.0)
    current = p.cursor.top.current_color
    for name, value in style_pairs(attrs):
        match name:
            case "offset":
                stop.offset = min(1.0, max(0.0, read_fraction(value)))
            case "stop-color":
                # none leaves the stop colorless; it then takes the referencing paint's color
                stop.color = parse_svg_color(value, current)
            case "stop-opacity":
                stop.opacity = read_fraction(value)
    p.grad.stops.append(stop)


# ── Reuse ─────────────────────────────────────────────────────────────────


@element("use")
def use_element(p: SvgParser, attrs: Attrs) -> None:
    href: str | None = None
    x = y = 0.0
    for name, value in attrs:
        match name:
            case "href":
                href = value.strip()
            case "x":
                x = p.unit(value, _W)
            case "y":
                y = p.unit(value, _H)
    if not href:
        raise UnsupportedReference("use without href is not supported")
    if not href.startswith("#"):
        raise UnsupportedReference(f"only same-document id references are supported, got {href!r}")
    ref_id = href[1:]
    defs = p.definitions.get(ref_id)
    if defs is None:
        raise UnresolvedReference(f"use references unknown id {ref_id!r}")
    if ref_id in p.expanding:
        raise UnresolvedReference(f"use of {ref_id!r} refers back to itself")

    saved = p.compiler.offset
    depth = len(p.cursor)
    p.compiler.offset = (saved[0] + x, saved[1] + y)
    p.expanding.add(ref_id)
    try:
        for d in defs:
            if d.tag == END_GROUP:
                p.cursor.pop_style()
                continue
            p.cursor.push_style(d.attrs)
            p.dispatch(d.tag, d.attrs)
            # a group's style stays until its END_GROUP
            if d.tag != "g":
                p.cursor.pop_style()
    finally:
        p.expanding.discard(ref_id)
        p.compiler.offset = saved
        while len(p.cursor) > depth:
            p.cursor.pop_style()


ELEMENT_HANDLERS: MappingProxyType[str, Optional[ElementHandler]] = MappingProxyType(_handlers)
