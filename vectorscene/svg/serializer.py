"""Write an SvgScene back out as SVG markup.

Paths are emitted with their fully resolved style; the cascade and any
defs/use indirection are flattened away. Gradients referenced by paths are
written into a single <defs> block.
"""

from __future__ import annotations

import enum
from xml.sax.saxutils import quoteattr

from vectorscene.svg.gradients import Gradient, GradientUnits, Linear, Pattern, SpreadMethod
from vectorscene.svg.paint import SolidColor
from vectorscene.svg.scene import CapMode, GapMode, JoinOptions, Mask, PathStyle, StyledPath, SvgScene
from vectorscene.utils.matrix import IDENTITY, Matrix2D

_SPREAD = {SpreadMethod.PAD: "pad", SpreadMethod.REFLECT: "reflect", SpreadMethod.REPEAT: "repeat"}
_DEFAULT_JOIN = JoinOptions()


def _num(v: float) -> str:
    return f"{v:.4f}".rstrip("0").rstrip(".") or "0"


def _matrix(m: Matrix2D) -> str:
    vals = (m.scale_x, m.skew_y, m.skew_x, m.scale_y, m.trans_x, m.trans_y)
    return "matrix(" + " ".join(_num(v) for v in vals) + ")"


def _keyword(mode: enum.IntEnum) -> str:
    # MITER_CLIP → "miter-clip"
    return mode.name.lower().replace("_", "-")


class _Writer:
    def __init__(self) -> None:
        self.defs: list[str] = []
        self._grad_ids: dict[int, str] = {}

    def paint(self, pattern: Pattern) -> tuple[str, float]:
        """Attribute value and alpha factor for a paint."""
        if pattern is None:
            return "none", 1.0
        if isinstance(pattern, SolidColor):
            return pattern.hex(), pattern.a / 255
        return f"url(#{self.gradient(pattern)})", 1.0

    def gradient(self, grad: Gradient) -> str:
        key = id(grad)
        if key in self._grad_ids:
            return self._grad_ids[key]
        grad_id = f"grad{len(self._grad_ids)}"
        self._grad_ids[key] = grad_id
        d = grad.direction
        if isinstance(d, Linear):
            tag = "linearGradient"
            coords = f'x1="{_num(d.x1)}" y1="{_num(d.y1)}" x2="{_num(d.x2)}" y2="{_num(d.y2)}"'
        else:
            tag = "radialGradient"
            coords = (
                f'cx="{_num(d.cx)}" cy="{_num(d.cy)}" fx="{_num(d.fx)}" fy="{_num(d.fy)}" '
                f'r="{_num(d.r)}" fr="{_num(d.fr)}"'
            )
        units = "userSpaceOnUse" if grad.units == GradientUnits.USER_SPACE_ON_USE else "objectBoundingBox"
        attrs = f'id="{grad_id}" {coords} gradientUnits="{units}" spreadMethod="{_SPREAD[grad.spread]}"'
        if not grad.matrix.is_close(IDENTITY):
            attrs += f' gradientTransform="{_matrix(grad.matrix)}"'
        lines = [f"    <{tag} {attrs}>"]
        for stop in grad.stops:
            color = stop.color.hex() if stop.color is not None else "black"
            lines.append(
                f'      <stop offset="{_num(stop.offset)}" stop-color="{color}" stop-opacity="{_num(stop.opacity)}"/>'
            )
        lines.append(f"    </{tag}>")
        self.defs.extend(lines)
        return grad_id

    def style_attrs(self, style: PathStyle) -> str:
        fill, fill_alpha = self.paint(style.fill)
        stroke, stroke_alpha = self.paint(style.stroke)
        parts = [f'fill="{fill}"']
        fill_opacity = style.fill_opacity * fill_alpha
        if fill_opacity != 1.0:
            parts.append(f'fill-opacity="{_num(fill_opacity)}"')
        if not style.use_nonzero_winding:
            parts.append('fill-rule="evenodd"')
        if style.stroke is not None:
            parts.append(f'stroke="{stroke}" stroke-width="{_num(style.line_width)}"')
            stroke_opacity = style.line_opacity * stroke_alpha
            if stroke_opacity != 1.0:
                parts.append(f'stroke-opacity="{_num(stroke_opacity)}"')
            if style.dash.dash:
                parts.append(f'stroke-dasharray="{",".join(_num(d) for d in style.dash.dash)}"')
                if style.dash.offset:
                    parts.append(f'stroke-dashoffset="{_num(style.dash.offset)}"')
            parts.extend(self.join_attrs(style.join))
        if not style.transform.is_close(IDENTITY):
            parts.append(f'transform="{_matrix(style.transform)}"')
        return " ".join(parts)

    def join_attrs(self, join: JoinOptions) -> list[str]:
        parts = []
        if join.line_join != _DEFAULT_JOIN.line_join:
            parts.append(f'stroke-linejoin="{_keyword(join.line_join)}"')
        if join.miter_limit != _DEFAULT_JOIN.miter_limit:
            parts.append(f'stroke-miterlimit="{_num(join.miter_limit)}"')
        if join.trail_line_cap != _DEFAULT_JOIN.trail_line_cap:
            parts.append(f'stroke-linecap="{_keyword(join.trail_line_cap)}"')
        if join.lead_line_cap != CapMode.NIL:
            parts.append(f'stroke-leadlinecap="{_keyword(join.lead_line_cap)}"')
        if join.line_gap != GapMode.NIL:
            parts.append(f'stroke-linegap="{_keyword(join.line_gap)}"')
        return parts

    def path(self, sp: StyledPath, indent: str = "  ") -> list[str]:
        elem = f'<path d="{sp.path.to_svg_path()}" {self.style_attrs(sp.style)}/>'
        if not sp.style.masks:
            return [indent + elem]
        # one mask per element: nest a group per extra mask
        lines = [f"{indent}<g mask={quoteattr('url(#' + m + ')')}>" for m in sp.style.masks]
        lines.append(indent + "  " * len(sp.style.masks) + elem)
        lines.extend(f"{indent}</g>" for _ in sp.style.masks)
        return lines

    def mask(self, mask: Mask) -> list[str]:
        b = mask.bounds
        lines = [
            f'    <mask id={quoteattr(mask.id)} x="{_num(b.x)}" y="{_num(b.y)}" '
            f'width="{_num(b.w)}" height="{_num(b.h)}" maskUnits="userSpaceOnUse">'
        ]
        for sp in mask.paths:
            lines.extend(self.path(sp, indent="      "))
        lines.append("    </mask>")
        return lines


def serialize_scene(scene: SvgScene) -> str:
    """Generate SVG markup that draws the same paths as scene."""
    writer = _Writer()
    vb = scene.view_box
    w, h = scene.size
    body: list[str] = []
    for sp in scene.paths:
        body.extend(writer.path(sp))
    for mask in scene.masks.values():
        writer.defs.extend(writer.mask(mask))

    lines = [
        f'<svg xmlns="http://www.w3.org/2000/svg" width="{_num(w)}" height="{_num(h)}" '
        f'viewBox="{_num(vb.x)} {_num(vb.y)} {_num(vb.w)} {_num(vb.h)}">'
    ]
    if writer.defs:
        lines.append("  <defs>")
        lines.extend(writer.defs)
        lines.append("  </defs>")
    lines.extend(body)
    lines.append("</svg>")
    return "\n".join(lines)
