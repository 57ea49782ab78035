"""Gradient definitions and the per-parse registry.

Gradient coordinates may be percentages whose meaning depends on
``gradientUnits``, which can appear anywhere in the element's attributes. The
raw strings are captured first and resolved by Gradient.resolve() once the
whole attribute list has been read.
"""

from __future__ import annotations

import copy
import enum
import logging
from dataclasses import dataclass, field
from typing import NamedTuple

from vectorscene.svg.paint import BLACK, SolidColor
from vectorscene.svg.units import PercentageReference, resolve_unit
from vectorscene.utils.geometry import Bounds
from vectorscene.utils.matrix import IDENTITY, Matrix2D

logger = logging.getLogger(__name__)


class GradientUnits(enum.IntEnum):
    OBJECT_BOUNDING_BOX = 0
    USER_SPACE_ON_USE = 1


class SpreadMethod(enum.IntEnum):
    PAD = 0
    REFLECT = 1
    REPEAT = 2


class Linear(NamedTuple):
    x1: float
    y1: float
    x2: float
    y2: float


class Radial(NamedTuple):
    cx: float
    cy: float
    fx: float
    fy: float
    r: float
    fr: float


_W = PercentageReference.WIDTH
_H = PercentageReference.HEIGHT
_D = PercentageReference.DIAGONAL

LINEAR_DEFAULTS = ("0%", "0%", "100%", "0")
LINEAR_AXES = (_W, _H, _W, _H)
RADIAL_DEFAULTS = ("50%", "50%", "50%", "50%", "50%", "50%")
RADIAL_AXES = (_W, _H, _W, _H, _D, _D)


@dataclass
class GradStop:
    color: SolidColor | None = None  # None: inherit from the referencing paint
    offset: float = 0.0
    opacity: float = 1.0


@dataclass
class Gradient:
    """A linear or radial color ramp."""

    radial: bool = False
    direction: Linear | Radial = Linear(0.0, 0.0, 1.0, 0.0)
    stops: list[GradStop] = field(default_factory=list)
    bounds: Bounds = field(default_factory=Bounds)
    matrix: Matrix2D = IDENTITY
    spread: SpreadMethod = SpreadMethod.PAD
    units: GradientUnits = GradientUnits.OBJECT_BOUNDING_BOX
    # Unresolved x1,y1,x2,y2 or cx,cy,fx,fy,r,fr strings
    raw_direction: tuple[str, ...] = LINEAR_DEFAULTS

    def resolve(self) -> Linear | Radial:
        """Resolve raw_direction into absolute coordinates. Idempotent."""
        box = Bounds(w=1.0, h=1.0)
        if self.units == GradientUnits.USER_SPACE_ON_USE:
            box = self.bounds
        axes = RADIAL_AXES if self.radial else LINEAR_AXES
        values = [resolve_unit(box, s, axis) for s, axis in zip(self.raw_direction, axes)]
        self.direction = Radial(*values) if self.radial else Linear(*values)
        return self.direction

    def apply_path_extent(self, extent: Bounds) -> Matrix2D:
        """Matrix for painting over a path with the given extent.

        For objectBoundingBox gradients the unit box is mapped onto the extent
        ahead of the gradient's own matrix. The gradient itself is not
        changed: paths sharing a style share its gradient.
        """
        if self.units == GradientUnits.OBJECT_BOUNDING_BOX:
            return IDENTITY.translate(extent.x, extent.y).scale(extent.w, extent.h).multiply(self.matrix)
        return self.matrix


Pattern = SolidColor | Gradient | None


def pattern_color(pattern: Pattern) -> SolidColor:
    """A representative solid color: the color itself, a gradient's first colored stop, else black."""
    if isinstance(pattern, SolidColor):
        return pattern
    if isinstance(pattern, Gradient):
        for stop in pattern.stops:
            if stop.color is not None:
                return stop.color
    return BLACK


class GradientRegistry:
    """Gradients keyed by id, internal to one parse."""

    def __init__(self) -> None:
        self._gradients: dict[str, Gradient] = {}

    def register(self, grad_id: str, grad: Gradient) -> None:
        if grad_id in self._gradients:
            logger.debug("Gradient %r redefined", grad_id)
        self._gradients[grad_id] = grad

    def get(self, grad_id: str) -> Gradient | None:
        return self._gradients.get(grad_id)

    def __contains__(self, grad_id: str) -> bool:
        return grad_id in self._gradients

    def __len__(self) -> int:
        return len(self._gradients)

    def resolve_url(self, v: str, inherited: Pattern) -> Gradient | None:
        """Resolve ``url(#id)`` to a private copy of a registered gradient.

        Stops without a color take the color of the inherited paint. Returns
        None when v is not a same-document reference to a known gradient.
        """
        v = v.strip()
        if not (v.startswith("url(") and v.endswith(")")):
            return None
        url = v[4:-1].strip().strip("'\"")
        if not url.startswith("#"):
            return None
        grad = self._gradients.get(url[1:])
        if grad is None:
            return None
        resolved = copy.copy(grad)
        resolved.stops = list(grad.stops)
        if any(s.color is None for s in resolved.stops):
            fallback = pattern_color(inherited)
            resolved.stops = [
                GradStop(fallback, s.offset, s.opacity) if s.color is None else s for s in resolved.stops
            ]
        return resolved
