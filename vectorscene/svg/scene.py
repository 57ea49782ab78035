"""Scene data model: the parse result handed to painting backends."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field

from vectorscene.svg.gradients import Pattern
from vectorscene.svg.paint import BLACK, SolidColor
from vectorscene.svg.path import Path
from vectorscene.utils.geometry import Bounds
from vectorscene.utils.matrix import IDENTITY, Matrix2D


class JoinMode(enum.IntEnum):
    ARC = 0
    ROUND = 1
    BEVEL = 2
    MITER = 3
    MITER_CLIP = 4
    ARC_CLIP = 5


class CapMode(enum.IntEnum):
    NIL = 0
    BUTT = 1
    SQUARE = 2
    ROUND = 3
    CUBIC = 4
    QUADRATIC = 5


class GapMode(enum.IntEnum):
    NIL = 0
    FLAT = 1
    ROUND = 2
    CUBIC = 3
    QUADRATIC = 4


@dataclass(frozen=True)
class DashOptions:
    dash: tuple[float, ...] = ()
    offset: float = 0.0


@dataclass(frozen=True)
class JoinOptions:
    miter_limit: float = 4.0
    line_join: JoinMode = JoinMode.BEVEL
    trail_line_cap: CapMode = CapMode.BUTT
    lead_line_cap: CapMode = CapMode.NIL  # NIL: same as trail_line_cap
    line_gap: GapMode = GapMode.NIL


@dataclass(frozen=True)
class PathStyle:
    """Resolved presentation state for one element.

    Frozen: the cascade derives a new snapshot per element with
    dataclasses.replace, so a snapshot captured into a StyledPath never
    changes afterwards.
    """

    fill: Pattern = BLACK
    stroke: Pattern = None
    dash: DashOptions = DashOptions()
    join: JoinOptions = JoinOptions()
    fill_opacity: float = 1.0
    line_opacity: float = 1.0
    line_width: float = 2.0
    use_nonzero_winding: bool = True
    transform: Matrix2D = IDENTITY
    masks: tuple[str, ...] = ()
    current_color: SolidColor = BLACK


DEFAULT_STYLE = PathStyle()


@dataclass
class StyledPath:
    path: Path
    style: PathStyle


@dataclass
class Mask:
    """A mask definition; paths drawn inside it belong to the mask, not the scene."""

    id: str
    paths: list[StyledPath] = field(default_factory=list)
    bounds: Bounds = field(default_factory=Bounds)
    transform: Matrix2D = IDENTITY


@dataclass(frozen=True)
class Definition:
    """An element captured under defs, replayed only through use."""

    id: str
    tag: str
    attrs: tuple[tuple[str, str], ...] = ()


# Tag of the sentinel closing a group inside a captured definition.
END_GROUP = "endg"


@dataclass
class SvgScene:
    """Everything parsed from one document."""

    width: str = ""
    height: str = ""
    view_box: Bounds = field(default_factory=Bounds)
    suggested_size: tuple[float, float] = (0.0, 0.0)
    transform: Matrix2D = IDENTITY
    masks: dict[str, Mask] = field(default_factory=dict)
    paths: list[StyledPath] = field(default_factory=list)

    @property
    def size(self) -> tuple[float, float]:
        """Suggested size, falling back to the viewBox size."""
        w, h = self.suggested_size
        return (w or self.view_box.w, h or self.view_box.h)

    @property
    def aspect_ratio(self) -> float:
        w, h = self.size
        return w / h if h else 0.0

    def offset_to_center(self, w: float, h: float) -> Matrix2D:
        """Matrix that scales the viewBox to fit inside w×h, preserving aspect ratio, and centers it."""
        vb = self.view_box
        if vb.w == 0 or vb.h == 0:
            return IDENTITY
        scale = min(w / vb.w, h / vb.h)
        dx = (w - vb.w * scale) / 2 - vb.x * scale
        dy = (h - vb.h * scale) / 2 - vb.y * scale
        return IDENTITY.translate(dx, dy).scale(scale, scale)
