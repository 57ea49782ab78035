"""Compiler for the SVG path-data mini-language (the ``d`` attribute).

A command letter is followed by zero or more numbers; extra coordinate
groups repeat the command. Relative commands are made absolute against the
running current point before anything reaches the Path builder.
"""

from __future__ import annotations

import logging
import re

from vectorscene.errors import MalformedPathData
from vectorscene.svg.arc import endpoint_arc
from vectorscene.svg.path import Path
from vectorscene.utils.geometry import FixedPoint

logger = logging.getLogger(__name__)

# Any letter other than the exponent marker starts a new segment.
COMMAND_RE = re.compile(r"[A-DF-Za-df-z]")
# A second "." or a sign (outside an exponent) starts a new number: "0.5.5" is 0.5 and .5.
FLOAT_RE = re.compile(r"[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?")
SEPARATOR_RE = re.compile(r"[\s,]*")

# Numbers consumed per coordinate group.
ARITY = {"M": 2, "L": 2, "H": 1, "V": 1, "C": 6, "S": 4, "Q": 4, "T": 2, "A": 7}


def parse_numbers(text: str) -> list[float]:
    """Split a comma/whitespace separated list of numbers.

    Raises MalformedPathData on anything that is neither a number nor a
    separator.
    """
    values: list[float] = []
    pos = SEPARATOR_RE.match(text, 0).end()
    while pos < len(text):
        m = FLOAT_RE.match(text, pos)
        if m is None:
            raise MalformedPathData(f"unexpected {text[pos]!r} at offset {pos} in {text!r}")
        values.append(float(m.group()))
        pos = SEPARATOR_RE.match(text, m.end()).end()
    return values


class PathCompiler:
    """Executes path data into a Path.

    ``offset`` is the drawing origin shift applied to every emitted point
    (set by ``use``); it does not take part in relative-coordinate
    accumulation.
    """

    def __init__(self, path: Path | None = None) -> None:
        self.path = path if path is not None else Path()
        self.offset: tuple[float, float] = (0.0, 0.0)
        self._reset()

    def _reset(self) -> None:
        self.place_x = 0.0
        self.place_y = 0.0
        self.ctrl_x = 0.0
        self.ctrl_y = 0.0
        self.start_x = 0.0
        self.start_y = 0.0
        self.last_key = " "
        self.in_path = False

    def _fixed(self, x: float, y: float) -> FixedPoint:
        return FixedPoint.from_float(x + self.offset[0], y + self.offset[1])

    def compile(self, d: str) -> Path:
        """Append the drawing described by d to the path and return the path."""
        self._reset()
        segments = [m.start() for m in COMMAND_RE.finditer(d)]
        if not segments:
            if d.strip():
                raise MalformedPathData(f"path data has no command letter: {d!r}")
            return self.path
        if d[: segments[0]].strip():
            raise MalformedPathData(f"path data must start with a command: {d!r}")
        for begin, end in zip(segments, segments[1:] + [len(d)]):
            self.add_segment(d[begin], parse_numbers(d[begin + 1 : end]))
        return self.path

    def _check_arity(self, key: str, pts: list[float]) -> int:
        size = ARITY[key.upper()]
        if len(pts) < size or len(pts) % size != 0:
            raise MalformedPathData(f"command {key!r} needs a multiple of {size} numbers, got {len(pts)}")
        return size

    def _points_to_abs(self, pts: list[float], size: int) -> None:
        """Make each group's pairs absolute against the end point of the previous group."""
        last_x, last_y = self.place_x, self.place_y
        for j in range(0, len(pts), size):
            for i in range(0, size, 2):
                pts[j + i] += last_x
                pts[j + i + 1] += last_y
            last_x, last_y = pts[j + size - 2], pts[j + size - 1]

    def _ensure_subpath(self) -> None:
        # A drawing command right after Z (or with no M at all) starts at the current point.
        if not self.in_path:
            self.start_x, self.start_y = self.place_x, self.place_y
            self.path.start(self._fixed(self.place_x, self.place_y))
            self.in_path = True

    def _reflect_control(self, for_quad: bool) -> None:
        previous = self.last_key.upper()
        if (for_quad and previous in "QT") or (not for_quad and previous in "CS"):
            self.ctrl_x = self.place_x * 2 - self.ctrl_x
            self.ctrl_y = self.place_y * 2 - self.ctrl_y
        else:
            self.ctrl_x, self.ctrl_y = self.place_x, self.place_y

    def add_segment(self, key: str, pts: list[float]) -> None:
        upper = key.upper()
        rel = key.islower()

        if upper == "Z":
            if pts:
                raise MalformedPathData(f"close command takes no numbers, got {len(pts)}")
            if self.in_path:
                self.path.stop(True)
                self.place_x, self.place_y = self.start_x, self.start_y
                self.in_path = False
            self.last_key = key
            return

        if upper not in ARITY:
            logger.warning("Ignoring unknown path command %r", key)
            self.last_key = key
            return

        if upper in "HV":
            self._check_arity(key, pts)
            if rel:
                last = self.place_x if upper == "H" else self.place_y
                for i, v in enumerate(pts):
                    last += v
                    pts[i] = last
        elif upper != "A":
            size = self._check_arity(key, pts)
            if rel:
                self._points_to_abs(pts, size)
        else:
            self._check_arity(key, pts)

        if upper == "M":
            self.start_x, self.start_y = pts[0], pts[1]
            self.in_path = True
            self.path.start(self._fixed(pts[0], pts[1]))
            for i in range(2, len(pts) - 1, 2):
                self.path.line(self._fixed(pts[i], pts[i + 1]))
            self.place_x, self.place_y = pts[-2], pts[-1]
            self.last_key = key
            return

        self._ensure_subpath()
        match upper:
            case "L":
                for i in range(0, len(pts) - 1, 2):
                    self.path.line(self._fixed(pts[i], pts[i + 1]))
                self.place_x, self.place_y = pts[-2], pts[-1]
            case "H":
                for x in pts:
                    self.path.line(self._fixed(x, self.place_y))
                self.place_x = pts[-1]
            case "V":
                for y in pts:
                    self.path.line(self._fixed(self.place_x, y))
                self.place_y = pts[-1]
            case "Q":
                for i in range(0, len(pts) - 3, 4):
                    self.path.quad_bezier(self._fixed(pts[i], pts[i + 1]), self._fixed(pts[i + 2], pts[i + 3]))
                self.ctrl_x, self.ctrl_y = pts[-4], pts[-3]
                self.place_x, self.place_y = pts[-2], pts[-1]
            case "T":
                for i in range(0, len(pts) - 1, 2):
                    self._reflect_control(for_quad=True)
                    self.path.quad_bezier(self._fixed(self.ctrl_x, self.ctrl_y), self._fixed(pts[i], pts[i + 1]))
                    self.last_key = key
                    self.place_x, self.place_y = pts[i], pts[i + 1]
            case "C":
                for i in range(0, len(pts) - 5, 6):
                    self.path.cube_bezier(
                        self._fixed(pts[i], pts[i + 1]),
                        self._fixed(pts[i + 2], pts[i + 3]),
                        self._fixed(pts[i + 4], pts[i + 5]),
                    )
                self.ctrl_x, self.ctrl_y = pts[-4], pts[-3]
                self.place_x, self.place_y = pts[-2], pts[-1]
            case "S":
                for i in range(0, len(pts) - 3, 4):
                    self._reflect_control(for_quad=False)
                    self.path.cube_bezier(
                        self._fixed(self.ctrl_x, self.ctrl_y),
                        self._fixed(pts[i], pts[i + 1]),
                        self._fixed(pts[i + 2], pts[i + 3]),
                    )
                    self.last_key = key
                    self.ctrl_x, self.ctrl_y = pts[i], pts[i + 1]
                    self.place_x, self.place_y = pts[i + 2], pts[i + 3]
            case "A":
                for i in range(0, len(pts) - 6, 7):
                    self.add_arc(pts[i : i + 7], rel)
        self.last_key = key

    def add_arc(self, group: list[float], rel: bool) -> None:
        """One ``rx ry rotation large-arc sweep x y`` group."""
        rx, ry, rotation, large_arc, sweep, x, y = group
        if rel:
            x += self.place_x
            y += self.place_y
        start = (self.place_x, self.place_y)
        if (x, y) == start:
            return
        if rx == 0 or ry == 0:
            self.path.line(self._fixed(x, y))
        else:
            for c in endpoint_arc(start, (x, y), rx, ry, rotation, large_arc != 0, sweep != 0):
                self.path.cube_bezier(self._fixed(*c.ctrl1), self._fixed(*c.ctrl2), self._fixed(*c.end))
        self.place_x, self.place_y = x, y

