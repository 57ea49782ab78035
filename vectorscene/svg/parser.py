"""Document builder: XML tokens → SvgScene.

The builder consumes start/end element tokens in order, keeps the style
cascade in step with element nesting, dispatches each element to its
handler and turns whatever the handler drew into a StyledPath.

Usage:
    scene = parse_svg('<svg width="10" height="10"><rect width="10" height="10"/></svg>')
"""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from vectorscene.config import ErrorMode, ParseConfig
from vectorscene.errors import InvalidDocument, SvgError, UnsupportedElement
from vectorscene.svg.cursor import Attrs, Cursor
from vectorscene.svg.definitions import DefinitionStore
from vectorscene.svg.elements import ELEMENT_HANDLERS
from vectorscene.svg.gradients import Gradient, GradientRegistry
from vectorscene.svg.path import Path
from vectorscene.svg.path_data import PathCompiler
from vectorscene.svg.scene import Mask, StyledPath, SvgScene
from vectorscene.svg.units import PercentageReference, resolve_unit

logger = logging.getLogger(__name__)

GRADIENT_TAGS = frozenset({"linearGradient", "radialGradient"})
# Elements inside defs that run normally instead of being captured.
_NOT_CAPTURED = GRADIENT_TAGS | {"mask", "defs"}

_CHUNK_SIZE = 64 * 1024


@dataclass(frozen=True)
class StartElement:
    name: str
    attrs: Attrs = ()


@dataclass(frozen=True)
class EndElement:
    name: str


Token = StartElement | EndElement


def _local(name: str) -> str:
    # "{http://www.w3.org/1999/xlink}href" → "href"
    return name.rsplit("}", 1)[-1]


def tokenize(source: str | bytes) -> Iterator[Token]:
    """Start/end element tokens for an XML document; text and comments are dropped.

    Namespaces are stripped to local names. Malformed XML raises InvalidDocument.
    """
    parser = ET.XMLPullParser(events=("start", "end"))
    try:
        for i in range(0, len(source), _CHUNK_SIZE):
            parser.feed(source[i : i + _CHUNK_SIZE])
            yield from _drain(parser)
        parser.close()
    except ET.ParseError as err:
        raise InvalidDocument(f"malformed XML: {err}") from err
    yield from _drain(parser)


def _drain(parser: ET.XMLPullParser) -> Iterator[Token]:
    for event, elem in parser.read_events():
        if event == "start":
            yield StartElement(_local(elem.tag), tuple((_local(k), v) for k, v in elem.attrib.items()))
        else:
            yield EndElement(_local(elem.tag))
            elem.clear()


class SvgParser:
    """Builds one SvgScene. Holds mutable state: use one instance per document."""

    def __init__(self, config: ParseConfig | None = None) -> None:
        self.config = config or ParseConfig()
        self.scene = SvgScene()
        self.gradients = GradientRegistry()
        self.cursor = Cursor(self.gradients)
        self.compiler = PathCompiler()
        self.definitions = DefinitionStore()
        self.grad: Gradient | None = None
        self.mask: Mask | None = None
        self.in_grad = False
        self.in_defs = False
        self.in_mask = False
        # ids of definitions currently being replayed by use
        self.expanding: set[str] = set()

    @property
    def path(self) -> Path:
        return self.compiler.path

    def unit(self, value: str, axis: PercentageReference) -> float:
        return resolve_unit(self.scene.view_box, value, axis)

    def parse(self, tokens: Iterable[Token]) -> SvgScene:
        seen_element = False
        for token in tokens:
            match token:
                case StartElement(name, attrs):
                    seen_element = True
                    self.start_element(name, attrs)
                case EndElement(name):
                    self.end_element(name)
        if not seen_element:
            raise InvalidDocument("invalid svg data: no element found")
        logger.info(
            "Parsed SVG: %d paths, %d masks, %d gradients, %d definitions",
            len(self.scene.paths),
            len(self.scene.masks),
            len(self.gradients),
            len(self.definitions),
        )
        return self.scene

    def _recover(self, name: str, err: SvgError) -> None:
        """Re-raise in strict mode; otherwise report per the error mode and carry on."""
        if self.config.error_mode == ErrorMode.STRICT:
            raise err
        if self.config.error_mode == ErrorMode.WARN:
            logger.warning("Skipping <%s>: %s: %s", name, type(err).__name__, err)
        else:
            logger.debug("Ignoring <%s>: %s", name, err)

    def start_element(self, name: str, attrs: Attrs) -> None:
        try:
            self.cursor.push_style(attrs)
        except SvgError as err:
            self._recover(name, err)
            # keep push/pop paired with the element's end token
            self.cursor.push_style(())
        try:
            if self._capturing(name):
                self.definitions.capture(name, attrs)
            else:
                self.dispatch(name, attrs)
        except SvgError as err:
            self._recover(name, err)

    def end_element(self, name: str) -> None:
        self.cursor.pop_style()
        if self._capturing(name):
            self.definitions.end(name)
        match name:
            case "mask":
                if self.mask is not None:
                    self.scene.masks[self.mask.id] = self.mask
                    self.mask = None
                self.in_mask = False
            case "defs":
                self.definitions.close()
                self.in_defs = False
            case "linearGradient" | "radialGradient":
                self.in_grad = False
                self.grad = None

    def _capturing(self, name: str) -> bool:
        return self.in_defs and not self.in_grad and not self.in_mask and name not in _NOT_CAPTURED

    def dispatch(self, name: str, attrs: Attrs) -> None:
        """Run the element's handler, then flush anything it drew."""
        if name not in ELEMENT_HANDLERS:
            if self.config.strict_elements and self.config.error_mode == ErrorMode.STRICT:
                raise UnsupportedElement(f"cannot process svg element <{name}>")
            logger.warning("Cannot process svg element <%s>", name)
            return
        handler = ELEMENT_HANDLERS[name]
        if handler is not None:
            try:
                handler(self, attrs)
            except SvgError:
                # a failed element draws nothing
                self.path.clear()
                raise
        self.flush()

    def flush(self) -> None:
        """Move the path buffer into a StyledPath on the active mask or the scene."""
        if len(self.path) == 0:
            return
        styled = StyledPath(self.path.copy(), self.cursor.top)
        if self.in_mask:
            if self.mask is not None:
                self.mask.paths.append(styled)
        else:
            self.scene.paths.append(styled)
        self.path.clear()


def parse_svg(source: str | bytes, error_mode: ErrorMode = ErrorMode.STRICT) -> SvgScene:
    """Parse SVG markup into a scene."""
    return SvgParser(ParseConfig(error_mode=error_mode)).parse(tokenize(source))
