"""VectorScene SVG parser: SVG markup → backend-agnostic vector scene."""

from vectorscene.svg.parser import EndElement, StartElement, SvgParser, parse_svg, tokenize
from vectorscene.svg.scene import DEFAULT_STYLE, Mask, PathStyle, StyledPath, SvgScene
from vectorscene.svg.path import Path
from vectorscene.svg.serializer import serialize_scene

__all__ = [
    "parse_svg",
    "tokenize",
    "SvgParser",
    "StartElement",
    "EndElement",
    "SvgScene",
    "StyledPath",
    "PathStyle",
    "DEFAULT_STYLE",
    "Mask",
    "Path",
    "serialize_scene",
]
