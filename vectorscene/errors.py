"""Error taxonomy for SVG scene parsing.

Every error derives from SvgError, itself a ValueError, so callers that only
care about "bad input" can catch ValueError.
"""

from __future__ import annotations


class SvgError(ValueError):
    """Base class for all parse failures."""


class MalformedPathData(SvgError):
    """Bad token or wrong coordinate count in path data."""


class ParamMismatch(SvgError):
    """Wrong argument count for a transform function, viewBox or color function."""


class SingularMatrix(SvgError):
    """A non-invertible transform was inverted."""


class UnresolvedReference(SvgError):
    """A same-document reference names an id that does not exist."""


class UnsupportedReference(SvgError):
    """A reference is not a same-document id selector."""


class InvalidDocument(SvgError):
    """The token stream held no element, or was not well-formed XML."""


class EmptyIdentifier(SvgError):
    """A zero-length id where one is required."""


class InvalidNumber(SvgError):
    """A number or length could not be parsed."""


class UnsupportedElement(SvgError):
    """An unknown element, raised only when the caller asks for it."""
