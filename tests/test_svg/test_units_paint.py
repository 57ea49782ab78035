"""Tests for length units and color parsing."""

import logging
import math

import pytest

from vectorscene.errors import InvalidNumber, ParamMismatch
from vectorscene.svg.paint import BLACK, TRANSPARENT, SolidColor, parse_svg_color
from vectorscene.svg.units import (
    PercentageReference,
    find_unit,
    parse_basic_float,
    parse_unit,
    read_fraction,
    resolve_unit,
)
from vectorscene.utils.geometry import Bounds


@pytest.mark.parametrize(
    "text, px",
    [
        ("10", 10.0),
        ("10px", 10.0),
        ("1in", 96.0),
        ("2.54cm", 96.0),
        ("25.4mm", 96.0),
        ("72pt", 96.0),
        ("6pc", 96.0),
        ("101.6Q", 96.0),
        (" -3 ", -3.0),
    ],
)
def test_absolute_units(text, px):
    value, is_percentage = parse_unit(text)
    assert value == pytest.approx(px)
    assert not is_percentage


def test_percentage_stays_unscaled():
    assert parse_unit("50%") == (50.0, True)
    assert find_unit("50%") == ("%", "50")
    assert find_unit("12") == ("px", "12")


def test_invalid_number():
    with pytest.raises(InvalidNumber):
        parse_unit("abc")
    with pytest.raises(InvalidNumber):
        parse_basic_float("1.2.3px")


def test_read_fraction():
    assert read_fraction("50%") == 0.5
    assert read_fraction("0.25") == 0.25


def test_resolve_percentages():
    vb = Bounds(0, 0, 200, 100)
    assert resolve_unit(vb, "50%", PercentageReference.WIDTH) == 100.0
    assert resolve_unit(vb, "50%", PercentageReference.HEIGHT) == 50.0
    diag = math.sqrt(200 * 200 + 100 * 100) / math.sqrt(2)
    assert resolve_unit(vb, "50%", PercentageReference.DIAGONAL) == pytest.approx(diag / 2)
    assert resolve_unit(vb, "7", PercentageReference.DIAGONAL) == 7.0


@pytest.mark.parametrize(
    "text, color",
    [
        ("red", SolidColor(255, 0, 0)),
        ("RED", SolidColor(255, 0, 0)),
        ("cornflowerblue", SolidColor(100, 149, 237)),
        ("#0f0", SolidColor(0, 255, 0)),
        ("#0000FF", SolidColor(0, 0, 255)),
        ("rgb(255, 0, 0)", SolidColor(255, 0, 0)),
        ("rgb(100%, 20%, 0%)", SolidColor(255, 51, 0)),
        ("rgb(50.5%, -5%, 110%)", SolidColor(129, 0, 255)),
        ("rgb(300, -5, 0)", SolidColor(255, 0, 0)),
        ("rgba(0, 0, 0, 0.5)", SolidColor(0, 0, 0, 128)),
        ("rgba(10, 20, 30, 100%)", SolidColor(10, 20, 30, 255)),
        ("transparent", TRANSPARENT),
    ],
)
def test_colors(text, color):
    assert parse_svg_color(text) == color


def test_none_and_current_color():
    assert parse_svg_color("none") is None
    blue = SolidColor(0, 0, 255)
    assert parse_svg_color("currentColor", blue) == blue
    assert parse_svg_color("currentcolor") == BLACK


@pytest.mark.parametrize(
    "text",
    ["notacolor", "#12", "rgb(1,2)", "rgba(1,2,3)", "rgb(a,b,c)", "rgb(1,2,3", "rgb(10%,2,3)", "rgb(a%,0%,0%)"],
)
def test_bad_colors(text):
    with pytest.raises(ParamMismatch):
        parse_svg_color(text)


def test_unresolved_url_color_falls_back_to_black(caplog):
    with caplog.at_level(logging.WARNING):
        assert parse_svg_color("url(#missing)") == BLACK
    assert "url() color" in caplog.text


def test_hex():
    assert SolidColor(255, 128, 0).hex() == "#ff8000"
