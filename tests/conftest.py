"""Shared test fixtures."""

from __future__ import annotations

import pytest

from vectorscene.svg.parser import SvgParser, tokenize


# Sample SVGs

RED_RECT_SVG = '<svg width="10" height="10"><rect x="0" y="0" width="10" height="10" fill="red"/></svg>'

TRIANGLE_SVG = '<svg width="20" height="20"><path d="M0,0 L10,0 L10,10 Z"/></svg>'

ARC_SVG = '<svg width="20" height="20"><path d="M0,0 A5,5 0 0,1 10,0"/></svg>'

DEFS_USE_SVG = '''<svg xmlns="http://www.w3.org/2000/svg" width="20" height="20">
  <defs><rect id="r" width="5" height="5"/></defs>
  <rect width="5" height="5"/>
  <use href="#r" x="3" y="4"/>
</svg>'''

UNKNOWN_ELEMENT_SVG = '''<svg width="20" height="20">
  <foo bar="1"/>
  <rect width="4" height="4" fill="blue"/>
</svg>'''

NESTED_OPACITY_SVG = '''<svg width="20" height="20">
  <g opacity="0.5">
    <g opacity="0.5">
      <rect width="4" height="4"/>
    </g>
  </g>
</svg>'''

CIRCLE_SVG = '''<svg xmlns="http://www.w3.org/2000/svg" width="24" height="24" viewBox="0 0 24 24" fill="none" stroke="currentColor" stroke-width="2" stroke-linecap="round" stroke-linejoin="round">
  <circle cx="12" cy="12" r="10"/>
</svg>'''

SMILEY_SVG = '''<svg xmlns="http://www.w3.org/2000/svg" width="24" height="24" viewBox="0 0 24 24" fill="none" stroke="currentColor" stroke-width="2" stroke-linecap="round" stroke-linejoin="round">
  <circle cx="12" cy="12" r="10"/>
  <circle cx="8" cy="9" r="1"/>
  <circle cx="16" cy="9" r="1"/>
  <path d="M8 14s1.5 2 4 2 4-2 4-2"/>
</svg>'''

HOME_SVG = '''<svg xmlns="http://www.w3.org/2000/svg" width="24" height="24" viewBox="0 0 24 24" fill="none" stroke="currentColor" stroke-width="2" stroke-linecap="round" stroke-linejoin="round">
  <path d="M15 21v-8a1 1 0 0 0-1-1h-4a1 1 0 0 0-1 1v8"/>
  <path d="M3 10a2 2 0 0 1 .709-1.528l7-5.999a2 2 0 0 1 2.582 0l7 5.999A2 2 0 0 1 21 10v9a2 2 0 0 1-2 2H5a2 2 0 0 1-2-2z"/>
</svg>'''

BAR_CHART_SVG = '''<svg xmlns="http://www.w3.org/2000/svg" width="24" height="24" viewBox="0 0 24 24" fill="none" stroke="currentColor" stroke-width="2" stroke-linecap="round" stroke-linejoin="round">
  <line x1="18" x2="18" y1="20" y2="10"/>
  <line x1="12" x2="12" y1="20" y2="4"/>
  <line x1="6" x2="6" y1="20" y2="14"/>
</svg>'''

GRADIENT_SVG = '''<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 100 50">
  <defs>
    <linearGradient id="fade" x1="0%" x2="100%" gradientUnits="userSpaceOnUse" spreadMethod="reflect">
      <stop offset="0%" stop-color="#ff0000"/>
      <stop offset="50%" style="stop-color: blue; stop-opacity: 0.5"/>
      <stop offset="1"/>
    </linearGradient>
    <radialGradient id="glow" r="25%">
      <stop offset="0" stop-color="white"/>
    </radialGradient>
  </defs>
  <rect width="100" height="50" fill="url(#fade)" stroke="url(#glow)"/>
</svg>'''

MASK_SVG = '''<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 20 20">
  <mask id="m" x="0" y="0" width="20" height="20">
    <rect width="10" height="10" fill="white"/>
  </mask>
  <g mask="url(#m)">
    <circle cx="10" cy="10" r="5" fill="green"/>
  </g>
</svg>'''

GROUP_DEFS_SVG = '''<svg xmlns="http://www.w3.org/2000/svg" xmlns:xlink="http://www.w3.org/1999/xlink" viewBox="0 0 50 50">
  <defs>
    <g id="pair" fill="red">
      <rect width="2" height="2"/>
      <circle cx="5" cy="5" r="1" fill="blue"/>
    </g>
    <path id="tick" d="M0,0 L1,1"/>
  </defs>
  <use xlink:href="#pair" x="10" y="10"/>
  <use href="#tick"/>
  <rect width="1" height="1"/>
</svg>'''

SELF_USE_SVG = '''<svg viewBox="0 0 10 10">
  <defs>
    <g id="loop"><use href="#loop"/></g>
  </defs>
  <use href="#loop"/>
</svg>'''

BAD_PATH_SVG = '''<svg viewBox="0 0 10 10">
  <path d="M0,0 L10"/>
  <rect width="2" height="2"/>
</svg>'''


@pytest.fixture
def parser() -> SvgParser:
    return SvgParser()


@pytest.fixture
def tokens():
    return lambda source: list(tokenize(source))
