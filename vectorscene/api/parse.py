"""POST /api/parse and /api/serialize: run the scene parser over posted SVG."""

from __future__ import annotations

import logging
import time

from fastapi import APIRouter, Depends

from vectorscene.config import ParseConfig, Settings
from vectorscene.dependencies import get_settings
from vectorscene.models.requests import ParseRequest, SerializeRequest
from vectorscene.models.responses import (
    ErrorResponse,
    ParseResponse,
    PathSummary,
    SerializeResponse,
    StyleSummary,
)
from vectorscene.svg.gradients import Gradient, Pattern
from vectorscene.svg.parser import SvgParser, parse_svg, tokenize
from vectorscene.svg.scene import StyledPath
from vectorscene.svg.serializer import serialize_scene

logger = logging.getLogger(__name__)

router = APIRouter()

_ERROR_RESPONSES = {422: {"model": ErrorResponse}}


def _paint_name(pattern: Pattern) -> str:
    if pattern is None:
        return "none"
    if isinstance(pattern, Gradient):
        return "gradient"
    return pattern.hex()


def _summarize(sp: StyledPath) -> PathSummary:
    style = sp.style
    m = style.transform
    ext = sp.path.extent()
    return PathSummary(
        d=sp.path.to_svg_path(),
        op_count=len(sp.path),
        bounds=(ext.x, ext.y, ext.w, ext.h),
        style=StyleSummary(
            fill=_paint_name(style.fill),
            stroke=_paint_name(style.stroke),
            fill_opacity=style.fill_opacity,
            stroke_opacity=style.line_opacity,
            stroke_width=style.line_width if style.stroke is not None else 0.0,
            nonzero_winding=style.use_nonzero_winding,
            transform=(m.scale_x, m.skew_x, m.trans_x, m.skew_y, m.scale_y, m.trans_y),
            masks=list(style.masks),
        ),
    )


@router.post("/parse", response_model=ParseResponse, responses=_ERROR_RESPONSES)
async def parse(req: ParseRequest, settings: Settings = Depends(get_settings)):
    start = time.perf_counter()
    scene = parse_svg(req.svg, error_mode=req.error_mode or settings.vectorscene_error_mode)
    elapsed = (time.perf_counter() - start) * 1000
    logger.debug("Parsed %d paths in %.1f ms", len(scene.paths), elapsed)

    vb = scene.view_box
    return ParseResponse(
        width=scene.width,
        height=scene.height,
        view_box=(vb.x, vb.y, vb.w, vb.h),
        size=scene.size,
        path_count=len(scene.paths),
        paths=[_summarize(sp) for sp in scene.paths],
        masks=sorted(scene.masks),
        processing_time_ms=round(elapsed, 1),
    )


@router.post("/serialize", response_model=SerializeResponse, responses=_ERROR_RESPONSES)
async def serialize(req: SerializeRequest, settings: Settings = Depends(get_settings)):
    scene = SvgParser(ParseConfig.from_settings(settings)).parse(tokenize(req.svg))
    return SerializeResponse(svg=serialize_scene(scene))
