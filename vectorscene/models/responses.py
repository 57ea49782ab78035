"""API response models."""

from __future__ import annotations

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str = "0.1.0"
    elements_supported: int = 0


class StyleSummary(BaseModel):
    fill: str = "none"  # hex color, "gradient" or "none"
    stroke: str = "none"
    fill_opacity: float = 1.0
    stroke_opacity: float = 1.0
    stroke_width: float = 0.0
    nonzero_winding: bool = True
    transform: tuple[float, float, float, float, float, float] = (1.0, 0.0, 0.0, 0.0, 1.0, 0.0)
    masks: list[str] = Field(default_factory=list)


class PathSummary(BaseModel):
    d: str
    op_count: int = 0
    bounds: tuple[float, float, float, float] = (0.0, 0.0, 0.0, 0.0)
    style: StyleSummary = Field(default_factory=StyleSummary)


class ParseResponse(BaseModel):
    width: str = ""
    height: str = ""
    view_box: tuple[float, float, float, float] = (0.0, 0.0, 0.0, 0.0)
    size: tuple[float, float] = (0.0, 0.0)
    path_count: int = 0
    paths: list[PathSummary] = Field(default_factory=list)
    masks: list[str] = Field(default_factory=list)
    processing_time_ms: float = 0.0


class SerializeResponse(BaseModel):
    svg: str


class ErrorResponse(BaseModel):
    error: str
    message: str
