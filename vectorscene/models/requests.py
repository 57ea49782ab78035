"""API request models."""

from __future__ import annotations

from pydantic import BaseModel, Field

from vectorscene.config import ErrorMode


class ParseRequest(BaseModel):
    svg: str = Field(..., description="Raw SVG code")
    error_mode: ErrorMode | None = Field(
        default=None,
        description="strict, warn or ignore; defaults to the server setting",
    )


class SerializeRequest(BaseModel):
    svg: str = Field(..., description="Raw SVG code to flatten into resolved paths")
