"""Health check endpoint."""

from __future__ import annotations

from fastapi import APIRouter

from vectorscene.models.responses import HealthResponse
from vectorscene.svg.elements import ELEMENT_HANDLERS

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    return HealthResponse(
        status="ok",
        version="0.1.0",
        elements_supported=len(ELEMENT_HANDLERS),
    )
