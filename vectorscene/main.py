"""HTTP service around the scene parser."""

from __future__ import annotations

import logging

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from vectorscene.config import settings
from vectorscene.errors import SvgError
from vectorscene.models.responses import ErrorResponse

load_dotenv()

logging.basicConfig(
    level=getattr(logging, settings.vectorscene_log_level.upper(), logging.INFO),
    format="%(asctime)s %(name)s %(levelname)s %(message)s",
)

logger = logging.getLogger(__name__)


async def svg_error_handler(request: Request, exc: SvgError) -> JSONResponse:
    """Parse failures become 422 responses naming the error class."""
    logger.info("Rejected SVG on %s: %s: %s", request.url.path, type(exc).__name__, exc)
    body = ErrorResponse(error=type(exc).__name__, message=str(exc))
    return JSONResponse(status_code=422, content=body.model_dump())


def create_app() -> FastAPI:
    app = FastAPI(title="VectorScene", version="0.1.0")
    app.add_middleware(CORSMiddleware, allow_origins=settings.cors_origins, allow_methods=["GET", "POST"])
    app.add_exception_handler(SvgError, svg_error_handler)

    from vectorscene.api.router import api_router

    app.include_router(api_router)
    logger.debug(
        "Service ready (env=%s, default error mode=%s)",
        settings.vectorscene_env,
        settings.vectorscene_error_mode.value,
    )
    return app


app = create_app()
