"""
FastAPI application entry point for the certification search backend.

This module creates the FastAPI app instance, builds the shared result cache
and model gateway, and registers all routers.
"""

import logging
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware

from certsearch.config import settings
from certsearch.dependencies import create_model_gateway, create_result_cache
from certsearch.routes.health import router as health_router
from certsearch.routes.search import router as search_router
from certsearch.utils.exceptions import (
    GENERIC_ERROR_MESSAGE,
    CertificationSearchError,
    InvalidInput,
)

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)

logger = logging.getLogger(__name__)


def _get_cors_origins() -> list[str]:
    """
    Get allowed CORS origins based on environment.

    - ENVIRONMENT=production: Uses CORS_ALLOWED_ORIGINS (none if unset)
    - any other environment: Allows all origins for local dev

    Returns:
        List of allowed origin URLs, or ["*"] for development.
    """
    if settings.is_production():
        origins = settings.CORS_ALLOWED_ORIGINS
        if origins:
            logger.info(f"CORS configured for production with {len(origins)} allowed origins")
        else:
            logger.warning(
                "CORS_ALLOWED_ORIGINS not set in production. "
                "No web origins allowed. Set CORS_ALLOWED_ORIGINS for the dashboard."
            )
        return origins

    logger.info(f"CORS configured for {settings.ENVIRONMENT}: allowing all origins")
    return ["*"]


# Create FastAPI app
app = FastAPI(
    title="Certification Search API",
    description="Searches technology certifications by keyword or development plan using Gemini",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc"
)

# One cache and one gateway per process, shared by every request
app.state.result_cache = create_result_cache()
app.state.model_gateway = create_model_gateway()


@app.exception_handler(CertificationSearchError)
async def search_error_handler(request: Request, exc: CertificationSearchError):
    """
    Render search failures as ``{"error": ...}``.

    Upstream and parse failures share one generic message; the detail is
    only logged.
    """
    if isinstance(exc, InvalidInput):
        logger.warning(f"Invalid input on {request.method} {request.url.path}: {exc}")
    else:
        logger.error(
            f"{type(exc).__name__} on {request.method} {request.url.path}: {exc}"
        )

    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.public_message}
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    """Any other failure is a 500 with the generic message."""
    logger.exception(
        f"Unhandled {type(exc).__name__} on {request.method} {request.url.path}: {exc}"
    )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": GENERIC_ERROR_MESSAGE}
    )


def jsonable_errors(exc: RequestValidationError) -> list:
    """Validation errors without non-serializable context objects."""
    return [
        {"loc": list(error.get("loc", ())), "msg": error.get("msg", ""), "type": error.get("type", "")}
        for error in exc.errors()
    ]


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Log detailed validation errors for debugging 422s from the dashboard."""
    logger.error(
        f"Validation error on {request.method} {request.url.path}: {exc.errors()}"
    )
    logger.error(f"Request body preview: {str(await request.body())[:500]}")

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "error": "validation_error",
            "details": jsonable_errors(exc)
        }
    )


# Configure CORS with environment-based origins
cors_origins = _get_cors_origins()
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=False,
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)

# Register routers
app.include_router(health_router)
app.include_router(search_router)

logger.info("FastAPI app initialized successfully")
