"""
FastAPI dependency functions for shared search collaborators.

The result cache and the model gateway are created once in certsearch.main
and stored on ``app.state``. Handlers receive them through these
dependencies, which tests replace with ``app.dependency_overrides``.
"""

from fastapi import Request

from certsearch.config import settings
from certsearch.services.model_gateway import GeminiModelGateway, ModelGateway
from certsearch.services.result_cache import ResultCache


def create_result_cache() -> ResultCache:
    """Build the process-wide cache from CACHE_MAX_ENTRIES / CACHE_TTL_SECONDS."""
    return ResultCache(
        max_entries=settings.cache_max_entries,
        ttl_seconds=settings.cache_ttl_seconds,
    )


def create_model_gateway() -> GeminiModelGateway:
    """Build the Gemini gateway from GEMINI_* settings."""
    return GeminiModelGateway(
        api_key=settings.GEMINI_API_KEY,
        model=settings.GEMINI_MODEL,
        temperature=settings.GEMINI_TEMPERATURE,
        max_output_tokens=settings.GEMINI_MAX_OUTPUT_TOKENS,
    )


def get_result_cache(request: Request) -> ResultCache:
    return request.app.state.result_cache


def get_model_gateway(request: Request) -> ModelGateway:
    return request.app.state.model_gateway


def get_pdi_cache_reads_enabled() -> bool:
    return settings.PDI_CACHE_READS_ENABLED
