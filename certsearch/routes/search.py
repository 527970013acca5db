"""
Certification search API endpoints.

Endpoints:
- GET /api/search?query=...  Keyword search (cached by normalized query)
- POST /api/search           PDI search over the weakest self-rated items

Errors are raised as CertificationSearchError subclasses and rendered as
``{"error": ...}`` by the handler registered in certsearch.main.
"""

import logging
from typing import Annotated, Optional

from fastapi import APIRouter, Body, Depends, Query, status

from certsearch.dependencies import (
    get_model_gateway,
    get_pdi_cache_reads_enabled,
    get_result_cache,
)
from certsearch.schemas.certifications import (
    ErrorResponse,
    PdiSearchRequest,
    SearchResponse,
    SearchResult,
)
from certsearch.services.model_gateway import ModelGateway
from certsearch.services.result_cache import ResultCache
from certsearch.services.result_filter import apply_facet_filters, derive_facets
from certsearch.services.search_service import search_by_keyword, search_by_pdi

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/search", tags=["search"])

ERROR_RESPONSES = {
    status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse, "description": "Empty search query"},
    status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse, "description": "Model unavailable or unreadable answer"},
}


def _to_response(
    result: SearchResult,
    level: Optional[str] = None,
    language: Optional[str] = None,
) -> SearchResponse:
    """Attach facets from the full result, then apply the selected facets."""
    facets = derive_facets(result.certifications)
    certifications = apply_facet_filters(result.certifications, level=level, language=language)
    return SearchResponse(
        certifications=certifications,
        source=result.source,
        facets=facets,
    )


@router.get(
    "",
    response_model=SearchResponse,
    status_code=status.HTTP_200_OK,
    responses=ERROR_RESPONSES,
    summary="Search certifications by keyword",
    description="""
    Searches technology certifications related to a free-text term.

    - The term is trimmed and lowercased; a blank term returns 400
    - Repeated searches for the same normalized term are served from the
      in-process cache (source="cache") without calling the model
    - Optional `level` and `language` narrow the returned certifications;
      `facets` always lists the values of the full result
    """
)
async def search_certifications(
    cache: Annotated[ResultCache, Depends(get_result_cache)],
    gateway: Annotated[ModelGateway, Depends(get_model_gateway)],
    query: Annotated[Optional[str], Query(description="Technology to search, e.g. 'Azure'")] = None,
    level: Annotated[Optional[str], Query(description="Keep only this level ('all' = no filter)")] = None,
    language: Annotated[Optional[str], Query(description="Keep only this exam language ('all' = no filter)")] = None,
) -> SearchResponse:
    logger.info(f"GET /api/search called, query='{(query or '')[:50]}'")

    result = await search_by_keyword(query=query, cache=cache, gateway=gateway)

    response = _to_response(result, level=level, language=language)
    logger.info(
        f"Returning {len(response.certifications)} certification(s), source={response.source}"
    )
    return response


@router.post(
    "",
    response_model=SearchResponse,
    status_code=status.HTTP_200_OK,
    responses={status.HTTP_500_INTERNAL_SERVER_ERROR: ERROR_RESPONSES[status.HTTP_500_INTERNAL_SERVER_ERROR]},
    summary="Search certifications for a development plan",
    description="""
    Recommends certifications for the weakest items of a personal development
    plan (PDI).

    - In each category (softSkills, hardSkills, tools) only the items tied at
      the lowest level are sent to the model
    - Returned records must mention one of those items in their name or
      description; the rest are dropped
    - Every category is optional; an empty body is accepted
    """
)
async def search_certifications_for_pdi(
    cache: Annotated[ResultCache, Depends(get_result_cache)],
    gateway: Annotated[ModelGateway, Depends(get_model_gateway)],
    use_cached: Annotated[bool, Depends(get_pdi_cache_reads_enabled)],
    request: Annotated[Optional[PdiSearchRequest], Body()] = None,
) -> SearchResponse:
    request = request or PdiSearchRequest()
    logger.info(
        "POST /api/search called, "
        f"soft_skills={len(request.soft_skills)}, "
        f"hard_skills={len(request.hard_skills)}, "
        f"tools={len(request.tools)}"
    )

    result = await search_by_pdi(
        soft_skills=request.soft_skills,
        hard_skills=request.hard_skills,
        tools=request.tools,
        cache=cache,
        gateway=gateway,
        use_cached=use_cached,
    )

    response = _to_response(result)
    logger.info(
        f"Returning {len(response.certifications)} certification(s), source={response.source}"
    )
    return response
