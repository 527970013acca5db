"""
Certification Search Service

Orchestrates the two search flows:

Keyword search (GET /api/search):
1. Normalize the query (trim + lowercase); empty → InvalidInput
2. Cache lookup; a hit returns source="cache" without calling the model
3. Build the prompt and call the Model Gateway
4. Store the parsed certifications under the normalized query
5. Return source="IA"

PDI search (POST /api/search):
1. Reduce each category to its weakest items
2. Optional cache lookup (off unless PDI_CACHE_READS_ENABLED)
3. Build the prompt and call the Model Gateway
4. Keep only records mentioning a weakest item in name or description
5. Store the filtered certifications and return source="IA"

The cache and gateway are passed in by the caller; this module holds no state.
"""

from typing import Optional, Sequence

from certsearch.agents.certification.prompts import (
    build_keyword_search_prompt,
    build_pdi_search_prompt,
)
from certsearch.schemas.certifications import (
    SOURCE_CACHE,
    SOURCE_MODEL,
    SearchResult,
    SkillItem,
)
from certsearch.services.model_gateway import ModelGateway
from certsearch.services.query_normalizer import build_pdi_criteria, normalize_query
from certsearch.services.result_cache import ResultCache
from certsearch.services.result_filter import filter_by_search_terms
from certsearch.utils.logging import get_logger

logger = get_logger(__name__)


async def search_by_keyword(
    query: Optional[str],
    cache: ResultCache,
    gateway: ModelGateway,
) -> SearchResult:
    """
    Search certifications related to a free-text term.

    Args:
        query: Raw search term as typed by the user
        cache: Shared result cache
        gateway: Model gateway used on cache misses

    Returns:
        SearchResult with source "cache" or "IA"

    Raises:
        InvalidInput: If the query is empty after trimming
        UpstreamUnavailable: If the model could not be reached
        MalformedModelResponse: If the model answer could not be parsed
    """
    normalized = normalize_query(query)

    cached = cache.get(normalized)
    if cached is not None:
        logger.info(f"Serving from cache: query='{normalized}'")
        return SearchResult(certifications=cached, source=SOURCE_CACHE)

    logger.info(f"Fetching from model: query='{normalized}'")
    prompt = build_keyword_search_prompt(normalized)
    certifications = gateway.fetch_certifications(prompt)

    cache.put(normalized, certifications)

    return SearchResult(certifications=tuple(certifications), source=SOURCE_MODEL)


async def search_by_pdi(
    soft_skills: Sequence[SkillItem],
    hard_skills: Sequence[SkillItem],
    tools: Sequence[SkillItem],
    cache: ResultCache,
    gateway: ModelGateway,
    use_cached: bool = False,
) -> SearchResult:
    """
    Search certifications for the weakest items of a development plan.

    Args:
        soft_skills: Self-rated soft skills
        hard_skills: Self-rated hard skills
        tools: Self-rated tools
        cache: Shared result cache (always written, read only if use_cached)
        gateway: Model gateway
        use_cached: Serve a previous result for the same weakest items

    Returns:
        SearchResult; certifications are already post-filtered by the
        weakest item names
    """
    criteria = build_pdi_criteria(soft_skills, hard_skills, tools)
    cache_key = criteria.cache_key

    if criteria.is_empty:
        logger.warning("PDI search with no items; prompting with empty criteria")

    if use_cached:
        cached = cache.get(cache_key)
        if cached is not None:
            logger.info(f"Serving PDI search from cache: terms={criteria.search_terms}")
            return SearchResult(certifications=cached, source=SOURCE_CACHE)

    logger.info(f"Fetching PDI search from model: terms={criteria.search_terms}")
    prompt = build_pdi_search_prompt(criteria)
    certifications = gateway.fetch_certifications(prompt)

    relevant = filter_by_search_terms(certifications, criteria.search_terms)
    logger.info(
        f"PDI post-filter kept {len(relevant)} of {len(certifications)} certification(s)"
    )

    cache.put(cache_key, relevant)

    return SearchResult(certifications=tuple(relevant), source=SOURCE_MODEL)
