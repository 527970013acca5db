"""
Service layer for the certification search backend.

Contains the search logic that:
- Normalizes queries and development plans into cache keys and prompt input
- Caches parsed model results for the life of the process
- Calls Gemini through the Model Gateway and extracts certifications
- Derives facets and filters result sets

Services act as the glue between routes (HTTP layer) and the model.
"""

from .model_gateway import (
    GeminiModelGateway,
    ModelGateway,
    extract_json_text,
    parse_certifications,
    parse_model_payload,
)
from .query_normalizer import (
    PdiCriteria,
    build_pdi_criteria,
    normalize_query,
    select_weakest_items,
)
from .result_cache import ResultCache
from .result_filter import (
    apply_facet_filters,
    available_languages,
    available_levels,
    derive_facets,
    filter_by_search_terms,
    matches_facets,
)
from .search_service import search_by_keyword, search_by_pdi

__all__ = [
    "GeminiModelGateway",
    "ModelGateway",
    "extract_json_text",
    "parse_certifications",
    "parse_model_payload",
    "PdiCriteria",
    "build_pdi_criteria",
    "normalize_query",
    "select_weakest_items",
    "ResultCache",
    "apply_facet_filters",
    "available_languages",
    "available_levels",
    "derive_facets",
    "filter_by_search_terms",
    "matches_facets",
    "search_by_keyword",
    "search_by_pdi",
]
