"""
Certification Search - Prompt Templates

This package contains the prompt templates for the Gemini-based certification
search.

Architecture:
- Pattern: Single-shot LLM call, JSON requested in the prompt text
- Model: Gemini (GEMINI_MODEL)
- Output: JSON object with a "certifications" array, parsed from text

The gateway that sends these prompts is in:
- certsearch/services/model_gateway.py

The orchestration (cache, prompt, gateway, filters) is in:
- certsearch/services/search_service.py
"""

from certsearch.agents.certification.prompts import (
    build_keyword_search_prompt,
    build_pdi_search_prompt,
    format_skill_item,
    sanitize_user_text,
)

__all__ = [
    "build_keyword_search_prompt",
    "build_pdi_search_prompt",
    "format_skill_item",
    "sanitize_user_text",
]
