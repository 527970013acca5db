"""
AI Components for the certification search backend.

1. Certification Search (Single-Shot LLM)
   - Prompt templates for keyword and PDI searches
   - Located in: certsearch/agents/certification/prompts.py
   - Sent to Gemini by certsearch/services/model_gateway.py
"""

from certsearch.agents.certification import (
    build_keyword_search_prompt,
    build_pdi_search_prompt,
)

__all__ = [
    "build_keyword_search_prompt",
    "build_pdi_search_prompt",
]
