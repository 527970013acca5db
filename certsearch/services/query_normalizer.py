"""
Query normalization for both search flows.

Keyword flow: the raw term is trimmed and lowercased; the result is both the
cache key and the prompt input.

PDI flow: each category keeps only its weakest items (every item tied at the
minimum level). The cache key is built from those weakest items, so two plans
that differ only in stronger skills share a cache entry.
"""

import json
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from certsearch.schemas.certifications import SkillItem
from certsearch.utils.exceptions import InvalidInput

PDI_CACHE_KEY_PREFIX = "pdi:"


@dataclass(frozen=True)
class PdiCriteria:
    """Weakest items per category, ready for prompting and post-filtering."""
    soft_skills: List[SkillItem] = field(default_factory=list)
    hard_skills: List[SkillItem] = field(default_factory=list)
    tools: List[SkillItem] = field(default_factory=list)

    @property
    def search_terms(self) -> List[str]:
        """Names of all weakest items, in category order."""
        return [
            item.name
            for item in (*self.soft_skills, *self.hard_skills, *self.tools)
            if item.name.strip()
        ]

    @property
    def is_empty(self) -> bool:
        return not (self.soft_skills or self.hard_skills or self.tools)

    @property
    def cache_key(self) -> str:
        def serialize(items: Sequence[SkillItem]) -> list:
            return [
                {"name": item.name.strip().lower(), "level": item.level}
                for item in items
            ]

        payload = {
            "softSkills": serialize(self.soft_skills),
            "hardSkills": serialize(self.hard_skills),
            "tools": serialize(self.tools),
        }
        return PDI_CACHE_KEY_PREFIX + json.dumps(
            payload, sort_keys=True, ensure_ascii=False, separators=(",", ":")
        )


def normalize_query(raw: Optional[str]) -> str:
    """
    Trim and lowercase a free-text search term.

    Raises:
        InvalidInput: If nothing is left after trimming.
    """
    normalized = (raw or "").strip().lower()
    if not normalized:
        raise InvalidInput("Search query is empty")
    return normalized


def select_weakest_items(items: Sequence[SkillItem]) -> List[SkillItem]:
    """
    Return every item sharing the minimum level, in input order.

    Items with a blank name are ignored; they cannot be searched for.

    Example:
        >>> select_weakest_items([
        ...     SkillItem(name="Comunicação", level=2),
        ...     SkillItem(name="Empatia", level=4),
        ...     SkillItem(name="Escuta", level=2),
        ... ])
        [SkillItem(name='Comunicação', level=2), SkillItem(name='Escuta', level=2)]
    """
    named = [item for item in items if item.name.strip()]
    if not named:
        return []
    lowest = min(item.level for item in named)
    return [item for item in named if item.level == lowest]


def build_pdi_criteria(
    soft_skills: Sequence[SkillItem] = (),
    hard_skills: Sequence[SkillItem] = (),
    tools: Sequence[SkillItem] = (),
) -> PdiCriteria:
    """Reduce a development plan to the weakest items of each category."""
    return PdiCriteria(
        soft_skills=select_weakest_items(soft_skills),
        hard_skills=select_weakest_items(hard_skills),
        tools=select_weakest_items(tools),
    )
