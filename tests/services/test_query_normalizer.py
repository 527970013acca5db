"""
Tests for query normalization and weakest-item selection.
"""

import pytest

from certsearch.schemas.certifications import SkillItem
from certsearch.services.query_normalizer import (
    PDI_CACHE_KEY_PREFIX,
    build_pdi_criteria,
    normalize_query,
    select_weakest_items,
)
from certsearch.utils.exceptions import InvalidInput


class TestNormalizeQuery:
    """Tests for normalize_query."""

    def test_trims_and_lowercases(self):
        assert normalize_query("  Azure DevOps ") == "azure devops"

    def test_equivalent_inputs_share_a_key(self):
        assert normalize_query("AWS") == normalize_query("  aws\t")

    @pytest.mark.parametrize("raw", ["", "   ", "\n\t", None])
    def test_empty_input_is_rejected(self, raw):
        with pytest.raises(InvalidInput):
            normalize_query(raw)

    def test_inner_whitespace_is_kept(self):
        assert normalize_query("Google  Cloud") == "google  cloud"


class TestSelectWeakestItems:
    """Tests for select_weakest_items."""

    def test_ties_at_minimum_are_all_kept(self):
        items = [
            SkillItem(name="Comunicação", level=2),
            SkillItem(name="Empatia", level=4),
            SkillItem(name="Escuta", level=2),
        ]
        assert select_weakest_items(items) == [
            SkillItem(name="Comunicação", level=2),
            SkillItem(name="Escuta", level=2),
        ]

    def test_single_lowest_item(self):
        items = [SkillItem(name="SQL", level=3), SkillItem(name="Python", level=1)]
        assert select_weakest_items(items) == [SkillItem(name="Python", level=1)]

    def test_empty_category(self):
        assert select_weakest_items([]) == []

    def test_all_equal_levels_keeps_everything(self):
        items = [SkillItem(name="Git", level=5), SkillItem(name="Docker", level=5)]
        assert select_weakest_items(items) == items

    def test_blank_named_item_cannot_take_over_category(self):
        items = [SkillItem(name="  ", level=1), SkillItem(name="Python", level=3)]
        assert select_weakest_items(items) == [SkillItem(name="Python", level=3)]

    def test_only_blank_names_is_an_empty_category(self):
        assert select_weakest_items([SkillItem(name="", level=1)]) == []


class TestPdiCriteria:
    """Tests for build_pdi_criteria and its derived values."""

    def test_each_category_reduced_independently(self):
        criteria = build_pdi_criteria(
            soft_skills=[SkillItem(name="Liderança", level=3), SkillItem(name="Negociação", level=1)],
            hard_skills=[SkillItem(name="Python", level=1)],
            tools=[],
        )
        assert criteria.soft_skills == [SkillItem(name="Negociação", level=1)]
        assert criteria.hard_skills == [SkillItem(name="Python", level=1)]
        assert criteria.tools == []
        assert criteria.search_terms == ["Negociação", "Python"]
        assert criteria.is_empty is False

    def test_empty_plan(self):
        criteria = build_pdi_criteria()
        assert criteria.is_empty is True
        assert criteria.search_terms == []
        assert criteria.cache_key.startswith(PDI_CACHE_KEY_PREFIX)

    def test_cache_key_ignores_stronger_items(self):
        first = build_pdi_criteria(
            hard_skills=[SkillItem(name="Python", level=1), SkillItem(name="SQL", level=4)],
        )
        second = build_pdi_criteria(
            hard_skills=[SkillItem(name="Python", level=1), SkillItem(name="Java", level=5)],
        )
        assert first.cache_key == second.cache_key

    def test_cache_key_changes_with_weakest_items(self):
        first = build_pdi_criteria(hard_skills=[SkillItem(name="Python", level=1)])
        second = build_pdi_criteria(hard_skills=[SkillItem(name="Python", level=2)])
        assert first.cache_key != second.cache_key

    def test_cache_key_distinguishes_categories(self):
        as_tool = build_pdi_criteria(tools=[SkillItem(name="Docker", level=1)])
        as_hard = build_pdi_criteria(hard_skills=[SkillItem(name="Docker", level=1)])
        assert as_tool.cache_key != as_hard.cache_key

    def test_cache_key_is_case_insensitive_on_names(self):
        lower = build_pdi_criteria(tools=[SkillItem(name="docker", level=2)])
        mixed = build_pdi_criteria(tools=[SkillItem(name=" Docker ", level=2)])
        assert lower.cache_key == mixed.cache_key

    def test_cache_key_never_collides_with_keyword_key(self):
        criteria = build_pdi_criteria(hard_skills=[SkillItem(name="Python", level=1)])
        assert criteria.cache_key != normalize_query("python")
