"""
Tests for the search orchestration (cache, prompt, gateway, post-filter).

A FakeModelGateway (see conftest) stands in for Gemini so the tests can count
upstream calls and inspect the prompts that would have been sent.
"""

import pytest

from certsearch.schemas.certifications import Certification, SkillItem
from certsearch.services.query_normalizer import build_pdi_criteria
from certsearch.services.search_service import search_by_keyword, search_by_pdi
from certsearch.utils.exceptions import (
    InvalidInput,
    MalformedModelResponse,
    UpstreamUnavailable,
)


# =============================================================================
# KEYWORD SEARCH
# =============================================================================

class TestKeywordSearch:
    """Tests for search_by_keyword."""

    @pytest.mark.asyncio
    async def test_first_search_comes_from_model(self, result_cache, fake_gateway, sample_certifications):
        result = await search_by_keyword("Azure", cache=result_cache, gateway=fake_gateway)

        assert result.source == "IA"
        assert list(result.certifications) == sample_certifications
        assert fake_gateway.calls == 1
        assert '"azure"' in fake_gateway.prompts[0]

    @pytest.mark.asyncio
    async def test_equivalent_query_is_served_from_cache(self, result_cache, fake_gateway):
        first = await search_by_keyword("AWS", cache=result_cache, gateway=fake_gateway)
        second = await search_by_keyword("  aws ", cache=result_cache, gateway=fake_gateway)

        assert second.source == "cache"
        assert second.certifications == first.certifications
        assert fake_gateway.calls == 1

    @pytest.mark.asyncio
    async def test_result_is_stored_under_normalized_key(self, result_cache, fake_gateway):
        await search_by_keyword("  Google Cloud ", cache=result_cache, gateway=fake_gateway)
        assert "google cloud" in result_cache

    @pytest.mark.asyncio
    @pytest.mark.parametrize("query", ["", "   ", None])
    async def test_blank_query_never_reaches_model(self, result_cache, fake_gateway, query):
        with pytest.raises(InvalidInput):
            await search_by_keyword(query, cache=result_cache, gateway=fake_gateway)
        assert fake_gateway.calls == 0

    @pytest.mark.asyncio
    async def test_empty_model_result_is_cached(self, result_cache, make_gateway):
        gateway = make_gateway([])
        await search_by_keyword("cobol", cache=result_cache, gateway=gateway)
        result = await search_by_keyword("cobol", cache=result_cache, gateway=gateway)

        assert result.source == "cache"
        assert result.certifications == ()
        assert gateway.calls == 1

    @pytest.mark.asyncio
    @pytest.mark.parametrize("error", [
        UpstreamUnavailable("quota exceeded"),
        MalformedModelResponse("no JSON"),
    ])
    async def test_failures_propagate_and_are_not_cached(self, result_cache, make_gateway, error):
        gateway = make_gateway(error=error)
        with pytest.raises(type(error)):
            await search_by_keyword("azure", cache=result_cache, gateway=gateway)
        assert "azure" not in result_cache


# =============================================================================
# PDI SEARCH
# =============================================================================

class TestPdiSearch:
    """Tests for search_by_pdi."""

    @pytest.fixture
    def python_certifications(self):
        return [
            Certification(
                name="PCEP – Certified Entry-Level Python Programmer",
                description="Fundamentos de programação em Python.",
                languages=["Inglês"],
                level="Iniciante",
                provider="Python Institute",
            ),
            Certification(
                name="AWS Cloud Practitioner",
                description="Conceitos básicos da nuvem AWS.",
                languages=["Inglês", "Português"],
                level="Iniciante",
                provider="Amazon",
            ),
        ]

    @pytest.mark.asyncio
    async def test_end_to_end_python_plan(self, result_cache, make_gateway, python_certifications):
        gateway = make_gateway(python_certifications)

        result = await search_by_pdi(
            soft_skills=[],
            hard_skills=[SkillItem(name="Python", level=1)],
            tools=[],
            cache=result_cache,
            gateway=gateway,
        )

        assert result.source == "IA"
        assert [c.name for c in result.certifications] == [
            "PCEP – Certified Entry-Level Python Programmer"
        ]
        assert "Python (nível 1)" in gateway.prompts[0]

    @pytest.mark.asyncio
    async def test_always_calls_model_by_default(self, result_cache, make_gateway, python_certifications):
        gateway = make_gateway(python_certifications)
        plan = dict(soft_skills=[], hard_skills=[SkillItem(name="Python", level=1)], tools=[])

        await search_by_pdi(**plan, cache=result_cache, gateway=gateway)
        second = await search_by_pdi(**plan, cache=result_cache, gateway=gateway)

        assert second.source == "IA"
        assert gateway.calls == 2

    @pytest.mark.asyncio
    async def test_filtered_result_is_written_under_weakest_item_key(
        self, result_cache, make_gateway, python_certifications
    ):
        gateway = make_gateway(python_certifications)
        hard_skills = [SkillItem(name="Python", level=1), SkillItem(name="SQL", level=4)]

        await search_by_pdi([], hard_skills, [], cache=result_cache, gateway=gateway)

        key = build_pdi_criteria(hard_skills=[SkillItem(name="Python", level=1)]).cache_key
        cached = result_cache.get(key)
        assert cached is not None
        assert [c.provider for c in cached] == ["Python Institute"]

    @pytest.mark.asyncio
    async def test_cache_reads_when_enabled(self, result_cache, make_gateway, python_certifications):
        gateway = make_gateway(python_certifications)

        await search_by_pdi(
            [], [SkillItem(name="Python", level=1), SkillItem(name="SQL", level=4)], [],
            cache=result_cache, gateway=gateway, use_cached=True,
        )
        second = await search_by_pdi(
            [], [SkillItem(name="Python", level=1), SkillItem(name="Go", level=5)], [],
            cache=result_cache, gateway=gateway, use_cached=True,
        )

        assert second.source == "cache"
        assert gateway.calls == 1

    @pytest.mark.asyncio
    async def test_empty_plan_still_prompts_but_keeps_nothing(self, result_cache, fake_gateway):
        result = await search_by_pdi([], [], [], cache=result_cache, gateway=fake_gateway)

        assert fake_gateway.calls == 1
        assert result.source == "IA"
        assert result.certifications == ()

    @pytest.mark.asyncio
    async def test_blank_named_item_does_not_hide_real_weakest_item(self, result_cache, make_gateway):
        gateway = make_gateway([
            Certification(name="Scrum Master", description="Gestão ágil de projetos."),
            Certification(name="PCAP – Python Associate", description="Programação em Python."),
        ])

        result = await search_by_pdi(
            [], [SkillItem(name="  ", level=1), SkillItem(name="Python", level=3)], [],
            cache=result_cache, gateway=gateway,
        )

        assert [c.name for c in result.certifications] == ["PCAP – Python Associate"]
        assert "- Hard skills: Python (nível 3)" in gateway.prompts[0]
        assert " (nível 1)" not in gateway.prompts[0]

    @pytest.mark.asyncio
    async def test_failure_propagates(self, result_cache, make_gateway):
        gateway = make_gateway(error=MalformedModelResponse("bad"))
        with pytest.raises(MalformedModelResponse):
            await search_by_pdi(
                [SkillItem(name="Escuta", level=1)], [], [],
                cache=result_cache, gateway=gateway,
            )
        assert len(result_cache) == 0
