"""
Pydantic schemas for certification search endpoints.

These models define the request/response contracts for keyword searches
(GET /api/search) and personal-development-plan searches (POST /api/search).
Certification records come from free-form model output, so their fields are
parsed leniently: absent values become empty strings or lists instead of
failing the whole response.
"""

from dataclasses import dataclass
from typing import Any, List, Literal, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

SearchSource = Literal["cache", "IA"]

SOURCE_CACHE: SearchSource = "cache"
SOURCE_MODEL: SearchSource = "IA"


# ============================================================================
# DOMAIN MODELS
# ============================================================================

class Certification(BaseModel):
    """
    A single certification record returned by the model.

    Immutable once parsed. There is no identity field; ``name`` acts as a
    display key but is not guaranteed unique or non-empty.
    """
    model_config = ConfigDict(frozen=True, extra="ignore")

    name: str = Field(
        default="",
        description="Official certification name",
        examples=["Microsoft Certified: Azure Fundamentals"]
    )
    description: str = Field(
        default="",
        description="Short description in Brazilian Portuguese"
    )
    languages: List[str] = Field(
        default_factory=list,
        description="Languages in which the exam is offered",
        examples=[["Inglês", "Português"]]
    )
    price: str = Field(
        default="",
        description="Free-form exam price",
        examples=["USD 99", "Varia por região", "Gratuito"]
    )
    url: str = Field(
        default="",
        description="Official certification page"
    )
    level: str = Field(
        default="",
        description="Free-form difficulty level",
        examples=["Iniciante", "Intermediário", "Avançado"]
    )
    provider: str = Field(
        default="",
        description="Company offering the certification",
        examples=["Microsoft", "Amazon", "Google"]
    )

    @field_validator("name", "description", "price", "url", "level", "provider", mode="before")
    @classmethod
    def coerce_text(cls, value: Any) -> str:
        """Models sometimes emit null or numbers (e.g. ``"price": 165``)."""
        if value is None:
            return ""
        if isinstance(value, str):
            return value
        if isinstance(value, (int, float, bool)):
            return str(value)
        return value

    @field_validator("languages", mode="before")
    @classmethod
    def coerce_languages(cls, value: Any) -> Any:
        if value is None:
            return []
        if isinstance(value, str):
            return [value]
        return value


class SkillItem(BaseModel):
    """
    One self-rated skill or tool from a personal development plan.

    ``level`` is conventionally 1-5; callers validate the range before the
    request reaches this service.
    """
    name: str = Field(..., description="Skill or tool name", examples=["Python"])
    level: int = Field(..., description="Self-rated proficiency", examples=[1, 3])


@dataclass(frozen=True)
class SearchResult:
    """Certifications plus where they came from."""
    certifications: Tuple[Certification, ...]
    source: SearchSource


# ============================================================================
# REQUEST MODELS
# ============================================================================

class PdiSearchRequest(BaseModel):
    """
    Request body for POST /api/search.

    Every category is optional; an empty body produces an empty-criteria prompt.
    """
    model_config = ConfigDict(populate_by_name=True)

    soft_skills: List[SkillItem] = Field(
        default_factory=list,
        alias="softSkills",
        description="Behavioural skills, e.g. communication"
    )
    hard_skills: List[SkillItem] = Field(
        default_factory=list,
        alias="hardSkills",
        description="Technical skills, e.g. Python"
    )
    tools: List[SkillItem] = Field(
        default_factory=list,
        description="Tools and platforms, e.g. Docker"
    )

    @field_validator("soft_skills", "hard_skills", "tools", mode="before")
    @classmethod
    def null_category_is_empty(cls, value: Any) -> Any:
        return [] if value is None else value


# ============================================================================
# RESPONSE MODELS
# ============================================================================

class FacetSummary(BaseModel):
    """Facet values available in a result set, before facet filtering."""
    levels: List[str] = Field(
        default_factory=list,
        description="Distinct levels in first-seen order"
    )
    languages: List[str] = Field(
        default_factory=list,
        description="Distinct exam languages, sorted"
    )


class SearchResponse(BaseModel):
    """
    Response model for both search endpoints.

    ``source`` is ``"cache"`` when the result was served from the in-process
    cache and ``"IA"`` when it came from the model.
    """
    certifications: List[Certification] = Field(default_factory=list)
    source: SearchSource = Field(..., examples=["IA", "cache"])
    facets: FacetSummary = Field(default_factory=FacetSummary)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "certifications": [
                    {
                        "name": "AWS Certified Cloud Practitioner",
                        "description": "Valida o conhecimento básico da nuvem AWS.",
                        "languages": ["Inglês", "Português"],
                        "price": "USD 100",
                        "url": "https://aws.amazon.com/certification/certified-cloud-practitioner/",
                        "level": "Iniciante",
                        "provider": "Amazon"
                    }
                ],
                "source": "IA",
                "facets": {"levels": ["Iniciante"], "languages": ["Inglês", "Português"]}
            }
        }
    )


class ErrorResponse(BaseModel):
    """Body of every 400/500 response from the search endpoints."""
    error: str = Field(..., examples=["Parâmetro de busca é obrigatório"])
