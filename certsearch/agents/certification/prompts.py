"""
Certification Search Prompt Templates

Contains the prompt builders for keyword and PDI (personal development plan)
searches.

Architecture:
- Pattern: Single-shot LLM call, JSON requested in the prompt text
- Model: Gemini (configured via GEMINI_MODEL)
- Output: Free-form text expected to contain one JSON object; parsed by
  certsearch.services.model_gateway

Both prompts share the same output schema block so the gateway can parse
either response with one code path. User text is inserted inside quotes in
natural-language instructions; it is flattened to a single line so it cannot
add template lines or close the quoted search focus.
"""

import re
from typing import TYPE_CHECKING, List

from certsearch.schemas.certifications import SkillItem

if TYPE_CHECKING:
    from certsearch.services.query_normalizer import PdiCriteria

_CONTROL_CHARS_RE = re.compile(r"[\x00-\x1f\x7f]+")
_WHITESPACE_RE = re.compile(r"\s+")

EMPTY_CATEGORY_LABEL = "Nenhum item informado"

# =============================================================================
# SHARED BLOCKS
# =============================================================================

CERTIFICATION_ROLE = (
    "Você é um assistente especialista em certificações de tecnologia."
)

OFFICIAL_SOURCES_INSTRUCTION = (
    "Busque em fontes oficiais como Microsoft Learn, AWS Training and "
    "Certification, Google Cloud Skills Boost, etc."
)

OUTPUT_SCHEMA_INSTRUCTIONS = """Retorne uma lista de certificações em formato JSON.
O JSON deve ter uma chave principal "certifications" que contém um array de objetos.
Cada objeto deve ter as seguintes chaves:
- "name": O nome oficial da certificação (string).
- "description": Uma breve descrição do que a certificação abrange. A descrição DEVE ser uma tradução para o Português do Brasil (string).
- "languages": Um array de strings com os idiomas disponíveis para o exame (ex: ["Inglês", "Espanhol", "Português"]).
- "price": O custo do exame de certificação. Se variar ou for gratuito, indique (string, ex: "USD 165", "Varia por região", "Gratuito").
- "url": O link direto para a página oficial da certificação (string).
- "level": O nível de dificuldade da certificação (ex: "Iniciante", "Intermediário", "Avançado") (string).
- "provider": A empresa que oferece a certificação (ex: "Microsoft", "Amazon", "Google") (string).

Se não encontrar nenhuma certificação, retorne um array vazio dentro da chave "certifications".
Não inclua nenhuma explicação ou texto adicional fora do objeto JSON. A resposta DEVE ser apenas o JSON."""


def sanitize_user_text(text: str) -> str:
    """
    Flatten user text for insertion into a quoted instruction.

    Control characters and line breaks collapse to single spaces and double
    quotes become single quotes. Everything else is kept as typed.
    """
    flattened = _CONTROL_CHARS_RE.sub(" ", text or "")
    flattened = flattened.replace('"', "'")
    return _WHITESPACE_RE.sub(" ", flattened).strip()


def format_skill_item(item: SkillItem) -> str:
    """Render one item the way the prompt lists it, e.g. ``Python (nível 1)``."""
    return f"{sanitize_user_text(item.name)} (nível {item.level})"


def _format_category(items: List[SkillItem]) -> str:
    if not items:
        return EMPTY_CATEGORY_LABEL
    return ", ".join(format_skill_item(item) for item in items)


# =============================================================================
# KEYWORD SEARCH
# =============================================================================

def build_keyword_search_prompt(query: str) -> str:
    """
    Build the prompt for a free-text search.

    Args:
        query: Normalized (trimmed, lowercased) search term

    Returns:
        str: Prompt ready to be sent to Gemini
    """
    return f"""{CERTIFICATION_ROLE}
Sua tarefa é buscar informações sobre certificações relacionadas ao termo "{sanitize_user_text(query)}".
{OFFICIAL_SOURCES_INSTRUCTION}
{OUTPUT_SCHEMA_INSTRUCTIONS}"""


# =============================================================================
# PDI SEARCH
# =============================================================================

def build_pdi_search_prompt(criteria: "PdiCriteria") -> str:
    """
    Build the prompt for a personal-development-plan search.

    Only the weakest items of each category are listed; the model is asked
    for 5 to 10 certifications for every category that has items.

    Args:
        criteria: Weakest items per category (see build_pdi_criteria)

    Returns:
        str: Prompt ready to be sent to Gemini
    """
    return f"""{CERTIFICATION_ROLE}
Um profissional montou um Plano de Desenvolvimento Individual (PDI) e avaliou suas competências de 1 (iniciante) a 5 (especialista).
Sua tarefa é recomendar certificações que ajudem a desenvolver as competências com as menores notas listadas abaixo.

<pdi>
- Soft skills: {_format_category(criteria.soft_skills)}
- Hard skills: {_format_category(criteria.hard_skills)}
- Ferramentas: {_format_category(criteria.tools)}
</pdi>

Para cada categoria que possui itens, retorne entre 5 e 10 certificações.
O nome ou a descrição de cada certificação deve mencionar explicitamente a competência que ela desenvolve.
{OFFICIAL_SOURCES_INSTRUCTION}
{OUTPUT_SCHEMA_INSTRUCTIONS}"""
