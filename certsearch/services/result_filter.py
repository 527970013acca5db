"""
Facet derivation and filtering over a certification result set.

Facets are derived from the full result set, before any facet filter, so the
presentation layer can always offer every level and language that came back.
"""

from typing import Iterable, List, Optional, Sequence

from certsearch.schemas.certifications import Certification, FacetSummary

# Facet value meaning "no filter"
FACET_ALL = "all"


def _is_unset(value: Optional[str]) -> bool:
    return value is None or value == "" or value == FACET_ALL


def available_levels(certifications: Iterable[Certification]) -> List[str]:
    """Distinct levels in first-seen order."""
    return list(dict.fromkeys(cert.level for cert in certifications))


def available_languages(certifications: Iterable[Certification]) -> List[str]:
    """Distinct exam languages across all records, sorted."""
    return sorted({language for cert in certifications for language in cert.languages})


def derive_facets(certifications: Sequence[Certification]) -> FacetSummary:
    return FacetSummary(
        levels=available_levels(certifications),
        languages=available_languages(certifications),
    )


def matches_facets(
    certification: Certification,
    level: Optional[str] = None,
    language: Optional[str] = None,
) -> bool:
    """True when the record satisfies both the level and the language facet."""
    if not _is_unset(level) and certification.level != level:
        return False
    if not _is_unset(language) and language not in certification.languages:
        return False
    return True


def apply_facet_filters(
    certifications: Iterable[Certification],
    level: Optional[str] = None,
    language: Optional[str] = None,
) -> List[Certification]:
    """Keep the records matching the selected facets; order is preserved."""
    return [
        cert for cert in certifications
        if matches_facets(cert, level=level, language=language)
    ]


def filter_by_search_terms(
    certifications: Iterable[Certification],
    terms: Sequence[str],
) -> List[Certification]:
    """
    PDI post-filter: keep records whose name or description mentions a term.

    Matching is a case-insensitive substring test. A record must mention at
    least one term, so with no terms nothing is kept.
    """
    needles = [term.strip().lower() for term in terms if term and term.strip()]
    if not needles:
        return []

    kept = []
    for cert in certifications:
        haystacks = (cert.name.lower(), cert.description.lower())
        if any(needle in haystack for needle in needles for haystack in haystacks):
            kept.append(cert)
    return kept
