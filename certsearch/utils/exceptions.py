"""
Error taxonomy for certification searches.

Every failure a search can produce is a CertificationSearchError subclass.
The exception handler registered in certsearch.main maps them to
``{"error": <public_message>}`` responses; detail stays in the server logs.
"""

from fastapi import status

GENERIC_ERROR_MESSAGE = "Erro interno ao processar a solicitação"


class CertificationSearchError(Exception):
    """Base class for search failures."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    public_message: str = GENERIC_ERROR_MESSAGE


class InvalidInput(CertificationSearchError):
    """Client-supplied search input is empty after normalization."""

    status_code = status.HTTP_400_BAD_REQUEST
    public_message = "Parâmetro de busca é obrigatório"


class UpstreamUnavailable(CertificationSearchError):
    """The generative model could not be reached (network, auth, quota)."""


class MalformedModelResponse(CertificationSearchError):
    """The model answered, but no certification payload could be extracted."""
