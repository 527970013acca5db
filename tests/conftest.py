"""
Pytest configuration for certification search tests.

Sets up test environment and global fixtures.
"""
import os
from typing import List

import pytest

# Disable config validation during tests
# This allows tests to run without requiring real environment variables
os.environ["VALIDATE_CONFIG"] = "false"

# Set test environment variables
os.environ.setdefault("ENVIRONMENT", "testing")
os.environ.setdefault("GEMINI_API_KEY", "test-gemini-api-key")

from certsearch.schemas.certifications import Certification  # noqa: E402
from certsearch.services.result_cache import ResultCache  # noqa: E402


class FakeModelGateway:
    """
    ModelGateway stand-in that records prompts and returns canned records.

    Set ``error`` to make every call raise it instead.
    """

    def __init__(self, certifications: List[Certification] = None, error: Exception = None):
        self.certifications = list(certifications or [])
        self.error = error
        self.prompts: List[str] = []

    @property
    def calls(self) -> int:
        return len(self.prompts)

    def fetch_certifications(self, prompt: str) -> List[Certification]:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return list(self.certifications)


@pytest.fixture
def sample_certifications() -> List[Certification]:
    """Three records with the levels/languages used across facet tests."""
    return [
        Certification(
            name="Azure Fundamentals",
            description="Conceitos básicos de nuvem no Azure.",
            languages=["Inglês"],
            price="USD 99",
            url="https://learn.microsoft.com/credentials/certifications/azure-fundamentals/",
            level="Básico",
            provider="Microsoft",
        ),
        Certification(
            name="Google Cloud Digital Leader",
            description="Fundamentos de transformação digital com Google Cloud.",
            languages=["Português"],
            price="USD 99",
            url="https://cloud.google.com/learn/certification/cloud-digital-leader",
            level="Básico",
            provider="Google",
        ),
        Certification(
            name="AWS Solutions Architect Professional",
            description="Arquitetura avançada de soluções na AWS.",
            languages=["Inglês", "Espanhol"],
            price="USD 300",
            url="https://aws.amazon.com/certification/certified-solutions-architect-professional/",
            level="Avançado",
            provider="Amazon",
        ),
    ]


@pytest.fixture
def result_cache() -> ResultCache:
    """Fresh unbounded cache per test."""
    return ResultCache()


@pytest.fixture
def fake_gateway(sample_certifications) -> FakeModelGateway:
    return FakeModelGateway(sample_certifications)


@pytest.fixture
def make_gateway():
    """Factory for FakeModelGateway with custom records or a failure."""
    return FakeModelGateway
