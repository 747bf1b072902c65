"""Fixtures for workflow tests that need to act while a call is in flight."""

import pytest

from eventarchitect.domain.workflow import GenerationEngine
from eventarchitect.llm import AIGateway

from tests.helpers.scripted import GatedProvider


@pytest.fixture
def gated_provider() -> GatedProvider:
    return GatedProvider()


@pytest.fixture
def gated_engine(store, gated_provider) -> GenerationEngine:
    return GenerationEngine(store, AIGateway(gated_provider, base_delay=0.0))
