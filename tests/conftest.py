"""
Shared pytest fixtures for all tests.

Provides an in-memory storage gateway, a Project Store, and a scripted
mock generative provider so no test touches the network or the disk
(unless it asks for tmp_path).
"""

from dataclasses import dataclass

import pytest

from eventarchitect.domain.models import Asset, AssetType, Environment, Project
from eventarchitect.domain.services import project_edits
from eventarchitect.domain.services.project_factory import ProjectTemplate
from eventarchitect.domain.services.project_store import ProjectStore
from eventarchitect.domain.workflow import GenerationEngine
from eventarchitect.llm import AIGateway, MockLLMProvider
from eventarchitect.persistence import InMemoryProjectRepository

from tests.helpers.scripted import SPACE_PHOTO, FailingRepository, scripted_provider


# =============================================================================
# STORAGE FIXTURES
# =============================================================================

@pytest.fixture
def repository() -> InMemoryProjectRepository:
    return InMemoryProjectRepository()


@pytest.fixture
def failing_repository() -> FailingRepository:
    return FailingRepository()


@pytest.fixture
def store(repository) -> ProjectStore:
    return ProjectStore(repository)


# =============================================================================
# GENERATION FIXTURES
# =============================================================================

@pytest.fixture
def provider() -> MockLLMProvider:
    return scripted_provider()


@pytest.fixture
def gateway(provider) -> AIGateway:
    """Gateway with zero backoff so retry tests run instantly."""
    return AIGateway(provider, base_delay=0.0)


@pytest.fixture
def engine(store, gateway) -> GenerationEngine:
    return GenerationEngine(store, gateway)


# =============================================================================
# PROJECT FIXTURES
# =============================================================================

@dataclass
class Lounge:
    """A project with one environment whose before photo is set."""
    project_id: str
    environment_id: str
    asset_id: str


@pytest.fixture
async def project(store) -> Project:
    return await store.create(ProjectTemplate(name="Test Wedding"))


@pytest.fixture
async def lounge(store, project) -> Lounge:
    environment = Environment.create("Lounge", goal="Cozy lounge for guests")
    photo = Asset.create(AssetType.SPACE_PHOTO, SPACE_PHOTO, mime_type="image/jpeg", tags=("Original",))

    def edit(p: Project) -> Project:
        p = project_edits.add_environment(p, environment)
        p = project_edits.add_asset(p, photo)
        return project_edits.attach_asset_to_environment(p, environment.id, photo.id)

    await store.apply(project.id, edit)
    return Lounge(project_id=project.id, environment_id=environment.id, asset_id=photo.id)
