"""Fixtures for API tests: the app wired to the in-memory store and scripted gateway."""

import pytest
from fastapi.testclient import TestClient

from eventarchitect.api.main import create_app

from tests.helpers.scripted import SPACE_PHOTO


@pytest.fixture
def client(store, gateway):
    app = create_app(store=store, gateway=gateway, configure_logs=False)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def project_id(client) -> str:
    response = client.post("/api/v1/projects", json={"name": "Test Wedding"})
    return response.json()["project"]["id"]


@pytest.fixture
def lounge_ids(client, project_id):
    """(project_id, environment_id, asset_id) for a Lounge with a before photo."""
    env = client.post(f"/api/v1/projects/{project_id}/environments", json={"name": "Lounge", "goal": "Cozy"})
    environment_id = env.json()["environment_id"]
    upload = client.post(
        f"/api/v1/projects/{project_id}/assets",
        json={"data": SPACE_PHOTO, "mime_type": "image/jpeg", "environment_id": environment_id},
    )
    return project_id, environment_id, upload.json()["asset_id"]
