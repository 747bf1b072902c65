"""Tests for environment, board and approval endpoints."""


def _env(client, project_id, environment_id):
    project = client.get(f"/api/v1/projects/{project_id}").json()["project"]
    return next(e for e in project["environments"] if e["id"] == environment_id)


class TestEnvironments:

    def test_upload_into_environment_sets_before_photo(self, client, lounge_ids):
        project_id, environment_id, asset_id = lounge_ids
        assert _env(client, project_id, environment_id)["before_asset_id"] == asset_id

    def test_update_and_remove(self, client, lounge_ids):
        project_id, environment_id, _ = lounge_ids

        client.patch(f"/api/v1/projects/{project_id}/environments/{environment_id}", json={"priority": "high"})
        assert _env(client, project_id, environment_id)["priority"] == "high"

        client.delete(f"/api/v1/projects/{project_id}/environments/{environment_id}")
        assert client.get(f"/api/v1/projects/{project_id}").json()["project"]["environments"] == []

    def test_name_required(self, client, project_id):
        response = client.post(f"/api/v1/projects/{project_id}/environments", json={"name": ""})
        assert response.status_code == 422
        assert response.json()["detail"]["error_code"] == "VALIDATION_ERROR"

    def test_detach_and_reattach(self, client, lounge_ids):
        project_id, environment_id, asset_id = lounge_ids
        base = f"/api/v1/projects/{project_id}/environments/{environment_id}/assets/{asset_id}"

        client.delete(base)
        assert _env(client, project_id, environment_id)["before_asset_id"] is None
        client.post(base)
        assert _env(client, project_id, environment_id)["before_asset_id"] == asset_id


class TestBoards:

    def test_create_board_defaults_to_before_photo(self, client, lounge_ids):
        project_id, environment_id, asset_id = lounge_ids

        response = client.post(f"/api/v1/projects/{project_id}/environments/{environment_id}/boards", json={})

        assert response.status_code == 201
        board = _env(client, project_id, environment_id)["boards"][0]
        assert board["id"] == response.json()["board_id"]
        assert board["base_asset_id"] == asset_id

    def test_directives_and_fixed_elements(self, client, lounge_ids):
        project_id, environment_id, _ = lounge_ids
        base = f"/api/v1/projects/{project_id}/environments/{environment_id}/boards"
        board_id = client.post(base, json={}).json()["board_id"]

        client.put(f"{base}/{board_id}/directives", json={"goal": "Velvet", "level_of_sophistication": 5})
        client.put(f"{base}/{board_id}/fixed-elements", json={"elements": ["Bar", " "]})

        board = _env(client, project_id, environment_id)["boards"][0]
        assert board["directives"]["goal"] == "Velvet"
        assert board["directives"]["level_of_sophistication"] == 5
        assert board["fixed_elements"] == ["Bar"]

    def test_approve_unknown_variation(self, client, lounge_ids):
        project_id, environment_id, _ = lounge_ids
        base = f"/api/v1/projects/{project_id}/environments/{environment_id}/boards"
        board_id = client.post(base, json={}).json()["board_id"]

        response = client.post(f"{base}/{board_id}/approval", json={"variation_id": "missing"})

        assert response.status_code == 404
        assert response.json()["detail"]["error_code"] == "VARIATION_NOT_FOUND"

    def test_approve_generated_version(self, client, lounge_ids):
        project_id, environment_id, _ = lounge_ids
        base = f"/api/v1/projects/{project_id}/environments/{environment_id}/boards"
        board_id = client.post(base, json={}).json()["board_id"]
        generated = client.post(
            f"/api/v1/projects/{project_id}/generate/environments/{environment_id}/boards/{board_id}/versions"
        ).json()
        variation_id = generated["data"]["variation_id"]

        client.post(f"{base}/{board_id}/approval", json={"variation_id": variation_id})
        assert _env(client, project_id, environment_id)["boards"][0]["approved_variation_id"] == variation_id

        client.delete(f"{base}/{board_id}/approval")
        assert _env(client, project_id, environment_id)["boards"][0]["approved_variation_id"] is None

    def test_remove_board(self, client, lounge_ids):
        project_id, environment_id, _ = lounge_ids
        base = f"/api/v1/projects/{project_id}/environments/{environment_id}/boards"
        board_id = client.post(base, json={}).json()["board_id"]
        client.delete(f"{base}/{board_id}")
        assert _env(client, project_id, environment_id)["boards"] == []


class TestCrestApproval:

    def test_approve_and_revoke(self, client, project_id):
        generated = client.post(f"/api/v1/projects/{project_id}/generate/crest", json={"initials": "AB"}).json()
        option_id = generated["project"]["crest"]["options"][0]["id"]

        approved = client.post(f"/api/v1/projects/{project_id}/crest/approval", json={"option_id": option_id})
        assert approved.json()["project"]["crest"]["approved_option_id"] == option_id

        revoked = client.delete(f"/api/v1/projects/{project_id}/crest/approval")
        assert revoked.json()["project"]["crest"]["approved_option_id"] is None

    def test_approve_without_crest(self, client, project_id):
        response = client.post(f"/api/v1/projects/{project_id}/crest/approval", json={"option_id": "x"})
        assert response.status_code == 404
        assert response.json()["detail"]["error_code"] == "CREST_NOT_FOUND"
