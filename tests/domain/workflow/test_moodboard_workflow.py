"""Tests for moodboard synthesis."""

import asyncio

import pytest

from eventarchitect.domain.exceptions import InputValidationError
from eventarchitect.domain.models import Directives
from eventarchitect.domain.services import project_edits
from eventarchitect.domain.workflow import OutcomeStatus, moodboard_inputs

from tests.helpers.scripted import IMAGE_URI, MOODBOARD_RESPONSE


class TestSynthesize:

    @pytest.mark.asyncio
    async def test_from_keywords(self, engine, store, project):
        await store.apply(project.id, lambda p: project_edits.update_project_fields(p, keywords=["garden"]))

        outcome = await engine.moodboards.synthesize(project.id)

        assert outcome.status == OutcomeStatus.COMPLETED
        moodboard = store.get(project.id).find_moodboard(outcome.data["moodboard_id"])
        assert moodboard.title == MOODBOARD_RESPONSE["title"]
        assert [c.hex for c in moodboard.palette] == ["#9CAF88", "#FFFFF0"]
        assert moodboard.collage_image_uri == IMAGE_URI
        assert moodboard.environment_id is None

    @pytest.mark.asyncio
    async def test_regeneration_adds_new_moodboard(self, engine, store, lounge):
        await engine.briefing.capture_text(lounge.project_id, "Garden wedding")

        await engine.moodboards.synthesize(lounge.project_id, lounge.environment_id)
        await engine.moodboards.synthesize(lounge.project_id, lounge.environment_id)

        moodboards = store.get(lounge.project_id).moodboards
        assert len(moodboards) == 2
        assert moodboards[0].id != moodboards[1].id
        assert {m.environment_id for m in moodboards} == {lounge.environment_id}

    @pytest.mark.asyncio
    async def test_needs_briefing_or_keywords(self, engine, provider, project):
        outcome = await engine.moodboards.synthesize(project.id)
        assert outcome.status == OutcomeStatus.FAILED
        assert provider.call_count == 0

    @pytest.mark.asyncio
    async def test_unknown_environment(self, engine, store, project):
        await store.apply(project.id, lambda p: project_edits.update_project_fields(p, keywords=["garden"]))
        outcome = await engine.moodboards.synthesize(project.id, "missing")
        assert outcome.data["error_code"] == "NOT_FOUND"

    @pytest.mark.asyncio
    async def test_environment_removed_while_generating(self, gated_engine, gated_provider, store, lounge):
        await store.apply(lounge.project_id, lambda p: project_edits.update_project_fields(p, keywords=["garden"]))
        task = asyncio.create_task(gated_engine.moodboards.synthesize(lounge.project_id, lounge.environment_id))
        await gated_provider.started.wait()
        await store.apply(lounge.project_id, lambda p: project_edits.remove_environment(p, lounge.environment_id))
        gated_provider.release.set()

        outcome = await task

        assert outcome.status == OutcomeStatus.DISCARDED
        assert store.get(lounge.project_id).moodboards == ()


class TestMoodboardInputs:

    def test_briefing_wins_over_keywords(self, project):
        project = project_edits.update_project_fields(project, keywords=["garden"])
        project = project_edits.set_briefing(project, "t", Directives(goal="Romance"))
        assert moodboard_inputs(project)["goal"] == "Romance"

    def test_nothing_to_work_from(self, project):
        with pytest.raises(InputValidationError):
            moodboard_inputs(project)
