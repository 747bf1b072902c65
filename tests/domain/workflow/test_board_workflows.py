"""Tests for board versions and expert proposals."""

import asyncio
import json

import pytest

from eventarchitect.domain.models import Directives, Environment
from eventarchitect.domain.services import project_edits
from eventarchitect.domain.workflow import OutcomeStatus
from eventarchitect.llm.models import ServiceUnavailable
from eventarchitect.llm.schemas import RefinedPrompt

from tests.helpers.scripted import EDIT_PROMPT_RESPONSE, IMAGE_URI, REFINED_RESPONSE


async def _add_board(store, lounge, **directives):
    def edit(project):
        board = project_edits.new_board(project, lounge.environment_id)
        board = board.model_copy(update={"directives": Directives(**directives)})
        return project_edits.add_board(project, lounge.environment_id, board)

    project = await store.apply(lounge.project_id, edit)
    return project.find_environment(lounge.environment_id).boards[-1].id


def _board(store, lounge, board_id):
    return store.get(lounge.project_id).find_environment(lounge.environment_id).find_board(board_id)


class TestGenerateVersion:

    @pytest.mark.asyncio
    async def test_appends_version_with_provenance(self, engine, store, lounge):
        board_id = await _add_board(store, lounge, goal="Cozy")

        outcome = await engine.boards.generate_version(lounge.project_id, lounge.environment_id, board_id)

        assert outcome.status == OutcomeStatus.COMPLETED
        board = _board(store, lounge, board_id)
        assert len(board.history) == 1
        variation = board.history[0].variations[0]
        assert variation.id == outcome.data["variation_id"]
        assert variation.name == "Version 1"
        assert variation.image_url == IMAGE_URI
        assert variation.edit_prompt == EDIT_PROMPT_RESPONSE["edit_prompt"]
        assert variation.client_summary == EDIT_PROMPT_RESPONSE["client_summary"]

    @pytest.mark.asyncio
    async def test_prompt_includes_fixed_elements_and_analysis(self, engine, provider, store, lounge):
        board_id = await _add_board(store, lounge)
        await store.apply(
            lounge.project_id,
            lambda p: project_edits.set_fixed_elements(p, lounge.environment_id, board_id, ["Stage"]),
        )
        await engine.assets.analyze(lounge.project_id, lounge.asset_id)

        await engine.boards.generate_version(lounge.project_id, lounge.environment_id, board_id)

        prompt_call = provider.calls_containing("generate a professional image prompt")[0]
        assert "fixed elements: Stage" in prompt_call.text
        assert "Large hall" in prompt_call.text

    @pytest.mark.asyncio
    async def test_second_version_keeps_first(self, engine, store, lounge):
        board_id = await _add_board(store, lounge)
        first = await engine.boards.generate_version(lounge.project_id, lounge.environment_id, board_id)
        await store.apply(lounge.project_id, lambda p: project_edits.approve_variation(
            p, lounge.environment_id, board_id, first.data["variation_id"],
        ))

        await engine.boards.generate_version(lounge.project_id, lounge.environment_id, board_id)

        board = _board(store, lounge, board_id)
        assert [v.variations[0].name for v in board.history] == ["Version 1", "Version 2"]
        assert board.approved_variation_id == first.data["variation_id"]

    @pytest.mark.asyncio
    async def test_board_without_base_photo(self, engine, store, lounge):
        await store.apply(lounge.project_id, lambda p: project_edits.remove_asset(p, lounge.asset_id))
        board_id = await _add_board(store, lounge)

        outcome = await engine.boards.generate_version(lounge.project_id, lounge.environment_id, board_id)

        assert outcome.status == OutcomeStatus.FAILED
        assert outcome.data["error_code"] == "VALIDATION_ERROR"

    @pytest.mark.asyncio
    async def test_service_failure_leaves_history(self, engine, provider, store, lounge):
        board_id = await _add_board(store, lounge)
        provider.set_error_sequence([ServiceUnavailable("down")] * 3)

        outcome = await engine.boards.generate_version(lounge.project_id, lounge.environment_id, board_id)

        assert outcome.status == OutcomeStatus.FAILED
        assert _board(store, lounge, board_id).history == ()

    @pytest.mark.asyncio
    async def test_board_removed_while_generating(self, gated_engine, gated_provider, store, lounge):
        board_id = await _add_board(store, lounge)
        task = asyncio.create_task(
            gated_engine.boards.generate_version(lounge.project_id, lounge.environment_id, board_id)
        )
        await gated_provider.started.wait()
        await store.apply(
            lounge.project_id,
            lambda p: project_edits.remove_board(p, lounge.environment_id, board_id),
        )
        gated_provider.release.set()

        outcome = await task

        assert outcome.status == OutcomeStatus.DISCARDED
        assert store.get(lounge.project_id).find_environment(lounge.environment_id).boards == ()


class TestExpertProposal:

    @pytest.mark.asyncio
    async def test_refine_prompt_stores_nothing(self, engine, store, lounge):
        before = store.get(lounge.project_id)

        outcome = await engine.proposals.refine_prompt(lounge.project_id, lounge.environment_id, "Velvet lounge")

        assert outcome.status == OutcomeStatus.COMPLETED
        assert outcome.data["refined_prompt"]["refined_prompt_en"] == REFINED_RESPONSE["refined_prompt_en"]
        assert store.get(lounge.project_id) == before

    @pytest.mark.asyncio
    async def test_refine_requires_text(self, engine, lounge):
        outcome = await engine.proposals.refine_prompt(lounge.project_id, lounge.environment_id, " ")
        assert outcome.status == OutcomeStatus.FAILED

    @pytest.mark.asyncio
    async def test_proposal_creates_primary_board_and_approves(self, engine, store, lounge):
        refined = RefinedPrompt(**REFINED_RESPONSE)

        outcome = await engine.proposals.propose(lounge.project_id, lounge.environment_id, refined)

        assert outcome.status == OutcomeStatus.COMPLETED
        env = store.get(lounge.project_id).find_environment(lounge.environment_id)
        board = env.primary_board
        assert board.base_asset_id == lounge.asset_id
        assert board.directives.goal == env.goal
        assert board.approved_variation.name == "Expert Proposal"
        assert board.approved_variation.client_summary == REFINED_RESPONSE["client_explanation"]

    @pytest.mark.asyncio
    async def test_pro_proposal_on_existing_board(self, engine, provider, store, lounge):
        board_id = await _add_board(store, lounge)
        refined = RefinedPrompt(**REFINED_RESPONSE)

        outcome = await engine.proposals.propose(
            lounge.project_id, lounge.environment_id, refined, use_pro=True, size="2K",
        )

        board = _board(store, lounge, board_id)
        assert board.approved_variation_id == outcome.data["variation_id"]
        assert board.approved_variation.name == "Expert Proposal (Pro 2K)"
        config = provider.last_call().image_config
        assert config.image_size == "2K"
        assert provider.last_call().model == engine.gateway.models.image_pro

    @pytest.mark.asyncio
    async def test_proposal_size_validated(self, engine, provider, lounge):
        refined = RefinedPrompt(**REFINED_RESPONSE)
        outcome = await engine.proposals.propose(lounge.project_id, lounge.environment_id, refined, size="8K")
        assert outcome.status == OutcomeStatus.FAILED
        assert provider.call_count == 0

    @pytest.mark.asyncio
    async def test_proposal_needs_before_photo(self, engine, store, project):
        env = Environment.create("Garden")
        await store.apply(project.id, lambda p: project_edits.add_environment(p, env))
        outcome = await engine.proposals.propose(project.id, env.id, RefinedPrompt(**REFINED_RESPONSE))
        assert outcome.data["error_code"] == "VALIDATION_ERROR"

    @pytest.mark.asyncio
    async def test_refine_uses_briefing_palette(self, engine, provider, store, lounge):
        await engine.briefing.capture_text(lounge.project_id, "Garden wedding")
        await engine.proposals.refine_prompt(lounge.project_id, lounge.environment_id, "Velvet lounge")
        call = provider.calls_containing("Refine this user request")[0]
        assert json.dumps(["sage", "ivory"]) in call.text
