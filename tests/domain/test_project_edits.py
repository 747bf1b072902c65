"""Tests for the invariant-preserving project edits."""

import pytest

from eventarchitect.domain.constants import MAX_REFERENCE_ASSETS
from eventarchitect.domain.exceptions import (
    AnalysisAlreadyAttached,
    AssetNotFound,
    BoardNotFound,
    CrestNotFound,
    CrestOptionNotFound,
    DuplicateIdentity,
    EnvironmentNotFound,
    InvalidEdit,
    VariationNotFound,
)
from eventarchitect.domain.models import (
    Asset,
    AssetAnalysis,
    AssetType,
    BoardVariation,
    BoardVersion,
    Crest,
    CrestOption,
    Directives,
    Environment,
    Moodboard,
    Priority,
)
from eventarchitect.domain.services import project_edits as edits
from eventarchitect.domain.services.project_factory import new_project


def _variation(name="Version 1"):
    return BoardVariation.create(name, "data:image/png;base64,AAAA")


def _option(style="Classic"):
    return CrestOption.create(style, "png", "gold", "mono")


@pytest.fixture
def setup():
    """Project with one environment, a space photo and one board."""
    project = new_project()
    env = Environment.create("Lounge")
    photo = Asset.create(AssetType.SPACE_PHOTO, "data:image/png;base64,AAAA")
    project = edits.add_environment(project, env)
    project = edits.add_asset(project, photo)
    project = edits.attach_asset_to_environment(project, env.id, photo.id)
    board = edits.new_board(project, env.id)
    project = edits.add_board(project, env.id, board)
    return project, env.id, photo.id, board.id


class TestProjectFields:

    def test_update_fields_coerces_values(self):
        project = edits.update_project_fields(new_project(), name="Gala", guest_count="80", keywords=["gold"])
        assert project.name == "Gala"
        assert project.guest_count == 80
        assert project.keywords == ("gold",)

    def test_input_is_not_mutated(self):
        original = new_project()
        edits.update_project_fields(original, name="Other")
        assert original.name != "Other"

    def test_unknown_field_rejected(self):
        with pytest.raises(InvalidEdit):
            edits.update_project_fields(new_project(), id="forged")

    def test_invalid_value_rejected(self):
        with pytest.raises(InvalidEdit):
            edits.update_project_fields(new_project(), guest_count=-5)

    def test_set_briefing(self):
        directives = Directives(goal="Garden")
        project = edits.set_briefing(new_project(), "transcript", directives)
        assert project.briefing_transcript == "transcript"
        assert project.briefing_directives.goal == "Garden"


class TestEnvironments:

    def test_duplicate_environment_id_rejected(self):
        env = Environment.create("Lounge")
        project = edits.add_environment(new_project(), env)
        with pytest.raises(DuplicateIdentity):
            edits.add_environment(project, env)

    def test_update_environment_fields(self, setup):
        project, env_id, _, _ = setup
        project = edits.update_environment_fields(project, env_id, goal="Chill", priority="high")
        env = project.find_environment(env_id)
        assert env.goal == "Chill"
        assert env.priority == Priority.HIGH

    def test_remove_missing_environment(self):
        with pytest.raises(EnvironmentNotFound):
            edits.remove_environment(new_project(), "nope")

    def test_remove_environment(self, setup):
        project, env_id, _, _ = setup
        assert edits.remove_environment(project, env_id).environments == ()


class TestAssetAttachment:

    def test_space_photo_becomes_before_photo(self, setup):
        project, env_id, photo_id, _ = setup
        assert project.find_environment(env_id).before_asset_id == photo_id

    def test_references_are_capped(self, setup):
        project, env_id, _, _ = setup
        ids = []
        for _ in range(MAX_REFERENCE_ASSETS + 2):
            ref = Asset.create(AssetType.REFERENCE, "ref")
            ids.append(ref.id)
            project = edits.add_asset(project, ref)
            project = edits.attach_asset_to_environment(project, env_id, ref.id)
        assert project.find_environment(env_id).reference_asset_ids == tuple(ids[:MAX_REFERENCE_ASSETS])

    def test_furniture_attached_once(self, setup):
        project, env_id, _, _ = setup
        chair = Asset.create(AssetType.FURNITURE, "chair")
        project = edits.add_asset(project, chair)
        project = edits.attach_asset_to_environment(project, env_id, chair.id)
        project = edits.attach_asset_to_environment(project, env_id, chair.id)
        assert project.find_environment(env_id).furniture_asset_ids == (chair.id,)

    def test_audio_cannot_be_attached(self, setup):
        project, env_id, _, _ = setup
        audio = Asset.create(AssetType.AUDIO, "audio")
        project = edits.add_asset(project, audio)
        with pytest.raises(InvalidEdit):
            edits.attach_asset_to_environment(project, env_id, audio.id)

    def test_detach_keeps_asset(self, setup):
        project, env_id, photo_id, _ = setup
        project = edits.detach_asset_from_environment(project, env_id, photo_id)
        assert project.find_environment(env_id).before_asset_id is None
        assert project.find_asset(photo_id) is not None

    def test_remove_asset_leaves_references_dangling(self, setup):
        project, env_id, photo_id, board_id = setup
        project = edits.remove_asset(project, photo_id)
        assert project.find_asset(photo_id) is None
        env = project.find_environment(env_id)
        assert env.before_asset_id == photo_id
        assert env.find_board(board_id).base_asset_id == photo_id


class TestAnalysis:

    def test_attach_analysis_sets_tags(self, setup):
        project, _, photo_id, _ = setup
        analysis = AssetAnalysis(summary="Hall", detected_style=("Rustic",))
        project = edits.attach_analysis_to_asset(project, photo_id, analysis)
        asset = project.find_asset(photo_id)
        assert asset.analysis.summary == "Hall"
        assert asset.tags == ("Rustic",)

    def test_analysis_attached_once(self, setup):
        project, _, photo_id, _ = setup
        analysis = AssetAnalysis(summary="Hall")
        project = edits.attach_analysis_to_asset(project, photo_id, analysis)
        with pytest.raises(AnalysisAlreadyAttached):
            edits.attach_analysis_to_asset(project, photo_id, analysis)

    def test_analysis_for_deleted_asset(self, setup):
        project, _, photo_id, _ = setup
        project = edits.remove_asset(project, photo_id)
        with pytest.raises(AssetNotFound):
            edits.attach_analysis_to_asset(project, photo_id, AssetAnalysis(summary="x"))


class TestBoards:

    def test_new_board_defaults(self, setup):
        project, env_id, photo_id, _ = setup
        board = edits.new_board(project, env_id)
        assert board.base_asset_id == photo_id
        assert board.directives.budget_target == project.budget_range

    def test_new_board_with_unknown_base(self, setup):
        project, env_id, _, _ = setup
        with pytest.raises(AssetNotFound):
            edits.new_board(project, env_id, base_asset_id="missing")

    def test_add_board_to_wrong_environment(self, setup):
        project, env_id, _, _ = setup
        other = Environment.create("Hall")
        project = edits.add_environment(project, other)
        board = edits.new_board(project, env_id)
        with pytest.raises(InvalidEdit):
            edits.add_board(project, other.id, board)

    def test_history_is_append_only(self, setup):
        project, env_id, _, board_id = setup
        v1 = BoardVersion.create([_variation("Version 1")])
        v2 = BoardVersion.create([_variation("Version 2")])
        project = edits.append_board_version(project, env_id, board_id, v1)
        after_v1 = project.find_environment(env_id).find_board(board_id).history
        project = edits.append_board_version(project, env_id, board_id, v2)
        history = project.find_environment(env_id).find_board(board_id).history
        assert history[: len(after_v1)] == after_v1
        assert history[-1] == v2

    def test_empty_version_rejected(self, setup):
        project, env_id, _, board_id = setup
        with pytest.raises(InvalidEdit):
            edits.append_board_version(project, env_id, board_id, BoardVersion.create([]))

    def test_duplicate_variation_id_rejected(self, setup):
        project, env_id, _, board_id = setup
        variation = _variation()
        project = edits.append_board_version(project, env_id, board_id, BoardVersion.create([variation]))
        with pytest.raises(DuplicateIdentity):
            edits.append_board_version(project, env_id, board_id, BoardVersion.create([variation]))

    def test_append_to_removed_board(self, setup):
        project, env_id, _, board_id = setup
        project = edits.remove_board(project, env_id, board_id)
        with pytest.raises(BoardNotFound):
            edits.append_board_version(project, env_id, board_id, BoardVersion.create([_variation()]))

    def test_approval_replaces_previous(self, setup):
        project, env_id, _, board_id = setup
        first, second = _variation("A"), _variation("B")
        project = edits.append_board_version(project, env_id, board_id, BoardVersion.create([first, second]))
        project = edits.approve_variation(project, env_id, board_id, first.id)
        project = edits.approve_variation(project, env_id, board_id, second.id)
        board = project.find_environment(env_id).find_board(board_id)
        assert board.approved_variation_id == second.id

    def test_approve_unknown_variation(self, setup):
        project, env_id, _, board_id = setup
        with pytest.raises(VariationNotFound):
            edits.approve_variation(project, env_id, board_id, "missing")

    def test_revoke_approval(self, setup):
        project, env_id, _, board_id = setup
        variation = _variation()
        project = edits.append_board_version(project, env_id, board_id, BoardVersion.create([variation]))
        project = edits.approve_variation(project, env_id, board_id, variation.id)
        project = edits.revoke_variation_approval(project, env_id, board_id)
        assert project.find_environment(env_id).find_board(board_id).approved_variation_id is None

    def test_fixed_elements_are_trimmed(self, setup):
        project, env_id, _, board_id = setup
        project = edits.set_fixed_elements(project, env_id, board_id, [" Windows ", "", "  "])
        assert project.find_environment(env_id).find_board(board_id).fixed_elements == ("Windows",)

    def test_update_directives(self, setup):
        project, env_id, _, board_id = setup
        project = edits.update_board_directives(project, env_id, board_id, Directives(goal="Cozy"))
        assert project.find_environment(env_id).find_board(board_id).directives.goal == "Cozy"


class TestCrest:

    def test_approve_without_crest(self):
        with pytest.raises(CrestNotFound):
            edits.approve_crest_option(new_project(), "x")

    def test_set_crest_with_dangling_approval(self):
        crest = Crest.create("AB", options=(_option(),), approved_option_id="missing")
        with pytest.raises(CrestOptionNotFound):
            edits.set_crest(new_project(), crest)

    def test_new_crest_replaces_previous(self):
        project = edits.set_crest(new_project(), Crest.create("AB", options=(_option(),)))
        replacement = Crest.create("CD", options=(_option("Modern"),))
        project = edits.set_crest(project, replacement)
        assert project.crest.initials == "CD"

    def test_add_and_approve_option(self):
        project = edits.set_crest(new_project(), Crest.create("AB", options=(_option(),)))
        refined = _option("Classic (Refined)")
        project = edits.add_crest_options(project, [refined])
        project = edits.approve_crest_option(project, refined.id)
        assert project.crest.approved_option == refined
        assert edits.revoke_crest_approval(project).crest.approved_option_id is None


class TestMoodboards:

    def test_add_and_remove(self):
        moodboard = Moodboard.create("Garden")
        project = edits.add_moodboard(new_project(), moodboard)
        assert project.find_moodboard(moodboard.id) == moodboard
        assert edits.remove_moodboard(project, moodboard.id).moodboards == ()


class TestCheckInvariants:

    def test_consistent_project(self, setup):
        project, *_ = setup
        assert edits.check_invariants(project) == []

    def test_detects_unresolved_approval(self, setup):
        project, env_id, _, board_id = setup
        env = project.find_environment(env_id)
        board = env.find_board(board_id).model_copy(update={"approved_variation_id": "ghost"})
        env = env.model_copy(update={"boards": (board,)})
        broken = project.model_copy(update={"environments": (env,)})
        assert any("ghost" in p for p in edits.check_invariants(broken))

    def test_detects_duplicate_assets(self, setup):
        project, *_ = setup
        broken = project.model_copy(update={"assets": project.assets * 2})
        assert edits.check_invariants(broken)
