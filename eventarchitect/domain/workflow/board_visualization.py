"""
Board visualization workflows.

Every generation appends a new BoardVersion to a board's history.
Nothing here overwrites or removes a version that was already shown.
"""

import logging
from typing import Optional

from eventarchitect.domain.exceptions import DomainError, InputValidationError
from eventarchitect.domain.models import (
    Board,
    BoardVariation,
    BoardVersion,
    Directives,
    Project,
    new_id,
)
from eventarchitect.domain.services import project_edits
from eventarchitect.domain.workflow.base import BaseWorkflow, workflow_step
from eventarchitect.domain.workflow.outcome import WorkflowOutcome
from eventarchitect.llm.gateway import IMAGE_SIZES
from eventarchitect.llm.models import LLMException
from eventarchitect.llm.schemas import RefinedPrompt

logger = logging.getLogger(__name__)


class BoardVisualizationWorkflow(BaseWorkflow):
    """Directives + analysis + fixed elements -> prompt -> image -> new version."""

    name = "board_visualization"

    @workflow_step
    async def generate_version(self, project_id: str, environment_id: str, board_id: str) -> WorkflowOutcome:
        try:
            project = self.store.get(project_id)
            board = project_edits.get_board(project, environment_id, board_id)
            base_asset = project.find_asset(board.base_asset_id)
            if base_asset is None:
                raise InputValidationError("Board has no base photo", field="base_asset_id")
        except DomainError as e:
            return self.rejected(e)

        analysis = base_asset.analysis.model_dump(mode="json") if base_asset.analysis else None
        try:
            plan = await self.gateway.build_edit_prompt(
                board.directives.model_dump(mode="json"),
                analysis,
                list(board.fixed_elements),
            )
            image_url = await self.gateway.generate_space_image(
                base_asset.data, plan.edit_prompt, plan.negative_prompt,
            )
        except LLMException as e:
            return self.generation_failed(e)

        version_id, variation_id = new_id(), new_id()

        def append(current: Project) -> Project:
            history = project_edits.get_board(current, environment_id, board_id).history
            variation = BoardVariation(
                id=variation_id,
                name=f"Version {len(history) + 1}",
                image_url=image_url,
                client_summary=plan.client_summary,
                change_list=tuple(plan.change_list),
                edit_prompt=plan.edit_prompt,
                negative_prompt=plan.negative_prompt,
                constraints=tuple(plan.constraints),
            )
            version = BoardVersion.create([variation]).model_copy(update={"id": version_id})
            return project_edits.append_board_version(current, environment_id, board_id, version)

        return await self.merge(
            project_id, append, "New version generated",
            board_id=board_id, version_id=version_id, variation_id=variation_id,
        )


class ExpertProposalWorkflow(BaseWorkflow):
    """
    Free-text proposals for an environment.

    The user's request is refined into an English prompt first; the
    proposal itself renders that prompt over the environment's before
    photo and records it on the primary board as a new, approved version.
    """

    name = "expert_proposal"

    @workflow_step
    async def refine_prompt(self, project_id: str, environment_id: str, user_text: str) -> WorkflowOutcome:
        """Refine a request. Nothing is stored; the result is in outcome.data."""
        try:
            project = self.store.get(project_id)
            environment = project_edits.get_environment(project, environment_id)
            if not user_text or not user_text.strip():
                raise InputValidationError("Describe the desired result first", field="text")
        except DomainError as e:
            return self.rejected(e)

        before = project.find_asset(environment.before_asset_id)
        space_description = before.analysis.summary if before and before.analysis else ""
        styles = project.briefing_directives.palette.preferred if project.briefing_directives else ()

        try:
            refined = await self.gateway.refine_image_prompt(user_text.strip(), space_description, styles)
        except LLMException as e:
            return self.generation_failed(e)
        return WorkflowOutcome.completed(
            self.name, project, "Prompt refined", refined_prompt=refined.model_dump(),
        )

    @workflow_step
    async def propose(
        self,
        project_id: str,
        environment_id: str,
        refined: RefinedPrompt,
        use_pro: bool = False,
        size: str = "1K",
    ) -> WorkflowOutcome:
        try:
            project = self.store.get(project_id)
            environment = project_edits.get_environment(project, environment_id)
            before = project.find_asset(environment.before_asset_id)
            if before is None:
                raise InputValidationError("Upload a photo of the space first", field="before_asset_id")
            if size not in IMAGE_SIZES:
                raise InputValidationError(f"Size must be one of {', '.join(IMAGE_SIZES)}", field="size")
        except DomainError as e:
            return self.rejected(e)

        try:
            image_url = await self.gateway.generate_space_image(
                before.data, refined.refined_prompt_en, refined.negative_prompt,
                use_pro=use_pro, size=size,
            )
        except LLMException as e:
            return self.generation_failed(e)

        variation = BoardVariation.create(
            name=f"Expert Proposal (Pro {size})" if use_pro else "Expert Proposal",
            image_url=image_url,
            client_summary=refined.client_explanation,
            edit_prompt=refined.refined_prompt_en,
            negative_prompt=refined.negative_prompt,
        )
        version = BoardVersion.create([variation])

        def record(current: Project) -> Project:
            env = project_edits.get_environment(current, environment_id)
            board: Optional[Board] = env.primary_board
            if board is None:
                board = _proposal_board(current, environment_id)
                current = project_edits.add_board(current, environment_id, board)
            current = project_edits.append_board_version(current, environment_id, board.id, version)
            return project_edits.approve_variation(current, environment_id, board.id, variation.id)

        return await self.merge(
            project_id, record, "Proposal generated and approved",
            version_id=version.id, variation_id=variation.id,
        )


def _proposal_board(project: Project, environment_id: str) -> Board:
    """Board for an environment's first proposal, seeded from the briefing."""
    environment = project_edits.get_environment(project, environment_id)
    board = project_edits.new_board(project, environment_id)
    briefing = project.briefing_directives or Directives(budget_target=project.budget_range)
    return board.model_copy(update={
        "directives": briefing.model_copy(update={"goal": environment.goal or briefing.goal}),
    })
