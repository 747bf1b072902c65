"""
Crest (visual identity) generation.

A collection run asks for six concepts in one structured call, then
renders every option's three variants in parallel. Option failures are
isolated: the options that rendered are kept and the run is reported
as partial.
"""

import logging
from typing import Any, List, Optional

from eventarchitect.domain.constants import REFINED_SUFFIX
from eventarchitect.domain.exceptions import CrestOptionNotFound, DomainError, InputValidationError
from eventarchitect.domain.models import Crest, CrestOption, Project
from eventarchitect.domain.services import project_edits
from eventarchitect.domain.workflow.base import BaseWorkflow, workflow_step
from eventarchitect.domain.workflow.batch import gather_all, run_isolated
from eventarchitect.domain.workflow.outcome import OutcomeStatus, WorkflowOutcome
from eventarchitect.llm.models import LLMException
from eventarchitect.llm.schemas import CrestConcept

logger = logging.getLogger(__name__)

EXPLORATION_STYLE = "Exploration of 6 Styles"


def crest_palette(project: Project) -> List[Any]:
    """Colors for the crest: first moodboard palette, then briefing, then none."""
    for moodboard in project.moodboards:
        if moodboard.palette:
            return [color.model_dump() for color in moodboard.palette]
    if project.briefing_directives and project.briefing_directives.palette.preferred:
        return list(project.briefing_directives.palette.preferred)
    return []


class CrestWorkflow(BaseWorkflow):
    name = "crest"

    @workflow_step
    async def generate_collection(
        self,
        project_id: str,
        initials: str,
        host_name: str = "",
        symbols: str = "",
        forbidden: str = "",
        selected_style: Optional[str] = None,
    ) -> WorkflowOutcome:
        try:
            project = self.store.get(project_id)
            if not initials or not initials.strip():
                raise InputValidationError("Initials are required", field="initials")
        except DomainError as e:
            return self.rejected(e)

        initials = initials.strip()
        try:
            concepts = await self.gateway.generate_crest_concepts(
                initials,
                host_name or project.name,
                project.type,
                crest_palette(project),
                symbols,
                forbidden,
                selected_style,
            )
        except LLMException as e:
            return self.generation_failed(e)

        batch = await run_isolated(
            [self._render_option(concept) for concept in concepts.options],
            [concept.style_name for concept in concepts.options],
            self.name,
        )
        if batch.all_failed:
            logger.error(f"{self.name}: every option failed for project {project_id}")
            outcome = WorkflowOutcome.failed(self.name, "No crest option could be generated. Please try again.")
            outcome.failures = batch.failures
            return outcome

        crest = Crest.create(
            initials=initials,
            style=selected_style or EXPLORATION_STYLE,
            concept=concepts.concept_summary,
            options=tuple(batch.values),
            usage_guide=tuple(concepts.usage_guide),
        )
        outcome = await self.merge(
            project_id,
            lambda current: project_edits.set_crest(current, crest),
            f"{len(batch.successes)} crest options generated",
            crest_id=crest.id,
        )
        if batch.failures and outcome.succeeded:
            outcome.status = OutcomeStatus.PARTIAL
            outcome.failures = batch.failures
            outcome.message = f"{len(batch.successes)} of {len(concepts.options)} crest options generated"
        return outcome

    async def _render_option(self, concept: CrestConcept) -> CrestOption:
        png, gold, mono = await gather_all(
            self.gateway.generate_crest_image(concept.visual_prompt, "default"),
            self.gateway.generate_crest_image(concept.visual_prompt, "gold"),
            self.gateway.generate_crest_image(concept.visual_prompt, "black"),
        )
        return CrestOption.create(
            style_name=concept.style_name,
            png_uri=png,
            gold_png_uri=gold,
            mono_png_uri=mono,
            prompt_used=concept.visual_prompt,
            description=concept.description,
            usage_suggestion=concept.usage_suggestion,
        )

    @workflow_step
    async def refine(self, project_id: str, edit_prompt: Optional[str] = None) -> WorkflowOutcome:
        """
        Refine the approved option into a new one and approve it.

        The source option is never modified.
        """
        try:
            crest = project_edits.get_crest(self.store.get(project_id))
            source = crest.approved_option
            if source is None:
                raise InputValidationError("Approve a crest option before refining it")
        except DomainError as e:
            return self.rejected(e)

        prompt = (edit_prompt or "").strip() or source.prompt_used
        try:
            png = await self.gateway.generate_crest_variation(source.png_uri, prompt)
            gold, mono = await gather_all(
                self.gateway.transform_crest_variant(png, "gold"),
                self.gateway.transform_crest_variant(png, "black"),
            )
        except LLMException as e:
            return self.generation_failed(e)

        refined = CrestOption.create(
            style_name=f"{source.style_name}{REFINED_SUFFIX}",
            png_uri=png,
            gold_png_uri=gold,
            mono_png_uri=mono,
            prompt_used=prompt,
            description=source.description,
            usage_suggestion=source.usage_suggestion,
            refined_from_id=source.id,
        )

        def record(current: Project) -> Project:
            if project_edits.get_crest(current).find_option(source.id) is None:
                raise CrestOptionNotFound(source.id)
            current = project_edits.add_crest_options(current, [refined])
            return project_edits.approve_crest_option(current, refined.id)

        return await self.merge(
            project_id, record, "Crest refined", option_id=refined.id, refined_from_id=source.id,
        )
