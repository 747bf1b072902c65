"""Briefing capture: raw audio or text to structured directives."""

import logging
from typing import Optional

from eventarchitect.domain.constants import STANDARD_BRIEFING_QUESTIONS
from eventarchitect.domain.exceptions import DomainError, InputValidationError
from eventarchitect.domain.models import Directives, Palette, Project
from eventarchitect.domain.services import project_edits
from eventarchitect.domain.workflow.base import BaseWorkflow, workflow_step
from eventarchitect.domain.workflow.outcome import WorkflowOutcome
from eventarchitect.llm.models import LLMException
from eventarchitect.llm.schemas import BriefingDirectives, BriefingExtraction

logger = logging.getLogger(__name__)


def merge_directives(
    existing: Optional[Directives],
    extracted: BriefingDirectives,
    budget_range: str,
) -> Directives:
    """
    Combine extracted directives with what the project already has.

    Extracted fields win when non-empty; fields the extraction does not
    cover (must-haves, notes, density, ...) are kept.
    """
    base = existing or Directives(budget_target=budget_range)
    return base.model_copy(update={
        "goal": extracted.goal or base.goal,
        "palette": Palette(
            preferred=tuple(extracted.palette.preferred) or base.palette.preferred,
            avoid=tuple(extracted.palette.avoid) or base.palette.avoid,
        ),
        "materials": tuple(extracted.materials) or base.materials,
        "lighting": extracted.lighting or base.lighting,
        "budget_target": base.budget_target or budget_range,
    })


class BriefingWorkflow(BaseWorkflow):
    """Extract a briefing and store transcript and directives on the project."""

    name = "briefing"

    @staticmethod
    def standard_questions():
        return list(STANDARD_BRIEFING_QUESTIONS)

    @workflow_step
    async def capture_text(self, project_id: str, text: str) -> WorkflowOutcome:
        try:
            self.store.get(project_id)
            if not text or not text.strip():
                raise InputValidationError("Briefing text is required", field="text")
        except DomainError as e:
            return self.rejected(e)

        try:
            extraction = await self.gateway.extract_briefing_from_text(text.strip())
        except LLMException as e:
            return self.generation_failed(e)
        return await self._store_extraction(project_id, extraction)

    @workflow_step
    async def capture_audio(self, project_id: str, data: str, mime_type: str = "audio/webm") -> WorkflowOutcome:
        try:
            self.store.get(project_id)
            if not data:
                raise InputValidationError("Audio data is required", field="data")
        except DomainError as e:
            return self.rejected(e)

        try:
            extraction = await self.gateway.extract_briefing_from_audio(data, mime_type)
        except LLMException as e:
            return self.generation_failed(e)
        return await self._store_extraction(project_id, extraction)

    async def _store_extraction(self, project_id: str, extraction: BriefingExtraction) -> WorkflowOutcome:
        def edit(project: Project) -> Project:
            directives = merge_directives(
                project.briefing_directives, extraction.directives, project.budget_range,
            )
            return project_edits.set_briefing(project, extraction.transcript, directives)

        # Follow-up questions go back to the caller; they are not stored
        return await self.merge(
            project_id,
            edit,
            "Briefing captured",
            follow_up_questions=list(extraction.missing_info_questions),
            transcript=extraction.transcript,
        )
