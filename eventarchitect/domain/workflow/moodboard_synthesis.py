"""Moodboard synthesis: briefing or keywords -> design -> collage -> new Moodboard."""

import logging
from typing import Any, Dict, Optional

from eventarchitect.domain.exceptions import DomainError, InputValidationError
from eventarchitect.domain.models import Moodboard, PaletteColor, Project
from eventarchitect.domain.services import project_edits
from eventarchitect.domain.workflow.base import BaseWorkflow, workflow_step
from eventarchitect.domain.workflow.outcome import WorkflowOutcome
from eventarchitect.llm.models import LLMException

logger = logging.getLogger(__name__)


def moodboard_inputs(project: Project) -> Dict[str, Any]:
    """Briefing directives when captured, otherwise the project keywords."""
    if project.briefing_directives is not None:
        return project.briefing_directives.model_dump(mode="json")
    if project.keywords:
        return {"keywords": list(project.keywords)}
    raise InputValidationError("Capture a briefing or add keywords before generating a moodboard")


class MoodboardWorkflow(BaseWorkflow):
    name = "moodboard"

    @workflow_step
    async def synthesize(self, project_id: str, environment_id: Optional[str] = None) -> WorkflowOutcome:
        try:
            project = self.store.get(project_id)
            if environment_id is not None:
                project_edits.get_environment(project, environment_id)
            inputs = moodboard_inputs(project)
        except DomainError as e:
            return self.rejected(e)

        try:
            design = await self.gateway.build_moodboard_design(inputs)
            collage = await self.gateway.generate_moodboard_image(design.short_story)
        except LLMException as e:
            return self.generation_failed(e)

        moodboard = Moodboard.create(
            title=design.title,
            environment_id=environment_id,
            palette=tuple(PaletteColor(name=c.name, hex=c.hex, role=c.role) for c in design.palette),
            textures=tuple(design.textures),
            objects=tuple(design.objects),
            symbols=tuple(design.symbols),
            short_story=design.short_story,
            collage_image_uri=collage,
        )

        def add(current: Project) -> Project:
            # The environment is a soft reference; only its existence at merge time is checked
            if environment_id is not None:
                project_edits.get_environment(current, environment_id)
            return project_edits.add_moodboard(current, moodboard)

        return await self.merge(project_id, add, "Moodboard generated", moodboard_id=moodboard.id)
