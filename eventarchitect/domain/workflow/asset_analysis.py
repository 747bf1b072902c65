"""Asset workflows: analysis of uploaded photos and AI quick edits."""

import logging

from eventarchitect.domain.exceptions import DomainError, InputValidationError
from eventarchitect.domain.models import AI_EDITED_TAG, Asset, AssetAnalysis, Project
from eventarchitect.domain.services import project_edits
from eventarchitect.domain.workflow.base import BaseWorkflow, workflow_step
from eventarchitect.domain.workflow.outcome import WorkflowOutcome
from eventarchitect.llm.models import LLMException

logger = logging.getLogger(__name__)


class AssetAnalysisWorkflow(BaseWorkflow):
    name = "asset_analysis"

    @workflow_step
    async def analyze(self, project_id: str, asset_id: str) -> WorkflowOutcome:
        """
        Run the single analysis pass for an asset.

        If the asset is deleted while the call is in flight the result
        is discarded.
        """
        try:
            asset = project_edits.get_asset(self.store.get(project_id), asset_id)
            if not asset.is_analyzable:
                raise InputValidationError(f"Assets of type {asset.type.value} are not analysed")
            if asset.analysis is not None:
                raise InputValidationError(f"Asset {asset_id} already has an analysis")
        except DomainError as e:
            return self.rejected(e)

        try:
            result = await self.gateway.analyze_asset(asset.data, asset.mime_type or "image/png")
        except LLMException as e:
            return self.generation_failed(e)

        analysis = AssetAnalysis(
            summary=result.summary,
            detected_style=tuple(result.detected_style),
            key_elements=tuple(result.key_elements),
            constraints=tuple(result.constraints),
            risks=tuple(result.risks),
            suggested_questions=tuple(result.suggested_questions),
        )
        return await self.merge(
            project_id,
            lambda project: project_edits.attach_analysis_to_asset(project, asset_id, analysis),
            "Asset analysed",
            asset_id=asset_id,
        )


class QuickEditWorkflow(BaseWorkflow):
    name = "quick_edit"

    @workflow_step
    async def edit(self, project_id: str, asset_id: str, prompt: str) -> WorkflowOutcome:
        """Create a new, AI-edited asset from an existing one. The source is untouched."""
        try:
            source = project_edits.get_asset(self.store.get(project_id), asset_id)
            if not prompt or not prompt.strip():
                raise InputValidationError("Edit prompt is required", field="prompt")
        except DomainError as e:
            return self.rejected(e)

        try:
            image = await self.gateway.edit_image(source.data, prompt.strip())
        except LLMException as e:
            return self.generation_failed(e)

        edited = Asset.create(
            type=source.type,
            data=image,
            mime_type="image/png",
            tags=source.tags + (AI_EDITED_TAG,),
        )

        def add(project: Project) -> Project:
            return project_edits.add_asset(project, edited)

        return await self.merge(project_id, add, "Edited asset created", asset_id=edited.id, source_asset_id=asset_id)
