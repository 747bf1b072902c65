"""
Generation Workflow Engine.

Each workflow validates input, calls the AI Gateway, and merges its
result through the Project Store. Results come back as WorkflowOutcome
values; AI and not-found errors are never raised to the caller.
"""

from eventarchitect.domain.workflow.outcome import (
    ItemFailure,
    OutcomeStatus,
    WorkflowOutcome,
    describe_llm_error,
)
from eventarchitect.domain.workflow.batch import BatchResult, gather_all, run_isolated
from eventarchitect.domain.workflow.base import BaseWorkflow
from eventarchitect.domain.workflow.briefing import BriefingWorkflow, merge_directives
from eventarchitect.domain.workflow.asset_analysis import AssetAnalysisWorkflow, QuickEditWorkflow
from eventarchitect.domain.workflow.board_visualization import (
    BoardVisualizationWorkflow,
    ExpertProposalWorkflow,
)
from eventarchitect.domain.workflow.crest_generation import CrestWorkflow, crest_palette
from eventarchitect.domain.workflow.moodboard_synthesis import MoodboardWorkflow, moodboard_inputs
from eventarchitect.domain.workflow.engine import GenerationEngine

__all__ = [
    "ItemFailure",
    "OutcomeStatus",
    "WorkflowOutcome",
    "describe_llm_error",
    "BatchResult",
    "gather_all",
    "run_isolated",
    "BaseWorkflow",
    "BriefingWorkflow",
    "merge_directives",
    "AssetAnalysisWorkflow",
    "QuickEditWorkflow",
    "BoardVisualizationWorkflow",
    "ExpertProposalWorkflow",
    "CrestWorkflow",
    "crest_palette",
    "MoodboardWorkflow",
    "moodboard_inputs",
    "GenerationEngine",
]
