"""Generation Workflow Engine: one entry point over every workflow."""

from eventarchitect.domain.services.project_store import ProjectStore
from eventarchitect.domain.workflow.asset_analysis import AssetAnalysisWorkflow, QuickEditWorkflow
from eventarchitect.domain.workflow.board_visualization import (
    BoardVisualizationWorkflow,
    ExpertProposalWorkflow,
)
from eventarchitect.domain.workflow.briefing import BriefingWorkflow
from eventarchitect.domain.workflow.crest_generation import CrestWorkflow
from eventarchitect.domain.workflow.moodboard_synthesis import MoodboardWorkflow
from eventarchitect.llm.gateway import AIGateway


class GenerationEngine:
    """Holds the workflows that share one Store and one AI Gateway."""

    def __init__(self, store: ProjectStore, gateway: AIGateway):
        self.store = store
        self.gateway = gateway
        self.briefing = BriefingWorkflow(store, gateway)
        self.assets = AssetAnalysisWorkflow(store, gateway)
        self.quick_edit = QuickEditWorkflow(store, gateway)
        self.boards = BoardVisualizationWorkflow(store, gateway)
        self.proposals = ExpertProposalWorkflow(store, gateway)
        self.crest = CrestWorkflow(store, gateway)
        self.moodboards = MoodboardWorkflow(store, gateway)
