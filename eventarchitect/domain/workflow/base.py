"""Shared plumbing for generation workflows."""

import functools
import logging
from typing import Callable

from eventarchitect.core.logging import log_context
from eventarchitect.domain.exceptions import DomainError, EntityNotFound, InvariantViolation
from eventarchitect.domain.models import Project
from eventarchitect.domain.services.project_store import ProjectStore
from eventarchitect.domain.workflow.outcome import WorkflowOutcome, describe_llm_error
from eventarchitect.llm.gateway import AIGateway
from eventarchitect.llm.models import LLMException

logger = logging.getLogger(__name__)


def workflow_step(method):
    """Run a workflow entry point with its workflow and project bound to the log context."""

    @functools.wraps(method)
    async def wrapper(self, project_id: str, *args, **kwargs):
        with log_context(workflow=self.name, project_id=project_id):
            return await method(self, project_id, *args, **kwargs)

    return wrapper


class BaseWorkflow:
    """
    Base class for workflows.

    A workflow validates its input against the current project, calls
    the AI Gateway, and folds the result back through the Store's single
    write path. It never holds on to a project value across an await
    for writing: the merge edit always receives the latest snapshot.
    """

    name = "workflow"

    def __init__(self, store: ProjectStore, gateway: AIGateway):
        self.store = store
        self.gateway = gateway

    def rejected(self, error: DomainError) -> WorkflowOutcome:
        """Outcome for input rejected before any AI call."""
        logger.info(f"{self.name}: rejected input: {error.message}")
        return WorkflowOutcome.failed(self.name, error.message, error_code=error.error_code)

    def generation_failed(self, error: LLMException) -> WorkflowOutcome:
        logger.error(f"{self.name}: generation failed ({error.error.error_type}): {error}")
        return WorkflowOutcome.failed(
            self.name,
            describe_llm_error(error),
            error_type=error.error.error_type,
        )

    async def merge(
        self,
        project_id: str,
        edit: Callable[[Project], Project],
        message: str = "",
        **data,
    ) -> WorkflowOutcome:
        """
        Apply `edit` to the latest project snapshot.

        If the target entity vanished while the generation ran, the
        result is discarded rather than resurrecting it.
        """
        try:
            project, failure = await self.store.commit(project_id, edit)
        except (EntityNotFound, InvariantViolation) as e:
            logger.warning(f"{self.name}: result discarded for project {project_id}: {e.message}")
            return WorkflowOutcome.discarded(self.name, f"Result discarded: {e.message}")

        outcome = WorkflowOutcome.completed(self.name, project, message, **data)
        if failure is not None:
            outcome.warnings = [failure.message]
        return outcome
