"""Generation API router.

Every endpoint runs one workflow and returns its outcome with HTTP 200;
the outcome status (completed, partial, failed, discarded) tells the
caller what happened. Only an unknown project is an HTTP error.
"""

import logging

from fastapi import APIRouter, Depends

from eventarchitect.api.dependencies import get_engine
from eventarchitect.api.schemas import (
    BriefingAudioRequest,
    BriefingTextRequest,
    CrestGenerateRequest,
    CrestRefineRequest,
    MoodboardRequest,
    ProposalRequest,
    QuickEditRequest,
    RefinePromptRequest,
    outcome_body,
)
from eventarchitect.domain.workflow import GenerationEngine
from eventarchitect.llm.schemas import RefinedPrompt

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/projects/{project_id}/generate", tags=["generate"])


def _known(engine: GenerationEngine, project_id: str) -> None:
    engine.store.get(project_id)


@router.get("/briefing/questions")
async def briefing_questions(project_id: str, engine: GenerationEngine = Depends(get_engine)):
    _known(engine, project_id)
    return {"questions": engine.briefing.standard_questions()}


@router.post("/briefing/text")
async def briefing_from_text(
    project_id: str,
    request: BriefingTextRequest,
    engine: GenerationEngine = Depends(get_engine),
):
    _known(engine, project_id)
    return outcome_body(await engine.briefing.capture_text(project_id, request.text))


@router.post("/briefing/audio")
async def briefing_from_audio(
    project_id: str,
    request: BriefingAudioRequest,
    engine: GenerationEngine = Depends(get_engine),
):
    _known(engine, project_id)
    return outcome_body(await engine.briefing.capture_audio(project_id, request.data, request.mime_type))


@router.post("/assets/{asset_id}/analysis")
async def analyze_asset(project_id: str, asset_id: str, engine: GenerationEngine = Depends(get_engine)):
    _known(engine, project_id)
    return outcome_body(await engine.assets.analyze(project_id, asset_id))


@router.post("/assets/{asset_id}/edit")
async def quick_edit_asset(
    project_id: str,
    asset_id: str,
    request: QuickEditRequest,
    engine: GenerationEngine = Depends(get_engine),
):
    _known(engine, project_id)
    return outcome_body(await engine.quick_edit.edit(project_id, asset_id, request.prompt))


@router.post("/environments/{environment_id}/boards/{board_id}/versions")
async def generate_board_version(
    project_id: str,
    environment_id: str,
    board_id: str,
    engine: GenerationEngine = Depends(get_engine),
):
    _known(engine, project_id)
    return outcome_body(await engine.boards.generate_version(project_id, environment_id, board_id))


@router.post("/environments/{environment_id}/refine-prompt")
async def refine_prompt(
    project_id: str,
    environment_id: str,
    request: RefinePromptRequest,
    engine: GenerationEngine = Depends(get_engine),
):
    _known(engine, project_id)
    return outcome_body(await engine.proposals.refine_prompt(project_id, environment_id, request.text))


@router.post("/environments/{environment_id}/proposal")
async def expert_proposal(
    project_id: str,
    environment_id: str,
    request: ProposalRequest,
    engine: GenerationEngine = Depends(get_engine),
):
    _known(engine, project_id)
    refined = RefinedPrompt(
        refined_prompt_en=request.refined_prompt_en,
        negative_prompt=request.negative_prompt,
        client_explanation=request.client_explanation,
    )
    outcome = await engine.proposals.propose(
        project_id, environment_id, refined, use_pro=request.use_pro, size=request.size,
    )
    return outcome_body(outcome)


@router.post("/crest")
async def generate_crest(
    project_id: str,
    request: CrestGenerateRequest,
    engine: GenerationEngine = Depends(get_engine),
):
    _known(engine, project_id)
    outcome = await engine.crest.generate_collection(
        project_id,
        request.initials,
        host_name=request.host_name,
        symbols=request.symbols,
        forbidden=request.forbidden,
        selected_style=request.selected_style,
    )
    return outcome_body(outcome)


@router.post("/crest/refine")
async def refine_crest(
    project_id: str,
    request: CrestRefineRequest,
    engine: GenerationEngine = Depends(get_engine),
):
    _known(engine, project_id)
    return outcome_body(await engine.crest.refine(project_id, request.edit_prompt))


@router.post("/moodboard")
async def generate_moodboard(
    project_id: str,
    request: MoodboardRequest,
    engine: GenerationEngine = Depends(get_engine),
):
    _known(engine, project_id)
    return outcome_body(await engine.moodboards.synthesize(project_id, request.environment_id))
