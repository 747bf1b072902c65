"""Chat API router: one in-memory assistant session per id."""

import logging

from fastapi import APIRouter, status

from eventarchitect.api.dependencies import close_chat_session, get_chat_session, open_chat_session
from eventarchitect.api.schemas import ChatMessageRequest
from eventarchitect.domain.models import new_id

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/chat", tags=["chat"])


@router.post("/sessions", status_code=status.HTTP_201_CREATED)
async def create_session():
    session_id = new_id()
    session = open_chat_session(session_id)
    return {"session_id": session_id, "greeting": session.greeting}


@router.get("/sessions/{session_id}")
async def get_transcript(session_id: str):
    return {"session_id": session_id, "messages": get_chat_session(session_id).transcript}


@router.post("/sessions/{session_id}/messages")
async def send_message(session_id: str, request: ChatMessageRequest):
    reply = await get_chat_session(session_id).send(request.text)
    return {"session_id": session_id, "reply": reply}


@router.delete("/sessions/{session_id}")
async def end_session(session_id: str):
    close_chat_session(session_id)
    return {"session_id": session_id, "closed": True}
