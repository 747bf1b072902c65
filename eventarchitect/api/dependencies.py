"""
FastAPI dependencies for API endpoints.

The app factory installs one Store, one AI Gateway and one Engine per
process; endpoints reach them only through these getters.
"""

from typing import Dict, Optional

from eventarchitect.api.exceptions import APIError
from eventarchitect.domain.services.project_store import ProjectStore
from eventarchitect.domain.workflow import GenerationEngine
from eventarchitect.llm import AIGateway, ChatSession

# Global state
_store: Optional[ProjectStore] = None
_gateway: Optional[AIGateway] = None
_engine: Optional[GenerationEngine] = None
_chat_sessions: Dict[str, ChatSession] = {}


def set_services(store: ProjectStore, gateway: AIGateway) -> None:
    """Install the process-wide services (called by the app factory)."""
    global _store, _gateway, _engine
    _store = store
    _gateway = gateway
    _engine = GenerationEngine(store, gateway)
    _chat_sessions.clear()


def clear_services() -> None:
    """Forget installed services (for testing)."""
    global _store, _gateway, _engine
    _store = _gateway = _engine = None
    _chat_sessions.clear()


def get_store() -> ProjectStore:
    if _store is None:
        raise APIError.unavailable("Project store")
    return _store


def get_gateway() -> AIGateway:
    if _gateway is None:
        raise APIError.unavailable("AI gateway")
    return _gateway


def get_engine() -> GenerationEngine:
    if _engine is None:
        raise APIError.unavailable("Generation engine")
    return _engine


def open_chat_session(session_id: str) -> ChatSession:
    session = ChatSession(get_gateway())
    _chat_sessions[session_id] = session
    return session


def get_chat_session(session_id: str) -> ChatSession:
    session = _chat_sessions.get(session_id)
    if session is None:
        raise APIError.not_found("chat session", session_id)
    return session


def close_chat_session(session_id: str) -> None:
    if _chat_sessions.pop(session_id, None) is None:
        raise APIError.not_found("chat session", session_id)
