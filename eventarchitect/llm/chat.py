"""Conversational assistant session."""

import logging
from typing import List

from eventarchitect.llm.gateway import AIGateway
from eventarchitect.llm.models import LLMException, Message, MessageRole
from eventarchitect.llm.prompt_builder import CHAT_SYSTEM_INSTRUCTION

logger = logging.getLogger(__name__)

GREETING = "Hello! I'm your event architecture assistant. How can I help with your project today?"
APOLOGY = "Sorry, I couldn't process your message right now. Please try again."


class ChatSession:
    """
    Stateful chat with a fixed system instruction.

    History lives in memory for the lifetime of the session and is
    never persisted. A failed reply returns an apology and does not
    enter the history.
    """

    def __init__(self, gateway: AIGateway, system_instruction: str = CHAT_SYSTEM_INSTRUCTION):
        self._gateway = gateway
        self.system_instruction = system_instruction
        self.history: List[Message] = []

    @property
    def greeting(self) -> str:
        return GREETING

    @property
    def transcript(self) -> List[dict]:
        """History as role/text pairs, greeting first."""
        lines = [{"role": MessageRole.MODEL.value, "text": GREETING}]
        lines.extend({"role": m.role.value, "text": m.text} for m in self.history)
        return lines

    async def send(self, text: str) -> str:
        text = (text or "").strip()
        if not text:
            return ""

        message = Message.user(text)
        try:
            reply = await self._gateway.chat(self.history + [message], self.system_instruction)
        except LLMException as e:
            logger.warning(f"Chat reply failed: {e}")
            return APOLOGY

        self.history.extend([message, Message.model(reply)])
        return reply
