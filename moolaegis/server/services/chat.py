"""
Financial assistant chat.

``ChatAssistant`` wraps a pydantic-ai agent. Each reply is generated with the
user's recent conversation replayed as message history, and both sides of the
exchange are stored in ``chat_messages``.
"""

from __future__ import annotations

from functools import lru_cache
from typing import List, Optional

from pydantic_ai import Agent
from pydantic_ai.messages import ModelMessage, ModelRequest, ModelResponse, TextPart, UserPromptPart

from moolaegis.core.database.entities.chat_messages import ChatMessage, MessageRole
from moolaegis.core.database.repositories.chat_messages import ChatMessageRepository
from moolaegis.core.errors import AssistantUnavailableError
from moolaegis.core.logging_config import get_logger
from moolaegis.core.monitoring import log_error
from moolaegis.server.core.config import settings

from .ai_models import build_model, model_settings

logger = get_logger(__name__)

ASSISTANT_NAME = "Moolaegis"
HISTORY_TURNS = 20

SYSTEM_PROMPT = (
    f"You are {ASSISTANT_NAME}, a friendly financial assistant for small business owners. "
    "You help users understand income statements, balance sheets, cash flow statements and "
    "forecasting assumptions such as growth rates, working capital days and capital expenditure. "
    "Answer concisely in the language the user writes in. "
    "If a question is not about finance or the forecasting tool, say so politely."
)


def to_model_history(messages: List[ChatMessage]) -> List[ModelMessage]:
    """Convert stored messages into pydantic-ai message history."""
    history: List[ModelMessage] = []
    for message in messages:
        if message.role == MessageRole.USER:
            history.append(ModelRequest(parts=[UserPromptPart(content=message.content)]))
        else:
            history.append(ModelResponse(parts=[TextPart(content=message.content)]))
    return history


class ChatAssistant:
    """Generates assistant replies with a pydantic-ai agent."""

    def __init__(self, agent: Optional[Agent] = None, model_name: Optional[str] = None) -> None:
        self.model_name = model_name or settings.ai.chat_model
        self.agent: Agent = agent or Agent(
            build_model(self.model_name),
            system_prompt=SYSTEM_PROMPT,
            model_settings=model_settings(),
            defer_model_check=True,
        )

    async def reply(self, message: str, history: Optional[List[ChatMessage]] = None) -> str:
        """Generate a reply to ``message``.

        Raises:
            AssistantUnavailableError: If the model call fails
        """
        try:
            result = await self.agent.run(message, message_history=to_model_history(history or []))
        except Exception as e:
            logger.error(f"Chat model call failed: {e}", exc_info=True)
            log_error("ChatModelError", str(e), {"model": self.model_name})
            raise AssistantUnavailableError("The assistant is unavailable right now") from e
        return str(result.output)

    async def converse(self, repository: ChatMessageRepository, user_id: int, message: str) -> str:
        """Reply to ``message`` in the context of the user's stored conversation and persist both turns."""
        history = await repository.get_recent(user_id, limit=HISTORY_TURNS)
        answer = await self.reply(message, history)
        await repository.create(ChatMessage(user_id=user_id, role=MessageRole.USER, content=message))
        await repository.create(
            ChatMessage(user_id=user_id, role=MessageRole.ASSISTANT, content=answer, model_used=self.model_name)
        )
        return answer


@lru_cache(maxsize=1)
def get_chat_assistant() -> ChatAssistant:
    """Process-wide assistant, created on first use."""
    return ChatAssistant()
