"""
Chat endpoints.

The assistant replies in the context of the user's recent conversation; the
full stored history can be listed for display.
"""

from __future__ import annotations

from typing import Annotated, List

from fastapi import APIRouter, Depends, Query

from moolaegis.core.database.repositories.chat_messages import ChatMessageRepository
from moolaegis.core.models.io.chat import ChatMessageRead, ChatReply, ChatRequest
from moolaegis.server.services.chat import ChatAssistant, get_chat_assistant
from moolaegis.server.services.deps import CurrentUserDep, SessionDep

router = APIRouter()

AssistantDep = Annotated[ChatAssistant, Depends(get_chat_assistant)]


@router.post(
    "",
    response_model=ChatReply,
    summary="Chat",
    description="Send a message to the financial assistant.",
    responses={
        422: {"description": "Empty message"},
        502: {"description": "The model call failed"},
    },
)
async def chat(payload: ChatRequest, user: CurrentUserDep, session: SessionDep, assistant: AssistantDep) -> ChatReply:
    """
    Chat with the assistant.

    - **message**: The user's message; must not be blank.
    """
    reply = await assistant.converse(ChatMessageRepository(session), user.id, payload.message)
    return ChatReply(reply=reply)


@router.get(
    "/history",
    response_model=List[ChatMessageRead],
    summary="Chat History",
    description="List the current user's most recent chat messages in chronological order.",
)
async def chat_history(
    user: CurrentUserDep,
    session: SessionDep,
    limit: int = Query(default=50, ge=1, le=500),
) -> List[ChatMessageRead]:
    messages = await ChatMessageRepository(session).get_recent(user.id, limit=limit)
    return [ChatMessageRead.model_validate(message) for message in messages]
