"""
Chat message entity.

Keeps the per-user conversation with the assistant so that recent turns can be
replayed as model context and shown in the chat history.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Optional

from sqlmodel import Field

from ..base import Base, UTCDateTime, utc_now


class MessageRole(str, Enum):
    """Role of message sender in conversation."""

    USER = "user"
    ASSISTANT = "assistant"


class ChatMessage(Base, table=True):
    """Individual message in a user's conversation.

    Table: chat_messages
    """

    __tablename__ = "chat_messages"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="users.id", index=True)

    role: MessageRole = Field(description="Message sender role")
    content: str = Field(description="Message content")
    model_used: Optional[str] = Field(default=None, description="Model used for assistant messages")

    created_at: datetime = Field(default_factory=utc_now, sa_type=UTCDateTime, index=True)

    def __repr__(self) -> str:
        return f"ChatMessage(id={self.id}, role={self.role}, user_id={self.user_id})"
