"""Chat I/O models for API requests and responses."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from moolaegis.core.database.entities.chat_messages import MessageRole


class ChatRequest(BaseModel):
    message: str = Field(max_length=4000, description="User message")

    @field_validator("message")
    @classmethod
    def _strip(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("message must not be empty")
        return value


class ChatReply(BaseModel):
    reply: str


class ChatMessageRead(BaseModel):
    """Schema for reading chat message from API."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    role: MessageRole = Field(description="Message sender role")
    content: str = Field(description="Message content")
    model_used: Optional[str] = Field(default=None, description="Model used for assistant messages")
    created_at: datetime
