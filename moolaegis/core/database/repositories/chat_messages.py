"""Chat message repository: the stored conversation of each user."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.chat_messages import ChatMessage
from .base import AsyncBaseRepository, QueryBuilder


class ChatMessageRepository(AsyncBaseRepository[ChatMessage]):
    """Repository for chat message data access operations using SQLModel."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, ChatMessage)

    async def create(self, message: ChatMessage) -> ChatMessage:
        self.session.add(message)
        await self.session.commit()
        await self.session.refresh(message)
        return message

    async def get_by_id(self, message_id: int) -> Optional[ChatMessage]:
        stmt = select(ChatMessage).where(ChatMessage.id == message_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def update(self, message: ChatMessage) -> ChatMessage:
        self.session.add(message)
        await self.session.commit()
        await self.session.refresh(message)
        return message

    async def delete(self, message_id: int) -> bool:
        message = await self.get_by_id(message_id)
        if message:
            await self.session.delete(message)
            await self.session.commit()
            return True
        return False

    async def list(
        self, limit: Optional[int] = None, offset: Optional[int] = None, filters: Optional[Dict[str, Any]] = None
    ) -> List[ChatMessage]:
        """List messages oldest first.

        Args:
            limit: Maximum records to return
            offset: Records to skip
            filters: Field filters (user_id, role)

        Returns:
            List of ChatMessage instances
        """
        stmt = select(ChatMessage).order_by(ChatMessage.created_at, ChatMessage.id)
        if filters:
            stmt = QueryBuilder.apply_filters(stmt, ChatMessage, filters)
        stmt = QueryBuilder.apply_pagination(stmt, limit, offset)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_recent(self, user_id: int, limit: int = 20) -> List[ChatMessage]:
        """Get the last ``limit`` messages of a user in chronological order.

        Args:
            user_id: Owner of the conversation
            limit: Number of most recent messages

        Returns:
            List of ChatMessage instances, oldest first
        """
        stmt = (
            select(ChatMessage)
            .where(ChatMessage.user_id == user_id)
            .order_by(ChatMessage.created_at.desc(), ChatMessage.id.desc())  # type: ignore
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return list(reversed(result.scalars().all()))
