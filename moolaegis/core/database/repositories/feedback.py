"""Feedback repository: per-user comment storage."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.feedback import Feedback
from .base import AsyncBaseRepository, QueryBuilder


class FeedbackRepository(AsyncBaseRepository[Feedback]):
    """Repository for feedback data access operations using SQLModel."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Feedback)

    async def create(self, feedback: Feedback) -> Feedback:
        self.session.add(feedback)
        await self.session.commit()
        await self.session.refresh(feedback)
        return feedback

    async def get_by_id(self, feedback_id: int) -> Optional[Feedback]:
        stmt = select(Feedback).where(Feedback.id == feedback_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_for_user(self, feedback_id: int, user_id: int) -> Optional[Feedback]:
        """Get a feedback item only if it belongs to ``user_id``."""
        stmt = select(Feedback).where((Feedback.id == feedback_id) & (Feedback.user_id == user_id))
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def update(self, feedback: Feedback) -> Feedback:
        self.session.add(feedback)
        await self.session.commit()
        await self.session.refresh(feedback)
        return feedback

    async def delete(self, feedback_id: int) -> bool:
        feedback = await self.get_by_id(feedback_id)
        if feedback:
            await self.session.delete(feedback)
            await self.session.commit()
            return True
        return False

    async def delete_for_user(self, feedback_id: int, user_id: int) -> bool:
        """Delete a feedback item owned by ``user_id``.

        Returns:
            True if deleted, False if missing or owned by another user
        """
        feedback = await self.get_for_user(feedback_id, user_id)
        if feedback:
            await self.session.delete(feedback)
            await self.session.commit()
            return True
        return False

    async def list(
        self, limit: Optional[int] = None, offset: Optional[int] = None, filters: Optional[Dict[str, Any]] = None
    ) -> List[Feedback]:
        """List feedback newest first.

        Args:
            limit: Maximum records to return
            offset: Records to skip
            filters: Field filters (user_id)

        Returns:
            List of Feedback instances
        """
        stmt = select(Feedback).order_by(Feedback.created_at.desc(), Feedback.id.desc())  # type: ignore
        if filters:
            stmt = QueryBuilder.apply_filters(stmt, Feedback, filters)
        stmt = QueryBuilder.apply_pagination(stmt, limit, offset)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
