"""
Report repository.

Listing queries defer the ``content`` column so history pages never pull PDF
bytes; ``get_for_user`` loads the full row for download.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import defer
from sqlmodel import select

from ..entities.reports import Report
from .base import AsyncBaseRepository, QueryBuilder


class ReportRepository(AsyncBaseRepository[Report]):
    """Repository for stored report data access operations using SQLModel."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Report)

    async def create(self, report: Report) -> Report:
        """Persist a report with its PDF content.

        Args:
            report: Report SQLModel instance

        Returns:
            Persisted Report with generated id and upload time
        """
        self.session.add(report)
        await self.session.commit()
        await self.session.refresh(report)
        return report

    async def get_by_id(self, report_id: int) -> Optional[Report]:
        stmt = select(Report).where(Report.id == report_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_for_user(self, report_id: int, user_id: int) -> Optional[Report]:
        """Get a report including content, only if it belongs to ``user_id``."""
        stmt = select(Report).where((Report.id == report_id) & (Report.user_id == user_id))
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def update(self, report: Report) -> Report:
        self.session.add(report)
        await self.session.commit()
        await self.session.refresh(report)
        return report

    async def delete(self, report_id: int) -> bool:
        report = await self.get_by_id(report_id)
        if report:
            await self.session.delete(report)
            await self.session.commit()
            return True
        return False

    async def delete_for_user(self, report_id: int, user_id: int) -> bool:
        """Delete a report owned by ``user_id``.

        Returns:
            True if deleted, False if missing or owned by another user
        """
        report = await self.get_for_user(report_id, user_id)
        if report:
            await self.session.delete(report)
            await self.session.commit()
            return True
        return False

    async def list(
        self, limit: Optional[int] = None, offset: Optional[int] = None, filters: Optional[Dict[str, Any]] = None
    ) -> List[Report]:
        """List report metadata newest first.

        Args:
            limit: Maximum records to return
            offset: Records to skip
            filters: Field filters (user_id, type)

        Returns:
            List of Report instances with ``content`` deferred
        """
        stmt = (
            select(Report)
            .options(defer(Report.content))  # type: ignore[arg-type]
            .order_by(Report.upload_time.desc(), Report.id.desc())  # type: ignore
        )
        if filters:
            stmt = QueryBuilder.apply_filters(stmt, Report, filters)
        stmt = QueryBuilder.apply_pagination(stmt, limit, offset)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
