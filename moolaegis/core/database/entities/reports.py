"""
Report entity.

Stores exported forecast PDFs per user together with display metadata. The
PDF bytes live in the ``content`` column and are only loaded when a report is
opened.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import Column, LargeBinary
from sqlmodel import Field

from ..base import Base, UTCDateTime, utc_now


class ReportBase(Base):
    """Base fields for a stored report."""

    title: str = Field(max_length=255, description="Display title")
    type: str = Field(default="forecast", max_length=32, description="Report kind")
    filename: str = Field(max_length=255, description="Original file name")
    content_type: str = Field(default="application/pdf", max_length=100)
    size: int = Field(default=0, description="Size of the stored file in bytes")


class Report(ReportBase, table=True):
    """Persistent report.

    Table: reports
    """

    __tablename__ = "reports"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="users.id", index=True)
    content: bytes = Field(sa_column=Column(LargeBinary, nullable=False))
    upload_time: datetime = Field(default_factory=utc_now, sa_type=UTCDateTime, index=True)

    def __repr__(self) -> str:
        return f"Report(id={self.id}, title={self.title}, size={self.size})"
