"""Feedback entity: free-text comments left by users."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlmodel import Field

from ..base import Base, UTCDateTime, utc_now


class Feedback(Base, table=True):
    """A single feedback comment.

    Table: feedback
    """

    __tablename__ = "feedback"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="users.id", index=True)
    comment: str = Field(max_length=2000, description="Trimmed comment text")
    created_at: datetime = Field(default_factory=utc_now, sa_type=UTCDateTime, index=True)

    def __repr__(self) -> str:
        return f"Feedback(id={self.id}, user_id={self.user_id})"
