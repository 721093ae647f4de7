"""Feedback I/O models for API requests and responses."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator


class FeedbackCreate(BaseModel):
    """Schema for submitting feedback. Surrounding whitespace is stripped."""

    comment: str = Field(max_length=2000, description="Feedback text")

    @field_validator("comment")
    @classmethod
    def _strip(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("comment must not be empty")
        return value


class FeedbackRead(BaseModel):
    """Schema for reading feedback from API. ``time`` is the creation time."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: int
    comment: str
    time: datetime = Field(validation_alias="created_at")
