"""Report I/O models for API responses."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class ReportRead(BaseModel):
    """Schema for reading stored report metadata from API."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str = Field(description="Display title")
    type: str = Field(description="Report kind, e.g. forecast")
    filename: str = Field(description="Original file name")
    size: int = Field(description="File size in bytes")
    upload_time: datetime
