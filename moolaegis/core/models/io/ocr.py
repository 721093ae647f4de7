"""Receipt OCR I/O models."""

from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, Field


class ReceiptItem(BaseModel):
    name: str
    price: float


class ReceiptSummary(BaseModel):
    """Structured receipt as extracted by the vision model."""

    vendor: str = Field(default="", description="Store or vendor name")
    date: str = Field(default="", description="Receipt date as printed")
    items: List[ReceiptItem] = Field(default_factory=list)
    total: Optional[float] = Field(default=None, description="Receipt total")


class OcrResponse(BaseModel):
    """``summary`` holds the receipt as a JSON string on success."""

    status: Literal["success", "error"]
    summary: Optional[str] = None
    message: Optional[str] = None
