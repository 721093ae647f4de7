"""
Receipt OCR.

A vision-capable pydantic-ai agent reads an uploaded receipt image and returns
a ``ReceiptSummary``. ``format_receipt_summary`` renders the one-line text shown
in the chat window.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic_ai import Agent, BinaryContent

from moolaegis.core.errors import AssistantUnavailableError, EmptyUploadError, UnsupportedMediaError
from moolaegis.core.logging_config import get_logger
from moolaegis.core.models.io.ocr import ReceiptSummary
from moolaegis.core.monitoring import log_error
from moolaegis.i18n import Translator, get_translator
from moolaegis.server.core.config import settings

from .ai_models import build_model, model_settings

logger = get_logger(__name__)

SUPPORTED_IMAGE_TYPES = ("image/jpeg", "image/png", "image/webp", "image/gif")

OCR_PROMPT = (
    "Read this receipt. Return the vendor name, the date as printed, every purchased item "
    "with its price, and the total. Use an empty string for anything you cannot read."
)


def _money(value: Optional[float]) -> str:
    return "" if value is None else f"${value:,.2f}"


def format_receipt_summary(summary: ReceiptSummary, translator: Optional[Translator] = None) -> str:
    """Render a receipt as ``Vendor: ..., Date: ..., Items: a ($1.00), ..., Total: $...``."""
    t = translator or get_translator()
    items = ", ".join(f"{item.name} ({_money(item.price)})" for item in summary.items)
    return (
        f"{t.tr('ocr.vendor', 'Vendor')}: {summary.vendor}, \n"
        f"{t.tr('ocr.date', 'Date')}: {summary.date}, \n"
        f"{t.tr('ocr.items', 'Items')}: {items}, \n"
        f"{t.tr('ocr.total', 'Total')}: {_money(summary.total)}"
    )


class ReceiptReader:
    """Extracts structured receipts from images."""

    def __init__(self, agent: Optional[Agent[None, ReceiptSummary]] = None, model_name: Optional[str] = None) -> None:
        self.model_name = model_name or settings.ai.ocr_model
        self.agent: Agent[None, ReceiptSummary] = agent or Agent(
            build_model(self.model_name),
            output_type=ReceiptSummary,
            model_settings=model_settings(),
            defer_model_check=True,
        )

    @staticmethod
    def check_upload(data: bytes, content_type: Optional[str]) -> str:
        """Validate an uploaded image and return its media type."""
        media_type = (content_type or "").split(";")[0].strip().lower()
        if media_type not in SUPPORTED_IMAGE_TYPES:
            raise UnsupportedMediaError(f"Unsupported receipt image type: '{media_type or 'unknown'}'")
        if not data:
            raise EmptyUploadError()
        return media_type

    async def read(self, data: bytes, content_type: Optional[str]) -> ReceiptSummary:
        """Extract a receipt from image bytes.

        Raises:
            UnsupportedMediaError: Upload is not a supported image type
            EmptyUploadError: Upload has no content
            AssistantUnavailableError: The model call failed
        """
        media_type = self.check_upload(data, content_type)
        try:
            result = await self.agent.run([OCR_PROMPT, BinaryContent(data=data, media_type=media_type)])
        except Exception as e:
            logger.error(f"Receipt OCR failed: {e}", exc_info=True)
            log_error("OcrModelError", str(e), {"model": self.model_name, "size": len(data)})
            raise AssistantUnavailableError("Receipt could not be read") from e
        logger.debug(f"Receipt read: vendor={result.output.vendor!r}, items={len(result.output.items)}")
        return result.output


@lru_cache(maxsize=1)
def get_receipt_reader() -> ReceiptReader:
    """Process-wide receipt reader, created on first use."""
    return ReceiptReader()
