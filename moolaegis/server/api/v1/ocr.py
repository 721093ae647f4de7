"""
Receipt OCR endpoint.

Accepts a receipt image and returns the extracted receipt as a JSON string in
``summary``.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, File, UploadFile

from moolaegis.core.errors import PayloadTooLargeError
from moolaegis.core.models.io.ocr import OcrResponse
from moolaegis.server.core.config import settings
from moolaegis.server.services.deps import CurrentUserDep
from moolaegis.server.services.ocr import ReceiptReader, get_receipt_reader

router = APIRouter()

ReaderDep = Annotated[ReceiptReader, Depends(get_receipt_reader)]


@router.post(
    "/upload",
    response_model=OcrResponse,
    response_model_exclude_none=True,
    summary="Read Receipt",
    description="Extract vendor, date, items and total from a receipt image.",
    responses={
        413: {"description": "Image exceeds the configured size limit"},
        415: {"description": "Upload is not a supported image type"},
        502: {"description": "The model call failed"},
    },
)
async def upload_receipt(
    user: CurrentUserDep,
    reader: ReaderDep,
    receipt: UploadFile = File(..., description="Receipt image (JPEG, PNG, WebP or GIF)"),
) -> OcrResponse:
    """
    Read a receipt.

    On success ``summary`` holds ``{vendor, date, items: [{name, price}], total}``
    serialized as JSON.
    """
    limit = settings.report_max_bytes
    data = await receipt.read(limit + 1)
    if len(data) > limit:
        raise PayloadTooLargeError(len(data), limit)
    summary = await reader.read(data, receipt.content_type)
    return OcrResponse(status="success", summary=summary.model_dump_json())
