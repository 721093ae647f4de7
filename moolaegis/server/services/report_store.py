"""
Report upload validation and storage.

Accepts PDF uploads only: the declared content type and the ``%PDF-`` magic
bytes must both match, and the size must be within ``REPORT_MAX_BYTES``.
"""

from __future__ import annotations

from typing import Optional
from urllib.parse import quote

from moolaegis.core.database.entities.reports import Report
from moolaegis.core.database.repositories.reports import ReportRepository
from moolaegis.core.errors import EmptyUploadError, PayloadTooLargeError, UnsupportedMediaError
from moolaegis.core.logging_config import get_logger
from moolaegis.core.monitoring import log_report_stored
from moolaegis.server.core.config import settings

logger = get_logger(__name__)

PDF_MAGIC = b"%PDF-"
PDF_CONTENT_TYPES = ("application/pdf", "application/x-pdf", "application/octet-stream")
DEFAULT_REPORT_TYPE = "forecast"


def validate_pdf(data: bytes, content_type: Optional[str], max_bytes: Optional[int] = None) -> None:
    """Raise a domain error if ``data`` is not an acceptable PDF upload."""
    limit = max_bytes if max_bytes is not None else settings.report_max_bytes
    media_type = (content_type or "application/pdf").split(";")[0].strip().lower()
    if not data:
        raise EmptyUploadError()
    if len(data) > limit:
        raise PayloadTooLargeError(len(data), limit)
    if media_type not in PDF_CONTENT_TYPES or not data.startswith(PDF_MAGIC):
        raise UnsupportedMediaError("Only PDF reports can be stored")


def content_disposition(filename: str, download: bool) -> str:
    """``inline`` or ``attachment`` disposition with an RFC 5987 encoded file name."""
    kind = "attachment" if download else "inline"
    ascii_name = filename.encode("ascii", "ignore").decode().replace("\"", "") or "report.pdf"
    return f"{kind}; filename=\"{ascii_name}\"; filename*=UTF-8''{quote(filename)}"


async def store_report(
    repository: ReportRepository,
    *,
    user_id: int,
    data: bytes,
    filename: str,
    title: Optional[str] = None,
    report_type: Optional[str] = None,
    content_type: Optional[str] = None,
) -> Report:
    """Validate and persist a PDF report for ``user_id``.

    The title defaults to the file name without its extension.
    """
    validate_pdf(data, content_type)
    filename = filename or "report.pdf"
    title = (title or "").strip() or filename.rsplit(".", 1)[0]
    report = await repository.create(
        Report(
            user_id=user_id,
            title=title,
            type=(report_type or DEFAULT_REPORT_TYPE).strip() or DEFAULT_REPORT_TYPE,
            filename=filename,
            content_type="application/pdf",
            size=len(data),
            content=data,
        )
    )
    logger.info(f"Stored report id={report.id} for user id={user_id} ({report.size} bytes)")
    log_report_stored(report.id, user_id, report.size)
    return report
