"""
API endpoints for the report history.

Reports are PDF exports stored per user. Listing returns metadata only; the
PDF itself is streamed from ``/{report_id}/pdf``.
"""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, File, Form, HTTPException, Query, Response, UploadFile, status

from moolaegis.core.database.repositories.reports import ReportRepository
from moolaegis.core.errors import PayloadTooLargeError
from moolaegis.core.models.io.reports import ReportRead
from moolaegis.server.core.config import settings
from moolaegis.server.services.deps import CurrentUserDep, SessionDep
from moolaegis.server.services.report_store import DEFAULT_REPORT_TYPE, content_disposition, store_report

router = APIRouter()


@router.post(
    "",
    response_model=ReportRead,
    status_code=status.HTTP_201_CREATED,
    summary="Upload Report",
    description="Store a PDF report in the current user's history.",
    responses={
        201: {"description": "Report stored"},
        413: {"description": "File exceeds the configured size limit"},
        415: {"description": "File is not a PDF"},
        422: {"description": "Empty file"},
    },
)
async def upload_report(
    user: CurrentUserDep,
    session: SessionDep,
    file: UploadFile = File(..., description="PDF file"),
    title: Optional[str] = Form(default=None, description="Display title"),
    type: str = Form(default=DEFAULT_REPORT_TYPE, description="Report kind"),
) -> ReportRead:
    """
    Upload a report PDF.

    - **file**: The PDF document.
    - **title**: Display title, defaults to the file name.
    - **type**: Report kind (default: forecast).
    """
    limit = settings.report_max_bytes
    data = await file.read(limit + 1)
    if len(data) > limit:
        raise PayloadTooLargeError(len(data), limit)
    report = await store_report(
        ReportRepository(session),
        user_id=user.id,
        data=data,
        filename=file.filename or "report.pdf",
        title=title,
        report_type=type,
        content_type=file.content_type,
    )
    return ReportRead.model_validate(report)


@router.get(
    "/",
    response_model=List[ReportRead],
    summary="List Reports",
    description="List the current user's stored reports, newest first.",
    response_description="List of report metadata.",
)
async def list_reports(
    user: CurrentUserDep,
    session: SessionDep,
    limit: int = Query(default=50, ge=1, le=200),
    offset: int = Query(default=0, ge=0),
) -> List[ReportRead]:
    reports = await ReportRepository(session).list(limit=limit, offset=offset, filters={"user_id": user.id})
    return [ReportRead.model_validate(report) for report in reports]


@router.get(
    "/{report_id}/pdf",
    response_class=Response,
    summary="Open Report PDF",
    description="Stream a stored report as application/pdf.",
    responses={
        200: {"content": {"application/pdf": {}}, "description": "The PDF document"},
        404: {"description": "Report not found"},
    },
)
async def get_report_pdf(
    report_id: int,
    user: CurrentUserDep,
    session: SessionDep,
    download: bool = Query(default=False, description="Send as attachment instead of inline"),
) -> Response:
    report = await ReportRepository(session).get_for_user(report_id, user.id)
    if report is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Report {report_id} not found")
    return Response(
        content=report.content,
        media_type="application/pdf",
        headers={"Content-Disposition": content_disposition(report.filename, download)},
    )


@router.delete(
    "/{report_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Report",
    description="Delete one of the current user's stored reports.",
    responses={
        204: {"description": "Report deleted"},
        404: {"description": "Report not found"},
    },
)
async def delete_report(report_id: int, user: CurrentUserDep, session: SessionDep) -> Response:
    deleted = await ReportRepository(session).delete_for_user(report_id, user.id)
    if not deleted:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Report {report_id} not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
