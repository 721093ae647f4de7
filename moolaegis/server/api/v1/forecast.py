"""
Forecast endpoints.

``POST /forecast`` runs the projection and returns rows plus every analysis
view. ``POST /forecast/pdf`` renders the same forecast as a PDF report and,
unless ``save=false``, also stores it in the user's report history.
"""

from __future__ import annotations

import time
from typing import Optional

from fastapi import APIRouter, Header, Query, Response
from fastapi.concurrency import run_in_threadpool

from moolaegis.core.database.repositories.reports import ReportRepository
from moolaegis.core.logging_config import get_logger
from moolaegis.core.models.io.forecast import ForecastPdfRequest, ForecastRequest, ForecastResponse
from moolaegis.core.monitoring import log_forecast_run
from moolaegis.forecast.analysis import build_report
from moolaegis.forecast.engine import run_forecast
from moolaegis.forecast.models import ForecastResult
from moolaegis.i18n import get_translator, normalize_language, pick_language
from moolaegis.server.core.config import settings
from moolaegis.server.services.deps import CurrentUserDep, SessionDep
from moolaegis.server.services.report_pdf import ForecastPdfRenderer, report_filename
from moolaegis.server.services.report_store import DEFAULT_REPORT_TYPE, content_disposition, store_report

logger = get_logger(__name__)

router = APIRouter()


def timed_forecast(payload: ForecastRequest) -> ForecastResult:
    """Run the projection for a request and report its duration to Logfire."""
    started = time.perf_counter()
    result = run_forecast(payload.base, payload.assumptions, payload.years, payload.growth)
    duration_ms = (time.perf_counter() - started) * 1000
    method = payload.assumptions.working_capital_method.value
    logger.debug(f"Forecast computed: base_year={result.base.year}, years={payload.years}, method={method}")
    log_forecast_run(payload.years, result.base.year, method, duration_ms)
    return result


@router.post(
    "",
    response_model=ForecastResponse,
    summary="Run Forecast",
    description="Project the income statement, balance sheet and cash flow from base-year actuals.",
    response_description="Base and forecast rows, flat balances and analysis views.",
    responses={422: {"description": "Invalid forecast input"}},
)
async def create_forecast(payload: ForecastRequest, user: CurrentUserDep) -> ForecastResponse:
    """
    Run a forecast.

    - **base**: Base-year actuals. Revenue, COGS, operating expense, tax and the
      ending balances are required; beginning balances default to 0.
    - **assumptions**: Tax, depreciation and capex rates plus the working-capital method.
    - **years**: Forecast horizon, 1 to 10 years (default: 3).
    - **growth**: Fixed revenue growth or one rate per year.
    """
    result = timed_forecast(payload)
    return ForecastResponse(rows=result.rows, constants=result.constants, analysis=build_report(result))


@router.post(
    "/pdf",
    response_class=Response,
    summary="Export Forecast PDF",
    description="Render a forecast report as PDF with labels in the requested language.",
    responses={
        200: {"content": {"application/pdf": {}}, "description": "The rendered PDF"},
        422: {"description": "Invalid forecast input"},
    },
)
async def export_forecast_pdf(
    payload: ForecastPdfRequest,
    user: CurrentUserDep,
    session: SessionDep,
    lang: Optional[str] = Query(default=None, description="Label language (en, zh)"),
    save: bool = Query(default=True, description="Also store the PDF in the report history"),
    accept_language: Optional[str] = Header(default=None),
) -> Response:
    """
    Export a forecast as PDF.

    The file name is ``<title>_<first year>-<last year>.pdf``. The language is
    taken from ``lang``, then ``Accept-Language``, then the server default.
    """
    language = normalize_language(lang) if lang else pick_language(accept_language, settings.default_language)
    translator = get_translator(language)

    result = timed_forecast(payload)
    title = payload.title or translator.tr("history.reportPrefix", "Forecast")
    renderer = ForecastPdfRenderer(translator, decimals=payload.decimals, rounding=payload.rounding)
    pdf = await run_in_threadpool(renderer.render, result, title)
    filename = report_filename(title, result)

    headers = {"Content-Disposition": content_disposition(filename, download=True)}
    if save:
        report = await store_report(
            ReportRepository(session),
            user_id=user.id,
            data=pdf,
            filename=filename,
            title=title,
            report_type=DEFAULT_REPORT_TYPE,
            content_type="application/pdf",
        )
        headers["X-Report-Id"] = str(report.id)
    return Response(content=pdf, media_type="application/pdf", headers=headers)
