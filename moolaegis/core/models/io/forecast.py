"""Forecast I/O models for API requests and responses."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field

from moolaegis.forecast.analysis import AnalysisReport
from moolaegis.forecast.engine import MAX_YEARS, MIN_YEARS
from moolaegis.forecast.formatting import RoundingMode
from moolaegis.forecast.models import (
    Assumptions,
    BaseFinancials,
    ForecastConstants,
    GrowthAssumption,
    YearRow,
)


class ForecastRequest(BaseModel):
    """Schema for running a forecast."""

    base: BaseFinancials
    assumptions: Assumptions = Field(default_factory=Assumptions)
    years: int = Field(default=3, ge=MIN_YEARS, le=MAX_YEARS, description="Number of forecast years")
    growth: GrowthAssumption = Field(default_factory=GrowthAssumption)


class ForecastResponse(BaseModel):
    """Computed rows, flat balances and every derived analysis view."""

    rows: List[YearRow]
    constants: ForecastConstants
    analysis: AnalysisReport


class ForecastPdfRequest(ForecastRequest):
    """Schema for rendering a forecast PDF."""

    title: Optional[str] = Field(default=None, max_length=200, description="Report title, used in the file name")
    decimals: int = Field(default=0, ge=0, le=4, description="Fraction digits for money values")
    rounding: RoundingMode = RoundingMode.ROUND
