"""
Forecasting domain package.

Pure computation only: the models describing base-year inputs and projected
rows, the projection engine, derived analysis views and number formatting.
Nothing in here touches the database or the web layer.
"""

from .analysis import build_report
from .engine import run_forecast
from .models import (
    Assumptions,
    BaseFinancials,
    CustomLineItem,
    ForecastConstants,
    ForecastResult,
    GrowthAssumption,
    WorkingCapitalMethod,
    YearRow,
)

__all__ = [
    "Assumptions",
    "BaseFinancials",
    "CustomLineItem",
    "ForecastConstants",
    "ForecastResult",
    "GrowthAssumption",
    "WorkingCapitalMethod",
    "YearRow",
    "build_report",
    "run_forecast",
]
