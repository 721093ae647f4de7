"""
Derived views over a computed forecast.

Every function here is pure over a ``ForecastResult``. The views mirror the
tables and charts shown next to a forecast: balance check, key ratios,
working-capital efficiency, common-size statements, KPI cards and chart series.
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel

from .models import ForecastConstants, ForecastResult, YearRow

DAYS_IN_YEAR = 365
BALANCE_TOLERANCE = 0.5


class BalanceCheckRow(BaseModel):
    year: int
    total_assets: float
    total_liabilities_equity: float
    difference: float
    drift: float
    balanced: bool


class RatioRow(BaseModel):
    year: int
    gross_margin: float
    net_margin: float
    fcf_margin: float
    debt_ratio: float


class EfficiencyRow(BaseModel):
    year: int
    dso: float
    dio: float
    dpo: float
    ccc: float


class CommonSizeRow(BaseModel):
    """Percentages (0..100). ``None`` means the denominator was not positive."""

    year: int
    revenue: Optional[float]
    cogs: Optional[float]
    opex: Optional[float]
    net_income: Optional[float]
    cash: Optional[float]
    ar: Optional[float]
    inventory: Optional[float]
    ppe: Optional[float]
    ap: Optional[float]
    debt: Optional[float]
    retained_earnings: Optional[float]


class KPISummary(BaseModel):
    year: int
    revenue: float
    base_revenue: float
    net_income: float
    base_net_income: float
    cfo: float
    ending_cash: float
    free_cash_flow: float


class GrowthPoint(BaseModel):
    year: int
    revenue: float
    is_base: bool
    growth: Optional[float]


class ChartSeries(BaseModel):
    labels: List[int]
    revenue: List[GrowthPoint]
    cfo: List[float]
    cfi: List[float]
    dso: List[float]
    dio: List[float]
    dpo: List[float]
    ccc: List[float]


class AnalysisReport(BaseModel):
    balance_check: List[BalanceCheckRow]
    ratios: List[RatioRow]
    efficiency: List[EfficiencyRow]
    common_size: List[CommonSizeRow]
    kpi: KPISummary
    charts: ChartSeries


def total_assets(row: YearRow, constants: ForecastConstants) -> float:
    return row.cash + row.ar + row.inventory + row.ppe + constants.other_assets


def total_liabilities_equity(row: YearRow, constants: ForecastConstants) -> float:
    return (
        row.ap
        + constants.debt
        + constants.other_liabs
        + constants.capital
        + constants.other_equity
        + row.retained_earnings
    )


def _ratio(numerator: float, denominator: float) -> float:
    return numerator / denominator if denominator > 0 else 0.0


def _pct(numerator: float, denominator: float) -> Optional[float]:
    return numerator / denominator * 100.0 if denominator > 0 else None


def balance_check(result: ForecastResult, tolerance: float = BALANCE_TOLERANCE) -> List[BalanceCheckRow]:
    """Totals and difference per year.

    ``drift`` is the change of the difference against the base year. A
    projection never creates an imbalance of its own, so drift stays at zero
    even when the entered base year does not balance.
    """
    constants = result.constants
    base_diff = total_assets(result.base, constants) - total_liabilities_equity(result.base, constants)
    out = []
    for row in result.rows:
        assets = total_assets(row, constants)
        liab_eq = total_liabilities_equity(row, constants)
        diff = assets - liab_eq
        out.append(
            BalanceCheckRow(
                year=row.year,
                total_assets=assets,
                total_liabilities_equity=liab_eq,
                difference=diff,
                drift=diff - base_diff,
                balanced=abs(diff) <= tolerance,
            )
        )
    return out


def key_ratios(result: ForecastResult) -> List[RatioRow]:
    out = []
    for row in result.rows:
        out.append(
            RatioRow(
                year=row.year,
                gross_margin=_ratio(row.revenue - row.cogs, row.revenue),
                net_margin=_ratio(row.net_income, row.revenue),
                fcf_margin=_ratio(row.cfo - abs(row.cfi), row.revenue),
                debt_ratio=_ratio(result.constants.debt, total_assets(row, result.constants)),
            )
        )
    return out


def working_capital_efficiency(result: ForecastResult) -> List[EfficiencyRow]:
    """Turnover days computed back from the balances, so both methods are comparable."""
    out = []
    for row in result.rows:
        dso = _ratio(row.ar, row.revenue) * DAYS_IN_YEAR
        dio = _ratio(row.inventory, row.cogs) * DAYS_IN_YEAR
        dpo = _ratio(row.ap, row.cogs) * DAYS_IN_YEAR
        out.append(EfficiencyRow(year=row.year, dso=dso, dio=dio, dpo=dpo, ccc=dso + dio - dpo))
    return out


def common_size(result: ForecastResult) -> List[CommonSizeRow]:
    out = []
    for row in result.rows:
        assets = total_assets(row, result.constants)
        out.append(
            CommonSizeRow(
                year=row.year,
                revenue=100.0 if row.revenue > 0 else None,
                cogs=_pct(row.cogs, row.revenue),
                opex=_pct(row.opex, row.revenue),
                net_income=_pct(row.net_income, row.revenue),
                cash=_pct(row.cash, assets),
                ar=_pct(row.ar, assets),
                inventory=_pct(row.inventory, assets),
                ppe=_pct(row.ppe, assets),
                ap=_pct(row.ap, assets),
                debt=_pct(result.constants.debt, assets),
                retained_earnings=_pct(row.retained_earnings, assets),
            )
        )
    return out


def kpi_summary(result: ForecastResult) -> KPISummary:
    base, final = result.base, result.final
    return KPISummary(
        year=final.year,
        revenue=final.revenue,
        base_revenue=base.revenue,
        net_income=final.net_income,
        base_net_income=base.net_income,
        cfo=final.cfo,
        ending_cash=final.cash,
        free_cash_flow=final.cfo - abs(final.cfi),
    )


def revenue_growth_series(result: ForecastResult) -> List[GrowthPoint]:
    """Revenue per year with growth against the previous row, as a fraction."""
    points = []
    prev: Optional[YearRow] = None
    for row in result.rows:
        growth = None
        if prev is not None and prev.revenue != 0:
            growth = row.revenue / prev.revenue - 1
        points.append(GrowthPoint(year=row.year, revenue=row.revenue, is_base=row.is_base, growth=growth))
        prev = row
    return points


def chart_series(result: ForecastResult) -> ChartSeries:
    efficiency = working_capital_efficiency(result)
    return ChartSeries(
        labels=[row.year for row in result.rows],
        revenue=revenue_growth_series(result),
        cfo=[row.cfo for row in result.rows],
        cfi=[row.cfi for row in result.rows],
        dso=[e.dso for e in efficiency],
        dio=[e.dio for e in efficiency],
        dpo=[e.dpo for e in efficiency],
        ccc=[e.ccc for e in efficiency],
    )


def build_report(result: ForecastResult, tolerance: float = BALANCE_TOLERANCE) -> AnalysisReport:
    return AnalysisReport(
        balance_check=balance_check(result, tolerance),
        ratios=key_ratios(result),
        efficiency=working_capital_efficiency(result),
        common_size=common_size(result),
        kpi=kpi_summary(result),
        charts=chart_series(result),
    )
