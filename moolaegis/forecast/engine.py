"""
Three-statement projection engine.

``run_forecast`` builds the base-year row from actual figures and then rolls
the income statement, balance sheet and cash flow forward one year at a time.
The engine is pure: it performs no I/O and always returns the same result for
the same inputs.
"""

from __future__ import annotations

import math
from typing import List, Optional

from moolaegis.core.errors import ForecastInputError

from .models import (
    Assumptions,
    BaseFinancials,
    ForecastConstants,
    ForecastResult,
    GrowthAssumption,
    WorkingCapitalMethod,
    YearRow,
)

DAYS_IN_YEAR = 365
MIN_YEARS = 1
MAX_YEARS = 10


def _days(balance: float, flow: float, fallback: float) -> float:
    if flow <= 0:
        return fallback
    return balance / flow * DAYS_IN_YEAR


def _share(value: float, revenue: float) -> float:
    return value / revenue if revenue > 0 else 0.0


def build_base_row(base: BaseFinancials, assumptions: Assumptions) -> YearRow:
    """Derive the actual-year row, including its indirect cash flow."""
    other_income = base.other_income + base.other_pl
    pretax = base.revenue - base.cogs - base.op_expense + other_income - base.interest_expense
    net = pretax - base.tax_expense

    delta_ar = base.ar_end - base.ar_begin
    delta_inv = base.inventory_end - base.inventory_begin
    delta_ap = base.ap_end - base.ap_begin
    delta_debt = base.debt_end - base.debt_begin
    capital_change = base.capital_end - base.capital_begin

    cfo = net - delta_ar - delta_inv + delta_ap
    cfi = -(base.ppe_end - base.ppe_begin)
    cff = delta_debt + capital_change

    dso = _days(base.ar_end, base.revenue, assumptions.base_dso)
    dio = _days(base.inventory_end, base.cogs, assumptions.base_dio)
    dpo = _days(base.ap_end, base.cogs, assumptions.base_dpo)

    return YearRow(
        year=base.base_year,
        is_base=True,
        revenue=base.revenue,
        cogs=base.cogs,
        opex=base.op_expense,
        other_income=other_income,
        interest=base.interest_expense,
        pretax=pretax,
        tax=base.tax_expense,
        net_income=net,
        cfo=cfo,
        cfi=cfi,
        cff=cff,
        beginning_cash=base.cash_begin,
        cash=base.cash_end,
        ar=base.ar_end,
        inventory=base.inventory_end,
        ap=base.ap_end,
        ppe=base.ppe_end,
        retained_earnings=base.re_begin + net,
        delta_nwc=delta_ar + delta_inv - delta_ap,
        delta_ar=delta_ar,
        delta_inventory=delta_inv,
        delta_ap=delta_ap,
        delta_debt=delta_debt,
        capital_change=capital_change,
        dso=dso,
        dio=dio,
        dpo=dpo,
        ccc=dso + dio - dpo,
    )


def turnover_days(assumptions: Assumptions, index: int, horizon: int) -> tuple[float, float, float]:
    """DSO, DIO and DPO for forecast year ``index`` (1-based) under the days method.

    DSO drifts linearly over the horizon, DIO decays towards its base and DPO
    grows logarithmically.
    """
    dso = assumptions.base_dso * (1 + assumptions.dso_drift * index / horizon)
    dio = assumptions.base_dio * (1 + assumptions.dio_drift * math.exp(-assumptions.dio_decay * index))
    dpo = assumptions.base_dpo * (1 + assumptions.dpo_drift * math.log(1 + index))
    return dso, dio, dpo


def _project_year(
    prev: YearRow,
    index: int,
    horizon: int,
    growth: float,
    shares: tuple[float, float, float],
    interest: float,
    assumptions: Assumptions,
) -> YearRow:
    cogs_share, opex_share, oi_share = shares

    revenue = prev.revenue * (1 + growth)
    cogs = revenue * cogs_share
    opex = revenue * opex_share
    other_income = revenue * oi_share
    depreciation = prev.ppe * assumptions.dep_rate
    capex = revenue * assumptions.capex_rate

    pretax = revenue - cogs - opex - depreciation + other_income - interest
    tax = max(0.0, pretax) * assumptions.tax_rate
    net = pretax - tax

    if assumptions.working_capital_method == WorkingCapitalMethod.DAYS:
        dso, dio, dpo = turnover_days(assumptions, index, horizon)
        ar = revenue / DAYS_IN_YEAR * dso
        inventory = cogs / DAYS_IN_YEAR * dio
        ap = cogs / DAYS_IN_YEAR * dpo
    else:
        ar = revenue * assumptions.ar_pct
        inventory = cogs * assumptions.inv_pct
        ap = cogs * assumptions.ap_pct
        dso = _days(ar, revenue, 0.0)
        dio = _days(inventory, cogs, 0.0)
        dpo = _days(ap, cogs, 0.0)

    delta_ar = ar - prev.ar
    delta_inv = inventory - prev.inventory
    delta_ap = ap - prev.ap
    delta_nwc = delta_ar + delta_inv - delta_ap

    cfo = net + depreciation - delta_nwc
    cfi = -capex
    cff = 0.0

    return YearRow(
        year=prev.year + 1,
        revenue=revenue,
        cogs=cogs,
        opex=opex,
        other_income=other_income,
        depreciation=depreciation,
        capex=capex,
        interest=interest,
        pretax=pretax,
        tax=tax,
        net_income=net,
        cfo=cfo,
        cfi=cfi,
        cff=cff,
        beginning_cash=prev.cash,
        cash=prev.cash + cfo + cfi + cff,
        ar=ar,
        inventory=inventory,
        ap=ap,
        ppe=prev.ppe + capex - depreciation,
        retained_earnings=prev.retained_earnings + net,
        delta_nwc=delta_nwc,
        delta_ar=delta_ar,
        delta_inventory=delta_inv,
        delta_ap=delta_ap,
        dso=dso,
        dio=dio,
        dpo=dpo,
        ccc=dso + dio - dpo,
    )


def run_forecast(
    base: BaseFinancials,
    assumptions: Optional[Assumptions] = None,
    years: int = 3,
    growth: Optional[GrowthAssumption] = None,
) -> ForecastResult:
    """
    Project the three statements ``years`` years past the base year.

    Cost lines keep their base-year share of revenue, working capital follows
    the configured method, and debt, capital and custom balances are held
    flat, so the balance sheet difference of the base year carries through
    unchanged.

    Args:
        base: Actual figures for the base year
        assumptions: Driver assumptions, defaults apply when omitted
        years: Number of forecast years (1..10)
        growth: Revenue growth, 10 % fixed when omitted

    Returns:
        ForecastResult with the base row followed by one row per year

    Raises:
        ForecastInputError: If ``years`` is out of range
    """
    if not MIN_YEARS <= years <= MAX_YEARS:
        raise ForecastInputError(
            f"years must be between {MIN_YEARS} and {MAX_YEARS}, got {years}",
            details={"min": MIN_YEARS, "max": MAX_YEARS},
        )

    assumptions = assumptions or Assumptions()
    growth = growth or GrowthAssumption()

    base_row = build_base_row(base, assumptions)
    shares = (
        _share(base_row.cogs, base_row.revenue),
        _share(base_row.opex, base_row.revenue),
        _share(base_row.other_income, base_row.revenue),
    )

    rows: List[YearRow] = [base_row]
    for index, rate in enumerate(growth.rates(years), start=1):
        rows.append(_project_year(rows[-1], index, years, rate, shares, base_row.interest, assumptions))

    return ForecastResult(
        rows=rows,
        constants=ForecastConstants(
            debt=base.debt_end,
            capital=base.capital_end,
            other_assets=base.other_assets,
            other_liabs=base.other_liabs,
            other_equity=base.other_equity,
        ),
    )
