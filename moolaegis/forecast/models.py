"""
Domain models for the three-statement forecast.

All monetary values are plain floats in the reporting currency. Rates and
percentages are fractions, so ``0.2`` means 20 %.
"""

from __future__ import annotations

from datetime import date
from enum import Enum
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field, model_validator


class LineItemSection(str, Enum):
    """Statement section a user-defined line item belongs to."""

    ASSETS = "assets"
    LIABS = "liabs"
    EQUITY = "equity"
    PL = "pl"


class WorkingCapitalMethod(str, Enum):
    """How receivables, inventory and payables are projected."""

    PERCENT = "percent"
    DAYS = "days"


class CustomLineItem(BaseModel):
    """A user-added row on the balance sheet or income statement.

    Income statement rows only use ``end``.
    """

    section: LineItemSection
    name: str = Field(..., min_length=1, max_length=120)
    begin: float = 0.0
    end: float = 0.0


class BaseFinancials(BaseModel):
    """Actual figures for the base year the projection starts from."""

    model_config = ConfigDict(extra="forbid")

    period_start: Optional[date] = None
    period_end: Optional[date] = None

    # Income statement
    revenue: float
    cogs: float
    op_expense: float
    other_income: float = 0.0
    interest_expense: float = 0.0
    tax_expense: float

    # Balance sheet, beginning and end of the base year
    cash_begin: float = 0.0
    cash_end: float
    ar_begin: float = 0.0
    ar_end: float
    inventory_begin: float = 0.0
    inventory_end: float
    ppe_begin: float = 0.0
    ppe_end: float
    ap_begin: float = 0.0
    ap_end: float
    debt_begin: float = 0.0
    debt_end: float
    capital_begin: float = 0.0
    capital_end: float
    re_begin: float

    custom_items: List[CustomLineItem] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_period(self) -> "BaseFinancials":
        if self.period_start and self.period_end and self.period_end < self.period_start:
            raise ValueError("period_end must not be before period_start")
        return self

    def _aggregate(self, section: LineItemSection) -> float:
        return sum(item.end for item in self.custom_items if item.section == section)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def other_assets(self) -> float:
        return self._aggregate(LineItemSection.ASSETS)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def other_liabs(self) -> float:
        return self._aggregate(LineItemSection.LIABS)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def other_equity(self) -> float:
        return self._aggregate(LineItemSection.EQUITY)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def other_pl(self) -> float:
        return self._aggregate(LineItemSection.PL)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def base_year(self) -> int:
        """Year of ``period_end``, or the current year when no period is given."""
        if self.period_end is not None:
            return self.period_end.year
        return date.today().year


class GrowthAssumption(BaseModel):
    """Revenue growth over the horizon, either one fixed rate or one rate per year."""

    mode: Literal["fixed", "yearly"] = "fixed"
    fixed_rate: float = Field(default=0.10, gt=-1.0)
    yearly_rates: List[float] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_rates(self) -> "GrowthAssumption":
        if any(rate <= -1.0 for rate in self.yearly_rates):
            raise ValueError("yearly growth rates must be greater than -100%")
        return self

    def rates(self, years: int) -> List[float]:
        """Return exactly ``years`` growth rates. Missing yearly entries count as 0."""
        if self.mode == "fixed":
            return [self.fixed_rate] * years
        padded = list(self.yearly_rates[:years])
        padded.extend([0.0] * (years - len(padded)))
        return padded


class Assumptions(BaseModel):
    """Driver assumptions applied to every forecast year."""

    tax_rate: float = Field(default=0.20, ge=0.0, le=1.0)
    dep_rate: float = Field(default=0.10, ge=0.0, le=1.0)
    capex_rate: float = Field(default=0.05, ge=0.0)
    ar_pct: float = Field(default=0.10, ge=0.0)
    inv_pct: float = Field(default=0.15, ge=0.0)
    ap_pct: float = Field(default=0.10, ge=0.0)

    working_capital_method: WorkingCapitalMethod = WorkingCapitalMethod.PERCENT
    base_dso: float = Field(default=50.0, ge=0.0)
    base_dio: float = Field(default=40.0, ge=0.0)
    base_dpo: float = Field(default=30.0, ge=0.0)
    dso_drift: float = 0.05
    dio_drift: float = 0.10
    dio_decay: float = 0.30
    dpo_drift: float = 0.05


class YearRow(BaseModel):
    """One year of the combined income statement, balance sheet and cash flow."""

    year: int
    is_base: bool = False

    revenue: float
    cogs: float
    opex: float
    other_income: float = 0.0
    depreciation: float = 0.0
    capex: float = 0.0
    interest: float = 0.0
    pretax: float
    tax: float
    net_income: float

    cfo: float
    cfi: float
    cff: float
    beginning_cash: float
    cash: float

    ar: float
    inventory: float
    ap: float
    ppe: float
    retained_earnings: float

    delta_nwc: float
    delta_ar: float
    delta_inventory: float
    delta_ap: float
    delta_debt: float = 0.0
    capital_change: float = 0.0

    dso: float = 0.0
    dio: float = 0.0
    dpo: float = 0.0
    ccc: float = 0.0

    @property
    def gross_profit(self) -> float:
        return self.revenue - self.cogs

    @property
    def nwc(self) -> float:
        return self.ar + self.inventory - self.ap


class ForecastConstants(BaseModel):
    """Balance sheet lines held flat over the whole horizon."""

    debt: float
    capital: float
    other_assets: float = 0.0
    other_liabs: float = 0.0
    other_equity: float = 0.0


class ForecastResult(BaseModel):
    """Base row followed by one row per projected year."""

    rows: List[YearRow]
    constants: ForecastConstants

    @property
    def base(self) -> YearRow:
        return self.rows[0]

    @property
    def final(self) -> YearRow:
        return self.rows[-1]

    @property
    def projected(self) -> List[YearRow]:
        return self.rows[1:]
