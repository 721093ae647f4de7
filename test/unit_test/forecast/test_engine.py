"""
Unit tests for the projection engine.

Covers the base-year row, revenue growth, both working-capital methods,
the cash and fixed-asset roll-forward and the horizon limits.
"""

import math
from unittest.mock import patch

import pytest

from moolaegis.core.errors import ForecastInputError
from moolaegis.forecast.analysis import total_assets, total_liabilities_equity
from moolaegis.forecast.engine import (
    DAYS_IN_YEAR,
    MAX_YEARS,
    build_base_row,
    run_forecast,
    turnover_days,
)
from moolaegis.forecast.models import (
    Assumptions,
    BaseFinancials,
    CustomLineItem,
    GrowthAssumption,
    LineItemSection,
    WorkingCapitalMethod,
)


class TestBaseRow:
    """Test the actual-year row."""

    def test_income_statement(self, base: BaseFinancials):
        row = build_base_row(base, Assumptions())
        assert row.is_base is True
        assert row.year == 2024
        assert row.pretax == pytest.approx(190.0)
        assert row.net_income == pytest.approx(152.0)
        assert row.retained_earnings == pytest.approx(300.0)
        assert row.gross_profit == pytest.approx(400.0)

    def test_indirect_cash_flow(self, base: BaseFinancials):
        row = build_base_row(base, Assumptions())
        assert row.delta_ar == pytest.approx(20.0)
        assert row.delta_inventory == pytest.approx(0.0)
        assert row.delta_ap == pytest.approx(0.0)
        assert row.delta_nwc == pytest.approx(20.0)
        assert row.cfo == pytest.approx(132.0)
        assert row.cfi == pytest.approx(-20.0)
        assert row.cff == pytest.approx(0.0)
        assert row.beginning_cash == 100.0
        assert row.cash == 150.0

    def test_financing_changes(self, base: BaseFinancials):
        base = base.model_copy(update={"debt_end": 350.0, "capital_end": 260.0})
        row = build_base_row(base, Assumptions())
        assert row.delta_debt == pytest.approx(50.0)
        assert row.capital_change == pytest.approx(60.0)
        assert row.cff == pytest.approx(110.0)

    def test_turnover_days_from_balances(self, base: BaseFinancials):
        row = build_base_row(base, Assumptions())
        assert row.dso == pytest.approx(36.5)
        assert row.dio == pytest.approx(54.75)
        assert row.dpo == pytest.approx(36.5)
        assert row.ccc == pytest.approx(54.75)

    def test_turnover_days_fall_back_without_sales(self, base: BaseFinancials):
        base = base.model_copy(update={"revenue": 0.0, "cogs": 0.0})
        row = build_base_row(base, Assumptions(base_dso=45, base_dio=35, base_dpo=25))
        assert (row.dso, row.dio, row.dpo) == (45, 35, 25)

    def test_custom_pl_items_join_other_income(self, base: BaseFinancials):
        base = base.model_copy(
            update={
                "other_income": 5.0,
                "custom_items": [CustomLineItem(section=LineItemSection.PL, name="Grant", end=15.0)],
            }
        )
        row = build_base_row(base, Assumptions())
        assert row.other_income == pytest.approx(20.0)
        assert row.pretax == pytest.approx(210.0)

    def test_base_year_defaults_to_current_year(self, base: BaseFinancials):
        from datetime import date

        base = base.model_copy(update={"period_start": None, "period_end": None})
        assert base.base_year == date.today().year


class TestProjection:
    """Test forecast years under the percent-of-sales method."""

    def test_first_year_values(self, base: BaseFinancials):
        result = run_forecast(base, years=1)
        year = result.final

        assert len(result.rows) == 2
        assert year.year == 2025
        assert year.is_base is False
        assert year.revenue == pytest.approx(1100.0)
        assert year.cogs == pytest.approx(660.0)
        assert year.opex == pytest.approx(220.0)
        assert year.depreciation == pytest.approx(52.0)
        assert year.capex == pytest.approx(55.0)
        assert year.interest == pytest.approx(10.0)
        assert year.pretax == pytest.approx(158.0)
        assert year.tax == pytest.approx(31.6)
        assert year.net_income == pytest.approx(126.4)

    def test_first_year_balances(self, base: BaseFinancials):
        year = run_forecast(base, years=1).final
        assert year.ar == pytest.approx(110.0)
        assert year.inventory == pytest.approx(99.0)
        assert year.ap == pytest.approx(66.0)
        assert year.delta_nwc == pytest.approx(13.0)
        assert year.cfo == pytest.approx(165.4)
        assert year.cfi == pytest.approx(-55.0)
        assert year.cff == 0.0
        assert year.beginning_cash == pytest.approx(150.0)
        assert year.cash == pytest.approx(260.4)
        assert year.ppe == pytest.approx(523.0)
        assert year.retained_earnings == pytest.approx(426.4)

    def test_rows_chain(self, base: BaseFinancials):
        result = run_forecast(base, years=5)
        assert [row.year for row in result.rows] == [2024, 2025, 2026, 2027, 2028, 2029]
        for prev, row in zip(result.rows, result.rows[1:]):
            assert row.beginning_cash == pytest.approx(prev.cash)
            assert row.cash == pytest.approx(prev.cash + row.cfo + row.cfi + row.cff)
            assert row.ppe == pytest.approx(prev.ppe + row.capex - row.depreciation)
            assert row.retained_earnings == pytest.approx(prev.retained_earnings + row.net_income)

    def test_no_tax_on_losses(self, base: BaseFinancials):
        base = base.model_copy(update={"op_expense": 600.0})
        year = run_forecast(base, years=1).final
        assert year.pretax < 0
        assert year.tax == 0.0
        assert year.net_income == pytest.approx(year.pretax)

    def test_yearly_growth_rates(self, base: BaseFinancials):
        growth = GrowthAssumption(mode="yearly", yearly_rates=[0.5, -0.2])
        result = run_forecast(base, years=3, growth=growth)
        revenues = [row.revenue for row in result.rows]
        assert revenues == pytest.approx([1000.0, 1500.0, 1200.0, 1200.0])

    def test_constants_carry_base_balances(self, base: BaseFinancials):
        base = base.model_copy(
            update={
                "custom_items": [
                    CustomLineItem(section=LineItemSection.ASSETS, name="Deposits", begin=10, end=12),
                    CustomLineItem(section=LineItemSection.LIABS, name="Accruals", end=7),
                    CustomLineItem(section=LineItemSection.EQUITY, name="Reserve", end=5),
                ]
            }
        )
        constants = run_forecast(base).constants
        assert constants.debt == 300.0
        assert constants.capital == 200.0
        assert constants.other_assets == 12.0
        assert constants.other_liabs == 7.0
        assert constants.other_equity == 5.0

    def test_deterministic(self, base: BaseFinancials):
        assert run_forecast(base, years=4) == run_forecast(base, years=4)


class TestDaysMethod:
    """Test the turnover-days working-capital method."""

    def test_turnover_days_curve(self):
        assumptions = Assumptions()
        dso, dio, dpo = turnover_days(assumptions, index=1, horizon=5)
        assert dso == pytest.approx(50 * (1 + 0.05 * 1 / 5))
        assert dio == pytest.approx(40 * (1 + 0.10 * math.exp(-0.30)))
        assert dpo == pytest.approx(30 * (1 + 0.05 * math.log(2)))

    def test_balances_follow_days(self, base: BaseFinancials):
        assumptions = Assumptions(working_capital_method=WorkingCapitalMethod.DAYS)
        result = run_forecast(base, assumptions, years=3)
        for index, row in enumerate(result.projected, start=1):
            dso, dio, dpo = turnover_days(assumptions, index, 3)
            assert row.ar == pytest.approx(row.revenue / DAYS_IN_YEAR * dso)
            assert row.inventory == pytest.approx(row.cogs / DAYS_IN_YEAR * dio)
            assert row.ap == pytest.approx(row.cogs / DAYS_IN_YEAR * dpo)
            assert row.ccc == pytest.approx(dso + dio - dpo)


class TestBalance:
    """Test that projections never drift from the base-year difference."""

    @pytest.mark.parametrize("method", list(WorkingCapitalMethod))
    def test_balanced_base_stays_balanced(self, base: BaseFinancials, method: WorkingCapitalMethod):
        result = run_forecast(base, Assumptions(working_capital_method=method), years=MAX_YEARS)
        for row in result.rows:
            diff = total_assets(row, result.constants) - total_liabilities_equity(row, result.constants)
            assert diff == pytest.approx(0.0, abs=1e-6)

    def test_unbalanced_base_keeps_its_difference(self, base: BaseFinancials):
        base = base.model_copy(update={"cash_end": 175.0})
        result = run_forecast(base, years=4)
        diffs = [
            total_assets(row, result.constants) - total_liabilities_equity(row, result.constants)
            for row in result.rows
        ]
        assert diffs == pytest.approx([25.0] * 5)


class TestValidation:
    """Test input validation."""

    @pytest.mark.parametrize("years", [0, -1, MAX_YEARS + 1])
    def test_years_out_of_range(self, base: BaseFinancials, years: int):
        with pytest.raises(ForecastInputError) as exc_info:
            run_forecast(base, years=years)
        assert exc_info.value.status_code == 422
        assert exc_info.value.details == {"min": 1, "max": MAX_YEARS}

    def test_period_end_before_start(self, base: BaseFinancials):
        data = base.model_dump(include=set(BaseFinancials.model_fields))
        data.update(period_start="2024-12-31", period_end="2024-01-01")
        with pytest.raises(ValueError):
            BaseFinancials(**data)

    def test_unknown_fields_rejected(self, base: BaseFinancials):
        data = base.model_dump(include=set(BaseFinancials.model_fields))
        data["goodwill"] = 1.0
        with pytest.raises(ValueError):
            BaseFinancials(**data)

    def test_yearly_rates_padded_with_zero(self):
        assert GrowthAssumption(mode="yearly", yearly_rates=[0.1]).rates(3) == [0.1, 0.0, 0.0]
        assert GrowthAssumption(fixed_rate=0.2).rates(2) == [0.2, 0.2]

    def test_growth_rate_must_exceed_minus_one(self):
        with pytest.raises(ValueError):
            GrowthAssumption(mode="yearly", yearly_rates=[-1.0])


def test_run_forecast_emits_nothing(base):
    with patch("moolaegis.core.monitoring.logfire") as mock_logfire:
        first = run_forecast(base, years=2)
        second = run_forecast(base, years=2)
    assert not mock_logfire.mock_calls
    assert first == second
