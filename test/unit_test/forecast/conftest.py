import pytest

from moolaegis.forecast.models import BaseFinancials


@pytest.fixture
def base() -> BaseFinancials:
    """Base year that balances: assets 860 = liabilities and equity 860."""
    return BaseFinancials(
        period_start="2024-01-01",
        period_end="2024-12-31",
        revenue=1000.0,
        cogs=600.0,
        op_expense=200.0,
        interest_expense=10.0,
        tax_expense=38.0,
        cash_begin=100.0,
        cash_end=150.0,
        ar_begin=80.0,
        ar_end=100.0,
        inventory_begin=90.0,
        inventory_end=90.0,
        ppe_begin=500.0,
        ppe_end=520.0,
        ap_begin=60.0,
        ap_end=60.0,
        debt_begin=300.0,
        debt_end=300.0,
        capital_begin=200.0,
        capital_end=200.0,
        re_begin=148.0,
    )
