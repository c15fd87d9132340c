from __future__ import annotations

from math import isclose

from wealthplan.core.net_worth import (
    allocation_by_category,
    fisher_rate,
    project_net_worth,
    summarize_items,
)
from wealthplan.models import AppSettings, FinancialItem


def holdings() -> list:
    return [
        FinancialItem(name="Brokerage", amount=100000, type="asset", category="Stocks & Bonds", interestRate=8),
        FinancialItem(name="Savings", amount=25000, type="asset", category="Cash & Equivalents", interestRate=4),
        FinancialItem(name="Index fund", amount=25000, type="asset", category="Stocks & Bonds", interestRate=8),
        FinancialItem(name="Mortgage", amount=50000, type="liability", category="Mortgage", interestRate=4),
    ]


def test_snapshot_totals():
    snapshot = summarize_items(holdings())

    assert snapshot.totalAssets == 150000
    assert snapshot.totalLiabilities == 50000
    assert snapshot.netWorth == 100000
    assert isclose(snapshot.debtToAssetRatio, 1 / 3)


def test_no_assets_has_no_debt_ratio():
    snapshot = summarize_items([FinancialItem(name="Loan", amount=10, type="liability")])
    assert snapshot.netWorth == -10
    assert snapshot.debtToAssetRatio is None


def test_allocation_groups_asset_categories():
    allocation = {entry.name: entry.value for entry in allocation_by_category(holdings())}
    assert allocation == {"Stocks & Bonds": 125000, "Cash & Equivalents": 25000}


def test_projection_without_inflation_uses_weighted_rates():
    points = project_net_worth(holdings(), AppSettings(inflationRate=0, projectionYears=2), base_year=2026)

    assert [p.year for p in points] == [2026, 2027, 2028]
    assert points[0].netWorth == 100000
    # weighted asset rate (125000*8 + 25000*4) / 150000
    asset_rate = (125000 * 8 + 25000 * 4) / 150000 / 100
    assert isclose(points[1].assets, 150000 * (1 + asset_rate))
    assert isclose(points[1].liabilities, 52000)


def test_projection_is_in_real_terms():
    settings = AppSettings(inflationRate=2.5, projectionYears=1)
    points = project_net_worth(
        [FinancialItem(name="Cash", amount=1000, type="asset", interestRate=2.5)],
        settings,
        base_year=2026,
    )
    assert isclose(points[1].assets, 1000)
    assert isclose(fisher_rate(0.08, 0.025), 1.08 / 1.025 - 1)
