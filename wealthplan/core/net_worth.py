from __future__ import annotations

from datetime import datetime
from typing import Dict, List, Optional, Sequence

from wealthplan.models import AppSettings, FinancialItem
from wealthplan.schemas.planning import CategoryTotal, NetWorthPoint, NetWorthSnapshot


def fisher_rate(nominal_rate: float, inflation_rate: float) -> float:
    return (1 + nominal_rate) / (1 + inflation_rate) - 1


def _split(items: Sequence[FinancialItem]) -> tuple[List[FinancialItem], List[FinancialItem]]:
    assets = [item for item in items if item.type == "asset"]
    liabilities = [item for item in items if item.type == "liability"]
    return assets, liabilities


def _weighted_rate(items: Sequence[FinancialItem]) -> float:
    """Amount-weighted interest rate in percent (0 when there are no items)."""
    if not items:
        return 0.0
    total = sum(item.amount for item in items)
    return sum(item.amount * item.interestRate for item in items) / (total or 1)


def summarize_items(items: Sequence[FinancialItem]) -> NetWorthSnapshot:
    assets, liabilities = _split(items)
    total_assets = sum(item.amount for item in assets)
    total_liabilities = sum(item.amount for item in liabilities)
    ratio: Optional[float] = total_liabilities / total_assets if total_assets else None
    return NetWorthSnapshot(
        totalAssets=total_assets,
        totalLiabilities=total_liabilities,
        netWorth=total_assets - total_liabilities,
        debtToAssetRatio=ratio,
    )


def allocation_by_category(items: Sequence[FinancialItem]) -> List[CategoryTotal]:
    totals: Dict[str, float] = {}
    for item in items:
        if item.type != "asset":
            continue
        totals[item.category] = totals.get(item.category, 0.0) + item.amount
    return [CategoryTotal(name=name, value=value) for name, value in totals.items()]


def project_net_worth(
    items: Sequence[FinancialItem],
    settings: AppSettings,
    base_year: Optional[int] = None,
) -> List[NetWorthPoint]:
    """
    Long-range net worth in today's money.

    Assets and liabilities each grow at their amount-weighted interest rate,
    deflated by ``settings.inflationRate``. Rates are whole-number percents.
    Each year is recorded before that year's growth is applied.
    """
    base_year = base_year or datetime.now().year
    assets, liabilities = _split(items)

    inflation = settings.inflationRate / 100
    asset_rate = fisher_rate(_weighted_rate(assets) / 100, inflation)
    liability_rate = fisher_rate(_weighted_rate(liabilities) / 100, inflation)

    current_assets = sum(item.amount for item in assets)
    current_liabilities = sum(item.amount for item in liabilities)

    points: List[NetWorthPoint] = []
    for offset in range(settings.projectionYears + 1):
        points.append(
            NetWorthPoint(
                year=base_year + offset,
                assets=current_assets,
                liabilities=current_liabilities,
                netWorth=current_assets - current_liabilities,
            )
        )
        current_assets *= 1 + asset_rate
        current_liabilities *= 1 + liability_rate

    return points
