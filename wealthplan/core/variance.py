"""Comparison metrics between the actual, rebased and baseline series."""

from __future__ import annotations

import math
from typing import Optional, Sequence

from wealthplan.schemas.forecast import VarianceSummary, YearRow


def finite_or_none(value: float) -> Optional[float]:
    return value if math.isfinite(value) else None


def safe_ratio(numerator: float, denominator: float) -> Optional[float]:
    """numerator / denominator, with 0 / 0 defined as 1.0 and x / 0 as undefined."""
    if denominator == 0:
        return 1.0 if numerator == 0 else None
    return finite_or_none(numerator / denominator)


def actual_vs_baseline(actual: Optional[float], baseline: float) -> Optional[float]:
    if actual is None:
        return None
    return safe_ratio(actual, baseline)


def terminal_variance_pct(rebased: float, baseline: float) -> Optional[float]:
    if baseline == 0:
        return 0.0 if rebased == 0 else None
    return finite_or_none((rebased - baseline) / baseline * 100)


def status_for_ratio(ratio: Optional[float]) -> str:
    if ratio is None:
        return "pending"
    return "ahead" if ratio >= 1.0 else "behind"


def compute_variance(rows: Sequence[YearRow]) -> VarianceSummary:
    """
    Summarize a forecast series.

    Status reflects the latest plan year (row 0 excluded) that carries an
    actual balance; the terminal variance compares the last row's rebased and
    baseline balances.
    """
    if not rows:
        raise ValueError("cannot summarize an empty series")

    terminal = rows[-1]
    latest = None
    for row in rows:
        if row.yearIndex >= 1 and row.actualBalance is not None:
            latest = row

    ratio = latest.actualVsBaselineRatio if latest is not None else None

    return VarianceSummary(
        status=status_for_ratio(ratio),
        lastActualYearIndex=latest.yearIndex if latest is not None else None,
        lastActualCalendarYear=latest.calendarYear if latest is not None else None,
        lastActualVsBaselineRatio=ratio,
        terminalBaseline=terminal.baselineBalance,
        terminalRebased=terminal.rebasedBalance,
        terminalVariancePct=terminal_variance_pct(
            terminal.rebasedBalance, terminal.baselineBalance
        ),
    )
