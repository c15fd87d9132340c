from __future__ import annotations

import logging
import math
from typing import Dict, Iterable, List, Mapping, Optional, Sequence

from wealthplan.core.schedule import ResolvedYear, resolve_schedule
from wealthplan.core.variance import actual_vs_baseline, finite_or_none, safe_ratio
from wealthplan.domain.actuals import index_actuals
from wealthplan.models import ActualRecord, ScheduleConfig
from wealthplan.schemas.forecast import YearRow

logger = logging.getLogger(__name__)

Actuals = Mapping[int, ActualRecord]


class NonFiniteProjectionError(ValueError):
    """A balance in the series is NaN or overflowed to infinity."""

    def __init__(self, series: str, year_index: int):
        super().__init__(f"{series} balance for year {year_index} is not a finite number")
        self.series = series
        self.year_index = year_index


def _check_finite(series: str, balances: Sequence[float]) -> None:
    for year_index, balance in enumerate(balances):
        if not math.isfinite(balance):
            raise NonFiniteProjectionError(series, year_index)


def compound_year(opening: float, year: ResolvedYear) -> float:
    """
    End-of-year balance from an opening balance.

    Contributions are treated as arriving evenly through the year, so they
    earn half a year of return:

        EOY = BOY * (1 + r) + annual_contribution * (1 + r / 2)
    """
    r = year.rate
    return opening * (1 + r) + year.annual_contribution * (1 + r / 2)


def _actual_balance(actuals: Actuals, year_index: int) -> Optional[float]:
    record = actuals.get(year_index)
    if record is None or not record.has_balance:
        return None
    return float(record.endOfYearBalance)


def project_baseline(starting_balance: float, schedule: Sequence[ResolvedYear]) -> List[float]:
    """The "nothing changes" path. Index 0 is the starting balance."""
    balances = [float(starting_balance)]
    for year in schedule:
        balances.append(compound_year(balances[-1], year))
    return balances


def project_rebased(
    starting_balance: float,
    schedule: Sequence[ResolvedYear],
    actuals: Actuals,
) -> List[float]:
    """
    Reality-adjusted path.

    Years with an actual end-of-year balance snap to it; every other year
    compounds from the previous *rebased* value, so a correction carries
    forward to all later years.
    """
    balances = [float(starting_balance)]
    for year in schedule:
        actual = _actual_balance(actuals, year.year_index)
        if actual is not None:
            balances.append(actual)
        else:
            balances.append(compound_year(balances[-1], year))
    return balances


def implied_growth(
    year_index: int,
    actuals: Actuals,
    rebased: Sequence[float],
    starting_balance: float,
) -> Optional[float]:
    """
    Back out the year's investment return (in %) from actual results.

    Uses the same mid-year contribution convention as ``compound_year``:

        growth = (EOY - BOY - invested) / (BOY + invested / 2)

    BOY is the prior year's actual balance, or its rebased balance when the
    prior year has no actual. Year 1 is never reported.
    """
    if year_index <= 1:
        return None

    eoy = _actual_balance(actuals, year_index)
    if eoy is None:
        return None

    prior = year_index - 1
    boy = _actual_balance(actuals, prior)
    if boy is None:
        boy = rebased[prior] if prior > 0 else float(starting_balance)

    invested = actuals[year_index].invested
    denominator = boy + invested / 2
    if denominator == 0:
        return None
    return finite_or_none((eoy - boy - invested) / denominator * 100)


def _start_row(starting_balance: float, start_year: int) -> YearRow:
    balance = float(starting_balance)
    ratio = safe_ratio(balance, balance)
    return YearRow(
        calendarYear=start_year - 1,
        yearIndex=0,
        phase=0,
        stageName="Start",
        returnRatePct=0.0,
        monthlyContribution=0.0,
        annualCapacity=0.0,
        capacitySource="start",
        baselineBalance=balance,
        rebasedBalance=balance,
        actualBalance=balance,
        actualVsBaselineRatio=ratio,
        rebasedVsBaselineRatio=ratio,
        impliedGrowthPct=None,
    )


def _build_rows(
    starting_balance: float,
    schedule: ScheduleConfig,
    actuals: Dict[int, ActualRecord],
) -> List[YearRow]:
    years = resolve_schedule(schedule)
    baseline = project_baseline(starting_balance, years)
    rebased = project_rebased(starting_balance, years, actuals)
    _check_finite("baseline", baseline)
    _check_finite("rebased", rebased)

    rows = [_start_row(starting_balance, schedule.startYear)]
    for year in years:
        y = year.year_index
        actual = _actual_balance(actuals, y)
        if actual is not None:
            capacity, source = actuals[y].invested, "actual"
        else:
            capacity, source = year.annual_contribution, "schedule"

        rows.append(
            YearRow(
                calendarYear=schedule.startYear + y - 1,
                yearIndex=y,
                phase=year.phase,
                stageName=year.stage_name,
                returnRatePct=year.return_rate_pct,
                monthlyContribution=year.monthly_contribution,
                annualCapacity=capacity,
                capacitySource=source,
                baselineBalance=baseline[y],
                rebasedBalance=rebased[y],
                actualBalance=actual,
                actualVsBaselineRatio=actual_vs_baseline(actual, baseline[y]),
                rebasedVsBaselineRatio=safe_ratio(rebased[y], baseline[y]),
                impliedGrowthPct=implied_growth(y, actuals, rebased, starting_balance),
            )
        )
    return rows


def compute_baseline(starting_balance: float, schedule: ScheduleConfig) -> List[YearRow]:
    """Forecast series from the configured assumptions alone."""
    logger.debug("computing baseline from %s", starting_balance)
    return _build_rows(starting_balance, schedule, {})


def compute_rebased(
    starting_balance: float,
    schedule: ScheduleConfig,
    actuals: Iterable[ActualRecord],
) -> List[YearRow]:
    """Forecast series with actual balances folded in and implied growth filled."""
    indexed = index_actuals(actuals)
    logger.debug(
        "computing rebased series from %s with %d actual record(s)",
        starting_balance,
        len(indexed),
    )
    return _build_rows(starting_balance, schedule, indexed)
