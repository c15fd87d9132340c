from __future__ import annotations

import pytest

from wealthplan.core.projection import compute_baseline, compute_rebased
from wealthplan.core.variance import compute_variance, safe_ratio
from wealthplan.models import ActualRecord, ScheduleConfig


def test_safe_ratio_zero_guard():
    assert safe_ratio(0, 0) == 1.0
    assert safe_ratio(5, 0) is None
    assert safe_ratio(5, 10) == 0.5


def test_no_actuals_is_pending_with_zero_variance(schedule):
    summary = compute_variance(compute_baseline(100000, schedule))

    assert summary.status == "pending"
    assert summary.lastActualYearIndex is None
    assert summary.terminalVariancePct == pytest.approx(0.0)


def test_latest_actual_below_plan_is_behind(schedule):
    rows = compute_rebased(
        100000,
        schedule,
        [
            ActualRecord(yearIndex=1, endOfYearBalance=130000),
            ActualRecord(yearIndex=2, endOfYearBalance=140000),
        ],
    )
    summary = compute_variance(rows)

    assert rows[1].actualVsBaselineRatio > 1
    assert summary.lastActualYearIndex == 2
    assert summary.lastActualCalendarYear == 2027
    assert summary.lastActualVsBaselineRatio == pytest.approx(140000 / rows[2].baselineBalance)
    assert summary.status == "behind"


def test_matching_plan_exactly_counts_as_ahead(schedule):
    baseline = compute_baseline(100000, schedule)
    rows = compute_rebased(
        100000,
        schedule,
        [ActualRecord(yearIndex=3, endOfYearBalance=baseline[3].baselineBalance)],
    )
    assert compute_variance(rows).status == "ahead"


def test_terminal_variance_follows_rebased_path(schedule):
    rows = compute_rebased(100000, schedule, [ActualRecord(yearIndex=1, endOfYearBalance=115000)])
    summary = compute_variance(rows)

    expected = (rows[15].rebasedBalance - rows[15].baselineBalance) / rows[15].baselineBalance * 100
    assert summary.terminalVariancePct == pytest.approx(expected)
    assert summary.terminalVariancePct < 0
    assert rows[15].rebasedVsBaselineRatio == pytest.approx(1 + expected / 100)


def test_all_zero_plan_is_defined_not_nan():
    rows = compute_baseline(0, ScheduleConfig(startYear=2026))
    summary = compute_variance(rows)

    assert all(row.rebasedVsBaselineRatio == 1.0 for row in rows)
    assert summary.terminalVariancePct == 0.0


def test_actual_against_zero_baseline_is_undefined():
    rows = compute_rebased(0, ScheduleConfig(startYear=2026), [ActualRecord(yearIndex=3, endOfYearBalance=1000)])
    summary = compute_variance(rows)

    assert rows[3].actualVsBaselineRatio is None
    assert rows[15].rebasedVsBaselineRatio is None
    assert summary.terminalVariancePct is None
    assert summary.status == "pending"
    assert summary.lastActualYearIndex == 3


def test_empty_series_rejected():
    with pytest.raises(ValueError):
        compute_variance([])
