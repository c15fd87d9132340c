"""Per-year resolution of lifecycle phase, contribution and return rate."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List

from wealthplan.models import HORIZON_YEARS, ScheduleConfig

STAGE_NAMES = {1: "Foundation", 2: "Discipline", 3: "Velocity"}


@dataclass(frozen=True)
class ResolvedYear:
    year_index: int
    phase: int
    monthly_contribution: float
    return_rate_pct: float

    @property
    def stage_name(self) -> str:
        return STAGE_NAMES[self.phase]

    @property
    def annual_contribution(self) -> float:
        return self.monthly_contribution * 12

    @property
    def rate(self) -> float:
        # percentages are whole-number scaled
        return self.return_rate_pct / 100


def default_phase(year_index: int) -> int:
    if year_index <= 3:
        return 1
    if year_index <= 8:
        return 2
    return 3


def resolve_year(schedule: ScheduleConfig, year_index: int) -> ResolvedYear:
    """
    Resolve the assumptions that apply to one plan year.

    Overrides win over defaults: ``stageOverride`` over the 1-3 / 4-8 / 9-15
    banding, ``returnOverride`` over ``globalAnnualReturnPct``. Unset values
    resolve to 0.
    """
    if not 1 <= year_index <= HORIZON_YEARS:
        raise ValueError(f"year index must be within 1..{HORIZON_YEARS}, got {year_index}")

    phase = schedule.stageOverride.get(year_index, default_phase(year_index))

    rate = schedule.returnOverride.get(year_index)
    if rate is None:
        rate = schedule.globalAnnualReturnPct
    if rate is None:
        rate = 0.0

    return ResolvedYear(
        year_index=year_index,
        phase=phase,
        monthly_contribution=schedule.monthly_for_phase(phase),
        return_rate_pct=float(rate),
    )


def resolve_schedule(schedule: ScheduleConfig) -> List[ResolvedYear]:
    return [resolve_year(schedule, year) for year in range(1, HORIZON_YEARS + 1)]
