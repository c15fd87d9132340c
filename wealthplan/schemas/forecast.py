"""Data contracts for forecast and outlook calculations."""

import math
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from wealthplan.models import HORIZON_YEARS, ActualRecord, ScheduleConfig


def round_half_up(value: float) -> int:
    """Whole-unit rounding with halves rounded up."""
    return math.floor(value + 0.5)


class BaselineRequest(BaseModel):
    """Inputs required to compute the unconditional projection."""

    model_config = ConfigDict(extra="forbid", allow_inf_nan=False)

    startingBalance: float = Field(..., description="Net worth at the start of year 1.")
    schedule: ScheduleConfig


class OutlookRequest(BaselineRequest):
    """Baseline inputs plus the sparse set of actual year-end records."""

    actuals: List[ActualRecord] = Field(default_factory=list)


class YearRow(BaseModel):
    """Single row of the forecast series. Row 0 is the starting snapshot."""

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    calendarYear: int
    yearIndex: int = Field(..., ge=0, le=HORIZON_YEARS)
    phase: int = Field(..., ge=0, le=3)
    stageName: str
    returnRatePct: float
    monthlyContribution: float
    annualCapacity: float
    capacitySource: Literal["start", "actual", "schedule"]
    baselineBalance: float
    rebasedBalance: float
    actualBalance: Optional[float] = None
    actualVsBaselineRatio: Optional[float] = None
    rebasedVsBaselineRatio: Optional[float] = None
    impliedGrowthPct: Optional[float] = None

    def for_display(self) -> "YearRow":
        """Copy with currency amounts rounded to whole units."""
        return self.model_copy(
            update={
                "monthlyContribution": round_half_up(self.monthlyContribution),
                "annualCapacity": round_half_up(self.annualCapacity),
                "baselineBalance": round_half_up(self.baselineBalance),
                "rebasedBalance": round_half_up(self.rebasedBalance),
                "actualBalance": (
                    None if self.actualBalance is None else round_half_up(self.actualBalance)
                ),
            }
        )


class VarianceSummary(BaseModel):
    """Headline comparison of the rebased path against the original plan."""

    status: Literal["ahead", "behind", "pending"]
    lastActualYearIndex: Optional[int] = None
    lastActualCalendarYear: Optional[int] = None
    lastActualVsBaselineRatio: Optional[float] = None
    terminalBaseline: float
    terminalRebased: float
    terminalVariancePct: Optional[float] = None


class BaselineResponse(BaseModel):
    rows: List[YearRow]


class OutlookResponse(BaseModel):
    rows: List[YearRow]
    variance: VarianceSummary
    warnings: List[str] = Field(default_factory=list)
