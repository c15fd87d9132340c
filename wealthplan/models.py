from __future__ import annotations

from typing import Dict, List, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

HORIZON_YEARS = 15

Phase = Literal[1, 2, 3]


def _check_year_keys(overrides: Dict[int, object], label: str) -> None:
    bad = sorted(year for year in overrides if not 1 <= year <= HORIZON_YEARS)
    if bad:
        raise ValueError(f"{label} year index out of range 1..{HORIZON_YEARS}: {bad}")


class ScheduleConfig(BaseModel):
    """Contribution and return assumptions for the 15-year plan.

    Percentages are whole-number scaled: ``8`` means 8 %.
    """

    model_config = ConfigDict(extra="forbid", frozen=True, allow_inf_nan=False)

    startYear: int = Field(ge=1900, le=3000)
    phaseMonthlyContribution: Tuple[Optional[float], Optional[float], Optional[float]] = (
        None,
        None,
        None,
    )
    globalAnnualReturnPct: Optional[float] = None
    stageOverride: Dict[int, Phase] = Field(default_factory=dict)
    returnOverride: Dict[int, float] = Field(default_factory=dict)

    @field_validator("phaseMonthlyContribution")
    @classmethod
    def contributions_not_negative(cls, value):
        for phase, amount in enumerate(value, start=1):
            if amount is not None and amount < 0:
                raise ValueError(f"phase {phase} monthly contribution must be >= 0")
        return value

    @field_validator("stageOverride")
    @classmethod
    def stage_years_in_range(cls, value):
        _check_year_keys(value, "stageOverride")
        return value

    @field_validator("returnOverride")
    @classmethod
    def return_years_in_range(cls, value):
        _check_year_keys(value, "returnOverride")
        return value

    def monthly_for_phase(self, phase: int) -> float:
        amount = self.phaseMonthlyContribution[phase - 1]
        return 0.0 if amount is None else float(amount)


class ActualRecord(BaseModel):
    """User-entered result for one plan year. Only the balance drives projections."""

    model_config = ConfigDict(extra="forbid", frozen=True, allow_inf_nan=False)

    yearIndex: int = Field(ge=1, le=HORIZON_YEARS)
    totalAnnualInvested: Optional[float] = None
    endOfYearBalance: Optional[float] = None
    notes: str = ""

    @property
    def has_balance(self) -> bool:
        return self.endOfYearBalance is not None

    @property
    def invested(self) -> float:
        return 0.0 if self.totalAnnualInvested is None else float(self.totalAnnualInvested)


class FinancialItem(BaseModel):
    model_config = ConfigDict(extra="forbid", allow_inf_nan=False)

    name: str
    amount: float = Field(ge=0)
    type: Literal["asset", "liability"]
    category: str = "Other"
    interestRate: float = 0.0


class AppSettings(BaseModel):
    model_config = ConfigDict(extra="forbid", allow_inf_nan=False)

    inflationRate: float = Field(default=2.5, ge=-50, le=100)
    projectionYears: int = Field(default=20, ge=0, le=100)
    currencySymbol: str = "$"


class BudgetItem(BaseModel):
    model_config = ConfigDict(extra="forbid", allow_inf_nan=False)

    name: str
    value: float = 0.0


class Budget(BaseModel):
    """Monthly household budget used to size the investment capacity."""

    model_config = ConfigDict(extra="forbid", allow_inf_nan=False)

    income: List[BudgetItem] = Field(default_factory=list)
    fixedExpenses: List[BudgetItem] = Field(default_factory=list)
    variableExpenses: List[BudgetItem] = Field(default_factory=list)
    seasonalExpenses: List[BudgetItem] = Field(default_factory=list)
    stretchPct: float = Field(default=80, ge=65, le=100)
