"""Monthly investment capacity from a household budget."""

from typing import Iterable

from wealthplan.models import Budget, BudgetItem, ScheduleConfig
from wealthplan.schemas.planning import CapacitySummary

SAFE_SHARE = 0.65


def _total(items: Iterable[BudgetItem]) -> float:
    return sum(item.value or 0.0 for item in items)


def calculate_capacity(budget: Budget) -> CapacitySummary:
    """Split the monthly surplus into a safe (65 %) and a stretch amount."""
    total_income = _total(budget.income)
    total_fixed = _total(budget.fixedExpenses)
    total_variable = _total(budget.variableExpenses)
    total_seasonal = _total(budget.seasonalExpenses)

    total_expenses = total_fixed + total_variable + total_seasonal
    surplus = total_income - total_expenses

    safe = surplus * SAFE_SHARE if surplus > 0 else 0.0
    stretch = surplus * (budget.stretchPct / 100) if surplus > 0 else 0.0

    return CapacitySummary(
        totalIncome=total_income,
        totalFixed=total_fixed,
        totalVariable=total_variable,
        totalSeasonal=total_seasonal,
        totalExpenses=total_expenses,
        monthlySurplus=surplus,
        safeCapacity=safe,
        stretchCapacity=stretch,
    )


def apply_capacity(schedule: ScheduleConfig, amount: float) -> ScheduleConfig:
    """Use a capacity figure as the phase 1 monthly contribution."""
    if amount <= 0:
        raise ValueError("capacity must be positive to apply to the forecast")
    _, phase2, phase3 = schedule.phaseMonthlyContribution
    return schedule.model_copy(
        update={"phaseMonthlyContribution": (float(round(amount)), phase2, phase3)}
    )
