from __future__ import annotations

import logging
from collections import Counter
from typing import Dict, Iterable, List

from wealthplan.models import ActualRecord

logger = logging.getLogger(__name__)


class ActualsValidationError(ValueError):
    def __init__(self, errors: List[str]):
        super().__init__("; ".join(errors))
        self.errors = errors


def index_actuals(records: Iterable[ActualRecord]) -> Dict[int, ActualRecord]:
    """Key the sparse record set by year index. Duplicate years are rejected."""
    records = list(records)
    counts = Counter(record.yearIndex for record in records)
    errors = [
        f"year {year} has {count} actual records"
        for year, count in sorted(counts.items())
        if count > 1
    ]
    if errors:
        raise ActualsValidationError(errors)
    return {record.yearIndex: record for record in records}


def actuals_warnings(records: Iterable[ActualRecord]) -> List[str]:
    warnings: List[str] = []
    for record in sorted(records, key=lambda r: r.yearIndex):
        if not record.has_balance and record.totalAnnualInvested is not None:
            warnings.append(
                f"year {record.yearIndex} invested total ignored without an end-of-year balance"
            )
    for message in warnings:
        logger.warning(message)
    return warnings


def upsert_actual(records: Iterable[ActualRecord], record: ActualRecord) -> List[ActualRecord]:
    """Return a new record list where ``record`` replaces any entry for its year."""
    others = [existing for existing in records if existing.yearIndex != record.yearIndex]
    return sorted([*others, record], key=lambda r: r.yearIndex)
