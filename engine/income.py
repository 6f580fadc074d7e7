"""
Income projection: expands scheduled income events into monthly contributions.

Months are compared as integer keys (year*12 + month) so that offsets across
year boundaries are plain subtraction.

Window rules, with W = [month(as_of), month(as_of) + horizon):
  one-time: once, if as_of <= date and its month is in W
  monthly:  every month in W from the start month through the end month
  yearly:   every 12-month anniversary of the start month in W, not after end
"""

from __future__ import annotations

from typing import Iterable, Optional, Sequence

import pandas as pd

from core.models import IncomeEvent
from core.utils import month_index, month_starts


def _end_month(event: IncomeEvent) -> Optional[int]:
    if event.frequency == "one-time" or event.end_date is None:
        return None
    return month_index(event.end_date)


def income_for_month(
    events: Iterable[IncomeEvent],
    target_month: int,
    as_of: pd.Timestamp,
) -> float:
    """Total income landing in the month keyed by target_month."""
    as_of = pd.Timestamp(as_of).normalize()
    total = 0.0
    for event in events:
        start = month_index(event.date)
        end = _end_month(event)
        if end is not None and target_month > end:
            continue

        if event.frequency == "one-time":
            if target_month == start and pd.Timestamp(event.date) >= as_of:
                total += event.amount
        elif event.frequency == "monthly":
            if target_month >= start:
                total += event.amount
        elif event.frequency == "yearly":
            since = target_month - start
            if since >= 0 and since % 12 == 0:
                total += event.amount
    return total


def income_schedule(
    events: Sequence[IncomeEvent],
    as_of: pd.Timestamp,
    horizon_months: int = 12,
    enabled: bool = True,
) -> pd.Series:
    """Month-by-month income over the horizon, indexed by month-start dates."""
    dates = month_starts(as_of, horizon_months)
    if not enabled or not events:
        return pd.Series(0.0, index=dates, name="income")
    first = month_index(as_of)
    values = [income_for_month(events, first + k, as_of) for k in range(horizon_months)]
    return pd.Series(values, index=dates, name="income", dtype=float)


def project_income(
    events: Sequence[IncomeEvent],
    as_of: pd.Timestamp,
    horizon_months: int = 12,
    enabled: bool = True,
) -> float:
    """Total income contributed inside the horizon window (0 when disabled)."""
    if not enabled or not events or horizon_months <= 0:
        return 0.0
    return float(income_schedule(events, as_of, horizon_months, enabled).sum())
