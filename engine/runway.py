"""
Runway calculator: how long liquid cash lasts at the current burn rate.

The 60-month ceiling is a display convention only (format_runway); nothing in
the computation is capped. The balance-path projection is bounded separately
by config.chart_max_months.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence

import numpy as np
import pandas as pd

from core.config import ProjectionConfig
from core.models import AccountData, IncomeEvent
from core.schema import DAYS_PER_MONTH, RUNWAY_DISPLAY_CAP_MONTHS
from core.utils import month_index, month_starts, round_half_away

from .income import income_for_month, project_income


@dataclass(frozen=True)
class RunwayResult:
    days: int = 0
    months: float = 0.0
    with_income_months: float = 0.0
    additional_months_from_income: float = 0.0


def runway(
    cash: float,
    monthly_expenses: float,
    income_contribution_12mo: float = 0.0,
    income_enabled: bool = False,
) -> RunwayResult:
    """Days and months of solvency; all zeros when there is no burn rate."""
    if monthly_expenses <= 0:
        return RunwayResult()

    days = int(math.floor(cash / (monthly_expenses / DAYS_PER_MONTH)))
    months = round_half_away(cash / monthly_expenses, 1)

    if income_enabled:
        with_income = round_half_away((cash + income_contribution_12mo) / monthly_expenses, 1)
    else:
        with_income = months

    additional = max(0.0, round_half_away(with_income - months, 1))
    return RunwayResult(
        days=days,
        months=months,
        with_income_months=with_income,
        additional_months_from_income=additional,
    )


def format_runway(months: float) -> str:
    """Display text for a month count; 60 and above reads '60+'."""
    if months >= RUNWAY_DISPLAY_CAP_MONTHS:
        return f"{RUNWAY_DISPLAY_CAP_MONTHS}+"
    return f"{months:.1f}"


def runway_for_portfolio(
    accounts: AccountData,
    monthly_expenses: float,
    events: Sequence[IncomeEvent],
    config: ProjectionConfig,
) -> RunwayResult:
    """Runway on the cash category, extended by planned income when enabled."""
    cash = sum(acc.effective_balance for acc in accounts.cash)
    contribution = project_income(
        events,
        config.as_of_date,
        config.income_horizon_months,
        enabled=config.income_enabled,
    )
    return runway(cash, monthly_expenses, contribution, config.income_enabled)


def _projection_horizon(
    events: Sequence[IncomeEvent],
    as_of: pd.Timestamp,
    base_months: float,
    max_months: int,
) -> int:
    base = max(math.ceil(base_months) + 6, 12)
    today = month_index(as_of)
    last_offset = 0
    for event in events:
        offset = month_index(event.date) - today
        last_offset = max(last_offset, offset)
        if event.frequency in ("monthly", "yearly"):
            if event.end_date is None:
                last_offset = max(last_offset, offset + 24)
            else:
                last_offset = max(last_offset, month_index(event.end_date) - today)
    return min(max(base, last_offset + 12), max_months)


def project_balance_path(
    savings: float,
    monthly_expenses: float,
    events: Sequence[IncomeEvent],
    config: ProjectionConfig,
    base_months: float = 0.0,
) -> pd.DataFrame:
    """
    Month-by-month balance with and without planned income.

    Row 0 is the current month. Each month income is added first, then
    expenses are subtracted. Reported balances floor at zero; the raw
    balances keep going negative so the stop rule (both below -100,000) can
    end the path early.
    """
    columns = [
        "month", "date", "label", "income",
        "balance_with_income", "balance_without_income", "balance",
    ]
    if monthly_expenses <= 0:
        return pd.DataFrame(columns=columns)

    as_of = config.as_of_date
    end_month = _projection_horizon(events, as_of, base_months, config.chart_max_months)
    dates = month_starts(as_of, end_month + 1)
    first = month_index(as_of)
    use_income = config.income_enabled and len(events) > 0

    with_income = float(savings)
    without_income = float(savings)
    rows = []
    for i in range(end_month + 1):
        income = income_for_month(events, first + i, as_of) if use_income else 0.0
        with_income += income
        with_income -= monthly_expenses
        without_income -= monthly_expenses

        shown = max(0.0, with_income)
        rows.append({
            "month": i,
            "date": dates[i],
            "label": dates[i].strftime("%b %Y"),
            "income": income,
            "balance_with_income": shown,
            "balance_without_income": max(0.0, without_income),
            "balance": shown,
        })

        if with_income < -100_000 and without_income < -100_000:
            break

    out = pd.DataFrame(rows, columns=columns)
    out["income"] = out["income"].astype(float)
    return out


def months_until_depleted(path: pd.DataFrame, column: str = "balance") -> float:
    """First month index at which the projected balance reaches zero (NaN if never)."""
    if path.empty:
        return np.nan
    hit = path.loc[path[column] <= 0, "month"]
    return float(hit.iloc[0]) if not hit.empty else np.nan
