"""
Monthly expense resolution.

"simple" mode uses the single amount the user typed; "detailed" mode sums the
itemized list normalized to a monthly equivalent. The mode comes from
ProjectionConfig rather than from stored UI state.
"""

from __future__ import annotations

import uuid
from typing import List, Sequence

import pandas as pd

from core.config import ProjectionConfig
from core.models import ExpenseItem
from core.utils import round_half_away


def monthly_equivalent(item: ExpenseItem) -> float:
    return item.monthly_amount


def total_monthly_expenses(items: Sequence[ExpenseItem]) -> float:
    """Sum of monthly equivalents, rounded to cents."""
    return round_half_away(sum(monthly_equivalent(i) for i in items), 2)


def resolve_monthly_expenses(
    config: ProjectionConfig,
    simple_amount: float,
    items: Sequence[ExpenseItem] = (),
) -> float:
    """The scalar monthly expense every projection consumes."""
    if config.expense_mode == "detailed":
        return total_monthly_expenses(items)
    return float(simple_amount)


def seed_detailed_items(simple_amount: float, items: Sequence[ExpenseItem]) -> List[ExpenseItem]:
    """
    Items to show when switching into detailed mode. An empty list with a
    non-zero simple amount becomes a single imported base row.
    """
    if items or simple_amount <= 0:
        return list(items)
    return [
        ExpenseItem(
            id=str(uuid.uuid4()),
            name="Base Expenses (Imported)",
            amount=simple_amount,
            category="Other",
            frequency="monthly",
        )
    ]


def expenses_by_category(items: Sequence[ExpenseItem]) -> pd.DataFrame:
    """Monthly-equivalent totals per category, largest first."""
    if not items:
        return pd.DataFrame(columns=["category", "monthly_amount", "share"])
    df = pd.DataFrame(
        {"category": [i.category for i in items], "monthly_amount": [i.monthly_amount for i in items]}
    )
    out = df.groupby("category", as_index=False)["monthly_amount"].sum()
    total = out["monthly_amount"].sum()
    out["share"] = out["monthly_amount"] / total if total > 0 else 0.0
    return out.sort_values("monthly_amount", ascending=False).reset_index(drop=True)
