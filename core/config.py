"""
Projection configuration.
Settings that used to live in browser storage (expense mode, cleared payment
ids, income toggle) are passed in explicitly so every engine call is pure.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import FrozenSet, Literal

import pandas as pd

from .schema import CHART_MAX_MONTHS, DEFAULT_EXTRA_PAYMENT, MAX_SIMULATION_MONTHS


@dataclass(frozen=True)
class ProjectionConfig:
    as_of_date: pd.Timestamp = field(default_factory=lambda: pd.Timestamp.today().normalize())

    # income planning
    income_horizon_months: int = 12
    income_enabled: bool = False

    # expenses: a single scalar ("simple") or itemized ("detailed")
    expense_mode: Literal["simple", "detailed"] = "simple"

    # debt strategies
    extra_payment: float = DEFAULT_EXTRA_PAYMENT
    max_months: int = MAX_SIMULATION_MONTHS

    # runway chart horizon ceiling
    chart_max_months: int = CHART_MAX_MONTHS

    # payment ids the user has marked as cleared this month
    excluded_payment_ids: FrozenSet[str] = frozenset()

    def __post_init__(self) -> None:
        object.__setattr__(self, "as_of_date", pd.Timestamp(self.as_of_date).normalize())
        object.__setattr__(self, "excluded_payment_ids", frozenset(self.excluded_payment_ids))
        if self.expense_mode not in ("simple", "detailed"):
            raise ValueError(f"Unknown expense_mode: {self.expense_mode!r}")
        if self.income_horizon_months < 0:
            raise ValueError("income_horizon_months must be non-negative.")

    def with_overrides(self, **changes) -> "ProjectionConfig":
        """Return a copy with the given fields replaced."""
        return replace(self, **changes)
