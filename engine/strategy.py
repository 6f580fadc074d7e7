"""
Multi-debt payoff strategies: avalanche (highest rate first) and snowball
(smallest balance first) under one shared extra-payment pool.

The simulation runs month by month across all debts together:
  1. every open debt accrues a month of interest
  2. every open debt pays its own minimum, capped at what it owes
  3. the whole extra payment goes to the first open debt in strategy order
Minimums freed by a paid-off debt are not rolled into the extra pool.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Literal, Optional, Sequence, Tuple

import pandas as pd

from core.models import Account
from core.schema import DEFAULT_EXTRA_PAYMENT, MAX_SIMULATION_MONTHS

from .payoff import default_minimum_payment, monthly_rate

Strategy = Literal["avalanche", "snowball"]


@dataclass(frozen=True)
class DebtCard:
    id: str
    name: str
    balance: float
    interest_rate: float  # annual percent
    minimum_payment: float

    @property
    def monthly_interest(self) -> float:
        return self.balance * monthly_rate(self.interest_rate)

    @property
    def annual_interest_cost(self) -> float:
        return self.monthly_interest * 12

    @classmethod
    def from_account(cls, account: Account) -> "DebtCard":
        balance = account.effective_balance
        return cls(
            id=account.id,
            name=account.name,
            balance=balance,
            interest_rate=account.interest_rate or 0.0,
            minimum_payment=default_minimum_payment(balance, account.minimum_payment),
        )


@dataclass(frozen=True)
class StrategyResult:
    strategy: str
    months: int
    total_interest_paid: float
    completed: bool
    order: Tuple[str, ...] = ()


def build_debt_cards(accounts: Iterable[Account]) -> List[DebtCard]:
    """Cards that carry a balance and charge interest."""
    cards = [DebtCard.from_account(acc) for acc in accounts if acc.effective_balance > 0]
    return [c for c in cards if c.interest_rate > 0]


def order_debts(debts: Sequence[DebtCard], strategy: Strategy) -> List[DebtCard]:
    """Stable sort: avalanche by rate descending, snowball by balance ascending."""
    if strategy == "avalanche":
        return sorted(debts, key=lambda d: d.interest_rate, reverse=True)
    if strategy == "snowball":
        return sorted(debts, key=lambda d: d.balance)
    raise ValueError(f"Unknown strategy: {strategy!r}")


def simulate_ordered(
    debts: Sequence[DebtCard],
    extra_payment: float = DEFAULT_EXTRA_PAYMENT,
    *,
    max_months: int = MAX_SIMULATION_MONTHS,
) -> Tuple[int, float, bool]:
    """Run the shared-pool simulation on debts already in priority order."""
    remaining = [d.balance for d in debts]
    rates = [monthly_rate(d.interest_rate) for d in debts]
    minimums = [d.minimum_payment for d in debts]

    months = 0
    total_interest = 0.0
    while any(r > 0 for r in remaining) and months < max_months:
        months += 1

        for i in range(len(remaining)):
            if remaining[i] > 0:
                interest = remaining[i] * rates[i]
                total_interest += interest
                remaining[i] += interest
                remaining[i] -= min(minimums[i], remaining[i])

        # extra goes to debts in priority order; leftover after clearing one carries to the next
        pool = extra_payment
        for i in range(len(remaining)):
            if pool <= 0:
                break
            if remaining[i] > 0:
                applied = min(pool, remaining[i])
                remaining[i] -= applied
                pool -= applied

    completed = not any(r > 0 for r in remaining)
    return months, total_interest, completed


def rank_and_simulate(
    debts: Sequence[DebtCard],
    strategy: Strategy,
    extra_payment: float = DEFAULT_EXTRA_PAYMENT,
    *,
    max_months: int = MAX_SIMULATION_MONTHS,
) -> StrategyResult:
    ordered = order_debts(debts, strategy)
    months, interest, completed = simulate_ordered(ordered, extra_payment, max_months=max_months)
    return StrategyResult(
        strategy=strategy,
        months=months,
        total_interest_paid=interest,
        completed=completed,
        order=tuple(d.id for d in ordered),
    )


def compare_strategies(
    debts: Sequence[DebtCard],
    extra_payment: float = DEFAULT_EXTRA_PAYMENT,
    *,
    max_months: int = MAX_SIMULATION_MONTHS,
) -> pd.DataFrame:
    """One row per strategy: months, years/months split, interest, and order."""
    rows = []
    for name in ("avalanche", "snowball"):
        res = rank_and_simulate(debts, name, extra_payment, max_months=max_months)
        rows.append({
            "strategy": name,
            "months": res.months,
            "years": res.months // 12,
            "remaining_months": res.months % 12,
            "total_interest_paid": res.total_interest_paid,
            "completed": res.completed,
            "order": ", ".join(res.order),
        })
    return pd.DataFrame(rows)


def pressure_level(score: float) -> str:
    if score < 10:
        return "Manageable"
    if score < 20:
        return "Concerning"
    if score < 30:
        return "Serious Problem"
    return "Critical"


@dataclass
class DebtAnalysis:
    cards: List[DebtCard]
    total_debt: float
    total_monthly_interest: float
    total_annual_interest: float
    weighted_avg_rate: float
    pressure_score: float
    pressure_level: str
    avalanche_order: List[DebtCard]
    snowball_order: List[DebtCard]
    avalanche: StrategyResult
    snowball: StrategyResult
    notes: Dict[str, str] = field(default_factory=dict)

    @property
    def snowball_extra_cost(self) -> float:
        """Interest snowball pays beyond avalanche (0 when it does not cost more)."""
        return max(0.0, self.snowball.total_interest_paid - self.avalanche.total_interest_paid)


def analyze_debt(
    credit_accounts: Iterable[Account],
    extra_payment: float = DEFAULT_EXTRA_PAYMENT,
    *,
    max_months: int = MAX_SIMULATION_MONTHS,
) -> Optional[DebtAnalysis]:
    """Full card-debt picture, or None when no card carries interest-bearing debt."""
    cards = build_debt_cards(credit_accounts)
    if not cards:
        return None

    total_debt = sum(c.balance for c in cards)
    total_monthly = sum(c.monthly_interest for c in cards)
    total_annual = total_monthly * 12
    weighted = sum(c.interest_rate * c.balance for c in cards) / total_debt
    pressure = min(100.0, total_annual / total_debt * 100)

    avalanche = rank_and_simulate(cards, "avalanche", extra_payment, max_months=max_months)
    snowball = rank_and_simulate(cards, "snowball", extra_payment, max_months=max_months)

    analysis = DebtAnalysis(
        cards=cards,
        total_debt=total_debt,
        total_monthly_interest=total_monthly,
        total_annual_interest=total_annual,
        weighted_avg_rate=weighted,
        pressure_score=pressure,
        pressure_level=pressure_level(pressure),
        avalanche_order=order_debts(cards, "avalanche"),
        snowball_order=order_debts(cards, "snowball"),
        avalanche=avalanche,
        snowball=snowball,
    )
    if not avalanche.completed:
        analysis.notes["avalanche"] = f"Not paid off within {max_months} months."
    if not snowball.completed:
        analysis.notes["snowball"] = f"Not paid off within {max_months} months."
    return analysis
