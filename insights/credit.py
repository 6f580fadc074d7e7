"""
Credit utilization and a heuristic credit-score estimate.

The score is NOT a real scoring model. It is a fixed allocation over five
factors with bands keyed on utilization and account count:

  payment history   297 (no data; best case assumed)
  utilization       255 / 240 / 200 / 150 / 100 / 50  at >10 / >30 / >50 / >70 / >90
  history length    100
  credit mix        0 / 40 / 60 / 85  for 0 / >=1 / >=3 / >=5 accounts
  new credit         85

Utilization bands use strict ">" everywhere, so exactly 30% is still "good".
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Sequence

import pandas as pd

from core.models import Account
from core.schema import CREDIT_SCORE_MAX, CREDIT_SCORE_MIN
from core.utils import round_half_away

PAYMENT_HISTORY_POINTS = 297
CREDIT_HISTORY_POINTS = 100
NEW_CREDIT_POINTS = 85

# (exclusive lower bound on utilization %, points), checked top-down
UTILIZATION_BANDS = ((90, 50), (70, 100), (50, 150), (30, 200), (10, 240))
UTILIZATION_BEST_POINTS = 255

# (minimum account count, points), checked top-down
CREDIT_MIX_BANDS = ((5, 85), (3, 60), (1, 40))

SCORE_CATEGORIES = ((800, "Exceptional"), (740, "Very Good"), (670, "Good"), (580, "Fair"))


def estimate_utilization(accounts: Iterable[Account]) -> float:
    """Open card balances over total credit limit, in percent, within [0, 100]."""
    accounts = list(accounts)
    total_limit = sum(acc.credit_limit or 0.0 for acc in accounts)
    if total_limit <= 0:
        return 0.0
    total_balance = sum(acc.effective_balance for acc in accounts)
    return min(100.0, max(0.0, total_balance * 100 / total_limit))


def account_utilization(account: Account) -> float:
    if not account.credit_limit:
        return 0.0
    return account.effective_balance * 100 / account.credit_limit


def available_credit(account: Account) -> float:
    return (account.credit_limit or 0.0) - account.effective_balance


def utilization_band(utilization: float) -> str:
    if utilization > 30:
        return "poor"
    if utilization > 10:
        return "good"
    return "excellent"


def utilization_points(utilization: float) -> int:
    for threshold, points in UTILIZATION_BANDS:
        if utilization > threshold:
            return points
    return UTILIZATION_BEST_POINTS


def credit_mix_points(account_count: int) -> int:
    for minimum, points in CREDIT_MIX_BANDS:
        if account_count >= minimum:
            return points
    return 0


@dataclass(frozen=True)
class ScoreBreakdown:
    payment_history: int
    utilization: int
    credit_history: int
    credit_mix: int
    new_credit: int

    @property
    def total(self) -> int:
        raw = (
            self.payment_history + self.utilization + self.credit_history
            + self.credit_mix + self.new_credit
        )
        return int(min(CREDIT_SCORE_MAX, max(CREDIT_SCORE_MIN, round(raw))))

    def to_dataframe(self) -> pd.DataFrame:
        return pd.DataFrame([
            {"Factor": "Payment History", "Points": self.payment_history, "Max": 350},
            {"Factor": "Credit Utilization", "Points": self.utilization, "Max": 255},
            {"Factor": "Credit History Length", "Points": self.credit_history, "Max": 100},
            {"Factor": "Credit Mix", "Points": self.credit_mix, "Max": 85},
            {"Factor": "New Credit", "Points": self.new_credit, "Max": 85},
        ])


def score_breakdown(utilization: float, account_count: int) -> ScoreBreakdown:
    return ScoreBreakdown(
        payment_history=PAYMENT_HISTORY_POINTS,
        utilization=utilization_points(utilization),
        credit_history=CREDIT_HISTORY_POINTS,
        credit_mix=credit_mix_points(account_count),
        new_credit=NEW_CREDIT_POINTS,
    )


def estimate_credit_score(utilization: float, account_count: int) -> int:
    """Heuristic estimate in [300, 850]."""
    return score_breakdown(utilization, account_count).total


def score_category(score: int) -> str:
    for minimum, label in SCORE_CATEGORIES:
        if score >= minimum:
            return label
    return "Poor"


@dataclass(frozen=True)
class UtilizationImpact:
    payoff_amount: float
    target_utilization: float
    score_increase: int


def utilization_impact(accounts: Sequence[Account]) -> Optional[UtilizationImpact]:
    """How much to pay down to drop utilization toward 10%, and the likely gain."""
    utilization = estimate_utilization(accounts)
    if utilization <= 10:
        return None

    total_limit = sum(acc.credit_limit or 0.0 for acc in accounts)
    total_balance = sum(acc.effective_balance for acc in accounts)
    target = max(0.0, min(10.0, utilization - 20))
    payoff = total_balance - target / 100 * total_limit

    if utilization > 70:
        increase = 50
    elif utilization > 50:
        increase = 40
    elif utilization > 30:
        increase = 30
    else:
        increase = 20
    return UtilizationImpact(
        payoff_amount=round_half_away(payoff, 2),
        target_utilization=target,
        score_increase=increase,
    )


def credit_report(credit_accounts: Sequence[Account]) -> Optional[dict]:
    """Everything the score panel shows; None without any card accounts."""
    if not credit_accounts:
        return None
    utilization = estimate_utilization(credit_accounts)
    breakdown = score_breakdown(utilization, len(credit_accounts))
    return {
        "utilization": utilization,
        "utilization_band": utilization_band(utilization),
        "accounts_with_balance": sum(1 for a in credit_accounts if a.effective_balance > 0),
        "total_accounts": len(credit_accounts),
        "available_credit": sum(max(0.0, available_credit(a)) for a in credit_accounts),
        "breakdown": breakdown,
        "estimated_score": breakdown.total,
        "score_category": score_category(breakdown.total),
        "impact": utilization_impact(credit_accounts),
    }
