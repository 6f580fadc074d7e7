"""
Financial health scoring and plain-language insights.

Two 0..100 scores exist, weighted the same way (40 net worth / 30 runway / 30
third factor) but banded differently:
  financial_health_score  live dashboard; third factor is mean card utilization
  rate_snapshot           a saved snapshot; third factor is liabilities/assets
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Sequence

import pandas as pd

from core.models import Account

from .credit import account_utilization
from .networth import PortfolioSummary

PRIORITY_ORDER = {"high": 3, "medium": 2, "low": 1}


@dataclass(frozen=True)
class Insight:
    kind: str  # warning | success | info
    title: str
    description: str
    priority: str  # high | medium | low


def _runway_points(runway_months: float) -> int:
    if runway_months >= 6:
        return 30
    if runway_months >= 3:
        return 20
    if runway_months >= 1:
        return 10
    return 0


def mean_card_utilization(credit_accounts: Sequence[Account]) -> float:
    """Mean per-card balance/limit ratio (0..1 scale); cards without a limit count as 0."""
    total = sum(
        acc.effective_balance / acc.credit_limit
        for acc in credit_accounts
        if acc.credit_limit and acc.credit_limit > 0
    )
    return total / max(len(credit_accounts), 1)


def financial_health_score(
    summary: PortfolioSummary,
    runway_months: float,
    credit_accounts: Sequence[Account] = (),
) -> int:
    score = 0

    if summary.net_worth > 0:
        score += 40
    elif summary.net_worth > -10000:
        score += 20

    score += _runway_points(runway_months)

    utilization = mean_card_utilization(credit_accounts)
    if utilization < 0.3:
        score += 30
    elif utilization < 0.5:
        score += 20
    elif utilization < 0.7:
        score += 10

    return min(100, score)


def health_label(score: int) -> str:
    if score >= 80:
        return "Excellent"
    if score >= 60:
        return "Good"
    if score >= 40:
        return "Fair"
    return "Needs Work"


def generate_insights(
    summary: PortfolioSummary,
    runway_months: float,
    monthly_expenses: float,
    credit_accounts: Sequence[Account] = (),
) -> List[Insight]:
    """Actionable observations, highest priority first (stable within a priority)."""
    insights: List[Insight] = []

    fund_months = runway_months if monthly_expenses > 0 else 0.0
    if fund_months < 3:
        insights.append(Insight(
            "warning",
            "Emergency Fund Low",
            f"You have {fund_months:.1f} months of expenses saved. Aim for 3-6 months.",
            "high",
        ))
    elif fund_months >= 6:
        insights.append(Insight(
            "success",
            "Strong Emergency Fund",
            f"Excellent! You have {fund_months:.1f} months of expenses saved.",
            "medium",
        ))

    for acc in credit_accounts:
        if not acc.credit_limit:
            continue
        utilization = account_utilization(acc)
        if utilization > 30:
            insights.append(Insight(
                "warning",
                f"High Credit Utilization: {acc.name}",
                f"{utilization:.1f}% utilization. Keep below 30% for optimal credit score.",
                "medium",
            ))

    if summary.net_worth > 0 and summary.total_assets > 0 and summary.debt_ratio < 0.3:
        insights.append(Insight(
            "success",
            "Great Asset Position",
            "Your debt-to-asset ratio is excellent. Consider investing more aggressively.",
            "low",
        ))

    if summary.total_liabilities > 0:
        insights.append(Insight(
            "info",
            "Debt Optimization",
            "Focus on paying off highest interest rate debts first to save money.",
            "medium",
        ))

    return sorted(insights, key=lambda i: PRIORITY_ORDER[i.priority], reverse=True)


@dataclass
class SnapshotRating:
    score: int
    grade: str
    advice: List[Insight] = field(default_factory=list)

    def to_dataframe(self) -> pd.DataFrame:
        rows = [
            {"Metric": "Score", "Value": f"{self.score}/100"},
            {"Metric": "Grade", "Value": self.grade},
        ]
        for item in self.advice:
            rows.append({"Metric": item.title, "Value": item.description})
        return pd.DataFrame(rows)


def snapshot_grade(score: int) -> str:
    if score >= 90:
        return "A+"
    if score >= 80:
        return "A"
    if score >= 70:
        return "B"
    if score >= 60:
        return "C"
    if score >= 50:
        return "D"
    return "F"


def rate_snapshot(
    total_assets: float,
    total_liabilities: float,
    runway_months: float,
) -> SnapshotRating:
    """Score a saved snapshot and attach at most two pieces of advice."""
    net_worth = total_assets - total_liabilities
    score = 0

    if net_worth > 100000:
        score += 40
    elif net_worth > 50000:
        score += 30
    elif net_worth > 10000:
        score += 20
    elif net_worth > 0:
        score += 10

    score += _runway_points(runway_months)

    if total_assets > 0:
        debt_ratio = total_liabilities / total_assets
        if debt_ratio < 0.2:
            score += 30
        elif debt_ratio < 0.4:
            score += 20
        elif debt_ratio < 0.6:
            score += 10

    score = min(100, score)

    advice: List[Insight] = []
    if net_worth < 0:
        advice.append(Insight(
            "urgent",
            "Focus on Debt Reduction",
            "Your net worth is negative. Prioritize paying off high-interest debt first.",
            "high",
        ))
    if runway_months < 3:
        advice.append(Insight(
            "warning",
            "Build Emergency Fund",
            f"You only have {runway_months:.1f} months of expenses saved. Aim for 3-6 months.",
            "high",
        ))
    if total_liabilities > total_assets * 0.5:
        advice.append(Insight(
            "warning",
            "High Debt Load",
            "Your debt is over 50% of your assets. Consider debt consolidation strategies.",
            "medium",
        ))
    if score >= 80:
        advice.append(Insight(
            "success",
            "Excellent Financial Health",
            "Consider increasing investments or exploring new income streams.",
            "low",
        ))

    return SnapshotRating(score=score, grade=snapshot_grade(score), advice=advice[:2])
