"""
Insights package. Read-only views over the portfolio covering credit
utilization and score, net worth, health scoring, payments, and progress.
"""

from .credit import estimate_credit_score, estimate_utilization, utilization_band, utilization_impact
from .networth import PortfolioSummary, summarize_portfolio
from .health import financial_health_score, generate_insights, rate_snapshot
from .payments import autopay_amount, build_payments
from .gamification import ArchetypeInputs, financial_archetype, gamification_profile, quest_journey

__all__ = [
    "estimate_credit_score",
    "estimate_utilization",
    "utilization_band",
    "utilization_impact",
    "PortfolioSummary",
    "summarize_portfolio",
    "financial_health_score",
    "generate_insights",
    "rate_snapshot",
    "autopay_amount",
    "build_payments",
    "ArchetypeInputs",
    "financial_archetype",
    "gamification_profile",
    "quest_journey",
]
