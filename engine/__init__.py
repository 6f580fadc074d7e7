"""
Projection engine: pure functions that turn account, expense, and income state
into runway, payoff, and strategy metrics.
"""

from .income import income_for_month, income_schedule, project_income
from .payoff import PayoffResult, Stalled, default_minimum_payment, simulate_payoff
from .runway import RunwayResult, format_runway, project_balance_path, runway
from .strategy import DebtCard, StrategyResult, analyze_debt, rank_and_simulate
from .expenses import resolve_monthly_expenses, total_monthly_expenses

__all__ = [
    "income_for_month",
    "income_schedule",
    "project_income",
    "PayoffResult",
    "Stalled",
    "default_minimum_payment",
    "simulate_payoff",
    "RunwayResult",
    "format_runway",
    "project_balance_path",
    "runway",
    "DebtCard",
    "StrategyResult",
    "analyze_debt",
    "rank_and_simulate",
    "resolve_monthly_expenses",
    "total_monthly_expenses",
]
