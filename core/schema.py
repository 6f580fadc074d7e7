from __future__ import annotations

from typing import Tuple

# Account categories, in the order they are displayed and exported.
ACCOUNT_CATEGORIES: Tuple[str, ...] = (
    "cash",
    "investments",
    "credit",
    "loans",
    "other_assets",
)
ASSET_CATEGORIES: Tuple[str, ...] = ("cash", "investments", "other_assets")
LIABILITY_CATEGORIES: Tuple[str, ...] = ("credit", "loans")

INCOME_FREQUENCIES: Tuple[str, ...] = ("one-time", "monthly", "yearly")
EXPENSE_FREQUENCIES: Tuple[str, ...] = ("weekly", "monthly", "yearly")
AUTOPAY_AMOUNT_TYPES: Tuple[str, ...] = ("MINIMUM", "FULL_BALANCE", "CUSTOM")

EXPENSE_CATEGORIES: Tuple[str, ...] = (
    "Housing",
    "Utilities",
    "Transportation",
    "Food",
    "Insurance",
    "Healthcare",
    "Subscriptions",
    "Entertainment",
    "Personal",
    "Debt Payments",
    "Other",
)

# Tabular layouts used for CSV import/export.
ACCOUNT_COLUMNS: Tuple[str, ...] = (
    "id",
    "name",
    "category",
    "balance",
    "interest_rate",
    "credit_limit",
    "due_date",
    "statement_date",
    "minimum_payment",
    "is_paid_off",
    "autopay_enabled",
    "autopay_amount_type",
    "autopay_custom_amount",
)
INCOME_EVENT_COLUMNS: Tuple[str, ...] = (
    "id",
    "name",
    "amount",
    "date",
    "frequency",
    "end_date",
)
EXPENSE_COLUMNS: Tuple[str, ...] = (
    "id",
    "name",
    "amount",
    "category",
    "frequency",
)

# Engine constants. These are heuristics with no derivable formula.
MAX_SIMULATION_MONTHS: int = 600  # 50 years; bounds both amortization loops
RUNWAY_DISPLAY_CAP_MONTHS: int = 60
CHART_MAX_MONTHS: int = 60
DAYS_PER_MONTH: int = 30
WEEKS_PER_MONTH: float = 4.33
MIN_PAYMENT_FLOOR: float = 25.0
MIN_PAYMENT_RATE: float = 0.02
LOAN_PAYMENT_ESTIMATE_RATE: float = 0.02
DEFAULT_EXTRA_PAYMENT: float = 200.0

CREDIT_SCORE_MIN: int = 300
CREDIT_SCORE_MAX: int = 850
