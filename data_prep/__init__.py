"""
Data preparation: loading CSV/JSON exports, validation, and bundle export/import.
"""

from .loader import (
    PortfolioData,
    canonicalize_columns,
    frame_to_accounts,
    load_accounts_csv,
    load_expenses_csv,
    load_income_events_csv,
    load_portfolio_json,
)
from .portability import export_bundle, import_bundle, validate_bundle
from .validators import (
    ValidationResult,
    validate_accounts,
    validate_credit_score,
    validate_expenses,
    validate_income_events,
)

__all__ = [
    "PortfolioData",
    "canonicalize_columns",
    "frame_to_accounts",
    "load_accounts_csv",
    "load_expenses_csv",
    "load_income_events_csv",
    "load_portfolio_json",
    "export_bundle",
    "import_bundle",
    "validate_bundle",
    "ValidationResult",
    "validate_accounts",
    "validate_credit_score",
    "validate_expenses",
    "validate_income_events",
]
