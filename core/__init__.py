"""
Core package: constants, configuration, domain records, and shared utilities.
No projection logic lives here.
"""

from .config import ProjectionConfig
from .models import Account, AccountData, ExpenseItem, IncomeEvent, Snapshot
from .schema import ACCOUNT_CATEGORIES, ASSET_CATEGORIES, LIABILITY_CATEGORIES
from .utils import require_columns, month_index, month_starts

__all__ = [
    "ProjectionConfig",
    "Account",
    "AccountData",
    "ExpenseItem",
    "IncomeEvent",
    "Snapshot",
    "ACCOUNT_CATEGORIES",
    "ASSET_CATEGORIES",
    "LIABILITY_CATEGORIES",
    "require_columns",
    "month_index",
    "month_starts",
]
