"""
Net worth roll-up across account categories.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict

import pandas as pd

from core.models import AccountData
from core.schema import ACCOUNT_CATEGORIES, ASSET_CATEGORIES, LIABILITY_CATEGORIES


@dataclass(frozen=True)
class PortfolioSummary:
    category_totals: Dict[str, float]
    total_assets: float
    total_liabilities: float
    account_count: int

    @property
    def net_worth(self) -> float:
        return self.total_assets - self.total_liabilities

    @property
    def debt_ratio(self) -> float:
        """Liabilities over assets; 0 without assets."""
        return self.total_liabilities / self.total_assets if self.total_assets > 0 else 0.0

    @property
    def cash(self) -> float:
        return self.category_totals.get("cash", 0.0)

    @property
    def investments(self) -> float:
        return self.category_totals.get("investments", 0.0)

    @property
    def credit(self) -> float:
        return self.category_totals.get("credit", 0.0)

    def to_dataframe(self) -> pd.DataFrame:
        rows = []
        for name in ACCOUNT_CATEGORIES:
            total = self.category_totals.get(name, 0.0)
            signed = -total if name in LIABILITY_CATEGORIES else total
            rows.append({"category": name, "total": total, "signed_total": signed})
        return pd.DataFrame(rows)


def summarize_portfolio(accounts: AccountData) -> PortfolioSummary:
    """Per-category totals on effective balances; liabilities are the credit and loan categories."""
    totals = {
        name: float(sum(acc.effective_balance for acc in items))
        for name, items in accounts.items()
    }
    return PortfolioSummary(
        category_totals=totals,
        total_assets=sum(totals[c] for c in ASSET_CATEGORIES),
        total_liabilities=sum(totals[c] for c in LIABILITY_CATEGORIES),
        account_count=len(accounts.all_accounts()),
    )
