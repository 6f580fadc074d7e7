"""
Monthly payment checklist built from card minimums and estimated loan payments.

Which payments are already cleared this month comes from
ProjectionConfig.excluded_payment_ids; nothing here remembers state.
"""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from typing import List, Optional

import pandas as pd

from core.config import ProjectionConfig
from core.models import Account, AccountData
from core.schema import LOAN_PAYMENT_ESTIMATE_RATE

from engine.payoff import default_minimum_payment


@dataclass(frozen=True)
class Payment:
    id: str
    name: str
    amount: float
    category: str  # credit | loan
    due_date: Optional[dt.date] = None
    is_paid: bool = False


def build_payments(accounts: AccountData, config: ProjectionConfig) -> List[Payment]:
    """Largest payment first; ties keep account order."""
    cleared = config.excluded_payment_ids
    payments: List[Payment] = []

    for acc in accounts.credit:
        if acc.minimum_payment and acc.minimum_payment > 0:
            payments.append(Payment(
                id=acc.id,
                name=acc.name,
                amount=acc.minimum_payment,
                category="credit",
                due_date=acc.due_date,
                is_paid=acc.id in cleared,
            ))

    for acc in accounts.loans:
        if acc.effective_balance > 0:
            payments.append(Payment(
                id=acc.id,
                name=acc.name,
                amount=acc.effective_balance * LOAN_PAYMENT_ESTIMATE_RATE,
                category="loan",
                due_date=acc.due_date,
                is_paid=acc.id in cleared,
            ))

    payments.sort(key=lambda p: p.amount, reverse=True)
    return payments


def payments_frame(payments: List[Payment]) -> pd.DataFrame:
    cols = ["id", "name", "amount", "category", "due_date", "is_paid"]
    return pd.DataFrame([p.__dict__ for p in payments], columns=cols)


def payment_totals(payments: List[Payment]) -> dict:
    paid = sum(p.amount for p in payments if p.is_paid)
    remaining = sum(p.amount for p in payments if not p.is_paid)
    return {
        "paid": paid,
        "remaining": remaining,
        "paid_count": sum(1 for p in payments if p.is_paid),
        "total_count": len(payments),
    }


def autopay_amount(account: Account) -> Optional[float]:
    """What autopay will draw this cycle, capped at the balance; None when autopay is off."""
    if not account.autopay_enabled:
        return None
    balance = account.effective_balance
    kind = account.autopay_amount_type or "MINIMUM"
    if kind == "FULL_BALANCE":
        return balance
    if kind == "CUSTOM":
        return min(account.autopay_custom_amount or 0.0, balance)
    return min(default_minimum_payment(balance, account.minimum_payment), balance)
