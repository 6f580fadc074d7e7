"""
Load accounts, income events, and expense items from CSV or JSON exports.

Column names are canonicalized first (camelCase, snake_case, and spaced
spreadsheet headers all map to one name), then each row is validated into a
pydantic record. Row-level problems raise pydantic.ValidationError; missing
required columns raise ValueError.
"""

from __future__ import annotations

import json
import logging
import uuid
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, Union

import pandas as pd

from core.models import Account, AccountData, ExpenseItem, IncomeEvent
from core.schema import ACCOUNT_CATEGORIES, ACCOUNT_COLUMNS
from core.utils import require_columns

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

_COLUMN_ALIASES: Dict[str, str] = {
    # identifiers
    "ID": "id",
    "Id": "id",
    "Name": "name",
    "Account": "name",
    "Account Name": "name",
    "Category": "category",
    "Type": "category",
    "type": "category",
    # balances / rates
    "Balance": "balance",
    "interestRate": "interest_rate",
    "Interest Rate": "interest_rate",
    "APR": "interest_rate",
    "apr": "interest_rate",
    "creditLimit": "credit_limit",
    "Credit Limit": "credit_limit",
    "minimumPayment": "minimum_payment",
    "min_payment": "minimum_payment",
    "Minimum Payment": "minimum_payment",
    # dates
    "dueDate": "due_date",
    "Due Date": "due_date",
    "statementDate": "statement_date",
    "Statement Date": "statement_date",
    "Date": "date",
    "endDate": "end_date",
    "End Date": "end_date",
    # flags
    "isPaidOff": "is_paid_off",
    "Paid Off": "is_paid_off",
    "autopayEnabled": "autopay_enabled",
    "autopayAmountType": "autopay_amount_type",
    "autopayCustomAmount": "autopay_custom_amount",
    # income / expenses
    "Amount": "amount",
    "Frequency": "frequency",
}

# Category spellings seen in exports.
_CATEGORY_ALIASES: Dict[str, str] = {
    "otherAssets": "other_assets",
    "other-assets": "other_assets",
    "other assets": "other_assets",
    "investment": "investments",
    "loan": "loans",
    "credit card": "credit",
    "credit_card": "credit",
}

_STRING_COLUMNS = ("id", "name", "category")


@dataclass
class PortfolioData:
    """Everything a dashboard session holds."""
    accounts: AccountData = field(default_factory=AccountData)
    income_events: List[IncomeEvent] = field(default_factory=list)
    expenses: List[ExpenseItem] = field(default_factory=list)
    monthly_expenses: float = 0.0


def canonicalize_columns(df: pd.DataFrame) -> pd.DataFrame:
    """Return a copy with column aliases normalized; duplicate names are coalesced first-non-null."""
    ren = {c: _COLUMN_ALIASES.get(str(c).strip(), str(c).strip()) for c in df.columns}
    out = df.rename(columns=ren).copy()

    if out.columns.duplicated().any():
        cols = list(out.columns)
        merged: Dict[str, pd.Series] = {}
        for i, name in enumerate(cols):
            s = out.iloc[:, i]
            merged[name] = merged[name].combine_first(s) if name in merged else s
        out = pd.DataFrame(merged)

    return out


def canonical_category(value: str) -> str:
    key = str(value).strip()
    return _CATEGORY_ALIASES.get(key, _CATEGORY_ALIASES.get(key.lower(), key.lower()))


def _frame_records(df: pd.DataFrame) -> List[dict]:
    """Rows as dicts with blank cells dropped and identifier columns as strings."""
    out = df.copy()
    if "id" not in out.columns:
        out["id"] = [str(uuid.uuid4()) for _ in range(len(out))]
    for col in _STRING_COLUMNS:
        if col in out.columns:
            out[col] = out[col].map(lambda v: v if pd.isna(v) else str(v).strip())
    out = out.astype(object).where(out.notna(), None)
    # blank cells fall back to the record defaults
    records = [
        {k: v for k, v in rec.items() if v is not None}
        for rec in out.to_dict(orient="records")
    ]
    for rec in records:
        if rec.get("id") is None:
            rec["id"] = str(uuid.uuid4())
    return records


def frame_to_accounts(df: pd.DataFrame) -> AccountData:
    """Group a flat accounts frame (one row per account, with a category column)."""
    df = canonicalize_columns(df)
    require_columns(df, ["name", "category", "balance"])

    grouped: Dict[str, List[Account]] = {c: [] for c in ACCOUNT_CATEGORIES}
    for rec in _frame_records(df):
        category = canonical_category(rec.pop("category", None) or "")
        if category not in grouped:
            raise ValueError(f"Unknown account category: {category!r}")
        grouped[category].append(Account.model_validate(rec))

    logger.info("Loaded %d accounts", sum(len(v) for v in grouped.values()))
    return AccountData.from_mapping(grouped)


def accounts_to_frame(accounts: AccountData) -> pd.DataFrame:
    rows = []
    for category, items in accounts.items():
        for acc in items:
            row = acc.model_dump()
            row["category"] = category
            rows.append(row)
    return pd.DataFrame(rows, columns=list(ACCOUNT_COLUMNS))


def frame_to_income_events(df: pd.DataFrame) -> List[IncomeEvent]:
    df = canonicalize_columns(df)
    require_columns(df, ["amount", "date"])
    events = [IncomeEvent.model_validate(rec) for rec in _frame_records(df)]
    logger.info("Loaded %d income events", len(events))
    return events


def frame_to_expenses(df: pd.DataFrame) -> List[ExpenseItem]:
    df = canonicalize_columns(df)
    require_columns(df, ["name", "amount"])
    items = [ExpenseItem.model_validate(rec) for rec in _frame_records(df)]
    logger.info("Loaded %d expense items", len(items))
    return items


def records_to_frame(records: Iterable, columns: Iterable[str]) -> pd.DataFrame:
    return pd.DataFrame([r.model_dump() for r in records], columns=list(columns))


def load_accounts_csv(path: PathLike) -> AccountData:
    return frame_to_accounts(pd.read_csv(path))


def load_income_events_csv(path: PathLike) -> List[IncomeEvent]:
    return frame_to_income_events(pd.read_csv(path))


def load_expenses_csv(path: PathLike) -> List[ExpenseItem]:
    return frame_to_expenses(pd.read_csv(path))


def parse_portfolio(payload: dict) -> PortfolioData:
    """
    Build PortfolioData from the JSON shape the web client saves:
    {"accounts": {"cash": [...], ...}, "incomeEvents": [...],
     "expenses": [...], "monthlyExpenses": 3000}
    snake_case keys are accepted too.
    """
    if not isinstance(payload, dict):
        raise ValueError("Portfolio JSON must be an object.")

    raw_accounts = payload.get("accounts") or payload.get("accountData") or {}
    grouped = {canonical_category(k): v for k, v in raw_accounts.items()}
    unknown = set(grouped) - set(ACCOUNT_CATEGORIES)
    if unknown:
        raise ValueError(f"Unknown account categories: {sorted(unknown)}")

    events = payload.get("incomeEvents", payload.get("income_events")) or []
    expenses = payload.get("expenses", payload.get("expense_items")) or []
    monthly = payload.get("monthlyExpenses", payload.get("monthly_expenses")) or 0.0

    return PortfolioData(
        accounts=AccountData.model_validate(grouped),
        income_events=[IncomeEvent.model_validate(e) for e in events],
        expenses=[ExpenseItem.model_validate(e) for e in expenses],
        monthly_expenses=float(monthly),
    )


def load_portfolio_json(path: PathLike) -> PortfolioData:
    with open(path, "r", encoding="utf-8") as fh:
        payload = json.load(fh)
    data = parse_portfolio(payload)
    logger.info(
        "Loaded portfolio from %s: %d accounts, %d income events, %d expense items",
        path, len(data.accounts.all_accounts()), len(data.income_events), len(data.expenses),
    )
    return data
