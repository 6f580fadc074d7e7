"""
Data quality validation for imported account, income, and expense tables.

Catches problems before rows become records:
- Missing critical fields
- Negative balances and amounts
- Interest rates outside plausible bounds
- Unknown categories and frequencies
- Dates that don't parse
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import List, Optional

import pandas as pd

from core.schema import (
    ACCOUNT_CATEGORIES,
    CREDIT_SCORE_MAX,
    CREDIT_SCORE_MIN,
    EXPENSE_FREQUENCIES,
    INCOME_FREQUENCIES,
)

from .loader import canonical_category, canonicalize_columns


@dataclass
class ValidationResult:
    """Collects all validation warnings/errors for an imported table."""
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return len(self.errors) == 0

    def merge(self, other: "ValidationResult") -> "ValidationResult":
        return ValidationResult(self.errors + other.errors, self.warnings + other.warnings)

    def summary(self) -> str:
        lines = []
        if self.errors:
            lines.append(f"ERRORS ({len(self.errors)}):")
            for e in self.errors:
                lines.append(f"  ✗ {e}")
        if self.warnings:
            lines.append(f"WARNINGS ({len(self.warnings)}):")
            for w in self.warnings:
                lines.append(f"  ⚠ {w}")
        if not lines:
            lines.append("✓ All checks passed.")
        return "\n".join(lines)


def _check_schema(df: pd.DataFrame, columns, result: ValidationResult, what: str) -> bool:
    missing = [c for c in columns if c not in df.columns]
    if missing:
        result.errors.append(f"Missing required columns: {missing}")
        return False
    if len(df) == 0:
        result.warnings.append(f"{what} table is empty (0 rows).")
        return False
    return True


def _check_non_negative(df: pd.DataFrame, col: str, result: ValidationResult) -> None:
    if col not in df.columns:
        return
    vals = pd.to_numeric(df[col], errors="coerce")
    n_neg = int((vals < 0).sum())
    n_bad = int((vals.isna() & df[col].notna()).sum())
    if n_neg > 0:
        result.errors.append(f"{n_neg} rows have negative {col}.")
    if n_bad > 0:
        result.errors.append(f"{n_bad} rows have unparseable {col}.")


def _check_dates(df: pd.DataFrame, col: str, result: ValidationResult, *, required: bool) -> None:
    if col not in df.columns:
        return
    present = df[col].notna() & (df[col].astype(str).str.strip() != "")
    parsed = pd.to_datetime(df[col].where(present), errors="coerce")
    n_bad = int((parsed.isna() & present).sum())
    if n_bad > 0:
        result.errors.append(f"{n_bad} rows have unparseable {col}.")
    n_missing = int((~present).sum())
    if required and n_missing > 0:
        result.errors.append(f"{n_missing} rows have null {col}.")


def _check_ids(df: pd.DataFrame, result: ValidationResult) -> None:
    if "id" not in df.columns:
        return
    n_dup = int(df["id"].dropna().duplicated().sum())
    if n_dup > 0:
        result.warnings.append(f"{n_dup} duplicate ids found.")


def validate_accounts(df: pd.DataFrame) -> ValidationResult:
    """
    Run all validation checks on a flat accounts table.
    Returns a ValidationResult with errors (blocking) and warnings (informational).
    """
    result = ValidationResult()
    df = canonicalize_columns(df)
    if not _check_schema(df, ("name", "category", "balance"), result, "Accounts"):
        return result

    _check_ids(df, result)

    # --- Category ---
    cats = df["category"].map(lambda v: canonical_category(v) if pd.notna(v) else None)
    n_unknown = int((~cats.isin(ACCOUNT_CATEGORIES)).sum())
    if n_unknown > 0:
        result.errors.append(f"{n_unknown} rows have unknown category.")

    # --- Balances ---
    for col in ("balance", "credit_limit", "minimum_payment"):
        _check_non_negative(df, col, result)

    # --- Interest Rate ---
    if "interest_rate" in df.columns:
        rates = pd.to_numeric(df["interest_rate"], errors="coerce")
        n_neg = int((rates < 0).sum())
        # Rates are annual percent (24.99 not 0.2499)
        n_decimal = int(((rates > 0) & (rates < 1)).sum())
        n_high = int((rates > 100).sum())
        if n_neg > 0:
            result.errors.append(f"{n_neg} rows have negative interest_rate.")
        if n_decimal > 0:
            result.warnings.append(
                f"{n_decimal} rows have interest_rate below 1; check if rates are in "
                f"decimal vs percent form."
            )
        if n_high > 0:
            result.warnings.append(f"{n_high} rows have interest_rate above 100%.")

    # --- Credit cards ---
    if "credit_limit" in df.columns:
        is_card = cats == "credit"
        limits = pd.to_numeric(df["credit_limit"], errors="coerce")
        n_no_limit = int((is_card & (limits.isna() | (limits <= 0))).sum())
        if n_no_limit > 0:
            result.warnings.append(
                f"{n_no_limit} credit accounts have no credit_limit; utilization ignores them."
            )

    # --- Statement day ---
    if "statement_date" in df.columns:
        days = pd.to_numeric(df["statement_date"], errors="coerce")
        n_out = int(((days < 1) | (days > 31)).sum())
        if n_out > 0:
            result.errors.append(f"{n_out} rows have statement_date outside 1..31.")

    _check_dates(df, "due_date", result, required=False)
    return result


def validate_income_events(df: pd.DataFrame) -> ValidationResult:
    result = ValidationResult()
    df = canonicalize_columns(df)
    if not _check_schema(df, ("amount", "date"), result, "Income"):
        return result

    _check_ids(df, result)

    amounts = pd.to_numeric(df["amount"], errors="coerce")
    n_bad = int(amounts.isna().sum())
    if n_bad > 0:
        result.errors.append(f"{n_bad} rows have null/unparseable amount.")
    n_zero = int((amounts == 0).sum())
    if n_zero > 0:
        result.warnings.append(f"{n_zero} rows have zero amount.")

    if "frequency" in df.columns:
        freq = df["frequency"].dropna()
        n_unknown = int((~freq.isin(INCOME_FREQUENCIES)).sum())
        if n_unknown > 0:
            result.errors.append(f"{n_unknown} rows have unknown frequency.")

    _check_dates(df, "date", result, required=True)
    _check_dates(df, "end_date", result, required=False)

    if "end_date" in df.columns:
        start = pd.to_datetime(df["date"], errors="coerce")
        end = pd.to_datetime(df["end_date"], errors="coerce")
        n_before = int((end < start).sum())
        if n_before > 0:
            result.warnings.append(f"{n_before} rows have end_date before date.")

    return result


def validate_expenses(df: pd.DataFrame) -> ValidationResult:
    result = ValidationResult()
    df = canonicalize_columns(df)
    if not _check_schema(df, ("name", "amount"), result, "Expenses"):
        return result

    _check_ids(df, result)
    _check_non_negative(df, "amount", result)

    if "frequency" in df.columns:
        freq = df["frequency"].dropna()
        n_unknown = int((~freq.isin(EXPENSE_FREQUENCIES)).sum())
        if n_unknown > 0:
            result.errors.append(f"{n_unknown} rows have unknown frequency.")
    return result


def validate_credit_score(score) -> Optional[str]:
    """Error message for a user-entered score, or None when it is acceptable."""
    if score is None or (isinstance(score, str) and not score.strip()):
        return "Credit score is required."
    try:
        value = float(score)
    except (TypeError, ValueError):
        return "Credit score must be a number."
    if not math.isfinite(value):
        return "Credit score must be a number."
    if value != int(value):
        return "Credit score must be a whole number."
    if value < CREDIT_SCORE_MIN or value > CREDIT_SCORE_MAX:
        return f"Credit score must be between {CREDIT_SCORE_MIN} and {CREDIT_SCORE_MAX}."
    return None
