"""
Export/import of a whole portfolio as one zip bundle.

Layout:
  accounts.csv        one row per account, with a category column
  income_events.csv
  expenses.csv
  manifest.json       {"version", "exported_at", "monthly_expenses", "tables": {name: {rows, columns}}}

CSV files open directly in a spreadsheet. On import, account and expense rows
that repeat on their identifying fields are collapsed to the first occurrence
(re-importing the same bundle twice into one file is the usual cause).
"""

from __future__ import annotations

import io
import json
import logging
import zipfile
from datetime import datetime
from typing import Dict, List, Sequence, Tuple

import pandas as pd

from core.models import AccountData, ExpenseItem, IncomeEvent
from core.schema import EXPENSE_COLUMNS, INCOME_EVENT_COLUMNS

from .loader import (
    PathLike,
    PortfolioData,
    accounts_to_frame,
    frame_to_accounts,
    frame_to_expenses,
    frame_to_income_events,
    records_to_frame,
)
from .validators import ValidationResult, validate_accounts, validate_expenses, validate_income_events

logger = logging.getLogger(__name__)

BUNDLE_VERSION = 1
MANIFEST_NAME = "manifest.json"

ACCOUNT_DEDUPE_KEYS = [
    "category", "name", "balance", "interest_rate", "credit_limit", "minimum_payment", "due_date",
]
EXPENSE_DEDUPE_KEYS = ["name", "amount", "category", "frequency"]


def dedupe_rows(df: pd.DataFrame, keys: Sequence[str]) -> pd.DataFrame:
    """Keep the first row for each combination of the key columns present in df."""
    subset = [k for k in keys if k in df.columns]
    if df.empty or not subset:
        return df
    out = df.drop_duplicates(subset=subset, keep="first").reset_index(drop=True)
    dropped = len(df) - len(out)
    if dropped:
        logger.info("Dropped %d duplicate rows on %s", dropped, subset)
    return out


def export_bundle(
    path: PathLike,
    accounts: AccountData,
    income_events: Sequence[IncomeEvent] = (),
    expenses: Sequence[ExpenseItem] = (),
    monthly_expenses: float = 0.0,
) -> Dict[str, dict]:
    """Write the bundle to path and return its manifest."""
    tables = {
        "accounts": accounts_to_frame(accounts),
        "income_events": records_to_frame(income_events, INCOME_EVENT_COLUMNS),
        "expenses": records_to_frame(expenses, EXPENSE_COLUMNS),
    }
    manifest = {
        "version": BUNDLE_VERSION,
        "exported_at": datetime.now().isoformat(timespec="seconds"),
        "monthly_expenses": float(monthly_expenses),
        "tables": {
            name: {"rows": int(len(df)), "columns": list(df.columns)}
            for name, df in tables.items()
        },
    }

    with zipfile.ZipFile(path, "w", compression=zipfile.ZIP_DEFLATED) as zf:
        for name, df in tables.items():
            zf.writestr(f"{name}.csv", df.to_csv(index=False))
        zf.writestr(MANIFEST_NAME, json.dumps(manifest, indent=2))

    logger.info(
        "Exported bundle to %s (%s)",
        path, ", ".join(f"{n}={m['rows']}" for n, m in manifest["tables"].items()),
    )
    return manifest


def _read_table(zf: zipfile.ZipFile, name: str) -> pd.DataFrame:
    member = f"{name}.csv"
    if member not in zf.namelist():
        return pd.DataFrame()
    raw = zf.read(member).decode("utf-8")
    if not raw.strip():
        return pd.DataFrame()
    return pd.read_csv(io.StringIO(raw), dtype={"id": str})


def read_manifest(zf: zipfile.ZipFile) -> dict:
    if MANIFEST_NAME not in zf.namelist():
        raise ValueError("Bundle has no manifest.json.")
    manifest = json.loads(zf.read(MANIFEST_NAME).decode("utf-8"))
    version = manifest.get("version")
    if version != BUNDLE_VERSION:
        raise ValueError(f"Unsupported bundle version: {version!r}")
    return manifest


def _open_bundle(source) -> zipfile.ZipFile:
    try:
        return zipfile.ZipFile(source)
    except zipfile.BadZipFile as exc:
        raise ValueError(f"Not a valid bundle: {source}") from exc


def read_bundle_frames(source) -> Tuple[dict, Dict[str, pd.DataFrame]]:
    """
    Manifest plus the raw (canonical-column, de-duplicated) tables of a bundle.
    source is a path or a binary file-like object.
    """
    with _open_bundle(source) as zf:
        manifest = read_manifest(zf)
        frames = {
            "accounts": dedupe_rows(_read_table(zf, "accounts"), ACCOUNT_DEDUPE_KEYS),
            "income_events": _read_table(zf, "income_events"),
            "expenses": dedupe_rows(_read_table(zf, "expenses"), EXPENSE_DEDUPE_KEYS),
        }
    return manifest, frames


def validate_bundle(source) -> ValidationResult:
    """Run the table validators over every non-empty table in a bundle."""
    _, frames = read_bundle_frames(source)
    result = ValidationResult()
    checks = (
        ("accounts", validate_accounts),
        ("income_events", validate_income_events),
        ("expenses", validate_expenses),
    )
    for name, check in checks:
        if not frames[name].empty:
            result = result.merge(check(frames[name]))
    return result


def import_bundle(source) -> PortfolioData:
    """
    Read a bundle written by export_bundle.
    Raises ValueError for a missing/unsupported manifest or a file that is not a zip.
    """
    manifest, frames = read_bundle_frames(source)
    accounts_df, events_df, expenses_df = frames["accounts"], frames["income_events"], frames["expenses"]

    data = PortfolioData(
        accounts=frame_to_accounts(accounts_df) if not accounts_df.empty else AccountData(),
        income_events=frame_to_income_events(events_df) if not events_df.empty else [],
        expenses=frame_to_expenses(expenses_df) if not expenses_df.empty else [],
        monthly_expenses=float(manifest.get("monthly_expenses") or 0.0),
    )
    logger.info("Imported bundle %s (exported %s)", source, manifest.get("exported_at"))
    return data


def bundle_tables(path: PathLike) -> List[str]:
    """Table names listed in a bundle's manifest."""
    with _open_bundle(path) as zf:
        return list(read_manifest(zf).get("tables", {}))
