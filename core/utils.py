from __future__ import annotations

import math
from typing import Iterable

import numpy as np
import pandas as pd
from dateutil.relativedelta import relativedelta


def require_columns(df: pd.DataFrame, cols: Iterable[str]) -> None:
    missing = [c for c in cols if c not in df.columns]
    if missing:
        raise ValueError(f"Missing required columns: {missing}")


def month_index(when) -> int:
    """Integer month key year*12 + (month-1); subtraction gives month offsets across years."""
    ts = pd.Timestamp(when)
    return ts.year * 12 + (ts.month - 1)


def month_from_index(idx: int) -> pd.Timestamp:
    """Inverse of month_index: the first day of that month."""
    year, month0 = divmod(int(idx), 12)
    return pd.Timestamp(year=year, month=month0 + 1, day=1)


def month_starts(as_of_date: pd.Timestamp, n_months: int) -> pd.DatetimeIndex:
    """
    Month-start dates for n_months projection periods, the first one being the
    month that contains as_of_date.
    """
    first = pd.Timestamp(as_of_date).to_period("M").to_timestamp(how="start")
    return pd.date_range(first, periods=n_months, freq="MS")


def add_months(when: pd.Timestamp, n: int) -> pd.Timestamp:
    """Calendar month arithmetic, clamping the day to the target month's length."""
    return pd.Timestamp(when) + relativedelta(months=n)


def round_half_away(x, decimals: int = 2):
    """ROUND half away from zero (vectorized); Python's round() is banker's rounding."""
    m = 10 ** decimals
    arr = np.asarray(x, dtype=float)
    out = np.sign(arr) * (np.floor(np.abs(arr) * m + 0.5) / m)
    if out.ndim == 0:
        return float(out)
    return out


def split_months(months: int) -> tuple:
    """Split a month count into (years, remaining months)."""
    return months // 12, months % 12


def format_duration(months: int) -> str:
    """Render a month count as e.g. '3y 4m' or '7m'."""
    years, rem = split_months(int(months))
    return f"{years}y {rem}m" if years > 0 else f"{rem}m"


def format_currency(value: float) -> str:
    if value is None or (isinstance(value, float) and math.isnan(value)):
        return ""
    sign = "-" if value < 0 else ""
    return f"{sign}${abs(float(value)):,.2f}"
