"""Shared pytest configuration for the project test suite."""
from __future__ import annotations

import sys
from pathlib import Path

import pandas as pd
import pytest

# Ensure the repository root (which holds the core/engine/insights packages) is importable.
ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from core.config import ProjectionConfig  # noqa: E402
from core.models import Account, AccountData  # noqa: E402


@pytest.fixture
def as_of() -> pd.Timestamp:
    return pd.Timestamp("2024-01-15")


@pytest.fixture
def cfg(as_of) -> ProjectionConfig:
    return ProjectionConfig(as_of_date=as_of)


@pytest.fixture
def credit_cards():
    return [
        Account(id="visa", name="Visa", balance=1000.0, interest_rate=24.99,
                credit_limit=4000.0, minimum_payment=50.0),
        Account(id="amex", name="Amex", balance=2000.0, interest_rate=19.99,
                credit_limit=6000.0),
    ]


@pytest.fixture
def portfolio(credit_cards) -> AccountData:
    return AccountData(
        cash=[
            Account(id="chk", name="Checking", balance=5000.0),
            Account(id="old", name="Closed Savings", balance=9999.0, is_paid_off=True),
        ],
        investments=[Account(id="ira", name="IRA", balance=10000.0)],
        credit=credit_cards,
        loans=[Account(id="car", name="Car Loan", balance=4000.0, interest_rate=6.0)],
        other_assets=[Account(id="bike", name="Bike", balance=2000.0)],
    )
