"""
Tests for CSV/JSON loading and column canonicalization.
"""

import json

import pandas as pd
import pytest
from pydantic import ValidationError

from data_prep.loader import (
    canonical_category,
    canonicalize_columns,
    frame_to_accounts,
    frame_to_expenses,
    load_accounts_csv,
    load_expenses_csv,
    load_income_events_csv,
    load_portfolio_json,
    parse_portfolio,
)


ACCOUNTS_CSV = """id,name,type,balance,interestRate,creditLimit,minimumPayment,isPaidOff
1,Visa,credit,1200,24.99,5000,,false
2,Checking,cash,3000,,,,false
3,Old Card,Credit Card,0,19.99,2000,,true
"""


class TestCanonicalize:
    def test_aliases(self):
        df = pd.DataFrame(columns=["ID", "Interest Rate", "creditLimit", "Due Date"])
        assert list(canonicalize_columns(df).columns) == ["id", "interest_rate", "credit_limit", "due_date"]

    def test_duplicates_coalesced(self):
        df = pd.DataFrame({"APR": [None, 5.0], "interest_rate": [10.0, None]})
        out = canonicalize_columns(df)
        assert list(out.columns) == ["interest_rate"]
        assert list(out["interest_rate"]) == [10.0, 5.0]

    @pytest.mark.parametrize("raw,expected", [
        ("otherAssets", "other_assets"), ("Credit Card", "credit"), ("Cash", "cash"), ("loan", "loans"),
    ])
    def test_category_aliases(self, raw, expected):
        assert canonical_category(raw) == expected


class TestAccountsCsv:
    def test_load(self, tmp_path):
        path = tmp_path / "accounts.csv"
        path.write_text(ACCOUNTS_CSV)
        accounts = load_accounts_csv(path)
        assert [a.id for a in accounts.credit] == ["1", "3"]
        assert [a.name for a in accounts.cash] == ["Checking"]
        visa = accounts.credit[0]
        assert visa.interest_rate == 24.99
        assert visa.credit_limit == 5000
        assert visa.minimum_payment is None
        assert accounts.credit[1].is_paid_off is True
        assert accounts.cash[0].interest_rate == 0.0

    def test_missing_id_generated(self):
        df = pd.DataFrame({"name": ["Checking"], "category": ["cash"], "balance": [10.0]})
        acc = frame_to_accounts(df).cash[0]
        assert acc.id

    def test_unknown_category(self):
        df = pd.DataFrame({"name": ["Boat"], "category": ["yachts"], "balance": [10.0]})
        with pytest.raises(ValueError):
            frame_to_accounts(df)

    def test_missing_columns(self):
        with pytest.raises(ValueError):
            frame_to_accounts(pd.DataFrame({"name": ["x"], "category": ["cash"]}))

    def test_negative_balance(self):
        df = pd.DataFrame({"name": ["x"], "category": ["cash"], "balance": [-1.0]})
        with pytest.raises(ValidationError):
            frame_to_accounts(df)


class TestOtherTables:
    def test_income_events(self, tmp_path):
        path = tmp_path / "income.csv"
        path.write_text(
            "id,name,amount,date,frequency,endDate\n"
            "a,Salary,4000,2024-01-01,monthly,\n"
            "b,Bonus,2500,2024-06-15,one-time,\n"
        )
        events = load_income_events_csv(path)
        assert [e.frequency for e in events] == ["monthly", "one-time"]
        assert events[0].end_date is None
        assert str(events[1].date) == "2024-06-15"

    def test_expenses(self, tmp_path):
        path = tmp_path / "expenses.csv"
        path.write_text("Name,Amount,Category,Frequency\nRent,1500,Housing,monthly\nGym,480,Personal,yearly\n")
        items = load_expenses_csv(path)
        assert [i.monthly_amount for i in items] == [1500.0, 40.0]


class TestPortfolioJson:
    def payload(self):
        return {
            "accounts": {
                "cash": [{"id": "a", "name": "Checking", "balance": 100}],
                "otherAssets": [{"id": "h", "name": "Car", "balance": 9000}],
            },
            "incomeEvents": [{"id": "e", "name": "Pay", "amount": 100, "date": "2024-02-01",
                              "frequency": "monthly", "endDate": ""}],
            "monthlyExpenses": 2500,
        }

    def test_parse(self):
        data = parse_portfolio(self.payload())
        assert data.monthly_expenses == 2500.0
        assert data.accounts.other_assets[0].balance == 9000
        assert data.income_events[0].end_date is None
        assert data.expenses == []

    def test_load_file(self, tmp_path):
        path = tmp_path / "portfolio.json"
        path.write_text(json.dumps(self.payload()))
        assert len(load_portfolio_json(path).accounts.all_accounts()) == 2

    def test_unknown_category(self):
        with pytest.raises(ValueError):
            parse_portfolio({"accounts": {"boats": []}})

    def test_not_an_object(self):
        with pytest.raises(ValueError):
            parse_portfolio([1, 2, 3])


class TestBlankCells:
    def test_blank_expense_fields_take_defaults(self):
        edited = pd.DataFrame([
            {"id": "rent", "name": "Rent", "amount": 1500.0, "category": "Housing", "frequency": "monthly"},
            {"id": None, "name": "Gym", "amount": 40.0, "category": None, "frequency": None},
        ])
        items = frame_to_expenses(edited)
        gym = items[1]
        assert (gym.category, gym.frequency) == ("Other", "monthly")
        assert gym.id

    def test_blank_account_fields_take_defaults(self):
        df = pd.DataFrame([{"name": "Visa", "category": "credit", "balance": 10.0,
                            "interest_rate": None, "is_paid_off": None}])
        acc = frame_to_accounts(df).credit[0]
        assert acc.interest_rate == 0.0
        assert acc.is_paid_off is False
