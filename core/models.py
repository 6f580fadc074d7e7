"""
Domain records: accounts, income events, expense items, and snapshots.

Records are pydantic models so that rows coming from CSV/JSON exports are
validated once at the boundary; the engine then trusts them. Input accepts the
camelCase keys used by the web client's exports as well as snake_case.
"""

from __future__ import annotations

import datetime as dt
from typing import Dict, Iterator, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator
from pydantic.alias_generators import to_camel

from .schema import ACCOUNT_CATEGORIES, LIABILITY_CATEGORIES, WEEKS_PER_MONTH


class _Record(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class Account(_Record):
    """
    One balance-carrying account. The stored balance is never negative;
    whether it is an asset or a liability is decided by its category.
    """

    id: str
    name: str = ""
    balance: float = Field(default=0.0, ge=0.0)
    interest_rate: float = 0.0  # annual percent, e.g. 24.99
    credit_limit: Optional[float] = Field(default=None, ge=0.0)
    due_date: Optional[dt.date] = None
    statement_date: Optional[int] = Field(default=None, ge=1, le=31)
    minimum_payment: Optional[float] = Field(default=None, ge=0.0)
    is_paid_off: bool = False
    autopay_enabled: bool = False
    autopay_amount_type: Optional[Literal["MINIMUM", "FULL_BALANCE", "CUSTOM"]] = None
    autopay_custom_amount: Optional[float] = Field(default=None, ge=0.0)

    @field_validator("interest_rate", mode="before")
    @classmethod
    def _blank_rate(cls, v):
        return 0.0 if v is None or v == "" else v

    @computed_field  # type: ignore[prop-decorator]
    @property
    def effective_balance(self) -> float:
        """Balance used by every projection; zero once the account is paid off."""
        return 0.0 if self.is_paid_off else self.balance


class IncomeEvent(_Record):
    """A scheduled cash inflow. end_date only applies to recurring events."""

    id: str
    name: str = ""
    amount: float
    date: dt.date
    frequency: Literal["one-time", "monthly", "yearly"] = "one-time"
    end_date: Optional[dt.date] = None

    @field_validator("end_date", mode="before")
    @classmethod
    def _blank_end_date(cls, v):
        return None if v == "" else v


class ExpenseItem(_Record):
    id: str
    name: str = ""
    amount: float = Field(default=0.0, ge=0.0)
    category: str = "Other"
    frequency: Literal["weekly", "monthly", "yearly"] = "monthly"

    @property
    def monthly_amount(self) -> float:
        if self.frequency == "yearly":
            return self.amount / 12
        if self.frequency == "weekly":
            return self.amount * WEEKS_PER_MONTH
        return self.amount


class AccountData(_Record):
    """Accounts grouped by category, as the dashboard holds them."""

    cash: List[Account] = Field(default_factory=list)
    investments: List[Account] = Field(default_factory=list)
    credit: List[Account] = Field(default_factory=list)
    loans: List[Account] = Field(default_factory=list)
    other_assets: List[Account] = Field(default_factory=list)

    def category(self, name: str) -> List[Account]:
        if name not in ACCOUNT_CATEGORIES:
            raise KeyError(f"Unknown account category: {name!r}")
        return getattr(self, name)

    def items(self) -> Iterator[tuple]:
        for name in ACCOUNT_CATEGORIES:
            yield name, getattr(self, name)

    def all_accounts(self) -> List[Account]:
        return [acc for _, accounts in self.items() for acc in accounts]

    def liabilities(self) -> List[Account]:
        return [acc for name in LIABILITY_CATEGORIES for acc in getattr(self, name)]

    @classmethod
    def from_mapping(cls, grouped: Dict[str, List[Account]]) -> "AccountData":
        unknown = set(grouped) - set(ACCOUNT_CATEGORIES)
        if unknown:
            raise KeyError(f"Unknown account categories: {sorted(unknown)}")
        return cls(**{k: list(v) for k, v in grouped.items()})


class Snapshot(_Record):
    """Immutable point-in-time copy of the live state."""

    model_config = ConfigDict(frozen=True)

    name: str
    created_at: dt.datetime
    accounts: AccountData
    monthly_expenses: float = 0.0
    credit_score: Optional[int] = None

    @classmethod
    def capture(
        cls,
        name: str,
        accounts: AccountData,
        monthly_expenses: float,
        *,
        credit_score: Optional[int] = None,
        created_at: Optional[dt.datetime] = None,
    ) -> "Snapshot":
        return cls(
            name=name,
            created_at=created_at or dt.datetime.now(),
            accounts=accounts.model_copy(deep=True),
            monthly_expenses=monthly_expenses,
            credit_score=credit_score,
        )

    def restore(self) -> tuple:
        """Fresh (accounts, monthly_expenses) copies to overwrite live state with."""
        return self.accounts.model_copy(deep=True), self.monthly_expenses
