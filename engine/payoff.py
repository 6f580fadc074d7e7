"""
Single-debt payoff simulation under a fixed monthly payment.

A payment that cannot cover the interest accruing on the balance never pays
the debt off. That outcome is returned as Stalled, a distinct value, rather
than as a truncated month count.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Literal, Optional, Union

import pandas as pd

from core.models import Account
from core.schema import MAX_SIMULATION_MONTHS, MIN_PAYMENT_FLOOR, MIN_PAYMENT_RATE
from core.utils import add_months, split_months

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PayoffResult:
    months: int
    total_interest: float
    total_paid: float

    @classmethod
    def empty(cls) -> "PayoffResult":
        return cls(months=0, total_interest=0.0, total_paid=0.0)

    @property
    def is_empty(self) -> bool:
        return self.months == 0

    @property
    def years(self) -> int:
        return split_months(self.months)[0]

    @property
    def remaining_months(self) -> int:
        return split_months(self.months)[1]

    def payoff_date(self, as_of) -> pd.Timestamp:
        """Calendar date the last payment lands, counting months from as_of."""
        return add_months(as_of, self.months)


@dataclass(frozen=True)
class Stalled:
    """The balance never reaches zero under this payment."""
    reason: Literal["payment_below_interest", "iteration_cap"]
    months_simulated: int
    remaining_balance: float
    first_month_interest: float


Payoff = Union[PayoffResult, Stalled]


def monthly_rate(annual_rate_percent: float) -> float:
    return annual_rate_percent / 100.0 / 12.0


def default_minimum_payment(balance: float, minimum_payment: Optional[float] = None) -> float:
    """Stated minimum if there is one, else 2% of balance with a $25 floor."""
    if minimum_payment is not None:
        return float(minimum_payment)
    return max(MIN_PAYMENT_FLOOR, balance * MIN_PAYMENT_RATE)


def simulate_payoff(
    balance: float,
    annual_rate_percent: float,
    monthly_payment: float,
    *,
    max_months: int = MAX_SIMULATION_MONTHS,
) -> Payoff:
    """
    Amortize balance to zero at a fixed payment.

    Returns PayoffResult on completion, PayoffResult.empty() for a zero
    balance or non-positive rate, and Stalled when the payment does not cover
    the interest or the balance is still open after max_months.
    """
    if balance <= 0 or annual_rate_percent <= 0:
        return PayoffResult.empty()

    r_m = monthly_rate(annual_rate_percent)
    remaining = float(balance)
    total_interest = 0.0
    months = 0

    while remaining > 0 and months < max_months:
        interest = remaining * r_m
        principal = min(monthly_payment - interest, remaining)
        if principal <= 0:
            logger.debug(
                "Payoff stalled after %d months: payment %.2f <= interest %.2f",
                months, monthly_payment, interest,
            )
            return Stalled(
                reason="payment_below_interest",
                months_simulated=months,
                remaining_balance=remaining,
                first_month_interest=balance * r_m,
            )
        total_interest += interest
        remaining -= principal
        months += 1

    if remaining > 0:
        logger.debug("Payoff hit the %d-month cap with %.2f remaining", max_months, remaining)
        return Stalled(
            reason="iteration_cap",
            months_simulated=months,
            remaining_balance=remaining,
            first_month_interest=balance * r_m,
        )

    return PayoffResult(
        months=months,
        total_interest=total_interest,
        total_paid=balance + total_interest,
    )


def payoff_schedule(
    balance: float,
    annual_rate_percent: float,
    monthly_payment: float,
    *,
    max_months: int = MAX_SIMULATION_MONTHS,
) -> pd.DataFrame:
    """
    Month-by-month amortization table: Period, Payment, Interest, Principal, Balance.
    Stops at payoff, at the cap, or at the first month the payment cannot cover interest.
    """
    r_m = monthly_rate(annual_rate_percent)
    remaining = float(balance)
    rows = []
    for p in range(1, max_months + 1):
        if remaining <= 0:
            break
        interest = remaining * r_m
        principal = min(monthly_payment - interest, remaining)
        if principal <= 0:
            break
        remaining -= principal
        rows.append({
            "Period": p,
            "Payment": interest + principal,
            "Interest": interest,
            "Principal": principal,
            "Balance": remaining,
        })
    return pd.DataFrame(rows, columns=["Period", "Payment", "Interest", "Principal", "Balance"])


@dataclass(frozen=True)
class PayoffScenarios:
    minimum_payment: float
    minimum: Payoff
    custom_payment: Optional[float] = None
    custom: Optional[Payoff] = None

    @property
    def interest_saved(self) -> Optional[float]:
        """Interest avoided by paying the custom amount, when both scenarios complete."""
        if isinstance(self.minimum, PayoffResult) and isinstance(self.custom, PayoffResult):
            return self.minimum.total_interest - self.custom.total_interest
        return None


def payoff_scenarios(account: Account, custom_payment: Optional[float] = None) -> Optional[PayoffScenarios]:
    """Minimum-payment payoff and, if larger, a custom-payment payoff for one card."""
    balance = account.effective_balance
    if not balance or not account.interest_rate:
        return None

    min_payment = default_minimum_payment(balance, account.minimum_payment)
    minimum = simulate_payoff(balance, account.interest_rate, min_payment)

    if custom_payment is not None and custom_payment > min_payment:
        custom = simulate_payoff(balance, account.interest_rate, custom_payment)
        return PayoffScenarios(min_payment, minimum, custom_payment, custom)
    return PayoffScenarios(min_payment, minimum)
