"""
Tests for single-debt payoff simulation.
"""

import pandas as pd
import pytest

from core.models import Account
from engine.payoff import (
    PayoffResult,
    Stalled,
    default_minimum_payment,
    monthly_rate,
    payoff_scenarios,
    payoff_schedule,
    simulate_payoff,
)


class TestSimulatePayoff:
    def test_converges(self):
        res = simulate_payoff(5000, 18.0, 150)
        assert isinstance(res, PayoffResult)
        assert res.months > 0
        assert res.total_paid == pytest.approx(5000 + res.total_interest)

    def test_slow_high_rate_card(self):
        res = simulate_payoff(2000, 24.99, 60)
        assert monthly_rate(24.99) == pytest.approx(0.020825)
        assert isinstance(res, PayoffResult)
        assert 55 <= res.months <= 60
        assert res.total_paid > 2000

    def test_payment_equal_to_interest_stalls(self):
        res = simulate_payoff(1000, 24.0, 20)
        assert isinstance(res, Stalled)
        assert res.first_month_interest == pytest.approx(20.0)

    def test_payment_below_interest_stalls_immediately(self):
        res = simulate_payoff(1000, 24.0, 10)
        assert isinstance(res, Stalled)
        assert res.reason == "payment_below_interest"
        assert res.months_simulated == 0
        assert res.remaining_balance == 1000

    def test_iteration_cap_stalls(self):
        res = simulate_payoff(5000, 18.0, 150, max_months=10)
        assert isinstance(res, Stalled)
        assert res.reason == "iteration_cap"
        assert res.months_simulated == 10
        assert 0 < res.remaining_balance < 5000

    @pytest.mark.parametrize("balance,rate", [(0, 18.0), (1000, 0.0), (-5, 10.0)])
    def test_degenerate_inputs_empty(self, balance, rate):
        res = simulate_payoff(balance, rate, 100)
        assert res == PayoffResult.empty()
        assert res.is_empty

    def test_years_split(self):
        res = PayoffResult(months=27, total_interest=0.0, total_paid=0.0)
        assert (res.years, res.remaining_months) == (2, 3)

    def test_payoff_date_clamps_month_end(self):
        res = PayoffResult(months=13, total_interest=0.0, total_paid=0.0)
        assert res.payoff_date(pd.Timestamp("2024-01-31")) == pd.Timestamp("2025-02-28")
        assert PayoffResult.empty().payoff_date("2024-03-05") == pd.Timestamp("2024-03-05")


class TestMinimumPayment:
    @pytest.mark.parametrize("balance,stated,expected", [
        (1000, None, 25.0),
        (5000, None, 100.0),
        (5000, 80.0, 80.0),
        (5000, 0.0, 0.0),
    ])
    def test_default(self, balance, stated, expected):
        assert default_minimum_payment(balance, stated) == expected


class TestSchedule:
    def test_matches_simulation(self):
        sched = payoff_schedule(5000, 18.0, 150)
        res = simulate_payoff(5000, 18.0, 150)
        assert len(sched) == res.months
        assert list(sched["Period"]) == list(range(1, res.months + 1))
        assert sched["Balance"].iloc[-1] == pytest.approx(0.0, abs=1e-6)
        assert sched["Interest"].sum() == pytest.approx(res.total_interest)

    def test_stalled_schedule_is_empty(self):
        assert payoff_schedule(1000, 24.0, 10).empty


class TestScenarios:
    def test_custom_payment_saves_interest(self):
        acc = Account(id="c", balance=2000.0, interest_rate=24.99)
        scen = payoff_scenarios(acc, 100.0)
        assert scen.minimum_payment == 40.0
        assert isinstance(scen.custom, PayoffResult)
        assert scen.interest_saved > 0

    def test_custom_below_minimum_ignored(self):
        acc = Account(id="c", balance=2000.0, interest_rate=24.99)
        scen = payoff_scenarios(acc, 30.0)
        assert scen.custom is None
        assert scen.interest_saved is None

    def test_paid_off_account(self):
        acc = Account(id="c", balance=2000.0, interest_rate=24.99, is_paid_off=True)
        assert payoff_scenarios(acc, 100.0) is None
