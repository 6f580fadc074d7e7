"""
Tests for income projection windows.
"""

import pandas as pd
import pytest

from core.models import IncomeEvent
from core.utils import month_index
from engine.income import income_for_month, income_schedule, project_income


def _event(amount, when, freq="one-time", end=None, eid="e"):
    return IncomeEvent(id=eid, name=eid, amount=amount, date=when, frequency=freq, end_date=end)


class TestOneTime:
    def test_inside_window(self, as_of):
        assert project_income([_event(1000, "2024-03-10")], as_of) == 1000

    def test_before_as_of_in_same_month_excluded(self, as_of):
        assert project_income([_event(1000, "2024-01-10")], as_of) == 0

    def test_on_as_of_counts(self, as_of):
        assert project_income([_event(1000, "2024-01-15")], as_of) == 1000

    def test_beyond_horizon_excluded(self, as_of):
        assert project_income([_event(1000, "2025-02-01")], as_of) == 0
        assert project_income([_event(1000, "2025-02-01")], as_of, horizon_months=14) == 1000

    def test_window_is_whole_months(self, as_of):
        # 2025-01 is month 13 counted from 2024-01, outside a 12-month window
        assert project_income([_event(1000, "2025-01-10")], as_of) == 0
        assert project_income([_event(1000, "2024-12-31")], as_of) == 1000
        assert project_income([_event(1000, "2025-01-10")], as_of, horizon_months=13) == 1000

    def test_end_date_ignored(self, as_of):
        ev = _event(700, "2024-05-01", end="2024-02-01")
        assert project_income([ev], as_of) == 700


class TestRecurring:
    def test_monthly_started_before_as_of(self, as_of):
        assert project_income([_event(500, "2023-06-01", "monthly")], as_of) == 6000

    def test_monthly_with_end_date(self, as_of):
        ev = _event(500, "2024-07-01", "monthly", end="2024-09-30")
        assert project_income([ev], as_of) == 1500

    def test_yearly_anniversary(self, as_of):
        assert project_income([_event(2000, "2023-05-20", "yearly")], as_of) == 2000

    def test_yearly_respects_end_date(self, as_of):
        ev = _event(2000, "2022-05-20", "yearly", end="2023-12-31")
        assert project_income([ev], as_of) == 0

    def test_month_lookup(self, as_of):
        ev = _event(300, "2024-02-01", "monthly")
        assert income_for_month([ev], month_index("2024-01-01"), as_of) == 0
        assert income_for_month([ev], month_index("2024-02-01"), as_of) == 300


class TestSchedule:
    def test_disabled_returns_zero(self, as_of):
        assert project_income([_event(1000, "2024-03-10")], as_of, enabled=False) == 0

    def test_no_events(self, as_of):
        assert project_income([], as_of) == 0

    def test_schedule_index_and_total(self, as_of):
        events = [_event(1000, "2024-03-10"), _event(200, "2024-01-01", "monthly", eid="m")]
        sched = income_schedule(events, as_of, 12)
        assert len(sched) == 12
        assert sched.index[0] == pd.Timestamp("2024-01-01")
        assert sched.loc[pd.Timestamp("2024-03-01")] == 1200
        assert sched.sum() == pytest.approx(project_income(events, as_of, 12))
