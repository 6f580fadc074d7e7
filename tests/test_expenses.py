"""
Tests for expense resolution across simple and detailed modes.
"""

import pytest

from core.models import ExpenseItem
from engine.expenses import (
    expenses_by_category,
    resolve_monthly_expenses,
    seed_detailed_items,
    total_monthly_expenses,
)


@pytest.fixture
def items():
    return [
        ExpenseItem(id="ins", name="Insurance", amount=1200.0, category="Insurance", frequency="yearly"),
        ExpenseItem(id="gro", name="Groceries", amount=100.0, category="Food", frequency="weekly"),
        ExpenseItem(id="rent", name="Rent", amount=500.0, category="Housing", frequency="monthly"),
    ]


class TestTotals:
    def test_monthly_equivalents(self, items):
        assert total_monthly_expenses(items) == pytest.approx(1033.0)

    def test_empty(self):
        assert total_monthly_expenses([]) == 0.0


class TestResolve:
    def test_simple_mode_uses_scalar(self, cfg, items):
        assert resolve_monthly_expenses(cfg, 2500.0, items) == 2500.0

    def test_detailed_mode_sums_items(self, cfg, items):
        detailed = cfg.with_overrides(expense_mode="detailed")
        assert resolve_monthly_expenses(detailed, 2500.0, items) == pytest.approx(1033.0)


class TestSeed:
    def test_seeds_base_row(self):
        seeded = seed_detailed_items(2500.0, [])
        assert len(seeded) == 1
        assert seeded[0].name == "Base Expenses (Imported)"
        assert seeded[0].amount == 2500.0
        assert seeded[0].frequency == "monthly"

    def test_existing_items_untouched(self, items):
        assert seed_detailed_items(2500.0, items) == items

    def test_nothing_to_seed(self):
        assert seed_detailed_items(0.0, []) == []


class TestByCategory:
    def test_sorted_with_shares(self, items):
        frame = expenses_by_category(items)
        assert list(frame["category"]) == ["Housing", "Food", "Insurance"]
        assert frame["share"].sum() == pytest.approx(1.0)

    def test_empty_frame(self):
        assert expenses_by_category([]).empty
