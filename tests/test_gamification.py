"""
Tests for points/levels, the quest journey, and archetype rules.
"""

import pytest

from insights.gamification import (
    ArchetypeInputs,
    financial_archetype,
    gamification_points,
    gamification_profile,
    quest_journey,
    rank_for,
)


class TestProfile:
    def test_points_level_rank(self):
        profile = gamification_profile(net_worth=50000, runway_months=6, snapshot_count=2, total_assets=60000)
        # 50 + 60 + 50 + (50 + 100)
        assert profile.points == 310
        assert profile.level == 4
        assert profile.rank == "Financial Guru"
        assert profile.next_level_points == 400
        assert profile.achievements == ["Positive Net Worth", "6+ Month Runway", "Wealth Builder"]

    def test_caps(self):
        assert gamification_points(10_000_000, 100, 0, 0) == 220

    def test_fresh_user(self):
        profile = gamification_profile(-100, 0, 0, 0)
        assert profile.points == 0
        assert profile.level == 1
        assert profile.rank == "Beginner"
        assert profile.achievements == []

    @pytest.mark.parametrize("points,rank", [
        (49, "Beginner"), (50, "Starter"), (100, "Saver"), (200, "Budget Pro"),
        (300, "Financial Guru"), (500, "Money Master"),
    ])
    def test_rank_thresholds(self, points, rank):
        assert rank_for(points) == rank


class TestQuestJourney:
    def test_legend(self):
        journey = quest_journey(140000, 6, 150000, 10000, 2, 2)
        assert journey.completed == 6
        assert journey.stage == "The Legend"
        assert journey.progress == 100

    def test_novice(self):
        journey = quest_journey(-5000, 0, 0, 5000, 0, 0)
        quests = {q.id: q for q in journey.quests}
        assert journey.completed == 0
        assert journey.stage == "The Novice"
        assert quests["clear-obligations"].progress == 100
        assert not quests["clear-obligations"].is_complete
        assert quests["positive-worth"].progress == 0

    def test_partial_progress(self):
        journey = quest_journey(2000, 1.5, 20000, 18000, 1, 4)
        quests = {q.id: q for q in journey.quests}
        assert quests["clear-obligations"].progress == 25
        assert quests["three-month-shield"].progress == pytest.approx(50)
        assert quests["wealth-master"].progress == pytest.approx(20)
        assert journey.stage == "The Seeker"
        assert len(journey.to_dataframe()) == 6


class TestArchetype:
    def _inputs(self, **kw):
        base = dict(total_assets=40000, total_liabilities=12000, runway_months=4,
                    monthly_expenses=3000, cash_balance=10000, investment_balance=10000,
                    account_count=3)
        base.update(kw)
        return ArchetypeInputs(**base)

    def test_default_strategist(self):
        assert financial_archetype(self._inputs()).name == "The Strategist"

    def test_guardian(self):
        x = self._inputs(total_assets=100000, cash_balance=70000, total_liabilities=0, runway_months=12)
        assert financial_archetype(x).name == "The Guardian"

    def test_seeker(self):
        x = self._inputs(total_assets=1000, cash_balance=1000, total_liabilities=0, runway_months=1)
        assert financial_archetype(x).name == "The Seeker"

    def test_warrior(self):
        x = self._inputs(total_assets=40000, total_liabilities=8000)
        assert financial_archetype(x).name == "The Warrior"

    def test_rule_order(self):
        # qualifies as both Guardian and Monk; Guardian is checked first
        x = self._inputs(total_assets=100000, cash_balance=70000, total_liabilities=0,
                         runway_months=12, monthly_expenses=1500)
        assert financial_archetype(x).name == "The Guardian"
