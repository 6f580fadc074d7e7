"""
Progress layer: points/levels/ranks, a six-quest journey, and a money archetype.

Everything here is a pure function of portfolio totals and runway, so it can be
recomputed on every render.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Callable, List, Tuple

import pandas as pd

RANKS: Tuple[Tuple[int, str], ...] = (
    (500, "Money Master"),
    (300, "Financial Guru"),
    (200, "Budget Pro"),
    (100, "Saver"),
    (50, "Starter"),
)

JOURNEY_STAGES: Tuple[str, ...] = (
    "The Novice",
    "The Seeker",
    "The Warrior",
    "The Guardian",
    "The Sage",
    "The Master",
    "The Legend",
)


@dataclass
class GamificationProfile:
    points: float
    level: int
    rank: str
    achievements: List[str] = field(default_factory=list)

    @property
    def next_level_points(self) -> int:
        return self.level * 100


def gamification_points(
    net_worth: float,
    runway_months: float,
    snapshot_count: int,
    total_assets: float,
) -> float:
    points = 0.0
    if net_worth > 0:
        points += min(net_worth / 1000, 100)
    if runway_months > 0:
        points += min(runway_months * 10, 120)
    points += snapshot_count * 25
    # asset tiers stack
    if total_assets > 10000:
        points += 50
    if total_assets > 50000:
        points += 100
    if total_assets > 100000:
        points += 200
    return points


def rank_for(points: float) -> str:
    for minimum, name in RANKS:
        if points >= minimum:
            return name
    return "Beginner"


def gamification_profile(
    net_worth: float,
    runway_months: float,
    snapshot_count: int,
    total_assets: float,
) -> GamificationProfile:
    points = gamification_points(net_worth, runway_months, snapshot_count, total_assets)

    achievements = []
    if net_worth > 0:
        achievements.append("Positive Net Worth")
    if runway_months >= 6:
        achievements.append("6+ Month Runway")
    if snapshot_count >= 3:
        achievements.append("Consistent Tracker")
    if total_assets >= 50000:
        achievements.append("Wealth Builder")

    return GamificationProfile(
        points=round(points),
        level=math.floor(points / 100) + 1,
        rank=rank_for(points),
        achievements=achievements,
    )


# --------------------------------------------------------------------------
# Quest journey
# --------------------------------------------------------------------------

@dataclass(frozen=True)
class Quest:
    id: str
    title: str
    description: str
    is_complete: bool
    progress: float  # 0..100
    reward_points: int


@dataclass
class QuestJourney:
    quests: List[Quest]

    @property
    def completed(self) -> int:
        return sum(1 for q in self.quests if q.is_complete)

    @property
    def progress(self) -> float:
        return self.completed / len(self.quests) * 100 if self.quests else 0.0

    @property
    def stage(self) -> str:
        return JOURNEY_STAGES[min(self.completed, len(JOURNEY_STAGES) - 1)]

    def to_dataframe(self) -> pd.DataFrame:
        return pd.DataFrame([q.__dict__ for q in self.quests])


def quest_journey(
    net_worth: float,
    runway_months: float,
    total_assets: float,
    total_liabilities: float,
    payments_cleared: int,
    total_payments: int,
) -> QuestJourney:
    quests = []

    payment_progress = payments_cleared / total_payments * 100 if total_payments > 0 else 100.0
    quests.append(Quest(
        "clear-obligations",
        "The Path of Liberation",
        f"Clear all {total_payments} monthly payment obligations",
        total_payments > 0 and payments_cleared == total_payments,
        payment_progress,
        50,
    ))

    if net_worth > 0:
        worth_progress = 100.0
    elif total_liabilities > 0:
        worth_progress = max(0.0, min((net_worth + total_liabilities) / total_liabilities * 100, 99.0))
    else:
        worth_progress = 0.0
    quests.append(Quest(
        "positive-worth",
        "Cross the Threshold of Prosperity",
        "Achieve positive net worth",
        net_worth > 0,
        worth_progress,
        100,
    ))

    quests.append(Quest(
        "three-month-shield",
        "Forge the Shield of Security",
        "Build a 3-month financial runway",
        runway_months >= 3,
        min(runway_months / 3 * 100, 100.0),
        150,
    ))
    quests.append(Quest(
        "six-month-fortress",
        "Construct the Fortress of Freedom",
        "Build a 6-month financial runway",
        runway_months >= 6,
        min(runway_months / 6 * 100, 100.0),
        250,
    ))

    debt_ratio = total_liabilities / total_assets if total_assets > 0 else 1.0
    quests.append(Quest(
        "debt-slayer",
        "Slay the Dragon of Debt",
        "Reduce debt to less than 30% of assets",
        total_assets > 0 and debt_ratio < 0.3,
        min(max(0.0, (1 - debt_ratio) * 100), 100.0),
        200,
    ))

    quests.append(Quest(
        "wealth-master",
        "Ascend to Wealth Mastery",
        "Accumulate $100,000 in total assets",
        total_assets >= 100000,
        min(total_assets / 100000 * 100, 100.0),
        500,
    ))
    return QuestJourney(quests)


# --------------------------------------------------------------------------
# Archetype
# --------------------------------------------------------------------------

@dataclass(frozen=True)
class Archetype:
    name: str
    description: str
    core_motivation: str
    growth_path: str


@dataclass(frozen=True)
class ArchetypeInputs:
    total_assets: float
    total_liabilities: float
    runway_months: float
    monthly_expenses: float
    cash_balance: float
    investment_balance: float
    account_count: int

    @property
    def net_worth(self) -> float:
        return self.total_assets - self.total_liabilities

    def ratio(self, amount: float) -> float:
        return amount / self.total_assets if self.total_assets > 0 else 0.0

    @property
    def debt_ratio(self) -> float:
        return self.ratio(self.total_liabilities)


def _guardian(x: ArchetypeInputs) -> bool:
    return x.runway_months >= 6 and x.debt_ratio < 0.2 and x.ratio(x.cash_balance) > 0.6


def _warrior(x: ArchetypeInputs) -> bool:
    return (
        x.debt_ratio < 0.3 and x.runway_months >= 3
        and x.net_worth > 0 and x.total_liabilities > 5000
    )


def _builder(x: ArchetypeInputs) -> bool:
    return x.account_count > 5 and x.net_worth > 0 and x.debt_ratio < 0.4 and x.runway_months >= 3


def _adventurer(x: ArchetypeInputs) -> bool:
    return x.ratio(x.investment_balance) > 0.4 and x.debt_ratio > 0.3


def _alchemist(x: ArchetypeInputs) -> bool:
    return x.total_assets > 50000 and x.debt_ratio > 0.5 and x.net_worth > 0


def _seeker(x: ArchetypeInputs) -> bool:
    return x.net_worth < 5000 or x.runway_months < 3


def _monk(x: ArchetypeInputs) -> bool:
    return x.monthly_expenses < 2000 and x.net_worth > 10000 and x.debt_ratio < 0.1


# First match wins.
ARCHETYPE_RULES: Tuple[Tuple[Callable[[ArchetypeInputs], bool], Archetype], ...] = (
    (_guardian, Archetype(
        "The Guardian",
        "Protector of stability who builds savings brick by brick.",
        "Safety and protection from uncertainty",
        "Balance security with calculated risks.",
    )),
    (_warrior, Archetype(
        "The Warrior",
        "Conqueror of debt; every dollar goes to the fight for freedom.",
        "Freedom through paying off obligations",
        "Celebrate milestones and enjoy the journey.",
    )),
    (_builder, Archetype(
        "The Builder",
        "Architect of prosperity with a balanced, diversified base.",
        "Lasting prosperity through careful construction",
        "Build higher with risks that match your values.",
    )),
    (_adventurer, Archetype(
        "The Adventurer",
        "Explorer of opportunity, comfortable with investment risk.",
        "Growth and expansion",
        "Build a safety net before the next leap.",
    )),
    (_alchemist, Archetype(
        "The Alchemist",
        "Uses leverage to turn borrowed money into owned wealth.",
        "Turning resources into compounding returns",
        "Learn which opportunities to decline.",
    )),
    (_seeker, Archetype(
        "The Seeker",
        "At the start of the journey and still tracking every step.",
        "Finding stability and clarity",
        "Focus on progress, not perfection.",
    )),
    (_monk, Archetype(
        "The Monk",
        "Grows wealth by needing less rather than earning more.",
        "Freedom from consumer culture",
        "Put saved money to deliberate use.",
    )),
)

DEFAULT_ARCHETYPE = Archetype(
    "The Strategist",
    "Master of balance; optimal means sustainable.",
    "Consistent progress toward financial goals",
    "Push your boundaries on purpose.",
)


def financial_archetype(inputs: ArchetypeInputs) -> Archetype:
    for rule, archetype in ARCHETYPE_RULES:
        if rule(inputs):
            return archetype
    return DEFAULT_ARCHETYPE
