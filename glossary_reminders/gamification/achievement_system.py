"""
Achievement System

Fixed, ordered catalogue of one-way achievements evaluated after every
check-in:

- Consistency: first check-in, 3 / 7 / 30 period streaks
- Milestones: 10 and 50 knowledge points

Evaluation is pure. An earned achievement is never cleared, whatever the
inputs, and newly earned ones are reported in catalogue order.
"""

from decimal import Decimal
from typing import Callable, Mapping, NamedTuple
from datetime import datetime
import logging

from glossary_reminders.models.achievement import (
    AchievementId,
    AchievementState,
    AchievementView,
    default_achievements,
)

logger = logging.getLogger(__name__)


class ProgressState(NamedTuple):
    """Cumulative user state the rules look at"""
    streak: int
    knowledge_points: Decimal
    checked_in: bool


class AchievementDefinition(NamedTuple):
    id: AchievementId
    name: str
    description: str
    icon: str
    rule: Callable[[ProgressState], bool]


ACHIEVEMENT_CATALOGUE: tuple[AchievementDefinition, ...] = (
    AchievementDefinition(
        AchievementId.FIRST_CHECK_IN,
        "First Check-In",
        "Checked in for the first time",
        "fa-award",
        lambda s: s.checked_in,
    ),
    AchievementDefinition(
        AchievementId.STREAK_THREE,
        "3-Day Streak",
        "Maintained a 3-day streak",
        "fa-fire",
        lambda s: s.streak >= 3,
    ),
    AchievementDefinition(
        AchievementId.STREAK_SEVEN,
        "7-Day Streak",
        "Maintained a 7-day streak",
        "fa-fire",
        lambda s: s.streak >= 7,
    ),
    AchievementDefinition(
        AchievementId.STREAK_THIRTY,
        "30-Day Streak",
        "Maintained a 30-day streak",
        "fa-crown",
        lambda s: s.streak >= 30,
    ),
    AchievementDefinition(
        AchievementId.KNOWLEDGE_SEEKER,
        "Taalib 'Ilm (طالب العلم)",
        "Earned 10 knowledge points",
        "fa-book",
        lambda s: s.knowledge_points >= 10,
    ),
    AchievementDefinition(
        AchievementId.KNOWLEDGE_MASTER,
        "'Aalim (عالم)",
        "Earned 50 knowledge points",
        "fa-graduation-cap",
        lambda s: s.knowledge_points >= 50,
    ),
)


def evaluate_achievements(
    state: ProgressState,
    achievements: Mapping[AchievementId, AchievementState],
    now: datetime
) -> tuple[dict[AchievementId, AchievementState], list[AchievementDefinition]]:
    """
    Check which achievements `state` unlocks

    Args:
        state: User state after the check-in has been applied
        achievements: User's current achievement states (not modified)
        now: Unlock date recorded for newly earned achievements

    Returns:
        (updated achievement states, newly earned definitions in catalogue order)
    """
    updated = default_achievements()
    updated.update({key: value.model_copy() for key, value in achievements.items()})

    newly_earned = []
    for definition in ACHIEVEMENT_CATALOGUE:
        if updated[definition.id].earned:
            continue
        if definition.rule(state):
            updated[definition.id] = AchievementState(earned=True, date=now)
            newly_earned.append(definition)

    if newly_earned:
        logger.info(f"Unlocked achievements: {', '.join(d.id.value for d in newly_earned)}")

    return updated, newly_earned


def describe_achievements(
    achievements: Mapping[AchievementId, AchievementState]
) -> list[AchievementView]:
    """Full catalogue with the user's earned flag and date for each entry"""
    views = []
    for definition in ACHIEVEMENT_CATALOGUE:
        state = achievements.get(definition.id) or AchievementState()
        views.append(AchievementView(
            id=definition.id,
            name=definition.name,
            description=definition.description,
            icon=definition.icon,
            earned=state.earned,
            date=state.date,
        ))
    return views
