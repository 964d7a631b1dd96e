"""
Check-in gamification for glossary reminders

- Period clock: three fixed daily windows in a fixed UTC offset
- Streaks and multipliers across consecutive periods
- Achievements derived from streak and points
- One shared glossary word per period occurrence
"""

from glossary_reminders.gamification.period_clock import (
    current_window, current_period, period_bounds, previous_window, next_window,
)
from glossary_reminders.gamification.streak_system import calculate_streak, next_multiplier, round_points
from glossary_reminders.gamification.achievement_system import evaluate_achievements, describe_achievements
from glossary_reminders.gamification.word_assignment import WordAssignmentStore

__all__ = [
    "current_window",
    "current_period",
    "period_bounds",
    "previous_window",
    "next_window",
    "calculate_streak",
    "next_multiplier",
    "round_points",
    "evaluate_achievements",
    "describe_achievements",
    "WordAssignmentStore",
]
