"""
Period Streak and Multiplier Engine

Pure state transition for one check-in, no I/O:

- First check-in ever: streak 1, multiplier 1
- Last check-in fell in the immediately preceding period: streak + 1,
  multiplier x 1.2 (rounded to 3 places, capped at 15)
- Anything older: streak resets to 1, multiplier to 1

All arithmetic is fixed-point Decimal, rounded half-up to 3 places right
after each computation, so long streaks do not accumulate float drift.
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Optional, NamedTuple
from datetime import datetime
import logging

from glossary_reminders.models.period import PeriodWindow

logger = logging.getLogger(__name__)

POINTS_PRECISION = Decimal("0.001")
MULTIPLIER_GROWTH = Decimal("1.2")
MULTIPLIER_CAP = Decimal("15")
BASE_MULTIPLIER = Decimal("1")


class StreakUpdate(NamedTuple):
    streak: int
    multiplier: Decimal
    continued: bool  # True when the previous period was checked into


def round_points(value) -> Decimal:
    """Round to the fixed 3-decimal precision used for points and multipliers"""
    return Decimal(str(value)).quantize(POINTS_PRECISION, rounding=ROUND_HALF_UP)


def next_multiplier(multiplier) -> Decimal:
    """Grow a multiplier by one consecutive period, capped at 15"""
    return min(MULTIPLIER_CAP, round_points(Decimal(str(multiplier)) * MULTIPLIER_GROWTH))


def calculate_streak(
    last_check_in: Optional[datetime],
    streak: int,
    multiplier,
    current: PeriodWindow,
    previous: PeriodWindow
) -> StreakUpdate:
    """
    Compute the streak and multiplier after a check-in in `current`

    Args:
        last_check_in: Instant of the user's previous successful check-in
        streak: Stored streak before this check-in
        multiplier: Stored multiplier before this check-in
        current: Window being checked into
        previous: Window immediately preceding `current`

    Returns:
        StreakUpdate(streak, multiplier, continued)

    Raises:
        ValueError: If `last_check_in` already lies in `current`; duplicate
            check-ins must be rejected before calling this.
    """
    if last_check_in is None:
        return StreakUpdate(1, BASE_MULTIPLIER, False)

    if current.contains(last_check_in):
        raise ValueError("Already checked in for the current period")

    if previous.contains(last_check_in):
        return StreakUpdate(streak + 1, next_multiplier(multiplier), True)

    logger.debug(
        f"Streak gap: last check-in {last_check_in.isoformat()} outside "
        f"{previous.period.value} [{previous.start.isoformat()}, {previous.end.isoformat()})"
    )
    return StreakUpdate(1, BASE_MULTIPLIER, False)
