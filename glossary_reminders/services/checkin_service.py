"""
CheckInService - Check-in Orchestration

Runs one check-in end to end:

1. Load the user
2. Work out the current period window
3. Reject a second check-in within the same window
4. Get (or assign) the period's word
5. Advance streak and multiplier
6. Award points (= new multiplier)
7. Record the check-in instant
8. Evaluate achievements on the updated state
9. Persist with a compare-and-set on last_check_in

Everything before step 9 is in-memory; a failure anywhere leaves the stored
user untouched and the caller retries the whole check-in.
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from glossary_reminders.exceptions import (
    AlreadyCheckedInError,
    ConcurrentUpdateError,
    GlossaryUnavailableError,
    RecordNotFoundError,
    WordUnavailableError,
)
from glossary_reminders.gamification.achievement_system import ProgressState, evaluate_achievements
from glossary_reminders.gamification.period_clock import current_window, previous_window
from glossary_reminders.gamification.streak_system import calculate_streak, round_points
from glossary_reminders.models.checkin import CheckInResult, Eligibility
from glossary_reminders.models.user import User
from glossary_reminders.observability.metrics import (
    achievements_unlocked_total,
    checkins_total,
    points_awarded_total,
)

logger = logging.getLogger(__name__)


class CheckInService:
    """
    Service for period check-ins.

    Responsibilities:
    - At most one scoring check-in per user per period
    - Streak, multiplier and points bookkeeping
    - Achievement unlocking
    - Eligibility queries for clients
    """

    def __init__(self, user_store, word_assignment, utc_offset_hours: Optional[int] = None):
        """
        Initialize CheckInService.

        Args:
            user_store: UserStore implementation
            word_assignment: WordAssignmentStore for the period's word
            utc_offset_hours: Override for the period clock's fixed offset
        """
        self.users = user_store
        self.words = word_assignment
        self.utc_offset_hours = utc_offset_hours

    async def _load_user(self, username: str) -> User:
        user = await self.users.get_user(username)
        if user is None:
            raise RecordNotFoundError(
                message=f"User {username} not found",
                record_type="User",
                record_id=username,
                username=username,
                operation="check_in"
            )
        return user

    async def check_in(self, username: str, now: Optional[datetime] = None) -> CheckInResult:
        """
        Check a user in for the current period.

        Args:
            username: Authenticated username
            now: Check-in instant (defaults to the current time)

        Returns:
            CheckInResult with updated totals and newly earned achievements

        Raises:
            RecordNotFoundError: User does not exist
            AlreadyCheckedInError: User already checked in this period
            WordUnavailableError: No word could be produced for the period
            ConcurrentUpdateError: Lost a write race that was not a duplicate check-in
        """
        if now is None:
            now = datetime.now(timezone.utc)

        user = await self._load_user(username)
        window = current_window(now, self.utc_offset_hours)

        if user.last_check_in is not None and window.contains(user.last_check_in):
            checkins_total.labels(result="already_checked_in").inc()
            raise AlreadyCheckedInError(stats=user.stats(), username=username, operation="check_in")

        try:
            period_word = await self.words.get_or_create_word(window)
        except GlossaryUnavailableError as e:
            checkins_total.labels(result="word_unavailable").inc()
            raise WordUnavailableError(username=username, operation="check_in", cause=e)

        update = calculate_streak(
            user.last_check_in,
            user.streak,
            user.multiplier,
            current=window,
            previous=previous_window(window, self.utc_offset_hours),
        )

        points_earned = round_points(update.multiplier)
        knowledge_points = round_points(user.knowledge_points + points_earned)

        progress = ProgressState(
            streak=update.streak,
            knowledge_points=knowledge_points,
            checked_in=True,
        )
        achievements, newly_earned = evaluate_achievements(progress, user.achievements, now)

        updated = user.model_copy(update={
            "knowledge_points": knowledge_points,
            "streak": update.streak,
            "multiplier": update.multiplier,
            "last_check_in": now,
            "achievements": achievements,
        })

        if not await self.users.update_check_in(updated, expected_last_check_in=user.last_check_in):
            await self._resolve_lost_update(username, window)

        checkins_total.labels(result="success").inc()
        points_awarded_total.inc(float(points_earned))
        for definition in newly_earned:
            achievements_unlocked_total.labels(achievement=definition.id.value).inc()

        logger.info(
            f"Check-in for {username} in {window.period.value}: "
            f"+{points_earned} points, streak {update.streak}, multiplier {update.multiplier}"
        )

        return CheckInResult(
            username=username,
            points=knowledge_points,
            streak=update.streak,
            multiplier=update.multiplier,
            points_earned=points_earned,
            new_achievements=[d.name for d in newly_earned],
            word=period_word.word,
            period=window.period,
            checked_in_at=now,
        )

    async def _resolve_lost_update(self, username: str, window) -> None:
        """Explain why the compare-and-set missed; always raises"""
        fresh = await self._load_user(username)
        if fresh.last_check_in is not None and window.contains(fresh.last_check_in):
            checkins_total.labels(result="already_checked_in").inc()
            raise AlreadyCheckedInError(stats=fresh.stats(), username=username, operation="check_in")

        checkins_total.labels(result="conflict").inc()
        raise ConcurrentUpdateError(username=username, operation="check_in")

    async def eligibility(self, username: str, now: Optional[datetime] = None) -> Eligibility:
        """
        Report whether the user can check in now.

        Having already checked in is a state, not an error.
        """
        if now is None:
            now = datetime.now(timezone.utc)

        user = await self._load_user(username)
        window = current_window(now, self.utc_offset_hours)
        checked_in = user.last_check_in is not None and window.contains(user.last_check_in)

        return Eligibility(
            eligible=not checked_in,
            checked_in=checked_in,
            points=user.knowledge_points,
            streak=user.streak,
            multiplier=user.multiplier,
            period=window.period,
            next_boundary=window.end,
            last_check_in=user.last_check_in,
        )
