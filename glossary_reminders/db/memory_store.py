"""
In-memory stores

Used with STORAGE_BACKEND=memory for local development and by the test
suite. Nothing is persisted across restarts. Each write checks and mutates
without awaiting in between, so under asyncio a write is atomic and the
same uniqueness and compare-and-set guarantees as PostgreSQL hold within a
single process.
"""

import logging
from typing import Optional
from datetime import datetime

from glossary_reminders.exceptions import DuplicateError
from glossary_reminders.models.period import Period
from glossary_reminders.models.user import LeaderboardEntry, User
from glossary_reminders.models.word import PeriodWord

logger = logging.getLogger(__name__)


class InMemoryUserStore:
    """Temporary in-memory store for user accounts"""

    def __init__(self):
        # Insertion order doubles as the leaderboard tie-breaker
        self._users: dict[str, User] = {}
        logger.warning("InMemoryUserStore initialized - users are NOT persisted!")

    async def get_user(self, username: str) -> Optional[User]:
        user = self._users.get(username)
        return user.model_copy(deep=True) if user else None

    async def create_user(self, user: User) -> User:
        if user.username in self._users:
            raise DuplicateError(
                message=f"Username {user.username} already exists",
                record_type="User",
                key=user.username,
                operation="create_user",
                user_message="Duplicate username"
            )
        self._users[user.username] = user.model_copy(deep=True)
        logger.debug(f"Saved user {user.username} to memory store (NOT PERSISTED)")
        return user.model_copy(deep=True)

    async def update_check_in(self, user: User, expected_last_check_in: Optional[datetime]) -> bool:
        stored = self._users.get(user.username)
        if stored is None or stored.last_check_in != expected_last_check_in:
            return False
        self._users[user.username] = stored.model_copy(update={
            "knowledge_points": user.knowledge_points,
            "streak": user.streak,
            "multiplier": user.multiplier,
            "last_check_in": user.last_check_in,
            "achievements": {k: v.model_copy() for k, v in user.achievements.items()},
        })
        return True

    async def top_users(self, limit: int) -> list[LeaderboardEntry]:
        # sorted() is stable, so equal points keep insertion order
        ranked = sorted(self._users.values(), key=lambda u: u.knowledge_points, reverse=True)
        return [
            LeaderboardEntry(
                username=u.username,
                knowledge_points=u.knowledge_points,
                streak=u.streak,
                multiplier=u.multiplier,
            )
            for u in ranked[:limit]
        ]

    async def ping(self) -> bool:
        return True


class InMemoryWordStore:
    """Temporary in-memory store for period words"""

    def __init__(self):
        self._words: dict[tuple[Period, datetime], PeriodWord] = {}
        logger.warning("InMemoryWordStore initialized - period words are NOT persisted!")

    async def find_period_word(self, period: Period, start: datetime, end: datetime) -> Optional[PeriodWord]:
        matches = [
            w for (p, period_start), w in self._words.items()
            if p == period and start <= period_start < end
        ]
        return min(matches, key=lambda w: w.period_start) if matches else None

    async def insert_period_word(self, period_word: PeriodWord) -> PeriodWord:
        key = (period_word.period, period_word.period_start)
        if key in self._words:
            raise DuplicateError(
                message=f"Word already assigned for {period_word.period.value} at {period_word.period_start.isoformat()}",
                record_type="PeriodWord",
                key=(period_word.period.value, period_word.period_start.isoformat()),
                operation="insert_period_word"
            )
        stored = period_word.model_copy(update={"persisted": True})
        self._words[key] = stored
        return stored

    async def recent_words(self, limit: int) -> list[PeriodWord]:
        if limit <= 0:
            return []
        ordered = sorted(self._words.values(), key=lambda w: w.period_start, reverse=True)
        return ordered[:limit]

    async def ping(self) -> bool:
        return True
