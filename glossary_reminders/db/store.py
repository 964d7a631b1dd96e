"""
Store contracts used by the services

Two implementations exist: PostgreSQL (glossary_reminders.db.queries) and
in-memory (glossary_reminders.db.memory_store). Both enforce uniqueness at
the store level and offer conditional writes as the only concurrency
primitive:

- usernames are unique; create_user raises DuplicateError on collision
- (period, period_start) is unique; insert_period_word raises DuplicateError
- update_check_in only applies if last_check_in still holds the value the
  caller read (compare-and-set)
"""
from typing import Optional, Protocol
from datetime import datetime

from glossary_reminders.models.period import Period
from glossary_reminders.models.user import LeaderboardEntry, User
from glossary_reminders.models.word import PeriodWord


class UserStore(Protocol):
    async def get_user(self, username: str) -> Optional[User]: ...

    async def create_user(self, user: User) -> User: ...

    async def update_check_in(self, user: User, expected_last_check_in: Optional[datetime]) -> bool: ...

    async def top_users(self, limit: int) -> list[LeaderboardEntry]: ...

    async def ping(self) -> bool: ...


class WordStore(Protocol):
    async def find_period_word(self, period: Period, start: datetime, end: datetime) -> Optional[PeriodWord]: ...

    async def insert_period_word(self, period_word: PeriodWord) -> PeriodWord: ...

    async def recent_words(self, limit: int) -> list[PeriodWord]: ...

    async def ping(self) -> bool: ...
