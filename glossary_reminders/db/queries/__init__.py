"""
Database queries - PostgreSQL store implementations.

Module organization:
- users.py: User accounts, check-in compare-and-set, leaderboard
- words.py: Period word assignments
"""

from glossary_reminders.db.queries.users import PostgresUserStore
from glossary_reminders.db.queries.words import PostgresWordStore

__all__ = [
    "PostgresUserStore",
    "PostgresWordStore",
]
