"""User account database queries"""
import logging
from typing import Optional
from datetime import datetime
import psycopg
from psycopg.types.json import Jsonb

from glossary_reminders.exceptions import DuplicateError, wrap_external_exception
from glossary_reminders.models.user import LeaderboardEntry, User

logger = logging.getLogger(__name__)

USER_COLUMNS = """
    username, password_hash, knowledge_points, streak, multiplier,
    last_check_in, achievements, created_at
"""


def _achievements_json(user: User) -> Jsonb:
    return Jsonb({
        key.value: state.model_dump(mode="json")
        for key, state in user.achievements.items()
    })


class PostgresUserStore:
    """User accounts in the `users` table"""

    def __init__(self, database):
        self.db = database

    async def get_user(self, username: str) -> Optional[User]:
        """Get user by username, None if absent"""
        try:
            async with self.db.connection() as conn:
                async with conn.cursor() as cur:
                    await cur.execute(
                        f"SELECT {USER_COLUMNS} FROM users WHERE username = %s",
                        (username,)
                    )
                    row = await cur.fetchone()
        except psycopg.Error as e:
            raise wrap_external_exception(e, operation="get_user", username=username)

        return User.model_validate(row) if row else None

    async def create_user(self, user: User) -> User:
        """
        Insert a new user

        Raises:
            DuplicateError: If the username is taken
        """
        try:
            async with self.db.connection() as conn:
                async with conn.cursor() as cur:
                    await cur.execute(
                        f"""
                        INSERT INTO users (username, password_hash, knowledge_points, streak,
                                           multiplier, last_check_in, achievements)
                        VALUES (%s, %s, %s, %s, %s, %s, %s)
                        RETURNING {USER_COLUMNS}
                        """,
                        (
                            user.username,
                            user.password_hash,
                            user.knowledge_points,
                            user.streak,
                            user.multiplier,
                            user.last_check_in,
                            _achievements_json(user),
                        )
                    )
                    row = await cur.fetchone()
                await conn.commit()
        except psycopg.errors.UniqueViolation as e:
            raise DuplicateError(
                message=f"Username {user.username} already exists",
                record_type="User",
                key=user.username,
                operation="create_user",
                cause=e,
                user_message="Duplicate username"
            )
        except psycopg.Error as e:
            raise wrap_external_exception(e, operation="create_user", username=user.username)

        logger.info(f"Created user {user.username}")
        return User.model_validate(row)

    async def update_check_in(self, user: User, expected_last_check_in: Optional[datetime]) -> bool:
        """
        Persist check-in results if nobody checked in since we read the user

        Compare-and-set on last_check_in: two concurrent check-ins read the
        same value, only the first UPDATE matches.

        Returns:
            True if the row was updated, False if the precondition failed
        """
        try:
            async with self.db.connection() as conn:
                async with conn.cursor() as cur:
                    await cur.execute(
                        """
                        UPDATE users
                        SET knowledge_points = %s,
                            streak = %s,
                            multiplier = %s,
                            last_check_in = %s,
                            achievements = %s
                        WHERE username = %s
                          AND last_check_in IS NOT DISTINCT FROM %s::timestamptz
                        RETURNING username
                        """,
                        (
                            user.knowledge_points,
                            user.streak,
                            user.multiplier,
                            user.last_check_in,
                            _achievements_json(user),
                            user.username,
                            expected_last_check_in,
                        )
                    )
                    row = await cur.fetchone()
                await conn.commit()
        except psycopg.Error as e:
            raise wrap_external_exception(e, operation="update_check_in", username=user.username)

        return row is not None

    async def top_users(self, limit: int) -> list[LeaderboardEntry]:
        """Users by points descending, ties by insertion order"""
        try:
            async with self.db.connection() as conn:
                async with conn.cursor() as cur:
                    await cur.execute(
                        """
                        SELECT username, knowledge_points, streak, multiplier
                        FROM users
                        ORDER BY knowledge_points DESC, id ASC
                        LIMIT %s
                        """,
                        (limit,)
                    )
                    rows = await cur.fetchall()
        except psycopg.Error as e:
            raise wrap_external_exception(e, operation="top_users")

        return [LeaderboardEntry.model_validate(row) for row in rows]

    async def ping(self) -> bool:
        """Check database reachability"""
        try:
            async with self.db.connection() as conn:
                async with conn.cursor() as cur:
                    await cur.execute("SELECT 1")
                    await cur.fetchone()
            return True
        except Exception as e:
            logger.warning(f"Database ping failed: {e}")
            return False
