"""Period word database queries"""
import logging
from typing import Optional
from datetime import datetime
import psycopg

from glossary_reminders.exceptions import DuplicateError, wrap_external_exception
from glossary_reminders.models.period import Period
from glossary_reminders.models.word import PeriodWord

logger = logging.getLogger(__name__)


class PostgresWordStore:
    """Period words in the `period_words` table, unique on (period, period_start)"""

    def __init__(self, database):
        self.db = database

    async def find_period_word(self, period: Period, start: datetime, end: datetime) -> Optional[PeriodWord]:
        """Get the word whose period_start falls in [start, end), earliest first"""
        try:
            async with self.db.connection() as conn:
                async with conn.cursor() as cur:
                    await cur.execute(
                        """
                        SELECT period, period_start, word
                        FROM period_words
                        WHERE period = %s
                          AND period_start >= %s
                          AND period_start < %s
                        ORDER BY period_start ASC
                        LIMIT 1
                        """,
                        (period.value, start, end)
                    )
                    row = await cur.fetchone()
        except psycopg.Error as e:
            raise wrap_external_exception(
                e, operation="find_period_word", context={"period": period.value}
            )

        return PeriodWord.model_validate(row) if row else None

    async def insert_period_word(self, period_word: PeriodWord) -> PeriodWord:
        """
        Insert the word for a period occurrence

        Raises:
            DuplicateError: If a word already exists for (period, period_start)
        """
        try:
            async with self.db.connection() as conn:
                async with conn.cursor() as cur:
                    await cur.execute(
                        """
                        INSERT INTO period_words (period, period_start, word)
                        VALUES (%s, %s, %s)
                        RETURNING period, period_start, word
                        """,
                        (period_word.period.value, period_word.period_start, period_word.word)
                    )
                    row = await cur.fetchone()
                await conn.commit()
        except psycopg.errors.UniqueViolation as e:
            raise DuplicateError(
                message=f"Word already assigned for {period_word.period.value} at {period_word.period_start.isoformat()}",
                record_type="PeriodWord",
                key=(period_word.period.value, period_word.period_start.isoformat()),
                operation="insert_period_word",
                cause=e
            )
        except psycopg.Error as e:
            raise wrap_external_exception(
                e, operation="insert_period_word", context={"period": period_word.period.value}
            )

        return PeriodWord.model_validate(row)

    async def recent_words(self, limit: int) -> list[PeriodWord]:
        """Most recently assigned words, newest first"""
        if limit <= 0:
            return []
        try:
            async with self.db.connection() as conn:
                async with conn.cursor() as cur:
                    await cur.execute(
                        """
                        SELECT period, period_start, word
                        FROM period_words
                        ORDER BY period_start DESC
                        LIMIT %s
                        """,
                        (limit,)
                    )
                    rows = await cur.fetchall()
        except psycopg.Error as e:
            raise wrap_external_exception(e, operation="recent_words")

        return [PeriodWord.model_validate(row) for row in rows]

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
