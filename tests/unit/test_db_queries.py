"""Unit tests for PostgreSQL stores (glossary_reminders/db/queries/)"""
import pytest
from decimal import Decimal
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

import psycopg
import psycopg.errors
from psycopg_pool import PoolTimeout

from glossary_reminders.db.queries import PostgresUserStore, PostgresWordStore
from glossary_reminders.exceptions import DatabaseUnavailableError, DuplicateError
from glossary_reminders.models.achievement import AchievementId
from glossary_reminders.models.period import Period
from glossary_reminders.models.user import User
from glossary_reminders.models.word import PeriodWord

START = datetime(2024, 3, 10, 11, 0, tzinfo=timezone.utc)


@pytest.fixture
def mock_cursor():
    cursor = AsyncMock()
    cursor.fetchone = AsyncMock(return_value=None)
    cursor.fetchall = AsyncMock(return_value=[])
    return cursor


@pytest.fixture
def mock_database(mock_cursor):
    """Database whose connection() yields a connection with `mock_cursor`"""
    conn = MagicMock()
    conn.cursor.return_value.__aenter__.return_value = mock_cursor
    conn.commit = AsyncMock()

    database = MagicMock()
    database.connection.return_value.__aenter__.return_value = conn
    database.conn = conn
    return database


# ============================================================================
# User Store Tests
# ============================================================================

@pytest.mark.asyncio
async def test_get_user_missing(mock_database):
    assert await PostgresUserStore(mock_database).get_user("ghost") is None


@pytest.mark.asyncio
async def test_get_user_parses_row(mock_database, mock_cursor):
    mock_cursor.fetchone.return_value = {
        "username": "amina",
        "password_hash": "x",
        "knowledge_points": Decimal("3.640"),
        "streak": 3,
        "multiplier": Decimal("1.440"),
        "last_check_in": START,
        "achievements": {"firstCheckIn": {"earned": True, "date": START.isoformat()}},
        "created_at": START,
    }

    user = await PostgresUserStore(mock_database).get_user("amina")

    assert user.knowledge_points == Decimal("3.64")
    assert user.achievements[AchievementId.FIRST_CHECK_IN].earned is True


@pytest.mark.asyncio
async def test_create_user_duplicate(mock_database, mock_cursor):
    """Test a unique violation becomes DuplicateError"""
    mock_cursor.execute.side_effect = psycopg.errors.UniqueViolation("duplicate key")

    with pytest.raises(DuplicateError) as exc_info:
        await PostgresUserStore(mock_database).create_user(User(username="amina", password_hash="x"))

    assert exc_info.value.user_message == "Duplicate username"


@pytest.mark.asyncio
async def test_update_check_in_is_conditional(mock_database, mock_cursor):
    """Test the UPDATE is guarded by the previously read last_check_in"""
    user = User(username="amina", password_hash="x", last_check_in=START)

    applied = await PostgresUserStore(mock_database).update_check_in(user, expected_last_check_in=None)

    sql, params = mock_cursor.execute.call_args[0]
    assert "IS NOT DISTINCT FROM" in sql
    assert params[-2:] == ("amina", None)
    assert applied is False
    mock_database.conn.commit.assert_called_once()


@pytest.mark.asyncio
async def test_update_check_in_applied(mock_database, mock_cursor):
    mock_cursor.fetchone.return_value = {"username": "amina"}
    user = User(username="amina", password_hash="x", last_check_in=START)

    assert await PostgresUserStore(mock_database).update_check_in(user, expected_last_check_in=None) is True


@pytest.mark.asyncio
async def test_pool_timeout_is_unavailable(mock_database, mock_cursor):
    mock_cursor.execute.side_effect = PoolTimeout("couldn't get a connection")

    with pytest.raises(DatabaseUnavailableError):
        await PostgresUserStore(mock_database).top_users(10)


@pytest.mark.asyncio
async def test_ping_false_when_down(mock_database, mock_cursor):
    mock_cursor.execute.side_effect = psycopg.OperationalError("connection refused")
    assert await PostgresUserStore(mock_database).ping() is False


# ============================================================================
# Word Store Tests
# ============================================================================

@pytest.mark.asyncio
async def test_insert_period_word_duplicate(mock_database, mock_cursor):
    """Test a second insert for the same occurrence becomes DuplicateError"""
    mock_cursor.execute.side_effect = psycopg.errors.UniqueViolation("duplicate key")

    with pytest.raises(DuplicateError):
        await PostgresWordStore(mock_database).insert_period_word(
            PeriodWord(period=Period.MORNING, period_start=START, word="Sabr")
        )


@pytest.mark.asyncio
async def test_find_period_word(mock_database, mock_cursor):
    mock_cursor.fetchone.return_value = {"period": "morning", "period_start": START, "word": "Sabr"}

    word = await PostgresWordStore(mock_database).find_period_word(Period.MORNING, START, START)

    assert word == PeriodWord(period=Period.MORNING, period_start=START, word="Sabr")
    assert mock_cursor.execute.call_args[0][1] == ("morning", START, START)


@pytest.mark.asyncio
async def test_recent_words_zero_limit_skips_query(mock_database, mock_cursor):
    assert await PostgresWordStore(mock_database).recent_words(0) == []
    mock_cursor.execute.assert_not_called()
