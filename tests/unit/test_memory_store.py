"""Unit tests for the in-memory stores (glossary_reminders/db/memory_store.py)"""
import pytest
from decimal import Decimal
from datetime import datetime, timezone, timedelta

from glossary_reminders.exceptions import DuplicateError
from glossary_reminders.models.period import Period
from glossary_reminders.models.user import User
from glossary_reminders.models.word import PeriodWord

START = datetime(2024, 3, 10, 11, 0, tzinfo=timezone.utc)


@pytest.mark.asyncio
async def test_user_round_trip_is_a_copy(user_store):
    """Test callers cannot mutate stored users through returned objects"""
    await user_store.create_user(User(username="amina", password_hash="x"))

    user = await user_store.get_user("amina")
    user.streak = 99

    assert (await user_store.get_user("amina")).streak == 0


@pytest.mark.asyncio
async def test_duplicate_username(user_store):
    await user_store.create_user(User(username="amina", password_hash="x"))
    with pytest.raises(DuplicateError):
        await user_store.create_user(User(username="amina", password_hash="y"))


@pytest.mark.asyncio
async def test_update_check_in_compare_and_set(user_store):
    """Test the update applies only when last_check_in is unchanged"""
    await user_store.create_user(User(username="amina", password_hash="x"))
    user = await user_store.get_user("amina")
    updated = user.model_copy(update={"knowledge_points": Decimal("1"), "streak": 1, "last_check_in": START})

    assert await user_store.update_check_in(updated, expected_last_check_in=None) is True
    assert await user_store.update_check_in(updated, expected_last_check_in=None) is False
    assert (await user_store.get_user("amina")).knowledge_points == Decimal("1")


@pytest.mark.asyncio
async def test_update_check_in_missing_user(user_store):
    assert await user_store.update_check_in(User(username="ghost", password_hash="x"), None) is False


@pytest.mark.asyncio
async def test_duplicate_period_word(word_store):
    """Test (period, period_start) is unique"""
    await word_store.insert_period_word(PeriodWord(period=Period.MORNING, period_start=START, word="Sabr"))
    with pytest.raises(DuplicateError):
        await word_store.insert_period_word(PeriodWord(period=Period.MORNING, period_start=START, word="Shukr"))


@pytest.mark.asyncio
async def test_find_period_word_by_window(word_store):
    await word_store.insert_period_word(PeriodWord(period=Period.MORNING, period_start=START, word="Sabr"))

    found = await word_store.find_period_word(Period.MORNING, START, START + timedelta(hours=9))
    assert found.word == "Sabr"
    assert await word_store.find_period_word(Period.AFTERNOON, START, START + timedelta(hours=9)) is None
    assert await word_store.find_period_word(
        Period.MORNING, START + timedelta(days=1), START + timedelta(days=1, hours=9)
    ) is None


@pytest.mark.asyncio
async def test_recent_words_zero_limit(word_store):
    await word_store.insert_period_word(PeriodWord(period=Period.MORNING, period_start=START, word="Sabr"))
    assert await word_store.recent_words(0) == []
