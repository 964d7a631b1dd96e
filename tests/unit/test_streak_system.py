"""Unit tests for Streak System (glossary_reminders/gamification/streak_system.py)"""
import pytest
from decimal import Decimal
from datetime import datetime, timezone, timedelta

from glossary_reminders.gamification.period_clock import current_window, previous_window
from glossary_reminders.gamification.streak_system import (
    calculate_streak,
    next_multiplier,
    round_points,
    MULTIPLIER_CAP,
)

LOCAL = timezone(timedelta(hours=-5))


@pytest.fixture
def windows():
    """Afternoon window on 2024-03-10 and the morning before it"""
    current = current_window(datetime(2024, 3, 10, 16, 0, tzinfo=LOCAL), -5)
    return current, previous_window(current, -5)


# ============================================================================
# Rounding & Multiplier Tests
# ============================================================================

def test_round_points_half_up():
    """Test rounding is half-up at 3 decimal places"""
    assert round_points(Decimal("1.0005")) == Decimal("1.001")
    assert round_points(Decimal("1.0004")) == Decimal("1.000")
    assert round_points(2.4883) == Decimal("2.488")


def test_next_multiplier_growth():
    """Test the multiplier grows by 1.2 per consecutive period"""
    assert next_multiplier(Decimal("1")) == Decimal("1.2")
    assert next_multiplier(Decimal("1.2")) == Decimal("1.44")
    assert next_multiplier(Decimal("1.44")) == Decimal("1.728")
    assert next_multiplier(Decimal("1.728")) == Decimal("2.074")


def test_next_multiplier_capped():
    """Test the multiplier never exceeds 15"""
    assert next_multiplier(Decimal("14")) == MULTIPLIER_CAP
    assert next_multiplier(MULTIPLIER_CAP) == MULTIPLIER_CAP


def test_multiplier_reaches_cap_and_stays():
    """Test repeated growth converges on the cap without drift"""
    multiplier = Decimal("1")
    for _ in range(40):
        multiplier = next_multiplier(multiplier)
        assert multiplier <= MULTIPLIER_CAP
        assert multiplier == round_points(multiplier)
    assert multiplier == MULTIPLIER_CAP


# ============================================================================
# Streak Transition Tests
# ============================================================================

def test_first_check_in_starts_streak(windows):
    """Test first ever check-in gives streak 1 and multiplier 1"""
    current, previous = windows
    update = calculate_streak(None, 0, Decimal("1"), current, previous)

    assert update.streak == 1
    assert update.multiplier == Decimal("1")
    assert update.continued is False


def test_previous_period_continues_streak(windows):
    """Test a check-in in the immediately preceding period extends the streak"""
    current, previous = windows
    last = previous.start + timedelta(hours=1)

    update = calculate_streak(last, 4, Decimal("2.074"), current, previous)

    assert update.streak == 5
    assert update.multiplier == Decimal("2.489")
    assert update.continued is True


def test_last_instant_of_previous_period_counts(windows):
    """Test the very end of the previous window still continues the streak"""
    current, previous = windows
    last = previous.end - timedelta(microseconds=1)

    update = calculate_streak(last, 1, Decimal("1"), current, previous)
    assert update.streak == 2


def test_gap_resets_streak(windows):
    """Test skipping a period resets streak and multiplier"""
    current, previous = windows
    last = previous.start - timedelta(minutes=1)

    update = calculate_streak(last, 12, Decimal("7.43"), current, previous)

    assert update.streak == 1
    assert update.multiplier == Decimal("1")
    assert update.continued is False


def test_same_period_rejected(windows):
    """Test a duplicate check-in in the current window is refused"""
    current, previous = windows
    with pytest.raises(ValueError):
        calculate_streak(current.start, 3, Decimal("1.44"), current, previous)


def test_future_check_in_resets(windows):
    """Test a stored check-in after the current window does not continue anything"""
    current, previous = windows
    update = calculate_streak(current.end + timedelta(hours=1), 3, Decimal("1.44"), current, previous)
    assert update.streak == 1
