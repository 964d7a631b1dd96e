"""Unit tests for the period clock (glossary_reminders/gamification/period_clock.py)"""
import pytest
from datetime import datetime, timezone, timedelta

from glossary_reminders.gamification.period_clock import (
    current_window,
    current_period,
    period_bounds,
    previous_window,
    next_window,
)
from glossary_reminders.models.period import Period

LOCAL = timezone(timedelta(hours=-5))


def local(day, hour, minute=0, second=0, microsecond=0):
    return datetime(2024, 3, day, hour, minute, second, microsecond, tzinfo=LOCAL)


# ============================================================================
# Current Period Tests
# ============================================================================

@pytest.mark.parametrize("hour,expected", [
    (0, Period.NIGHT),
    (5, Period.NIGHT),
    (6, Period.MORNING),
    (14, Period.MORNING),
    (15, Period.AFTERNOON),
    (19, Period.AFTERNOON),
    (20, Period.NIGHT),
    (23, Period.NIGHT),
])
def test_current_period_by_local_hour(hour, expected):
    """Test each local hour maps to the right period"""
    assert current_period(local(10, hour, 30), utc_offset_hours=-5) == expected


def test_boundaries_belong_to_the_starting_period():
    """Test a window includes its start and excludes its end"""
    assert current_period(local(10, 15), utc_offset_hours=-5) == Period.AFTERNOON
    assert current_period(local(10, 14, 59, 59, 999999), utc_offset_hours=-5) == Period.MORNING
    assert current_period(local(10, 6), utc_offset_hours=-5) == Period.MORNING
    assert current_period(local(10, 20), utc_offset_hours=-5) == Period.NIGHT


def test_current_window_bounds_are_utc():
    """Test morning window bounds for a UTC-5 clock"""
    window = current_window(local(10, 7, 30), utc_offset_hours=-5)

    assert window.period == Period.MORNING
    assert window.start == datetime(2024, 3, 10, 11, 0, tzinfo=timezone.utc)
    assert window.end == datetime(2024, 3, 10, 20, 0, tzinfo=timezone.utc)
    assert window.start.tzinfo == timezone.utc


def test_night_window_spans_midnight():
    """Test an early-morning instant falls in the night that began the previous evening"""
    window = current_window(local(10, 2), utc_offset_hours=-5)

    assert window.period == Period.NIGHT
    assert window.start == local(9, 20)
    assert window.end == local(10, 6)


def test_same_instant_in_any_timezone_gives_same_window():
    """Test input timezone does not change the result"""
    instant = local(10, 16)
    as_utc = instant.astimezone(timezone.utc)
    as_tokyo = instant.astimezone(timezone(timedelta(hours=9)))

    assert current_window(instant, -5) == current_window(as_utc, -5) == current_window(as_tokyo, -5)


def test_windows_partition_the_day():
    """Test every minute of a day lies in exactly one window, with no gaps"""
    start = local(10, 0)
    for minute in range(24 * 60):
        instant = start + timedelta(minutes=minute)
        window = current_window(instant, utc_offset_hours=-5)
        assert window.contains(instant)
        assert window.start <= instant < window.end
        assert next_window(window, -5).start == window.end
        assert previous_window(window, -5).end == window.start


def test_offset_override():
    """Test the offset can be overridden per call"""
    noon_utc = datetime(2024, 3, 10, 12, 0, tzinfo=timezone.utc)

    assert current_period(noon_utc, utc_offset_hours=0) == Period.MORNING
    assert current_period(noon_utc, utc_offset_hours=-5) == Period.MORNING
    assert current_period(noon_utc, utc_offset_hours=-10) == Period.NIGHT


def test_naive_datetime_rejected():
    """Test naive datetimes raise instead of guessing a timezone"""
    with pytest.raises(ValueError):
        current_window(datetime(2024, 3, 10, 12, 0), utc_offset_hours=-5)


def test_current_window_defaults_to_now():
    """Test omitting `now` uses the current time"""
    before = datetime.now(timezone.utc)
    window = current_window(utc_offset_hours=-5)
    assert window.end > before


# ============================================================================
# Period Bounds Tests
# ============================================================================

def test_period_bounds_for_current_period():
    """Test bounds of the current period are the containing window"""
    now = local(10, 16)
    assert period_bounds(Period.AFTERNOON, now, -5) == current_window(now, -5)


def test_period_bounds_for_finished_period():
    """Test bounds of an earlier period today are its most recent occurrence"""
    window = period_bounds(Period.MORNING, local(10, 22), -5)

    assert window.start == local(10, 6)
    assert window.end == local(10, 15)


def test_period_bounds_roll_back_a_day_for_night():
    """Test night bounds queried in the morning start the previous evening"""
    window = period_bounds(Period.NIGHT, local(10, 7), -5)

    assert window.start == local(9, 20)
    assert window.end == local(10, 6)


def test_period_bounds_accepts_period_name():
    """Test period identifiers can be passed as strings"""
    window = period_bounds("afternoon", local(10, 22), -5)
    assert window.period == Period.AFTERNOON
    assert window.start == local(10, 15)


# ============================================================================
# Adjacent Window Tests
# ============================================================================

def test_previous_window_cycle():
    """Test previous windows step back through night, afternoon, morning"""
    morning = current_window(local(10, 8), -5)

    night = previous_window(morning, -5)
    assert night.period == Period.NIGHT
    assert night.start == local(9, 20)

    afternoon = previous_window(night, -5)
    assert afternoon.period == Period.AFTERNOON
    assert afternoon.start == local(9, 15)

    assert previous_window(afternoon, -5).period == Period.MORNING


def test_next_window_crosses_midnight():
    """Test the window after an afternoon is the night running into the next day"""
    afternoon = current_window(local(10, 17), -5)
    night = next_window(afternoon, -5)

    assert night.period == Period.NIGHT
    assert night.end == local(11, 6)
