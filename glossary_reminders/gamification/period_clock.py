"""
Period Clock

Maps an instant to one of three fixed daily check-in periods, computed in a
fixed offset from UTC (UTC-5 by default):

- night:     20:00 - 06:00 (wraps past midnight)
- morning:   06:00 - 15:00
- afternoon: 15:00 - 20:00

The windows partition the day. Every public function here derives from
`current_window`/`_window_at`, so the period name and its bounds can never
disagree about which side of a boundary an instant falls on.
"""

from typing import Optional
from datetime import datetime, timedelta, timezone
import logging

from glossary_reminders.config import PERIOD_UTC_OFFSET_HOURS
from glossary_reminders.models.period import Period, PeriodWindow

logger = logging.getLogger(__name__)

# (period, start hour in local offset time, length in hours)
PERIOD_SCHEDULE: tuple[tuple[Period, int, int], ...] = (
    (Period.NIGHT, 20, 10),
    (Period.MORNING, 6, 9),
    (Period.AFTERNOON, 15, 5),
)


def _offset_tz(utc_offset_hours: Optional[int]) -> timezone:
    hours = PERIOD_UTC_OFFSET_HOURS if utc_offset_hours is None else utc_offset_hours
    return timezone(timedelta(hours=hours))


def _require_aware(now: datetime) -> None:
    if now.tzinfo is None or now.utcoffset() is None:
        raise ValueError("Period calculations require a timezone-aware datetime")


def _occurrences(period: Period, now: datetime, tz: timezone) -> list[PeriodWindow]:
    """Occurrences of `period` starting on the local day before, of, and after `now`"""
    local = now.astimezone(tz)
    midnight = local.replace(hour=0, minute=0, second=0, microsecond=0)

    for candidate, start_hour, length in PERIOD_SCHEDULE:
        if candidate != period:
            continue
        windows = []
        for day_offset in (-1, 0, 1):
            start = midnight + timedelta(days=day_offset, hours=start_hour)
            end = start + timedelta(hours=length)
            windows.append(PeriodWindow(
                period=period,
                start=start.astimezone(timezone.utc),
                end=end.astimezone(timezone.utc),
            ))
        return windows

    raise ValueError(f"Unknown period: {period}")


def _window_at(now: datetime, tz: timezone) -> PeriodWindow:
    for period, _, _ in PERIOD_SCHEDULE:
        for window in _occurrences(period, now, tz):
            if window.contains(now):
                return window
    # Unreachable while PERIOD_SCHEDULE covers 24 hours
    raise RuntimeError(f"No period contains {now.isoformat()}")


def current_window(now: Optional[datetime] = None, utc_offset_hours: Optional[int] = None) -> PeriodWindow:
    """
    Get the period occurrence containing `now`

    Args:
        now: Timezone-aware instant (defaults to the current time)
        utc_offset_hours: Override for the configured fixed offset

    Returns:
        PeriodWindow with start <= now < end, bounds in UTC
    """
    if now is None:
        now = datetime.now(timezone.utc)
    _require_aware(now)
    return _window_at(now, _offset_tz(utc_offset_hours))


def current_period(now: Optional[datetime] = None, utc_offset_hours: Optional[int] = None) -> Period:
    """Get the period identifier for `now`"""
    return current_window(now, utc_offset_hours).period


def period_bounds(
    period: Period,
    now: Optional[datetime] = None,
    utc_offset_hours: Optional[int] = None
) -> PeriodWindow:
    """
    Get the current occurrence of `period` relative to `now`

    That is the occurrence with the latest start at or before `now`: the one
    containing `now` when `period` is the current period, otherwise the most
    recently finished one. Rolls into the previous day when the window spans
    midnight.
    """
    if now is None:
        now = datetime.now(timezone.utc)
    _require_aware(now)
    tz = _offset_tz(utc_offset_hours)

    started = [w for w in _occurrences(Period(period), now, tz) if w.start <= now]
    return max(started, key=lambda w: w.start)


def previous_window(window: PeriodWindow, utc_offset_hours: Optional[int] = None) -> PeriodWindow:
    """Get the period occurrence that ends exactly where `window` starts"""
    return _window_at(window.start - timedelta(microseconds=1), _offset_tz(utc_offset_hours))


def next_window(window: PeriodWindow, utc_offset_hours: Optional[int] = None) -> PeriodWindow:
    """Get the period occurrence that starts exactly where `window` ends"""
    return _window_at(window.end, _offset_tz(utc_offset_hours))
