"""Check-in result models"""
from decimal import Decimal
from typing import Optional
from datetime import datetime
from pydantic import BaseModel

from glossary_reminders.models.period import Period


class CheckInResult(BaseModel):
    """Outcome of a successful check-in"""
    username: str
    points: Decimal
    streak: int
    multiplier: Decimal
    points_earned: Decimal
    new_achievements: list[str]
    word: str
    period: Period
    checked_in_at: datetime


class Eligibility(BaseModel):
    """Whether a user may check in during the current period"""
    eligible: bool
    checked_in: bool
    points: Decimal
    streak: int
    multiplier: Decimal
    period: Period
    next_boundary: datetime
    last_check_in: Optional[datetime] = None
