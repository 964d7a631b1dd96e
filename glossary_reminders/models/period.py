"""Check-in period models"""
from enum import Enum
from datetime import datetime
from pydantic import BaseModel, ConfigDict


class Period(str, Enum):
    """The three fixed daily check-in periods"""
    NIGHT = "night"
    MORNING = "morning"
    AFTERNOON = "afternoon"


class PeriodWindow(BaseModel):
    """One concrete occurrence of a period: [start, end) in UTC"""
    model_config = ConfigDict(frozen=True)

    period: Period
    start: datetime
    end: datetime

    def contains(self, instant: datetime) -> bool:
        """True if start <= instant < end"""
        return self.start <= instant < self.end
