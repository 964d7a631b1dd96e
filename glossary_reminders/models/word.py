"""Period word and glossary models"""
from typing import Optional
from datetime import datetime
from pydantic import BaseModel, ConfigDict

from glossary_reminders.models.period import Period


class PeriodWord(BaseModel):
    """
    The single glossary word shared by all users for one period occurrence.

    `(period, period_start)` is the natural key. `persisted` is False only
    for the transient word handed out while the store is unreachable; such a
    word is valid for the current request only.
    """
    model_config = ConfigDict(frozen=True)

    period: Period
    period_start: datetime
    word: str
    persisted: bool = True


class GlossaryEntry(BaseModel):
    """Definition of one glossary word"""
    model_config = ConfigDict(frozen=True)

    word: str
    definition: str
    annotation: Optional[str] = None  # Native-script form (Arabic)


class CurrentWord(BaseModel):
    """The word being served for the current period"""
    word: str
    definition: str
    annotation: Optional[str] = None
    period: Period
    next_update: datetime
    fallback: bool = False
    persisted: bool = True


class WordHistoryEntry(BaseModel):
    """A previously assigned period word with its definition"""
    word: str
    definition: Optional[str] = None
    annotation: Optional[str] = None
    period: Period
    period_start: datetime
