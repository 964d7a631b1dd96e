"""Achievement models for gamification"""
from enum import Enum
from pydantic import BaseModel
from typing import Optional
from datetime import datetime


class AchievementId(str, Enum):
    """Stored achievement keys, in catalogue order"""
    FIRST_CHECK_IN = "firstCheckIn"
    STREAK_THREE = "streakThree"
    STREAK_SEVEN = "streakSeven"
    STREAK_THIRTY = "streakThirty"
    KNOWLEDGE_SEEKER = "knowledgeSeeker"
    KNOWLEDGE_MASTER = "knowledgeMaster"


class AchievementState(BaseModel):
    """Per-user state of one achievement"""
    earned: bool = False
    date: Optional[datetime] = None


class AchievementView(BaseModel):
    """Catalogue entry merged with a user's state, for display"""
    id: AchievementId
    name: str
    description: str
    icon: str
    earned: bool
    date: Optional[datetime] = None


def default_achievements() -> dict[AchievementId, AchievementState]:
    """Every achievement unearned"""
    return {achievement_id: AchievementState() for achievement_id in AchievementId}
