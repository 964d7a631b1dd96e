"""User-related Pydantic models"""
from decimal import Decimal
from typing import Optional
from datetime import datetime, timezone
from pydantic import BaseModel, Field

from glossary_reminders.models.achievement import (
    AchievementId,
    AchievementState,
    default_achievements,
)


class User(BaseModel):
    """Stored user account with check-in state"""
    username: str
    password_hash: str
    knowledge_points: Decimal = Decimal("0")
    streak: int = 0
    multiplier: Decimal = Decimal("1")
    last_check_in: Optional[datetime] = None
    achievements: dict[AchievementId, AchievementState] = Field(default_factory=default_achievements)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    def stats(self) -> dict:
        """Public counters, as returned by the stats endpoints"""
        return {
            "points": float(self.knowledge_points),
            "streak": self.streak,
            "multiplier": float(self.multiplier),
        }


class LeaderboardEntry(BaseModel):
    """Public view of a user on the leaderboard"""
    username: str
    knowledge_points: Decimal
    streak: int
    multiplier: Decimal
