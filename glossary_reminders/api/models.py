"""Pydantic models for API request/response validation"""
from typing import Optional, List
from pydantic import BaseModel, ConfigDict, Field
from datetime import datetime, timezone


class CamelModel(BaseModel):
    """Response model serialized with the camelCase keys clients expect"""
    model_config = ConfigDict(populate_by_name=True)


class CredentialsRequest(BaseModel):
    """Sign-up / login body; content rules are checked by the service layer"""
    username: str = Field(default="", description="Username (letters, digits, _ and -)")
    password: str = Field(default="", description="Plaintext password")


class SignupResponse(CamelModel):
    status: str = "ok"
    username: str


class LoginResponse(CamelModel):
    status: str = "ok"
    token: str


class StatsResponse(CamelModel):
    """Points, streak and multiplier"""
    status: str = "ok"
    points: float
    streak: int
    multiplier: float


class EligibilityResponse(StatsResponse):
    """Whether the user can check in this period"""
    eligible: bool
    checked_in: bool = Field(..., alias="checkedIn")
    period: str
    next_update: datetime = Field(..., alias="nextUpdate")


class CheckInResponse(StatsResponse):
    """Result of a successful check-in"""
    points_earned: float = Field(..., alias="pointsEarned")
    new_achievements: List[str] = Field(..., alias="newAchievements")
    word: str
    period: str


class CurrentWordResponse(CamelModel):
    """Word for the current period"""
    status: str = "ok"
    word: str
    meaning: str
    arabic: str = ""
    period: str
    next_update: datetime = Field(..., alias="nextUpdate")
    fallback: bool = False


class WordHistoryItem(CamelModel):
    word: str
    meaning: Optional[str] = None
    arabic: Optional[str] = None
    interval: str
    date: datetime


class WordHistoryResponse(CamelModel):
    status: str = "ok"
    history: List[WordHistoryItem]


class LeaderboardUser(CamelModel):
    username: str
    points: float
    streak: int
    multiplier: float


class LeaderboardResponse(CamelModel):
    status: str = "ok"
    users: List[LeaderboardUser]


class AchievementItem(CamelModel):
    id: str
    name: str
    description: str
    icon: str
    earned: bool
    date: Optional[datetime] = None


class AchievementsResponse(CamelModel):
    status: str = "ok"
    achievements: List[AchievementItem]


class HealthCheckResponse(CamelModel):
    """Health check response"""
    status: str = Field(..., description="Service status")
    database: str = Field(..., description="Storage backend status")
    storage_backend: str = Field(..., alias="storageBackend")
    glossary_loaded: bool = Field(..., alias="glossaryLoaded")
    glossary_words: int = Field(..., alias="glossaryWords")
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class ErrorResponse(BaseModel):
    """Error response model"""
    status: str = "error"
    error: str = Field(..., description="Error class")
    message: str = Field(..., description="User-facing message")
    request_id: Optional[str] = None
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
