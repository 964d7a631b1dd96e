"""API routes for glossary reminders"""
import logging
from fastapi import APIRouter, Depends, Request, status

from glossary_reminders.api.auth import get_current_username, get_services
from glossary_reminders.api.middleware import limiter
from glossary_reminders.api.models import (
    CredentialsRequest, SignupResponse, LoginResponse,
    StatsResponse, EligibilityResponse, CheckInResponse,
    CurrentWordResponse, WordHistoryItem, WordHistoryResponse,
    LeaderboardUser, LeaderboardResponse,
    AchievementItem, AchievementsResponse,
    HealthCheckResponse, ErrorResponse,
)
from glossary_reminders.config import AUTH_RATE_LIMIT, API_RATE_LIMIT, STORAGE_BACKEND
from glossary_reminders.observability.metrics import glossary_loaded
from glossary_reminders.services.container import ServiceContainer

logger = logging.getLogger(__name__)

router = APIRouter(responses={
    401: {"model": ErrorResponse, "description": "Missing, invalid or expired token"},
    503: {"model": ErrorResponse, "description": "Temporarily unavailable, retry after Retry-After seconds"},
})


# ==========================================
# Accounts
# ==========================================

@router.post("/signup", response_model=SignupResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit(AUTH_RATE_LIMIT)
async def signup(
    request: Request,
    payload: CredentialsRequest,
    services: ServiceContainer = Depends(get_services)
):
    """Create an account (Rate limit: 5/minute)"""
    user = await services.user_service.sign_up(payload.username, payload.password)
    return SignupResponse(username=user.username)


@router.post("/login", response_model=LoginResponse)
@limiter.limit(AUTH_RATE_LIMIT)
async def login(
    request: Request,
    payload: CredentialsRequest,
    services: ServiceContainer = Depends(get_services)
):
    """Exchange credentials for a session token (Rate limit: 5/minute)"""
    token = await services.user_service.log_in(payload.username, payload.password)
    return LoginResponse(token=token)


@router.get("/user-stats", response_model=StatsResponse)
@limiter.limit(API_RATE_LIMIT)
async def user_stats(
    request: Request,
    username: str = Depends(get_current_username),
    services: ServiceContainer = Depends(get_services)
):
    """Points, streak and multiplier for the logged-in user"""
    stats = await services.user_service.get_stats(username)
    return StatsResponse(**stats)


@router.get("/achievements", response_model=AchievementsResponse)
@limiter.limit(API_RATE_LIMIT)
async def achievements(
    request: Request,
    username: str = Depends(get_current_username),
    services: ServiceContainer = Depends(get_services)
):
    """Full achievement catalogue with the user's earned flags"""
    views = await services.user_service.get_achievements(username)
    return AchievementsResponse(achievements=[
        AchievementItem(
            id=view.id.value,
            name=view.name,
            description=view.description,
            icon=view.icon,
            earned=view.earned,
            date=view.date,
        )
        for view in views
    ])


@router.get("/leaderboard", response_model=LeaderboardResponse)
@limiter.limit(API_RATE_LIMIT)
async def leaderboard(
    request: Request,
    services: ServiceContainer = Depends(get_services)
):
    """Top users by knowledge points"""
    entries = await services.user_service.leaderboard()
    return LeaderboardResponse(users=[
        LeaderboardUser(
            username=entry.username,
            points=entry.knowledge_points,
            streak=entry.streak,
            multiplier=entry.multiplier,
        )
        for entry in entries
    ])


# ==========================================
# Check-ins
# ==========================================

@router.get("/can-check-in", response_model=EligibilityResponse)
@limiter.limit(API_RATE_LIMIT)
async def can_check_in(
    request: Request,
    username: str = Depends(get_current_username),
    services: ServiceContainer = Depends(get_services)
):
    """Whether the user can check in during the current period"""
    eligibility = await services.checkin_service.eligibility(username)
    return EligibilityResponse(
        points=eligibility.points,
        streak=eligibility.streak,
        multiplier=eligibility.multiplier,
        eligible=eligibility.eligible,
        checked_in=eligibility.checked_in,
        period=eligibility.period.value,
        next_update=eligibility.next_boundary,
    )


@router.post("/update-points", response_model=CheckInResponse)
@limiter.limit(API_RATE_LIMIT)
async def update_points(
    request: Request,
    username: str = Depends(get_current_username),
    services: ServiceContainer = Depends(get_services)
):
    """Check in for the current period and collect points"""
    result = await services.checkin_service.check_in(username)
    return CheckInResponse(
        points=result.points,
        streak=result.streak,
        multiplier=result.multiplier,
        points_earned=result.points_earned,
        new_achievements=result.new_achievements,
        word=result.word,
        period=result.period.value,
    )


# ==========================================
# Words
# ==========================================

@router.get("/word-for-interval", response_model=CurrentWordResponse)
@limiter.limit(API_RATE_LIMIT)
async def word_for_interval(
    request: Request,
    services: ServiceContainer = Depends(get_services)
):
    """Word for the current period (public)"""
    current = await services.word_service.current_word()
    return CurrentWordResponse(
        word=current.word,
        meaning=current.definition,
        arabic=current.annotation or "",
        period=current.period.value,
        next_update=current.next_update,
        fallback=current.fallback,
    )


@router.get("/word-history", response_model=WordHistoryResponse)
@limiter.limit(API_RATE_LIMIT)
async def word_history(
    request: Request,
    username: str = Depends(get_current_username),
    services: ServiceContainer = Depends(get_services)
):
    """Recently assigned words"""
    entries = await services.word_service.history()
    return WordHistoryResponse(history=[
        WordHistoryItem(
            word=entry.word,
            meaning=entry.definition,
            arabic=entry.annotation,
            interval=entry.period.value,
            date=entry.period_start,
        )
        for entry in entries
    ])


# ==========================================
# Health
# ==========================================

@router.get("/health", response_model=HealthCheckResponse)
async def health_check(services: ServiceContainer = Depends(get_services)):
    """Storage and glossary status"""
    users_ok = await services.user_store.ping()
    words_ok = await services.word_store.ping()
    loaded = services.glossary.is_available
    glossary_loaded.set(1 if loaded else 0)

    healthy = users_ok and words_ok and loaded
    return HealthCheckResponse(
        status="ok" if healthy else "degraded",
        database="connected" if users_ok and words_ok else "disconnected",
        storage_backend=STORAGE_BACKEND,
        glossary_loaded=loaded,
        glossary_words=len(services.glossary),
    )
