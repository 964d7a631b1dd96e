"""
UserService - Account Management Business Logic

Handles sign-up, login, stats, achievements and the leaderboard.
Separates business logic from the HTTP routes and the store layer.
"""

import logging
from typing import Any, Dict, List

from glossary_reminders.config import LEADERBOARD_SIZE
from glossary_reminders.exceptions import AuthenticationError, RecordNotFoundError
from glossary_reminders.gamification.achievement_system import describe_achievements
from glossary_reminders.models.achievement import AchievementView
from glossary_reminders.models.user import LeaderboardEntry, User
from glossary_reminders.observability.metrics import logins_total, user_registrations_total
from glossary_reminders.utils.auth import TokenIssuer, hash_password, verify_password
from glossary_reminders.validators import validate_login, validate_signup

logger = logging.getLogger(__name__)


class UserService:
    """
    Service for user accounts.

    Responsibilities:
    - Account creation with validated credentials
    - Login and session token issuance
    - Read-only views: stats, achievements, leaderboard
    """

    def __init__(self, user_store, token_issuer: TokenIssuer):
        """
        Initialize UserService.

        Args:
            user_store: UserStore implementation
            token_issuer: Signs session tokens on login
        """
        self.users = user_store
        self.tokens = token_issuer

    async def sign_up(self, username: str, password: str) -> User:
        """
        Create a new account with default counters.

        Raises:
            ValidationError: Malformed username or weak password
            DuplicateError: Username already taken
        """
        credentials = validate_signup(username, password)

        user = User(
            username=credentials.username,
            password_hash=hash_password(credentials.password),
        )
        created = await self.users.create_user(user)

        user_registrations_total.inc()
        logger.info(f"Created new user: {created.username}")
        return created

    async def log_in(self, username: str, password: str) -> str:
        """
        Verify credentials and issue a session token.

        Unknown users and wrong passwords fail identically.

        Raises:
            ValidationError: Malformed input
            AuthenticationError: Invalid credentials
        """
        credentials = validate_login(username, password)

        user = await self.users.get_user(credentials.username)
        if user is None or not verify_password(credentials.password, user.password_hash):
            logins_total.labels(result="failure").inc()
            raise AuthenticationError(
                message=f"Invalid login for {credentials.username}",
                user_message="Invalid login",
                username=credentials.username,
                operation="log_in"
            )

        logins_total.labels(result="success").inc()
        logger.info(f"User logged in: {user.username}")
        return self.tokens.sign(user.username)

    async def get_user(self, username: str) -> User:
        """
        Load a user or fail.

        A valid token for a missing user means the account was removed
        externally.

        Raises:
            RecordNotFoundError: No such user
        """
        user = await self.users.get_user(username)
        if user is None:
            raise RecordNotFoundError(
                message=f"User {username} not found",
                record_type="User",
                record_id=username,
                username=username
            )
        return user

    async def get_stats(self, username: str) -> Dict[str, Any]:
        """Points, streak and multiplier for a user"""
        user = await self.get_user(username)
        return user.stats()

    async def get_achievements(self, username: str) -> List[AchievementView]:
        """Full achievement catalogue with the user's earned flags and dates"""
        user = await self.get_user(username)
        return describe_achievements(user.achievements)

    async def leaderboard(self, limit: int = LEADERBOARD_SIZE) -> List[LeaderboardEntry]:
        """Top users by knowledge points, ties broken by sign-up order"""
        return await self.users.top_users(limit)
