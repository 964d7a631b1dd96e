"""Credential hashing and session token utilities"""
import logging
import re
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from werkzeug.security import check_password_hash, generate_password_hash

from glossary_reminders.exceptions import AuthenticationError

logger = logging.getLogger(__name__)

USERNAME_PATTERN = re.compile(r"[a-zA-Z0-9_-]+")


def hash_password(password: str) -> str:
    """Hash a plaintext password (salted, opaque)"""
    return generate_password_hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    """Check a plaintext password against a stored hash"""
    if not password_hash:
        return False
    return check_password_hash(password_hash, password)


class TokenIssuer:
    """
    Sign and verify session tokens (JWT)

    Claims carry the username plus issue and expiry times.
    """

    def __init__(self, secret: str, algorithm: str = "HS256", ttl_hours: int = 168):
        if not secret:
            raise ValueError("Token secret must not be empty")
        self.secret = secret
        self.algorithm = algorithm
        self.ttl = timedelta(hours=ttl_hours)

    def sign(self, username: str, now: Optional[datetime] = None) -> str:
        """Issue a token for `username`"""
        issued_at = now or datetime.now(timezone.utc)
        claims = {
            "username": username,
            "iat": issued_at,
            "exp": issued_at + self.ttl,
        }
        return jwt.encode(claims, self.secret, algorithm=self.algorithm)

    def verify(self, token: Optional[str]) -> str:
        """
        Validate a token and return the username it was issued for

        Raises:
            AuthenticationError: If the token is missing, malformed, expired,
                or carries an invalid username
        """
        if not token:
            raise AuthenticationError(message="No token provided", user_message="No token provided")

        try:
            claims = jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                options={"require": ["exp", "username"]},
            )
        except jwt.ExpiredSignatureError as e:
            raise AuthenticationError(
                message="Token expired",
                user_message="Session expired. Please log in again.",
                cause=e
            )
        except jwt.InvalidTokenError as e:
            raise AuthenticationError(message=f"Invalid token: {e}", user_message="Invalid token")

        username = claims.get("username")
        if not isinstance(username, str) or not USERNAME_PATTERN.fullmatch(username):
            raise AuthenticationError(message="Token carries invalid username", user_message="Invalid token")

        logger.debug(f"Token validated for {username}")
        return username
