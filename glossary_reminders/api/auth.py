"""API authentication using session tokens"""
import logging
from typing import Optional
from fastapi import Depends, Request, Security
from fastapi.security import APIKeyHeader, HTTPAuthorizationCredentials, HTTPBearer

from glossary_reminders.services.container import ServiceContainer, get_container

logger = logging.getLogger(__name__)

# Clients send the token in x-access-token; a Bearer header works as well
access_token_header = APIKeyHeader(name="x-access-token", auto_error=False)
bearer = HTTPBearer(auto_error=False)


def get_services(request: Request) -> ServiceContainer:
    """Service container attached to the app, else the global one"""
    container = getattr(request.app.state, "container", None)
    return container or get_container()


async def get_current_username(
    token: Optional[str] = Security(access_token_header),
    credentials: Optional[HTTPAuthorizationCredentials] = Security(bearer),
    services: ServiceContainer = Depends(get_services)
) -> str:
    """
    Verify the session token and return its username

    Raises:
        AuthenticationError: If the token is missing, invalid or expired
    """
    raw_token = token or (credentials.credentials if credentials else None)
    return services.token_issuer.verify(raw_token)
