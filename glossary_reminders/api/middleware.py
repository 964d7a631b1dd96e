"""API middleware for rate limiting and CORS"""
import logging
from fastapi import Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from glossary_reminders.config import CORS_ORIGINS, AUTH_RATE_LIMIT, API_RATE_LIMIT

logger = logging.getLogger(__name__)

# Initialize rate limiter (per client IP)
limiter = Limiter(key_func=get_remote_address)


def setup_cors(app, origins: list[str] = CORS_ORIGINS):
    """Configure CORS middleware"""
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    logger.info(f"CORS configured for origins: {origins}")


async def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """Render rate limit rejections in the API's error shape"""
    logger.warning(f"Rate limit exceeded for {get_remote_address(request)} on {request.url.path}")
    return JSONResponse(
        status_code=429,
        content={
            "status": "error",
            "error": "RateLimitExceeded",
            "message": "Too many requests, please try again later",
        },
    )


def setup_rate_limiting(app):
    """Configure rate limiting"""
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
    logger.info(f"Rate limiting configured: auth {AUTH_RATE_LIMIT}, api {API_RATE_LIMIT} per IP")
