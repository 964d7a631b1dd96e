"""FastAPI application setup"""
import logging
from contextlib import asynccontextmanager
from typing import Optional
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from glossary_reminders.api.routes import router
from glossary_reminders.api.metrics_routes import router as metrics_router
from glossary_reminders.api.middleware import setup_cors, setup_rate_limiting
from glossary_reminders.config import (
    validate_config, LOG_LEVEL, STORAGE_BACKEND, GLOSSARY_PATH,
    JWT_SECRET, JWT_ALGORITHM, TOKEN_TTL_HOURS,
    WORD_LOOKBACK, PERIOD_UTC_OFFSET_HOURS,
)
from glossary_reminders.db.connection import db
from glossary_reminders.exceptions import (
    GlossaryReminderError, ServiceUnavailableError, InternalError, ValidationError,
)
from glossary_reminders.observability.metrics import glossary_loaded
from glossary_reminders.observability.metrics_middleware import setup_metrics_middleware
from glossary_reminders.observability.sentry_config import init_sentry, shutdown_sentry
from glossary_reminders.services.container import ServiceContainer, init_container, reset_container
from glossary_reminders.services.glossary import FALLBACK_PATHS, GlossaryProvider
from glossary_reminders.utils.auth import TokenIssuer

# Configure logging
logging.basicConfig(
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    level=getattr(logging, LOG_LEVEL.upper(), logging.INFO)
)

logger = logging.getLogger(__name__)


async def _create_stores():
    """Build the user and word stores for the configured backend"""
    if STORAGE_BACKEND == "memory":
        from glossary_reminders.db.memory_store import InMemoryUserStore, InMemoryWordStore
        return InMemoryUserStore(), InMemoryWordStore()

    from glossary_reminders.db.queries import PostgresUserStore, PostgresWordStore
    from glossary_reminders.db.schema import ensure_schema

    await db.init_pool()
    logger.info("Database pool initialized")
    await ensure_schema(db)
    return PostgresUserStore(db), PostgresWordStore(db)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifecycle manager for FastAPI application"""
    if getattr(app.state, "container", None) is not None:
        # Container injected by the caller; infrastructure is theirs
        yield
        return

    # Startup
    logger.info("Starting API server...")
    validate_config()
    init_sentry()

    glossary = GlossaryProvider([GLOSSARY_PATH, *FALLBACK_PATHS])
    glossary.load()
    glossary_loaded.set(1 if glossary.is_available else 0)

    user_store, word_store = await _create_stores()
    app.state.container = init_container(
        user_store=user_store,
        word_store=word_store,
        glossary=glossary,
        token_issuer=TokenIssuer(JWT_SECRET, JWT_ALGORITHM, TOKEN_TTL_HOURS),
        word_lookback=WORD_LOOKBACK,
        utc_offset_hours=PERIOD_UTC_OFFSET_HOURS,
    )
    logger.info(f"API ready (storage: {STORAGE_BACKEND}, glossary words: {len(glossary)})")

    yield

    # Shutdown
    logger.info("Shutting down API server...")
    app.state.container = None
    reset_container()
    if STORAGE_BACKEND == "postgres":
        await db.close_pool()
        logger.info("Database pool closed")
    shutdown_sentry()


def create_api_application(container: Optional[ServiceContainer] = None) -> FastAPI:
    """
    Create and configure FastAPI application

    Args:
        container: Pre-built services; when given, startup skips config
            validation, storage and glossary setup
    """
    app = FastAPI(
        title="Glossary Reminders API",
        description="Check in once per period, learn a word, build a streak",
        version="1.0.0",
        lifespan=lifespan
    )
    app.state.container = container

    # Setup middleware
    setup_cors(app)
    setup_rate_limiting(app)
    setup_metrics_middleware(app)

    # Include routes
    app.include_router(router)
    app.include_router(metrics_router)

    @app.exception_handler(GlossaryReminderError)
    async def glossary_reminder_error_handler(request: Request, exc: GlossaryReminderError):
        headers = None
        if isinstance(exc, ServiceUnavailableError):
            headers = {"Retry-After": str(exc.retry_after)}
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict(), headers=headers)

    @app.exception_handler(RequestValidationError)
    async def request_validation_error_handler(request: Request, exc: RequestValidationError):
        error = ValidationError(message="Malformed request body", field="body", operation=request.url.path)
        return JSONResponse(status_code=error.status_code, content=error.to_dict())

    # Global exception handler
    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        error = InternalError(
            message=f"Unhandled exception on {request.url.path}: {exc}",
            operation=request.url.path,
            cause=exc
        )
        return JSONResponse(status_code=error.status_code, content=error.to_dict())

    logger.info("FastAPI application created")

    return app


app = create_api_application()
