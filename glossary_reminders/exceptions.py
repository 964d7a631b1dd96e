"""
Standardized exception hierarchy for glossary-reminders
Provides rich context, consistent logging, and user-friendly error messages
"""

from datetime import datetime, timezone
from typing import Optional, Dict, Any
from uuid import uuid4
import logging

import psycopg
import psycopg.errors
from psycopg_pool import PoolTimeout

logger = logging.getLogger(__name__)


class GlossaryReminderError(Exception):
    """
    Base exception for all glossary-reminders errors

    Provides:
    - Automatic timestamping
    - Request ID for tracing
    - User-friendly messages
    - Structured context
    - Automatic logging
    - HTTP status code for the API layer

    Example:
        raise GlossaryReminderError(
            message="Failed to save check-in",
            username="amina",
            operation="check_in",
            context={"period": "morning"}
        )
    """

    status_code: int = 500
    log_level: int = logging.ERROR

    def __init__(
        self,
        message: str,
        username: Optional[str] = None,
        request_id: Optional[str] = None,
        operation: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None,
        user_message: Optional[str] = None
    ):
        super().__init__(message)
        self.message = message
        self.username = username
        self.request_id = request_id or str(uuid4())
        self.operation = operation
        self.context = context or {}
        self.cause = cause
        self.user_message = user_message or "An error occurred. Please try again."
        self.timestamp = datetime.now(timezone.utc)

        # Auto-log on creation
        self._log_error()

    def _log_error(self) -> None:
        """Log error with full context"""
        log_data = {
            "error_type": self.__class__.__name__,
            "error_message": self.message,  # Avoid conflict with logging's 'message' field
            "request_id": self.request_id,
            "username": self.username,
            "operation": self.operation,
            "error_context": self.context,
            "timestamp": self.timestamp.isoformat()
        }

        if self.cause:
            log_data["cause"] = str(self.cause)
            logger.log(self.log_level, f"{self.__class__.__name__}: {self.message}", extra=log_data, exc_info=self.cause)
        else:
            logger.log(self.log_level, f"{self.__class__.__name__}: {self.message}", extra=log_data)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize exception for API responses"""
        return {
            "status": "error",
            "error": self.__class__.__name__,
            "message": self.user_message,
            "request_id": self.request_id,
            "timestamp": self.timestamp.isoformat()
        }


# ==========================================
# Validation Errors (User Input)
# ==========================================

class ValidationError(GlossaryReminderError):
    """
    Raised when user input fails validation, before any store access

    Example:
        raise ValidationError(
            message="Password must be at least 8 characters long",
            field="password"
        )
    """

    status_code = 400
    log_level = logging.WARNING

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        value: Optional[Any] = None,
        **kwargs
    ):
        self.field = field
        self.value = value
        super().__init__(
            message=message,
            user_message=message,
            context={"field": field},
            **kwargs
        )


# ==========================================
# Authentication
# ==========================================

class AuthenticationError(GlossaryReminderError):
    """Invalid credentials or an invalid, expired or missing token"""

    status_code = 401
    log_level = logging.WARNING

    def __init__(
        self,
        message: str = "Authentication failed",
        user_message: str = "Authentication failed. Please log in again.",
        **kwargs
    ):
        super().__init__(
            message=message,
            user_message=user_message,
            **kwargs
        )


# ==========================================
# Store Errors
# ==========================================

class DuplicateError(GlossaryReminderError):
    """A record with the same unique key already exists"""

    status_code = 409
    log_level = logging.WARNING

    def __init__(
        self,
        message: str,
        record_type: Optional[str] = None,
        key: Optional[Any] = None,
        **kwargs
    ):
        self.record_type = record_type
        self.key = key
        kwargs.setdefault("user_message", f"{record_type or 'Record'} already exists.")
        super().__init__(
            message=message,
            context={"record_type": record_type, "key": str(key) if key is not None else None},
            **kwargs
        )


class RecordNotFoundError(GlossaryReminderError):
    """Requested record does not exist"""

    status_code = 404
    log_level = logging.WARNING

    def __init__(
        self,
        message: str,
        record_type: Optional[str] = None,
        record_id: Optional[str] = None,
        **kwargs
    ):
        self.record_type = record_type
        self.record_id = record_id
        super().__init__(
            message=message,
            user_message=f"{record_type or 'Record'} not found.",
            context={"record_type": record_type, "record_id": record_id},
            **kwargs
        )


# ==========================================
# Check-in outcomes
# ==========================================

class AlreadyCheckedInError(GlossaryReminderError):
    """
    Check-in attempted twice within one period

    This is an expected outcome, not a fault. The current stats travel with
    the error so clients can render them and disable the check-in action.
    """

    status_code = 409
    log_level = logging.INFO

    def __init__(
        self,
        message: str = "Already checked in for this period",
        stats: Optional[Dict[str, Any]] = None,
        **kwargs
    ):
        self.stats = stats or {}
        super().__init__(
            message=message,
            user_message="Already checked in for this period",
            context={"stats": self.stats},
            **kwargs
        )

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data.update(self.stats)
        data["checkedIn"] = True
        return data


# ==========================================
# Availability (retryable)
# ==========================================

class ServiceUnavailableError(GlossaryReminderError):
    """
    Base class for retryable failures

    Callers should retry after `retry_after` seconds.
    """

    status_code = 503
    retry_after: int = 5

    def __init__(self, message: str, **kwargs):
        kwargs.setdefault(
            "user_message",
            "The service is temporarily unavailable. Please try again in a moment."
        )
        super().__init__(message=message, **kwargs)


class DatabaseUnavailableError(ServiceUnavailableError):
    """Backing store unreachable or timed out"""

    def __init__(self, message: str = "Database connection failed", **kwargs):
        super().__init__(
            message=message,
            user_message="We're having trouble reaching the database. Please try again in a moment.",
            **kwargs
        )


class GlossaryUnavailableError(ServiceUnavailableError):
    """Glossary could not be loaded from any source"""

    def __init__(self, message: str = "Glossary data is not available", **kwargs):
        super().__init__(
            message=message,
            user_message="Glossary data is not available right now.",
            **kwargs
        )


class WordUnavailableError(ServiceUnavailableError):
    """No word could be produced for the current period"""

    def __init__(self, message: str = "No word available for current period", **kwargs):
        super().__init__(
            message=message,
            user_message="No word available for the current period.",
            **kwargs
        )


class ConcurrentUpdateError(ServiceUnavailableError):
    """A conditional update lost against a concurrent writer"""

    retry_after = 1

    def __init__(self, message: str = "Record changed during update", **kwargs):
        super().__init__(
            message=message,
            user_message="Your account was updated at the same time. Please try again.",
            **kwargs
        )


# ==========================================
# Internal
# ==========================================

class InternalError(GlossaryReminderError):
    """Anything unexpected; surfaced without internals"""

    def __init__(self, message: str = "Internal server error", **kwargs):
        super().__init__(
            message=message,
            user_message="Something went wrong. Please try again later.",
            **kwargs
        )


# ==========================================
# Helper Functions
# ==========================================

def wrap_external_exception(
    error: Exception,
    operation: str,
    username: Optional[str] = None,
    context: Optional[Dict[str, Any]] = None
) -> GlossaryReminderError:
    """
    Wrap external exceptions (psycopg, pool timeouts, etc.) into our exception hierarchy

    Args:
        error: Original exception
        operation: What operation was being performed
        username: Username if applicable
        context: Additional context

    Returns:
        Appropriate GlossaryReminderError subclass

    Example:
        try:
            await cur.execute(query, params)
        except psycopg.Error as e:
            raise wrap_external_exception(e, operation="create_user", username="amina")
    """
    if isinstance(error, PoolTimeout):
        return DatabaseUnavailableError(
            message=f"Timed out waiting for a database connection: {error}",
            username=username,
            operation=operation,
            context=context,
            cause=error
        )
    elif isinstance(error, psycopg.errors.UniqueViolation):
        return DuplicateError(
            message=f"Unique constraint violated during {operation}",
            username=username,
            operation=operation,
            cause=error
        )
    elif isinstance(error, (psycopg.OperationalError, psycopg.errors.QueryCanceled)):
        return DatabaseUnavailableError(
            message=f"Database unavailable: {error}",
            username=username,
            operation=operation,
            context=context,
            cause=error
        )
    elif isinstance(error, psycopg.Error):
        return InternalError(
            message=f"Database query failed: {error}",
            username=username,
            operation=operation,
            context=context,
            cause=error
        )

    # Generic fallback
    return InternalError(
        message=f"{operation} failed: {error}",
        username=username,
        operation=operation,
        context=context,
        cause=error
    )
