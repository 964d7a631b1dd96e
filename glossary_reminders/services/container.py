"""
Service Container - Dependency Injection Container

Simple DI container for managing service instances and their dependencies.
Uses lazy loading to only instantiate services when first accessed.
"""

from dataclasses import dataclass, field
from typing import Optional
import logging

logger = logging.getLogger(__name__)


@dataclass
class ServiceContainer:
    """
    Simple dependency injection container for services.

    Services are lazy-loaded on first access via properties.
    Infrastructure dependencies (stores, glossary, token issuer) are injected.
    """

    # Infrastructure dependencies (injected)
    user_store: object  # UserStore implementation
    word_store: object  # WordStore implementation
    glossary: object  # GlossaryProvider instance
    token_issuer: object  # TokenIssuer instance
    word_lookback: Optional[int] = None
    utc_offset_hours: Optional[int] = None

    # Services (lazy-loaded via properties)
    _word_assignment: Optional[object] = field(default=None, init=False, repr=False)
    _user_service: Optional[object] = field(default=None, init=False, repr=False)
    _checkin_service: Optional[object] = field(default=None, init=False, repr=False)
    _word_service: Optional[object] = field(default=None, init=False, repr=False)

    @property
    def word_assignment(self):
        """Get WordAssignmentStore instance (lazy-loaded)"""
        if self._word_assignment is None:
            from glossary_reminders.gamification.word_assignment import WordAssignmentStore
            kwargs = {}
            if self.word_lookback is not None:
                kwargs["lookback"] = self.word_lookback
            self._word_assignment = WordAssignmentStore(self.word_store, self.glossary, **kwargs)
            logger.debug("WordAssignmentStore instantiated")
        return self._word_assignment

    @property
    def user_service(self):
        """Get UserService instance (lazy-loaded)"""
        if self._user_service is None:
            from glossary_reminders.services.user_service import UserService
            self._user_service = UserService(self.user_store, self.token_issuer)
            logger.debug("UserService instantiated")
        return self._user_service

    @property
    def checkin_service(self):
        """Get CheckInService instance (lazy-loaded)"""
        if self._checkin_service is None:
            from glossary_reminders.services.checkin_service import CheckInService
            self._checkin_service = CheckInService(
                self.user_store,
                self.word_assignment,
                utc_offset_hours=self.utc_offset_hours
            )
            logger.debug("CheckInService instantiated")
        return self._checkin_service

    @property
    def word_service(self):
        """Get WordService instance (lazy-loaded)"""
        if self._word_service is None:
            from glossary_reminders.services.word_service import WordService
            self._word_service = WordService(
                self.word_assignment,
                self.glossary,
                utc_offset_hours=self.utc_offset_hours
            )
            logger.debug("WordService instantiated")
        return self._word_service


# Global container instance (initialized in the API lifespan)
_container: Optional[ServiceContainer] = None


def get_container() -> ServiceContainer:
    """
    Get the global service container.

    Raises:
        RuntimeError: If container not initialized (call init_container first)
    """
    if _container is None:
        raise RuntimeError(
            "Service container not initialized. "
            "Call init_container() during application startup before using services."
        )
    return _container


def init_container(
    user_store: object,
    word_store: object,
    glossary: object,
    token_issuer: object,
    word_lookback: Optional[int] = None,
    utc_offset_hours: Optional[int] = None
) -> ServiceContainer:
    """
    Initialize the global service container.

    Should be called once at startup after infrastructure setup.

    Returns:
        ServiceContainer: The initialized container
    """
    global _container

    _container = ServiceContainer(
        user_store=user_store,
        word_store=word_store,
        glossary=glossary,
        token_issuer=token_issuer,
        word_lookback=word_lookback,
        utc_offset_hours=utc_offset_hours
    )

    logger.info("Service container initialized")
    return _container


def reset_container() -> None:
    """Drop the global container (shutdown and tests)"""
    global _container
    _container = None
