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
    The progress store and quest generator are injected.
    """

    # Infrastructure dependencies (injected)
    store: object  # ProgressStore implementation
    quest_generator: Optional[object] = None  # async (player_class, count) -> quests

    # Services (lazy-loaded via properties)
    _progression_service: Optional[object] = field(default=None, init=False, repr=False)
    _quest_service: Optional[object] = field(default=None, init=False, repr=False)

    @property
    def progression_service(self):
        """Get ProgressionService instance (lazy-loaded)"""
        if self._progression_service is None:
            from sidequest.services.progression_service import ProgressionService
            self._progression_service = ProgressionService(self.store)
            logger.debug("ProgressionService instantiated")
        return self._progression_service

    @property
    def quest_service(self):
        """Get QuestService instance (lazy-loaded)"""
        if self._quest_service is None:
            from sidequest.services.quest_service import QuestService
            self._quest_service = QuestService(self.store, self.quest_generator)
            logger.debug("QuestService instantiated")
        return self._quest_service


# Global container instance (initialized by the embedding application)
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
            "Call init_container() before using services."
        )
    return _container


def init_container(store: object, quest_generator: Optional[object] = None) -> ServiceContainer:
    """
    Initialize the global service container.

    Args:
        store: ProgressStore implementation
        quest_generator: Optional quest generator (fallback quests are used without one)

    Returns:
        ServiceContainer: The initialized container
    """
    global _container

    _container = ServiceContainer(store=store, quest_generator=quest_generator)

    logger.info("Service container initialized")
    return _container


def reset_container() -> None:
    """Drop the global container"""
    global _container
    _container = None
