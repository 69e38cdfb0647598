"""
Service Layer Package

Business logic that sits between callers (app backend, UI) and the progress store.

- ProgressionService: quest completion, XP awards, streaks
- QuestService: daily quest generation, expiry, rerolls
"""

from sidequest.services.container import ServiceContainer, get_container, init_container, reset_container
from sidequest.services.progression_service import ProgressionService
from sidequest.services.quest_service import QuestService

__all__ = [
    "ServiceContainer",
    "get_container",
    "init_container",
    "reset_container",
    "ProgressionService",
    "QuestService",
]
