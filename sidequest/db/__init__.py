"""Persistence for profiles and quests"""

from sidequest.db.progress_store import InMemoryProgressStore, ProgressStore

__all__ = ["InMemoryProgressStore", "ProgressStore"]
