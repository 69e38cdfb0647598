"""
Progress persistence

ProgressStore is the contract the services depend on. A production deployment
implements it on top of the hosted database; InMemoryProgressStore backs tests
and local runs.

Profile writes are conditional: save_profile only succeeds when the stored
version still matches the version the caller read, so two devices awarding
XP for the same user cannot silently overwrite each other. commit_completion
additionally requires the quest to still be active, so a quest is completed
(and its XP awarded) exactly once.
"""

import asyncio
import logging
from datetime import datetime
from typing import Dict, List, Optional, Protocol

from sidequest.exceptions import ConcurrentUpdateError, QuestStateError, RecordNotFoundError
from sidequest.models.profile import ProfileProgress
from sidequest.models.quest import Quest, QuestCompletion, QuestStatus

logger = logging.getLogger(__name__)


class ProgressStore(Protocol):
    """Interface for profile and quest storage"""

    async def get_profile(self, user_id: str) -> ProfileProgress:
        """Get a user's progress (creates a level-1 profile if none exists)"""
        ...

    async def save_profile(self, profile: ProfileProgress, expected_version: int) -> ProfileProgress:
        """Persist progress if the stored version equals expected_version; returns the stored copy"""
        ...

    async def get_quest(self, quest_id: str) -> Quest:
        """Get a quest by ID"""
        ...

    async def list_quests(self, user_id: str, status: Optional[QuestStatus] = None) -> List[Quest]:
        """List a user's quests, newest first"""
        ...

    async def save_quest(self, quest: Quest) -> None:
        """Insert or update a quest"""
        ...

    async def delete_quest(self, quest_id: str) -> None:
        """Delete a quest"""
        ...

    async def add_completion(self, completion: QuestCompletion) -> None:
        """Record a verified quest completion"""
        ...

    async def commit_completion(
        self,
        profile: ProfileProgress,
        expected_version: int,
        quest: Quest,
        completion: QuestCompletion
    ) -> ProfileProgress:
        """
        Atomically store the profile, the completed quest and the completion record

        Succeeds only if the stored profile version equals expected_version and
        the stored quest is still active; otherwise nothing is written.
        """
        ...


    async def get_last_reroll_at(self, user_id: str) -> Optional[datetime]:
        """When the user last rerolled a quest"""
        ...

    async def record_reroll(self, user_id: str, rerolled_at: datetime) -> None:
        """Remember a reroll for cooldown checks"""
        ...


class InMemoryProgressStore:
    """In-memory ProgressStore (NOT persisted)"""

    def __init__(self):
        self._profiles: Dict[str, ProfileProgress] = {}
        self._quests: Dict[str, Quest] = {}
        self._completions: List[QuestCompletion] = []
        self._rerolls: Dict[str, datetime] = {}
        self._lock = asyncio.Lock()

    async def get_profile(self, user_id: str) -> ProfileProgress:
        async with self._lock:
            profile = self._profiles.get(user_id)
            if profile is None:
                profile = ProfileProgress(user_id=user_id)
                self._profiles[user_id] = profile
                logger.info(f"Created new progress record for user {user_id}")
            return profile.model_copy()

    async def save_profile(self, profile: ProfileProgress, expected_version: int) -> ProfileProgress:
        async with self._lock:
            current = self._profiles.get(profile.user_id)
            actual_version = current.version if current else 0
            if actual_version != expected_version:
                raise ConcurrentUpdateError(
                    f"Profile for user {profile.user_id} changed since it was read",
                    expected_version=expected_version,
                    actual_version=actual_version,
                    user_id=profile.user_id,
                    operation="save_profile"
                )
            stored = profile.model_copy(update={"version": actual_version + 1})
            self._profiles[profile.user_id] = stored
            logger.debug(f"Saved progress for user {profile.user_id} at version {stored.version}")
            return stored.model_copy()

    async def get_quest(self, quest_id: str) -> Quest:
        quest = self._quests.get(quest_id)
        if quest is None:
            raise RecordNotFoundError(
                f"Quest {quest_id} not found",
                record_type="Quest",
                record_id=quest_id
            )
        return quest.model_copy()

    async def list_quests(self, user_id: str, status: Optional[QuestStatus] = None) -> List[Quest]:
        quests = [
            q.model_copy() for q in self._quests.values()
            if q.user_id == user_id and (status is None or q.status == status)
        ]
        quests.sort(key=lambda q: q.created_at, reverse=True)
        return quests

    async def save_quest(self, quest: Quest) -> None:
        self._quests[quest.id] = quest.model_copy()

    async def delete_quest(self, quest_id: str) -> None:
        if self._quests.pop(quest_id, None) is None:
            raise RecordNotFoundError(
                f"Quest {quest_id} not found",
                record_type="Quest",
                record_id=quest_id
            )

    async def add_completion(self, completion: QuestCompletion) -> None:
        self._completions.append(completion.model_copy())

    async def commit_completion(
        self,
        profile: ProfileProgress,
        expected_version: int,
        quest: Quest,
        completion: QuestCompletion
    ) -> ProfileProgress:
        async with self._lock:
            current = self._profiles.get(profile.user_id)
            actual_version = current.version if current else 0
            if actual_version != expected_version:
                raise ConcurrentUpdateError(
                    f"Profile for user {profile.user_id} changed since it was read",
                    expected_version=expected_version,
                    actual_version=actual_version,
                    user_id=profile.user_id,
                    operation="commit_completion"
                )

            stored_quest = self._quests.get(quest.id)
            if stored_quest is None:
                raise RecordNotFoundError(
                    f"Quest {quest.id} not found",
                    record_type="Quest",
                    record_id=quest.id
                )
            if stored_quest.status != QuestStatus.ACTIVE:
                raise QuestStateError(
                    f"Quest {quest.id} is already {stored_quest.status.value}",
                    quest_id=quest.id,
                    status=stored_quest.status.value,
                    user_id=profile.user_id,
                    operation="commit_completion"
                )

            stored = profile.model_copy(update={"version": actual_version + 1})
            self._profiles[profile.user_id] = stored
            self._quests[quest.id] = quest.model_copy()
            self._completions.append(completion.model_copy())
            logger.debug(
                f"Committed completion of quest {quest.id} for user {profile.user_id} "
                f"at version {stored.version}"
            )
            return stored.model_copy()


    async def list_completions(self, user_id: str) -> List[QuestCompletion]:
        """Completions for a user, oldest first"""
        return [c.model_copy() for c in self._completions if c.user_id == user_id]

    async def get_last_reroll_at(self, user_id: str) -> Optional[datetime]:
        return self._rerolls.get(user_id)

    async def record_reroll(self, user_id: str, rerolled_at: datetime) -> None:
        self._rerolls[user_id] = rerolled_at
