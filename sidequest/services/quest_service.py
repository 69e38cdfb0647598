"""
QuestService - Daily Quest Business Logic

Generates each day's quests through an injected generator (the AI quest
writer in production), with a fixed fallback pool when it fails, and handles
expiry and rerolls.
"""

import logging
from datetime import datetime, timedelta
from typing import Awaitable, Callable, List, Optional, Sequence, Union

from pydantic import ValidationError

from sidequest.db.progress_store import ProgressStore
from sidequest.exceptions import QuestGenerationError, QuestLimitError, QuestStateError
from sidequest.models.quest import GeneratedQuest, Quest, QuestStatus
from sidequest.quests.catalog import QUEST_CONFIG, PlayerClass, get_fallback_quests, get_player_class
from sidequest.quests.lifecycle import create_quest, expire_if_due, reroll_quest
from sidequest.utils.datetime_helpers import ensure_aware_utc, to_calendar_date

logger = logging.getLogger(__name__)

QuestGenerator = Callable[[PlayerClass, int], Awaitable[Sequence[Union[GeneratedQuest, dict]]]]


class QuestService:
    """
    Service for the quest board.

    Responsibilities:
    - Daily quest generation with fallback quests
    - Expiring stale quests
    - Rerolls (cooldown for players without a Hero Pass)
    """

    def __init__(self, store: ProgressStore, generator: Optional[QuestGenerator] = None):
        """
        Initialize QuestService.

        Args:
            store: ProgressStore implementation
            generator: async (player_class, count) -> quests; None means always use fallbacks
        """
        self.store = store
        self.generator = generator
        logger.debug("QuestService initialized")

    async def get_active_quests(self, user_id: str, now: datetime) -> List[Quest]:
        """Expire due quests, then return the ones still active (newest first)"""
        now = ensure_aware_utc(now, field="now")
        active = []
        for quest in await self.store.list_quests(user_id, status=QuestStatus.ACTIVE):
            refreshed = expire_if_due(quest, now)
            if refreshed.status == QuestStatus.EXPIRED:
                await self.store.save_quest(refreshed)
            else:
                active.append(refreshed)
        return active

    async def get_today_quests(self, user_id: str, now: datetime) -> List[Quest]:
        """Active quests created on the current calendar day"""
        today = to_calendar_date(now, field="now")
        return [
            q for q in await self.get_active_quests(user_id, now)
            if to_calendar_date(q.created_at, field="created_at") == today
        ]

    async def generate_daily_quests(
        self,
        user_id: str,
        player_class: Union[str, PlayerClass],
        now: datetime
    ) -> List[Quest]:
        """
        Generate and store today's quests

        Raises:
            QuestLimitError: today's quests already exist, or too many active quests
        """
        count = QUEST_CONFIG["daily_quest_count"]

        if len(await self.get_today_quests(user_id, now)) >= count:
            raise QuestLimitError(
                "Daily quests already generated",
                user_id=user_id,
                operation="generate_daily_quests"
            )
        if len(await self.get_active_quests(user_id, now)) + count > QUEST_CONFIG["max_active_quests"]:
            raise QuestLimitError(
                "Too many active quests. Complete some before generating more",
                user_id=user_id,
                operation="generate_daily_quests"
            )

        generated = await self._generate(get_player_class(player_class), count)
        quests = [create_quest(user_id, g, now) for g in generated]
        for quest in quests:
            await self.store.save_quest(quest)

        logger.info(f"Generated {len(quests)} daily quests for user {user_id}")
        return quests

    async def reroll_quest(
        self,
        user_id: str,
        quest_id: str,
        player_class: Union[str, PlayerClass],
        now: datetime,
        has_hero_pass: bool = False
    ) -> Quest:
        """
        Replace an active quest with a freshly generated one

        Raises:
            QuestStateError: quest is not the user's, or not active
            QuestLimitError: reroll cooldown has not elapsed (non Hero Pass)
        """
        now = ensure_aware_utc(now, field="now")
        stored = await self.store.get_quest(quest_id)

        if stored.user_id != user_id:
            raise QuestStateError(
                f"Quest {quest_id} does not belong to user {user_id}",
                quest_id=quest_id,
                status=stored.status.value,
                user_id=user_id,
                operation="reroll_quest"
            )

        quest = expire_if_due(stored, now)
        if quest.status != stored.status:
            await self.store.save_quest(quest)
        if quest.status != QuestStatus.ACTIVE:
            raise QuestStateError(
                f"Quest {quest_id} is {quest.status.value}, only active quests can be rerolled",
                quest_id=quest_id,
                status=quest.status.value,
                user_id=user_id,
                operation="reroll_quest"
            )

        if not has_hero_pass:
            last_reroll = await self.store.get_last_reroll_at(user_id)
            cooldown = timedelta(minutes=QUEST_CONFIG["reroll_cooldown_minutes"])
            if last_reroll is not None and now - last_reroll < cooldown:
                retry_after = int((last_reroll + cooldown - now).total_seconds())
                raise QuestLimitError(
                    f"Reroll available again in {retry_after // 60 + 1} minutes",
                    retry_after_seconds=retry_after,
                    user_id=user_id,
                    operation="reroll_quest"
                )

        generated = await self._generate(get_player_class(player_class), 1)
        new_quest = reroll_quest(quest, generated[0], now)

        await self.store.delete_quest(quest.id)
        await self.store.save_quest(new_quest)
        await self.store.record_reroll(user_id, now)
        return new_quest

    async def _generate(self, player_class: PlayerClass, count: int) -> List[GeneratedQuest]:
        """Ask the generator for quests, falling back to the built-in pool"""
        if self.generator is None:
            return get_fallback_quests(count)

        try:
            raw = await self.generator(player_class, count)
            quests = [q if isinstance(q, GeneratedQuest) else GeneratedQuest.model_validate(q) for q in raw or []]
            if not quests:
                raise QuestGenerationError("Quest generator returned no quests")
        except (QuestGenerationError, ValidationError) as e:
            logger.warning(f"Quest generation failed for {player_class.value}, using fallback quests: {e}")
            return get_fallback_quests(count)
        except Exception as e:
            logger.warning(
                f"Quest generator raised {type(e).__name__} for {player_class.value}, using fallback quests",
                exc_info=True
            )
            return get_fallback_quests(count)

        return quests[:count]
