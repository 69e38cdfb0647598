"""
Quest lifecycle transitions

    active --(verified proof)--> completed
    active --(now >= expires_at)--> expired
    active --(reroll)--> replaced by a new active quest

Every function returns a new Quest; inputs are never modified.
"""

import logging
from datetime import datetime, timedelta
from typing import Optional, Union

from sidequest.exceptions import QuestStateError
from sidequest.models.quest import GeneratedQuest, Quest, QuestStatus
from sidequest.quests.catalog import QUEST_CONFIG, xp_for_difficulty
from sidequest.utils.datetime_helpers import ensure_aware_utc

logger = logging.getLogger(__name__)


def create_quest(
    user_id: str,
    generated: Union[GeneratedQuest, dict],
    now: datetime,
    expiration_hours: Optional[int] = None
) -> Quest:
    """
    Assign a generated quest to a user

    The reward comes from the generator when present, otherwise from the
    difficulty tier. Expiry is `expiration_hours` (default 24) after `now`.
    """
    if isinstance(generated, dict):
        generated = GeneratedQuest.model_validate(generated)
    now = ensure_aware_utc(now, field="now")
    hours = expiration_hours or QUEST_CONFIG["quest_expiration_hours"]

    quest = Quest(
        user_id=user_id,
        title=generated.title,
        description=generated.description,
        difficulty=generated.difficulty,
        xp_reward=generated.xp_reward or xp_for_difficulty(generated.difficulty),
        status=QuestStatus.ACTIVE,
        created_at=now,
        expires_at=now + timedelta(hours=hours),
    )
    logger.debug(f"Created quest {quest.id} '{quest.title}' for user {user_id}")
    return quest


def is_expired(quest: Quest, now: datetime) -> bool:
    """True if the quest is expired, or still active but past its expiry"""
    if quest.status == QuestStatus.EXPIRED:
        return True
    if quest.status == QuestStatus.COMPLETED:
        return False
    return ensure_aware_utc(now, field="now") >= quest.expires_at


def expire_if_due(quest: Quest, now: datetime) -> Quest:
    """Return an expired copy of an active quest past its expiry, else the quest itself"""
    if quest.status == QuestStatus.ACTIVE and is_expired(quest, now):
        logger.info(f"Quest {quest.id} expired for user {quest.user_id}")
        return quest.model_copy(update={"status": QuestStatus.EXPIRED})
    return quest


def complete_quest(quest: Quest, now: datetime) -> Quest:
    """
    Mark an active quest completed

    Raises:
        QuestStateError: quest already completed, expired, or past its expiry
    """
    if quest.status != QuestStatus.ACTIVE:
        raise QuestStateError(
            f"Quest {quest.id} is {quest.status.value}, only active quests can be completed",
            quest_id=quest.id,
            status=quest.status.value,
            user_id=quest.user_id,
            operation="complete_quest"
        )
    if is_expired(quest, now):
        raise QuestStateError(
            f"Quest {quest.id} expired at {quest.expires_at.isoformat()}",
            quest_id=quest.id,
            status=QuestStatus.EXPIRED.value,
            user_id=quest.user_id,
            operation="complete_quest"
        )

    logger.info(f"Quest {quest.id} completed by user {quest.user_id}")
    return quest.model_copy(update={"status": QuestStatus.COMPLETED})


def reroll_quest(
    quest: Quest,
    replacement: Union[GeneratedQuest, dict],
    now: datetime
) -> Quest:
    """
    Build the quest that replaces `quest` after a reroll

    The caller deletes the old quest and stores the returned one.

    Raises:
        QuestStateError: quest is not active
    """
    if quest.status != QuestStatus.ACTIVE:
        raise QuestStateError(
            f"Quest {quest.id} is {quest.status.value}, only active quests can be rerolled",
            quest_id=quest.id,
            status=quest.status.value,
            user_id=quest.user_id,
            operation="reroll_quest"
        )

    new_quest = create_quest(quest.user_id, replacement, now)
    logger.info(f"Quest {quest.id} rerolled into {new_quest.id} for user {quest.user_id}")
    return new_quest
