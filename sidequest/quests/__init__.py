"""Quest catalog, lifecycle and verification handling"""

from sidequest.quests.catalog import (
    FALLBACK_QUESTS,
    PLAYER_CLASSES,
    QUEST_CONFIG,
    PlayerClass,
    get_fallback_quests,
    get_player_class,
    xp_for_difficulty,
)
from sidequest.quests.lifecycle import (
    complete_quest,
    create_quest,
    expire_if_due,
    is_expired,
    reroll_quest,
)
from sidequest.quests.verification import (
    experience_for_verification,
    honor_system_result,
    parse_verification_payload,
)

__all__ = [
    "FALLBACK_QUESTS",
    "PLAYER_CLASSES",
    "QUEST_CONFIG",
    "PlayerClass",
    "get_fallback_quests",
    "get_player_class",
    "xp_for_difficulty",
    "complete_quest",
    "create_quest",
    "expire_if_due",
    "is_expired",
    "reroll_quest",
    "experience_for_verification",
    "honor_system_result",
    "parse_verification_payload",
]
