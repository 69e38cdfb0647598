"""
RPG game configuration: player classes, quest difficulties and fallback quests
"""

from enum import Enum
from typing import Dict, List, Union

from sidequest import config
from sidequest.exceptions import InvalidInputError
from sidequest.models.quest import GeneratedQuest, QuestDifficulty


class PlayerClass(str, Enum):
    """Player classes chosen during onboarding"""
    WANDERER = "Wanderer"
    BARD = "Bard"
    RANGER = "Ranger"
    ROGUE = "Rogue"
    SCHOLAR = "Scholar"


PLAYER_CLASSES: Dict[PlayerClass, Dict[str, str]] = {
    PlayerClass.WANDERER: {
        "icon": "🎒",
        "description": "Balanced adventurer, ready for anything",
        "quest_preference": "balanced",
    },
    PlayerClass.BARD: {
        "icon": "🎭",
        "description": "Master of social interactions",
        "quest_preference": "social",
    },
    PlayerClass.RANGER: {
        "icon": "🌲",
        "description": "Nature explorer and outdoor enthusiast",
        "quest_preference": "nature",
    },
    PlayerClass.ROGUE: {
        "icon": "🗡️",
        "description": "Thrill-seeker who loves chaos",
        "quest_preference": "chaos",
    },
    PlayerClass.SCHOLAR: {
        "icon": "📚",
        "description": "Knowledge seeker and creative mind",
        "quest_preference": "creative",
    },
}

QUEST_CONFIG = {
    "daily_quest_count": config.DAILY_QUEST_COUNT,
    "max_active_quests": 10,
    "quest_expiration_hours": config.QUEST_EXPIRATION_HOURS,
    "reroll_cooldown_minutes": config.REROLL_COOLDOWN_MINUTES,
}

DIFFICULTY_XP: Dict[QuestDifficulty, int] = {
    QuestDifficulty.EASY: 50,
    QuestDifficulty.MEDIUM: 100,
    QuestDifficulty.HARD: 200,
}

FALLBACK_QUESTS: List[GeneratedQuest] = [
    GeneratedQuest(
        title="Yellow Discovery",
        description="Find something yellow and take a photo of it",
        difficulty=QuestDifficulty.EASY,
        xp_reward=50,
    ),
    GeneratedQuest(
        title="Cloud Gazer",
        description="Take a photo of an interesting cloud formation",
        difficulty=QuestDifficulty.EASY,
        xp_reward=50,
    ),
    GeneratedQuest(
        title="Random Act of Kindness",
        description="Compliment a stranger and document it",
        difficulty=QuestDifficulty.HARD,
        xp_reward=200,
    ),
    GeneratedQuest(
        title="Menu Roulette",
        description="Order something you have never tried before",
        difficulty=QuestDifficulty.MEDIUM,
        xp_reward=100,
    ),
    GeneratedQuest(
        title="Urban Explorer",
        description="Visit a place in your city you have never been to",
        difficulty=QuestDifficulty.MEDIUM,
        xp_reward=100,
    ),
]


def get_player_class(name: Union[str, PlayerClass, None]) -> PlayerClass:
    """Resolve a class name, defaulting to Wanderer for unknown names"""
    if isinstance(name, PlayerClass):
        return name
    try:
        return PlayerClass(name)
    except ValueError:
        return PlayerClass.WANDERER


def xp_for_difficulty(difficulty: Union[str, QuestDifficulty]) -> int:
    """Base XP reward for a difficulty tier"""
    try:
        return DIFFICULTY_XP[QuestDifficulty(difficulty)]
    except ValueError as e:
        raise InvalidInputError(
            f"Unknown quest difficulty '{difficulty}'",
            field="difficulty",
            value=difficulty,
            cause=e
        )


def get_fallback_quests(count: int) -> List[GeneratedQuest]:
    """First `count` quests of the fallback pool, used when generation fails"""
    if count < 0:
        raise InvalidInputError("Quest count cannot be negative", field="count", value=count)
    return [quest.model_copy() for quest in FALLBACK_QUESTS[:count]]
