"""Configuration management"""
import logging
import os
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv

from sidequest.exceptions import ConfigurationError

load_dotenv()

# Logging
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

# Calendar days for streaks and "today's quests" are computed in this timezone
QUEST_TIMEZONE: str = os.getenv("QUEST_TIMEZONE", "UTC")

# Quests
DAILY_QUEST_COUNT: int = int(os.getenv("DAILY_QUEST_COUNT", "3"))
QUEST_EXPIRATION_HOURS: int = int(os.getenv("QUEST_EXPIRATION_HOURS", "24"))
REROLL_COOLDOWN_MINUTES: int = int(os.getenv("REROLL_COOLDOWN_MINUTES", "15"))


# Validation
def validate_config() -> None:
    """Validate configuration"""
    try:
        ZoneInfo(QUEST_TIMEZONE)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise ConfigurationError(
            f"Unknown QUEST_TIMEZONE '{QUEST_TIMEZONE}'",
            config_key="QUEST_TIMEZONE",
            cause=e
        )
    if not isinstance(logging.getLevelName(LOG_LEVEL.upper()), int):
        raise ConfigurationError(f"Unknown LOG_LEVEL '{LOG_LEVEL}'", config_key="LOG_LEVEL")
    if DAILY_QUEST_COUNT < 1:
        raise ConfigurationError("DAILY_QUEST_COUNT must be at least 1", config_key="DAILY_QUEST_COUNT")
    if QUEST_EXPIRATION_HOURS < 1:
        raise ConfigurationError("QUEST_EXPIRATION_HOURS must be at least 1", config_key="QUEST_EXPIRATION_HOURS")
    if REROLL_COOLDOWN_MINUTES < 0:
        raise ConfigurationError("REROLL_COOLDOWN_MINUTES cannot be negative", config_key="REROLL_COOLDOWN_MINUTES")


def configure_logging() -> None:
    """Configure root logging for applications embedding sidequest"""
    logging.basicConfig(
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        level=getattr(logging, LOG_LEVEL.upper(), logging.INFO)
    )
