"""
Progression engine for sidequest

- XP thresholds and leveling (1..50)
- Daily quest streaks
"""

from sidequest.gamification.xp_system import (
    MAX_LEVEL,
    ExperienceAward,
    apply_experience_award,
    calculate_level,
    cumulative_experience_through_level,
    experience_required_for_level,
    get_level_info,
    progress_fraction,
    streak_bonus_xp,
)
from sidequest.gamification.streak_system import advance_streak, format_streak_display

__all__ = [
    "MAX_LEVEL",
    "ExperienceAward",
    "apply_experience_award",
    "calculate_level",
    "cumulative_experience_through_level",
    "experience_required_for_level",
    "get_level_info",
    "progress_fraction",
    "streak_bonus_xp",
    "advance_streak",
    "format_streak_display",
]
