"""
XP and Leveling System

Pure functions for experience thresholds, level calculation and XP awards.
Nothing here touches storage: callers read a ProfileProgress snapshot, pass it
in, and persist the returned copy.

Leveling Curve:
- Experience to advance from level L to L+1: floor(100 * 1.15^(L-1))
- Level 1 -> 2: 100 XP, each level after that about 15% more
- Hard ceiling at level 50 (no rollover)

Streak Bonus:
- 10 XP per streak day, capped at 100 XP
"""

import logging
import math
from typing import Any, Dict, NamedTuple

from sidequest.exceptions import InvalidInputError
from sidequest.models.profile import ProfileProgress

logger = logging.getLogger(__name__)

MAX_LEVEL = 50
BASE_LEVEL_XP = 100
LEVEL_GROWTH_RATE = 1.15

STREAK_BONUS_XP_PER_DAY = 10
MAX_STREAK_BONUS_XP = 100


class ExperienceAward(NamedTuple):
    """Result of apply_experience_award"""
    profile: ProfileProgress
    leveled_up: bool
    new_level: int


def _require_int(value: Any, field: str) -> int:
    # bool is an int subclass but never a meaningful amount or level
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidInputError(
            f"Expected an integer, got {type(value).__name__}",
            field=field,
            value=value
        )
    return value


def experience_required_for_level(level: int) -> int:
    """
    Experience needed to advance from `level` to `level + 1`

    Args:
        level: Current level, 1..50

    Returns:
        floor(100 * 1.15^(level-1))

    Raises:
        InvalidInputError: level outside 1..50

    Example:
        >>> experience_required_for_level(1)
        100
        >>> experience_required_for_level(3)
        132
    """
    level = _require_int(level, "level")
    if level < 1 or level > MAX_LEVEL:
        raise InvalidInputError(
            f"Level must be between 1 and {MAX_LEVEL}",
            field="level",
            value=level
        )
    return math.floor(BASE_LEVEL_XP * LEVEL_GROWTH_RATE ** (level - 1))


def cumulative_experience_through_level(level: int) -> int:
    """
    Total experience needed to complete levels 1..level

    cumulative_experience_through_level(0) == 0, so the experience needed to
    *reach* level L is cumulative_experience_through_level(L - 1).
    """
    level = _require_int(level, "level")
    if level < 0 or level > MAX_LEVEL:
        raise InvalidInputError(
            f"Level must be between 0 and {MAX_LEVEL}",
            field="level",
            value=level
        )
    return sum(experience_required_for_level(lvl) for lvl in range(1, level + 1))


def calculate_level(total_experience: int) -> int:
    """
    Calculate level from total experience

    Walks up from level 1, adding each level's requirement until the next one
    would exceed total_experience. Stops at MAX_LEVEL.

    Raises:
        InvalidInputError: negative or non-integer experience
    """
    total_experience = _require_int(total_experience, "total_experience")
    if total_experience < 0:
        raise InvalidInputError(
            "Total experience cannot be negative",
            field="total_experience",
            value=total_experience
        )

    level = 1
    xp_required = 0

    while level < MAX_LEVEL:
        next_level_xp = experience_required_for_level(level)
        if xp_required + next_level_xp > total_experience:
            break
        xp_required += next_level_xp
        level += 1

    return level


def progress_fraction(total_experience: int, current_level: int) -> float:
    """
    Fraction of the way through current_level toward current_level + 1

    Clamped to [0, 1]. A stale current_level lower than the real level yields 1.0
    rather than a value above 1; at MAX_LEVEL the bar is always full.
    """
    total_experience = _require_int(total_experience, "total_experience")
    current_level = _require_int(current_level, "current_level")
    if total_experience < 0:
        raise InvalidInputError(
            "Total experience cannot be negative",
            field="total_experience",
            value=total_experience
        )
    if current_level < 1 or current_level > MAX_LEVEL:
        raise InvalidInputError(
            f"Level must be between 1 and {MAX_LEVEL}",
            field="current_level",
            value=current_level
        )

    if current_level == MAX_LEVEL:
        return 1.0

    xp_into_level = total_experience - cumulative_experience_through_level(current_level - 1)
    xp_needed_for_next = experience_required_for_level(current_level)
    return max(0.0, min(xp_into_level / xp_needed_for_next, 1.0))


def get_level_info(total_experience: int) -> Dict[str, Any]:
    """
    Summarize level progress for display

    Returns:
        {
            'current_level': int,
            'experience_in_current_level': int,
            'experience_to_next_level': int,  # 0 at the ceiling
            'total_experience_for_next_level': int,  # None at the ceiling
            'progress': float,
            'is_max_level': bool
        }
    """
    level = calculate_level(total_experience)
    xp_before_level = cumulative_experience_through_level(level - 1)
    xp_in_level = total_experience - xp_before_level
    is_max_level = level == MAX_LEVEL

    if is_max_level:
        xp_to_next = 0
        total_for_next = None
    else:
        total_for_next = xp_before_level + experience_required_for_level(level)
        xp_to_next = total_for_next - total_experience

    return {
        "current_level": level,
        "experience_in_current_level": xp_in_level,
        "experience_to_next_level": xp_to_next,
        "total_experience_for_next_level": total_for_next,
        "progress": progress_fraction(total_experience, level),
        "is_max_level": is_max_level,
    }


def apply_experience_award(profile: ProfileProgress, amount: int) -> ExperienceAward:
    """
    Add experience to a profile snapshot and recompute its level

    Streak fields are left untouched; call advance_streak separately.

    Args:
        profile: Current progress snapshot (not modified)
        amount: Positive XP amount

    Returns:
        ExperienceAward(profile=<new snapshot>, leveled_up, new_level)

    Raises:
        InvalidInputError: amount is not a positive integer
    """
    if isinstance(amount, bool) or not isinstance(amount, int) or amount <= 0:
        raise InvalidInputError(
            "Experience award must be a positive integer",
            field="amount",
            value=amount,
            user_id=profile.user_id,
            operation="apply_experience_award"
        )

    new_total = profile.total_experience + amount
    new_level = calculate_level(new_total)
    leveled_up = new_level > profile.level

    updated = profile.model_copy(update={"total_experience": new_total, "level": new_level})

    logger.info(
        f"Awarded {amount} XP to user {profile.user_id}. "
        f"Total: {new_total} XP, Level: {new_level}"
    )
    if leveled_up:
        logger.info(f"User {profile.user_id} leveled up from {profile.level} to {new_level}!")

    return ExperienceAward(profile=updated, leveled_up=leveled_up, new_level=new_level)


def streak_bonus_xp(current_streak: int) -> int:
    """
    Bonus XP for an ongoing streak: 10 per day, capped at 100

    Not applied by apply_experience_award; callers decide whether to add it.
    """
    current_streak = _require_int(current_streak, "current_streak")
    if current_streak < 0:
        raise InvalidInputError(
            "Streak cannot be negative",
            field="current_streak",
            value=current_streak
        )
    return min(current_streak * STREAK_BONUS_XP_PER_DAY, MAX_STREAK_BONUS_XP)
