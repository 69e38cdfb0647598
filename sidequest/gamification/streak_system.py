"""
Daily Quest Streak System

A streak counts consecutive calendar days with at least one completed quest.

Rules:
- First completion ever: streak starts at 1
- Last completion yesterday: streak continues (+1)
- Last completion today: already counted, no change
- Anything else (gap of 2+ days, or a last date in the future): reset to 1
- longest_streak tracks the best streak ever
"""

from typing import Optional
from datetime import timedelta
import logging

from sidequest.models.profile import ProfileProgress
from sidequest.utils.datetime_helpers import DateLike, to_calendar_date

logger = logging.getLogger(__name__)

STREAK_MILESTONES = (7, 14, 30, 100)


def advance_streak(
    profile: ProfileProgress,
    today: DateLike,
    tz_name: Optional[str] = None
) -> ProfileProgress:
    """
    Apply a quest completion on `today` to the profile's streak

    Args:
        profile: Current progress snapshot (not modified)
        today: Completion day as date, aware datetime or 'YYYY-MM-DD'
        tz_name: Timezone used to turn datetimes into days (defaults to QUEST_TIMEZONE)

    Returns:
        New snapshot with current_streak, longest_streak and last_quest_date updated

    Raises:
        InvalidInputError: today cannot be read as a calendar date
    """
    today = to_calendar_date(today, field="today", tz_name=tz_name)
    last_date = profile.last_quest_date
    old_streak = profile.current_streak

    if last_date is None:
        new_streak = 1
    elif last_date == today:
        new_streak = old_streak
    elif last_date == today - timedelta(days=1):
        new_streak = old_streak + 1
    else:
        new_streak = 1
        gap_days = (today - last_date).days
        logger.info(
            f"User {profile.user_id} streak broken. "
            f"Was {old_streak}, gap was {gap_days} days"
        )

    updated = profile.model_copy(update={
        "current_streak": new_streak,
        "longest_streak": max(new_streak, profile.longest_streak),
        "last_quest_date": today,
    })

    logger.info(
        f"Updated streak for user {profile.user_id}: "
        f"{old_streak} → {new_streak} days"
    )
    return updated


def is_milestone(current_streak: int) -> bool:
    """True when the streak just reached one of STREAK_MILESTONES"""
    return current_streak in STREAK_MILESTONES


def format_streak_display(profile: ProfileProgress) -> str:
    """
    Format a profile's streak for display

    Returns:
        e.g. "🔥 Streak: 6 days (best: 9)"
    """
    current = profile.current_streak
    if current == 0:
        return "No active streak yet. Complete a quest to start one! 💪"

    unit = "day" if current == 1 else "days"
    line = f"🔥 Streak: {current} {unit}"
    if profile.longest_streak > current:
        line += f" (best: {profile.longest_streak})"
    if is_milestone(current):
        line += f"\n🏆 {current}-day milestone!"
    return line
