"""Unit tests for Streak System (sidequest/gamification/streak_system.py)"""
import pytest
from datetime import date, datetime, timezone, timedelta
from itertools import permutations

from sidequest.exceptions import InvalidInputError
from sidequest.gamification.streak_system import (
    advance_streak,
    format_streak_display,
    is_milestone,
)
from sidequest.models.profile import ProfileProgress


def make_profile(current=0, longest=0, last=None):
    return ProfileProgress(
        user_id="123456789",
        current_streak=current,
        longest_streak=longest,
        last_quest_date=last,
    )


# ============================================================================
# Streak Update Tests
# ============================================================================

def test_advance_streak_first_activity():
    """First completion starts a streak of 1"""
    result = advance_streak(make_profile(), date(2024, 1, 1))

    assert result.current_streak == 1
    assert result.longest_streak == 1
    assert result.last_quest_date == date(2024, 1, 1)


def test_advance_streak_consecutive_day():
    """Completion the day after continues the streak"""
    profile = make_profile(current=5, longest=10, last=date(2024, 1, 1))

    result = advance_streak(profile, "2024-01-02")

    assert result.current_streak == 6
    assert result.longest_streak == 10  # Unchanged
    assert result.last_quest_date == date(2024, 1, 2)


def test_advance_streak_new_best():
    """Best streak follows the current one once it is exceeded"""
    profile = make_profile(current=5, longest=5, last=date(2024, 1, 1))

    result = advance_streak(profile, date(2024, 1, 2))

    assert result.current_streak == 6
    assert result.longest_streak == 6


def test_advance_streak_gap_resets():
    """A gap of more than one day resets the streak"""
    profile = make_profile(current=5, longest=5, last=date(2024, 1, 1))

    result = advance_streak(profile, date(2024, 1, 5))

    assert result.current_streak == 1
    assert result.longest_streak == 5  # Best unchanged
    assert result.last_quest_date == date(2024, 1, 5)


def test_advance_streak_same_day_no_change():
    """A second completion on the same day does not double count"""
    profile = make_profile(current=3, longest=5, last=date(2024, 1, 10))

    first = advance_streak(profile, date(2024, 1, 10))
    second = advance_streak(first, date(2024, 1, 10))

    assert first.current_streak == 3
    assert second.current_streak == 3
    assert second.last_quest_date == date(2024, 1, 10)


def test_advance_streak_future_last_date_resets():
    """A last quest date after today is treated as a break"""
    profile = make_profile(current=4, longest=4, last=date(2024, 2, 1))

    result = advance_streak(profile, date(2024, 1, 20))

    assert result.current_streak == 1
    assert result.last_quest_date == date(2024, 1, 20)


def test_advance_streak_does_not_mutate_input():
    """Input snapshot is left as it was"""
    profile = make_profile(current=2, longest=2, last=date(2024, 1, 1))

    advance_streak(profile, date(2024, 1, 2))

    assert profile.current_streak == 2
    assert profile.last_quest_date == date(2024, 1, 1)


def test_advance_streak_across_month_boundary():
    """Consecutive days spanning a month boundary continue the streak"""
    profile = make_profile(current=8, longest=8, last=date(2024, 2, 29))

    result = advance_streak(profile, date(2024, 3, 1))

    assert result.current_streak == 9


def test_longest_streak_invariant_any_order():
    """longest >= current after every call, whatever order days arrive in"""
    days = [date(2024, 1, 1), date(2024, 1, 2), date(2024, 1, 3), date(2024, 1, 7)]

    for ordering in permutations(days):
        profile = make_profile()
        for day in ordering:
            profile = advance_streak(profile, day)
            assert profile.longest_streak >= profile.current_streak


def test_invalid_streak_precondition_rejected():
    """A profile with current > longest cannot be constructed"""
    with pytest.raises(ValueError):
        make_profile(current=10, longest=7)


# ============================================================================
# Date Normalization Tests
# ============================================================================

def test_advance_streak_accepts_aware_datetime():
    """Aware datetimes are reduced to their calendar day"""
    profile = make_profile(current=1, longest=1, last=date(2024, 1, 1))

    result = advance_streak(profile, datetime(2024, 1, 2, 23, 30, tzinfo=timezone.utc))

    assert result.current_streak == 2
    assert result.last_quest_date == date(2024, 1, 2)


def test_advance_streak_datetime_uses_given_timezone():
    """The calendar day depends on the quest timezone"""
    profile = make_profile(current=1, longest=1, last=date(2024, 1, 1))
    # 2024-01-02 03:00 UTC is still 2024-01-01 in New York
    moment = datetime(2024, 1, 2, 3, 0, tzinfo=timezone.utc)

    result = advance_streak(profile, moment, tz_name="America/New_York")

    assert result.current_streak == 1
    assert result.last_quest_date == date(2024, 1, 1)


def test_advance_streak_unknown_timezone():
    """An unknown zone is invalid input, not a lookup crash"""
    moment = datetime(2024, 1, 2, 3, 0, tzinfo=timezone.utc)

    with pytest.raises(InvalidInputError):
        advance_streak(make_profile(), moment, tz_name="Nowhere/Zone")


def test_advance_streak_rejects_naive_datetime():
    """Naive datetimes are ambiguous and rejected"""
    with pytest.raises(InvalidInputError):
        advance_streak(make_profile(), datetime(2024, 1, 2, 12, 0))


@pytest.mark.parametrize("bad_value", [
    "2024-13-01", "yesterday", "", "20240102", "2024-W01-2", 20240101, None
])
def test_advance_streak_rejects_malformed_date(bad_value):
    """Malformed dates raise InvalidInputError"""
    with pytest.raises(InvalidInputError) as exc_info:
        advance_streak(make_profile(), bad_value)

    assert exc_info.value.field == "today"


# ============================================================================
# Display Tests
# ============================================================================

def test_format_streak_display_no_streak():
    assert "No active streak" in format_streak_display(make_profile())


def test_format_streak_display_with_best():
    text = format_streak_display(make_profile(current=6, longest=9, last=date(2024, 1, 1)))

    assert "6 days" in text
    assert "best: 9" in text


def test_format_streak_display_milestone():
    text = format_streak_display(make_profile(current=7, longest=7, last=date(2024, 1, 1)))

    assert "7-day milestone" in text
    assert is_milestone(7) is True
    assert is_milestone(8) is False


def test_consecutive_week_reaches_milestone():
    """Seven straight days produce a 7-day streak"""
    profile = make_profile()
    start = date(2024, 3, 1)
    for offset in range(7):
        profile = advance_streak(profile, start + timedelta(days=offset))

    assert profile.current_streak == 7
    assert is_milestone(profile.current_streak)
