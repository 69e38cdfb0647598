"""Global test fixtures and utilities for sidequest tests"""
import pytest
from datetime import datetime, date, timezone

from sidequest.db.progress_store import InMemoryProgressStore
from sidequest.models.profile import ProfileProgress
from sidequest.models.quest import GeneratedQuest, QuestDifficulty, VerificationResult
from sidequest.quests.lifecycle import create_quest


# ============================================================================
# User & Profile Fixtures
# ============================================================================

@pytest.fixture
def test_user_id():
    """Standard test user ID"""
    return "user-123456789"


@pytest.fixture
def fresh_profile(test_user_id):
    """Profile of a player who has never completed a quest"""
    return ProfileProgress(user_id=test_user_id)


@pytest.fixture
def seasoned_profile(test_user_id):
    """Profile with XP and a running streak"""
    return ProfileProgress(
        user_id=test_user_id,
        total_experience=250,
        level=3,
        current_streak=5,
        longest_streak=9,
        last_quest_date=date(2024, 1, 1),
    )


# ============================================================================
# Time Fixtures
# ============================================================================

@pytest.fixture
def fixed_now():
    """Fixed UTC timestamp for deterministic quest timing"""
    return datetime(2024, 1, 15, 12, 0, 0, tzinfo=timezone.utc)


# ============================================================================
# Quest Fixtures
# ============================================================================

@pytest.fixture
def generated_quest():
    """A quest as returned by the generator"""
    return GeneratedQuest(
        title="Sunset Chaser",
        description="Take a photo of the sunset from somewhere new",
        difficulty=QuestDifficulty.MEDIUM,
        xp_reward=100,
    )


@pytest.fixture
def active_quest(test_user_id, generated_quest, fixed_now):
    """Active quest created at fixed_now"""
    return create_quest(test_user_id, generated_quest, fixed_now)


@pytest.fixture
def approved_verdict():
    """Successful AI verdict"""
    return VerificationResult(success=True, score=80, comment="Great shot! 📸")


@pytest.fixture
def rejected_verdict():
    """Failed AI verdict"""
    return VerificationResult(success=False, score=20, comment="That looks like a cat, not a sunset")


# ============================================================================
# Store Fixtures
# ============================================================================

@pytest.fixture
def store():
    """Empty in-memory progress store"""
    return InMemoryProgressStore()
