"""Quest models"""
from enum import Enum
from datetime import datetime
from typing import Optional
from uuid import uuid4

from pydantic import BaseModel, Field


class QuestDifficulty(str, Enum):
    """Quest difficulty tiers"""
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class QuestStatus(str, Enum):
    """Quest lifecycle status"""
    ACTIVE = "active"
    COMPLETED = "completed"
    EXPIRED = "expired"


class ProofType(str, Enum):
    """Kind of proof submitted for a quest"""
    PHOTO = "photo"
    VIDEO = "video"


class GeneratedQuest(BaseModel):
    """Quest as returned by the quest generator, before it is assigned to a user"""
    title: str = Field(..., min_length=1, max_length=100)
    description: str = Field(..., min_length=1)
    difficulty: QuestDifficulty
    xp_reward: Optional[int] = Field(default=None, gt=0)


class Quest(BaseModel):
    """Quest assigned to a user"""
    id: str = Field(default_factory=lambda: str(uuid4()))
    user_id: str
    title: str
    description: str
    difficulty: QuestDifficulty
    xp_reward: int = Field(..., gt=0)
    status: QuestStatus = QuestStatus.ACTIVE
    created_at: datetime
    expires_at: datetime


class VerificationResult(BaseModel):
    """Outcome of the AI judge looking at a quest proof"""
    success: bool
    score: int = Field(..., ge=0, le=100)
    comment: str = ""
    fallback: bool = False


class QuestCompletion(BaseModel):
    """Record of a verified quest completion"""
    id: str = Field(default_factory=lambda: str(uuid4()))
    quest_id: str
    user_id: str
    proof_url: str
    proof_type: ProofType = ProofType.PHOTO
    ai_verified: bool
    ai_score: Optional[int] = None
    ai_comment: Optional[str] = None
    xp_awarded: int = Field(..., ge=0)
    completed_at: datetime
