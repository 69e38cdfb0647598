"""Pydantic models for sidequest"""
from sidequest.models.profile import ProfileProgress
from sidequest.models.quest import (
    GeneratedQuest,
    ProofType,
    Quest,
    QuestCompletion,
    QuestDifficulty,
    QuestStatus,
    VerificationResult,
)

__all__ = [
    "ProfileProgress",
    "GeneratedQuest",
    "ProofType",
    "Quest",
    "QuestCompletion",
    "QuestDifficulty",
    "QuestStatus",
    "VerificationResult",
]
