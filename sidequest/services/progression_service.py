"""
ProgressionService - Quest Completion and XP Business Logic

Runs a verified quest completion through the progression engine and commits
the result: completion record, quest status, XP/level, streak.
"""

import logging
from datetime import date, datetime
from typing import Any, Dict, Optional

from sidequest.db.progress_store import ProgressStore
from sidequest.exceptions import QuestStateError
from sidequest.gamification import (
    advance_streak,
    apply_experience_award,
    format_streak_display,
    get_level_info,
)
from sidequest.models.profile import ProfileProgress
from sidequest.models.quest import ProofType, QuestCompletion, VerificationResult
from sidequest.quests.lifecycle import complete_quest
from sidequest.quests.verification import experience_for_verification
from sidequest.utils.datetime_helpers import DateLike, ensure_aware_utc, now_utc, to_calendar_date

logger = logging.getLogger(__name__)


class ProgressionService:
    """
    Service for player progression.

    Responsibilities:
    - Awarding XP and detecting level-ups
    - Streak updates on quest completion
    - Committing profile changes with a version check
    """

    def __init__(self, store: ProgressStore):
        """
        Initialize ProgressionService.

        Args:
            store: ProgressStore implementation
        """
        self.store = store
        logger.debug("ProgressionService initialized")

    async def award_experience(self, user_id: str, amount: int) -> Dict[str, Any]:
        """
        Award XP outside of a quest completion

        Returns:
            {
                'xp_awarded': int,
                'new_total_experience': int,
                'leveled_up': bool,
                'new_level': int,
                'old_level': int
            }
        """
        profile = await self.store.get_profile(user_id)
        award = apply_experience_award(profile, amount)
        await self.store.save_profile(award.profile, expected_version=profile.version)

        return {
            "xp_awarded": amount,
            "new_total_experience": award.profile.total_experience,
            "leveled_up": award.leveled_up,
            "new_level": award.new_level,
            "old_level": profile.level,
        }

    async def complete_quest(
        self,
        user_id: str,
        quest_id: str,
        verification: VerificationResult,
        proof_url: str,
        proof_type: ProofType = ProofType.PHOTO,
        today: Optional[DateLike] = None,
        now: Optional[datetime] = None
    ) -> Dict[str, Any]:
        """
        Process a judged quest proof.

        A failed verdict leaves everything untouched. A successful one records
        the completion, closes the quest, awards the score as XP and advances
        the streak. Everything is committed in one store call that checks the
        profile version read at the start and that the quest is still active.

        Args:
            user_id: Player ID
            quest_id: Quest being completed
            verification: Verdict from the AI judge (or honor-system fallback)
            proof_url: Where the proof image is stored
            proof_type: photo or video
            today: Completion day (defaults to the calendar day of `now`)
            now: Completion time (defaults to current UTC time)

        Returns:
            {
                'completed': bool,
                'xp_awarded': int,
                'leveled_up': bool,
                'new_level': int,
                'current_streak': int,
                'longest_streak': int,
                'progress': float,
                'message': str
            }

        Raises:
            QuestStateError: quest belongs to someone else, or is not active
                (including a concurrent completion of the same quest)
            RecordNotFoundError: unknown quest
            ConcurrentUpdateError: profile changed while this completion ran
        """
        now = ensure_aware_utc(now, field="now") if now is not None else now_utc()
        completion_day: date = to_calendar_date(today if today is not None else now, field="today")

        profile = await self.store.get_profile(user_id)
        quest = await self.store.get_quest(quest_id)

        if quest.user_id != user_id:
            raise QuestStateError(
                f"Quest {quest_id} does not belong to user {user_id}",
                quest_id=quest_id,
                status=quest.status.value,
                user_id=user_id,
                operation="complete_quest"
            )

        if not verification.success:
            logger.info(f"Quest {quest_id} proof rejected for user {user_id} (score {verification.score})")
            return {
                "completed": False,
                "xp_awarded": 0,
                "leveled_up": False,
                "new_level": profile.level,
                "current_streak": profile.current_streak,
                "longest_streak": profile.longest_streak,
                "progress": get_level_info(profile.total_experience)["progress"],
                "message": verification.comment or "Proof not accepted. Give it another shot!",
            }

        completed_quest = complete_quest(quest, now)
        xp_awarded = experience_for_verification(verification)

        # A zero score still counts as a completion for the streak
        leveled_up = False
        updated = profile
        if xp_awarded > 0:
            award = apply_experience_award(profile, xp_awarded)
            updated = award.profile
            leveled_up = award.leveled_up
        updated = advance_streak(updated, completion_day)

        completion = QuestCompletion(
            quest_id=quest_id,
            user_id=user_id,
            proof_url=proof_url,
            proof_type=proof_type,
            ai_verified=not verification.fallback,
            ai_score=verification.score,
            ai_comment=verification.comment,
            xp_awarded=xp_awarded,
            completed_at=now,
        )
        # Profile, quest status and completion record land together or not at all
        saved = await self.store.commit_completion(
            updated,
            expected_version=profile.version,
            quest=completed_quest,
            completion=completion,
        )

        message = self._build_completion_message(verification, xp_awarded, leveled_up, saved)

        logger.info(
            f"Quest completion processed: user={user_id}, quest={quest_id}, "
            f"xp={xp_awarded}, level={saved.level}, streak={saved.current_streak}"
        )

        return {
            "completed": True,
            "xp_awarded": xp_awarded,
            "leveled_up": leveled_up,
            "new_level": saved.level,
            "current_streak": saved.current_streak,
            "longest_streak": saved.longest_streak,
            "progress": get_level_info(saved.total_experience)["progress"],
            "message": message,
        }

    async def get_progress(self, user_id: str) -> Dict[str, Any]:
        """
        Get a user's progression summary

        Returns:
            Profile fields merged with get_level_info() output
        """
        profile = await self.store.get_profile(user_id)
        return {
            "user_id": user_id,
            "total_experience": profile.total_experience,
            "current_streak": profile.current_streak,
            "longest_streak": profile.longest_streak,
            "last_quest_date": profile.last_quest_date,
            **get_level_info(profile.total_experience),
        }

    def _build_completion_message(
        self,
        verification: VerificationResult,
        xp_awarded: int,
        leveled_up: bool,
        profile: ProfileProgress
    ) -> str:
        lines = []
        if verification.comment:
            lines.append(verification.comment)
        lines.append(f"⭐ +{xp_awarded} XP")
        if leveled_up:
            lines.append(f"🎉 LEVEL UP! You reached level {profile.level}!")
        lines.append(format_streak_display(profile))
        return "\n".join(lines)
