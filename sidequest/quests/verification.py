"""
Handling of the AI judge's verdict on a quest proof

The judge itself is an external service. This module only turns whatever it
sent back into a VerificationResult, falling back to the honor system when the
judge is unavailable or answers with something unreadable.
"""

import logging
from typing import Any, Optional

from pydantic import ValidationError

from sidequest.models.quest import VerificationResult

logger = logging.getLogger(__name__)

HONOR_SYSTEM_SCORE = 75
HONOR_SYSTEM_COMMENT = "AI verification unavailable. Quest completed on honor system! 🎯"


def honor_system_result() -> VerificationResult:
    """Default verdict used when the judge cannot be reached"""
    return VerificationResult(
        success=True,
        score=HONOR_SYSTEM_SCORE,
        comment=HONOR_SYSTEM_COMMENT,
        fallback=True,
    )


def parse_verification_payload(payload: Optional[Any]) -> VerificationResult:
    """
    Parse the judge's response

    Accepts:
        {"success": bool, "score": int, "comment": str}
        {"error": str, "fallback": {"success": ..., "score": ..., "comment": ...}}

    Anything else yields the honor-system result.
    """
    if not isinstance(payload, dict):
        logger.warning(f"Verification payload is not an object ({type(payload).__name__}), using honor system")
        return honor_system_result()

    if "error" in payload:
        logger.warning(f"Quest verification error: {payload.get('error')}")
        fallback = payload.get("fallback")
        if isinstance(fallback, dict):
            try:
                return VerificationResult.model_validate({**fallback, "fallback": True})
            except ValidationError as e:
                logger.warning(f"Invalid fallback verdict from judge: {e}")
        return honor_system_result()

    try:
        return VerificationResult.model_validate({
            "success": payload["success"],
            "score": payload["score"],
            "comment": payload.get("comment") or "",
        })
    except (KeyError, ValidationError) as e:
        logger.warning(f"Unreadable verification payload, using honor system: {e}")
        return honor_system_result()


def experience_for_verification(result: VerificationResult) -> int:
    """XP earned for a verdict: the score on success, nothing otherwise"""
    if not result.success:
        return 0
    return result.score
