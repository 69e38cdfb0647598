"""Profile progression models"""
from datetime import date
from typing import Optional

from pydantic import BaseModel, Field, model_validator


class ProfileProgress(BaseModel):
    """
    Subset of a user profile that drives progression

    `level` is derived from `total_experience`; `version` is the optimistic
    concurrency token owned by the progress store.
    """
    user_id: str
    total_experience: int = Field(default=0, ge=0)
    level: int = Field(default=1, ge=1, le=50)
    current_streak: int = Field(default=0, ge=0)
    longest_streak: int = Field(default=0, ge=0)
    last_quest_date: Optional[date] = None
    version: int = Field(default=0, ge=0)

    @model_validator(mode='after')
    def validate_streaks(self) -> 'ProfileProgress':
        """Longest streak can never trail the current one"""
        if self.longest_streak < self.current_streak:
            raise ValueError(
                f"longest_streak ({self.longest_streak}) cannot be less than "
                f"current_streak ({self.current_streak})"
            )
        return self
