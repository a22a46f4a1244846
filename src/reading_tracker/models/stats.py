"""Streak and engagement stats models."""

from datetime import datetime

from pydantic import BaseModel, Field

from .timestamps import LocalDatetime


class Streak(BaseModel):
    """Consecutive-day engagement streak."""

    current: int = Field(0, ge=0)
    longest: int = Field(0, ge=0)  # High-water mark of current
    last_verdict_date: datetime | None = None


class UserStats(BaseModel):
    """Per-user engagement aggregate, a single row per user."""

    current_streak: int = Field(0, ge=0)
    longest_streak: int = Field(0, ge=0)
    last_verdict_date: LocalDatetime | None = None
    total_kept: int = 0
    total_discarded: int = 0
    total_revisited: int = 0
    weekly_kept: int = 0
    weekly_discarded: int = 0

    @property
    def streak(self) -> Streak:
        """Streak view of the stored counters."""
        return Streak(
            current=self.current_streak,
            longest=self.longest_streak,
            last_verdict_date=self.last_verdict_date,
        )

    @property
    def total_decided(self) -> int:
        """Number of verdicts recorded so far."""
        return self.total_kept + self.total_discarded + self.total_revisited

    def with_streak(self, streak: Streak) -> "UserStats":
        """Return a copy carrying the given streak."""
        return self.model_copy(
            update={
                "current_streak": streak.current,
                "longest_streak": streak.longest,
                "last_verdict_date": streak.last_verdict_date,
            }
        )
