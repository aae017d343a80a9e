"""Domain models for goal streaks."""

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class Streak:
    """Consecutive days with the calorie goal met."""

    count: int = 0
    last_date: date | None = None


@dataclass(frozen=True)
class StreakEvaluation:
    """Outcome of re-evaluating a user's streak."""

    streak: Streak
    changed: bool
    record_beaten: bool
