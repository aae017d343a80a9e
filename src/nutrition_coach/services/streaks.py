"""Goal streak tracking."""

import logging
from dataclasses import dataclass
from datetime import date, timedelta
from uuid import UUID

from nutrition_coach.domain.logs import DailyLog
from nutrition_coach.domain.streaks import Streak, StreakEvaluation
from nutrition_coach.services.celebrations import (
    STREAK_RECORD_CELEBRATION,
    CelebrationSink,
)
from nutrition_coach.services.clock import Clock, today
from nutrition_coach.services.daily_logs import is_goal_achieved, load_daily_log
from nutrition_coach.services.documents import (
    streak_from_document,
    streak_to_document,
)
from nutrition_coach.services.store import DocumentStore, streak_key

_logger = logging.getLogger(__name__)


def compute_streak(
    current_day: date,
    today_log: DailyLog | None,
    yesterday_log: DailyLog | None,
    stored: Streak,
) -> Streak:
    """Return the streak implied by today's and yesterday's logs.

    Only a two-day window is inspected: a chain is carried forward when
    yesterday met its goal, and a day older than yesterday never revives
    or breaks a streak on its own. Re-evaluating later the same day with
    unchanged logs returns the stored streak as is.
    """
    yesterday = current_day - timedelta(days=1)
    count = 0
    last_date: date | None = None

    carried = yesterday_log is not None and is_goal_achieved(yesterday_log)
    if carried:
        if stored.last_date == yesterday:
            count = stored.count
        elif stored.last_date == current_day:
            # The stored count already includes today.
            count = max(stored.count - 1, 1)
        else:
            count = 1
        last_date = yesterday

    if today_log is not None and is_goal_achieved(today_log):
        if carried:
            count += 1
        elif stored.last_date != current_day:
            count = 1
        else:
            count = stored.count
        last_date = current_day

    return Streak(count=count, last_date=last_date)


@dataclass
class StreakService:
    """Re-evaluates and persists the goal streak of a user."""

    store: DocumentStore
    celebrations: CelebrationSink
    clock: Clock

    def current(self, user_id: UUID) -> Streak:
        """Return the stored streak, empty when none was saved yet."""
        return streak_from_document(self.store.latest_value(streak_key(user_id)))

    def evaluate(self, user_id: UUID) -> StreakEvaluation:
        """Recompute the streak and save it when it changed."""
        current_day = today(self.clock)
        stored = self.current(user_id)
        streak = compute_streak(
            current_day,
            today_log=load_daily_log(self.store, user_id, current_day),
            yesterday_log=load_daily_log(
                self.store, user_id, current_day - timedelta(days=1)
            ),
            stored=stored,
        )
        if streak == stored:
            return StreakEvaluation(streak=stored, changed=False, record_beaten=False)

        record_beaten = streak.count > stored.count
        if record_beaten:
            self.celebrations.trigger(user_id, STREAK_RECORD_CELEBRATION)
        self.store.merge_write(streak_key(user_id), streak_to_document(streak))
        _logger.info(
            "Streak updated: user_id=%s count=%s last_date=%s",
            user_id,
            streak.count,
            streak.last_date,
        )
        return StreakEvaluation(
            streak=streak, changed=True, record_beaten=record_beaten
        )
