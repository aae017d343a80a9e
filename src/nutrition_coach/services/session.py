"""Per-user tracking session reacting to store changes."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from uuid import UUID

from nutrition_coach.domain.plans import DietPlan
from nutrition_coach.services.clock import Clock
from nutrition_coach.services.plans import PlanService
from nutrition_coach.services.profiles import load_profile
from nutrition_coach.services.store import DAILY_LOGS, DocumentKey, DocumentStore
from nutrition_coach.services.streaks import StreakService

_logger = logging.getLogger(__name__)


@dataclass
class TrackerSession:
    """Keeps the streak in sync with daily logs for one user.

    The daily plan check runs at most once per session so that logs still
    settling after a load do not trigger repeated generations.
    """

    user_id: UUID
    store: DocumentStore
    streak_service: StreakService
    plan_service: PlanService
    plan_check_done: bool = False
    last_used: datetime | None = None
    _unsubscribe: Callable[[], None] | None = None

    def start(self) -> None:
        """Subscribe to daily log changes and evaluate the streak once."""
        if self._unsubscribe is not None:
            return
        self._unsubscribe = self.store.on_change(
            DocumentKey(self.user_id, DAILY_LOGS), self._on_logs_changed
        )
        self.streak_service.evaluate(self.user_id)

    def close(self) -> None:
        """Stop reacting to store changes."""
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    async def check_daily_plan(self) -> DietPlan | None:
        """Generate today's plan if due; later calls in the session do nothing."""
        if self.plan_check_done:
            return None
        profile = load_profile(self.store, self.user_id)
        if profile is None:
            return None
        self.plan_check_done = True
        plans = self.plan_service.list_plans(self.user_id)
        return await self.plan_service.ensure_daily_plan(self.user_id, profile, plans)

    def _on_logs_changed(self, key: DocumentKey) -> None:
        _logger.debug("Daily logs changed: user_id=%s key=%s", self.user_id, key)
        self.streak_service.evaluate(self.user_id)


@dataclass
class TrackerSessions:
    """One running session per user; sessions idle too long are closed."""

    store: DocumentStore
    streak_service: StreakService
    plan_service: PlanService
    clock: Clock
    idle_timeout: timedelta = timedelta(hours=1)
    sessions: dict[UUID, TrackerSession] = field(default_factory=dict)

    def open(self, user_id: UUID) -> TrackerSession:
        """Return the user's session, starting it on first use."""
        now = self.clock.now()
        self._evict_idle(now)
        session = self.sessions.get(user_id)
        if session is None:
            session = TrackerSession(
                user_id=user_id,
                store=self.store,
                streak_service=self.streak_service,
                plan_service=self.plan_service,
            )
            self.sessions[user_id] = session
            session.start()
        session.last_used = now
        return session

    def close(self, user_id: UUID) -> None:
        """Close the user's session if one is running."""
        session = self.sessions.pop(user_id, None)
        if session is not None:
            session.close()

    def close_all(self) -> None:
        """Close every session."""
        for session in self.sessions.values():
            session.close()
        self.sessions.clear()

    def _evict_idle(self, now: datetime) -> None:
        idle = [
            user_id
            for user_id, session in self.sessions.items()
            if session.last_used is not None
            and now - session.last_used > self.idle_timeout
        ]
        for user_id in idle:
            _logger.debug("Closing idle session: user_id=%s", user_id)
            self.close(user_id)
