"""Profile persistence and goal refresh."""

from dataclasses import dataclass
from uuid import UUID

from nutrition_coach.domain.logs import NutritionGoals
from nutrition_coach.domain.plans import DietPlan
from nutrition_coach.domain.profile import UserProfile
from nutrition_coach.services.clock import Clock, today
from nutrition_coach.services.documents import (
    day_id,
    goals_to_document,
    profile_from_document,
    profile_to_document,
)
from nutrition_coach.services.goals import calculate_goals
from nutrition_coach.services.plans import PlanService
from nutrition_coach.services.store import DocumentStore, daily_log_key, profile_key


def load_profile(store: DocumentStore, user_id: UUID) -> UserProfile | None:
    """Return the stored profile, if the user finished onboarding."""
    document = store.latest_value(profile_key(user_id))
    if document is None:
        return None
    return profile_from_document(document)


@dataclass(frozen=True)
class ProfileSaveResult:
    """Goals written to today's log and the plan generated, if any."""

    goals: NutritionGoals
    plan: DietPlan | None


@dataclass
class ProfileService:
    """Saves profiles and refreshes today's goals."""

    store: DocumentStore
    plan_service: PlanService
    clock: Clock

    def get_profile(self, user_id: UUID) -> UserProfile | None:
        """Return the user's profile."""
        return load_profile(self.store, user_id)

    async def save_profile(
        self, user_id: UUID, profile: UserProfile, regenerate: bool = True
    ) -> ProfileSaveResult:
        """Persist a profile, update today's goals and optionally regenerate the plan.

        Logs of earlier days keep the goals they were created with.
        """
        self.store.merge_write(profile_key(user_id), profile_to_document(profile))

        current_day = today(self.clock)
        key = daily_log_key(user_id, day_id(current_day))
        existing = self.store.latest_value(key) or {}
        goals = calculate_goals(profile)
        self.store.merge_write(
            key,
            {
                "date": day_id(current_day),
                "meals": existing.get("meals") or [],
                "waterIntake": existing.get("waterIntake") or 0,
                **goals_to_document(goals),
            },
        )

        plan = None
        if regenerate:
            plan = await self.plan_service.generate(user_id, profile)
        return ProfileSaveResult(goals=goals, plan=plan)
