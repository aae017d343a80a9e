"""Diet plan generation and history."""

import logging
from dataclasses import dataclass, field
from typing import Protocol
from uuid import UUID

from nutrition_coach.domain.plans import DietPlan, PlanContent
from nutrition_coach.domain.profile import UserProfile
from nutrition_coach.services.clock import Clock, is_same_local_day
from nutrition_coach.services.documents import (
    diet_plan_from_document,
    diet_plan_to_document,
)
from nutrition_coach.services.plan_content import (
    normalize_plan_content,
    serialize_plan_content,
)
from nutrition_coach.services.store import DIET_PLANS, DocumentStore, diet_plan_key

_logger = logging.getLogger(__name__)

GENERATION_ERROR_MESSAGE = "Could not generate your diet plan. Please try again."

_NUTRITION_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "calories": {"type": "number"},
        "protein": {"type": "number"},
        "carbohydrates": {"type": "number"},
        "fats": {"type": "number"},
    },
    "required": ["calories", "protein", "carbohydrates", "fats"],
    "additionalProperties": False,
}

PLAN_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "title": {"type": "string"},
        "intro": {"type": "string"},
        "meals": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "title": {"type": "string"},
                    "description": {"type": "string"},
                    "ingredients": {"type": "array", "items": {"type": "string"}},
                    "preparation": {"type": "array", "items": {"type": "string"}},
                    "nutrition": _NUTRITION_SCHEMA,
                },
                "required": [
                    "title",
                    "description",
                    "ingredients",
                    "preparation",
                    "nutrition",
                ],
                "additionalProperties": False,
            },
        },
        "totals": {
            "type": "object",
            "properties": {
                "description": {"type": "string"},
                "nutrition": _NUTRITION_SCHEMA,
            },
            "required": ["description", "nutrition"],
            "additionalProperties": False,
        },
    },
    "required": ["title", "intro", "meals", "totals"],
    "additionalProperties": False,
}


class PlanGenerationError(RuntimeError):
    """Raised when the text generation service fails or returns junk."""


class DietPlanClient(Protocol):
    """Interface for LLM diet plan generation."""

    async def generate(
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        schema: dict[str, object],
        prompt: str,
    ) -> dict[str, object]:
        """Return structured diet plan data."""


@dataclass
class PlanService:
    """Generates daily diet plans and manages plan history."""

    client: DietPlanClient
    store: DocumentStore
    clock: Clock
    model: str
    reasoning_effort: str | None
    store_responses: bool = False
    _in_flight: set[UUID] = field(default_factory=set)

    def is_generating(self, user_id: UUID) -> bool:
        """Return True while a generation for the user is running."""
        return user_id in self._in_flight

    async def generate(self, user_id: UUID, profile: UserProfile) -> DietPlan | None:
        """Generate and store a plan; returns None if one is already running."""
        if user_id in self._in_flight:
            _logger.info("Plan generation already running: user_id=%s", user_id)
            return None
        self._in_flight.add(user_id)
        try:
            content = await self._request_plan(profile)
            plan = DietPlan(
                id="",
                created_at=self.clock.now(),
                content=serialize_plan_content(content),
                profile_snapshot=profile,
            )
            plan_id = self.store.add_document(
                user_id, DIET_PLANS, diet_plan_to_document(plan)
            )
            _logger.info("Diet plan generated: user_id=%s plan_id=%s", user_id, plan_id)
            return DietPlan(
                id=plan_id,
                created_at=plan.created_at,
                content=plan.content,
                profile_snapshot=profile,
            )
        finally:
            self._in_flight.discard(user_id)

    async def ensure_daily_plan(
        self, user_id: UUID, profile: UserProfile, plans: list[DietPlan]
    ) -> DietPlan | None:
        """Generate a plan unless the newest one was created today."""
        latest = _newest(plans)
        if latest is not None and is_same_local_day(latest.created_at, self.clock):
            return None
        return await self.generate(user_id, profile)

    def list_plans(self, user_id: UUID) -> list[DietPlan]:
        """Return the user's plans, newest first."""
        plans = [
            diet_plan_from_document(document_id, document)
            for document_id, document in self.store.list_documents(
                user_id, DIET_PLANS
            ).items()
        ]
        return sorted(plans, key=lambda plan: plan.created_at, reverse=True)

    def latest_plan(self, user_id: UUID) -> DietPlan | None:
        """Return the most recent plan, if any."""
        return _newest(self.list_plans(user_id))

    def get_plan(self, user_id: UUID, plan_id: str) -> DietPlan | None:
        """Return a plan by id."""
        document = self.store.latest_value(diet_plan_key(user_id, plan_id))
        if document is None:
            return None
        return diet_plan_from_document(plan_id, document)

    def remove_plan(self, user_id: UUID, plan_id: str) -> None:
        """Delete a plan from the user's history."""
        self.store.delete(diet_plan_key(user_id, plan_id))

    @staticmethod
    def render_plan(plan: DietPlan) -> PlanContent:
        """Return display-ready content for a stored plan."""
        return normalize_plan_content(plan.content)

    async def _request_plan(self, profile: UserProfile) -> PlanContent:
        try:
            raw = await self.client.generate(
                model=self.model,
                reasoning_effort=self.reasoning_effort,
                store=self.store_responses,
                schema=PLAN_SCHEMA,
                prompt=build_plan_prompt(profile),
            )
            content = PlanContent.model_validate(raw)
        except Exception as exc:
            _logger.exception("Failed to generate diet plan")
            raise PlanGenerationError(GENERATION_ERROR_MESSAGE) from exc
        if not content.meals:
            _logger.error("Diet plan generation returned no meals")
            raise PlanGenerationError(GENERATION_ERROR_MESSAGE)
        return content


def build_plan_prompt(profile: UserProfile) -> str:
    """Render the nutritionist prompt for a profile."""
    lines = [
        "You are an expert nutritionist creating a personalized daily diet plan.",
        "",
        "User Details:",
        f"- Age: {profile.age}",
        f"- Weight: {profile.weight:g} kg",
        f"- Height: {profile.height:g} cm",
        f"- Activity Level: {profile.activity_level}",
        f"- Primary Goal: {profile.goals}",
        f"- Dietary Restrictions/Preferences: {profile.dietary_restrictions or 'None'}",
    ]
    if profile.location:
        lines.append(f"- User Location: {profile.location}")
    lines.extend(
        [
            "",
            "Task:",
            "Generate a detailed, creative, and delicious daily diet plan.",
            "For all nutrition fields (calories, protein, carbohydrates, fats), "
            'provide only the numerical value without units like "kcal" or "g".',
            "Ensure the total daily calories and macronutrients align with the "
            "user's goal (surplus for weight gain, deficit for weight loss, "
            "maintenance otherwise).",
        ]
    )
    return "\n".join(lines)


def _newest(plans: list[DietPlan]) -> DietPlan | None:
    if not plans:
        return None
    return max(plans, key=lambda plan: plan.created_at)
