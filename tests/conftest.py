"""Shared test fixtures."""

import asyncio
from dataclasses import dataclass, field
from datetime import UTC, date, datetime, timedelta
from uuid import UUID, uuid4

import pytest

from nutrition_coach.config import Settings
from nutrition_coach.containers import AppContainer
from nutrition_coach.domain.logs import (
    DailyLog,
    FoodItem,
    Meal,
    NutritionGoals,
)
from nutrition_coach.domain.profile import UserProfile
from nutrition_coach.services.celebrations import CelebrationQueue
from nutrition_coach.services.documents import (
    daily_log_to_document,
    day_id,
    profile_to_document,
)
from nutrition_coach.services.meals import MealLogService
from nutrition_coach.services.plans import DietPlanClient, PlanService
from nutrition_coach.services.profiles import ProfileService
from nutrition_coach.services.session import TrackerSessions
from nutrition_coach.services.store import (
    Document,
    DocumentKey,
    InMemoryDocumentStore,
    daily_log_key,
    profile_key,
)
from nutrition_coach.services.streaks import StreakService
from nutrition_coach.services.vision import VisionClient, VisionService

TODAY = date(2026, 10, 19)
YESTERDAY = TODAY - timedelta(days=1)

SAMPLE_PLAN: dict[str, object] = {
    "title": "Mediterranean Power Day",
    "intro": "A fresh day of balanced meals.",
    "meals": [
        {
            "title": "Breakfast",
            "description": "Greek yogurt with honey and walnuts.",
            "ingredients": ["200g Greek yogurt", "1 tbsp honey", "20g walnuts"],
            "preparation": ["Spoon yogurt into a bowl.", "Top with honey and nuts."],
            "nutrition": {
                "calories": 420,
                "protein": 24,
                "carbohydrates": 30,
                "fats": 22,
            },
        },
        {
            "title": "Dinner",
            "description": "Grilled salmon with quinoa.",
            "ingredients": ["150g salmon", "80g quinoa"],
            "preparation": ["Grill the salmon.", "Cook the quinoa."],
            "nutrition": {
                "calories": 650,
                "protein": 45,
                "carbohydrates": 55,
                "fats": 25,
            },
        },
    ],
    "totals": {
        "description": "Balanced for maintenance.",
        "nutrition": {
            "calories": 1070,
            "protein": 69,
            "carbohydrates": 85,
            "fats": 47,
        },
    },
}


def make_profile(**overrides: object) -> UserProfile:
    """Build a valid profile with sensible defaults."""
    values: dict[str, object] = {
        "name": "Sam",
        "age": 25,
        "weight": 70,
        "height": 175,
        "activity_level": "moderatelyActive",
        "work_routine": "mixed",
        "goals": "maintainWeight",
        "water_intake_goal": 2000,
    }
    values.update(overrides)
    return UserProfile(**values)


def make_log(
    day: date,
    calories: list[float],
    calorie_goal: int = 2000,
    water_intake: int = 0,
) -> DailyLog:
    """Build a log with one single-item meal per calorie value."""
    meals = [
        Meal(
            id=f"meal-{index}",
            name=f"Meal {index}",
            items=[
                FoodItem(
                    id=f"item-{index}",
                    name="Food",
                    calories=value,
                    protein=10,
                    carbohydrates=20,
                    fat=5,
                )
            ],
            created_at=datetime(day.year, day.month, day.day, 12, tzinfo=UTC),
        )
        for index, value in enumerate(calories)
    ]
    return DailyLog(
        date=day,
        goals=NutritionGoals(
            calorie_goal=calorie_goal, protein_goal=150, carb_goal=200, fat_goal=60
        ),
        meals=meals,
        water_intake=water_intake,
    )


@dataclass
class FixedClock:
    """Clock frozen at a settable moment."""

    current: datetime = field(
        default_factory=lambda: datetime(2026, 10, 19, 9, 30, tzinfo=UTC)
    )

    def now(self) -> datetime:
        return self.current


@dataclass
class RecordingDocumentStore(InMemoryDocumentStore):
    """In-memory store that records which write semantic was used."""

    writes: list[tuple[str, DocumentKey, Document]] = field(default_factory=list)

    def merge_write(self, key: DocumentKey, partial: Document) -> None:
        self.writes.append(("merge", key, partial))
        super().merge_write(key, partial)

    def replace_write(self, key: DocumentKey, full: Document) -> None:
        self.writes.append(("replace", key, full))
        super().replace_write(key, full)

    def save_profile(self, user_id: UUID, profile: UserProfile) -> None:
        super().replace_write(profile_key(user_id), profile_to_document(profile))

    def save_log(self, user_id: UUID, log: DailyLog) -> None:
        super().replace_write(
            daily_log_key(user_id, day_id(log.date)), daily_log_to_document(log)
        )


@dataclass
class FakePlanClient(DietPlanClient):
    """Fake plan client returning a fixed payload or raising."""

    payload: dict[str, object] = field(default_factory=lambda: dict(SAMPLE_PLAN))
    error: Exception | None = None
    release: asyncio.Event | None = None
    prompts: list[str] = field(default_factory=list)

    async def generate(
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        schema: dict[str, object],
        prompt: str,
    ) -> dict[str, object]:
        self.prompts.append(prompt)
        if self.release is not None:
            await self.release.wait()
        if self.error is not None:
            raise self.error
        return self.payload


@dataclass
class FakeVisionClient(VisionClient):
    """Fake vision client returning a fixed payload."""

    payload: dict[str, object] = field(
        default_factory=lambda: {
            "foodItems": [
                {
                    "name": "Banana",
                    "quantity": 3,
                    "calories": 105,
                    "protein": 1.3,
                    "carbohydrates": 27,
                    "fat": 0.4,
                }
            ]
        }
    )
    error: Exception | None = None

    async def extract(  # noqa: PLR0913
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        image_data_url: str,
        schema: dict[str, object],
        prompt: str,
    ) -> dict[str, object]:
        if self.error is not None:
            raise self.error
        return self.payload


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="header.payload.signature",
        openai_api_key="openai-key",
    )


@pytest.fixture
def user_id() -> UUID:
    return uuid4()


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock()


@pytest.fixture
def store() -> RecordingDocumentStore:
    return RecordingDocumentStore()


@pytest.fixture
def celebrations() -> CelebrationQueue:
    return CelebrationQueue()


@pytest.fixture
def plan_client() -> FakePlanClient:
    return FakePlanClient()


@pytest.fixture
def plan_service(
    plan_client: FakePlanClient, store: RecordingDocumentStore, clock: FixedClock
) -> PlanService:
    return PlanService(
        client=plan_client,
        store=store,
        clock=clock,
        model="gpt-5.2",
        reasoning_effort="medium",
    )


@pytest.fixture
def meal_log_service(
    store: RecordingDocumentStore, celebrations: CelebrationQueue, clock: FixedClock
) -> MealLogService:
    return MealLogService(store=store, celebrations=celebrations, clock=clock)


@pytest.fixture
def streak_service(
    store: RecordingDocumentStore, celebrations: CelebrationQueue, clock: FixedClock
) -> StreakService:
    return StreakService(store=store, celebrations=celebrations, clock=clock)


@pytest.fixture
def profile_service(
    store: RecordingDocumentStore, plan_service: PlanService, clock: FixedClock
) -> ProfileService:
    return ProfileService(store=store, plan_service=plan_service, clock=clock)


@pytest.fixture
def container(  # noqa: PLR0913
    settings: Settings,
    store: RecordingDocumentStore,
    clock: FixedClock,
    celebrations: CelebrationQueue,
    meal_log_service: MealLogService,
    streak_service: StreakService,
    plan_service: PlanService,
    profile_service: ProfileService,
) -> AppContainer:
    vision_service = VisionService(
        client=FakeVisionClient(),
        model=settings.openai_model,
        reasoning_effort=settings.openai_reasoning_effort,
        store=settings.openai_store,
    )
    sessions = TrackerSessions(
        store=store,
        streak_service=streak_service,
        plan_service=plan_service,
        clock=clock,
    )

    async def close_resources() -> None:
        sessions.close_all()

    return AppContainer(
        settings=settings,
        store=store,
        clock=clock,
        celebrations=celebrations,
        meal_log_service=meal_log_service,
        streak_service=streak_service,
        plan_service=plan_service,
        profile_service=profile_service,
        vision_service=vision_service,
        sessions=sessions,
        close_resources=close_resources,
    )
