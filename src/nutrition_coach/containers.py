"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from datetime import timedelta

from supabase import create_client

from nutrition_coach.adapters.openai_client import OpenAIResponsesClient
from nutrition_coach.adapters.supabase_document_store import SupabaseDocumentStore
from nutrition_coach.config import Settings
from nutrition_coach.services.celebrations import CelebrationQueue
from nutrition_coach.services.clock import Clock, ZoneClock
from nutrition_coach.services.meals import MealLogService
from nutrition_coach.services.plans import PlanService
from nutrition_coach.services.profiles import ProfileService
from nutrition_coach.services.session import TrackerSessions
from nutrition_coach.services.store import DocumentStore
from nutrition_coach.services.streaks import StreakService
from nutrition_coach.services.vision import VisionService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    store: DocumentStore
    clock: Clock
    celebrations: CelebrationQueue
    meal_log_service: MealLogService
    streak_service: StreakService
    plan_service: PlanService
    profile_service: ProfileService
    vision_service: VisionService
    sessions: TrackerSessions
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    store = SupabaseDocumentStore(
        supabase_client, table=resolved_settings.supabase_documents_table
    )
    clock = ZoneClock(resolved_settings.timezone)
    celebrations = CelebrationQueue()
    openai_client = OpenAIResponsesClient.create(resolved_settings.openai_api_key)

    plan_service = PlanService(
        client=openai_client,
        store=store,
        clock=clock,
        model=resolved_settings.openai_model,
        reasoning_effort=resolved_settings.openai_reasoning_effort,
        store_responses=resolved_settings.openai_store,
    )
    streak_service = StreakService(store=store, celebrations=celebrations, clock=clock)
    vision_service = VisionService(
        client=openai_client,
        model=resolved_settings.openai_model,
        reasoning_effort=resolved_settings.openai_reasoning_effort,
        store=resolved_settings.openai_store,
    )
    sessions = TrackerSessions(
        store=store,
        streak_service=streak_service,
        plan_service=plan_service,
        clock=clock,
        idle_timeout=timedelta(minutes=resolved_settings.session_idle_minutes),
    )

    async def close_resources() -> None:
        sessions.close_all()
        await openai_client.close()

    return AppContainer(
        settings=resolved_settings,
        store=store,
        clock=clock,
        celebrations=celebrations,
        meal_log_service=MealLogService(
            store=store, celebrations=celebrations, clock=clock
        ),
        streak_service=streak_service,
        plan_service=plan_service,
        profile_service=ProfileService(
            store=store, plan_service=plan_service, clock=clock
        ),
        vision_service=vision_service,
        sessions=sessions,
        close_resources=close_resources,
    )
