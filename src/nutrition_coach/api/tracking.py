"""Profile, daily log and streak endpoints."""

from __future__ import annotations

import logging
from datetime import date  # noqa: TC003
from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, HTTPException, Request, status

from nutrition_coach.api.models import MealPayload, WaterPayload
from nutrition_coach.domain.profile import UserProfile
from nutrition_coach.services.daily_logs import (
    goal_status_by_date,
    load_daily_logs,
    summarize_log,
)
from nutrition_coach.services.plans import PlanGenerationError
from nutrition_coach.services.vision import to_food_items

if TYPE_CHECKING:
    from nutrition_coach.containers import AppContainer

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users/{user_id}", tags=["tracking"])

_PROFILE_REQUIRED = "Complete your profile first."


@router.get("/profile")
async def get_profile(user_id: UUID, request: Request) -> dict[str, object]:
    """Return the stored profile."""
    container: AppContainer = request.app.state.container
    profile = container.profile_service.get_profile(user_id)
    if profile is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    return {"profile": profile.model_dump(by_alias=True)}


@router.put("/profile")
async def save_profile(
    user_id: UUID, profile: UserProfile, request: Request, regenerate: bool = True
) -> dict[str, object]:
    """Save the profile, refresh today's goals and optionally regenerate the plan."""
    container: AppContainer = request.app.state.container
    container.sessions.open(user_id)
    result = await container.profile_service.save_profile(
        user_id, profile, regenerate=regenerate
    )
    return {
        "goals": result.goals,
        "plan_id": result.plan.id if result.plan else None,
        "celebrations": container.celebrations.drain(user_id),
    }


@router.get("/today")
async def today(user_id: UUID, request: Request) -> dict[str, object]:
    """Return today's log, summary and streak, generating the daily plan if due."""
    container: AppContainer = request.app.state.container
    session = container.sessions.open(user_id)
    plan_error = None
    try:
        await session.check_daily_plan()
    except PlanGenerationError as exc:
        logger.warning("Daily plan check failed: user_id=%s", user_id)
        plan_error = str(exc)

    log = container.meal_log_service.today_log(user_id)
    profile = container.profile_service.get_profile(user_id)
    return {
        "log": log,
        "summary": (
            summarize_log(log, profile.water_intake_goal if profile else None)
            if log
            else None
        ),
        "streak": container.streak_service.current(user_id),
        "plan_error": plan_error,
        "celebrations": container.celebrations.drain(user_id),
    }


@router.post("/meals", status_code=status.HTTP_201_CREATED)
async def add_meal(
    user_id: UUID, payload: MealPayload, request: Request
) -> dict[str, object]:
    """Log a meal for today."""
    container: AppContainer = request.app.state.container
    container.sessions.open(user_id)
    meal = container.meal_log_service.add_meal(
        user_id, payload.name, [item.to_draft() for item in payload.items]
    )
    if meal is None:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT, detail=_PROFILE_REQUIRED
        )
    return {"meal": meal, "celebrations": container.celebrations.drain(user_id)}


@router.delete("/logs/{day}/meals/{meal_id}/items/{item_id}")
async def remove_food_item(
    user_id: UUID, day: date, meal_id: str, item_id: str, request: Request
) -> dict[str, object]:
    """Remove a food item from a day's log."""
    container: AppContainer = request.app.state.container
    container.sessions.open(user_id)
    log = container.meal_log_service.remove_food_item(user_id, meal_id, item_id, day)
    if log is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    return {"log": log, "celebrations": container.celebrations.drain(user_id)}


@router.post("/water")
async def add_water(
    user_id: UUID, payload: WaterPayload, request: Request
) -> dict[str, object]:
    """Add or remove water for today."""
    container: AppContainer = request.app.state.container
    container.sessions.open(user_id)
    update = container.meal_log_service.add_water(user_id, payload.amount_ml)
    if update is None:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT, detail=_PROFILE_REQUIRED
        )
    return {"water": update, "celebrations": container.celebrations.drain(user_id)}


@router.get("/history")
async def history(user_id: UUID, request: Request) -> dict[str, object]:
    """Return every logged day with its goal status."""
    container: AppContainer = request.app.state.container
    profile = container.profile_service.get_profile(user_id)
    water_goal = profile.water_intake_goal if profile else None
    logs = load_daily_logs(container.store, user_id)
    statuses = goal_status_by_date(logs.values())
    return {
        "days": [
            {
                "summary": summarize_log(log, water_goal),
                "status": statuses.get(day),
            }
            for day, log in sorted(logs.items(), reverse=True)
        ]
    }


@router.get("/streak")
async def streak(user_id: UUID, request: Request) -> dict[str, object]:
    """Return the current goal streak."""
    container: AppContainer = request.app.state.container
    return {"streak": container.streak_service.current(user_id)}


@router.post("/scan")
async def scan(user_id: UUID, request: Request) -> dict[str, object]:
    """Recognize foods in a raw image body."""
    container: AppContainer = request.app.state.container
    image_bytes = await request.body()
    if not image_bytes:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Empty image."
        )
    recognized = await container.vision_service.recognize(image_bytes)
    return {
        "recognized": recognized.model_dump(by_alias=True)["foodItems"],
        "items": to_food_items(recognized),
    }
