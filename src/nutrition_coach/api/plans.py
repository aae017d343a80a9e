"""Diet plan endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, HTTPException, Request, Response, status

if TYPE_CHECKING:
    from nutrition_coach.containers import AppContainer
    from nutrition_coach.domain.plans import DietPlan
    from nutrition_coach.services.plans import PlanService

router = APIRouter(prefix="/users/{user_id}/plans", tags=["plans"])


@router.get("")
async def list_plans(user_id: UUID, request: Request) -> dict[str, object]:
    """Return the plan history, newest first, with display-ready content."""
    container: AppContainer = request.app.state.container
    plan_service = container.plan_service
    return {
        "plans": [
            _plan_payload(plan_service, plan)
            for plan in plan_service.list_plans(user_id)
        ],
        "generating": plan_service.is_generating(user_id),
    }


@router.post("", status_code=status.HTTP_201_CREATED)
async def generate_plan(user_id: UUID, request: Request) -> dict[str, object]:
    """Generate a new plan from the stored profile."""
    container: AppContainer = request.app.state.container
    profile = container.profile_service.get_profile(user_id)
    if profile is None:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Complete your profile to generate your first plan.",
        )
    plan = await container.plan_service.generate(user_id, profile)
    if plan is None:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="A plan is already being generated.",
        )
    return {"plan": _plan_payload(container.plan_service, plan)}


@router.get("/{plan_id}")
async def get_plan(user_id: UUID, plan_id: str, request: Request) -> dict[str, object]:
    """Return a single plan."""
    container: AppContainer = request.app.state.container
    plan = container.plan_service.get_plan(user_id, plan_id)
    if plan is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    return {"plan": _plan_payload(container.plan_service, plan)}


@router.delete("/{plan_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_plan(user_id: UUID, plan_id: str, request: Request) -> Response:
    """Delete a plan from the history."""
    container: AppContainer = request.app.state.container
    container.plan_service.remove_plan(user_id, plan_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


def _plan_payload(plan_service: PlanService, plan: DietPlan) -> dict[str, object]:
    content = plan_service.render_plan(plan)
    return {
        "id": plan.id,
        "created_at": plan.created_at.isoformat(),
        "available": content.is_available,
        "content": content.model_dump(),
        "profile_snapshot": (
            plan.profile_snapshot.model_dump(by_alias=True)
            if plan.profile_snapshot
            else None
        ),
    }
