"""Conversion between domain objects and stored documents."""

from datetime import UTC, date, datetime

from nutrition_coach.domain.logs import DailyLog, FoodItem, Meal, NutritionGoals
from nutrition_coach.domain.plans import DietPlan
from nutrition_coach.domain.profile import UserProfile
from nutrition_coach.domain.streaks import Streak
from nutrition_coach.services.store import Document


def day_id(day: date) -> str:
    """Return the YYYY-MM-DD identity of a daily log."""
    return day.isoformat()


def profile_to_document(profile: UserProfile) -> Document:
    return profile.model_dump(by_alias=True)


def profile_from_document(document: Document) -> UserProfile:
    return UserProfile.model_validate(document)


def goals_to_document(goals: NutritionGoals) -> Document:
    return {
        "calorieGoal": goals.calorie_goal,
        "proteinGoal": goals.protein_goal,
        "carbGoal": goals.carb_goal,
        "fatGoal": goals.fat_goal,
    }


def daily_log_to_document(log: DailyLog) -> Document:
    """Serialize a log in the persisted camelCase layout."""
    return {
        "date": day_id(log.date),
        "meals": [meal_to_document(meal) for meal in log.meals],
        "waterIntake": log.water_intake,
        **goals_to_document(log.goals),
    }


def daily_log_from_document(document_id: str, document: Document) -> DailyLog:
    """Parse a stored log; missing goals become zero and never count as achieved."""
    raw_meals = document.get("meals")
    return DailyLog(
        date=date.fromisoformat(str(document.get("date") or document_id)),
        goals=NutritionGoals(
            calorie_goal=_to_int(document.get("calorieGoal")),
            protein_goal=_to_int(document.get("proteinGoal")),
            carb_goal=_to_int(document.get("carbGoal")),
            fat_goal=_to_int(document.get("fatGoal")),
        ),
        meals=[
            meal_from_document(meal)
            for meal in (raw_meals if isinstance(raw_meals, list) else [])
        ],
        water_intake=_to_int(document.get("waterIntake")),
    )


def meal_to_document(meal: Meal) -> Document:
    return {
        "id": meal.id,
        "name": meal.name,
        "items": [
            {
                "id": item.id,
                "name": item.name,
                "calories": item.calories,
                "protein": item.protein,
                "carbohydrates": item.carbohydrates,
                "fat": item.fat,
            }
            for item in meal.items
        ],
        "createdAt": meal.created_at.isoformat(),
    }


def meal_from_document(document: dict[str, object]) -> Meal:
    raw_items = document.get("items")
    items = [
        FoodItem(
            id=str(item.get("id", "")),
            name=str(item.get("name", "")),
            calories=_to_float(item.get("calories")),
            protein=_to_float(item.get("protein")),
            carbohydrates=_to_float(item.get("carbohydrates")),
            fat=_to_float(item.get("fat")),
        )
        for item in (raw_items if isinstance(raw_items, list) else [])
    ]
    return Meal(
        id=str(document.get("id", "")),
        name=str(document.get("name", "")),
        items=items,
        created_at=_parse_datetime(document.get("createdAt")),
    )


def streak_to_document(streak: Streak) -> Document:
    return {
        "count": streak.count,
        "lastDate": day_id(streak.last_date) if streak.last_date else "",
    }


def streak_from_document(document: Document | None) -> Streak:
    """Parse the stored streak; an absent record is an empty streak."""
    if not document:
        return Streak()
    last_date = document.get("lastDate")
    return Streak(
        count=_to_int(document.get("count")),
        last_date=(
            date.fromisoformat(last_date)
            if isinstance(last_date, str) and last_date
            else None
        ),
    )


def diet_plan_to_document(plan: DietPlan) -> Document:
    return {
        "createdAt": plan.created_at.isoformat(),
        "content": plan.content,
        "profileSnapshot": (
            profile_to_document(plan.profile_snapshot)
            if plan.profile_snapshot
            else None
        ),
    }


def diet_plan_from_document(document_id: str, document: Document) -> DietPlan:
    snapshot = document.get("profileSnapshot")
    return DietPlan(
        id=document_id,
        created_at=_parse_datetime(document.get("createdAt")),
        content=str(document.get("content") or ""),
        profile_snapshot=(
            profile_from_document(snapshot) if isinstance(snapshot, dict) else None
        ),
    )


def _parse_datetime(value: object) -> datetime:
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str) and value:
        parsed = datetime.fromisoformat(value)
    else:
        return datetime.fromtimestamp(0, tz=UTC)
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=UTC)
    return parsed


def _to_int(value: object) -> int:
    if isinstance(value, int | float):
        return int(value)
    return 0


def _to_float(value: object) -> float:
    if isinstance(value, int | float):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return 0.0
    return 0.0
