"""Tests for meal logging and water tracking."""

from uuid import UUID

from nutrition_coach.domain.logs import FoodItemDraft
from nutrition_coach.services.celebrations import CelebrationQueue
from nutrition_coach.services.daily_logs import consumed_totals, load_daily_log
from nutrition_coach.services.goals import calculate_goals
from nutrition_coach.services.meals import MealLogService
from nutrition_coach.services.store import daily_log_key
from tests.conftest import (
    TODAY,
    YESTERDAY,
    FixedClock,
    RecordingDocumentStore,
    make_log,
    make_profile,
)


def _drafts() -> list[FoodItemDraft]:
    return [
        FoodItemDraft(name="Toast", calories=180, protein=6, carbohydrates=30, fat=3),
        FoodItemDraft(name="Egg", calories=70, protein=6, carbohydrates=0, fat=5),
    ]


def test_add_meal_creates_log_with_profile_goals(
    meal_log_service: MealLogService,
    store: RecordingDocumentStore,
    clock: FixedClock,
    user_id: UUID,
) -> None:
    profile = make_profile()
    store.save_profile(user_id, profile)

    meal = meal_log_service.add_meal(user_id, "Breakfast", _drafts())

    assert meal is not None
    assert meal.created_at == clock.current
    assert len({meal.id, *(item.id for item in meal.items)}) == 3
    log = load_daily_log(store, user_id, TODAY)
    assert log is not None
    assert log.goals == calculate_goals(profile)
    assert consumed_totals(log).calories == 250
    semantic, key, _ = store.writes[-1]
    assert semantic == "merge"
    assert key == daily_log_key(user_id, "2026-10-19")


def test_add_meal_appends_to_existing_meals(
    meal_log_service: MealLogService, store: RecordingDocumentStore, user_id: UUID
) -> None:
    store.save_profile(user_id, make_profile())
    store.save_log(user_id, make_log(TODAY, [400], water_intake=500))

    meal_log_service.add_meal(user_id, "Lunch", _drafts())

    log = load_daily_log(store, user_id, TODAY)
    assert log is not None
    assert [meal.name for meal in log.meals] == ["Meal 0", "Lunch"]
    assert log.water_intake == 500


def test_add_meal_without_profile_is_noop(
    meal_log_service: MealLogService, store: RecordingDocumentStore, user_id: UUID
) -> None:
    assert meal_log_service.add_meal(user_id, "Snack", _drafts()) is None
    assert store.writes == []


def test_remove_item_keeps_meal_with_remaining_items(
    meal_log_service: MealLogService, store: RecordingDocumentStore, user_id: UUID
) -> None:
    store.save_profile(user_id, make_profile())
    meal = meal_log_service.add_meal(user_id, "Breakfast", _drafts())
    assert meal is not None

    log = meal_log_service.remove_food_item(user_id, meal.id, meal.items[0].id)

    assert log is not None
    assert [item.name for item in log.meals[0].items] == ["Egg"]
    semantic, _, document = store.writes[-1]
    assert semantic == "replace"
    assert len(document["meals"]) == 1


def test_removing_last_item_drops_the_meal(
    meal_log_service: MealLogService, store: RecordingDocumentStore, user_id: UUID
) -> None:
    store.save_log(user_id, make_log(YESTERDAY, [300, 500]))

    log = meal_log_service.remove_food_item(user_id, "meal-0", "item-0", YESTERDAY)

    assert log is not None
    assert [meal.id for meal in log.meals] == ["meal-1"]
    stored = load_daily_log(store, user_id, YESTERDAY)
    assert stored is not None
    assert [meal.id for meal in stored.meals] == ["meal-1"]
    assert store.writes[-1][0] == "replace"


def test_remove_item_without_log_is_noop(
    meal_log_service: MealLogService, store: RecordingDocumentStore, user_id: UUID
) -> None:
    assert meal_log_service.remove_food_item(user_id, "meal-0", "item-0") is None
    assert store.writes == []


def test_remove_item_keeps_other_log_fields(
    meal_log_service: MealLogService, store: RecordingDocumentStore, user_id: UUID
) -> None:
    store.save_log(user_id, make_log(TODAY, [300, 500], water_intake=750))
    store.merge_write(daily_log_key(user_id, "2026-10-19"), {"note": "cheat day"})
    store.writes.clear()

    log = meal_log_service.remove_food_item(user_id, "meal-1", "item-1")

    assert log is not None
    assert log.water_intake == 750
    assert [meal.id for meal in log.meals] == ["meal-0"]
    semantic, _, document = store.writes[-1]
    assert semantic == "replace"
    assert document["note"] == "cheat day"
    assert document["waterIntake"] == 750
    assert [meal["id"] for meal in document["meals"]] == ["meal-0"]


def test_add_meal_without_items_is_noop(
    meal_log_service: MealLogService, store: RecordingDocumentStore, user_id: UUID
) -> None:
    store.save_profile(user_id, make_profile())

    assert meal_log_service.add_meal(user_id, "Empty", []) is None
    assert store.writes == []
    assert load_daily_log(store, user_id, TODAY) is None


def test_water_goal_crossing_celebrates_once(
    meal_log_service: MealLogService,
    store: RecordingDocumentStore,
    celebrations: CelebrationQueue,
    user_id: UUID,
) -> None:
    store.save_profile(user_id, make_profile(water_intake_goal=2000))
    store.save_log(user_id, make_log(TODAY, [], water_intake=1800))

    crossing = meal_log_service.add_water(user_id, 300)
    past_goal = meal_log_service.add_water(user_id, 100)

    assert crossing is not None
    assert crossing.water_intake == 2100
    assert crossing.goal_reached
    assert past_goal is not None
    assert past_goal.water_intake == 2200
    assert not past_goal.goal_reached
    assert celebrations.drain(user_id) == ["shower"]


def test_water_crossing_again_after_dropping_below_goal(
    meal_log_service: MealLogService,
    store: RecordingDocumentStore,
    celebrations: CelebrationQueue,
    user_id: UUID,
) -> None:
    store.save_profile(user_id, make_profile(water_intake_goal=1000))

    meal_log_service.add_water(user_id, 1000)
    meal_log_service.add_water(user_id, -250)
    meal_log_service.add_water(user_id, 250)

    assert celebrations.drain(user_id) == ["shower", "shower"]


def test_water_is_clamped_at_zero(
    meal_log_service: MealLogService, store: RecordingDocumentStore, user_id: UUID
) -> None:
    store.save_profile(user_id, make_profile())
    meal_log_service.add_water(user_id, 250)

    update = meal_log_service.add_water(user_id, -1000)

    assert update is not None
    assert update.water_intake == 0
    log = load_daily_log(store, user_id, TODAY)
    assert log is not None
    assert log.water_intake == 0


def test_add_water_without_profile_is_noop(
    meal_log_service: MealLogService,
    store: RecordingDocumentStore,
    celebrations: CelebrationQueue,
    user_id: UUID,
) -> None:
    assert meal_log_service.add_water(user_id, 500) is None
    assert store.writes == []
    assert celebrations.drain(user_id) == []


def test_today_log_placeholder_is_not_persisted(
    meal_log_service: MealLogService, store: RecordingDocumentStore, user_id: UUID
) -> None:
    assert meal_log_service.today_log(user_id) is None

    store.save_profile(user_id, make_profile())
    log = meal_log_service.today_log(user_id)

    assert log is not None
    assert log.date == TODAY
    assert log.meals == []
    assert store.writes == []
