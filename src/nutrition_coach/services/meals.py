"""Meal logging and water tracking for daily logs."""

import logging
from dataclasses import dataclass, replace
from datetime import date
from uuid import UUID, uuid4

from nutrition_coach.domain.logs import DailyLog, FoodItem, FoodItemDraft, Meal
from nutrition_coach.services.celebrations import (
    WATER_GOAL_CELEBRATION,
    CelebrationSink,
)
from nutrition_coach.services.clock import Clock, today
from nutrition_coach.services.daily_logs import (
    DEFAULT_WATER_GOAL_ML,
    load_daily_log,
    placeholder_log,
)
from nutrition_coach.services.documents import (
    daily_log_from_document,
    daily_log_to_document,
    day_id,
    meal_to_document,
)
from nutrition_coach.services.profiles import load_profile
from nutrition_coach.services.store import DocumentStore, daily_log_key

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WaterUpdate:
    """Result of a water intake change."""

    water_intake: int
    water_goal: int
    goal_reached: bool


@dataclass
class MealLogService:
    """Mutations on a user's daily log."""

    store: DocumentStore
    celebrations: CelebrationSink
    clock: Clock

    def today_log(self, user_id: UUID) -> DailyLog | None:
        """Return today's log, or an unsaved placeholder when none exists."""
        current_day = today(self.clock)
        log = load_daily_log(self.store, user_id, current_day)
        if log is not None:
            return log
        profile = load_profile(self.store, user_id)
        if profile is None:
            return None
        return placeholder_log(current_day, profile)

    def add_meal(
        self, user_id: UUID, name: str, items: list[FoodItemDraft]
    ) -> Meal | None:
        """Append a meal to today's log; a meal needs at least one item."""
        if not items:
            _logger.debug("Skipping add_meal without items: user_id=%s", user_id)
            return None
        profile = load_profile(self.store, user_id)
        if profile is None:
            _logger.debug("Skipping add_meal without profile: user_id=%s", user_id)
            return None
        current_day = today(self.clock)
        log = load_daily_log(self.store, user_id, current_day) or placeholder_log(
            current_day, profile
        )
        meal = Meal(
            id=str(uuid4()),
            name=name,
            items=[
                FoodItem(
                    id=str(uuid4()),
                    name=item.name,
                    calories=item.calories,
                    protein=item.protein,
                    carbohydrates=item.carbohydrates,
                    fat=item.fat,
                )
                for item in items
            ],
            created_at=self.clock.now(),
        )
        updated = replace(log, meals=[*log.meals, meal])
        self.store.merge_write(
            daily_log_key(user_id, day_id(current_day)),
            daily_log_to_document(updated),
        )
        return meal

    def remove_food_item(
        self,
        user_id: UUID,
        meal_id: str,
        item_id: str,
        day: date | None = None,
    ) -> DailyLog | None:
        """Remove an item, dropping its meal once the meal has no items left."""
        target_day = day or today(self.clock)
        document_id = day_id(target_day)
        key = daily_log_key(user_id, document_id)
        document = self.store.latest_value(key)
        if document is None:
            _logger.debug(
                "Skipping remove_food_item without log: user_id=%s day=%s",
                user_id,
                target_day,
            )
            return None
        log = daily_log_from_document(document_id, document)
        meals: list[Meal] = []
        for meal in log.meals:
            if meal.id == meal_id:
                meal = replace(
                    meal, items=[item for item in meal.items if item.id != item_id]
                )
            if meal.items:
                meals.append(meal)
        # Only the meals field is rewritten; water and unknown fields stay as
        # stored.
        updated = {**document, "meals": [meal_to_document(meal) for meal in meals]}
        self.store.replace_write(key, updated)
        return daily_log_from_document(document_id, updated)

    def add_water(self, user_id: UUID, delta_ml: int) -> WaterUpdate | None:
        """Change today's water intake, never going below zero."""
        profile = load_profile(self.store, user_id)
        if profile is None:
            _logger.debug("Skipping add_water without profile: user_id=%s", user_id)
            return None
        current_day = today(self.clock)
        log = load_daily_log(self.store, user_id, current_day) or placeholder_log(
            current_day, profile
        )
        previous = log.water_intake
        water_intake = max(0, previous + delta_ml)
        water_goal = profile.water_intake_goal or DEFAULT_WATER_GOAL_ML
        goal_reached = previous < water_goal <= water_intake
        if goal_reached:
            self.celebrations.trigger(user_id, WATER_GOAL_CELEBRATION)

        self.store.merge_write(
            daily_log_key(user_id, day_id(current_day)),
            daily_log_to_document(replace(log, water_intake=water_intake)),
        )
        return WaterUpdate(
            water_intake=water_intake,
            water_goal=water_goal,
            goal_reached=goal_reached,
        )
