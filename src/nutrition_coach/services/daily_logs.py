"""Daily log aggregation."""

from collections.abc import Iterable
from datetime import date
from typing import Literal
from uuid import UUID

from nutrition_coach.domain.logs import DailyLog, DailySummary, MacroTotals
from nutrition_coach.domain.profile import UserProfile
from nutrition_coach.services.documents import daily_log_from_document, day_id
from nutrition_coach.services.goals import calculate_goals
from nutrition_coach.services.store import DAILY_LOGS, DocumentStore, daily_log_key

DEFAULT_WATER_GOAL_ML = 2000

GoalStatus = Literal["achieved", "missed"]


def consumed_totals(log: DailyLog) -> MacroTotals:
    """Sum calories and macros over every item of every meal."""
    calories = protein = carbohydrates = fat = 0.0
    for meal in log.meals:
        for item in meal.items:
            calories += item.calories
            protein += item.protein
            carbohydrates += item.carbohydrates
            fat += item.fat
    return MacroTotals(
        calories=calories, protein=protein, carbohydrates=carbohydrates, fat=fat
    )


def is_goal_achieved(log: DailyLog) -> bool:
    """Return True when consumed calories reach a positive calorie goal."""
    if log.goals.calorie_goal <= 0:
        return False
    return consumed_totals(log).calories >= log.goals.calorie_goal


def placeholder_log(day: date, profile: UserProfile | None) -> DailyLog:
    """Build an unsaved empty log carrying the profile's current goals."""
    return DailyLog(date=day, goals=calculate_goals(profile), meals=[], water_intake=0)


def goal_status_by_date(logs: Iterable[DailyLog]) -> dict[date, GoalStatus]:
    """Classify each day with a calorie goal as achieved or missed."""
    statuses: dict[date, GoalStatus] = {}
    for log in logs:
        if log.goals.calorie_goal > 0:
            statuses[log.date] = "achieved" if is_goal_achieved(log) else "missed"
    return statuses


def summarize_log(log: DailyLog, water_goal: int | None = None) -> DailySummary:
    """Combine consumed totals with the log's goals."""
    consumed = consumed_totals(log)
    return DailySummary(
        date=log.date,
        consumed=consumed,
        goals=log.goals,
        remaining_calories=max(0.0, log.goals.calorie_goal - consumed.calories),
        water_intake=log.water_intake,
        water_goal=water_goal or DEFAULT_WATER_GOAL_ML,
    )


def load_daily_log(store: DocumentStore, user_id: UUID, day: date) -> DailyLog | None:
    """Return the persisted log for a day, if any."""
    document = store.latest_value(daily_log_key(user_id, day_id(day)))
    if document is None:
        return None
    return daily_log_from_document(day_id(day), document)


def load_daily_logs(store: DocumentStore, user_id: UUID) -> dict[date, DailyLog]:
    """Return every persisted log of a user keyed by day."""
    logs = [
        daily_log_from_document(document_id, document)
        for document_id, document in store.list_documents(user_id, DAILY_LOGS).items()
    ]
    return {log.date: log for log in logs}
