"""Domain models for daily logs."""

from dataclasses import dataclass, field
from datetime import date, datetime


@dataclass(frozen=True)
class NutritionGoals:
    """Daily calorie and macro targets in kcal and grams."""

    calorie_goal: int
    protein_goal: int
    carb_goal: int
    fat_goal: int


@dataclass(frozen=True)
class MacroTotals:
    """Summed calories and macros."""

    calories: float
    protein: float
    carbohydrates: float
    fat: float


@dataclass(frozen=True)
class FoodItemDraft:
    """Food item values before it is logged, already scaled by quantity."""

    name: str
    calories: float
    protein: float
    carbohydrates: float
    fat: float


@dataclass(frozen=True)
class FoodItem:
    """Logged food item with absolute nutrition values."""

    id: str
    name: str
    calories: float
    protein: float
    carbohydrates: float
    fat: float


@dataclass(frozen=True)
class Meal:
    """Named group of food items logged together."""

    id: str
    name: str
    items: list[FoodItem]
    created_at: datetime


@dataclass(frozen=True)
class DailyLog:
    """Meals, water and the goals frozen for one calendar day."""

    date: date
    goals: NutritionGoals
    meals: list[Meal] = field(default_factory=list)
    water_intake: int = 0


@dataclass(frozen=True)
class DailySummary:
    """Consumed totals of a log next to its targets."""

    date: date
    consumed: MacroTotals
    goals: NutritionGoals
    remaining_calories: float
    water_intake: int
    water_goal: int
