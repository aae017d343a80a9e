"""Domain models for AI-generated diet plans."""

from dataclasses import dataclass
from datetime import datetime

from pydantic import BaseModel, Field

from nutrition_coach.domain.profile import UserProfile


class PlanNutrition(BaseModel):
    """Estimated nutrition for a meal or a whole day, as bare numbers."""

    calories: float = Field(default=0, ge=0)
    protein: float = Field(default=0, ge=0)
    carbohydrates: float = Field(default=0, ge=0)
    fats: float = Field(default=0, ge=0)


class PlanMeal(BaseModel):
    """Single meal suggestion within a plan."""

    title: str
    description: str = ""
    ingredients: list[str] = Field(default_factory=list)
    preparation: list[str] = Field(default_factory=list)
    nutrition: PlanNutrition = Field(default_factory=PlanNutrition)


class PlanTotals(BaseModel):
    """Closing summary with the estimated daily totals."""

    description: str = ""
    nutrition: PlanNutrition = Field(default_factory=PlanNutrition)


class PlanContent(BaseModel):
    """Display-ready diet plan."""

    title: str
    intro: str
    meals: list[PlanMeal]
    totals: PlanTotals | None = None

    @property
    def is_available(self) -> bool:
        """Return True when the plan has meals to show."""
        return bool(self.meals)


@dataclass(frozen=True)
class DietPlan:
    """Stored plan with the profile it was generated from."""

    id: str
    created_at: datetime
    content: str
    profile_snapshot: UserProfile | None
