"""User profile model."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

ActivityLevel = Literal[
    "sedentary", "lightlyActive", "moderatelyActive", "veryActive", "extraActive"
]
WorkRoutine = Literal["mostlySitting", "mixed", "mostlyPhysical"]
GoalType = Literal["weightLoss", "maintainWeight", "weightGain"]
DiningOutFrequency = Literal["rarely", "occasionally", "frequently"]
FoodPreference = Literal["home-cooked", "outside-food", "balanced"]
AlcoholConsumption = Literal["none", "socially", "regularly"]
SmokingHabits = Literal["none", "occasionally", "regularly"]


class UserProfile(BaseModel):
    """Biometrics, goals and lifestyle answers collected during onboarding."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, frozen=True
    )

    name: str = ""
    age: int = Field(gt=0)
    weight: float = Field(gt=0, description="Weight in kilograms.")
    height: float = Field(gt=0, description="Height in centimeters.")
    activity_level: ActivityLevel = "moderatelyActive"
    work_routine: WorkRoutine = "mixed"
    goals: GoalType = "maintainWeight"
    dietary_restrictions: str | None = None
    location: str | None = None
    meals_per_day: int = Field(default=3, ge=1)
    meal_times: list[str] = Field(default_factory=list)
    dining_out_frequency: DiningOutFrequency = "rarely"
    food_preference: FoodPreference = "balanced"
    alcohol_consumption: AlcoholConsumption = "none"
    smoking_habits: SmokingHabits = "none"
    medical_conditions: list[str] = Field(default_factory=list)
    custom_medical_conditions: str | None = None
    water_intake_goal: int = Field(default=2000, ge=1000, description="In ml.")
