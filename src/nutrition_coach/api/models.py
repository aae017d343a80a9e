"""Pydantic models for API request payloads."""

from pydantic import BaseModel, Field

from nutrition_coach.domain.logs import FoodItemDraft


class FoodItemPayload(BaseModel):
    """Food item values already scaled by quantity."""

    name: str = Field(min_length=1)
    calories: float = Field(ge=0)
    protein: float = Field(default=0, ge=0)
    carbohydrates: float = Field(default=0, ge=0)
    fat: float = Field(default=0, ge=0)

    def to_draft(self) -> FoodItemDraft:
        return FoodItemDraft(
            name=self.name,
            calories=self.calories,
            protein=self.protein,
            carbohydrates=self.carbohydrates,
            fat=self.fat,
        )


class MealPayload(BaseModel):
    """Meal to append to today's log."""

    name: str = Field(min_length=1)
    items: list[FoodItemPayload] = Field(min_length=1)


class WaterPayload(BaseModel):
    """Water change in ml; negative values undo earlier additions."""

    amount_ml: int
