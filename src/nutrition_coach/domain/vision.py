"""Models for food recognition results."""

from pydantic import BaseModel, ConfigDict, Field


class RecognizedFood(BaseModel):
    """Single recognized food with nutrition for one unit."""

    name: str
    quantity: float = Field(default=1, ge=0)
    calories: float = Field(ge=0)
    protein: float = Field(ge=0)
    carbohydrates: float = Field(ge=0)
    fat: float = Field(ge=0)


class RecognizedFoods(BaseModel):
    """Structured output for food recognition."""

    model_config = ConfigDict(populate_by_name=True)

    food_items: list[RecognizedFood] = Field(alias="foodItems")
