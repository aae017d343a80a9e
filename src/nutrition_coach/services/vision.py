"""Food recognition service using LLMs."""

import base64
import logging
from dataclasses import dataclass
from typing import Protocol

from nutrition_coach.domain.logs import FoodItemDraft
from nutrition_coach.domain.vision import RecognizedFoods

_logger = logging.getLogger(__name__)

RECOGNITION_ERROR_MESSAGE = "Could not recognize food in the photo. Please try again."

VISION_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "foodItems": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "name": {"type": "string"},
                    "quantity": {"type": "number", "minimum": 0},
                    "calories": {"type": "number", "minimum": 0},
                    "protein": {"type": "number", "minimum": 0},
                    "carbohydrates": {"type": "number", "minimum": 0},
                    "fat": {"type": "number", "minimum": 0},
                },
                "required": [
                    "name",
                    "quantity",
                    "calories",
                    "protein",
                    "carbohydrates",
                    "fat",
                ],
                "additionalProperties": False,
            },
        }
    },
    "required": ["foodItems"],
    "additionalProperties": False,
}

RECOGNITION_PROMPT = (
    "Identify all food items in the photo. "
    "Group identical items together: three bananas become one entry "
    '"Banana" with quantity 3. '
    "For each item give calories, protein, carbohydrates and fat "
    "for a single unit of that item, as bare numbers."
)


class FoodRecognitionError(RuntimeError):
    """Raised when the vision service fails or returns junk."""


class VisionClient(Protocol):
    """Interface for LLM vision extraction."""

    async def extract(  # noqa: PLR0913
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        image_data_url: str,
        schema: dict[str, object],
        prompt: str,
    ) -> dict[str, object]:
        """Return structured vision extraction data."""


@dataclass
class VisionService:
    """Service that prepares vision prompts and validates results."""

    client: VisionClient
    model: str
    reasoning_effort: str | None
    store: bool

    async def recognize(self, image_bytes: bytes) -> RecognizedFoods:
        """Recognize food items in an image via the configured client."""
        try:
            raw = await self.client.extract(
                model=self.model,
                reasoning_effort=self.reasoning_effort,
                store=self.store,
                image_data_url=_to_data_url(image_bytes),
                schema=VISION_SCHEMA,
                prompt=RECOGNITION_PROMPT,
            )
            return RecognizedFoods.model_validate(raw)
        except Exception as exc:
            _logger.exception("Failed to recognize food")
            raise FoodRecognitionError(RECOGNITION_ERROR_MESSAGE) from exc


def to_food_items(recognized: RecognizedFoods) -> list[FoodItemDraft]:
    """Scale per-unit values by quantity into loggable food items."""
    return [
        FoodItemDraft(
            name=food.name,
            calories=food.calories * food.quantity,
            protein=food.protein * food.quantity,
            carbohydrates=food.carbohydrates * food.quantity,
            fat=food.fat * food.quantity,
        )
        for food in recognized.food_items
    ]


def _to_data_url(image_bytes: bytes) -> str:
    """Convert bytes to a base64 data URL for image input."""
    mime_type = _detect_mime_type(image_bytes)
    encoded = base64.b64encode(image_bytes).decode("utf-8")
    return f"data:{mime_type};base64,{encoded}"


def _detect_mime_type(image_bytes: bytes) -> str:
    """Infer a basic image MIME type from file signatures."""
    if image_bytes.startswith(b"\xff\xd8\xff"):
        return "image/jpeg"
    if image_bytes.startswith(b"\x89PNG\r\n\x1a\n"):
        return "image/png"
    if image_bytes[:4] == b"RIFF" and image_bytes[8:12] == b"WEBP":
        return "image/webp"
    return "image/jpeg"
