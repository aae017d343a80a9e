"""OpenAI Responses API client for plan generation and food recognition."""

import json
from dataclasses import dataclass

from openai import AsyncOpenAI

from nutrition_coach.services.plans import DietPlanClient
from nutrition_coach.services.vision import VisionClient


@dataclass
class OpenAIResponsesClient(DietPlanClient, VisionClient):
    """Structured-output client shared by plan generation and vision."""

    client: AsyncOpenAI

    @classmethod
    def create(cls, api_key: str) -> "OpenAIResponsesClient":
        """Create a client with its own AsyncOpenAI session."""
        return cls(client=AsyncOpenAI(api_key=api_key))

    async def generate(
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        schema: dict[str, object],
        prompt: str,
    ) -> dict[str, object]:
        """Generate a diet plan from a text prompt."""
        return await self._respond(
            model=model,
            reasoning_effort=reasoning_effort,
            store=store,
            content=[{"type": "input_text", "text": prompt}],
            schema_name="daily_diet_plan",
            schema=schema,
        )

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
        """Recognize foods in an image passed as a data URL."""
        return await self._respond(
            model=model,
            reasoning_effort=reasoning_effort,
            store=store,
            content=[
                {"type": "input_text", "text": prompt},
                {"type": "input_image", "image_url": image_data_url},
            ],
            schema_name="food_recognition",
            schema=schema,
        )

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.client.close()

    async def _respond(  # noqa: PLR0913
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        content: list[dict[str, str]],
        schema_name: str,
        schema: dict[str, object],
    ) -> dict[str, object]:
        request_payload: dict[str, object] = {
            "model": model,
            "input": [{"role": "user", "content": content}],
            "text": {
                "format": {
                    "type": "json_schema",
                    "name": schema_name,
                    "strict": True,
                    "schema": schema,
                }
            },
            "store": store,
        }
        if reasoning_effort:
            request_payload["reasoning"] = {"effort": reasoning_effort}

        response = await self.client.responses.create(**request_payload)
        output_text = response.output_text
        if not output_text:
            raise RuntimeError("OpenAI returned an empty response")
        return json.loads(output_text)
