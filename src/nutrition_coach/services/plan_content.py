"""Normalization of stored diet plan content for display."""

import json
from collections.abc import Callable

from nutrition_coach.domain.plans import PlanContent
from nutrition_coach.services.legacy_plan import parse_legacy_plan

FALLBACK_TITLE = "Diet Plan"

PlanParser = Callable[[str], PlanContent | None]


def parse_structured_plan(content: str) -> PlanContent | None:
    """Parse the JSON plan format, returning None for any other shape."""
    try:
        payload = json.loads(content)
    except (ValueError, RecursionError):
        return None
    if not isinstance(payload, dict):
        return None
    if not payload.get("title") or not payload.get("intro"):
        return None
    if not isinstance(payload.get("meals"), list):
        return None
    try:
        return PlanContent.model_validate(payload)
    except (ValueError, RecursionError):
        return None


# Tried in order; the first parser that yields meals wins.
PLAN_PARSERS: tuple[PlanParser, ...] = (parse_structured_plan, parse_legacy_plan)


def normalize_plan_content(content: str) -> PlanContent:
    """Return structured plan content, or a fallback holding the raw text."""
    for parser in PLAN_PARSERS:
        parsed = parser(content)
        if parsed is not None and parsed.is_available:
            return parsed
    return fallback_plan(content)


def fallback_plan(content: str) -> PlanContent:
    """Plan without meals that keeps the raw content for display."""
    return PlanContent(title=FALLBACK_TITLE, intro=content, meals=[], totals=None)


def serialize_plan_content(plan: PlanContent) -> str:
    """Encode plan content in the structured storage format."""
    return plan.model_dump_json()
