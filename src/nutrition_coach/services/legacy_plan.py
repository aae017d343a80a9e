"""Parser for diet plans stored as free-form markdown text.

Plans generated before the structured JSON format look roughly like::

    # Title
    Intro paragraph.
    ---
    ## 1. Breakfast
    Description line.
    **Ingredients:**
    - oats
    **Preparation:**
    1. Cook the oats.
    **Nutrition:** Calories: 350, Protein: 12g, Carbohydrates: 60g, Fats: 7g
    ---
    **Total Estimated Daily Nutrition:** A balanced day.
    Calories: 2000 ...

The layout was never enforced, so every field is optional and missing
values fall back to empty strings, empty lists or zero.
"""

import re

from nutrition_coach.domain.plans import (
    PlanContent,
    PlanMeal,
    PlanNutrition,
    PlanTotals,
)

DEFAULT_TITLE = "Your Diet Plan"
DEFAULT_MEAL_TITLE = "Meal"

_SECTION_SEPARATOR = re.compile(r"---|\n## \d*\.? ")
_TITLE = re.compile(r"#\s*(.*)")
_TITLE_LINE = re.compile(r"^#\s*.*?\n")
_MEAL_HEADING = re.compile(r"^#*\s*(?:\d+\.\s*)?")
_LIST_PREFIX = re.compile(r"^\s*(?:[-*•]|\d+\.)\s*")
_TOTALS_MARKER = "total estimated daily nutrition"
_TOTALS_LABEL = re.compile(r"\*\*|Total Estimated Daily Nutrition:", re.IGNORECASE)
_NUTRITION_FIELDS = {
    "calories": re.compile(r"Calories:\s*\**\s*(\d+)", re.IGNORECASE),
    "protein": re.compile(r"Protein:\s*\**\s*(\d+)", re.IGNORECASE),
    "carbohydrates": re.compile(r"Carbohydrates?:\s*\**\s*(\d+)", re.IGNORECASE),
    "fats": re.compile(r"Fats:\s*\**\s*(\d+)", re.IGNORECASE),
}


def parse_legacy_plan(content: str) -> PlanContent | None:
    """Parse a markdown plan, returning None when no meals can be found."""
    sections = [
        section.strip() for section in _SECTION_SEPARATOR.split(content)
    ]
    sections = [section for section in sections if section]
    if not sections:
        return None

    header = sections.pop(0)
    title_match = _TITLE.match(header)
    title = title_match.group(1).strip() if title_match else DEFAULT_TITLE
    intro = _TITLE_LINE.sub("", header, count=1).strip()

    totals = None
    for index, section in enumerate(sections):
        if _TOTALS_MARKER in section.lower():
            totals = _parse_totals(sections.pop(index))
            break

    meals = [_parse_meal(section) for section in sections]
    if not meals:
        return None
    return PlanContent(title=title, intro=intro, meals=meals, totals=totals)


def parse_nutrition(text: str) -> PlanNutrition:
    """Scrape the four nutrition fields from text, defaulting to zero."""
    values: dict[str, float] = {}
    for name, pattern in _NUTRITION_FIELDS.items():
        match = pattern.search(text)
        values[name] = float(match.group(1)) if match else 0.0
    return PlanNutrition(**values)


def _parse_totals(section: str) -> PlanTotals:
    lines = section.split("\n")
    description = _TOTALS_LABEL.sub("", lines[0]).strip()
    return PlanTotals(
        description=description,
        nutrition=parse_nutrition("\n".join(lines[1:])),
    )


def _parse_meal(section: str) -> PlanMeal:
    lines = section.split("\n")
    heading = lines.pop(0)
    title = _MEAL_HEADING.sub("", heading, count=1).replace("**", "").strip()

    ingredients_at = _find_keyword(lines, "ingredients")
    preparation_at = _find_keyword(lines, "preparation")
    nutrition_at = _find_keyword(lines, "nutrition")

    description_end = _first_found(ingredients_at, preparation_at, nutrition_at)
    if description_end is None:
        description_end = len(lines)
    description = " ".join(line.strip() for line in lines[:description_end])

    ingredients: list[str] = []
    if ingredients_at is not None:
        end = _first_found(preparation_at, nutrition_at)
        ingredients = _list_items(lines[ingredients_at + 1 : end])

    preparation: list[str] = []
    if preparation_at is not None:
        preparation = _list_items(lines[preparation_at + 1 : nutrition_at])

    nutrition_text = " ".join(lines[nutrition_at:]) if nutrition_at is not None else ""
    return PlanMeal(
        title=title or DEFAULT_MEAL_TITLE,
        description=description.strip(),
        ingredients=ingredients,
        preparation=preparation,
        nutrition=parse_nutrition(nutrition_text),
    )


def _find_keyword(lines: list[str], keyword: str) -> int | None:
    for index, line in enumerate(lines):
        if keyword in line.lower():
            return index
    return None


def _first_found(*indexes: int | None) -> int | None:
    for index in indexes:
        if index is not None:
            return index
    return None


def _list_items(lines: list[str]) -> list[str]:
    items = [_LIST_PREFIX.sub("", line, count=1).strip() for line in lines]
    return [item for item in items if item]
