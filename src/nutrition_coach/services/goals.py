"""Daily calorie and macro goal calculation."""

import math

from nutrition_coach.domain.logs import NutritionGoals
from nutrition_coach.domain.profile import UserProfile

DEFAULT_GOALS = NutritionGoals(
    calorie_goal=2000, protein_goal=150, carb_goal=200, fat_goal=60
)

ACTIVITY_MULTIPLIERS: dict[str, float] = {
    "sedentary": 1.2,
    "lightlyActive": 1.375,
    "moderatelyActive": 1.55,
    "veryActive": 1.725,
    "extraActive": 1.9,
}
DEFAULT_ACTIVITY_MULTIPLIER = 1.55

GOAL_ADJUSTMENTS: dict[str, int] = {
    "weightLoss": -500,
    "maintainWeight": 0,
    "weightGain": 500,
}

# Share of calories from protein, carbohydrates and fat.
MACRO_RATIOS: dict[str, tuple[float, float, float]] = {
    "weightLoss": (0.4, 0.3, 0.3),
    "maintainWeight": (0.3, 0.4, 0.3),
    "weightGain": (0.3, 0.5, 0.2),
}

KCAL_PER_GRAM_PROTEIN = 4
KCAL_PER_GRAM_CARBS = 4
KCAL_PER_GRAM_FAT = 9


def calculate_goals(profile: UserProfile | None) -> NutritionGoals:
    """Return daily goals derived from the profile's biometrics and goal."""
    if profile is None:
        return DEFAULT_GOALS
    bmr = 10 * profile.weight + 6.25 * profile.height - 5 * profile.age + 5
    multiplier = ACTIVITY_MULTIPLIERS.get(
        profile.activity_level, DEFAULT_ACTIVITY_MULTIPLIER
    )
    tdee = bmr * multiplier
    calorie_goal = _round_half_up(tdee + GOAL_ADJUSTMENTS.get(profile.goals, 0))

    protein, carbs, fat = MACRO_RATIOS.get(
        profile.goals, MACRO_RATIOS["maintainWeight"]
    )
    return NutritionGoals(
        calorie_goal=calorie_goal,
        protein_goal=_round_half_up(calorie_goal * protein / KCAL_PER_GRAM_PROTEIN),
        carb_goal=_round_half_up(calorie_goal * carbs / KCAL_PER_GRAM_CARBS),
        fat_goal=_round_half_up(calorie_goal * fat / KCAL_PER_GRAM_FAT),
    )


def _round_half_up(value: float) -> int:
    """Round .5 upwards, matching goals stored by earlier clients."""
    return math.floor(value + 0.5)
