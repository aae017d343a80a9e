"""Tests for goal calculation."""

import pytest

from nutrition_coach.services.goals import DEFAULT_GOALS, calculate_goals
from tests.conftest import make_profile


def test_maintenance_goal_for_moderately_active_profile() -> None:
    goals = calculate_goals(make_profile(weight=70, height=175, age=25))

    # BMR 1673.75, TDEE 2594.3125
    assert goals.calorie_goal == 2594
    assert goals.protein_goal == 195
    assert goals.carb_goal == 259
    assert goals.fat_goal == 86


def test_missing_profile_returns_defaults() -> None:
    goals = calculate_goals(None)

    assert goals == DEFAULT_GOALS
    assert (
        goals.calorie_goal,
        goals.protein_goal,
        goals.carb_goal,
        goals.fat_goal,
    ) == (2000, 150, 200, 60)


def test_weight_loss_applies_deficit_and_protein_ratio() -> None:
    goals = calculate_goals(
        make_profile(
            weight=80,
            height=180,
            age=30,
            activity_level="sedentary",
            goals="weightLoss",
        )
    )

    # BMR 1780, TDEE 2136, minus 500
    assert goals.calorie_goal == 1636
    assert goals.protein_goal == 164
    assert goals.carb_goal == 123
    assert goals.fat_goal == 55


def test_weight_gain_applies_surplus() -> None:
    goals = calculate_goals(
        make_profile(
            weight=60,
            height=170,
            age=20,
            activity_level="extraActive",
            goals="weightGain",
        )
    )

    # BMR 1567.5, TDEE 2978.25, plus 500
    assert goals.calorie_goal == 3478
    assert goals.carb_goal == 435
    assert goals.fat_goal == 77


@pytest.mark.parametrize(
    ("weight", "height", "age", "activity_level", "goal"),
    [
        (55, 160, 40, "lightlyActive", "weightLoss"),
        (95, 190, 35, "veryActive", "weightGain"),
        (72.5, 168.2, 51, "moderatelyActive", "maintainWeight"),
    ],
)
def test_macros_add_up_to_calorie_goal(
    weight: float, height: float, age: int, activity_level: str, goal: str
) -> None:
    goals = calculate_goals(
        make_profile(
            weight=weight,
            height=height,
            age=age,
            activity_level=activity_level,
            goals=goal,
        )
    )

    from_macros = goals.protein_goal * 4 + goals.carb_goal * 4 + goals.fat_goal * 9
    assert abs(from_macros - goals.calorie_goal) <= 10
