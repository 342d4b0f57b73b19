import pytest

from fitcoach.services.plan_generation import (
    MacroTargets,
    calculate_bmr,
    calculate_tdee,
    calorie_target,
    classify_goal,
    default_macro_targets,
    default_workout_plan,
    diet_plan_title,
)


@pytest.mark.parametrize("text,expected", [
    ("Fat loss", "fat_loss"),
    ("weight_loss", "fat_loss"),
    ("Build muscle", "muscle_gain"),
    ("gain weight", "muscle_gain"),
    ("Strength", "strength"),
    ("marathon endurance", "endurance"),
    ("Flexibility and mobility", "flexibility"),
    ("stay healthy", "general_fitness"),
    (None, "general_fitness"),
])
def test_classify_goal(text, expected):
    assert classify_goal(text) == expected


def test_muscle_gain_targets():
    targets = default_macro_targets("muscle_gain", 80, 2600)
    assert targets == MacroTargets(goal_key="muscle_gain", calories=2600, protein=144, carbs=344, fat=72)


def test_muscle_gain_without_calorie_target_uses_default_budget():
    targets = default_macro_targets("muscle gain", 80, None)
    assert targets == MacroTargets("muscle_gain", 2000, 144, 230, 56)


@pytest.mark.parametrize("goal,weight,calories", [
    ("fat loss", 95, 1800),
    ("muscle gain", 72.5, 2750),
    ("strength", 88, None),
    ("endurance", 60, 2400),
    ("flexibility", None, 1650),
    (None, 0, 3100.4),
])
def test_macro_energy_adds_up_and_is_stable(goal, weight, calories):
    targets = default_macro_targets(goal, weight, calories)
    assert targets == default_macro_targets(goal, weight, calories)
    assert targets.carbs > 0
    energy = targets.protein * 4 + targets.carbs * 4 + targets.fat * 9
    assert abs(energy - targets.calories) <= 8


def test_defaults_without_profile_data():
    targets = default_macro_targets(None, None, None)
    assert targets.goal_key == "general_fitness"
    assert targets.calories == 2000
    assert targets.protein == 120
    assert targets.fat == 56
    assert targets.carbs == 254


def test_intake_goal_wins_over_profile_goal():
    targets = default_macro_targets("muscle_gain", 70, 1800, {"primaryGoal": "fat loss"})
    assert targets.goal_key == "fat_loss"
    assert targets.protein == 112


def test_carbs_never_negative():
    targets = default_macro_targets("muscle_gain", 200, 1000)
    assert targets.carbs == 0


def test_target_calories_rounded_half_up():
    assert default_macro_targets("general", 0, 2000.5).calories == 2001


def test_diet_plan_title():
    assert diet_plan_title("muscle_gain") == "Muscle Gain Diet Plan"
    assert diet_plan_title("general_fitness") == "General Fitness Diet Plan"


def test_bmr_tdee_and_target():
    bmr = calculate_bmr(80, 180, 30, "male")
    assert bmr == pytest.approx(1780)
    assert calculate_bmr(60, 165, 25, "female") == pytest.approx(1345.25)
    assert calculate_bmr(None, 180, 30, "male") is None

    tdee = calculate_tdee(bmr, "moderate")
    assert tdee == pytest.approx(2759)
    assert calculate_tdee(bmr, "unknown") == pytest.approx(1780 * 1.2)
    assert calculate_tdee(None, "moderate") is None

    assert calorie_target(2000, "weight_loss") == 1500
    assert calorie_target(2000, "muscle_gain") == 2300
    assert calorie_target(2000, "maintain") == 2000
    assert calorie_target(None, "weight_loss") is None


def test_default_workout_plan_defaults():
    plan = default_workout_plan(None)
    assert plan["name"] == "General Fitness Workout Plan"
    assert plan["weekly_days"] == 3
    assert plan["estimated_duration"] == 45
    assert plan["difficulty"] == "Beginner"
    assert [d["day_of_week"] for d in plan["days"]] == ["Monday", "Wednesday", "Friday"]
    assert all(d["exercises"] for d in plan["days"])


def test_default_workout_plan_clamps_intake():
    plan = default_workout_plan("muscle gain", {
        "daysPerWeek": 9, "sessionLengthMinutes": 5, "fitnessLevel": "Advanced",
    })
    assert plan["goal"] == "muscle gain"
    assert plan["weekly_days"] == 6
    assert len(plan["days"]) == 6
    assert plan["estimated_duration"] == 20
    assert plan["difficulty"] == "Advanced"
    assert plan["days"][0]["name"] == "Upper Body Push"
    assert plan["days"][3]["name"] == "Upper Body Push"


def test_default_workout_plan_ignores_bad_intake_values():
    plan = default_workout_plan("strength", {"daysPerWeek": "lots", "sessionLengthMinutes": ""})
    assert plan["weekly_days"] == 3
    assert plan["estimated_duration"] == 45
