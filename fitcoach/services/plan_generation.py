"""Default diet and workout plan derivation.

Everything here is a pure function of the member's profile data so it can be
exercised without a database or request context.
"""
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from fitcoach.utils.numbers import clamp, round_half_up, to_number

DEFAULT_CALORIES = 2000
DEFAULT_PROTEIN = 120
FAT_CALORIE_SHARE = 0.25

PROTEIN_PER_KG = {
    "muscle_gain": 1.8,
    "fat_loss": 1.6,
}
DEFAULT_PROTEIN_PER_KG = 1.4

ACTIVITY_MULTIPLIERS = {
    "sedentary": 1.2,
    "light": 1.375,
    "moderate": 1.55,
    "active": 1.725,
    "very_active": 1.9,
}


@dataclass(frozen=True)
class MacroTargets:
    goal_key: str
    calories: int
    protein: int
    carbs: int
    fat: int


def classify_goal(text) -> str:
    goal = str(text or "general_fitness").lower()
    if "loss" in goal or "fat" in goal:
        return "fat_loss"
    if "muscle" in goal or "gain" in goal:
        return "muscle_gain"
    if "strength" in goal:
        return "strength"
    if "endurance" in goal:
        return "endurance"
    if "flex" in goal:
        return "flexibility"
    return "general_fitness"


def goal_label(goal_key: str) -> str:
    return goal_key.replace("_", " ")


def diet_plan_title(goal_key: str) -> str:
    return f"{goal_label(goal_key)} diet plan".title()


def default_macro_targets(goal, weight_kg, target_calories, nutrition_intake=None) -> MacroTargets:
    intake = nutrition_intake if isinstance(nutrition_intake, dict) else {}
    goal_key = classify_goal(intake.get("primaryGoal") or goal)

    target = to_number(target_calories, 0)
    calories = round_half_up(target) if target > 0 else DEFAULT_CALORIES

    weight = to_number(weight_kg, 0)
    per_kg = PROTEIN_PER_KG.get(goal_key, DEFAULT_PROTEIN_PER_KG)
    protein = round_half_up(weight * per_kg) if weight > 0 else DEFAULT_PROTEIN

    fat = round_half_up(calories * FAT_CALORIE_SHARE / 9)
    carbs = max(0, round_half_up((calories - protein * 4 - fat * 9) / 4))

    return MacroTargets(goal_key=goal_key, calories=calories, protein=protein, carbs=carbs, fat=fat)


# ---------------- Energy expenditure ----------------

def calculate_bmr(weight_kg, height_cm, age, gender) -> Optional[float]:
    """Mifflin-St Jeor. Returns None unless weight, height and age are all known."""
    weight = to_number(weight_kg, 0)
    height = to_number(height_cm, 0)
    years = to_number(age, 0)
    if weight <= 0 or height <= 0 or years <= 0:
        return None
    base = 10 * weight + 6.25 * height - 5 * years
    if str(gender or "").lower() == "female":
        return base - 161
    return base + 5


def calculate_tdee(bmr, activity_level) -> Optional[float]:
    if bmr is None:
        return None
    multiplier = ACTIVITY_MULTIPLIERS.get(str(activity_level or "").lower(), ACTIVITY_MULTIPLIERS["sedentary"])
    return bmr * multiplier


def calorie_target(tdee, goal) -> Optional[float]:
    if tdee is None:
        return None
    if goal == "weight_loss":
        return tdee - 500
    if goal == "muscle_gain":
        return tdee + 300
    return tdee


# ---------------- Workout plans ----------------

DAY_NAMES = {
    1: ["Wednesday"],
    2: ["Monday", "Thursday"],
    3: ["Monday", "Wednesday", "Friday"],
    4: ["Monday", "Tuesday", "Thursday", "Friday"],
    5: ["Monday", "Tuesday", "Wednesday", "Friday", "Saturday"],
    6: ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"],
}

DIFFICULTY_BY_LEVEL = {
    "beginner": "Beginner",
    "intermediate": "Intermediate",
    "advanced": "Advanced",
}


@dataclass
class ExerciseTemplate:
    name: str
    sets: int
    reps: str
    rest: str
    target_muscles: List[str]
    duration_minutes: Optional[float] = None


@dataclass
class DayTemplate:
    name: str
    focus: List[str]
    exercises: List[ExerciseTemplate] = field(default_factory=list)
    tips: Optional[str] = None


def _ex(name, sets, reps, rest, muscles, duration=None):
    return ExerciseTemplate(name, sets, reps, rest, muscles, duration)


_FULL_BODY = DayTemplate(
    "Full Body", ["full body"],
    [
        _ex("Squats", 3, "10-12", "60s", ["quads", "glutes"]),
        _ex("Push-ups", 3, "10-15", "60s", ["chest", "triceps"]),
        _ex("Bent-over Rows", 3, "10-12", "60s", ["back", "biceps"]),
        _ex("Plank", 3, "30-45s", "45s", ["core"]),
    ],
)

DAY_TEMPLATES: Dict[str, List[DayTemplate]] = {
    "fat_loss": [
        DayTemplate("Cardio Intervals", ["cardio", "conditioning"], [
            _ex("Treadmill Running", 1, "intervals", "as needed", ["legs", "cardio"], 20),
            _ex("Burpees", 3, "12", "45s", ["full body"]),
            _ex("Mountain Climbers", 3, "30s", "30s", ["core", "cardio"]),
        ], "Keep rest periods short to hold your heart rate up."),
        _FULL_BODY,
        DayTemplate("Steady Cardio", ["cardio"], [
            _ex("Cycling", 1, "steady", "none", ["legs", "cardio"], 30),
            _ex("Plank", 3, "45s", "30s", ["core"]),
        ]),
    ],
    "muscle_gain": [
        DayTemplate("Upper Body Push", ["chest", "shoulders", "triceps"], [
            _ex("Bench Press", 4, "6-8", "90s", ["chest", "triceps"]),
            _ex("Overhead Press", 3, "8-10", "90s", ["shoulders"]),
            _ex("Dips", 3, "8-12", "60s", ["triceps", "chest"]),
        ], "Add weight once you hit the top of the rep range."),
        DayTemplate("Lower Body", ["quads", "hamstrings", "glutes"], [
            _ex("Squats", 4, "6-8", "120s", ["quads", "glutes"]),
            _ex("Romanian Deadlift", 3, "8-10", "90s", ["hamstrings", "glutes"]),
            _ex("Walking Lunges", 3, "10 each", "60s", ["quads", "glutes"]),
        ]),
        DayTemplate("Upper Body Pull", ["back", "biceps"], [
            _ex("Pull-ups", 4, "6-10", "90s", ["back", "biceps"]),
            _ex("Barbell Rows", 3, "8-10", "90s", ["back"]),
            _ex("Biceps Curls", 3, "10-12", "60s", ["biceps"]),
        ]),
    ],
    "strength": [
        DayTemplate("Squat Focus", ["legs"], [
            _ex("Squats", 5, "5", "180s", ["quads", "glutes"]),
            _ex("Plank", 3, "45s", "60s", ["core"]),
        ]),
        DayTemplate("Press Focus", ["chest", "shoulders"], [
            _ex("Bench Press", 5, "5", "180s", ["chest", "triceps"]),
            _ex("Overhead Press", 3, "5", "120s", ["shoulders"]),
        ]),
        DayTemplate("Pull Focus", ["back", "posterior chain"], [
            _ex("Deadlift", 3, "5", "180s", ["hamstrings", "back"]),
            _ex("Pull-ups", 3, "6-8", "120s", ["back", "biceps"]),
        ]),
    ],
    "endurance": [
        DayTemplate("Long Steady Session", ["cardio"], [
            _ex("Cycling", 1, "steady", "none", ["legs", "cardio"], 40),
        ]),
        DayTemplate("Tempo Run", ["cardio"], [
            _ex("Treadmill Running", 1, "tempo", "none", ["legs", "cardio"], 25),
            _ex("Walking Lunges", 2, "12 each", "60s", ["quads", "glutes"]),
        ]),
        _FULL_BODY,
    ],
    "flexibility": [
        DayTemplate("Mobility Flow", ["mobility"], [
            _ex("Yoga", 1, "flow", "none", ["full body"], 30),
            _ex("Hip Openers", 2, "60s hold", "30s", ["hips"]),
        ]),
        DayTemplate("Stretch and Core", ["flexibility", "core"], [
            _ex("Hamstring Stretch", 3, "45s hold", "15s", ["hamstrings"]),
            _ex("Plank", 3, "30s", "30s", ["core"]),
        ]),
    ],
    "general_fitness": [
        _FULL_BODY,
        DayTemplate("Cardio and Core", ["cardio", "core"], [
            _ex("Cycling", 1, "steady", "none", ["legs", "cardio"], 20),
            _ex("Plank", 3, "30-45s", "45s", ["core"]),
        ]),
    ],
}


def _intake_number(intake, key, default):
    value = intake.get(key)
    if value is None or value == "":
        return default
    number = to_number(value, None)
    return default if number is None else number


def default_workout_plan(goal, trainer_intake=None) -> dict:
    """Build a weekly plan as plain data ready to be persisted.

    ``trainer_intake`` keys understood: ``fitnessLevel``, ``daysPerWeek``,
    ``sessionLengthMinutes`` and ``primaryGoal``.
    """
    intake = trainer_intake if isinstance(trainer_intake, dict) else {}
    goal_key = classify_goal(intake.get("primaryGoal") or goal)

    days_per_week = int(clamp(int(_intake_number(intake, "daysPerWeek", 3)), 1, 6))
    session_minutes = int(clamp(round_half_up(_intake_number(intake, "sessionLengthMinutes", 45)), 20, 120))
    level = str(intake.get("fitnessLevel") or "beginner").lower()
    difficulty = DIFFICULTY_BY_LEVEL.get(level, "Beginner")

    templates = DAY_TEMPLATES[goal_key]
    days = []
    for index, day_name in enumerate(DAY_NAMES[days_per_week]):
        template = templates[index % len(templates)]
        days.append({
            "day_of_week": day_name,
            "name": template.name,
            "duration_minutes": session_minutes,
            "difficulty": difficulty,
            "focus": ", ".join(template.focus),
            "tips": template.tips,
            "exercises": [
                {
                    "name": ex.name,
                    "sets": ex.sets,
                    "reps": ex.reps,
                    "rest": ex.rest,
                    "duration_minutes": ex.duration_minutes,
                    "target_muscles": ", ".join(ex.target_muscles),
                }
                for ex in template.exercises
            ],
        })

    return {
        "name": f"{goal_label(goal_key)} workout plan".title(),
        "goal": goal_label(goal_key),
        "weekly_days": days_per_week,
        "estimated_duration": session_minutes,
        "difficulty": difficulty,
        "days": days,
    }
