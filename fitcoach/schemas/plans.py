from marshmallow import fields, validate, pre_load

from fitcoach.models.diet_plan import MEAL_TYPES
from .base import BaseSchema, StrippedStringsMixin


class DietPlanItemSchema(StrippedStringsMixin, BaseSchema):
    food_id = fields.Int(data_key="foodId", allow_none=True)
    name = fields.Str(allow_none=True)
    category = fields.Str(allow_none=True)
    quantity = fields.Float(load_default=0)
    unit = fields.Str(load_default="g")
    calories = fields.Float(load_default=0)
    protein = fields.Float(load_default=0)
    carbs = fields.Float(load_default=0)
    fat = fields.Float(load_default=0)


class DietPlanMealSchema(StrippedStringsMixin, BaseSchema):
    meal_type = fields.Str(data_key="mealType", load_default="snack")
    name = fields.Str(allow_none=True)
    notes = fields.Str(allow_none=True)
    items = fields.List(fields.Nested(DietPlanItemSchema), load_default=list)

    @pre_load
    def normalise_meal_type(self, data, **kwargs):
        if not isinstance(data, dict):
            return data
        data = dict(data)
        meal_type = str(data.get("mealType") or "").strip().lower()
        data["mealType"] = meal_type if meal_type in MEAL_TYPES else "snack"
        return data


class ManualDietPlanSchema(StrippedStringsMixin, BaseSchema):
    name = fields.Str(load_default="Custom diet plan")
    goal = fields.Str(load_default="custom")
    meals = fields.List(fields.Nested(DietPlanMealSchema), load_default=list)


class WorkoutPlanExerciseSchema(StrippedStringsMixin, BaseSchema):
    # Exercises without a name are skipped when the plan is saved
    name = fields.Str(load_default=None)
    exercise_id = fields.Int(data_key="exerciseId", allow_none=True)
    sets = fields.Int(allow_none=True)
    reps = fields.Str(allow_none=True)
    rest = fields.Str(allow_none=True)
    duration_minutes = fields.Float(data_key="durationMinutes", allow_none=True)
    intensity = fields.Str(allow_none=True)
    instructions = fields.Str(allow_none=True)
    target_muscles = fields.Str(data_key="targetMuscles", allow_none=True)
    category = fields.Str(allow_none=True)


class WorkoutPlanDaySchema(StrippedStringsMixin, BaseSchema):
    day_of_week = fields.Str(data_key="dayOfWeek", allow_none=True)
    name = fields.Str(allow_none=True)
    duration_minutes = fields.Int(data_key="durationMinutes", allow_none=True, validate=validate.Range(min=0))
    difficulty = fields.Str(allow_none=True)
    focus = fields.Str(allow_none=True)
    tips = fields.Str(allow_none=True)
    exercises = fields.List(fields.Nested(WorkoutPlanExerciseSchema), load_default=list)


class ManualWorkoutPlanSchema(StrippedStringsMixin, BaseSchema):
    name = fields.Str(load_default="Custom workout plan")
    goal = fields.Str(load_default="custom")
    days = fields.List(fields.Nested(WorkoutPlanDaySchema), load_default=list)
