from marshmallow import fields, validate, validates_schema, ValidationError

from fitcoach.models.diet_plan import MEAL_TYPES
from .base import BaseSchema, StrippedStringsMixin

_non_negative = validate.Range(min=0)


class MealLogSchema(BaseSchema):
    member_id = fields.Int(required=True, validate=validate.Range(min=1))
    meal_type = fields.Str(required=True, validate=validate.OneOf(MEAL_TYPES))
    food_item_id = fields.Int(allow_none=True)
    quantity = fields.Float(load_default=0, validate=_non_negative)
    unit = fields.Str(load_default="g")
    calories = fields.Float(load_default=0, validate=_non_negative)
    protein = fields.Float(load_default=0, validate=_non_negative)
    carbs = fields.Float(load_default=0, validate=_non_negative)
    fat = fields.Float(load_default=0, validate=_non_negative)


class WorkoutLogSchema(StrippedStringsMixin, BaseSchema):
    member_id = fields.Int(required=True, validate=validate.Range(min=1))
    duration_minutes = fields.Float(required=True, validate=validate.Range(min=0, min_inclusive=False))
    calories_burned = fields.Float(load_default=0, validate=_non_negative)
    weight_used = fields.Float(allow_none=True, validate=_non_negative)
    weight_unit = fields.Str(allow_none=True)
    exercise_id = fields.Int(allow_none=True, validate=validate.Range(min=1))
    exercise_name = fields.Str(allow_none=True)

    @validates_schema
    def require_exercise(self, data, **kwargs):
        if not data.get("exercise_id") and not data.get("exercise_name"):
            raise ValidationError("exercise_id or exercise_name is required", "exercise_id")


class FoodSchema(StrippedStringsMixin, BaseSchema):
    name = fields.Str(required=True, validate=validate.Length(min=1, max=200))
    category = fields.Str(allow_none=True)
    calories = fields.Float(load_default=0, validate=_non_negative)
    protein = fields.Float(load_default=0, validate=_non_negative)
    carbs = fields.Float(load_default=0, validate=_non_negative)
    fat = fields.Float(load_default=0, validate=_non_negative)
