from marshmallow import fields, validate

from fitcoach.models.schedule import SESSION_TYPES
from .base import BaseSchema


class ProfileSchema(BaseSchema):
    age = fields.Int(allow_none=True, validate=validate.Range(min=0, max=150))
    gender = fields.Str(allow_none=True)
    weight_kg = fields.Float(allow_none=True, validate=validate.Range(min=0))
    height_cm = fields.Float(allow_none=True, validate=validate.Range(min=0))
    goal = fields.Str(allow_none=True)
    activity_level = fields.Str(allow_none=True)
    trainer_intake = fields.Dict(allow_none=True)
    nutrition_intake = fields.Dict(allow_none=True)
    is_private = fields.Bool(load_default=False)
    bmr = fields.Float(allow_none=True)
    tdee = fields.Float(allow_none=True)
    target_calories = fields.Float(allow_none=True)
    weekly_calorie_goal = fields.Float(allow_none=True)
    weekly_workout_minutes = fields.Float(allow_none=True)
    daily_steps_goal = fields.Int(allow_none=True)
    daily_water_liters = fields.Float(allow_none=True)


class CheckInSchema(BaseSchema):
    adherence = fields.Float(allow_none=True)
    fatigue = fields.Float(allow_none=True)
    pain = fields.Float(allow_none=True)
    weight_kg = fields.Float(data_key="weightKg", allow_none=True, validate=validate.Range(min=0, min_inclusive=False))
    notes = fields.Str(allow_none=True)


class ScheduleSessionSchema(BaseSchema):
    member_id = fields.Int(required=True, validate=validate.Range(min=1))
    session_type = fields.Str(required=True, validate=validate.OneOf(SESSION_TYPES))
    session_date = fields.Date(required=True)
    session_time = fields.Time(required=True)
