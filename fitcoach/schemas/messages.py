from marshmallow import fields, validate, pre_load

from .base import BaseSchema

PLAN_TYPES = ("diet", "workout")


class PlanMessageSchema(BaseSchema):
    plan_type = fields.Str(data_key="planType", required=True, validate=validate.OneOf(PLAN_TYPES))
    message = fields.Str(required=True, validate=validate.Length(min=1))

    @pre_load
    def normalise(self, data, **kwargs):
        if not isinstance(data, dict):
            return data
        data = dict(data)
        if isinstance(data.get("planType"), str):
            data["planType"] = data["planType"].strip().lower()
        if isinstance(data.get("message"), str):
            data["message"] = data["message"].strip()
        return data


class FeedbackSchema(BaseSchema):
    message = fields.Str(required=True, validate=validate.Length(min=1))

    @pre_load
    def normalise(self, data, **kwargs):
        if not isinstance(data, dict):
            return data
        data = dict(data)
        if isinstance(data.get("message"), str):
            data["message"] = data["message"].strip()
        return data
