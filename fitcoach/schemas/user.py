from marshmallow import fields, validate, pre_load

from .base import BaseSchema

ROLES = ("admin", "trainer", "nutritionist", "member")


class InviteUserSchema(BaseSchema):
    full_name = fields.Str(required=True, validate=validate.Length(min=1, max=150))
    email = fields.Email(required=True)
    role = fields.Str(required=True, validate=validate.OneOf(ROLES))

    @pre_load
    def normalise(self, data, **kwargs):
        if not isinstance(data, dict):
            return data
        data = dict(data)
        if isinstance(data.get("email"), str):
            data["email"] = data["email"].strip().lower()
        if isinstance(data.get("full_name"), str):
            data["full_name"] = data["full_name"].strip()
        return data


class UpdateUserSchema(BaseSchema):
    # Absent keys leave assignments untouched, explicit nulls clear them
    role = fields.Str(validate=validate.OneOf(ROLES))
    trainer_id = fields.Int(data_key="trainerId", allow_none=True, validate=validate.Range(min=1))
    nutritionist_id = fields.Int(data_key="nutritionistId", allow_none=True, validate=validate.Range(min=1))
