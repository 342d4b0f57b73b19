from marshmallow import EXCLUDE, pre_load

from fitcoach.extensions import ma


class BaseSchema(ma.Schema):
    class Meta:
        unknown = EXCLUDE


class StrippedStringsMixin:
    """Trim string inputs and treat blank strings as missing."""

    @pre_load
    def strip_strings(self, data, **kwargs):
        if not isinstance(data, dict):
            return data
        cleaned = {}
        for key, value in data.items():
            if isinstance(value, str):
                value = value.strip()
                if not value:
                    continue
            cleaned[key] = value
        return cleaned
