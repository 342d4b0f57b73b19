import math


def round_half_up(value):
    return int(math.floor(value + 0.5))


def to_number(value, default=0.0):
    """Coerce loosely-typed JSON input to a finite float."""
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    if math.isnan(number) or math.isinf(number):
        return default
    return number


def positive_int(value):
    try:
        number = int(value)
    except (TypeError, ValueError):
        return None
    return number if number > 0 else None


def clamp(value, low, high):
    return max(low, min(high, value))
