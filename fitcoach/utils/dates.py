from datetime import date, datetime, time, timedelta, timezone


def utcnow():
    """Naive UTC timestamp, the form every DateTime column stores."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def day_bounds(day):
    start = datetime.combine(day, time.min)
    return start, start + timedelta(days=1)


def parse_iso_date(value):
    """Parse a strict YYYY-MM-DD string, returning None when it is malformed."""
    if not isinstance(value, str) or len(value.strip()) != 10:
        return None
    try:
        return date.fromisoformat(value.strip())
    except ValueError:
        return None


def iso(value):
    return value.isoformat() if value is not None else None
