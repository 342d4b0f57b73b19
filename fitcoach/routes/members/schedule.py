from flask import jsonify, request

from fitcoach.access import member_access_required
from fitcoach.models import Schedule
from fitcoach.utils.dates import parse_iso_date

from . import members_bp


def date_range_args():
    """Parse optional ``from``/``to`` query args; returns (from, to, error)."""
    bounds = []
    for name in ("from", "to"):
        raw = request.args.get(name)
        if raw in (None, ""):
            bounds.append(None)
            continue
        value = parse_iso_date(raw)
        if value is None:
            return None, None, f"{name} must be in YYYY-MM-DD format"
        bounds.append(value)
    return bounds[0], bounds[1], None


def filter_dates(query, date_from, date_to):
    if date_from:
        query = query.filter(Schedule.session_date >= date_from)
    if date_to:
        query = query.filter(Schedule.session_date <= date_to)
    return query.order_by(Schedule.session_date.asc(), Schedule.session_time.asc(), Schedule.id.asc())


@members_bp.route("/<int:member_id>/schedule", methods=["GET"])
@member_access_required("schedule")
def member_schedule(member_id):
    date_from, date_to, error = date_range_args()
    if error:
        return jsonify({"msg": error}), 400
    sessions = filter_dates(Schedule.query.filter_by(member_id=member_id), date_from, date_to).all()
    return jsonify({"sessions": [s.to_dict(counterpart="trainer") for s in sessions]})
