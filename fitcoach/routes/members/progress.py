from flask import jsonify, request

from fitcoach.access import member_access_required
from fitcoach.services.progress import dashboard_summary, progress_summary
from fitcoach.utils.numbers import positive_int

from . import members_bp

DEFAULT_SUMMARY_DAYS = 14
MAX_SUMMARY_DAYS = 90


@members_bp.route("/<int:member_id>/dashboard-summary", methods=["GET"])
@member_access_required("progress")
def member_dashboard_summary(member_id):
    days = positive_int(request.args.get("days")) or DEFAULT_SUMMARY_DAYS
    days = min(days, MAX_SUMMARY_DAYS)
    return jsonify(dashboard_summary(member_id, days))


@members_bp.route("/<int:member_id>/progress-summary", methods=["GET"])
@member_access_required("progress")
def member_progress_summary(member_id):
    return jsonify(progress_summary(member_id))
