from flask import current_app, jsonify, request
from flask_jwt_extended import current_user

from fitcoach.access import member_access_required
from fitcoach.extensions import db
from fitcoach.models import MemberCheckIn, WeightLog
from fitcoach.schemas import CheckInSchema
from fitcoach.utils.dates import utcnow
from fitcoach.utils.numbers import positive_int

from . import members_bp

check_in_schema = CheckInSchema()


@members_bp.route("/<int:member_id>/check-ins", methods=["GET"])
@member_access_required("check_ins")
def list_check_ins(member_id):
    limit = positive_int(request.args.get("limit")) or 10
    limit = min(limit, 50)
    rows = (
        MemberCheckIn.query.filter_by(member_id=member_id)
        .order_by(MemberCheckIn.logged_at.desc(), MemberCheckIn.id.desc())
        .limit(limit)
        .all()
    )
    return jsonify({"checkIns": [row.to_dict() for row in rows]})


@members_bp.route("/<int:member_id>/check-ins", methods=["POST"])
@member_access_required("check_ins")
def create_check_in(member_id):
    if current_user.id != member_id:
        return jsonify({"msg": "Forbidden"}), 403
    data = check_in_schema.load(request.get_json(silent=True) or {})

    now = utcnow()
    try:
        check_in = MemberCheckIn(member_id=member_id, logged_at=now, **data)
        db.session.add(check_in)
        if data.get("weight_kg") is not None:
            db.session.add(WeightLog(member_id=member_id, weight_kg=data["weight_kg"], logged_at=now))
        db.session.commit()
    except Exception:
        db.session.rollback()
        current_app.logger.exception("Error creating member check-in")
        return jsonify({"msg": "Failed to create member check-in"}), 500

    return jsonify({"checkIn": check_in.to_dict()}), 201
