from flask import Blueprint, current_app, jsonify, request
from flask_jwt_extended import current_user

from fitcoach.access import Role, is_assigned, roles_required
from fitcoach.extensions import db
from fitcoach.models import Schedule, User
from fitcoach.schemas import ScheduleSessionSchema
from fitcoach.routes.members.schedule import date_range_args, filter_dates

trainer_bp = Blueprint("trainer", __name__)
schedule_schema = ScheduleSessionSchema()


@trainer_bp.route("/schedule", methods=["GET"])
@roles_required(Role.TRAINER, Role.ADMIN)
def trainer_schedule():
    date_from, date_to, error = date_range_args()
    if error:
        return jsonify({"msg": error}), 400

    query = Schedule.query
    if current_user.role == Role.TRAINER.value:
        query = query.filter_by(trainer_id=current_user.id)
    sessions = filter_dates(query, date_from, date_to).all()
    return jsonify({"sessions": [s.to_dict(counterpart="member") for s in sessions]})


@trainer_bp.route("/schedule", methods=["POST"])
@roles_required(Role.TRAINER, Role.ADMIN)
def create_session():
    data = schedule_schema.load(request.get_json(silent=True) or {})
    member_id = data["member_id"]

    if current_user.role == Role.TRAINER.value and not is_assigned(Role.TRAINER, current_user.id, member_id):
        return jsonify({"msg": "Forbidden"}), 403
    if db.session.get(User, member_id) is None:
        return jsonify({"msg": "Member not found"}), 404

    try:
        session = Schedule(
            trainer_id=current_user.id,
            member_id=member_id,
            session_type=data["session_type"],
            session_date=data["session_date"],
            session_time=data["session_time"],
        )
        db.session.add(session)
        db.session.commit()
    except Exception:
        db.session.rollback()
        current_app.logger.exception("Error creating schedule session")
        return jsonify({"msg": "Failed to create session"}), 500

    return jsonify({"id": session.id}), 201
