from flask import Blueprint, current_app, jsonify, request
from flask_jwt_extended import current_user, jwt_required

from fitcoach.access import check_member_access
from fitcoach.extensions import db
from fitcoach.models import Exercise, WorkoutLog, WorkoutLogItem
from fitcoach.schemas import WorkoutLogSchema
from fitcoach.services.catalog import resolve_exercise
from fitcoach.utils.dates import day_bounds, iso, utcnow
from fitcoach.utils.numbers import positive_int

workouts_bp = Blueprint("workouts", __name__)
workout_log_schema = WorkoutLogSchema()


@workouts_bp.route("", methods=["POST"])
@jwt_required()
def log_workout():
    data = workout_log_schema.load(request.get_json(silent=True) or {})
    if current_user.id != data["member_id"]:
        return jsonify({"msg": "Forbidden"}), 403

    try:
        exercise_id = data.get("exercise_id")
        if not exercise_id:
            exercise_id = resolve_exercise(
                data["exercise_name"], data["duration_minutes"], data["calories_burned"]
            ).id

        log = WorkoutLog(member_id=data["member_id"], logged_at=utcnow())
        item = WorkoutLogItem(
            exercise_id=exercise_id,
            duration_minutes=data["duration_minutes"],
            calories_burned=data["calories_burned"],
            weight_used=data.get("weight_used"),
            weight_unit=data.get("weight_unit"),
        )
        log.items.append(item)
        db.session.add(log)
        db.session.commit()
    except Exception:
        db.session.rollback()
        current_app.logger.exception("Error logging workout")
        return jsonify({"msg": "Failed to log workout"}), 500

    return jsonify({"workout_log_id": log.id, "item_id": item.id}), 201


@workouts_bp.route("/today", methods=["GET"])
@jwt_required()
def workouts_today():
    member_id = positive_int(request.args.get("member_id"))
    if not member_id:
        return jsonify({"msg": "member_id is required"}), 400
    if not check_member_access(current_user, member_id, "logs"):
        return jsonify({"msg": "Forbidden"}), 403

    start, end = day_bounds(utcnow().date())
    rows = (
        db.session.query(WorkoutLog, WorkoutLogItem, Exercise)
        .join(WorkoutLogItem, WorkoutLogItem.workout_log_id == WorkoutLog.id)
        .outerjoin(Exercise, Exercise.id == WorkoutLogItem.exercise_id)
        .filter(WorkoutLog.member_id == member_id, WorkoutLog.logged_at >= start, WorkoutLog.logged_at < end)
        .order_by(WorkoutLog.logged_at.desc(), WorkoutLogItem.id.desc())
        .all()
    )
    workouts = [
        {
            "workout_log_id": log.id,
            "logged_at": iso(log.logged_at),
            "item_id": item.id,
            "exercise_id": item.exercise_id,
            "exercise_name": exercise.name if exercise else "",
            "duration_minutes": item.duration_minutes,
            "calories_burned": item.calories_burned,
            "weight_used": item.weight_used,
            "weight_unit": item.weight_unit,
        }
        for log, item, exercise in rows
    ]
    return jsonify({"workouts": workouts})


@workouts_bp.route("/items/<int:item_id>", methods=["DELETE"])
@jwt_required()
def delete_workout_item(item_id):
    item = db.session.get(WorkoutLogItem, item_id)
    if item is None:
        return jsonify({"msg": "Workout item not found"}), 404
    if item.workout_log.member_id != current_user.id:
        return jsonify({"msg": "Forbidden"}), 403

    try:
        db.session.delete(item)
        db.session.commit()
    except Exception:
        db.session.rollback()
        current_app.logger.exception("Error deleting workout item")
        return jsonify({"msg": "Failed to delete workout item"}), 500
    return "", 204
