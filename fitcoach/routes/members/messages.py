from flask import current_app, jsonify, request
from flask_jwt_extended import current_user

from fitcoach.access import Role, member_access_required
from fitcoach.extensions import db
from fitcoach.models import (
    MemberPlanMessage, NutritionistAssignment, NutritionistFeedback,
    TrainerAssignment, TrainerFeedback,
)
from fitcoach.schemas import FeedbackSchema, PlanMessageSchema
from fitcoach.schemas.messages import PLAN_TYPES
from fitcoach.services.notifications import notify, notify_admins, push
from fitcoach.utils.dates import iso
from fitcoach.utils.numbers import positive_int

from . import members_bp

plan_message_schema = PlanMessageSchema()
feedback_schema = FeedbackSchema()

COACH_PLAN_TYPE = {
    Role.TRAINER.value: "workout",
    Role.NUTRITIONIST.value: "diet",
}


def _assigned_coach_id(member_id, plan_type):
    if plan_type == "workout":
        row = TrainerAssignment.query.filter_by(member_id=member_id).first()
        return row.trainer_id if row else None
    row = NutritionistAssignment.query.filter_by(member_id=member_id).first()
    return row.nutritionist_id if row else None


def _queue_notifications(member_id, plan_type):
    """Build notification rows for a new plan message; returns them uncommitted."""
    queued = []
    if current_user.role == Role.MEMBER.value:
        coach_id = _assigned_coach_id(member_id, plan_type)
        if coach_id:
            queued.append(notify(coach_id, f"New message from member about their {plan_type} plan"))
    else:
        queued.append(notify(member_id, f"New message about your {plan_type} plan"))
    queued.extend(notify_admins(
        f"New {plan_type} plan message for member #{member_id}",
        exclude_user_id=current_user.id,
    ))
    return queued


@members_bp.route("/<int:member_id>/plan-messages", methods=["GET"])
@member_access_required("plan_messages")
def list_plan_messages(member_id):
    plan_type = str(request.args.get("planType") or "").strip().lower()
    if plan_type not in PLAN_TYPES:
        return jsonify({"msg": "planType must be 'diet' or 'workout'"}), 400

    limit = positive_int(request.args.get("limit")) or 50
    limit = min(limit, 200)

    messages = (
        MemberPlanMessage.query.filter_by(member_id=member_id, plan_type=plan_type)
        .order_by(MemberPlanMessage.created_at.asc(), MemberPlanMessage.id.asc())
        .limit(limit)
        .all()
    )
    return jsonify({"messages": [m.to_dict() for m in messages]})


@members_bp.route("/<int:member_id>/plan-messages", methods=["POST"])
@member_access_required("plan_messages")
def post_plan_message(member_id):
    data = plan_message_schema.load(request.get_json(silent=True) or {})
    plan_type = data["plan_type"]

    allowed_type = COACH_PLAN_TYPE.get(current_user.role)
    if allowed_type and plan_type != allowed_type:
        label = "Trainers" if current_user.role == Role.TRAINER.value else "Nutritionists"
        return jsonify({"msg": f"{label} can only post to {allowed_type} plan messages"}), 403

    is_member = current_user.role == Role.MEMBER.value
    try:
        message = MemberPlanMessage(
            member_id=member_id,
            coach_id=None if is_member else current_user.id,
            sender_role=current_user.role,
            plan_type=plan_type,
            message=data["message"],
        )
        db.session.add(message)
        db.session.commit()
    except Exception:
        db.session.rollback()
        current_app.logger.exception("Error posting plan message")
        return jsonify({"msg": "Failed to post message"}), 500

    try:
        queued = _queue_notifications(member_id, plan_type)
        db.session.commit()
        for notification in queued:
            push(notification)
    except Exception:
        db.session.rollback()
        current_app.logger.exception("Failed to notify about plan message %s", message.id)

    return jsonify({"message": message.to_dict()}), 201


def _save_feedback(model, coach_field, member_id):
    data = feedback_schema.load(request.get_json(silent=True) or {})
    try:
        feedback = model(member_id=member_id, content=data["message"], **{coach_field: current_user.id})
        db.session.add(feedback)
        db.session.commit()
    except Exception:
        db.session.rollback()
        current_app.logger.exception("Error saving feedback")
        return jsonify({"msg": "Failed to save feedback"}), 500
    return jsonify({"id": feedback.id, "created_at": iso(feedback.created_at)}), 201


@members_bp.route("/<int:member_id>/trainer-feedback", methods=["POST"])
@member_access_required("trainer_feedback")
def trainer_feedback(member_id):
    return _save_feedback(TrainerFeedback, "trainer_id", member_id)


@members_bp.route("/<int:member_id>/nutritionist-feedback", methods=["POST"])
@member_access_required("nutritionist_feedback")
def nutritionist_feedback(member_id):
    return _save_feedback(NutritionistFeedback, "nutritionist_id", member_id)
