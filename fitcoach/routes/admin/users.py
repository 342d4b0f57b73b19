from flask import current_app, jsonify, request

from fitcoach.access import Role, roles_required
from fitcoach.extensions import db
from fitcoach.models import NutritionistAssignment, TrainerAssignment, User
from fitcoach.schemas import InviteUserSchema, UpdateUserSchema
from fitcoach.services.accounts import delete_user
from fitcoach.utils.dates import utcnow

from . import admin_bp

invite_schema = InviteUserSchema()
update_schema = UpdateUserSchema()


def _set_assignment(model, coach_field, member_id, coach_id, coach_role):
    """Upsert or clear the member's single assignment of one kind; returns an error message or None."""
    existing = model.query.filter_by(member_id=member_id).first()
    if coach_id is None:
        if existing:
            db.session.delete(existing)
        return None

    coach = db.session.get(User, coach_id)
    if coach is None or coach.role != coach_role.value:
        return f"{coach_field} must reference a {coach_role.value}"

    if existing:
        setattr(existing, coach_field, coach_id)
        existing.assigned_at = utcnow()
    else:
        db.session.add(model(member_id=member_id, **{coach_field: coach_id}))
    return None


# =========================================================
# User management
# =========================================================

@admin_bp.route("/users/invite", methods=["POST"])
@roles_required(Role.ADMIN)
def invite_user():
    data = invite_schema.load(request.get_json(silent=True) or {})
    if User.query.filter_by(email=data["email"]).first():
        return jsonify({"msg": "A user with this email already exists"}), 409

    try:
        user = User(full_name=data["full_name"], email=data["email"], role=data["role"], status="pending")
        db.session.add(user)
        db.session.commit()
    except Exception:
        db.session.rollback()
        current_app.logger.exception("Error inviting user")
        return jsonify({"msg": "Failed to invite user"}), 500

    current_app.logger.info("Invited %s as %s", user.email, user.role)
    return jsonify({"id": user.id}), 201


@admin_bp.route("/users", methods=["GET"])
@roles_required(Role.ADMIN)
def list_users():
    users = User.query.order_by(User.created_at.desc(), User.id.desc()).all()
    return jsonify([u.to_admin_dict() for u in users])


@admin_bp.route("/users/<int:user_id>", methods=["GET"])
@roles_required(Role.ADMIN)
def get_user(user_id):
    user = db.session.get(User, user_id)
    if user is None:
        return jsonify({"msg": "User not found"}), 404
    return jsonify(user.to_admin_dict())


@admin_bp.route("/users/<int:user_id>", methods=["PUT"])
@roles_required(Role.ADMIN)
def update_user(user_id):
    data = update_schema.load(request.get_json(silent=True) or {})
    user = db.session.get(User, user_id)
    if user is None:
        return jsonify({"msg": "User not found"}), 404

    try:
        if "role" in data:
            user.role = data["role"]

        error = None
        if "trainer_id" in data:
            error = _set_assignment(TrainerAssignment, "trainer_id", user.id, data["trainer_id"], Role.TRAINER)
        if error is None and "nutritionist_id" in data:
            error = _set_assignment(
                NutritionistAssignment, "nutritionist_id", user.id, data["nutritionist_id"], Role.NUTRITIONIST
            )
        if error:
            db.session.rollback()
            return jsonify({"msg": error}), 400

        db.session.commit()
    except Exception:
        db.session.rollback()
        current_app.logger.exception("Error updating user %s", user_id)
        return jsonify({"msg": "Failed to update user"}), 500

    db.session.refresh(user)
    return jsonify(user.to_admin_dict())


@admin_bp.route("/users/<int:user_id>", methods=["DELETE"])
@roles_required(Role.ADMIN)
def remove_user(user_id):
    user = db.session.get(User, user_id)
    if user is None:
        return jsonify({"msg": "User not found"}), 404

    try:
        delete_user(user)
    except Exception:
        current_app.logger.exception("Error deleting user %s", user_id)
        return jsonify({"msg": "Failed to delete user"}), 500
    return "", 204
