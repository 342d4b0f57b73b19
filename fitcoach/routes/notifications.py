from flask import Blueprint, current_app, jsonify, request
from flask_jwt_extended import current_user, jwt_required

from fitcoach.extensions import db
from fitcoach.models import Notification

notifications_bp = Blueprint("notifications", __name__)


@notifications_bp.route("", methods=["GET"])
@jwt_required()
def list_notifications():
    only_unread = str(request.args.get("only_unread") or "").lower() in ("1", "true")

    query = Notification.query.filter_by(user_id=current_user.id)
    if only_unread:
        query = query.filter_by(is_read=False)
    rows = query.order_by(Notification.created_at.desc(), Notification.id.desc()).limit(100).all()
    return jsonify({"notifications": [n.to_dict() for n in rows]})


@notifications_bp.route("/<int:notification_id>/read", methods=["POST"])
@jwt_required()
def mark_read(notification_id):
    # Other users' notifications are left untouched without saying so
    try:
        Notification.query.filter_by(id=notification_id, user_id=current_user.id).update(
            {"is_read": True}, synchronize_session=False
        )
        db.session.commit()
    except Exception:
        db.session.rollback()
        current_app.logger.exception("Error marking notification as read")
        return jsonify({"msg": "Failed to update notification"}), 500
    return jsonify({"ok": True})
