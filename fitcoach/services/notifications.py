from flask import current_app

from fitcoach.extensions import db, socketio
from fitcoach.models import Notification, User


def user_room(user_id):
    return f"user:{user_id}"


def push(notification):
    """Emit an already-committed notification to the user's socket room."""
    try:
        socketio.emit("notification", notification.to_dict(), to=user_room(notification.user_id))
    except Exception:
        current_app.logger.exception("Socket emit failed for notification %s", notification.id)


def notify(user_id, message):
    """Queue a notification row on the session; caller commits, then calls ``push``."""
    notification = Notification(user_id=user_id, message=message)
    db.session.add(notification)
    return notification


def notify_admins(message, exclude_user_id=None):
    query = User.query.filter_by(role="admin")
    if exclude_user_id is not None:
        query = query.filter(User.id != exclude_user_id)
    return [notify(admin.id, message) for admin in query.all()]
