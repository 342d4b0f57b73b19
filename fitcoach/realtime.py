"""Socket.IO connection handling: authenticated clients join their own room."""
from flask import current_app, request
from flask_jwt_extended import decode_token
from flask_jwt_extended.exceptions import JWTExtendedException
from flask_socketio import join_room
from jwt.exceptions import PyJWTError

from fitcoach.extensions import db, socketio
from fitcoach.models import User
from fitcoach.services.notifications import user_room


def _token_from(auth):
    if isinstance(auth, dict) and auth.get("token"):
        return auth["token"]
    return request.cookies.get(current_app.config["JWT_ACCESS_COOKIE_NAME"])


@socketio.on("connect")
def handle_connect(auth=None):
    token = _token_from(auth)
    if not token:
        return False
    try:
        claims = decode_token(token)
    except (PyJWTError, JWTExtendedException) as e:
        current_app.logger.info("Rejected socket connection: %s", e)
        return False
    if db.session.get(User, int(claims["sub"])) is None:
        current_app.logger.info("Rejected socket connection for unknown user %s", claims["sub"])
        return False
    join_room(user_room(claims["sub"]))
    return True
