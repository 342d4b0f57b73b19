from flask import jsonify, current_app
from marshmallow import ValidationError
from werkzeug.exceptions import HTTPException

from fitcoach.extensions import db


class MailDeliveryError(Exception):
    """SMTP is not configured or the send did not finish in time."""


class BackupError(Exception):
    def __init__(self, message, status=500):
        super().__init__(message)
        self.message = message
        self.status = status


def record_system_log(log_type, message):
    """Persist an operational event to system_logs without touching the caller's transaction state."""
    from fitcoach.models import SystemLog

    try:
        db.session.add(SystemLog(log_type=log_type, message=message[:2000]))
        db.session.commit()
    except Exception:
        db.session.rollback()
        current_app.logger.exception("Could not write %s entry to system_logs", log_type)


def register_error_handlers(app):

    @app.errorhandler(ValidationError)
    def handle_validation_error(error):
        return jsonify({"msg": "Invalid request", "errors": error.messages}), 400

    @app.errorhandler(404)
    def not_found(error):
        return jsonify({"msg": "Not found"}), 404

    @app.errorhandler(405)
    def method_not_allowed(error):
        return jsonify({"msg": "Method not allowed"}), 405

    @app.errorhandler(429)
    def rate_limited(error):
        return jsonify({"msg": "Too many requests, please try again later"}), 429

    @app.errorhandler(Exception)
    def internal_error(error):
        if isinstance(error, HTTPException):
            return jsonify({"msg": error.description}), error.code
        db.session.rollback()
        app.logger.exception("Unhandled error: %s", error)
        record_system_log("error", f"Unhandled error: {error.__class__.__name__}: {error}")
        return jsonify({"msg": "Internal server error"}), 500
