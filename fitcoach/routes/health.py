from flask import Blueprint, current_app, jsonify
from sqlalchemy import text

from fitcoach.extensions import db

health_bp = Blueprint("health", __name__)


@health_bp.route("/health", methods=["GET"])
def health():
    try:
        db.session.execute(text("SELECT 1"))
    except Exception:
        db.session.rollback()
        current_app.logger.exception("Database health check failed")
        return jsonify({"ok": False}), 500
    return jsonify({"ok": True})
