from flask import current_app, jsonify

from fitcoach.access import Role, roles_required
from fitcoach.errors import BackupError, record_system_log
from fitcoach.extensions import db
from fitcoach.services.backup import create_backup
from fitcoach.services.system import health_check, purge_old_system_logs

from . import admin_bp


@admin_bp.route("/maintenance/backup", methods=["POST"])
@roles_required(Role.ADMIN)
def backup():
    try:
        result = create_backup()
    except BackupError as e:
        current_app.logger.error("Backup failed: %s", e.message)
        record_system_log("error", f"Backup failed: {e.message}")
        return jsonify({"success": False, "message": e.message}), e.status
    return jsonify(result)


@admin_bp.route("/maintenance/health-check", methods=["POST"])
@roles_required(Role.ADMIN)
def run_health_check():
    try:
        result = health_check()
    except Exception:
        db.session.rollback()
        current_app.logger.exception("Health check failed")
        return jsonify({"success": False, "dbOk": False, "message": "Health check failed"}), 500
    return jsonify(result)


@admin_bp.route("/maintenance/clear-cache", methods=["POST"])
@roles_required(Role.ADMIN)
def clear_cache():
    try:
        cleared = purge_old_system_logs()
    except Exception:
        db.session.rollback()
        current_app.logger.exception("Error clearing system logs")
        return jsonify({"success": False, "message": "Failed to clear cache"}), 500

    current_app.logger.info("Cleared %s old system log entries", cleared)
    return jsonify({"success": True, "cleared": cleared})
