from flask import current_app, jsonify

from fitcoach.access import Role, roles_required
from fitcoach.services.system import system_monitor, system_stats

from . import admin_bp


@admin_bp.route("/system/stats", methods=["GET"])
@roles_required(Role.ADMIN)
def stats():
    return jsonify(system_stats())


@admin_bp.route("/system/monitor", methods=["GET"])
@roles_required(Role.ADMIN)
def monitor():
    return jsonify(system_monitor(current_app.extensions["performance_metrics"]))
