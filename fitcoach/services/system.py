import os
import time
from datetime import timedelta

from flask import current_app
from sqlalchemy import func, text

from fitcoach.extensions import db
from fitcoach.models import SystemLog, User
from fitcoach.utils.dates import utcnow


def uptime_seconds(app=None):
    app = app or current_app
    return int(time.time() - app.config["STARTED_AT"])


def cpu_percent():
    """One-minute load average as a share of available cores."""
    try:
        load, _, _ = os.getloadavg()
    except (AttributeError, OSError):
        return 0
    cores = os.cpu_count() or 1
    return max(0, min(100, round(load / cores * 100)))


def memory_stats():
    try:
        page = os.sysconf("SC_PAGE_SIZE")
        total = page * os.sysconf("SC_PHYS_PAGES")
        free = page * os.sysconf("SC_AVPHYS_PAGES")
    except (AttributeError, ValueError, OSError):
        return {"total": 0, "free": 0, "used": 0, "percent": 0}
    used = total - free
    return {
        "total": total,
        "free": free,
        "used": used,
        "percent": round(used / total * 100) if total else 0,
    }


def database_size_bytes():
    dialect = db.engine.dialect.name
    if dialect == "postgresql":
        return int(db.session.execute(text("SELECT pg_database_size(current_database())")).scalar() or 0)
    if dialect == "sqlite":
        pages = db.session.execute(text("PRAGMA page_count")).scalar() or 0
        size = db.session.execute(text("PRAGMA page_size")).scalar() or 0
        return int(pages * size)
    return 0


def percent_of(used, limit):
    if not limit:
        return 0
    return max(0, min(100, round(used / limit * 100)))


def last_backup_at():
    row = (
        SystemLog.query.filter_by(log_type="backup")
        .order_by(SystemLog.created_at.desc())
        .first()
    )
    return row.created_at.isoformat() if row else None


def system_stats():
    return {
        "dbSizeBytes": database_size_bytes(),
        "uptimeSeconds": uptime_seconds(),
        "lastBackup": last_backup_at(),
    }


def health_check():
    db.session.execute(text("SELECT 1"))
    return {
        "success": True,
        "dbOk": True,
        "users": db.session.query(func.count(User.id)).scalar() or 0,
        "message": "Health check OK",
    }


def purge_old_system_logs(days=None):
    days = days if days is not None else current_app.config.get("SYSTEM_LOG_RETENTION_DAYS", 30)
    cutoff = utcnow() - timedelta(days=days)
    cleared = SystemLog.query.filter(SystemLog.created_at < cutoff).delete(synchronize_session=False)
    db.session.commit()
    return cleared


def system_monitor(metrics):
    config = current_app.config
    since = utcnow() - timedelta(hours=24)

    counts = dict(
        db.session.query(SystemLog.log_type, func.count(SystemLog.id))
        .filter(SystemLog.created_at >= since, SystemLog.log_type.in_(("error", "warning")))
        .group_by(SystemLog.log_type)
        .all()
    )
    recent_logs = SystemLog.query.order_by(SystemLog.created_at.desc()).limit(20).all()

    memory = memory_stats()
    storage_used = database_size_bytes()
    storage_limit = config["DB_STORAGE_LIMIT_BYTES"]
    bandwidth_used = metrics.bandwidth_bytes()
    bandwidth_limit = config["BANDWIDTH_LIMIT_BYTES_24H"]

    return {
        "status": "healthy",
        "uptimeSeconds": uptime_seconds(),
        "errorsLast24h": counts.get("error", 0),
        "warningsLast24h": counts.get("warning", 0),
        "cpuPercent": cpu_percent(),
        "memoryPercent": memory["percent"],
        "memoryTotalBytes": memory["total"],
        "memoryFreeBytes": memory["free"],
        "memoryUsedBytes": memory["used"],
        "storageUsedBytes": storage_used,
        "storageLimitBytes": storage_limit,
        "storagePercent": percent_of(storage_used, storage_limit),
        "bandwidthUsedBytes24h": bandwidth_used,
        "bandwidthLimitBytes24h": bandwidth_limit,
        "bandwidthPercent": percent_of(bandwidth_used, bandwidth_limit),
        "recentLogs": [log.to_dict() for log in recent_logs],
        "performance": metrics.hourly_points(),
    }
