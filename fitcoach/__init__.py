import logging
import os
import time
from logging.handlers import RotatingFileHandler

import click
from flask import Flask, g, jsonify, request
from flask_cors import CORS

from fitcoach.config import config
from fitcoach.errors import register_error_handlers
from fitcoach.extensions import db, jwt, limiter, ma, mail, migrate, scheduler, socketio
from fitcoach.services.metrics import PerformanceMetrics
from fitcoach.services.otp import StoredProcedureOtpGateway

STARTER_EXERCISES = (
    ("Treadmill Running", 12),
    ("Bench Press", 6),
    ("Squats", 8),
    ("Yoga", 4),
    ("Cycling", 10),
)


def configure_logging(app):
    level = getattr(logging, str(app.config.get("LOG_LEVEL", "INFO")).upper(), logging.INFO)
    app.logger.setLevel(level)

    log_file = app.config.get("LOG_FILE")
    if log_file and not any(isinstance(h, RotatingFileHandler) for h in app.logger.handlers):
        os.makedirs(os.path.dirname(os.path.abspath(log_file)), exist_ok=True)
        handler = RotatingFileHandler(log_file, maxBytes=5 * 1024 * 1024, backupCount=5)
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s [%(name)s] %(message)s"))
        handler.setLevel(level)
        app.logger.addHandler(handler)


def register_jwt_callbacks():
    from fitcoach.models import User

    def _unauthorized(reason=None):
        # Failed double-submit checks arrive here as "Missing CSRF token" or "CSRF ... do not match"
        if reason and "CSRF" in str(reason):
            return jsonify({"msg": "CSRF validation failed"}), 403
        return jsonify({"msg": "Unauthorized"}), 401

    @jwt.user_identity_loader
    def user_identity(identity):
        return str(identity)

    @jwt.user_lookup_loader
    def user_lookup(_jwt_header, jwt_data):
        try:
            return db.session.get(User, int(jwt_data["sub"]))
        except (TypeError, ValueError):
            return None

    @jwt.user_lookup_error_loader
    def user_lookup_error(_jwt_header, _jwt_data):
        return _unauthorized()

    @jwt.unauthorized_loader
    def missing_token(reason):
        return _unauthorized(reason)

    @jwt.expired_token_loader
    def expired_token(_jwt_header, _jwt_data):
        return _unauthorized()

    @jwt.invalid_token_loader
    def invalid_token(reason):
        return _unauthorized(reason)


def register_metrics_hooks(app):
    metrics = app.extensions["performance_metrics"]

    @app.before_request
    def start_timer():
        g.request_started = time.perf_counter()

    @app.after_request
    def record_request(response):
        started = g.pop("request_started", None)
        if started is not None:
            metrics.record(
                (time.perf_counter() - started) * 1000,
                bytes_in=request.content_length or 0,
                bytes_out=response.content_length or 0,
            )
        return response


def register_blueprints(app):
    from fitcoach.routes.auth import auth_bp
    from fitcoach.routes.meals import meals_bp
    from fitcoach.routes.workouts import workouts_bp
    from fitcoach.routes.members import members_bp
    from fitcoach.routes.notifications import notifications_bp
    from fitcoach.routes.trainer import trainer_bp
    from fitcoach.routes.catalog import catalog_bp
    from fitcoach.routes.health import health_bp
    from fitcoach.routes.admin import admin_bp

    app.register_blueprint(auth_bp, url_prefix="/api/auth")
    app.register_blueprint(meals_bp, url_prefix="/api/meals")
    app.register_blueprint(workouts_bp, url_prefix="/api/workouts")
    app.register_blueprint(members_bp, url_prefix="/api/members")
    app.register_blueprint(notifications_bp, url_prefix="/api/notifications")
    app.register_blueprint(trainer_bp, url_prefix="/api/trainer")
    app.register_blueprint(catalog_bp, url_prefix="/api")
    app.register_blueprint(health_bp, url_prefix="/api")
    app.register_blueprint(admin_bp, url_prefix="/api/admin")


def configure_scheduler(app):
    """Start the daily housekeeping job once per process."""
    if not app.config.get("SCHEDULER_ENABLED") or scheduler.running:
        return

    from fitcoach.services.system import purge_old_system_logs

    def daily_housekeeping():
        with app.app_context():
            try:
                cleared = purge_old_system_logs()
                app.logger.info("Daily housekeeping removed %s system log entries", cleared)
            except Exception:
                db.session.rollback()
                app.logger.exception("Daily housekeeping failed")
            app.extensions["performance_metrics"].prune()

    scheduler.init_app(app)
    scheduler.add_job(
        id="daily_housekeeping", func=daily_housekeeping, trigger="cron", hour=3, replace_existing=True
    )
    scheduler.start()


def seed_defaults(app):
    from fitcoach.models import Exercise, User

    admin_email = app.config["ADMIN_EMAIL"].strip().lower()
    if not User.query.filter_by(email=admin_email).first():
        admin = User(full_name="Administrator", email=admin_email, role="admin", status="active")
        admin.set_password(app.config["ADMIN_PASSWORD"])
        db.session.add(admin)
        app.logger.info("Seeded admin account %s", admin_email)

    for name, calories_per_min in STARTER_EXERCISES:
        if not Exercise.query.filter_by(name=name).first():
            db.session.add(Exercise(name=name, calories_per_min=calories_per_min))
    db.session.commit()


def register_commands(app):

    @app.cli.command("init-db")
    def init_db():
        """Create missing tables and seed the admin account and starter exercises."""
        db.create_all()
        seed_defaults(app)
        click.echo("Database initialised.")


def create_app(config_name=None, **overrides):
    app = Flask(__name__)

    config_name = config_name or os.getenv("FLASK_CONFIG", "default")
    app.config.from_object(config[config_name])
    app.config.update(overrides)
    app.config["STARTED_AT"] = time.time()

    configure_logging(app)

    # Socket.IO handlers must be declared before init_app attaches them to the server
    from fitcoach import realtime  # noqa: F401

    db.init_app(app)
    ma.init_app(app)
    jwt.init_app(app)
    migrate.init_app(app, db)
    mail.init_app(app)
    limiter.init_app(app)
    socketio.init_app(app, async_mode=app.config.get("SOCKETIO_ASYNC_MODE"))
    CORS(app, resources={r"/api/*": {"origins": app.config["CORS_ORIGINS"]}}, supports_credentials=True)

    app.extensions["otp_gateway"] = StoredProcedureOtpGateway()
    app.extensions["performance_metrics"] = PerformanceMetrics(app.config["PERF_WINDOW_SECONDS"])

    register_jwt_callbacks()
    register_error_handlers(app)
    register_metrics_hooks(app)
    register_blueprints(app)
    register_commands(app)
    configure_scheduler(app)
    return app
