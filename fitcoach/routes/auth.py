import secrets
from datetime import timedelta

from flask import Blueprint, current_app, jsonify, request
from flask_jwt_extended import (
    create_access_token,
    current_user,
    jwt_required,
    set_access_cookies,
    unset_jwt_cookies,
)
from werkzeug.security import check_password_hash, generate_password_hash

from fitcoach.errors import MailDeliveryError
from fitcoach.extensions import db, limiter
from fitcoach.models import User
from fitcoach.services.mailer import send_otp_email, send_password_reset_email
from fitcoach.services.otp import get_otp_gateway
from fitcoach.utils.dates import utcnow

auth_bp = Blueprint("auth", __name__)

RESET_CODE_TTL = timedelta(minutes=10)
MIN_PASSWORD_LENGTH = 6


def _login_limit():
    return current_app.config["LOGIN_RATE_LIMIT"]


def _otp_limit():
    return current_app.config["OTP_RATE_LIMIT"]


def _payload():
    return request.get_json(silent=True) or {}


def _email(data):
    return str(data.get("email") or "").strip().lower()


@auth_bp.route("/login", methods=["POST"])
@limiter.limit(_login_limit)
def login():
    data = _payload()
    email = _email(data)
    password = data.get("password") or ""

    if not email or not password:
        return jsonify({"success": False, "msg": "email and password are required"}), 400

    user = User.query.filter_by(email=email).first()
    if not user or not user.check_password(password):
        current_app.logger.info("Failed login attempt for %s", email)
        return jsonify({"success": False, "msg": "Invalid email or password"}), 401
    if user.status != "active":
        return jsonify({"success": False, "msg": "Invalid email or password"}), 401

    access_token = create_access_token(identity=str(user.id), additional_claims={"role": user.role})
    response = jsonify({"success": True, "user": user.to_session_dict()})
    set_access_cookies(response, access_token)
    return response


@auth_bp.route("/me", methods=["GET"])
@jwt_required()
def me():
    return jsonify({"user": current_user.to_session_dict()})


@auth_bp.route("/logout", methods=["POST"])
def logout():
    response = jsonify({"ok": True})
    unset_jwt_cookies(response)
    return response


# ---------------- Activation ----------------

@auth_bp.route("/request-otp", methods=["POST"])
@limiter.limit(_otp_limit)
def request_otp():
    email = _email(_payload())
    if not email:
        return jsonify({"msg": "Email is required"}), 400

    user = User.query.filter_by(email=email).first()
    if not user:
        return jsonify({"msg": "User not found"}), 404

    try:
        otp = get_otp_gateway().issue(user.id, email, request.remote_addr, request.user_agent.string or None)
        send_otp_email(email, user.full_name, otp)
    except MailDeliveryError as e:
        current_app.logger.error("Error requesting OTP for %s: %s", email, e)
        return jsonify({"msg": "Failed to request OTP"}), 500
    except Exception:
        db.session.rollback()
        current_app.logger.exception("Error requesting OTP")
        return jsonify({"msg": "Failed to request OTP"}), 500

    return jsonify({"ok": True})


@auth_bp.route("/activate", methods=["POST"])
@limiter.limit(_otp_limit)
def activate():
    data = _payload()
    email = _email(data)
    otp = str(data.get("otp") or "").strip()
    password = data.get("password") or ""
    full_name = str(data.get("full_name") or "").strip()

    if not email or not otp or not password:
        return jsonify({"msg": "email, otp and password are required"}), 400
    if len(password) < MIN_PASSWORD_LENGTH:
        return jsonify({"msg": f"Password must be at least {MIN_PASSWORD_LENGTH} characters"}), 400

    user = User.query.filter_by(email=email).first()
    if not user:
        return jsonify({"msg": "User not found"}), 404

    try:
        if not get_otp_gateway().verify(user.id, otp, request.remote_addr, request.user_agent.string or None):
            return jsonify({"msg": "Invalid or expired OTP"}), 400

        user.set_password(password)
        user.status = "active"
        if full_name:
            user.full_name = full_name
        db.session.commit()
    except Exception:
        db.session.rollback()
        current_app.logger.exception("Error activating account")
        return jsonify({"msg": "Failed to activate account"}), 500

    return jsonify({"ok": True})


# ---------------- Password reset ----------------

@auth_bp.route("/forgot-password/request", methods=["POST"])
@limiter.limit(_otp_limit)
def forgot_password_request():
    email = _email(_payload())
    if not email:
        return jsonify({"msg": "Email is required"}), 400

    user = User.query.filter_by(email=email).first()
    # Unknown and inactive accounts get the same answer
    if not user or not user.is_activated:
        return jsonify({"ok": True})

    code = f"{secrets.randbelow(1000000):06d}"
    try:
        user.reset_token = generate_password_hash(code)
        user.reset_token_expires = utcnow() + RESET_CODE_TTL
        db.session.commit()
        send_password_reset_email(email, user.full_name, code)
    except MailDeliveryError as e:
        current_app.logger.error("Error sending password reset to %s: %s", email, e)
        return jsonify({"msg": "Failed to request password reset"}), 500
    except Exception:
        db.session.rollback()
        current_app.logger.exception("Error requesting password reset")
        return jsonify({"msg": "Failed to request password reset"}), 500

    return jsonify({"ok": True})


@auth_bp.route("/forgot-password/reset", methods=["POST"])
@limiter.limit(_otp_limit)
def forgot_password_reset():
    data = _payload()
    email = _email(data)
    code = str(data.get("otp") or "").strip()
    password = data.get("password") or ""

    if not email or not code or not password:
        return jsonify({"msg": "email, otp and password are required"}), 400
    if len(str(password)) < MIN_PASSWORD_LENGTH:
        return jsonify({"msg": f"Password must be at least {MIN_PASSWORD_LENGTH} characters"}), 400

    invalid = (jsonify({"msg": "Invalid or expired code"}), 400)
    user = User.query.filter_by(email=email).first()
    if not user or user.status != "active" or not user.reset_token or not user.reset_token_expires:
        return invalid
    if user.reset_token_expires < utcnow():
        return invalid
    if not check_password_hash(user.reset_token, code):
        return invalid

    try:
        user.set_password(password)
        user.reset_token = None
        user.reset_token_expires = None
        db.session.commit()
    except Exception:
        db.session.rollback()
        current_app.logger.exception("Error resetting password")
        return jsonify({"msg": "Failed to reset password"}), 500

    return jsonify({"ok": True})
