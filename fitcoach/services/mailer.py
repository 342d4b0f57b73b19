"""Outgoing account emails (activation OTP and password reset code)."""
from concurrent.futures import ThreadPoolExecutor, TimeoutError as FutureTimeout

from flask import current_app
from flask_mail import Message
from markupsafe import escape

from fitcoach.errors import MailDeliveryError
from fitcoach.extensions import mail

_executor = ThreadPoolExecutor(max_workers=2, thread_name_prefix="mailer")


def _greeting(name):
    return f"Hi {name}" if name else "Hi"


def _assert_configured():
    missing = [key for key in ("MAIL_SERVER", "MAIL_USERNAME", "MAIL_PASSWORD") if not current_app.config.get(key)]
    if missing:
        raise MailDeliveryError(f"SMTP is not configured (missing: {', '.join(missing)})")


def _send(app, msg):
    with app.app_context():
        mail.send(msg)


def send_with_timeout(msg, label):
    """Send ``msg`` on a worker thread, giving up after MAIL_SEND_TIMEOUT seconds."""
    _assert_configured()
    app = current_app._get_current_object()
    timeout = app.config.get("MAIL_SEND_TIMEOUT") or None

    # Suppressed sends (testing) go through the current context so outbox recording works
    if app.config.get("MAIL_SUPPRESS_SEND") or app.testing:
        mail.send(msg)
        return

    future = _executor.submit(_send, app, msg)
    try:
        future.result(timeout=timeout)
    except FutureTimeout:
        app.logger.error("%s timed out after %ss", label, timeout)
        raise MailDeliveryError(f"{label} timed out after {timeout}s")
    except Exception as e:
        app.logger.error("Failed to send %s: %s", label, e)
        raise MailDeliveryError(str(e)) from e


def _code_email(subject, intro, code, minutes, email, name):
    greeting = _greeting(name)
    msg = Message(subject, recipients=[email])
    msg.body = (
        f"{greeting},\n\n{intro} {code}\nIt is valid for {minutes} minutes.\n\n"
        "If you did not request this, you can ignore this email."
    )
    msg.html = (
        f"<p>{escape(greeting)},</p>"
        f"<p>{intro}</p>"
        f'<p style="font-size: 24px; font-weight: bold; letter-spacing: 4px;">{code}</p>'
        f"<p>It is valid for {minutes} minutes.</p>"
        "<p>If you did not request this, you can ignore this email.</p>"
    )
    return msg


def send_otp_email(email, name, otp):
    msg = _code_email(
        "Your Leqet Gym account activation code",
        "Your one-time password (OTP) is:", otp, 15, email, name,
    )
    send_with_timeout(msg, "activation email")


def send_password_reset_email(email, name, code):
    msg = _code_email(
        "Your Leqet Gym password reset code",
        "Your password reset code is:", code, 10, email, name,
    )
    send_with_timeout(msg, "password reset email")
