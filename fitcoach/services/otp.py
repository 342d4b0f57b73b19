"""Activation OTPs.

Issuing and verifying codes is done by the database functions
``send_activation_otp`` and ``verify_activation_otp``; this module only calls
them. The gateway lives in ``app.extensions["otp_gateway"]`` so it can be
swapped per app.
"""
from flask import current_app
from sqlalchemy import text

from fitcoach.extensions import db


class StoredProcedureOtpGateway:

    def issue(self, user_id, email, ip=None, user_agent=None):
        result = db.session.execute(
            text("SELECT send_activation_otp(:user_id, :email, :ip, :ua) AS otp"),
            {"user_id": user_id, "email": email, "ip": ip, "ua": user_agent},
        )
        otp = result.scalar()
        db.session.commit()
        return otp

    def verify(self, user_id, otp, ip=None, user_agent=None):
        result = db.session.execute(
            text("SELECT verify_activation_otp(:user_id, :otp, :ip, :ua) AS ok"),
            {"user_id": user_id, "otp": otp, "ip": ip, "ua": user_agent},
        )
        ok = bool(result.scalar())
        db.session.commit()
        return ok


def get_otp_gateway():
    return current_app.extensions["otp_gateway"]
