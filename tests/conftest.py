import pytest
from flask_jwt_extended import create_access_token

from fitcoach import create_app
from fitcoach.extensions import db as _db
from fitcoach.models import NutritionistAssignment, TrainerAssignment, User


class FakeOtpGateway:
    """In-memory stand-in for the activation OTP database functions."""

    def __init__(self):
        self.issued = {}

    def issue(self, user_id, email, ip=None, user_agent=None):
        otp = "123456"
        self.issued[user_id] = otp
        return otp

    def verify(self, user_id, otp, ip=None, user_agent=None):
        return self.issued.get(user_id) == otp


@pytest.fixture
def app():
    app = create_app("testing")
    app.extensions["otp_gateway"] = FakeOtpGateway()
    with app.app_context():
        _db.create_all()
        yield app
        _db.session.remove()
        _db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def db(app):
    return _db


@pytest.fixture
def make_user(db):
    counter = {"n": 0}

    def _make(role="member", status="active", password="secret123", email=None, full_name=None):
        counter["n"] += 1
        user = User(
            full_name=full_name or f"{role.title()} {counter['n']}",
            email=email or f"{role}{counter['n']}@example.com",
            role=role,
            status=status,
        )
        if password:
            user.set_password(password)
        db.session.add(user)
        db.session.commit()
        return user

    return _make


@pytest.fixture
def auth_headers(app):
    def _headers(user):
        token = create_access_token(identity=str(user.id), additional_claims={"role": user.role})
        return {"Authorization": f"Bearer {token}"}

    return _headers


@pytest.fixture
def assign(db):
    def _assign(member, trainer=None, nutritionist=None):
        if trainer is not None:
            db.session.add(TrainerAssignment(member_id=member.id, trainer_id=trainer.id))
        if nutritionist is not None:
            db.session.add(NutritionistAssignment(member_id=member.id, nutritionist_id=nutritionist.id))
        db.session.commit()

    return _assign
