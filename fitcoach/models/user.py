from werkzeug.security import generate_password_hash, check_password_hash
from fitcoach.extensions import db
from fitcoach.utils.dates import utcnow

USERS_TABLE = "users"


class User(db.Model):
    __tablename__ = USERS_TABLE

    id = db.Column(db.Integer, primary_key=True)
    full_name = db.Column(db.String(150), nullable=False)
    email = db.Column(db.String(120), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(255), nullable=True)
    role = db.Column(
        db.String(20),
        db.CheckConstraint("role IN ('admin','trainer','nutritionist','member')", name="ck_users_role"),
        nullable=False,
        index=True,
    )
    status = db.Column(
        db.String(20),
        db.CheckConstraint("status IN ('pending','active','suspended')", name="ck_users_status"),
        default="pending",
        nullable=False,
    )

    # Password reset code (hashed) and its expiry
    reset_token = db.Column(db.String(255), nullable=True)
    reset_token_expires = db.Column(db.DateTime, nullable=True)

    created_at = db.Column(db.DateTime, default=utcnow)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow)

    profile = db.relationship("MemberProfile", uselist=False, back_populates="member", cascade="all, delete-orphan")
    goals = db.relationship("MemberGoal", uselist=False, back_populates="member", cascade="all, delete-orphan")
    trainer_assignment = db.relationship(
        "TrainerAssignment", uselist=False, foreign_keys="TrainerAssignment.member_id",
        back_populates="member", cascade="all, delete-orphan",
    )
    nutritionist_assignment = db.relationship(
        "NutritionistAssignment", uselist=False, foreign_keys="NutritionistAssignment.member_id",
        back_populates="member", cascade="all, delete-orphan",
    )

    # Helpers
    def set_password(self, password: str):
        self.password_hash = generate_password_hash(password)

    def check_password(self, password: str) -> bool:
        if not self.password_hash:
            return False
        return check_password_hash(self.password_hash, password)

    @property
    def is_activated(self):
        return self.status == "active" and self.password_hash is not None

    @property
    def is_admin(self):
        return self.role == "admin"

    @property
    def is_member(self):
        return self.role == "member"

    def to_session_dict(self):
        return {
            "id": self.id,
            "full_name": self.full_name,
            "email": self.email,
            "role": self.role,
        }

    def to_admin_dict(self):
        return {
            "id": self.id,
            "name": self.full_name,
            "email": self.email,
            "role": self.role,
            "isActivated": self.is_activated,
            "joinDate": self.created_at.isoformat() if self.created_at else None,
            "trainerId": self.trainer_assignment.trainer_id if self.trainer_assignment else None,
            "nutritionistId": self.nutritionist_assignment.nutritionist_id if self.nutritionist_assignment else None,
        }
