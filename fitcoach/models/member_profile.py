from sqlalchemy.dialects.postgresql import JSONB
from fitcoach.extensions import db

JSONType = db.JSON().with_variant(JSONB(), "postgresql")


class MemberProfile(db.Model):
    __tablename__ = "member_profiles"

    user_id = db.Column(db.Integer, db.ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)
    age = db.Column(db.Integer)
    gender = db.Column(db.String(10))
    weight_kg = db.Column(db.Float)
    height_cm = db.Column(db.Float)
    goal = db.Column(db.String(100))
    activity_level = db.Column(db.String(30))
    trainer_intake = db.Column(JSONType, nullable=True)
    nutrition_intake = db.Column(JSONType, nullable=True)
    is_private = db.Column(db.Boolean, default=False, nullable=False)
    bmr = db.Column(db.Float)
    tdee = db.Column(db.Float)
    target_calories = db.Column(db.Float)

    member = db.relationship("User", back_populates="profile")
