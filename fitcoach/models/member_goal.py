from fitcoach.extensions import db


class MemberGoal(db.Model):
    __tablename__ = "member_goals"

    member_id = db.Column(db.Integer, db.ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)
    weekly_calorie_goal = db.Column(db.Float)
    weekly_workout_minutes = db.Column(db.Float)
    daily_steps_goal = db.Column(db.Integer)
    daily_water_liters = db.Column(db.Float)

    member = db.relationship("User", back_populates="goals")
