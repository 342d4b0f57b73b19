from fitcoach.extensions import db
from fitcoach.utils.dates import utcnow


class MemberPlanMessage(db.Model):
    __tablename__ = "member_plan_messages"

    id = db.Column(db.Integer, primary_key=True)
    member_id = db.Column(db.Integer, db.ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    coach_id = db.Column(db.Integer, db.ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    sender_role = db.Column(db.String(20), nullable=False)
    plan_type = db.Column(
        db.String(10),
        db.CheckConstraint("plan_type IN ('diet','workout')", name="ck_plan_messages_type"),
        nullable=False,
    )
    message = db.Column(db.Text, nullable=False)
    created_at = db.Column(db.DateTime, default=utcnow, nullable=False)

    __table_args__ = (
        db.Index("idx_plan_messages_member_type", "member_id", "plan_type"),
    )

    def to_dict(self):
        return {
            "id": self.id,
            "member_id": self.member_id,
            "coach_id": self.coach_id,
            "sender_role": self.sender_role,
            "plan_type": self.plan_type,
            "message": self.message,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }


class Notification(db.Model):
    __tablename__ = "notifications"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    message = db.Column(db.Text, nullable=False)
    is_read = db.Column(db.Boolean, default=False, nullable=False)
    created_at = db.Column(db.DateTime, default=utcnow, nullable=False)

    def to_dict(self):
        return {
            "id": self.id,
            "message": self.message,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "is_read": bool(self.is_read),
        }


class TrainerFeedback(db.Model):
    __tablename__ = "trainer_feedback"

    id = db.Column(db.Integer, primary_key=True)
    trainer_id = db.Column(db.Integer, db.ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    member_id = db.Column(db.Integer, db.ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    content = db.Column(db.Text, nullable=False)
    created_at = db.Column(db.DateTime, default=utcnow)


class NutritionistFeedback(db.Model):
    __tablename__ = "nutritionist_feedback"

    id = db.Column(db.Integer, primary_key=True)
    nutritionist_id = db.Column(db.Integer, db.ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    member_id = db.Column(db.Integer, db.ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    content = db.Column(db.Text, nullable=False)
    created_at = db.Column(db.DateTime, default=utcnow)
