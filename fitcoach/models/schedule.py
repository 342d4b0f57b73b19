from fitcoach.extensions import db

SESSION_TYPES = ("personal", "online", "group")


class Schedule(db.Model):
    __tablename__ = "schedules"

    id = db.Column(db.Integer, primary_key=True)
    trainer_id = db.Column(db.Integer, db.ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    member_id = db.Column(db.Integer, db.ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    session_type = db.Column(
        db.String(20),
        db.CheckConstraint("session_type IN ('personal','online','group')", name="ck_schedules_type"),
        nullable=False,
    )
    session_date = db.Column(db.Date, nullable=False)
    session_time = db.Column(db.Time, nullable=False)
    status = db.Column(db.String(20), default="scheduled", nullable=False)

    trainer = db.relationship("User", foreign_keys=[trainer_id])
    member = db.relationship("User", foreign_keys=[member_id])

    def to_dict(self, counterpart="member"):
        data = {
            "id": self.id,
            "session_type": self.session_type,
            "session_date": self.session_date.isoformat() if self.session_date else None,
            "session_time": self.session_time.strftime("%H:%M:%S") if self.session_time else None,
            "status": self.status,
        }
        if counterpart == "member":
            data["member_id"] = self.member_id
            data["member_name"] = self.member.full_name if self.member else None
        else:
            data["trainer_id"] = self.trainer_id
            data["trainer_name"] = self.trainer.full_name if self.trainer else None
        return data
