from fitcoach.extensions import db
from fitcoach.utils.dates import utcnow


class TrainerAssignment(db.Model):
    __tablename__ = "trainer_assignments"

    id = db.Column(db.Integer, primary_key=True)
    member_id = db.Column(db.Integer, db.ForeignKey("users.id", ondelete="CASCADE"), nullable=False, unique=True)
    trainer_id = db.Column(db.Integer, db.ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    assigned_at = db.Column(db.DateTime, default=utcnow)

    member = db.relationship("User", foreign_keys=[member_id], back_populates="trainer_assignment")
    trainer = db.relationship("User", foreign_keys=[trainer_id])


class NutritionistAssignment(db.Model):
    __tablename__ = "nutritionist_assignments"

    id = db.Column(db.Integer, primary_key=True)
    member_id = db.Column(db.Integer, db.ForeignKey("users.id", ondelete="CASCADE"), nullable=False, unique=True)
    nutritionist_id = db.Column(db.Integer, db.ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    assigned_at = db.Column(db.DateTime, default=utcnow)

    member = db.relationship("User", foreign_keys=[member_id], back_populates="nutritionist_assignment")
    nutritionist = db.relationship("User", foreign_keys=[nutritionist_id])
