from fitcoach.extensions import db
from fitcoach.utils.dates import utcnow

LOG_TYPES = ("info", "warning", "error", "backup")


class SystemLog(db.Model):
    __tablename__ = "system_logs"

    id = db.Column(db.Integer, primary_key=True)
    log_type = db.Column(db.String(20), nullable=False, index=True)
    message = db.Column(db.Text, nullable=False)
    created_at = db.Column(db.DateTime, default=utcnow, nullable=False, index=True)

    def to_dict(self):
        return {
            "id": self.id,
            "log_type": self.log_type,
            "message": self.message,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
