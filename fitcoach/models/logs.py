from fitcoach.extensions import db
from fitcoach.utils.dates import utcnow


class MealLog(db.Model):
    __tablename__ = "meal_logs"

    id = db.Column(db.Integer, primary_key=True)
    member_id = db.Column(db.Integer, db.ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    meal_type = db.Column(db.String(20), nullable=False)
    logged_at = db.Column(db.DateTime, default=utcnow, nullable=False)

    items = db.relationship("MealLogItem", back_populates="meal_log", cascade="all, delete-orphan")

    __table_args__ = (
        db.Index("idx_meal_logs_member_logged", "member_id", "logged_at"),
    )


class MealLogItem(db.Model):
    __tablename__ = "meal_log_items"

    id = db.Column(db.Integer, primary_key=True)
    meal_log_id = db.Column(db.Integer, db.ForeignKey("meal_logs.id", ondelete="CASCADE"), nullable=False, index=True)
    food_item_id = db.Column(db.Integer, db.ForeignKey("food_items.id", ondelete="SET NULL"), nullable=True)
    quantity = db.Column(db.Float, default=0)
    unit = db.Column(db.String(20), default="g")
    calories = db.Column(db.Float, default=0)
    protein = db.Column(db.Float, default=0)
    carbs = db.Column(db.Float, default=0)
    fat = db.Column(db.Float, default=0)

    meal_log = db.relationship("MealLog", back_populates="items")
    food = db.relationship("FoodItem")


class WorkoutLog(db.Model):
    __tablename__ = "workout_logs"

    id = db.Column(db.Integer, primary_key=True)
    member_id = db.Column(db.Integer, db.ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    logged_at = db.Column(db.DateTime, default=utcnow, nullable=False)

    items = db.relationship("WorkoutLogItem", back_populates="workout_log", cascade="all, delete-orphan")

    __table_args__ = (
        db.Index("idx_workout_logs_member_logged", "member_id", "logged_at"),
    )


class WorkoutLogItem(db.Model):
    __tablename__ = "workout_log_items"

    id = db.Column(db.Integer, primary_key=True)
    workout_log_id = db.Column(db.Integer, db.ForeignKey("workout_logs.id", ondelete="CASCADE"), nullable=False, index=True)
    exercise_id = db.Column(db.Integer, db.ForeignKey("exercises.id", ondelete="SET NULL"), nullable=True)
    duration_minutes = db.Column(db.Float, nullable=False)
    calories_burned = db.Column(db.Float, default=0)
    weight_used = db.Column(db.Float)
    weight_unit = db.Column(db.String(10))

    workout_log = db.relationship("WorkoutLog", back_populates="items")
    exercise = db.relationship("Exercise")


class WeightLog(db.Model):
    __tablename__ = "weight_logs"

    id = db.Column(db.Integer, primary_key=True)
    member_id = db.Column(db.Integer, db.ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    weight_kg = db.Column(db.Float, nullable=False)
    logged_at = db.Column(db.DateTime, default=utcnow, nullable=False)


class MemberCheckIn(db.Model):
    __tablename__ = "member_check_ins"

    id = db.Column(db.Integer, primary_key=True)
    member_id = db.Column(db.Integer, db.ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    adherence = db.Column(db.Float)
    fatigue = db.Column(db.Float)
    pain = db.Column(db.Float)
    weight_kg = db.Column(db.Float)
    notes = db.Column(db.Text)
    logged_at = db.Column(db.DateTime, default=utcnow, nullable=False)

    def to_dict(self):
        return {
            "id": self.id,
            "member_id": self.member_id,
            "adherence": self.adherence,
            "fatigue": self.fatigue,
            "pain": self.pain,
            "weight_kg": self.weight_kg,
            "notes": self.notes,
            "logged_at": self.logged_at.isoformat() if self.logged_at else None,
        }
