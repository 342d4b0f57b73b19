from fitcoach.extensions import db
from fitcoach.utils.dates import utcnow


def _split_csv(value):
    return [part.strip() for part in (value or "").split(",") if part.strip()]


class WorkoutPlan(db.Model):
    __tablename__ = "workout_plans"

    id = db.Column(db.Integer, primary_key=True)
    member_id = db.Column(db.Integer, db.ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    trainer_id = db.Column(db.Integer, db.ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    name = db.Column(db.String(200), nullable=False)
    goal = db.Column(db.String(100))
    weekly_days = db.Column(db.Integer)
    estimated_duration = db.Column(db.Integer)
    difficulty = db.Column(db.String(30))
    is_active = db.Column(db.Boolean, default=True, nullable=False)
    created_at = db.Column(db.DateTime, default=utcnow)

    trainer = db.relationship("User", foreign_keys=[trainer_id])
    days = db.relationship(
        "WorkoutPlanDay", back_populates="plan", cascade="all, delete-orphan", order_by="WorkoutPlanDay.id"
    )

    __table_args__ = (
        db.Index("idx_workout_plans_member_active", "member_id", "is_active"),
    )

    def to_dict(self):
        workouts = [day.to_dict() for day in self.days]

        weekly_days = self.weekly_days or len(workouts)

        # Fall back to the average day length when no estimate was stored
        estimated = self.estimated_duration or 0
        if estimated <= 0:
            durations = [w["duration"] for w in workouts if w["duration"] > 0]
            estimated = round(sum(durations) / len(durations)) if durations else 0

        difficulty = (self.difficulty or "").strip()
        if not difficulty:
            difficulty = next((w["difficulty"] for w in workouts if w["difficulty"].strip()), "Custom")

        return {
            "id": str(self.id),
            "name": self.name or "",
            "type": "trainer" if self.trainer_id else "system",
            "goal": self.goal or "",
            "weeklyDays": weekly_days,
            "estimatedDuration": estimated,
            "difficulty": difficulty,
            "workouts": workouts,
            "createdBy": self.trainer.full_name if self.trainer else None,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "active": bool(self.is_active),
        }


class WorkoutPlanDay(db.Model):
    __tablename__ = "workout_plan_days"

    id = db.Column(db.Integer, primary_key=True)
    workout_plan_id = db.Column(db.Integer, db.ForeignKey("workout_plans.id", ondelete="CASCADE"), nullable=False, index=True)
    day_of_week = db.Column(db.String(20))
    name = db.Column(db.String(200))
    duration_minutes = db.Column(db.Integer)
    difficulty = db.Column(db.String(30))
    focus = db.Column(db.String(255))
    tips = db.Column(db.Text)

    plan = db.relationship("WorkoutPlan", back_populates="days")
    exercises = db.relationship(
        "WorkoutPlanExercise", back_populates="day", cascade="all, delete-orphan", order_by="WorkoutPlanExercise.id"
    )

    def to_dict(self):
        return {
            "id": str(self.id),
            "day": self.day_of_week or "",
            "name": self.name or "",
            "duration": self.duration_minutes or 0,
            "difficulty": self.difficulty or "",
            "focus": _split_csv(self.focus),
            "exercises": [exercise.to_dict() for exercise in self.exercises],
            "tips": self.tips if self.tips and self.tips.strip() else None,
        }


class WorkoutPlanExercise(db.Model):
    __tablename__ = "workout_plan_exercises"

    id = db.Column(db.Integer, primary_key=True)
    workout_plan_day_id = db.Column(db.Integer, db.ForeignKey("workout_plan_days.id", ondelete="CASCADE"), nullable=False, index=True)
    exercise_id = db.Column(db.Integer, db.ForeignKey("exercises.id", ondelete="SET NULL"), nullable=True)
    name = db.Column(db.String(200), nullable=False)
    sets = db.Column(db.Integer)
    reps = db.Column(db.String(50))
    rest = db.Column(db.String(50))
    duration_minutes = db.Column(db.Float)
    instructions = db.Column(db.Text)
    target_muscles = db.Column(db.String(255))

    day = db.relationship("WorkoutPlanDay", back_populates="exercises")

    def to_dict(self):
        return {
            "name": self.name or "",
            "sets": self.sets or 0,
            "reps": self.reps or "",
            "rest": self.rest or "",
            "duration": self.duration_minutes,
            "instructions": self.instructions,
            "targetMuscles": _split_csv(self.target_muscles),
        }
