from sqlalchemy import or_

from fitcoach.extensions import db
from fitcoach.models import (
    DietPlan, MealLog, MemberCheckIn, MemberGoal, MemberPlanMessage, MemberProfile, Notification,
    NutritionistAssignment, NutritionistFeedback, Schedule, TrainerAssignment, TrainerFeedback,
    User, WeightLog, WorkoutLog, WorkoutPlan,
)


def delete_user(user):
    """Remove a user and everything that references them in one transaction.

    Plans authored by the user as a coach are kept and detached; plans and
    logs belonging to the user as a member are deleted.
    """
    user_id = user.id
    try:
        DietPlan.query.filter_by(nutritionist_id=user_id).update({"nutritionist_id": None}, synchronize_session=False)
        WorkoutPlan.query.filter_by(trainer_id=user_id).update({"trainer_id": None}, synchronize_session=False)

        TrainerFeedback.query.filter(
            or_(TrainerFeedback.trainer_id == user_id, TrainerFeedback.member_id == user_id)
        ).delete(synchronize_session=False)
        NutritionistFeedback.query.filter(
            or_(NutritionistFeedback.nutritionist_id == user_id, NutritionistFeedback.member_id == user_id)
        ).delete(synchronize_session=False)
        Schedule.query.filter(
            or_(Schedule.trainer_id == user_id, Schedule.member_id == user_id)
        ).delete(synchronize_session=False)
        TrainerAssignment.query.filter(
            or_(TrainerAssignment.trainer_id == user_id, TrainerAssignment.member_id == user_id)
        ).delete(synchronize_session=False)
        NutritionistAssignment.query.filter(
            or_(NutritionistAssignment.nutritionist_id == user_id, NutritionistAssignment.member_id == user_id)
        ).delete(synchronize_session=False)

        # ORM deletes so the item rows cascade
        for model in (MealLog, WorkoutLog, DietPlan, WorkoutPlan):
            for row in model.query.filter_by(member_id=user_id).all():
                db.session.delete(row)

        for model in (WeightLog, MemberCheckIn, MemberPlanMessage):
            model.query.filter_by(member_id=user_id).delete(synchronize_session=False)
        MemberPlanMessage.query.filter_by(coach_id=user_id).update({"coach_id": None}, synchronize_session=False)
        Notification.query.filter_by(user_id=user_id).delete(synchronize_session=False)
        MemberProfile.query.filter_by(user_id=user_id).delete(synchronize_session=False)
        MemberGoal.query.filter_by(member_id=user_id).delete(synchronize_session=False)

        db.session.expire(user)
        db.session.query(User).filter_by(id=user_id).delete(synchronize_session=False)
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise
