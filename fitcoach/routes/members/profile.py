from datetime import timedelta

from flask import current_app, jsonify, request
from flask_jwt_extended import current_user

from fitcoach.access import Role, member_access_required, roles_required
from fitcoach.extensions import db
from fitcoach.models import (
    MealLog, MemberGoal, MemberProfile, NutritionistAssignment, TrainerAssignment, User, WorkoutLog,
)
from fitcoach.schemas import ProfileSchema
from fitcoach.services.plan_generation import calculate_bmr, calculate_tdee, calorie_target
from fitcoach.utils.dates import day_bounds, iso, utcnow
from fitcoach.utils.numbers import round_half_up

from . import members_bp

profile_schema = ProfileSchema()


def _num(value):
    return float(value) if value is not None else None


def serialize_profile(user):
    profile = user.profile
    goals = user.goals
    return {
        "memberId": user.id,
        "age": profile.age if profile else None,
        "gender": profile.gender if profile else None,
        "weightKg": _num(profile.weight_kg) if profile else None,
        "heightCm": _num(profile.height_cm) if profile else None,
        "goal": profile.goal if profile else None,
        "activityLevel": profile.activity_level if profile else None,
        "trainerIntake": profile.trainer_intake if profile else None,
        "nutritionIntake": profile.nutrition_intake if profile else None,
        "isPrivate": bool(profile.is_private) if profile else False,
        "bmr": _num(profile.bmr) if profile else None,
        "tdee": _num(profile.tdee) if profile else None,
        "targetCalories": _num(profile.target_calories) if profile else None,
        "weeklyCalorieGoal": _num(goals.weekly_calorie_goal) if goals else None,
        "weeklyWorkoutMinutes": _num(goals.weekly_workout_minutes) if goals else None,
        "dailyStepsGoal": goals.daily_steps_goal if goals else None,
        "dailyWaterLiters": _num(goals.daily_water_liters) if goals else None,
    }


@members_bp.route("/<int:member_id>/profile", methods=["GET"])
@member_access_required("profile")
def get_profile(member_id):
    user = db.session.get(User, member_id)
    if user is None:
        return jsonify({"profile": None})
    return jsonify({"profile": serialize_profile(user)})


@members_bp.route("/<int:member_id>/profile", methods=["PUT"])
@member_access_required("profile")
def save_profile(member_id):
    data = profile_schema.load(request.get_json(silent=True) or {})
    user = db.session.get(User, member_id)
    if user is None:
        return jsonify({"msg": "Member not found"}), 404

    # Fill derived energy figures the client did not send
    bmr = data.get("bmr")
    if bmr is None:
        bmr = calculate_bmr(data.get("weight_kg"), data.get("height_cm"), data.get("age"), data.get("gender"))
    tdee = data.get("tdee")
    if tdee is None:
        tdee = calculate_tdee(bmr, data.get("activity_level"))
    target = data.get("target_calories")
    if target is None:
        target = calorie_target(tdee, data.get("goal"))

    try:
        profile = user.profile or MemberProfile(user_id=member_id)
        profile.age = data.get("age")
        profile.gender = data.get("gender")
        profile.weight_kg = data.get("weight_kg")
        profile.height_cm = data.get("height_cm")
        profile.goal = data.get("goal")
        profile.activity_level = data.get("activity_level")
        profile.trainer_intake = data.get("trainer_intake")
        profile.nutrition_intake = data.get("nutrition_intake")
        profile.is_private = data.get("is_private", False)
        profile.bmr = round_half_up(bmr) if bmr is not None else None
        profile.tdee = round_half_up(tdee) if tdee is not None else None
        profile.target_calories = round_half_up(target) if target is not None else None
        user.profile = profile

        goals = user.goals or MemberGoal(member_id=member_id)
        goals.weekly_calorie_goal = data.get("weekly_calorie_goal")
        goals.weekly_workout_minutes = data.get("weekly_workout_minutes")
        goals.daily_steps_goal = data.get("daily_steps_goal")
        goals.daily_water_liters = data.get("daily_water_liters")
        user.goals = goals

        db.session.commit()
    except Exception:
        db.session.rollback()
        current_app.logger.exception("Error saving member profile")
        return jsonify({"msg": "Failed to save member profile"}), 500

    return jsonify({"profile": serialize_profile(user)})


@members_bp.route("/overview", methods=["GET"])
@roles_required(Role.ADMIN, Role.TRAINER, Role.NUTRITIONIST)
def members_overview():
    query = User.query.filter_by(role=Role.MEMBER.value)
    if current_user.role == Role.TRAINER.value:
        query = query.join(TrainerAssignment, TrainerAssignment.member_id == User.id).filter(
            TrainerAssignment.trainer_id == current_user.id
        )
    elif current_user.role == Role.NUTRITIONIST.value:
        query = query.join(NutritionistAssignment, NutritionistAssignment.member_id == User.id).filter(
            NutritionistAssignment.nutritionist_id == current_user.id
        )
    members = query.order_by(User.created_at.desc()).all()
    if not members:
        return jsonify({"members": []})

    ids = [m.id for m in members]
    now = utcnow()
    start, end = day_bounds(now.date())
    week_ago = now - timedelta(days=7)

    meals_today = {}
    calories_today = {}
    for meal in MealLog.query.filter(MealLog.member_id.in_(ids), MealLog.logged_at >= start, MealLog.logged_at < end):
        meals_today[meal.member_id] = meals_today.get(meal.member_id, 0) + 1
        calories_today[meal.member_id] = calories_today.get(meal.member_id, 0) + sum(
            item.calories or 0 for item in meal.items
        )

    workouts_week = {}
    for log in WorkoutLog.query.filter(WorkoutLog.member_id.in_(ids), WorkoutLog.logged_at >= week_ago):
        workouts_week[log.member_id] = workouts_week.get(log.member_id, 0) + 1

    last_activity = {}
    for model in (MealLog, WorkoutLog):
        rows = (
            db.session.query(model.member_id, db.func.max(model.logged_at))
            .filter(model.member_id.in_(ids))
            .group_by(model.member_id)
            .all()
        )
        for member_id, ts in rows:
            if ts and (member_id not in last_activity or ts > last_activity[member_id]):
                last_activity[member_id] = ts

    out = []
    for member in members:
        out.append({
            "id": member.id,
            "full_name": member.full_name,
            "email": member.email,
            "created_at": iso(member.created_at),
            "goal": member.profile.goal if member.profile else None,
            "trainer_id": member.trainer_assignment.trainer_id if member.trainer_assignment else None,
            "nutritionist_id": (
                member.nutritionist_assignment.nutritionist_id if member.nutritionist_assignment else None
            ),
            "meals_today": meals_today.get(member.id, 0),
            "workouts_this_week": workouts_week.get(member.id, 0),
            "last_activity": iso(last_activity.get(member.id) or member.created_at),
            "total_calories_today": calories_today.get(member.id, 0),
        })
    return jsonify({"members": out})
