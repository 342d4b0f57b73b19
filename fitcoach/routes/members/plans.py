from flask import current_app, jsonify, request
from flask_jwt_extended import current_user

from fitcoach.access import Role, member_access_required
from fitcoach.extensions import db
from fitcoach.models import (
    DietPlan, DietPlanMeal, DietPlanMealItem, MemberProfile, User,
    WorkoutPlan, WorkoutPlanDay, WorkoutPlanExercise,
)
from fitcoach.schemas import ManualDietPlanSchema, ManualWorkoutPlanSchema
from fitcoach.services.catalog import resolve_food
from fitcoach.services.plan_generation import (
    default_macro_targets, default_workout_plan, diet_plan_title, goal_label,
)

from . import members_bp

manual_diet_schema = ManualDietPlanSchema()
manual_workout_schema = ManualWorkoutPlanSchema()


def _active(model, member_id):
    return (
        model.query.filter_by(member_id=member_id, is_active=True)
        .order_by(model.created_at.desc(), model.id.desc())
        .first()
    )


def _deactivate(model, member_id):
    model.query.filter_by(member_id=member_id).update({"is_active": False}, synchronize_session=False)


def _coach_id(role):
    return current_user.id if current_user.role == role.value else None


def _member_or_404(member_id):
    if db.session.get(User, member_id) is None:
        return jsonify({"msg": "Member not found"}), 404
    return None


# ---------------- Diet plans ----------------

@members_bp.route("/<int:member_id>/diet-plan", methods=["GET"])
@member_access_required("diet_plan")
def get_diet_plan(member_id):
    plan = _active(DietPlan, member_id)
    return jsonify({"plan": plan.to_dict() if plan else None})


@members_bp.route("/<int:member_id>/diet-plan/generate-default", methods=["POST"])
@member_access_required("diet_plan.generate")
def generate_default_diet_plan(member_id):
    missing = _member_or_404(member_id)
    if missing:
        return missing

    profile = db.session.get(MemberProfile, member_id)
    targets = default_macro_targets(
        profile.goal if profile else None,
        profile.weight_kg if profile else None,
        profile.target_calories if profile else None,
        profile.nutrition_intake if profile else None,
    )

    try:
        _deactivate(DietPlan, member_id)
        plan = DietPlan(
            member_id=member_id,
            nutritionist_id=_coach_id(Role.NUTRITIONIST),
            name=diet_plan_title(targets.goal_key),
            goal=goal_label(targets.goal_key),
            daily_calories=targets.calories,
            daily_protein=targets.protein,
            daily_carbs=targets.carbs,
            daily_fat=targets.fat,
            is_active=True,
        )
        db.session.add(plan)
        db.session.commit()
    except Exception:
        db.session.rollback()
        current_app.logger.exception("Error generating diet plan")
        return jsonify({"msg": "Failed to generate diet plan"}), 500

    return jsonify({"id": plan.id}), 201


@members_bp.route("/<int:member_id>/diet-plan/manual", methods=["POST"])
@member_access_required("diet_plan.manual")
def create_manual_diet_plan(member_id):
    data = manual_diet_schema.load(request.get_json(silent=True) or {})
    missing = _member_or_404(member_id)
    if missing:
        return missing

    try:
        _deactivate(DietPlan, member_id)
        plan = DietPlan(
            member_id=member_id,
            nutritionist_id=_coach_id(Role.NUTRITIONIST),
            name=data["name"],
            goal=data["goal"],
            is_active=True,
        )
        totals = {"calories": 0.0, "protein": 0.0, "carbs": 0.0, "fat": 0.0}

        for meal_data in data["meals"]:
            meal = DietPlanMeal(
                meal_type=meal_data["meal_type"],
                name=meal_data.get("name") or meal_data["meal_type"],
                notes=meal_data.get("notes"),
            )
            for item_data in meal_data["items"]:
                food_id = item_data.get("food_id") if (item_data.get("food_id") or 0) > 0 else None
                if food_id is None and item_data.get("name"):
                    food_id = resolve_food(
                        item_data["name"], item_data.get("category"), item_data["quantity"],
                        item_data["calories"], item_data["protein"], item_data["carbs"], item_data["fat"],
                    ).id
                meal.items.append(DietPlanMealItem(
                    food_item_id=food_id,
                    quantity=item_data["quantity"],
                    unit=item_data["unit"],
                    calories=item_data["calories"],
                    protein=item_data["protein"],
                    carbs=item_data["carbs"],
                    fat=item_data["fat"],
                ))
                for key in totals:
                    totals[key] += item_data[key]
            plan.meals.append(meal)

        plan.daily_calories = totals["calories"]
        plan.daily_protein = totals["protein"]
        plan.daily_carbs = totals["carbs"]
        plan.daily_fat = totals["fat"]
        db.session.add(plan)
        db.session.commit()
    except Exception:
        db.session.rollback()
        current_app.logger.exception("Error saving manual diet plan")
        return jsonify({"msg": "Failed to save manual diet plan"}), 500

    return jsonify({"id": plan.id}), 201


# ---------------- Workout plans ----------------

@members_bp.route("/<int:member_id>/workout-plan", methods=["GET"])
@member_access_required("workout_plan")
def get_workout_plan(member_id):
    plan = _active(WorkoutPlan, member_id)
    return jsonify({"plan": plan.to_dict() if plan else None})


def _add_days(plan, days):
    for day_data in days:
        day = WorkoutPlanDay(
            day_of_week=day_data.get("day_of_week"),
            name=day_data.get("name"),
            duration_minutes=day_data.get("duration_minutes"),
            difficulty=day_data.get("difficulty"),
            focus=day_data.get("focus"),
            tips=day_data.get("tips"),
        )
        for ex in day_data.get("exercises") or []:
            if not ex.get("name"):
                continue
            instructions, intensity = ex.get("instructions"), ex.get("intensity")
            if instructions and intensity:
                instructions = f"{instructions} | Intensity: {intensity}"
            else:
                instructions = instructions or intensity
            day.exercises.append(WorkoutPlanExercise(
                exercise_id=ex.get("exercise_id"),
                name=ex["name"],
                sets=ex.get("sets"),
                reps=ex.get("reps"),
                rest=ex.get("rest"),
                duration_minutes=ex.get("duration_minutes"),
                instructions=instructions,
                target_muscles=ex.get("target_muscles") or ex.get("category"),
            ))
        plan.days.append(day)


@members_bp.route("/<int:member_id>/workout-plan/generate-default", methods=["POST"])
@member_access_required("workout_plan.generate")
def generate_default_workout_plan(member_id):
    missing = _member_or_404(member_id)
    if missing:
        return missing

    profile = db.session.get(MemberProfile, member_id)
    generated = default_workout_plan(
        profile.goal if profile else None,
        profile.trainer_intake if profile else None,
    )

    try:
        _deactivate(WorkoutPlan, member_id)
        plan = WorkoutPlan(
            member_id=member_id,
            trainer_id=_coach_id(Role.TRAINER),
            name=generated["name"],
            goal=generated["goal"],
            weekly_days=generated["weekly_days"],
            estimated_duration=generated["estimated_duration"],
            difficulty=generated["difficulty"],
            is_active=True,
        )
        _add_days(plan, generated["days"])
        db.session.add(plan)
        db.session.commit()
    except Exception:
        db.session.rollback()
        current_app.logger.exception("Error generating workout plan")
        return jsonify({"msg": "Failed to generate workout plan"}), 500

    return jsonify({"id": plan.id}), 201


@members_bp.route("/<int:member_id>/workout-plan/manual", methods=["POST"])
@member_access_required("workout_plan.manual")
def create_manual_workout_plan(member_id):
    data = manual_workout_schema.load(request.get_json(silent=True) or {})
    missing = _member_or_404(member_id)
    if missing:
        return missing

    try:
        _deactivate(WorkoutPlan, member_id)
        plan = WorkoutPlan(
            member_id=member_id,
            trainer_id=_coach_id(Role.TRAINER),
            name=data["name"],
            goal=data["goal"],
            weekly_days=len(data["days"]) or None,
            is_active=True,
        )
        _add_days(plan, data["days"])
        db.session.add(plan)
        db.session.commit()
    except Exception:
        db.session.rollback()
        current_app.logger.exception("Error saving manual workout plan")
        return jsonify({"msg": "Failed to save manual workout plan"}), 500

    return jsonify({"id": plan.id}), 201
