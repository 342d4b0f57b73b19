from flask import Blueprint, current_app, jsonify, request
from flask_jwt_extended import current_user, jwt_required

from fitcoach.access import Role, check_member_access
from fitcoach.extensions import db
from fitcoach.models import FoodItem, MealLog, MealLogItem, NutritionistAssignment, TrainerAssignment, User
from fitcoach.schemas import MealLogSchema
from fitcoach.utils.dates import day_bounds, iso, parse_iso_date, utcnow
from fitcoach.utils.numbers import positive_int

meals_bp = Blueprint("meals", __name__)
meal_log_schema = MealLogSchema()


def member_id_arg():
    return positive_int(request.args.get("member_id"))


def scoped_member_ids(user):
    """Member ids the user may see in cross-member listings; None means all."""
    if user.role == Role.ADMIN.value:
        return None
    if user.role == Role.TRAINER.value:
        rows = TrainerAssignment.query.filter_by(trainer_id=user.id).all()
        return [row.member_id for row in rows]
    if user.role == Role.NUTRITIONIST.value:
        rows = NutritionistAssignment.query.filter_by(nutritionist_id=user.id).all()
        return [row.member_id for row in rows]
    return [user.id]


@meals_bp.route("", methods=["POST"])
@jwt_required()
def log_meal():
    data = meal_log_schema.load(request.get_json(silent=True) or {})
    if current_user.id != data["member_id"]:
        return jsonify({"msg": "Forbidden"}), 403

    try:
        meal = MealLog(member_id=data["member_id"], meal_type=data["meal_type"], logged_at=utcnow())
        item = MealLogItem(
            food_item_id=data.get("food_item_id"),
            quantity=data["quantity"],
            unit=data["unit"],
            calories=data["calories"],
            protein=data["protein"],
            carbs=data["carbs"],
            fat=data["fat"],
        )
        meal.items.append(item)
        db.session.add(meal)
        db.session.commit()
    except Exception:
        db.session.rollback()
        current_app.logger.exception("Error logging meal")
        return jsonify({"msg": "Failed to log meal"}), 500

    return jsonify({"meal_log_id": meal.id, "item_id": item.id}), 201


@meals_bp.route("/today", methods=["GET"])
@jwt_required()
def meals_today():
    member_id = member_id_arg()
    if not member_id:
        return jsonify({"msg": "member_id is required"}), 400
    if not check_member_access(current_user, member_id, "logs"):
        return jsonify({"msg": "Forbidden"}), 403

    start, end = day_bounds(utcnow().date())
    rows = (
        db.session.query(MealLog, MealLogItem, FoodItem)
        .join(MealLogItem, MealLogItem.meal_log_id == MealLog.id)
        .outerjoin(FoodItem, FoodItem.id == MealLogItem.food_item_id)
        .filter(MealLog.member_id == member_id, MealLog.logged_at >= start, MealLog.logged_at < end)
        .order_by(MealLog.logged_at.desc(), MealLogItem.id.desc())
        .all()
    )
    meals = [
        {
            "meal_log_id": meal.id,
            "meal_type": meal.meal_type,
            "logged_at": iso(meal.logged_at),
            "item_id": item.id,
            "food_item_id": item.food_item_id,
            "food_name": food.name if food else None,
            "category": food.category if food else None,
            "quantity": item.quantity,
            "unit": item.unit,
            "calories": item.calories,
            "protein": item.protein,
            "carbs": item.carbs,
            "fat": item.fat,
        }
        for meal, item, food in rows
    ]
    return jsonify({"meals": meals})


@meals_bp.route("/by-date", methods=["GET"])
@jwt_required()
def meals_by_date():
    member_id = member_id_arg()
    if not member_id:
        return jsonify({"msg": "member_id is required"}), 400
    day = parse_iso_date(request.args.get("date"))
    if day is None:
        return jsonify({"msg": "date must be in YYYY-MM-DD format"}), 400
    if not check_member_access(current_user, member_id, "logs"):
        return jsonify({"msg": "Forbidden"}), 403

    start, end = day_bounds(day)
    rows = (
        db.session.query(MealLog, MealLogItem)
        .join(MealLogItem, MealLogItem.meal_log_id == MealLog.id)
        .filter(MealLog.member_id == member_id, MealLog.logged_at >= start, MealLog.logged_at < end)
        .all()
    )

    totals = {}
    for meal, item in rows:
        entry = totals.setdefault(meal.meal_type, {
            "meal_type": meal.meal_type,
            "meal_ids": set(),
            "items_count": 0,
            "total_calories": 0.0,
            "total_protein": 0.0,
            "total_carbs": 0.0,
            "total_fat": 0.0,
        })
        entry["meal_ids"].add(meal.id)
        entry["items_count"] += 1
        entry["total_calories"] += item.calories or 0
        entry["total_protein"] += item.protein or 0
        entry["total_carbs"] += item.carbs or 0
        entry["total_fat"] += item.fat or 0

    meals = []
    for meal_type in sorted(totals):
        entry = totals[meal_type]
        entry["meal_count"] = len(entry.pop("meal_ids"))
        meals.append(entry)
    return jsonify({"meals": meals})


@meals_bp.route("/recent", methods=["GET"])
@jwt_required()
def recent_meals():
    limit = positive_int(request.args.get("limit")) or 10
    if limit > 100:
        limit = 10

    query = MealLog.query.order_by(MealLog.logged_at.desc(), MealLog.id.desc())
    member_ids = scoped_member_ids(current_user)
    if member_ids is not None:
        if not member_ids:
            return jsonify({"meals": []})
        query = query.filter(MealLog.member_id.in_(member_ids))

    logs = query.limit(limit).all()
    names = dict(
        db.session.query(User.id, User.full_name).filter(User.id.in_(list({log.member_id for log in logs}))).all()
    ) if logs else {}

    meals = []
    for log in logs:
        meals.append(dict(
            meal_log_id=log.id,
            member_id=log.member_id,
            full_name=names.get(log.member_id),
            meal_type=log.meal_type,
            logged_at=iso(log.logged_at),
            total_calories=sum(item.calories or 0 for item in log.items),
        ))
    return jsonify({"meals": meals})


@meals_bp.route("/items/<int:item_id>", methods=["DELETE"])
@jwt_required()
def delete_meal_item(item_id):
    item = db.session.get(MealLogItem, item_id)
    if item is None:
        return jsonify({"msg": "Meal item not found"}), 404
    if item.meal_log.member_id != current_user.id:
        return jsonify({"msg": "Forbidden"}), 403

    try:
        db.session.delete(item)
        db.session.commit()
    except Exception:
        db.session.rollback()
        current_app.logger.exception("Error deleting meal item")
        return jsonify({"msg": "Failed to delete meal item"}), 500
    return "", 204
