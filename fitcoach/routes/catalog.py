from flask import Blueprint, current_app, jsonify, request
from flask_jwt_extended import jwt_required
from sqlalchemy import func

from fitcoach.extensions import db
from fitcoach.models import FoodItem
from fitcoach.schemas import FoodSchema
from fitcoach.services import catalog

catalog_bp = Blueprint("catalog", __name__)
food_schema = FoodSchema()


@catalog_bp.route("/foods", methods=["GET"])
def foods():
    q = str(request.args.get("q") or "").strip()
    if not q:
        return jsonify({"foods": catalog.list_foods()})
    return jsonify({"foods": catalog.search_foods(q)})


@catalog_bp.route("/foods", methods=["POST"])
@jwt_required()
def add_food():
    data = food_schema.load(request.get_json(silent=True) or {})
    if FoodItem.query.filter(func.lower(FoodItem.name) == data["name"].lower()).first():
        return jsonify({"msg": "A food with this name already exists"}), 409

    try:
        food = FoodItem(is_local=True, **data)
        db.session.add(food)
        db.session.commit()
    except Exception:
        db.session.rollback()
        current_app.logger.exception("Error adding food")
        return jsonify({"msg": "Failed to add food"}), 500

    return jsonify({"id": food.id}), 201


@catalog_bp.route("/exercises", methods=["GET"])
def exercises():
    return jsonify({"exercises": catalog.list_exercises()})


@catalog_bp.route("/exercises/search", methods=["GET"])
def search_exercises():
    q = str(request.args.get("q") or "").strip()
    if not q:
        return jsonify({"msg": "Query parameter q is required"}), 400
    return jsonify(catalog.search_exercises(q))
