"""Food and exercise lookups: local catalog first, third-party APIs as fallback."""
import requests
from flask import current_app
from sqlalchemy import func

from fitcoach.extensions import db
from fitcoach.models import Exercise, FoodItem
from fitcoach.utils.numbers import to_number

EDAMAM_PARSER_URL = "https://api.edamam.com/api/food-database/v2/parser"
API_NINJAS_EXERCISES_URL = "https://api.api-ninjas.com/v1/exercises"
CACHE_FIRST_N = 5


def calories_per_minute(exercise):
    duration = to_number(exercise.get("duration"), 0)
    calories = to_number(exercise.get("calories"), 0)
    if duration > 0 and calories > 0:
        return calories / duration
    kind = str(exercise.get("type") or "").lower()
    if "cardio" in kind:
        return 8
    if "strength" in kind:
        return 6
    return 5


def _like(q):
    return f"%{q.lower()}%"


def list_foods(limit=50):
    return [f.to_dict() for f in FoodItem.query.order_by(FoodItem.name).limit(limit).all()]


def search_local_foods(q, limit=20):
    rows = (
        FoodItem.query.filter(func.lower(FoodItem.name).like(_like(q)))
        .order_by(FoodItem.name)
        .limit(limit)
        .all()
    )
    return [dict(f.to_dict(), source="local") for f in rows]


def fetch_edamam_foods(q):
    config = current_app.config
    app_id, app_key = config.get("EDAMAM_APP_ID"), config.get("EDAMAM_APP_KEY")
    if not app_id or not app_key:
        current_app.logger.warning("Edamam API credentials not configured")
        return []

    response = requests.get(
        EDAMAM_PARSER_URL,
        params={"app_id": app_id, "app_key": app_key, "ingr": q, "nutrition-type": "logging"},
        timeout=config.get("EXTERNAL_API_TIMEOUT", 10),
    )
    response.raise_for_status()
    foods = []
    for hint in response.json().get("hints") or []:
        food = hint.get("food") or {}
        nutrients = food.get("nutrients") or {}
        if not food.get("label"):
            continue
        foods.append({
            "id": f"edamam-{food.get('foodId')}",
            "name": food["label"],
            "category": "",
            "calories": to_number(nutrients.get("ENERC_KCAL")),
            "protein": to_number(nutrients.get("PROCNT")),
            "carbs": to_number(nutrients.get("CHOCDF")),
            "fat": to_number(nutrients.get("FAT")),
            "source": "edamam",
        })
    return foods


def _cache_foods(foods):
    try:
        for food in foods[:CACHE_FIRST_N]:
            exists = FoodItem.query.filter(func.lower(FoodItem.name) == food["name"].lower()).first()
            if exists:
                continue
            db.session.add(FoodItem(
                name=food["name"], calories=food["calories"], protein=food["protein"],
                carbs=food["carbs"], fat=food["fat"], is_local=False, source_api="edamam",
            ))
        db.session.commit()
    except Exception:
        db.session.rollback()
        current_app.logger.exception("Error saving foods to local DB")


def search_foods(q):
    local = search_local_foods(q)
    if local:
        return local
    try:
        foods = fetch_edamam_foods(q)
    except (requests.RequestException, ValueError) as e:
        current_app.logger.error("Food search error: %s", e)
        return []
    if foods:
        _cache_foods(foods)
    return foods


def list_exercises(limit=100):
    return [e.to_dict() for e in Exercise.query.order_by(Exercise.name).limit(limit).all()]


def search_local_exercises(q, limit=20):
    rows = (
        Exercise.query.filter(func.lower(Exercise.name).like(_like(q)))
        .order_by(Exercise.name)
        .limit(limit)
        .all()
    )
    return [dict(e.to_dict(), description=e.description, source="local") for e in rows]


def fetch_ninja_exercises(q):
    config = current_app.config
    key = config.get("API_NINJAS_KEY")
    if not key:
        current_app.logger.warning("API Ninjas key not configured")
        return []

    response = requests.get(
        API_NINJAS_EXERCISES_URL,
        params={"name": q},
        headers={"X-Api-Key": key},
        timeout=config.get("EXTERNAL_API_TIMEOUT", 10),
    )
    response.raise_for_status()
    exercises = []
    for index, ex in enumerate(response.json() or []):
        if not ex.get("name"):
            continue
        exercises.append({
            "id": f"api-{index}",
            "name": ex["name"],
            "description": ex.get("instructions") or "",
            "caloriesPerMinute": calories_per_minute(ex),
            "source": "api-ninjas",
            "type": ex.get("type"),
            "muscle": ex.get("muscle"),
            "equipment": ex.get("equipment"),
            "difficulty": ex.get("difficulty"),
        })
    return exercises


def _cache_exercises(exercises):
    try:
        for ex in exercises[:CACHE_FIRST_N]:
            exists = Exercise.query.filter(func.lower(Exercise.name) == ex["name"].lower()).first()
            if exists:
                continue
            db.session.add(Exercise(
                name=ex["name"], description=ex["description"], calories_per_min=ex["caloriesPerMinute"],
            ))
        db.session.commit()
    except Exception:
        db.session.rollback()
        current_app.logger.exception("Error saving exercises to local DB")


def search_exercises(q):
    local = search_local_exercises(q)
    if local:
        return local
    try:
        exercises = fetch_ninja_exercises(q)
    except (requests.RequestException, ValueError) as e:
        current_app.logger.error("Exercise search error: %s", e)
        return []
    if exercises:
        _cache_exercises(exercises)
    return exercises


def resolve_exercise(name, duration_minutes, calories_burned):
    """Find an exercise by case-insensitive name or add it to the catalog."""
    existing = (
        Exercise.query.filter(func.lower(Exercise.name) == name.lower())
        .order_by(Exercise.id)
        .first()
    )
    if existing:
        return existing
    exercise = Exercise(
        name=name,
        calories_per_min=calories_burned / duration_minutes if duration_minutes > 0 else 0,
    )
    db.session.add(exercise)
    db.session.flush()
    return exercise


def resolve_food(name, category, quantity, calories, protein, carbs, fat):
    """Find a food by name or create one with nutrients normalised to 100g."""
    existing = FoodItem.query.filter(func.lower(FoodItem.name) == name.lower()).first()
    if existing:
        return existing
    base_quantity = quantity if quantity > 0 else 100
    factor = 100 / base_quantity
    food = FoodItem(
        name=name,
        category=category,
        calories=round(calories * factor, 1),
        protein=round(protein * factor, 1),
        carbs=round(carbs * factor, 1),
        fat=round(fat * factor, 1),
        is_local=False,
        source_api="manual_plan",
    )
    db.session.add(food)
    db.session.flush()
    return food
