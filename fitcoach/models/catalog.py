from fitcoach.extensions import db


class FoodItem(db.Model):
    __tablename__ = "food_items"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(200), nullable=False, unique=True)
    category = db.Column(db.String(100))
    # Nutrients per 100g
    calories = db.Column(db.Float, default=0)
    protein = db.Column(db.Float, default=0)
    carbs = db.Column(db.Float, default=0)
    fat = db.Column(db.Float, default=0)
    is_local = db.Column(db.Boolean, default=True)
    source_api = db.Column(db.String(50))

    def to_dict(self):
        return {
            "id": str(self.id),
            "name": self.name,
            "category": self.category,
            "calories": self.calories or 0,
            "protein": self.protein or 0,
            "carbs": self.carbs or 0,
            "fat": self.fat or 0,
        }


class Exercise(db.Model):
    __tablename__ = "exercises"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(200), nullable=False, index=True)
    description = db.Column(db.Text)
    calories_per_min = db.Column(db.Float, default=0)

    def to_dict(self):
        return {
            "id": str(self.id),
            "name": self.name,
            "caloriesPerMinute": float(self.calories_per_min or 0),
        }
