from fitcoach.extensions import db
from fitcoach.utils.dates import utcnow

MEAL_TYPES = ("breakfast", "lunch", "dinner", "snack")


class DietPlan(db.Model):
    __tablename__ = "diet_plans"

    id = db.Column(db.Integer, primary_key=True)
    member_id = db.Column(db.Integer, db.ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    # NULL for system-generated plans or once the authoring coach is deleted
    nutritionist_id = db.Column(db.Integer, db.ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    name = db.Column(db.String(200), nullable=False)
    goal = db.Column(db.String(100))
    daily_calories = db.Column(db.Float, default=0)
    daily_protein = db.Column(db.Float, default=0)
    daily_carbs = db.Column(db.Float, default=0)
    daily_fat = db.Column(db.Float, default=0)
    is_active = db.Column(db.Boolean, default=True, nullable=False)
    created_at = db.Column(db.DateTime, default=utcnow)

    nutritionist = db.relationship("User", foreign_keys=[nutritionist_id])
    meals = db.relationship(
        "DietPlanMeal", back_populates="plan", cascade="all, delete-orphan", order_by="DietPlanMeal.id"
    )

    __table_args__ = (
        db.Index("idx_diet_plans_member_active", "member_id", "is_active"),
    )

    def to_dict(self):
        meals = [meal.to_dict() for meal in self.meals]
        return {
            "id": str(self.id),
            "name": self.name or "",
            "type": "trainer" if self.nutritionist_id else "system",
            "goal": self.goal or "",
            "dailyCalories": self.daily_calories or 0,
            "dailyProtein": self.daily_protein or 0,
            "dailyCarbs": self.daily_carbs or 0,
            "dailyFat": self.daily_fat or 0,
            "meals": meals,
            "createdBy": self.nutritionist.full_name if self.nutritionist else None,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "active": bool(self.is_active),
        }


class DietPlanMeal(db.Model):
    __tablename__ = "diet_plan_meals"

    id = db.Column(db.Integer, primary_key=True)
    diet_plan_id = db.Column(db.Integer, db.ForeignKey("diet_plans.id", ondelete="CASCADE"), nullable=False, index=True)
    meal_type = db.Column(db.String(20), nullable=False)
    name = db.Column(db.String(200))
    notes = db.Column(db.Text)

    plan = db.relationship("DietPlan", back_populates="meals")
    items = db.relationship(
        "DietPlanMealItem", back_populates="meal", cascade="all, delete-orphan", order_by="DietPlanMealItem.id"
    )

    def to_dict(self):
        foods = [item.to_dict() for item in self.items]
        return {
            "id": str(self.id),
            "mealType": (self.meal_type or "").lower(),
            "foods": foods,
            "totalCalories": sum(f["calories"] for f in foods),
            "totalProtein": sum(f["protein"] for f in foods),
            "totalCarbs": sum(f["carbs"] for f in foods),
            "totalFat": sum(f["fat"] for f in foods),
            "tips": self.notes if self.notes and self.notes.strip() else None,
        }


class DietPlanMealItem(db.Model):
    __tablename__ = "diet_plan_meal_items"

    id = db.Column(db.Integer, primary_key=True)
    diet_plan_meal_id = db.Column(db.Integer, db.ForeignKey("diet_plan_meals.id", ondelete="CASCADE"), nullable=False, index=True)
    food_item_id = db.Column(db.Integer, db.ForeignKey("food_items.id", ondelete="SET NULL"), nullable=True)
    quantity = db.Column(db.Float, default=0)
    unit = db.Column(db.String(20), default="g")
    calories = db.Column(db.Float, default=0)
    protein = db.Column(db.Float, default=0)
    carbs = db.Column(db.Float, default=0)
    fat = db.Column(db.Float, default=0)

    meal = db.relationship("DietPlanMeal", back_populates="items")
    food = db.relationship("FoodItem")

    def to_dict(self):
        return {
            "name": self.food.name if self.food else "",
            "quantity": self.quantity or 0,
            "calories": self.calories or 0,
            "protein": self.protein or 0,
            "carbs": self.carbs or 0,
            "fat": self.fat or 0,
        }
