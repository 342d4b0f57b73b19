from .user import User
from .member_profile import MemberProfile
from .member_goal import MemberGoal
from .assignments import TrainerAssignment, NutritionistAssignment
from .catalog import FoodItem, Exercise
from .diet_plan import DietPlan, DietPlanMeal, DietPlanMealItem
from .workout_plan import WorkoutPlan, WorkoutPlanDay, WorkoutPlanExercise
from .logs import MealLog, MealLogItem, WorkoutLog, WorkoutLogItem, WeightLog, MemberCheckIn
from .messaging import MemberPlanMessage, Notification, TrainerFeedback, NutritionistFeedback
from .schedule import Schedule
from .system_log import SystemLog

__all__ = [
    "User", "MemberProfile", "MemberGoal",
    "TrainerAssignment", "NutritionistAssignment",
    "FoodItem", "Exercise",
    "DietPlan", "DietPlanMeal", "DietPlanMealItem",
    "WorkoutPlan", "WorkoutPlanDay", "WorkoutPlanExercise",
    "MealLog", "MealLogItem", "WorkoutLog", "WorkoutLogItem", "WeightLog", "MemberCheckIn",
    "MemberPlanMessage", "Notification", "TrainerFeedback", "NutritionistFeedback",
    "Schedule", "SystemLog",
]
