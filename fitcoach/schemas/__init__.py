from .user import InviteUserSchema, UpdateUserSchema
from .member import ProfileSchema, CheckInSchema, ScheduleSessionSchema
from .logs import MealLogSchema, WorkoutLogSchema, FoodSchema
from .plans import ManualDietPlanSchema, ManualWorkoutPlanSchema
from .messages import PlanMessageSchema, FeedbackSchema
