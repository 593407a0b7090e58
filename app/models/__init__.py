from app.models.user import User
from app.models.workout import Workout, Exercise, WorkoutTypeEnum
from app.models.nutrition import NutritionEntry, Meal

__all__ = [
    "User",
    "Workout", "Exercise", "WorkoutTypeEnum",
    "NutritionEntry", "Meal",
]
