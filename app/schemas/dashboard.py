from typing import List

from app.schemas.base import CamelModel
from app.schemas.user import UserRead
from app.schemas.workout import WorkoutSummary
from app.schemas.nutrition import NutritionSummary

class WorkoutStats(CamelModel):
    total_workouts: int = 0
    total_duration: float = 0
    total_calories_burned: float = 0
    avg_duration: float = 0
    avg_calories_burned: float = 0

class NutritionStats(CamelModel):
    avg_calories: float = 0
    avg_protein: float = 0
    avg_carbs: float = 0
    avg_fats: float = 0
    avg_water_intake: float = 0

class DashboardStats(CamelModel):
    workout: WorkoutStats
    nutrition: NutritionStats

class ChartPoint(CamelModel):
    date: str
    calories_burned: float = 0
    calories_consumed: float = 0
    workout_duration: float = 0

class Suggestion(CamelModel):
    type: str
    title: str
    description: str
    reason: str

class RecentActivity(CamelModel):
    workouts: List[WorkoutSummary]
    nutrition: List[NutritionSummary]

class DashboardResponse(CamelModel):
    user_profile: UserRead
    stats: DashboardStats
    recent_activity: RecentActivity
    chart_data: List[ChartPoint]
    suggestions: List[Suggestion]
