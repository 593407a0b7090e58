from pydantic import Field
from typing import Optional, List
from datetime import datetime

from app.models.workout import WorkoutTypeEnum
from app.schemas.base import CamelModel

class ExerciseInput(CamelModel):
    name: str = Field(min_length=1)
    sets: int = Field(0, ge=0)
    reps: int = Field(0, ge=0)
    weight: Optional[float] = Field(None, ge=0)
    duration: Optional[float] = Field(None, ge=0, description="Minutes")
    calories_burned: Optional[float] = Field(None, ge=0)

class ExerciseRead(ExerciseInput):
    pass

class WorkoutCreate(CamelModel):
    name: str = Field(min_length=1)
    type: WorkoutTypeEnum
    exercises: List[ExerciseInput]
    # Если клиент не прислал суммы, их посчитает сервис по упражнениям
    duration: Optional[float] = Field(None, ge=0)
    total_calories: Optional[float] = Field(None, ge=0)
    date: datetime
    notes: Optional[str] = None

class WorkoutRead(CamelModel):
    id: int
    name: str
    type: WorkoutTypeEnum
    exercises: List[ExerciseRead] = []
    duration: float
    total_calories: float
    date: datetime
    notes: Optional[str] = None
    created_at: Optional[datetime] = None

class WorkoutSummary(CamelModel):
    id: int
    name: str
    type: WorkoutTypeEnum
    duration: float
    total_calories: float
    date: datetime

class WorkoutEnvelope(CamelModel):
    workout: WorkoutRead

class WorkoutListResponse(CamelModel):
    workouts: List[WorkoutRead]
