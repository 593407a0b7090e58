from pydantic import Field
from typing import Optional
from datetime import datetime

from app.schemas.base import CamelModel

class Goals(CamelModel):
    target_weight: Optional[float] = Field(None, gt=0)
    weekly_workouts: Optional[int] = Field(None, ge=0)
    daily_calories: Optional[float] = Field(None, ge=0)

class UserBrief(CamelModel):
    id: int
    name: str
    email: str

class UserRead(CamelModel):
    id: int
    name: str
    email: str
    age: Optional[int] = None
    weight: Optional[float] = None
    height: Optional[float] = None
    goals: Optional[Goals] = None
    created_at: Optional[datetime] = None
