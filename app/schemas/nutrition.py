from pydantic import Field
from typing import Optional, List
from datetime import date, datetime

from app.schemas.base import CamelModel


class MealInput(CamelModel):
    name: str = Field(min_length=1)
    calories: float = Field(ge=0)
    protein: float = Field(ge=0)
    carbs: float = Field(ge=0)
    fats: float = Field(ge=0)
    time: datetime


class MealRead(MealInput):
    pass


class NutritionUpsert(CamelModel):
    date: date
    meals: List[MealInput]
    water_intake: Optional[int] = Field(None, ge=0, description="ml")
    notes: Optional[str] = None


class NutritionRead(CamelModel):
    id: int
    date: date
    meals: List[MealRead] = []
    total_calories: float
    total_protein: float
    total_carbs: float
    total_fats: float
    water_intake: int
    notes: Optional[str] = None


class NutritionSummary(CamelModel):
    id: int
    date: date
    total_calories: float
    total_protein: float
    total_carbs: float
    total_fats: float


class NutritionEnvelope(CamelModel):
    nutrition: NutritionRead


class NutritionListResponse(CamelModel):
    nutrition_entries: List[NutritionRead]
