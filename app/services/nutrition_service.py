"""
Сервис записей питания: расчет итогов по приемам пищи и upsert записи за день
"""
import logging
from datetime import date
from typing import Dict, Iterable, List, Optional

from app.core.exceptions import NotFoundError
from app.models.nutrition import NutritionEntry, Meal
from app.repositories.nutrition_repository import NutritionRepository
from app.schemas.nutrition import MealInput, NutritionUpsert
from app.services.workout_service import ensure_valid_range, to_local_naive

logger = logging.getLogger(__name__)


class NutritionCalculator:
    TOTAL_FIELDS = {
        "total_calories": "calories",
        "total_protein": "protein",
        "total_carbs": "carbs",
        "total_fats": "fats",
    }

    @classmethod
    def calculate_totals(cls, meals: Iterable[MealInput]) -> Dict[str, float]:
        """Суммы калорий и БЖУ по списку приемов пищи"""
        totals = {total: 0.0 for total in cls.TOTAL_FIELDS}
        for meal in meals:
            for total, field in cls.TOTAL_FIELDS.items():
                totals[total] += getattr(meal, field)
        return totals


def build_meals(meals: List[MealInput]) -> List[Meal]:
    return [
        Meal(
            position=position,
            name=meal.name,
            calories=meal.calories,
            protein=meal.protein,
            carbs=meal.carbs,
            fats=meal.fats,
            time=to_local_naive(meal.time),
        )
        for position, meal in enumerate(meals)
    ]


async def save_entry(repo: NutritionRepository, user_id: int, data: NutritionUpsert) -> NutritionEntry:
    """Запись за (user, date) перезаписывается, итоги всегда пересчитываются"""
    entry = await repo.upsert(
        user_id=user_id,
        day=data.date,
        meals=build_meals(data.meals),
        totals=NutritionCalculator.calculate_totals(data.meals),
        water_intake=data.water_intake or 0,
        notes=data.notes,
    )
    logger.info("Nutrition entry %s saved for user %s (%s)", entry.id, user_id, data.date)
    return entry


async def list_entries(
    repo: NutritionRepository,
    user_id: int,
    start: Optional[date] = None,
    end: Optional[date] = None,
    limit: Optional[int] = None,
) -> List[NutritionEntry]:
    ensure_valid_range(start, end)
    return await repo.find(user_id, start=start, end=end, limit=limit)


async def delete_entry(repo: NutritionRepository, user_id: int, entry_id: int) -> None:
    if not await repo.delete_owned(entry_id, user_id):
        raise NotFoundError("Nutrition entry")
    logger.info("Nutrition entry %s deleted by user %s", entry_id, user_id)
