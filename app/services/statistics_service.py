"""
Агрегация статистики для дашборда.

Только чтение: сводка тренировок и питания за окно в N дней и ряд по дням
за последнюю неделю. Отсутствие данных всегда дает нули, а не ошибку.
Каждый независимый запрос идет в своей сессии, поэтому их можно
выполнять параллельно.
"""
import asyncio
import logging
from datetime import date, datetime, time, timedelta
from typing import Callable, Dict, List, Optional

from app.core.config import settings
from app.core.db import run_with_repository
from app.repositories.nutrition_repository import NutritionRepository
from app.repositories.workout_repository import WorkoutRepository
from app.schemas.dashboard import ChartPoint, NutritionStats, WorkoutStats

logger = logging.getLogger(__name__)


def _number(value) -> float:
    # avg/sum из PostgreSQL приходят Decimal или None
    return float(value) if value is not None else 0.0


def day_bounds(day: date):
    """Локальный календарный день: 00:00:00 - 23:59:59.999999 включительно"""
    return datetime.combine(day, time.min), datetime.combine(day, time.max)


def day_label(day: date) -> str:
    return f"{day.strftime('%b')} {day.day}"


class StatisticsAggregator:
    def __init__(
        self,
        session_factory,
        clock: Callable[[], datetime] = datetime.now,
        workout_repository=WorkoutRepository,
        nutrition_repository=NutritionRepository,
        chart_days: Optional[int] = None,
        max_concurrency: Optional[int] = None,
    ):
        self._session_factory = session_factory
        self._clock = clock
        self._workout_repository = workout_repository
        self._nutrition_repository = nutrition_repository
        self.chart_days = chart_days or settings.DASHBOARD_CHART_DAYS
        self._limiter = asyncio.Semaphore(max_concurrency or settings.DASHBOARD_MAX_CONCURRENT_QUERIES)

    def today(self) -> date:
        return self._clock().date()

    def window_start(self, days: int) -> datetime:
        """Полночь дня today - days; окно длиннее календаря начинается с date.min"""
        try:
            start = self.today() - timedelta(days=days)
        except OverflowError:
            start = date.min
        return datetime.combine(start, time.min)

    async def run(self, repository_cls, operation):
        """Запрос в отдельной сессии; одновременно открыто не больше max_concurrency сессий"""
        async with self._limiter:
            return await run_with_repository(self._session_factory, repository_cls, operation)

    async def _with_workouts(self, operation):
        return await self.run(self._workout_repository, operation)

    async def _with_nutrition(self, operation):
        return await self.run(self._nutrition_repository, operation)

    async def workout_summary(self, user_id: int, days: int) -> WorkoutStats:
        since = self.window_start(days)
        row = await self._with_workouts(lambda repo: repo.summarize(user_id, since))
        row = row or {}
        return WorkoutStats(
            total_workouts=int(row.get("total_workouts") or 0),
            total_duration=_number(row.get("total_duration")),
            total_calories_burned=_number(row.get("total_calories_burned")),
            avg_duration=_number(row.get("avg_duration")),
            avg_calories_burned=_number(row.get("avg_calories_burned")),
        )

    async def nutrition_summary(self, user_id: int, days: int) -> NutritionStats:
        since = self.window_start(days).date()
        row = await self._with_nutrition(lambda repo: repo.summarize(user_id, since))
        row = row or {}
        return NutritionStats(
            avg_calories=_number(row.get("avg_calories")),
            avg_protein=_number(row.get("avg_protein")),
            avg_carbs=_number(row.get("avg_carbs")),
            avg_fats=_number(row.get("avg_fats")),
            avg_water_intake=_number(row.get("avg_water_intake")),
        )

    async def workout_type_counts(self, user_id: int) -> Dict[str, int]:
        """Число тренировок каждого типа за все время"""
        counts = await self._with_workouts(lambda repo: repo.count_by_type(user_id))
        return dict(counts or {})

    async def day_point(self, user_id: int, day: date) -> ChartPoint:
        day_start, day_end = day_bounds(day)
        workout_totals, calories_consumed = await asyncio.gather(
            self._with_workouts(lambda repo: repo.daily_totals(user_id, day_start, day_end)),
            self._with_nutrition(lambda repo: repo.calories_for_day(user_id, day)),
        )
        workout_totals = workout_totals or {}
        return ChartPoint(
            date=day_label(day),
            calories_burned=_number(workout_totals.get("calories_burned")),
            calories_consumed=_number(calories_consumed),
            workout_duration=_number(workout_totals.get("duration")),
        )

    async def daily_series(self, user_id: int) -> List[ChartPoint]:
        """Ровно chart_days точек, от самого старого дня до сегодняшнего"""
        today = self.today()
        days = [today - timedelta(days=offset) for offset in range(self.chart_days - 1, -1, -1)]
        return list(await asyncio.gather(*(self.day_point(user_id, day) for day in days)))
