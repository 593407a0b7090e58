from datetime import datetime
from typing import Dict, List, Optional

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.workout import Workout, WorkoutTypeEnum


class WorkoutRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, workout: Workout) -> Workout:
        self.db.add(workout)
        await self.db.commit()
        await self.db.refresh(workout)
        return workout

    async def find(
        self,
        user_id: int,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        workout_type: Optional[WorkoutTypeEnum] = None,
        limit: Optional[int] = None,
    ) -> List[Workout]:
        """Тренировки владельца, новые первыми, с фильтром по датам и типу"""
        stmt = select(Workout).where(Workout.user_id == user_id)
        if start is not None:
            stmt = stmt.where(Workout.date >= start)
        if end is not None:
            stmt = stmt.where(Workout.date <= end)
        if workout_type is not None:
            stmt = stmt.where(Workout.type == workout_type)
        stmt = stmt.order_by(Workout.date.desc())
        if limit is not None:
            stmt = stmt.limit(limit)

        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def delete_owned(self, workout_id: int, user_id: int) -> bool:
        """Удалить тренировку, только если она принадлежит user_id."""
        result = await self.db.execute(
            select(Workout).where(Workout.id == workout_id, Workout.user_id == user_id)
        )
        workout = result.scalar_one_or_none()
        if workout is None:
            return False

        await self.db.delete(workout)
        await self.db.commit()
        return True

    async def summarize(self, user_id: int, since: datetime) -> Dict[str, float]:
        result = await self.db.execute(
            select(
                func.count(Workout.id).label("total_workouts"),
                func.coalesce(func.sum(Workout.duration), 0).label("total_duration"),
                func.coalesce(func.sum(Workout.total_calories), 0).label("total_calories_burned"),
                func.coalesce(func.avg(Workout.duration), 0).label("avg_duration"),
                func.coalesce(func.avg(Workout.total_calories), 0).label("avg_calories_burned"),
            ).where(Workout.user_id == user_id, Workout.date >= since)
        )
        return dict(result.mappings().one())

    async def daily_totals(self, user_id: int, day_start: datetime, day_end: datetime) -> Dict[str, float]:
        """Сумма калорий и длительности за интервал [day_start, day_end]"""
        result = await self.db.execute(
            select(
                func.coalesce(func.sum(Workout.total_calories), 0).label("calories_burned"),
                func.coalesce(func.sum(Workout.duration), 0).label("duration"),
            ).where(
                Workout.user_id == user_id,
                Workout.date >= day_start,
                Workout.date <= day_end,
            )
        )
        return dict(result.mappings().one())

    async def count_by_type(self, user_id: int) -> Dict[str, int]:
        result = await self.db.execute(
            select(Workout.type, func.count(Workout.id))
            .where(Workout.user_id == user_id)
            .group_by(Workout.type)
        )
        return {WorkoutTypeEnum(workout_type).value: count for workout_type, count in result.all()}
