from datetime import date
from typing import Dict, List, Optional

from sqlalchemy import select, func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.nutrition import NutritionEntry, Meal


class NutritionRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_for_day(self, user_id: int, day: date) -> Optional[NutritionEntry]:
        result = await self.db.execute(
            select(NutritionEntry).where(
                NutritionEntry.user_id == user_id,
                NutritionEntry.date == day,
            )
        )
        return result.scalar_one_or_none()

    async def upsert(
        self,
        user_id: int,
        day: date,
        meals: List[Meal],
        totals: Dict[str, float],
        water_intake: int,
        notes: Optional[str],
    ) -> NutritionEntry:
        """
        Создать или перезаписать запись питания за день.
        Старые приемы пищи удаляются (delete-orphan), итоги заменяются переданными.
        Если запись за этот день успела вставить параллельная транзакция,
        откатываемся и перезаписываем уже ее.
        """
        entry = await self.get_for_day(user_id, day)
        if entry is None:
            # meals=[] - коллекция считается загруженной, после flush ее не нужно подгружать
            entry = NutritionEntry(user_id=user_id, date=day, meals=[])
            self.db.add(entry)
            try:
                await self.db.flush()
            except IntegrityError:
                await self.db.rollback()
                entry = await self.get_for_day(user_id, day)
                if entry is None:
                    raise

        entry.meals = meals
        entry.total_calories = totals["total_calories"]
        entry.total_protein = totals["total_protein"]
        entry.total_carbs = totals["total_carbs"]
        entry.total_fats = totals["total_fats"]
        entry.water_intake = water_intake
        entry.notes = notes

        await self.db.commit()
        await self.db.refresh(entry)
        return entry

    async def find(
        self,
        user_id: int,
        start: Optional[date] = None,
        end: Optional[date] = None,
        limit: Optional[int] = None,
    ) -> List[NutritionEntry]:
        stmt = select(NutritionEntry).where(NutritionEntry.user_id == user_id)
        if start is not None:
            stmt = stmt.where(NutritionEntry.date >= start)
        if end is not None:
            stmt = stmt.where(NutritionEntry.date <= end)
        stmt = stmt.order_by(NutritionEntry.date.desc())
        if limit is not None:
            stmt = stmt.limit(limit)

        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def delete_owned(self, entry_id: int, user_id: int) -> bool:
        """Удалить запись, только если она принадлежит user_id."""
        result = await self.db.execute(
            select(NutritionEntry).where(
                NutritionEntry.id == entry_id,
                NutritionEntry.user_id == user_id,
            )
        )
        entry = result.scalar_one_or_none()
        if entry is None:
            return False

        await self.db.delete(entry)
        await self.db.commit()
        return True

    async def summarize(self, user_id: int, since: date) -> Dict[str, float]:
        result = await self.db.execute(
            select(
                func.coalesce(func.avg(NutritionEntry.total_calories), 0).label("avg_calories"),
                func.coalesce(func.avg(NutritionEntry.total_protein), 0).label("avg_protein"),
                func.coalesce(func.avg(NutritionEntry.total_carbs), 0).label("avg_carbs"),
                func.coalesce(func.avg(NutritionEntry.total_fats), 0).label("avg_fats"),
                func.coalesce(func.avg(NutritionEntry.water_intake), 0).label("avg_water_intake"),
            ).where(NutritionEntry.user_id == user_id, NutritionEntry.date >= since)
        )
        return dict(result.mappings().one())

    async def calories_for_day(self, user_id: int, day: date) -> Optional[float]:
        result = await self.db.execute(
            select(NutritionEntry.total_calories).where(
                NutritionEntry.user_id == user_id,
                NutritionEntry.date == day,
            )
        )
        return result.scalar_one_or_none()
