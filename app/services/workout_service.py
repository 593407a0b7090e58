import logging
from datetime import datetime
from typing import List, Optional

from app.core.exceptions import NotFoundError, ValidationError
from app.models.workout import Workout, Exercise, WorkoutTypeEnum
from app.repositories.workout_repository import WorkoutRepository
from app.schemas.workout import WorkoutCreate

logger = logging.getLogger(__name__)


def to_local_naive(value: datetime) -> datetime:
    """Даты храним в локальном времени без tzinfo (календарные дни считаются по нему)"""
    if value.tzinfo is not None:
        return value.astimezone().replace(tzinfo=None)
    return value


def ensure_valid_range(start, end) -> None:
    if start is not None and end is not None and start > end:
        raise ValidationError("startDate must not be later than endDate")


def build_workout(user_id: int, data: WorkoutCreate) -> Workout:
    exercises = [
        Exercise(
            position=position,
            name=item.name,
            sets=item.sets,
            reps=item.reps,
            weight=item.weight,
            duration=item.duration,
            calories_burned=item.calories_burned,
        )
        for position, item in enumerate(data.exercises)
    ]

    # Суммы присылает клиент; если нет - считаем по упражнениям
    duration = data.duration
    if duration is None:
        duration = sum(item.duration or 0 for item in data.exercises)
    total_calories = data.total_calories
    if total_calories is None:
        total_calories = sum(item.calories_burned or 0 for item in data.exercises)

    return Workout(
        user_id=user_id,
        name=data.name.strip(),
        type=data.type,
        exercises=exercises,
        duration=duration,
        total_calories=total_calories,
        date=to_local_naive(data.date),
        notes=data.notes,
    )


async def create_workout(repo: WorkoutRepository, user_id: int, data: WorkoutCreate) -> Workout:
    workout = await repo.create(build_workout(user_id, data))
    logger.info("Workout %s created for user %s", workout.id, user_id)
    return workout


async def list_workouts(
    repo: WorkoutRepository,
    user_id: int,
    start: Optional[datetime] = None,
    end: Optional[datetime] = None,
    workout_type: Optional[WorkoutTypeEnum] = None,
    limit: Optional[int] = None,
) -> List[Workout]:
    start = to_local_naive(start) if start else None
    end = to_local_naive(end) if end else None
    ensure_valid_range(start, end)
    return await repo.find(user_id, start=start, end=end, workout_type=workout_type, limit=limit)


async def delete_workout(repo: WorkoutRepository, user_id: int, workout_id: int) -> None:
    # Чужая и несуществующая тренировка неразличимы для вызывающего
    if not await repo.delete_owned(workout_id, user_id):
        raise NotFoundError("Workout")
    logger.info("Workout %s deleted by user %s", workout_id, user_id)
