from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status

from app.core.config import settings
from app.core.dependencies import get_current_user_id, get_workout_repository
from app.models.workout import WorkoutTypeEnum
from app.repositories.workout_repository import WorkoutRepository
from app.schemas.base import SuccessResponse
from app.schemas.workout import WorkoutCreate, WorkoutEnvelope, WorkoutListResponse, WorkoutRead
from app.services import workout_service

router = APIRouter(tags=["workouts"])


@router.get("", response_model=WorkoutListResponse)
async def get_workouts(
    response: Response,
    start_date: Optional[datetime] = Query(None, alias="startDate"),
    end_date: Optional[datetime] = Query(None, alias="endDate"),
    workout_type: Optional[WorkoutTypeEnum] = Query(None, alias="type"),
    limit: int = Query(settings.WORKOUTS_DEFAULT_LIMIT, ge=1, le=500),
    user_id: int = Depends(get_current_user_id),
    repo: WorkoutRepository = Depends(get_workout_repository),
):
    """Тренировки пользователя, новые первыми"""
    workouts = await workout_service.list_workouts(
        repo, user_id, start=start_date, end=end_date, workout_type=workout_type, limit=limit
    )
    response.headers["Cache-Control"] = settings.CACHE_CONTROL
    return WorkoutListResponse(workouts=[WorkoutRead.model_validate(w) for w in workouts])


@router.post("", response_model=WorkoutEnvelope, status_code=status.HTTP_201_CREATED)
async def create_workout(
    data: WorkoutCreate,
    user_id: int = Depends(get_current_user_id),
    repo: WorkoutRepository = Depends(get_workout_repository),
):
    workout = await workout_service.create_workout(repo, user_id, data)
    return WorkoutEnvelope(workout=WorkoutRead.model_validate(workout))


@router.delete("/{workout_id}", response_model=SuccessResponse)
async def delete_workout(
    workout_id: int,
    user_id: int = Depends(get_current_user_id),
    repo: WorkoutRepository = Depends(get_workout_repository),
):
    """Удалить свою тренировку (чужая -> 404)"""
    await workout_service.delete_workout(repo, user_id, workout_id)
    return SuccessResponse()
