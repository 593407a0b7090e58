from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status

from app.core.config import settings
from app.core.dependencies import get_current_user_id, get_nutrition_repository
from app.repositories.nutrition_repository import NutritionRepository
from app.schemas.base import SuccessResponse
from app.schemas.nutrition import NutritionUpsert, NutritionEnvelope, NutritionListResponse, NutritionRead
from app.services import nutrition_service

router = APIRouter(tags=["nutrition"])


@router.get("", response_model=NutritionListResponse)
async def get_nutrition_entries(
    response: Response,
    start_date: Optional[date] = Query(None, alias="startDate"),
    end_date: Optional[date] = Query(None, alias="endDate"),
    limit: int = Query(settings.NUTRITION_DEFAULT_LIMIT, ge=1, le=366),
    user_id: int = Depends(get_current_user_id),
    repo: NutritionRepository = Depends(get_nutrition_repository),
):
    entries = await nutrition_service.list_entries(repo, user_id, start=start_date, end=end_date, limit=limit)
    response.headers["Cache-Control"] = settings.CACHE_CONTROL
    return NutritionListResponse(nutrition_entries=[NutritionRead.model_validate(e) for e in entries])


@router.post("", response_model=NutritionEnvelope, status_code=status.HTTP_201_CREATED)
async def save_nutrition_entry(
    data: NutritionUpsert,
    user_id: int = Depends(get_current_user_id),
    repo: NutritionRepository = Depends(get_nutrition_repository),
):
    """Создать или перезаписать запись питания за день"""
    entry = await nutrition_service.save_entry(repo, user_id, data)
    return NutritionEnvelope(nutrition=NutritionRead.model_validate(entry))


@router.delete("/{entry_id}", response_model=SuccessResponse)
async def delete_nutrition_entry(
    entry_id: int,
    user_id: int = Depends(get_current_user_id),
    repo: NutritionRepository = Depends(get_nutrition_repository),
):
    await nutrition_service.delete_entry(repo, user_id, entry_id)
    return SuccessResponse()
