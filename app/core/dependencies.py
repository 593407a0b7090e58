from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.db import get_db, get_session_factory
from app.core.exceptions import AuthorizationError
from app.models.user import User
from app.repositories.nutrition_repository import NutritionRepository
from app.repositories.user_repository import UserRepository
from app.repositories.workout_repository import WorkoutRepository
from app.services.auth_service import auth_service
from app.services.dashboard_service import DashboardAssembler


security = HTTPBearer(auto_error=False)


def get_user_repository(db: AsyncSession = Depends(get_db)) -> UserRepository:
    """Фабрика репозитория — инжектируется в эндпоинты через Depends."""
    return UserRepository(db)


def get_workout_repository(db: AsyncSession = Depends(get_db)) -> WorkoutRepository:
    return WorkoutRepository(db)


def get_nutrition_repository(db: AsyncSession = Depends(get_db)) -> NutritionRepository:
    return NutritionRepository(db)


def get_dashboard_assembler(session_factory=Depends(get_session_factory)) -> DashboardAssembler:
    return DashboardAssembler(session_factory)


def get_current_user_id(
        request: Request,
        credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> int:
    """
    id пользователя из cookie сессии или заголовка Authorization: Bearer.
    Любая проблема с токеном дает одинаковый 401.
    """
    tokens = [request.cookies.get(settings.AUTH_COOKIE_NAME)]
    if credentials is not None:
        tokens.append(credentials.credentials)

    # Устаревшая cookie не должна перекрывать валидный Bearer
    for token in tokens:
        if token:
            user_id = auth_service.decode_user_id(token)
            if user_id is not None:
                return user_id

    raise AuthorizationError()


async def get_current_user(
        user_id: int = Depends(get_current_user_id),
        repo: UserRepository = Depends(get_user_repository),
) -> User:
    user = await repo.get_by_id(user_id)
    if user is None:
        raise AuthorizationError()

    return user
