"""
Общие фикстуры для всех тестов FitTrack backend.

Стратегия:
- Тестовое FastAPI-приложение создаётся без startup-событий (нет подключения к БД).
- Репозитории заменяются на AsyncMock(spec=...) через dependency_overrides.
- Для сервисов, открывающих собственные сессии (дашборд, статистика),
  используется фикстура session_factory: каждая "сессия" — AsyncMock-контекст.
- JWT-токены создаются через auth_service.create_user_token() для проверки зависимостей.
"""

import pytest
from unittest.mock import AsyncMock, MagicMock
from httpx import AsyncClient, ASGITransport
from fastapi import FastAPI
from datetime import datetime
from typing import AsyncGenerator

from app.api.router import api_router
from app.models.user import User
from app.repositories.nutrition_repository import NutritionRepository
from app.repositories.user_repository import UserRepository
from app.repositories.workout_repository import WorkoutRepository
from app.services.auth_service import auth_service, hash_password
from app.services.dashboard_service import DashboardAssembler
from app.core.dependencies import (
    get_current_user_id,
    get_dashboard_assembler,
    get_nutrition_repository,
    get_user_repository,
    get_workout_repository,
)


# ---------------------------------------------------------------------------
# Вспомогательные функции
# ---------------------------------------------------------------------------

def create_test_app() -> FastAPI:
    """Тестовое FastAPI-приложение без startup-событий."""
    test_app = FastAPI(title="FitTrack Test App")
    test_app.include_router(api_router, prefix="/api/v1")
    return test_app


def make_auth_headers(user: User) -> dict:
    """Заголовки авторизации с валидным JWT для указанного пользователя."""
    return {"Authorization": f"Bearer {auth_service.create_user_token(user)}"}


def make_session_factory() -> MagicMock:
    """Фабрика, возвращающая асинхронный контекст с мок-сессией."""
    session = AsyncMock()
    session.__aenter__.return_value = session
    session.__aexit__.return_value = False
    return MagicMock(return_value=session)


# ---------------------------------------------------------------------------
# Фикстуры пользователей
# ---------------------------------------------------------------------------

@pytest.fixture
def user_fixture() -> User:
    """Обычный пользователь с целью 4 тренировки в неделю."""
    return User(
        id=1,
        name="Tester",
        email="test@example.com",
        password=hash_password("password123", rounds=4),
        age=30,
        weight=75.0,
        height=180.0,
        goals={"target_weight": 70.0, "weekly_workouts": 4, "daily_calories": 2200},
        created_at=datetime.utcnow(),
    )


@pytest.fixture
def other_user_fixture() -> User:
    """Второй пользователь — владелец "чужих" записей."""
    return User(
        id=2,
        name="Other",
        email="other@example.com",
        password=hash_password("other123", rounds=4),
        created_at=datetime.utcnow(),
    )


# ---------------------------------------------------------------------------
# Фикстуры для зависимостей
# ---------------------------------------------------------------------------

@pytest.fixture
def mock_repo() -> AsyncMock:
    """Мокированный UserRepository для auth-эндпоинтов."""
    return AsyncMock(spec=UserRepository)


@pytest.fixture
def workout_repo() -> AsyncMock:
    return AsyncMock(spec=WorkoutRepository)


@pytest.fixture
def nutrition_repo() -> AsyncMock:
    return AsyncMock(spec=NutritionRepository)


@pytest.fixture
def session_factory() -> MagicMock:
    return make_session_factory()


@pytest.fixture
def mock_assembler() -> AsyncMock:
    """Мокированный DashboardAssembler для эндпоинта дашборда."""
    return AsyncMock(spec=DashboardAssembler)


# ---------------------------------------------------------------------------
# HTTP-клиенты
# ---------------------------------------------------------------------------

@pytest.fixture
async def client(mock_repo, workout_repo, nutrition_repo, mock_assembler) -> AsyncGenerator[AsyncClient, None]:
    """
    Неаутентифицированный клиент: репозитории → моки.
    Используется для auth-эндпоинтов и проверок 401.
    """
    app = create_test_app()
    app.dependency_overrides[get_user_repository] = lambda: mock_repo
    app.dependency_overrides[get_workout_repository] = lambda: workout_repo
    app.dependency_overrides[get_nutrition_repository] = lambda: nutrition_repo
    app.dependency_overrides[get_dashboard_assembler] = lambda: mock_assembler
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


@pytest.fixture
async def user_client(user_fixture, mock_repo, workout_repo, nutrition_repo, mock_assembler) -> AsyncGenerator[AsyncClient, None]:
    """
    Клиент, аутентифицированный как user_fixture.
    get_current_user_id → user_fixture.id, репозитории → моки.
    """
    app = create_test_app()
    app.dependency_overrides[get_user_repository] = lambda: mock_repo
    app.dependency_overrides[get_workout_repository] = lambda: workout_repo
    app.dependency_overrides[get_nutrition_repository] = lambda: nutrition_repo
    app.dependency_overrides[get_dashboard_assembler] = lambda: mock_assembler
    app.dependency_overrides[get_current_user_id] = lambda: user_fixture.id
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac
