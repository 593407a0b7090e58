"""
Модульные тесты для AuthService и функций работы с паролем.

Покрываемые методы:
- hash_password / verify_password
- create_access_token / decode_user_id
- authenticate_user
- register_user (включая конфликт email)
"""

import pytest
from datetime import datetime, timedelta
from unittest.mock import AsyncMock
from jose import jwt
from sqlalchemy.exc import IntegrityError

from app.core.config import settings
from app.core.exceptions import ConflictError
from app.models.user import User
from app.repositories.user_repository import UserRepository
from app.schemas.auth import UserLogin, UserRegister
from app.schemas.user import Goals
from app.services.auth_service import auth_service, hash_password, verify_password, normalize_email

pytestmark = pytest.mark.unit


# ---------------------------------------------------------------------------
# hash_password / verify_password
# ---------------------------------------------------------------------------

def test_hash_password_creates_valid_bcrypt_hash():
    """hash_password должен возвращать строку, начинающуюся с $2b$."""
    hashed = hash_password("secret", rounds=4)
    assert isinstance(hashed, str)
    assert hashed.startswith("$2b$")


def test_hash_password_produces_unique_salts():
    """Два хэша одного пароля должны отличаться (уникальные соли bcrypt)."""
    assert hash_password("same_password", rounds=4) != hash_password("same_password", rounds=4)


def test_hash_password_uses_configured_cost_by_default():
    hashed = hash_password("secret")
    assert hashed.startswith(f"$2b${settings.BCRYPT_ROUNDS:02d}$")


def test_verify_password_valid_credentials():
    hashed = hash_password("my_password", rounds=4)
    assert verify_password("my_password", hashed) is True


def test_verify_password_wrong_password_returns_false():
    hashed = hash_password("correct_password", rounds=4)
    assert verify_password("wrong_password", hashed) is False


def test_verify_password_empty_or_broken_hash_returns_false():
    assert verify_password("password", "") is False
    assert verify_password("password", None) is False
    assert verify_password("password", "not-a-bcrypt-hash") is False


# ---------------------------------------------------------------------------
# Токены
# ---------------------------------------------------------------------------

def test_create_user_token_contains_sub_and_email():
    user = User(id=42, name="A", email="a@test.com", password="h")
    token = auth_service.create_user_token(user)
    payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    assert payload["sub"] == "42"
    assert payload["email"] == "a@test.com"


def test_create_access_token_custom_expiry():
    token = auth_service.create_access_token(data={"sub": "1"}, expires_delta=timedelta(seconds=10))
    payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    exp = datetime.utcfromtimestamp(payload["exp"])
    assert exp < datetime.utcnow() + timedelta(seconds=20)


def test_decode_user_id_roundtrip():
    token = auth_service.create_access_token(data={"sub": "7"})
    assert auth_service.decode_user_id(token) == 7


def test_decode_user_id_rejects_garbage_and_expired_tokens():
    expired = auth_service.create_access_token(data={"sub": "7"}, expires_delta=timedelta(seconds=-5))
    foreign = jwt.encode({"sub": "7"}, "another-secret", algorithm=settings.ALGORITHM)

    assert auth_service.decode_user_id("invalid.token.value") is None
    assert auth_service.decode_user_id(expired) is None
    assert auth_service.decode_user_id(foreign) is None


def test_decode_user_id_without_numeric_sub_returns_none():
    assert auth_service.decode_user_id(auth_service.create_access_token(data={"email": "x@y.z"})) is None
    assert auth_service.decode_user_id(auth_service.create_access_token(data={"sub": "abc"})) is None


# ---------------------------------------------------------------------------
# authenticate_user
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_authenticate_user_success_normalizes_email(user_fixture):
    repo = AsyncMock(spec=UserRepository)
    repo.get_by_email.return_value = user_fixture

    result = await auth_service.authenticate_user(
        repo, UserLogin(email="  Test@Example.COM ", password="password123")
    )

    assert result == user_fixture
    repo.get_by_email.assert_awaited_once_with("test@example.com")


@pytest.mark.asyncio
async def test_authenticate_user_user_not_found_returns_none():
    repo = AsyncMock(spec=UserRepository)
    repo.get_by_email.return_value = None

    result = await auth_service.authenticate_user(repo, UserLogin(email="unknown@test.com", password="any"))
    assert result is None


@pytest.mark.asyncio
async def test_authenticate_user_wrong_password_returns_none(user_fixture):
    repo = AsyncMock(spec=UserRepository)
    repo.get_by_email.return_value = user_fixture

    result = await auth_service.authenticate_user(repo, UserLogin(email="test@example.com", password="wrong"))
    assert result is None


# ---------------------------------------------------------------------------
# register_user
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_register_user_existing_email_raises_409(user_fixture):
    """Повторный email (в другом регистре) → 409, новая запись не создается."""
    repo = AsyncMock(spec=UserRepository)
    repo.email_exists.return_value = True

    with pytest.raises(ConflictError) as exc_info:
        await auth_service.register_user(
            repo, UserRegister(name="Dup", email="TEST@example.com", password="pass123")
        )

    assert exc_info.value.status_code == 409
    repo.email_exists.assert_awaited_once_with("test@example.com")
    repo.create_user.assert_not_called()


@pytest.mark.asyncio
async def test_register_user_creates_user_with_hashed_password():
    repo = AsyncMock(spec=UserRepository)
    repo.email_exists.return_value = False
    repo.create_user.side_effect = lambda user: user

    result = await auth_service.register_user(
        repo,
        UserRegister(
            name=" Newbie ",
            email="New@Test.com",
            password="password123",
            age=28,
            goals=Goals(weekly_workouts=3, daily_calories=2100),
        ),
    )

    assert result.email == "new@test.com"
    assert result.name == "Newbie"
    assert result.password != "password123"
    assert verify_password("password123", result.password)
    assert result.goals["weekly_workouts"] == 3
    repo.create_user.assert_awaited_once()


@pytest.mark.asyncio
async def test_register_user_concurrent_duplicate_maps_to_conflict():
    repo = AsyncMock(spec=UserRepository)
    repo.email_exists.return_value = False
    repo.create_user.side_effect = IntegrityError("INSERT", {}, Exception("duplicate key"))

    with pytest.raises(ConflictError):
        await auth_service.register_user(repo, UserRegister(name="X", email="x@test.com", password="p"))


def test_normalize_email():
    assert normalize_email("  MiXeD@Case.Org ") == "mixed@case.org"
