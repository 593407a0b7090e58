import logging
from datetime import datetime, timedelta
from typing import Optional

import bcrypt
from jose import jwt, JWTError
from sqlalchemy.exc import IntegrityError

from app.core.config import settings
from app.core.exceptions import ConflictError
from app.models.user import User
from app.repositories.user_repository import UserRepository
from app.schemas.auth import UserLogin, UserRegister

logger = logging.getLogger(__name__)


def normalize_email(email: str) -> str:
    return email.strip().lower()


def hash_password(password: str, rounds: Optional[int] = None) -> str:
    salt = bcrypt.gensalt(rounds=rounds or settings.BCRYPT_ROUNDS)
    hashed = bcrypt.hashpw(password.encode('utf-8'), salt)
    return hashed.decode('utf-8')  # Декодируем bytes в string для хранения в БД


def verify_password(plain_password: str, hashed_password: Optional[str]) -> bool:
    """Сравнить пароль с сохраненным хэшем. Пустой или битый хэш -> False."""
    if not hashed_password:
        return False
    try:
        return bcrypt.checkpw(
            plain_password.encode('utf-8'),
            hashed_password.encode('utf-8')
        )
    except ValueError:
        logger.warning("Stored password hash has invalid format")
        return False


class AuthService:
    def __init__(self):
        self.SECRET_KEY = settings.SECRET_KEY
        self.ALGORITHM = settings.ALGORITHM
        self.ACCESS_TOKEN_EXPIRE_MINUTES = settings.ACCESS_TOKEN_EXPIRE_MINUTES

    def create_access_token(self, data: dict, expires_delta: Optional[timedelta] = None) -> str:
        to_encode = data.copy()
        if expires_delta:
            expire = datetime.utcnow() + expires_delta
        else:
            expire = datetime.utcnow() + timedelta(minutes=self.ACCESS_TOKEN_EXPIRE_MINUTES)
        to_encode.update({"exp": expire})
        return jwt.encode(to_encode, self.SECRET_KEY, algorithm=self.ALGORITHM)

    def create_user_token(self, user: User) -> str:
        return self.create_access_token(data={"sub": str(user.id), "email": user.email})

    def decode_user_id(self, token: str) -> Optional[int]:
        """id пользователя из access-токена или None, если токен невалиден."""
        try:
            payload = jwt.decode(token, self.SECRET_KEY, algorithms=[self.ALGORITHM])
        except JWTError:
            return None

        user_id = payload.get("sub")
        if user_id is None:
            return None
        try:
            return int(user_id)
        except (TypeError, ValueError):
            return None

    async def authenticate_user(self, repo: UserRepository, login_data: UserLogin) -> Optional[User]:
        user = await repo.get_by_email(normalize_email(login_data.email))

        # Одинаковый результат для "нет пользователя" и "неверный пароль"
        if not user or not verify_password(login_data.password, user.password):
            return None

        return user

    async def register_user(self, repo: UserRepository, user_data: UserRegister) -> User:
        email = normalize_email(user_data.email)
        if await repo.email_exists(email):
            logger.info("Registration rejected: email already in use")
            raise ConflictError("User already exists")

        new_user = User(
            name=user_data.name.strip(),
            email=email,
            password=hash_password(user_data.password),
            age=user_data.age,
            weight=user_data.weight,
            height=user_data.height,
            goals=user_data.goals.model_dump() if user_data.goals else None,
            created_at=datetime.utcnow()
        )

        try:
            user = await repo.create_user(new_user)
        except IntegrityError:
            # Параллельная регистрация с тем же email
            raise ConflictError("User already exists")
        logger.info("User %s registered", user.id)
        return user


# Создаем экземпляр сервиса для импорта
auth_service = AuthService()
