from typing import List

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    DATABASE_URL: str = "postgresql://fit_user:fit_password@db:5432/fit_db"
    SQL_ECHO: bool = False
    # При продакшн/обычной разработке лучше не пересоздавать БД на каждом старте
    RESET_DATABASE: bool = False

    SECRET_KEY: str = "SECRET_KEY_FOR_FITTRACK"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 7
    BCRYPT_ROUNDS: int = 12
    AUTH_COOKIE_NAME: str = "token"
    AUTH_COOKIE_SECURE: bool = False

    DASHBOARD_DEFAULT_DAYS: int = 30
    DASHBOARD_RECENT_LIMIT: int = 5
    DASHBOARD_CHART_DAYS: int = 7
    DASHBOARD_MAX_DAYS: int = 3650
    # Одновременных сессий на один запрос дашборда (пул: 5 + 10 overflow)
    DASHBOARD_MAX_CONCURRENT_QUERIES: int = 4

    # Эвристики рекомендаций: доля типа тренировки и число недель в окне
    SUGGESTION_MIN_TYPE_SHARE: float = 0.3
    SUGGESTION_WEEKS_PER_WINDOW: int = 4
    SUGGESTION_LIMIT: int = 3

    CACHE_CONTROL: str = "private, max-age=300, stale-while-revalidate=60"
    WORKOUTS_DEFAULT_LIMIT: int = 50
    NUTRITION_DEFAULT_LIMIT: int = 30

    CORS_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "allow"

settings = Settings()
