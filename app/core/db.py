from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker

from app.core.config import settings

DATABASE_URL = settings.DATABASE_URL.replace("postgresql://", "postgresql+asyncpg://")

# Движок и фабрика сессий создаются один раз при старте процесса
engine = create_async_engine(
    DATABASE_URL,
    echo=settings.SQL_ECHO,
    future=True,
    pool_pre_ping=True
)

AsyncSessionLocal = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    autoflush=False,
    autocommit=False,
    expire_on_commit=False
)


async def get_db():
    """Зависимость: одна сессия на запрос"""
    async with AsyncSessionLocal() as session:
        try:
            yield session
        finally:
            await session.close()


def get_session_factory() -> async_sessionmaker:
    """
    Фабрика сессий для сервисов, которые выполняют независимые запросы параллельно.
    Одна AsyncSession не допускает конкурентных запросов, поэтому каждый
    параллельный запрос открывает свою сессию.
    """
    return AsyncSessionLocal


async def run_with_repository(session_factory, repository_cls, operation):
    """Выполнить operation(repository) в отдельной короткой сессии"""
    async with session_factory() as session:
        return await operation(repository_cls(session))
