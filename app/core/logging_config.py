import logging

from app.core.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def setup_logging() -> None:
    """Единая настройка логирования приложения (вызывается один раз при старте)"""
    logging.basicConfig(level=settings.LOG_LEVEL.upper(), format=LOG_FORMAT)
    # SQL пишет сам движок при SQL_ECHO, дублировать не нужно
    logging.getLogger("sqlalchemy.engine").propagate = not settings.SQL_ECHO
