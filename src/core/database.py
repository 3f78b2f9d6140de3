import logging
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from .config import settings

logger = logging.getLogger(__name__)


class DatabaseManager:
    """Менеджер подключения к БД настроек и фабрики сессий."""

    def __init__(self, url: str, echo: bool = False) -> None:
        self.engine = create_async_engine(
            url=url,
            echo=echo,
            future=True,
        )
        self.session_factory = async_sessionmaker(
            bind=self.engine,
            autoflush=False,
            expire_on_commit=False,
            class_=AsyncSession,
        )

    async def dispose(self) -> None:
        await self.engine.dispose()

    async def session_dependency(self) -> AsyncGenerator[AsyncSession, None]:
        """Dependency для получения сессии на время запроса."""
        async with self.session_factory() as session:
            yield session


db_manager = DatabaseManager(
    url=settings.database_url,
    echo=False,
)


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """Dependency для FastAPI."""
    async for session in db_manager.session_dependency():
        yield session


async def init_db() -> None:
    """Инициализация БД: создаём таблицы зарегистрированных моделей."""
    import src.apps.payment_settings.models  # noqa: F401

    from .models import Base

    async with db_manager.engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    logger.info("Таблицы настроек готовы: %s", ", ".join(Base.metadata.tables))
