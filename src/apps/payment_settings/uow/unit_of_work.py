"""Unit of Work для хранилища настроек."""

from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from src.core.uow import IUnitOfWork

from ..repositories.setting_repository import SettingRepository


class UnitOfWork(IUnitOfWork):
    """Единая точка входа к репозиторию настроек и транзакции."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session
        self._settings: Optional[SettingRepository] = None

    @property
    def settings(self) -> SettingRepository:
        if self._settings is None:
            self._settings = SettingRepository(self._session)
        return self._settings

    async def commit(self) -> None:
        """Зафиксировать изменения в БД."""
        await self._session.commit()

    async def rollback(self) -> None:
        """Откатить изменения."""
        await self._session.rollback()
