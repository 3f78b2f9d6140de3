from abc import ABC
from typing import Generic, List, Optional, Type, TypeVar

from sqlalchemy import delete, insert, select, update
from sqlalchemy.engine import Result
from sqlalchemy.ext.asyncio import AsyncSession

from .models import Base

T = TypeVar("T", bound=Base)


class SQLAlchemyRepository(ABC, Generic[T]):
    """Базовый репозиторий для работы с SQLAlchemy."""

    model: Type[T] = None

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(self, **data) -> T:
        stmt = insert(self.model).values(**data).returning(self.model)
        result: Result = await self._session.execute(stmt)
        return result.scalar_one()

    async def find(self, **filter_by) -> List[T]:
        stmt = select(self.model).filter_by(**filter_by).order_by(self.model.id)
        result: Result = await self._session.execute(stmt)
        return list(result.scalars().all())

    async def get_one(self, **filter_by) -> Optional[T]:
        """Первый объект по фильтру или None."""
        stmt = select(self.model).filter_by(**filter_by).limit(1)
        result: Result = await self._session.execute(stmt)
        return result.scalars().first()

    async def update(self, obj_id: int, **data) -> T:
        """
        Обновить объект по id.

        Raises:
            LookupError: Если объекта нет
        """
        stmt = (
            update(self.model)
            .where(self.model.id == obj_id)
            .values(**data)
            .returning(self.model)
        )
        result: Result = await self._session.execute(stmt)
        updated = result.scalar_one_or_none()
        if updated is None:
            raise LookupError(f"{self.model.__name__} id={obj_id} not found")
        return updated

    async def hard_delete(self, **filter_by) -> int:
        """Удалить объекты по фильтру. Возвращает число удалённых строк."""
        stmt = delete(self.model).filter_by(**filter_by)
        result = await self._session.execute(stmt)
        return result.rowcount
