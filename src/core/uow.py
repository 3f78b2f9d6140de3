from abc import ABC, abstractmethod


class IUnitOfWork(ABC):
    """
    Интерфейс Unit of Work.

    При выходе из контекста с исключением изменения откатываются,
    фиксация выполняется только явным вызовом commit().
    """

    @abstractmethod
    async def commit(self) -> None:
        raise NotImplementedError

    @abstractmethod
    async def rollback(self) -> None:
        raise NotImplementedError

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        if exc_type is not None:
            await self.rollback()
