"""Базовый репозиторий."""

from typing import Generic, TypeVar

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import Base

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """Базовый репозиторий для работы с БД."""

    def __init__(self, model: type[ModelType], session: AsyncSession):
        self.model = model
        self.session = session

    async def get_row(self, id: str) -> ModelType | None:
        """Получить строку по первичному ключу."""
        return await self.session.get(self.model, id)

    async def create(self, **kwargs) -> ModelType:
        """Создать запись."""
        instance = self.model(**kwargs)
        self.session.add(instance)
        await self.session.flush()
        return instance

    async def update(self, instance: ModelType, **kwargs) -> ModelType:
        """Обновить запись."""
        for key, value in kwargs.items():
            setattr(instance, key, value)
        await self.session.flush()
        return instance
