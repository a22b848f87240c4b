"""Зависимости для API."""

from app.core.database import get_db
from app.domain.assignment.picker import ReviewerPicker


async def get_session():
    """Получить сессию БД."""
    async for session in get_db():
        yield session


def get_picker() -> ReviewerPicker:
    """Источник случайности для выбора ревьюверов (подменяется в тестах)."""
    return ReviewerPicker()
