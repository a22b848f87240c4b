"""Сервис для работы со статистикой."""

from app.core.instrumentation import instrumented
from app.domain.base_service import BaseService
from app.domain.models import Stats


class StatsService(BaseService):
    """Сервис для работы со статистикой."""

    @instrumented("get_stats")
    async def get_stats(self) -> Stats:
        """Получить количество назначений по пользователям и PR по статусам."""
        assignments = await self.pr_repo.get_assignments_count_by_user()
        counts = await self.pr_repo.get_pr_status_counts()
        return Stats(assignments_by_user=assignments, pr_status_counts=counts)
