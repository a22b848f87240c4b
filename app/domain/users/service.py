"""Сервис для работы с пользователями."""

from app.core.instrumentation import instrumented
from app.domain.base_service import BaseService
from app.domain.models import PullRequestShort, User


class UserService(BaseService):
    """Сервис для работы с пользователями."""

    @instrumented("set_user_is_active")
    async def set_is_active(self, user_id: str, is_active: bool) -> User:
        """Установить флаг активности пользователя.

        Открытые PR пользователя не переназначаются: для этого есть
        деактивация через команду.
        """
        async with self.transactor.begin() as uow:
            return await uow.users.set_user_is_active(user_id, is_active)

    @instrumented("get_user_reviews")
    async def get_reviews(self, user_id: str) -> list[PullRequestShort]:
        """Получить PR'ы, где пользователь назначен ревьювером."""
        await self.user_repo.get_user_by_id(user_id)
        return await self.pr_repo.get_prs_where_reviewer(user_id)
