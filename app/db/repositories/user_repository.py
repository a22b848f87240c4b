"""Репозиторий для работы с пользователями."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import NotFoundException
from app.db.models import User
from app.db.repositories.base import BaseRepository
from app.domain import models as domain


class UserRepository(BaseRepository[User]):
    """Репозиторий пользователей."""

    def __init__(self, session: AsyncSession):
        super().__init__(User, session)

    async def upsert_users(self, team_name: str, members: list[domain.TeamMember]) -> None:
        """Создать пользователей или обновить username/is_active/команду."""
        for member in members:
            user = await self.get_row(member.user_id)
            if user:
                user.username = member.username
                user.is_active = member.is_active
                user.team_name = team_name
            else:
                self.session.add(
                    User(
                        user_id=member.user_id,
                        username=member.username,
                        team_name=team_name,
                        is_active=member.is_active,
                    )
                )
        await self.session.flush()

    async def get_user_by_id(self, user_id: str) -> domain.User:
        """Получить пользователя по ID."""
        user = await self.get_row(user_id)
        if not user:
            raise NotFoundException("User", "user not found")
        return self._to_domain(user)

    async def set_user_is_active(self, user_id: str, is_active: bool) -> domain.User:
        """Обновить флаг активности и вернуть обновлённого пользователя."""
        user = await self.get_row(user_id)
        if not user:
            raise NotFoundException("User", "user not found")
        await self.update(user, is_active=is_active)
        return self._to_domain(user)

    async def get_team_members(self, team_name: str, only_active: bool) -> list[domain.User]:
        """Получить участников команды, при only_active=True только активных."""
        query = select(User).where(User.team_name == team_name)
        if only_active:
            query = query.where(User.is_active.is_(True))
        query = query.order_by(User.username, User.user_id)
        result = await self.session.execute(query)
        return [self._to_domain(user) for user in result.scalars().all()]

    @staticmethod
    def _to_domain(user: User) -> domain.User:
        return domain.User(
            user_id=user.user_id,
            username=user.username,
            team_name=user.team_name,
            is_active=user.is_active,
        )
