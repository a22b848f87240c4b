"""Репозиторий для работы с командами."""

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import NotFoundException, TeamExistsException
from app.db.models import Team, User
from app.db.repositories.base import BaseRepository
from app.domain import models as domain


class TeamRepository(BaseRepository[Team]):
    """Репозиторий команд."""

    def __init__(self, session: AsyncSession):
        super().__init__(Team, session)

    async def create_team(self, team_name: str) -> None:
        """Создать команду. Дубликат имени -> TEAM_EXISTS."""
        if await self.exists(team_name):
            raise TeamExistsException()
        try:
            await self.create(team_name=team_name)
        except IntegrityError as exc:
            raise TeamExistsException() from exc

    async def get_team(self, team_name: str) -> domain.Team:
        """Получить команду со всеми участниками (и активными, и нет)."""
        if not await self.exists(team_name):
            raise NotFoundException("Team", "team not found")

        result = await self.session.execute(
            select(User).where(User.team_name == team_name).order_by(User.username, User.user_id)
        )
        return domain.Team(
            team_name=team_name,
            members=[
                domain.TeamMember(
                    user_id=user.user_id,
                    username=user.username,
                    is_active=user.is_active,
                )
                for user in result.scalars().all()
            ],
        )

    async def exists(self, team_name: str) -> bool:
        """Проверить существование команды."""
        result = await self.session.execute(
            select(Team.team_name).where(Team.team_name == team_name)
        )
        return result.scalar_one_or_none() is not None
