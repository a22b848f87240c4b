"""Сервис для работы с командами."""

import logging

from app.core.exceptions import NoCandidateException
from app.core.instrumentation import instrumented
from app.core.metrics import TEAM_CREATED_TOTAL, TEAM_DEACTIVATED_TOTAL
from app.core.transaction import UnitOfWork
from app.domain.assignment.engine import (
    PRUpdate,
    plan_pr_updates,
    prepare_deactivation_targets,
    validate_users_in_team,
)
from app.domain.base_service import BaseService
from app.domain.models import Team, TeamMember

logger = logging.getLogger(__name__)


class TeamService(BaseService):
    """Сервис для работы с командами."""

    @instrumented("create_team")
    async def create_team(self, team_name: str, members: list[TeamMember]) -> Team:
        """Создать команду с участниками.

        Существующие пользователи переводятся в новую команду с обновлением
        имени и флага активности.
        """

        async def create(uow: UnitOfWork) -> Team:
            await uow.teams.create_team(team_name)
            if members:
                await uow.users.upsert_users(team_name, members)
            return await uow.teams.get_team(team_name)

        team = await self.transactor.with_tx(create)

        logger.info("team %s created with %d members", team_name, len(team.members))
        TEAM_CREATED_TOTAL.inc()
        return team

    @instrumented("get_team")
    async def get_team(self, team_name: str) -> Team:
        """Получить команду с участниками."""
        return await self.team_repo.get_team(team_name)

    @instrumented("deactivate_team_members")
    async def deactivate_team_members(self, team_name: str, user_ids: list[str]) -> Team:
        """Деактивировать участников команды и переназначить их открытые PR.

        Все деактивации и изменения ревьюверов применяются в одной
        транзакции после того, как замена найдена для каждого слота. Если
        открытых PR нет, возвращается состояние команды, прочитанное до
        деактивации.
        """
        team = await self.team_repo.get_team(team_name)
        validate_users_in_team(team, user_ids)

        if not user_ids:
            return team

        active_members = await self.user_repo.get_team_members(team_name, only_active=True)
        to_deactivate, candidate_pool = prepare_deactivation_targets(active_members, user_ids)
        if not to_deactivate:
            return team

        prs = await self.pr_repo.get_open_prs_by_reviewers(to_deactivate, for_update=True)

        if not prs:
            await self._apply_deactivation(to_deactivate, [])
            logger.info(
                "team %s: deactivated %s, no open PRs to reassign", team_name, to_deactivate
            )
            return team

        if not candidate_pool:
            raise NoCandidateException()

        updates = plan_pr_updates(prs, candidate_pool, to_deactivate, self.picker)
        await self._apply_deactivation(to_deactivate, updates)

        logger.info(
            "team %s: deactivated %s, reassigned %d PRs", team_name, to_deactivate, len(updates)
        )
        TEAM_DEACTIVATED_TOTAL.inc()
        return await self.team_repo.get_team(team_name)

    async def _apply_deactivation(
        self,
        to_deactivate: list[str],
        updates: list[PRUpdate],
    ) -> None:
        async with self.transactor.begin() as tx:
            for user_id in to_deactivate:
                await tx.users.set_user_is_active(user_id, False)
            for update in updates:
                await tx.prs.set_pr_reviewers(update.pull_request_id, update.reviewers)
