"""Сервис для работы с Pull Request'ами."""

import logging

from app.core.exceptions import NotAssignedException, PRExistsException, PRMergedException
from app.core.instrumentation import instrumented
from app.core.metrics import PR_CREATED_TOTAL, PR_REASSIGNED_TOTAL
from app.core.transaction import UnitOfWork
from app.db.models import utcnow
from app.domain.assignment.engine import (
    choose_replacement,
    is_reviewer_assigned,
    replace_reviewer,
    select_initial_reviewers,
)
from app.domain.base_service import BaseService
from app.domain.models import PRStatus, PullRequest

logger = logging.getLogger(__name__)


class PullRequestService(BaseService):
    """Сервис для работы с Pull Request'ами."""

    @instrumented("create_pr")
    async def create_pr(self, pr_id: str, pr_name: str, author_id: str) -> PullRequest:
        """Создать PR и автоматически назначить до двух ревьюверов из команды автора."""
        if await self.pr_repo.pr_exists(pr_id):
            raise PRExistsException()

        author = await self.user_repo.get_user_by_id(author_id)
        members = await self.user_repo.get_team_members(author.team_name, only_active=True)
        reviewers = select_initial_reviewers(
            members, author_id, self.picker, limit=self.reviewers_per_pr
        )

        async def create(uow: UnitOfWork) -> PullRequest:
            await uow.prs.create_pr(
                PullRequest(
                    pull_request_id=pr_id,
                    pull_request_name=pr_name,
                    author_id=author_id,
                    status=PRStatus.OPEN,
                )
            )
            if reviewers:
                await uow.prs.set_pr_reviewers(pr_id, reviewers)
            return await uow.prs.get_pr(pr_id)

        pr = await self.transactor.with_tx(create)

        logger.info("PR %s created with reviewers %s", pr_id, pr.assigned_reviewers)
        PR_CREATED_TOTAL.inc()
        return pr

    @instrumented("get_pr")
    async def get_pr(self, pr_id: str) -> PullRequest:
        """Получить PR по идентификатору."""
        return await self.pr_repo.get_pr(pr_id)

    @instrumented("merge_pr")
    async def merge_pr(self, pr_id: str) -> PullRequest:
        """Пометить PR как MERGED (идемпотентная операция)."""
        pr = await self.pr_repo.get_pr(pr_id)
        if pr.is_merged:
            logger.info("PR %s already merged", pr_id)
            return pr

        pr.status = PRStatus.MERGED
        pr.merged_at = utcnow()

        async with self.transactor.begin() as uow:
            await uow.prs.update_pr(pr)

        return pr

    @instrumented("reassign_reviewer")
    async def reassign_reviewer(self, pr_id: str, old_user_id: str) -> tuple[PullRequest, str]:
        """Переназначить ревьювера на другого активного участника его команды.

        Новый ревьювер занимает позицию заменённого.
        """
        pr = await self.pr_repo.get_pr(pr_id, for_update=True)
        if pr.is_merged:
            raise PRMergedException()

        old_reviewer = await self.user_repo.get_user_by_id(old_user_id)
        if not is_reviewer_assigned(pr, old_user_id):
            raise NotAssignedException()

        members = await self.user_repo.get_team_members(old_reviewer.team_name, only_active=True)
        new_reviewer_id = choose_replacement(pr, members, self.picker)
        new_reviewers = replace_reviewer(pr.assigned_reviewers, old_user_id, new_reviewer_id)
        logger.debug("PR %s new reviewers: %s", pr_id, new_reviewers)

        async with self.transactor.begin() as uow:
            await uow.prs.set_pr_reviewers(pr_id, new_reviewers)

        pr.assigned_reviewers = new_reviewers
        PR_REASSIGNED_TOTAL.inc()
        return pr, new_reviewer_id
