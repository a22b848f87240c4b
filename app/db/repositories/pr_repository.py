"""Репозиторий для работы с Pull Request'ами."""

from collections import defaultdict

from sqlalchemy import case, delete, func, insert, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import NotFoundException, PRExistsException
from app.db.models import PullRequest, User, pr_reviewers, utcnow
from app.db.repositories.base import BaseRepository
from app.domain import models as domain


class PRRepository(BaseRepository[PullRequest]):
    """Репозиторий Pull Request'ов."""

    def __init__(self, session: AsyncSession):
        super().__init__(PullRequest, session)

    async def create_pr(self, pr: domain.PullRequest) -> None:
        """Создать PR без ревьюверов (они задаются через set_pr_reviewers)."""
        try:
            await self.create(
                pull_request_id=pr.pull_request_id,
                pull_request_name=pr.pull_request_name,
                author_id=pr.author_id,
                status=pr.status.value,
                created_at=pr.created_at or utcnow(),
            )
        except IntegrityError as exc:
            raise PRExistsException() from exc

    async def pr_exists(self, pr_id: str) -> bool:
        """Проверить существование PR."""
        result = await self.session.execute(
            select(PullRequest.pull_request_id).where(PullRequest.pull_request_id == pr_id)
        )
        return result.scalar_one_or_none() is not None

    async def get_pr(self, pr_id: str, for_update: bool = False) -> domain.PullRequest:
        """Получить PR с ревьюверами в порядке их слотов.

        for_update=True блокирует строку PR до конца текущей транзакции.
        """
        query = select(PullRequest).where(PullRequest.pull_request_id == pr_id)
        if for_update:
            query = query.with_for_update()
        result = await self.session.execute(query)
        row = result.scalar_one_or_none()
        if not row:
            raise NotFoundException("PR", "PR not found")

        reviewers = await self.get_pr_reviewers(pr_id)
        return self._to_domain(row, reviewers)

    async def update_pr(self, pr: domain.PullRequest) -> None:
        """Сохранить скалярные поля PR."""
        row = await self.get_row(pr.pull_request_id)
        if not row:
            raise NotFoundException("PR", "PR not found")
        await self.update(
            row,
            pull_request_name=pr.pull_request_name,
            author_id=pr.author_id,
            status=pr.status.value,
            merged_at=pr.merged_at,
        )

    async def get_pr_reviewers(self, pr_id: str) -> list[str]:
        """Получить ревьюверов PR по порядку слотов."""
        result = await self.session.execute(
            select(pr_reviewers.c.reviewer_id)
            .where(pr_reviewers.c.pr_id == pr_id)
            .order_by(pr_reviewers.c.position)
        )
        return list(result.scalars().all())

    async def set_pr_reviewers(self, pr_id: str, reviewer_ids: list[str]) -> None:
        """Полностью заменить список ревьюверов PR, сохраняя порядок."""
        await self.session.execute(delete(pr_reviewers).where(pr_reviewers.c.pr_id == pr_id))
        if reviewer_ids:
            await self.session.execute(
                insert(pr_reviewers).values(
                    [
                        {"pr_id": pr_id, "reviewer_id": reviewer_id, "position": position}
                        for position, reviewer_id in enumerate(reviewer_ids)
                    ]
                )
            )
        await self.session.flush()

    async def get_prs_where_reviewer(self, user_id: str) -> list[domain.PullRequestShort]:
        """Получить PR'ы, где пользователь ревьювер."""
        query = (
            select(PullRequest)
            .join(pr_reviewers, PullRequest.pull_request_id == pr_reviewers.c.pr_id)
            .where(pr_reviewers.c.reviewer_id == user_id)
            .order_by(PullRequest.created_at, PullRequest.pull_request_id)
        )
        result = await self.session.execute(query)
        return [
            domain.PullRequestShort(
                pull_request_id=row.pull_request_id,
                pull_request_name=row.pull_request_name,
                author_id=row.author_id,
                status=domain.PRStatus(row.status),
            )
            for row in result.scalars().all()
        ]

    async def get_open_prs_by_reviewers(
        self, user_ids: list[str], for_update: bool = False
    ) -> list[domain.PullRequest]:
        """Получить открытые PR, где любой из user_ids назначен ревьювером."""
        if not user_ids:
            return []

        reviewed = select(pr_reviewers.c.pr_id).where(pr_reviewers.c.reviewer_id.in_(user_ids))
        query = (
            select(PullRequest)
            .where(
                PullRequest.pull_request_id.in_(reviewed),
                PullRequest.status == domain.PRStatus.OPEN.value,
            )
            .order_by(PullRequest.created_at, PullRequest.pull_request_id)
        )
        if for_update:
            query = query.with_for_update()
        result = await self.session.execute(query)
        rows = list(result.scalars().all())

        reviewers = await self._get_reviewers_for([row.pull_request_id for row in rows])
        return [self._to_domain(row, reviewers[row.pull_request_id]) for row in rows]

    async def get_assignments_count_by_user(self) -> list[domain.UserAssignmentsStat]:
        """Количество назначений на ревью по каждому пользователю."""
        assignments = func.count(pr_reviewers.c.pr_id).label("assignments_count")
        query = (
            select(User.user_id, assignments)
            .outerjoin(pr_reviewers, User.user_id == pr_reviewers.c.reviewer_id)
            .group_by(User.user_id)
            .order_by(assignments.desc(), User.user_id)
        )
        result = await self.session.execute(query)
        return [
            domain.UserAssignmentsStat(
                user_id=row.user_id,
                review_assignments_count=int(row.assignments_count or 0),
            )
            for row in result.all()
        ]

    async def get_pr_status_counts(self) -> domain.PRStatusCounts:
        """Количество PR по статусам."""
        query = select(
            func.count(PullRequest.pull_request_id).label("total_prs"),
            func.sum(case((PullRequest.status == "OPEN", 1), else_=0)).label("open_prs"),
            func.sum(case((PullRequest.status == "MERGED", 1), else_=0)).label("merged_prs"),
        )
        result = await self.session.execute(query)
        row = result.one()
        return domain.PRStatusCounts(
            open=int(row.open_prs or 0),
            merged=int(row.merged_prs or 0),
            total=int(row.total_prs or 0),
        )

    async def _get_reviewers_for(self, pr_ids: list[str]) -> dict[str, list[str]]:
        reviewers: dict[str, list[str]] = defaultdict(list)
        if not pr_ids:
            return reviewers
        result = await self.session.execute(
            select(pr_reviewers.c.pr_id, pr_reviewers.c.reviewer_id)
            .where(pr_reviewers.c.pr_id.in_(pr_ids))
            .order_by(pr_reviewers.c.pr_id, pr_reviewers.c.position)
        )
        for pr_id, reviewer_id in result.all():
            reviewers[pr_id].append(reviewer_id)
        return reviewers

    @staticmethod
    def _to_domain(row: PullRequest, reviewers: list[str]) -> domain.PullRequest:
        return domain.PullRequest(
            pull_request_id=row.pull_request_id,
            pull_request_name=row.pull_request_name,
            author_id=row.author_id,
            status=domain.PRStatus(row.status),
            assigned_reviewers=list(reviewers),
            created_at=row.created_at,
            merged_at=row.merged_at,
        )
