"""Базовый класс для сервисов."""

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.transaction import Transactor
from app.db.repositories.pr_repository import PRRepository
from app.db.repositories.team_repository import TeamRepository
from app.db.repositories.user_repository import UserRepository
from app.domain.assignment.picker import ReviewerPicker


class BaseService:
    """Базовый класс для всех сервисов.

    Сервис не хранит состояние команд и PR между вызовами: всё читается
    из БД заново, а запись идёт через Transactor.
    """

    def __init__(self, session: AsyncSession, picker: ReviewerPicker | None = None):
        self.session = session
        self.transactor = Transactor(session)
        self.picker = picker or ReviewerPicker()
        self.team_repo = TeamRepository(session)
        self.user_repo = UserRepository(session)
        self.pr_repo = PRRepository(session)
        self.reviewers_per_pr = settings.REVIEWERS_PER_PR
