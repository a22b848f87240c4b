"""Координатор транзакций.

Транзакция передаётся явно в виде объекта UnitOfWork. Если вызывающий код
уже держит UnitOfWork, вложенный вызов переиспользует его и не фиксирует и
не откатывает изменения сам: это делает только тот, кто транзакцию открыл.
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator, Awaitable, Callable, TypeVar

from sqlalchemy.ext.asyncio import AsyncSession

from app.db.repositories.pr_repository import PRRepository
from app.db.repositories.team_repository import TeamRepository
from app.db.repositories.user_repository import UserRepository

T = TypeVar("T")


class UnitOfWork:
    """Открытая транзакция и репозитории, работающие внутри неё."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.teams = TeamRepository(session)
        self.users = UserRepository(session)
        self.prs = PRRepository(session)


class Transactor:
    """Выполняет единицу работы атомарно."""

    def __init__(self, session: AsyncSession):
        self.session = session

    @asynccontextmanager
    async def begin(self, uow: UnitOfWork | None = None) -> AsyncIterator[UnitOfWork]:
        """Открыть транзакцию или переиспользовать уже открытую."""
        if uow is not None:
            yield uow
            return

        uow = UnitOfWork(self.session)
        try:
            yield uow
        except Exception:
            await self.session.rollback()
            raise
        await self.session.commit()

    async def with_tx(
        self,
        fn: Callable[[UnitOfWork], Awaitable[T]],
        uow: UnitOfWork | None = None,
    ) -> T:
        """Выполнить fn(uow) в транзакции и вернуть результат."""
        async with self.begin(uow) as tx:
            return await fn(tx)
