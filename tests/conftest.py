"""Конфигурация тестов."""

import random

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.core.database import Base
from app.db.models import Team, User
from app.db.repositories.pr_repository import PRRepository
from app.domain.assignment.picker import ReviewerPicker
from app.domain.models import PRStatus, PullRequest


class FirstPicker(ReviewerPicker):
    """Детерминированный выбор: всегда первые кандидаты по порядку."""

    def pick_many(self, ids, n):
        return list(ids)[:n]

    def pick_one(self, ids):
        return ids[0]


@pytest.fixture(scope="function")
async def test_db():
    """Создать тестовую БД в памяти."""

    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    async_session_maker = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_session_maker

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture(scope="function")
async def session(test_db):
    """Создать сессию БД для теста."""
    async with test_db() as session:
        yield session


@pytest.fixture
def first_picker():
    return FirstPicker()


@pytest.fixture
def seeded_picker():
    return ReviewerPicker(random.Random(42))


async def add_team(session, team_name: str, members: list[tuple[str, str, bool]]):
    """Добавить команду напрямую в БД: members = [(user_id, username, is_active)]."""
    session.add(Team(team_name=team_name))
    await session.flush()
    for user_id, username, is_active in members:
        session.add(
            User(user_id=user_id, username=username, team_name=team_name, is_active=is_active)
        )
    await session.commit()


async def add_pr(
    session,
    pr_id: str,
    author_id: str,
    reviewers: list[str],
    status: PRStatus = PRStatus.OPEN,
):
    """Добавить PR с заданным порядком ревьюверов напрямую в БД."""
    repo = PRRepository(session)
    await repo.create_pr(
        PullRequest(
            pull_request_id=pr_id,
            pull_request_name=f"PR {pr_id}",
            author_id=author_id,
            status=status,
        )
    )
    await repo.set_pr_reviewers(pr_id, reviewers)
    await session.commit()


@pytest.fixture
async def sample_team(session):
    """Создать тестовую команду из четырёх активных участников."""
    await add_team(
        session,
        "backend",
        [
            ("u1", "Alice", True),
            ("u2", "Bob", True),
            ("u3", "Charlie", True),
            ("u4", "Dave", True),
        ],
    )
    return "backend"


@pytest.fixture
def make_team(session):
    """Фабрика команд для теста."""

    async def factory(team_name: str, members: list[tuple[str, str, bool]]):
        await add_team(session, team_name, members)
        return team_name

    return factory


@pytest.fixture
def make_pr(session):
    """Фабрика PR с фиксированными ревьюверами для теста."""

    async def factory(pr_id, author_id, reviewers, status=PRStatus.OPEN):
        await add_pr(session, pr_id, author_id, reviewers, status)
        return pr_id

    return factory
