"""Тесты координатора транзакций."""

import pytest

from app.core.transaction import Transactor


@pytest.fixture
def commits(session, monkeypatch):
    """Считать вызовы commit у тестовой сессии."""
    calls = []
    original = session.commit

    async def spy():
        calls.append(True)
        await original()

    monkeypatch.setattr(session, "commit", spy)
    return calls


@pytest.mark.asyncio
async def test_commit_on_success(session, commits):
    async with Transactor(session).begin() as uow:
        await uow.teams.create_team("backend")

    assert commits == [True]
    assert not session.in_transaction()
    assert await uow.teams.exists("backend")


@pytest.mark.asyncio
async def test_rollback_on_error(session, commits):
    with pytest.raises(RuntimeError):
        async with Transactor(session).begin() as uow:
            await uow.teams.create_team("backend")
            raise RuntimeError("boom")

    assert commits == []
    assert not await uow.teams.exists("backend")


@pytest.mark.asyncio
async def test_nested_begin_reuses_open_transaction(session, commits):
    """Вложенный вызов с переданным UnitOfWork не фиксирует изменения сам."""
    transactor = Transactor(session)

    with pytest.raises(RuntimeError):
        async with transactor.begin() as outer:
            async with transactor.begin(outer) as inner:
                assert inner is outer
                await inner.teams.create_team("backend")
            assert commits == []
            assert session.in_transaction()
            raise RuntimeError("boom")

    assert commits == []
    assert not await outer.teams.exists("backend")


@pytest.mark.asyncio
async def test_with_tx_returns_result(session, commits):
    async def create(uow):
        await uow.teams.create_team("backend")
        return await uow.teams.get_team("backend")

    team = await Transactor(session).with_tx(create)

    assert team.team_name == "backend"
    assert team.members == []
    assert commits == [True]
