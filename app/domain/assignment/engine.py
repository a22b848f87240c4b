"""Алгоритмы назначения и переназначения ревьюверов.

Модуль не обращается к БД: на вход получает доменные сущности, на выходе
отдаёт новые списки ревьюверов или план изменений. Вся запись выполняется
сервисами после того, как план построен целиком.
"""

from dataclasses import dataclass
from typing import Iterable

from app.core.exceptions import NoCandidateException, NotFoundException
from app.domain.assignment.picker import ReviewerPicker
from app.domain.models import PullRequest, Team, User

DEFAULT_REVIEWERS_PER_PR = 2


@dataclass
class PRUpdate:
    """Новый список ревьюверов для одного PR."""

    pull_request_id: str
    reviewers: list[str]


def build_candidate_ids(members: Iterable[User], exclude: set[str]) -> list[str]:
    """ID участников, не попавших в exclude, в исходном порядке."""
    return [m.user_id for m in members if m.user_id not in exclude]


def select_initial_reviewers(
    members: Iterable[User],
    author_id: str,
    picker: ReviewerPicker,
    limit: int = DEFAULT_REVIEWERS_PER_PR,
) -> list[str]:
    """Выбрать до `limit` ревьюверов из активных участников команды автора.

    Нехватка кандидатов не ошибка: вернётся столько, сколько есть.
    """
    candidates = build_candidate_ids((m for m in members if m.is_active), {author_id})
    return picker.pick_many(candidates, limit)


def is_reviewer_assigned(pr: PullRequest, user_id: str) -> bool:
    return user_id in pr.assigned_reviewers


def replace_reviewer(reviewers: list[str], old_id: str, new_id: str) -> list[str]:
    """Заменить old_id на new_id на той же позиции. Исходный список не меняется."""
    result = list(reviewers)
    for i, reviewer_id in enumerate(result):
        if reviewer_id == old_id:
            result[i] = new_id
            break
    return result


def choose_replacement(
    pr: PullRequest,
    members: Iterable[User],
    picker: ReviewerPicker,
) -> str:
    """Выбрать замену ревьюверу PR среди активных участников его команды.

    Исключаются автор и все текущие ревьюверы, включая заменяемого.
    """
    exclude = {pr.author_id, *pr.assigned_reviewers}
    candidates = build_candidate_ids((m for m in members if m.is_active), exclude)
    if not candidates:
        raise NoCandidateException()
    return picker.pick_one(candidates)


def validate_users_in_team(team: Team, user_ids: Iterable[str]) -> None:
    """Проверить, что все user_ids состоят в команде (активные или нет)."""
    member_ids = team.member_ids()
    for user_id in user_ids:
        if user_id not in member_ids:
            raise NotFoundException(message="user not found in team")


def prepare_deactivation_targets(
    active_members: Iterable[User], user_ids: Iterable[str]
) -> tuple[list[str], list[str]]:
    """Разделить активных участников на деактивируемых и пул замен.

    Уже неактивные пользователи из user_ids в результат не попадают.
    """
    requested = set(user_ids)
    to_deactivate: list[str] = []
    candidate_pool: list[str] = []
    for member in active_members:
        if not member.is_active:
            continue
        if member.user_id in requested:
            to_deactivate.append(member.user_id)
        else:
            candidate_pool.append(member.user_id)
    return to_deactivate, candidate_pool


def plan_pr_updates(
    prs: Iterable[PullRequest],
    candidate_pool: list[str],
    to_deactivate: Iterable[str],
    picker: ReviewerPicker,
) -> list[PRUpdate]:
    """Построить новые списки ревьюверов для всех затронутых PR.

    Для каждого PR исключаются автор, текущие ревьюверы и уже выбранные
    замены, так что два слота одного PR не получат одного человека. Если
    хотя бы один слот заполнить нельзя, весь план отклоняется с NO_CANDIDATE
    до какой-либо записи.
    """
    disabled = set(to_deactivate)
    updates: list[PRUpdate] = []

    for pr in prs:
        if not pr.assigned_reviewers:
            continue

        exclude = {pr.author_id, *pr.assigned_reviewers}
        new_reviewers = list(pr.assigned_reviewers)

        for i, reviewer_id in enumerate(pr.assigned_reviewers):
            if reviewer_id not in disabled:
                continue

            candidates = [c for c in candidate_pool if c not in exclude]
            if not candidates:
                raise NoCandidateException()

            chosen = picker.pick_one(candidates)
            new_reviewers[i] = chosen
            exclude.add(chosen)

        updates.append(PRUpdate(pull_request_id=pr.pull_request_id, reviewers=new_reviewers))

    return updates
