"""Доменные сущности сервиса.

Сущности не зависят ни от ORM, ни от HTTP: репозитории возвращают их,
сервисы и алгоритм назначения работают только с ними.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class PRStatus(str, Enum):
    """Статус Pull Request. Переход возможен только OPEN -> MERGED."""

    OPEN = "OPEN"
    MERGED = "MERGED"


@dataclass
class TeamMember:
    user_id: str
    username: str
    is_active: bool = True


@dataclass
class Team:
    team_name: str
    members: list[TeamMember] = field(default_factory=list)

    def member_ids(self) -> set[str]:
        return {m.user_id for m in self.members}


@dataclass
class User:
    user_id: str
    username: str
    team_name: str
    is_active: bool = True


@dataclass
class PullRequest:
    """Pull Request с упорядоченным списком ревьюверов.

    Порядок `assigned_reviewers` значим: переназначение сохраняет позицию
    заменённого ревьювера.
    """

    pull_request_id: str
    pull_request_name: str
    author_id: str
    status: PRStatus = PRStatus.OPEN
    assigned_reviewers: list[str] = field(default_factory=list)
    created_at: datetime | None = None
    merged_at: datetime | None = None

    @property
    def is_merged(self) -> bool:
        return self.status == PRStatus.MERGED


@dataclass
class PullRequestShort:
    pull_request_id: str
    pull_request_name: str
    author_id: str
    status: PRStatus


@dataclass
class UserAssignmentsStat:
    user_id: str
    review_assignments_count: int


@dataclass
class PRStatusCounts:
    open: int = 0
    merged: int = 0
    total: int = 0


@dataclass
class Stats:
    """Агрегированная статистика, вычисляется по запросу."""

    assignments_by_user: list[UserAssignmentsStat]
    pr_status_counts: PRStatusCounts
