"""SQLAlchemy модели базы данных."""

from datetime import datetime, timezone

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Table,
    UniqueConstraint,
)
from app.core.database import Base


def utcnow() -> datetime:
    """Текущее время в UTC без tzinfo (колонки хранят naive UTC)."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


pr_reviewers = Table(
    "pr_reviewers",
    Base.metadata,
    Column(
        "pr_id",
        String,
        ForeignKey("pull_requests.pull_request_id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "reviewer_id", String, ForeignKey("users.user_id", ondelete="CASCADE"), primary_key=True
    ),
    Column("position", Integer, nullable=False, default=0, comment="Слот ревьювера в PR"),
    Index("idx_pr_reviewers_reviewer", "reviewer_id"),
)


class Team(Base):
    """Модель команды."""

    __tablename__ = "teams"
    __table_args__ = (
        UniqueConstraint("team_name", name="uq_teams_team_name"),
        {"comment": "Команды"},
    )

    team_name = Column(String(255), primary_key=True, nullable=False, comment="Название команды")
    created_at = Column(DateTime, default=utcnow, nullable=False, comment="Дата создания")


class User(Base):
    """Модель пользователя."""

    __tablename__ = "users"
    __table_args__ = (
        UniqueConstraint("user_id", name="uq_users_user_id"),
        Index("idx_users_team_active", "team_name", "is_active"),
        {"comment": "Пользователи"},
    )

    user_id = Column(String(255), primary_key=True, nullable=False, comment="ID пользователя")
    username = Column(String(255), nullable=False, comment="Имя пользователя")
    team_name = Column(
        String(255),
        ForeignKey("teams.team_name", ondelete="CASCADE"),
        nullable=False,
        comment="Название команды",
    )
    is_active = Column(Boolean, default=True, nullable=False, comment="Флаг активности")


class PullRequest(Base):
    """Модель Pull Request."""

    __tablename__ = "pull_requests"
    __table_args__ = (
        UniqueConstraint("pull_request_id", name="uq_pull_requests_pr_id"),
        Index("idx_pr_author", "author_id"),
        Index("idx_pr_status", "status"),
        {"comment": "Pull Request'ы"},
    )

    pull_request_id = Column(String(255), primary_key=True, nullable=False, comment="ID PR")
    pull_request_name = Column(String(500), nullable=False, comment="Название PR")
    author_id = Column(
        String(255),
        ForeignKey("users.user_id", ondelete="CASCADE"),
        nullable=False,
        comment="ID автора",
    )
    status = Column(String(20), default="OPEN", nullable=False, comment="Статус: OPEN или MERGED")
    created_at = Column(DateTime, default=utcnow, nullable=False, comment="Дата создания")
    merged_at = Column(DateTime, nullable=True, comment="Дата merge")
