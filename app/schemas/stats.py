"""Схемы для статистики."""

from pydantic import BaseModel

from app.domain.models import Stats


class UserAssignmentsStatSchema(BaseModel):
    """Количество назначений на ревью у пользователя."""

    user_id: str
    review_assignments_count: int


class PRStatusCountsSchema(BaseModel):
    """Количество PR по статусам."""

    open: int
    merged: int
    total: int


class StatsResponse(BaseModel):
    """Ответ со статистикой."""

    assignments_by_user: list[UserAssignmentsStatSchema]
    pr_status_counts: PRStatusCountsSchema

    @classmethod
    def from_domain(cls, stats: Stats) -> "StatsResponse":
        return cls(
            assignments_by_user=[
                UserAssignmentsStatSchema(
                    user_id=s.user_id, review_assignments_count=s.review_assignments_count
                )
                for s in stats.assignments_by_user
            ],
            pr_status_counts=PRStatusCountsSchema(
                open=stats.pr_status_counts.open,
                merged=stats.pr_status_counts.merged,
                total=stats.pr_status_counts.total,
            ),
        )
