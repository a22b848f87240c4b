"""API эндпоинты для Pull Request'ов."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.dependencies import get_picker, get_session
from app.domain.assignment.picker import ReviewerPicker
from app.domain.pull_requests.service import PullRequestService
from app.schemas.pr import (
    CreatePRRequest,
    MergePRRequest,
    PullRequestResponse,
    PullRequestSchema,
    ReassignRequest,
    ReassignResponse,
)

router = APIRouter(prefix="/pullRequest", tags=["PullRequests"])


@router.post("/create", response_model=PullRequestResponse, status_code=201)
async def create_pr(
    request: CreatePRRequest,
    session: AsyncSession = Depends(get_session),
    picker: ReviewerPicker = Depends(get_picker),
):
    """Создать PR и автоматически назначить до 2 ревьюверов из команды автора."""
    pr = await PullRequestService(session, picker).create_pr(
        request.pull_request_id, request.pull_request_name, request.author_id
    )
    return PullRequestResponse(pr=PullRequestSchema.from_domain(pr))


@router.post("/merge", response_model=PullRequestResponse)
async def merge_pr(
    request: MergePRRequest,
    session: AsyncSession = Depends(get_session),
):
    """Пометить PR как MERGED (идемпотентная операция)."""
    pr = await PullRequestService(session).merge_pr(request.pull_request_id)
    return PullRequestResponse(pr=PullRequestSchema.from_domain(pr))


@router.post("/reassign", response_model=ReassignResponse)
async def reassign_reviewer(
    request: ReassignRequest,
    session: AsyncSession = Depends(get_session),
    picker: ReviewerPicker = Depends(get_picker),
):
    """Переназначить конкретного ревьювера на другого из его команды."""
    pr, replaced_by = await PullRequestService(session, picker).reassign_reviewer(
        request.pull_request_id, request.old_user_id
    )
    return ReassignResponse(pr=PullRequestSchema.from_domain(pr), replaced_by=replaced_by)


@router.get("", response_model=PullRequestResponse)
async def get_pr(
    pr_id: str,
    session: AsyncSession = Depends(get_session),
):
    """Получить PR по идентификатору."""
    pr = await PullRequestService(session).get_pr(pr_id)
    return PullRequestResponse(pr=PullRequestSchema.from_domain(pr))
