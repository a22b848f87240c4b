"""API эндпоинты для команд."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.dependencies import get_picker, get_session
from app.domain.assignment.picker import ReviewerPicker
from app.domain.teams.service import TeamService
from app.schemas.team import CreateTeamRequest, DeactivateMembersRequest, TeamResponse, TeamSchema

router = APIRouter(prefix="/team", tags=["Teams"])


@router.post("/add", response_model=TeamResponse, status_code=201)
async def create_team(
    request: CreateTeamRequest,
    session: AsyncSession = Depends(get_session),
):
    """Создать команду с участниками."""
    team = await TeamService(session).create_team(
        request.team_name, [m.to_domain() for m in request.members]
    )
    return TeamResponse(team=TeamSchema.from_domain(team))


@router.get("/get", response_model=TeamResponse)
async def get_team(
    team_name: str,
    session: AsyncSession = Depends(get_session),
):
    """Получить команду с участниками."""
    team = await TeamService(session).get_team(team_name)
    return TeamResponse(team=TeamSchema.from_domain(team))


@router.post("/deactivateMembers", response_model=TeamResponse)
async def deactivate_members(
    request: DeactivateMembersRequest,
    session: AsyncSession = Depends(get_session),
    picker: ReviewerPicker = Depends(get_picker),
):
    """Деактивировать участников команды и переназначить их открытые PR."""
    team = await TeamService(session, picker).deactivate_team_members(
        request.team_name, request.user_ids
    )
    return TeamResponse(team=TeamSchema.from_domain(team))
