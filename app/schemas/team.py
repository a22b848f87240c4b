"""Схемы для команд."""

from pydantic import BaseModel, Field

from app.domain.models import Team, TeamMember


class TeamMemberSchema(BaseModel):
    """Схема участника команды."""

    user_id: str = Field(min_length=1)
    username: str
    is_active: bool = True

    def to_domain(self) -> TeamMember:
        return TeamMember(user_id=self.user_id, username=self.username, is_active=self.is_active)


class TeamSchema(BaseModel):
    """Схема команды."""

    team_name: str
    members: list[TeamMemberSchema]

    @classmethod
    def from_domain(cls, team: Team) -> "TeamSchema":
        return cls(
            team_name=team.team_name,
            members=[
                TeamMemberSchema(user_id=m.user_id, username=m.username, is_active=m.is_active)
                for m in team.members
            ],
        )


class TeamResponse(BaseModel):
    """Ответ с командой."""

    team: TeamSchema


class CreateTeamRequest(BaseModel):
    """Запрос на создание команды."""

    team_name: str = Field(min_length=1)
    members: list[TeamMemberSchema] = Field(default_factory=list)


class DeactivateMembersRequest(BaseModel):
    """Запрос на деактивацию участников команды."""

    team_name: str = Field(min_length=1)
    user_ids: list[str] = Field(min_length=1)
