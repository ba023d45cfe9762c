"""Team API endpoints."""
from datetime import datetime
from typing import Optional
from fastapi import APIRouter, Depends, Query
from pydantic import Field, field_validator
from sqlalchemy.ext.asyncio import AsyncSession

from courtside.api.base import CamelModel, ok
from courtside.core.auth import require_roles
from courtside.database import get_db
from courtside.models import User
from courtside.services import TeamService
from courtside.services.serializers import team_to_dict

router = APIRouter()

manager = require_roles("admin", "coach")


# ============ Pydantic Models ============

class TeamColors(CamelModel):
    primary: Optional[str] = Field(default=None, max_length=20)
    secondary: Optional[str] = Field(default=None, max_length=20)


class TeamRecord(CamelModel):
    wins: Optional[int] = Field(default=None, ge=0)
    losses: Optional[int] = Field(default=None, ge=0)


class TeamFields(CamelModel):
    description: Optional[str] = Field(default=None, max_length=500)
    founded_year: Optional[int] = Field(default=None, ge=1800)
    home_venue: Optional[str] = Field(default=None, max_length=100)
    colors: Optional[TeamColors] = None
    logo: Optional[str] = Field(default=None, max_length=255)
    coach: Optional[int] = None
    
    @field_validator("founded_year")
    @classmethod
    def not_in_future(cls, value):
        if value is not None and value > datetime.now().year:
            raise ValueError("Founded year cannot be in the future")
        return value
    
    def to_columns(self) -> dict:
        data = self.changes()
        colors = data.pop("colors", None) or {}
        if "primary" in colors:
            data["primary_color"] = colors["primary"]
        if "secondary" in colors:
            data["secondary_color"] = colors["secondary"]
        if "coach" in data:
            data["coach_id"] = data.pop("coach")
        record = data.pop("stats", None) or {}
        data.update(record)
        return data


class TeamCreate(TeamFields):
    name: str = Field(..., min_length=1, max_length=50)


class TeamUpdate(TeamFields):
    name: Optional[str] = Field(default=None, min_length=1, max_length=50)
    is_active: Optional[bool] = None
    stats: Optional[TeamRecord] = None


class AddPlayerRequest(CamelModel):
    player_id: int


# ============ Endpoints ============

@router.get("")
async def list_teams(
    coach: Optional[int] = Query(default=None),
    is_active: Optional[bool] = Query(default=None, alias="isActive"),
    db: AsyncSession = Depends(get_db),
):
    """List teams, optionally filtered by coach id or active flag."""
    teams = await TeamService.list_teams(db, coach_id=coach, is_active=is_active)
    return ok([team_to_dict(t) for t in teams], count=len(teams))


@router.get("/{team_id}")
async def get_team(team_id: int, db: AsyncSession = Depends(get_db)):
    """Get team by ID, with its roster."""
    team = await TeamService.require_team(db, team_id)
    return ok(team_to_dict(team))


@router.post("", status_code=201)
async def create_team(
    body: TeamCreate,
    user: User = Depends(manager),
    db: AsyncSession = Depends(get_db),
):
    """
    Create a team.
    
    Coaches always coach the teams they create; admins must pass `coach`.
    """
    team = await TeamService.create_team(db, user, body.to_columns())
    return ok(team_to_dict(team))


@router.put("/{team_id}")
async def update_team(
    team_id: int,
    body: TeamUpdate,
    user: User = Depends(manager),
    db: AsyncSession = Depends(get_db),
):
    """Update a team. Only its coach or an admin."""
    team = await TeamService.update_team(db, user, team_id, body.to_columns())
    return ok(team_to_dict(team))


@router.post("/{team_id}/players")
async def add_player_to_team(
    team_id: int,
    body: AddPlayerRequest,
    user: User = Depends(manager),
    db: AsyncSession = Depends(get_db),
):
    """Move a player onto this team."""
    team = await TeamService.add_player(db, user, team_id, body.player_id)
    return ok(team_to_dict(team))


@router.delete("/{team_id}/players/{player_id}")
async def remove_player_from_team(
    team_id: int,
    player_id: int,
    user: User = Depends(manager),
    db: AsyncSession = Depends(get_db),
):
    """Take a player off this team."""
    team = await TeamService.remove_player(db, user, team_id, player_id)
    return ok(team_to_dict(team))


@router.delete("/{team_id}")
async def delete_team(
    team_id: int,
    user: User = Depends(manager),
    db: AsyncSession = Depends(get_db),
):
    """Delete a team and clear its players' and users' team references."""
    await TeamService.delete_team(db, user, team_id)
    return ok(message="Team deleted successfully")
