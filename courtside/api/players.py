"""Player API endpoints."""
from typing import Literal, Optional
from fastapi import APIRouter, Depends, Query
from pydantic import Field
from sqlalchemy.ext.asyncio import AsyncSession

from courtside.api.base import CamelModel, ok
from courtside.core.auth import require_roles
from courtside.database import get_db
from courtside.models import User
from courtside.services import PlayerService
from courtside.services.serializers import player_to_dict

router = APIRouter()

manager = require_roles("admin", "coach")

Position = Literal["PG", "SG", "SF", "PF", "C"]


# ============ Pydantic Models ============

class PlayerAverages(CamelModel):
    points_per_game: Optional[float] = Field(default=None, ge=0)
    rebounds_per_game: Optional[float] = Field(default=None, ge=0)
    assists_per_game: Optional[float] = Field(default=None, ge=0)
    steals_per_game: Optional[float] = Field(default=None, ge=0)
    blocks_per_game: Optional[float] = Field(default=None, ge=0)


class PlayerFields(CamelModel):
    stats: Optional[PlayerAverages] = None
    is_active: Optional[bool] = None
    
    def to_columns(self) -> dict:
        data = self.changes()
        data.update(data.pop("stats", None) or {})
        if "user" in data:
            data["user_id"] = data.pop("user")
        if "team" in data:
            data["team_id"] = data.pop("team")
        return data


class PlayerCreate(PlayerFields):
    name: str = Field(..., min_length=1, max_length=50)
    user: int
    team: int
    position: Position
    jersey_number: int = Field(..., ge=0, le=99)
    height: str = Field(..., min_length=1, max_length=10)
    weight: int = Field(..., ge=100, le=400)
    age: int = Field(..., ge=16, le=50)


class PlayerUpdate(PlayerFields):
    name: Optional[str] = Field(default=None, min_length=1, max_length=50)
    team: Optional[int] = None
    position: Optional[Position] = None
    jersey_number: Optional[int] = Field(default=None, ge=0, le=99)
    height: Optional[str] = Field(default=None, min_length=1, max_length=10)
    weight: Optional[int] = Field(default=None, ge=100, le=400)
    age: Optional[int] = Field(default=None, ge=16, le=50)


# ============ Endpoints ============

@router.get("")
async def list_players(
    team: Optional[int] = Query(default=None),
    position: Optional[str] = Query(default=None),
    is_active: Optional[bool] = Query(default=None, alias="isActive"),
    search: Optional[str] = Query(default=None, min_length=1),
    db: AsyncSession = Depends(get_db),
):
    """
    List players sorted by name.
    
    - **team**: team id
    - **position**: PG, SG, SF, PF or C
    - **isActive**: true/false
    - **search**: substring of the player's name
    """
    players = await PlayerService.list_players(
        db,
        team_id=team,
        position=position,
        is_active=is_active,
        search=search,
    )
    return ok([player_to_dict(p) for p in players], count=len(players))


@router.get("/{player_id}")
async def get_player(player_id: int, db: AsyncSession = Depends(get_db)):
    """Get player by ID."""
    player = await PlayerService.require_player(db, player_id)
    return ok(player_to_dict(player))


@router.post("", status_code=201)
async def create_player(
    body: PlayerCreate,
    user: User = Depends(manager),
    db: AsyncSession = Depends(get_db),
):
    """Create a player profile for a player-role user and add it to a team."""
    player = await PlayerService.create_player(db, user, body.to_columns())
    return ok(player_to_dict(player))


@router.put("/{player_id}")
async def update_player(
    player_id: int,
    body: PlayerUpdate,
    user: User = Depends(manager),
    db: AsyncSession = Depends(get_db),
):
    """Update a player. Changing `team` moves the player between rosters."""
    player = await PlayerService.update_player(db, user, player_id, body.to_columns())
    return ok(player_to_dict(player))


@router.delete("/{player_id}")
async def delete_player(
    player_id: int,
    user: User = Depends(manager),
    db: AsyncSession = Depends(get_db),
):
    """Delete a player and clear the team and user references to it."""
    await PlayerService.delete_player(db, user, player_id)
    return ok(message="Player deleted successfully")
