"""Game API endpoints."""
from datetime import date, datetime
from typing import Annotated, Literal, Optional
from fastapi import APIRouter, Depends, Query
from pydantic import AfterValidator, Field
from sqlalchemy.ext.asyncio import AsyncSession

from courtside.api.base import CamelModel, naive_utc, ok
from courtside.core.auth import require_roles
from courtside.database import get_db
from courtside.models import User
from courtside.realtime.broadcaster import Broadcaster, get_broadcaster
from courtside.services import GameService
from courtside.services.serializers import game_to_dict

router = APIRouter()

manager = require_roles("admin", "coach")

GameStatus = Literal["scheduled", "in_progress", "completed", "cancelled"]
GameDate = Annotated[datetime, AfterValidator(naive_utc)]


# ============ Pydantic Models ============

class GameStatLine(CamelModel):
    player: Optional[int] = None
    points: int = Field(default=0, ge=0)
    rebounds: int = Field(default=0, ge=0)
    assists: int = Field(default=0, ge=0)
    steals: int = Field(default=0, ge=0)
    blocks: int = Field(default=0, ge=0)
    minutes_played: int = Field(default=0, ge=0)
    
    def to_columns(self) -> dict:
        data = self.model_dump()
        data["player_id"] = data.pop("player")
        return data


class GameFields(CamelModel):
    home_score: Optional[int] = Field(default=None, ge=0)
    away_score: Optional[int] = Field(default=None, ge=0)
    status: Optional[GameStatus] = None
    quarter: Optional[int] = Field(default=None, ge=1, le=4)
    time_remaining: Optional[str] = Field(default=None, max_length=10)
    venue: Optional[str] = Field(default=None, max_length=100)
    attendance: Optional[int] = Field(default=None, ge=0)
    game_stats: Optional[list[GameStatLine]] = None
    
    def to_columns(self) -> dict:
        data = self.changes()
        if "home_team" in data:
            data["home_team_id"] = data.pop("home_team")
        if "away_team" in data:
            data["away_team_id"] = data.pop("away_team")
        if self.game_stats is not None:
            data["game_stats"] = [line.to_columns() for line in self.game_stats]
        return data


class GameCreate(GameFields):
    home_team: int
    away_team: int
    game_date: GameDate


class GameUpdate(GameFields):
    home_team: Optional[int] = None
    away_team: Optional[int] = None
    game_date: Optional[GameDate] = None


class ScoreUpdate(CamelModel):
    home_score: int = Field(..., ge=0)
    away_score: int = Field(..., ge=0)
    status: Optional[GameStatus] = None
    quarter: Optional[int] = Field(default=None, ge=1, le=4)
    time_remaining: Optional[str] = Field(default=None, max_length=10)


# ============ Endpoints ============

@router.get("")
async def list_games(
    status: Optional[GameStatus] = Query(default=None),
    team: Optional[str] = Query(default=None, min_length=1),
    on_date: Optional[date] = Query(default=None, alias="date"),
    date_from: Optional[date] = Query(default=None, alias="from"),
    date_to: Optional[date] = Query(default=None, alias="to"),
    db: AsyncSession = Depends(get_db),
):
    """
    List games by date.
    
    - **status**: scheduled, in_progress, completed or cancelled
    - **team**: team id or part of a team name (home or away)
    - **date**: YYYY-MM-DD, games on that day
    - **from** / **to**: YYYY-MM-DD, inclusive range
    """
    games = await GameService.list_games(
        db,
        status=status,
        team=team,
        on_date=on_date,
        date_from=date_from,
        date_to=date_to,
    )
    return ok([game_to_dict(g) for g in games], count=len(games))


@router.get("/{game_id}")
async def get_game(game_id: int, db: AsyncSession = Depends(get_db)):
    """Get game by ID, with box score lines."""
    game = await GameService.require_game(db, game_id)
    return ok(game_to_dict(game))


@router.post("", status_code=201)
async def create_game(
    body: GameCreate,
    user: User = Depends(manager),
    db: AsyncSession = Depends(get_db),
):
    """Schedule a game. Coaches may only schedule games for a team they coach."""
    game = await GameService.create_game(db, user, body.to_columns())
    return ok(game_to_dict(game))


@router.put("/{game_id}/score")
async def update_score(
    game_id: int,
    body: ScoreUpdate,
    user: User = Depends(manager),
    db: AsyncSession = Depends(get_db),
    broadcaster: Broadcaster = Depends(get_broadcaster),
):
    """
    Update the live score and push `gameUpdated` to everyone watching the game.
    
    Optional `status`, `quarter` and `timeRemaining` travel with the score.
    """
    data = await GameService.publish_score(db, broadcaster, user, game_id, body.changes())
    return ok(data)


@router.put("/{game_id}")
async def update_game(
    game_id: int,
    body: GameUpdate,
    user: User = Depends(manager),
    db: AsyncSession = Depends(get_db),
):
    """Update a game. `gameStats`, when sent, replaces the box score."""
    game = await GameService.update_game(db, user, game_id, body.to_columns())
    return ok(game_to_dict(game))


@router.delete("/{game_id}")
async def delete_game(
    game_id: int,
    user: User = Depends(manager),
    db: AsyncSession = Depends(get_db),
):
    """Delete a game. Only an admin or a coach of either team."""
    await GameService.delete_game(db, user, game_id)
    return ok(message="Game deleted successfully")
