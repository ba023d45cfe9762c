"""Game service: schedule, box scores and live score updates."""
import logging
from datetime import date, datetime, time, timedelta
from typing import Optional
from sqlalchemy import select, or_
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload, aliased

from courtside.models import Game, GameStat, Team, Player, User
from courtside.core.auth import ensure_game_manager
from courtside.core.exceptions import ForbiddenError, NotFoundError, ValidationFailed
from courtside.realtime.broadcaster import Broadcaster
from courtside.services.serializers import game_to_dict

logger = logging.getLogger(__name__)

GAME_OPTIONS = (
    selectinload(Game.home_team),
    selectinload(Game.away_team),
    selectinload(Game.game_stats).selectinload(GameStat.player),
)

GAME_UPDATED = "gameUpdated"


class GameService:
    """Service for game-related operations."""
    
    @staticmethod
    async def list_games(
        db: AsyncSession,
        status: Optional[str] = None,
        team: Optional[str] = None,
        on_date: Optional[date] = None,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
    ) -> list[Game]:
        """
        List games ordered by date.
        
        - **team**: a team id, or a case-insensitive substring of either team's name
        - **on_date**: games on that calendar day
        - **date_from** / **date_to**: inclusive day range
        """
        query = select(Game).options(*GAME_OPTIONS)
        
        if status:
            query = query.where(Game.status == status)
        
        if team:
            if team.isdecimal():
                team_id = int(team)
                query = query.where(or_(Game.home_team_id == team_id, Game.away_team_id == team_id))
            else:
                home, away = aliased(Team), aliased(Team)
                query = (
                    query.join(home, Game.home_team_id == home.id)
                    .join(away, Game.away_team_id == away.id)
                    .where(or_(home.name.ilike(f"%{team}%"), away.name.ilike(f"%{team}%")))
                )
        
        if on_date:
            start = datetime.combine(on_date, time.min)
            query = query.where(Game.game_date >= start, Game.game_date < start + timedelta(days=1))
        if date_from:
            query = query.where(Game.game_date >= datetime.combine(date_from, time.min))
        if date_to:
            query = query.where(Game.game_date < datetime.combine(date_to, time.min) + timedelta(days=1))
        
        result = await db.execute(query.order_by(Game.game_date, Game.id))
        return list(result.scalars().all())
    
    @staticmethod
    async def get_game(db: AsyncSession, game_id: int) -> Optional[Game]:
        result = await db.execute(
            select(Game)
            .options(*GAME_OPTIONS)
            .where(Game.id == game_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()
    
    @staticmethod
    async def require_game(db: AsyncSession, game_id: int) -> Game:
        game = await GameService.get_game(db, game_id)
        if not game:
            raise NotFoundError("Game not found")
        return game
    
    @staticmethod
    async def _resolve_teams(db: AsyncSession, acting_user: User, home_team_id: int, away_team_id: int) -> None:
        if home_team_id == away_team_id:
            raise ValidationFailed("Home and away teams must be different")
        
        home = await db.get(Team, home_team_id)
        if not home:
            raise ValidationFailed("Home team not found")
        away = await db.get(Team, away_team_id)
        if not away:
            raise ValidationFailed("Away team not found")
        
        if acting_user.role != "admin" and acting_user.id not in (home.coach_id, away.coach_id):
            raise ForbiddenError("Not authorized to schedule games for these teams")
    
    @staticmethod
    async def _build_stat_lines(db: AsyncSession, lines: list[dict]) -> list[GameStat]:
        player_ids = {line["player_id"] for line in lines if line.get("player_id") is not None}
        if player_ids:
            result = await db.execute(select(Player.id).where(Player.id.in_(player_ids)))
            missing = player_ids - set(result.scalars().all())
            if missing:
                raise ValidationFailed(
                    "Validation errors",
                    errors=[{"field": "gameStats", "message": f"Player {pid} not found"} for pid in sorted(missing)],
                )
        return [GameStat(**line) for line in lines]
    
    @staticmethod
    async def create_game(db: AsyncSession, acting_user: User, data: dict) -> Game:
        await GameService._resolve_teams(db, acting_user, data["home_team_id"], data["away_team_id"])
        
        lines = data.pop("game_stats", None) or []
        game = Game(**data)
        game.game_stats = await GameService._build_stat_lines(db, lines)
        db.add(game)
        await db.commit()
        
        logger.info(f"Scheduled game {game.id}: {game.away_team_id} @ {game.home_team_id}")
        return await GameService.get_game(db, game.id)
    
    @staticmethod
    async def update_game(db: AsyncSession, acting_user: User, game_id: int, changes: dict) -> Game:
        game = await GameService.require_game(db, game_id)
        ensure_game_manager(acting_user, game, "update this game")
        
        home_team_id = changes.get("home_team_id", game.home_team_id)
        away_team_id = changes.get("away_team_id", game.away_team_id)
        if (home_team_id, away_team_id) != game.team_ids():
            await GameService._resolve_teams(db, acting_user, home_team_id, away_team_id)
        
        lines = changes.pop("game_stats", None)
        if lines is not None:
            game.game_stats = await GameService._build_stat_lines(db, lines)
        
        for field, value in changes.items():
            setattr(game, field, value)
        await db.commit()
        
        return await GameService.get_game(db, game.id)
    
    @staticmethod
    async def update_score(db: AsyncSession, acting_user: User, game_id: int, score: dict) -> Game:
        """Persist a score/status change. ``score`` holds column names."""
        game = await GameService.require_game(db, game_id)
        ensure_game_manager(acting_user, game, "update this game's score")
        
        for field, value in score.items():
            setattr(game, field, value)
        await db.commit()
        
        logger.info(f"Game {game.id} score {game.home_score}-{game.away_score} by user {acting_user.id}")
        return await GameService.get_game(db, game.id)
    
    @staticmethod
    async def publish_score(
        db: AsyncSession,
        broadcaster: Broadcaster,
        acting_user: User,
        game_id: int,
        score: dict,
    ) -> dict:
        """
        Persist a score update, then broadcast the stored game to its room.
        
        Used by both the REST score route and the WebSocket ``updateGame``
        event. Updates to one game are serialized so every subscriber sees
        the broadcasts in the order the writes happened.
        """
        room = str(game_id)
        async with broadcaster.room_lock(room):
            game = await GameService.update_score(db, acting_user, game_id, score)
            data = game_to_dict(game)
            await broadcaster.broadcast(room, GAME_UPDATED, data)
        return data
    
    @staticmethod
    async def delete_game(db: AsyncSession, acting_user: User, game_id: int) -> None:
        game = await GameService.require_game(db, game_id)
        ensure_game_manager(acting_user, game, "delete this game")
        
        await db.delete(game)
        await db.commit()
        logger.info(f"Deleted game {game_id}")
