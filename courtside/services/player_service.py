"""Player service."""
import logging
from typing import Optional
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from courtside.models import Player, Team, User
from courtside.core.auth import ensure_team_manager
from courtside.core.exceptions import ConflictError, NotFoundError, ValidationFailed
from courtside.services.roster_service import RosterService, relationship_edit, JERSEY_TAKEN

logger = logging.getLogger(__name__)

PLAYER_OPTIONS = (selectinload(Player.team), selectinload(Player.user))


class PlayerService:
    """Service for player-related operations."""
    
    @staticmethod
    async def list_players(
        db: AsyncSession,
        team_id: Optional[int] = None,
        position: Optional[str] = None,
        is_active: Optional[bool] = None,
        search: Optional[str] = None,
    ) -> list[Player]:
        query = select(Player).options(*PLAYER_OPTIONS)
        
        if team_id is not None:
            query = query.where(Player.team_id == team_id)
        if position:
            query = query.where(Player.position == position.upper())
        if is_active is not None:
            query = query.where(Player.is_active == is_active)
        if search:
            query = query.where(Player.name.ilike(f"%{search}%"))
        
        result = await db.execute(query.order_by(Player.name))
        return list(result.scalars().all())
    
    @staticmethod
    async def get_player(db: AsyncSession, player_id: int) -> Optional[Player]:
        result = await db.execute(
            select(Player)
            .options(*PLAYER_OPTIONS)
            .where(Player.id == player_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()
    
    @staticmethod
    async def require_player(db: AsyncSession, player_id: int) -> Player:
        player = await PlayerService.get_player(db, player_id)
        if not player:
            raise NotFoundError("Player not found")
        return player
    
    @staticmethod
    async def create_player(db: AsyncSession, acting_user: User, data: dict) -> Player:
        """
        Create a player profile for a player-role user and put it on a team.
        
        Checks run in order: linked user, team, the acting coach's ownership of
        that team, one profile per user, then the jersey number.
        """
        user_id = data.pop("user_id")
        team_id = data.pop("team_id")
        
        linked_user = await db.get(User, user_id)
        if not linked_user or linked_user.role != "player":
            raise ValidationFailed("User must exist and have player role")
        
        team = await db.get(Team, team_id)
        if not team:
            raise ValidationFailed("Team not found")
        
        ensure_team_manager(acting_user, team, "add players to this team")
        
        existing = await db.execute(select(Player.id).where(Player.user_id == user_id))
        if existing.first() is not None:
            raise ConflictError("User already has a player profile")
        
        player = Player(user_id=user_id, **data)
        await RosterService.enroll(db, player, team)
        return await PlayerService.get_player(db, player.id)
    
    @staticmethod
    async def update_player(db: AsyncSession, acting_user: User, player_id: int, changes: dict) -> Player:
        player = await PlayerService.require_player(db, player_id)
        ensure_team_manager(acting_user, player.team, "update this player")
        
        target_team_id = changes.pop("team_id", player.team_id)
        target_team = None
        if target_team_id != player.team_id:
            target_team = await db.get(Team, target_team_id)
            if not target_team:
                raise ValidationFailed("Team not found")
            ensure_team_manager(acting_user, target_team, "move players to this team")
        
        jersey = changes.get("jersey_number", player.jersey_number)
        if target_team is None and player.team_id is not None and jersey != player.jersey_number:
            if await RosterService.jersey_taken(db, player.team_id, jersey, exclude_player_id=player.id):
                raise ConflictError(JERSEY_TAKEN)
        
        async with relationship_edit(db, JERSEY_TAKEN):
            for field, value in changes.items():
                setattr(player, field, value)
            if target_team is not None:
                await RosterService.stage_assign(db, player, target_team)
        
        return await PlayerService.get_player(db, player.id)
    
    @staticmethod
    async def delete_player(db: AsyncSession, acting_user: User, player_id: int) -> None:
        player = await PlayerService.require_player(db, player_id)
        ensure_team_manager(acting_user, player.team, "delete this player")
        await RosterService.remove(db, player)
