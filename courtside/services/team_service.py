"""Team service."""
import logging
from typing import Optional
from sqlalchemy import select, func, or_
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from courtside.models import Team, User, Player, Game
from courtside.core.auth import ensure_team_manager
from courtside.core.exceptions import ConflictError, NotFoundError, ValidationFailed
from courtside.services.roster_service import RosterService, relationship_edit

logger = logging.getLogger(__name__)

TEAM_OPTIONS = (selectinload(Team.coach), selectinload(Team.players))


class TeamService:
    """Service for team-related operations."""
    
    @staticmethod
    async def list_teams(
        db: AsyncSession,
        coach_id: Optional[int] = None,
        is_active: Optional[bool] = None,
    ) -> list[Team]:
        query = select(Team).options(*TEAM_OPTIONS)
        if coach_id is not None:
            query = query.where(Team.coach_id == coach_id)
        if is_active is not None:
            query = query.where(Team.is_active == is_active)
        
        result = await db.execute(query.order_by(Team.name))
        return list(result.scalars().all())
    
    @staticmethod
    async def get_team(db: AsyncSession, team_id: int) -> Optional[Team]:
        result = await db.execute(
            select(Team)
            .options(*TEAM_OPTIONS)
            .where(Team.id == team_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()
    
    @staticmethod
    async def require_team(db: AsyncSession, team_id: int) -> Team:
        team = await TeamService.get_team(db, team_id)
        if not team:
            raise NotFoundError("Team not found")
        return team
    
    @staticmethod
    async def _ensure_name_free(db: AsyncSession, name: str, exclude_team_id: Optional[int] = None) -> None:
        query = select(Team.id).where(Team.name == name)
        if exclude_team_id is not None:
            query = query.where(Team.id != exclude_team_id)
        result = await db.execute(query)
        if result.first() is not None:
            raise ConflictError("Team name already exists")
    
    @staticmethod
    async def _resolve_coach(db: AsyncSession, coach_id: Optional[int]) -> User:
        if coach_id is None:
            raise ValidationFailed("Coach must be specified")
        coach = await db.get(User, coach_id)
        if not coach or coach.role != "coach":
            raise ValidationFailed("Invalid coach specified")
        return coach
    
    @staticmethod
    async def create_team(db: AsyncSession, acting_user: User, data: dict) -> Team:
        """Coaches always create teams for themselves; admins must name a coach."""
        requested_coach = data.pop("coach_id", None)
        await TeamService._ensure_name_free(db, data["name"])
        
        coach_id = acting_user.id if acting_user.role == "coach" else requested_coach
        coach = await TeamService._resolve_coach(db, coach_id)
        
        team = Team(coach_id=coach.id, **data)
        async with relationship_edit(db, "Team name already exists"):
            db.add(team)
        
        logger.info(f"Created team {team.id} ({team.name}) coached by {coach.id}")
        return await TeamService.get_team(db, team.id)
    
    @staticmethod
    async def update_team(db: AsyncSession, acting_user: User, team_id: int, changes: dict) -> Team:
        team = await TeamService.require_team(db, team_id)
        ensure_team_manager(acting_user, team, "update this team")
        
        if "name" in changes and changes["name"] != team.name:
            await TeamService._ensure_name_free(db, changes["name"], exclude_team_id=team.id)
        
        if "coach_id" in changes and changes["coach_id"] != team.coach_id:
            if acting_user.role != "admin":
                raise ValidationFailed("Only an admin can reassign a team's coach")
            await TeamService._resolve_coach(db, changes["coach_id"])
        
        async with relationship_edit(db, "Team name already exists"):
            for field, value in changes.items():
                setattr(team, field, value)
        
        return await TeamService.get_team(db, team.id)
    
    @staticmethod
    async def delete_team(db: AsyncSession, acting_user: User, team_id: int) -> None:
        team = await TeamService.require_team(db, team_id)
        ensure_team_manager(acting_user, team, "delete this team")
        
        games = await db.scalar(
            select(func.count(Game.id)).where(
                or_(Game.home_team_id == team.id, Game.away_team_id == team.id)
            )
        )
        if games:
            raise ConflictError("Team has games on record; delete those games first")
        
        await RosterService.dissolve_team(db, team)
    
    @staticmethod
    async def add_player(db: AsyncSession, acting_user: User, team_id: int, player_id: int) -> Team:
        team = await TeamService.require_team(db, team_id)
        ensure_team_manager(acting_user, team, "manage this team")
        
        player = await db.get(Player, player_id)
        if not player:
            raise NotFoundError("Player not found")
        if player.team_id == team.id:
            raise ConflictError("Player is already on this team")
        if player.team_id is not None:
            # Taking a player off a roster needs that roster's coach too
            current_team = await db.get(Team, player.team_id)
            ensure_team_manager(acting_user, current_team, "move this player")

        await RosterService.assign(db, player, team)
        return await TeamService.get_team(db, team.id)
    
    @staticmethod
    async def remove_player(db: AsyncSession, acting_user: User, team_id: int, player_id: int) -> Team:
        team = await TeamService.require_team(db, team_id)
        ensure_team_manager(acting_user, team, "manage this team")
        
        player = await db.get(Player, player_id)
        if not player or player.team_id != team.id:
            raise NotFoundError("Player not found on this team")
        
        await RosterService.release(db, player)
        return await TeamService.get_team(db, team.id)
