"""
Team / player / user back-reference maintenance.

A team's roster is the set of players whose ``team_id`` points at it, and each
player's user carries ``team_id`` / ``player_profile_id`` back-references.
Every public method here is one relationship edit: it stages its writes in a
fixed order (the player row, which carries team membership, then the linked
user's back-references) and commits them as a single transaction.

Partial failure: any error rolls the whole edit back, so an edit lands
completely or not at all. Edits are idempotent; re-running one against an
already consistent state writes the same values again.
"""
import logging
from contextlib import asynccontextmanager
from typing import Optional
from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from courtside.models import User, Team, Player, GameStat
from courtside.core.exceptions import ConflictError

logger = logging.getLogger(__name__)

JERSEY_TAKEN = "Jersey number already taken in this team"


@asynccontextmanager
async def relationship_edit(db: AsyncSession, conflict_message: str = "Duplicate value"):
    """Commit the staged writes once, or roll every one of them back."""
    try:
        yield
        await db.commit()
    except IntegrityError as e:
        await db.rollback()
        logger.warning(f"Relationship edit rejected by the database: {e.orig}")
        raise ConflictError(conflict_message) from e
    except Exception:
        await db.rollback()
        raise


class RosterService:
    """Keeps Team.players, Player.team and the user's references consistent."""
    
    @staticmethod
    async def jersey_taken(
        db: AsyncSession,
        team_id: int,
        jersey_number: int,
        exclude_player_id: Optional[int] = None,
    ) -> bool:
        query = select(Player.id).where(
            Player.team_id == team_id,
            Player.jersey_number == jersey_number,
        )
        if exclude_player_id is not None:
            query = query.where(Player.id != exclude_player_id)
        result = await db.execute(query)
        return result.first() is not None
    
    @staticmethod
    async def _link_user(db: AsyncSession, player: Player, team_id: Optional[int], keep_profile: bool = True) -> None:
        user = await db.get(User, player.user_id)
        if user is None:
            logger.warning(f"Player {player.id} has no linked user {player.user_id}")
            return
        user.team_id = team_id
        if keep_profile:
            user.player_profile_id = player.id
        elif user.player_profile_id == player.id:
            user.player_profile_id = None
    
    @staticmethod
    async def stage_assign(db: AsyncSession, player: Player, team: Team) -> None:
        """Stage a move of ``player`` onto ``team`` without committing."""
        if await RosterService.jersey_taken(db, team.id, player.jersey_number, exclude_player_id=player.id):
            raise ConflictError(JERSEY_TAKEN)
        player.team_id = team.id
        await RosterService._link_user(db, player, team.id)
    
    @staticmethod
    async def enroll(db: AsyncSession, player: Player, team: Team) -> Player:
        """Insert a new player on ``team`` and link the owning user to both."""
        async with relationship_edit(db, JERSEY_TAKEN):
            if await RosterService.jersey_taken(db, team.id, player.jersey_number):
                raise ConflictError(JERSEY_TAKEN)
            player.team_id = team.id
            db.add(player)
            await db.flush()
            await RosterService._link_user(db, player, team.id)
        logger.info(f"Enrolled player {player.id} on team {team.id}")
        return player
    
    @staticmethod
    async def assign(db: AsyncSession, player: Player, team: Team) -> None:
        async with relationship_edit(db, JERSEY_TAKEN):
            await RosterService.stage_assign(db, player, team)
        logger.info(f"Assigned player {player.id} to team {team.id}")
    
    @staticmethod
    async def release(db: AsyncSession, player: Player) -> None:
        """Take ``player`` off its team. The player keeps its profile."""
        async with relationship_edit(db):
            player.team_id = None
            await RosterService._link_user(db, player, None)
        logger.info(f"Released player {player.id}")
    
    @staticmethod
    async def remove(db: AsyncSession, player: Player) -> None:
        """Delete ``player`` and clear every reference to it."""
        player_id = player.id
        async with relationship_edit(db):
            player.team_id = None
            await RosterService._link_user(db, player, None, keep_profile=False)
            # Box score history outlives the player
            await db.execute(
                update(GameStat).where(GameStat.player_id == player_id).values(player_id=None)
            )
            await db.delete(player)
        logger.info(f"Removed player {player_id}")
    
    @staticmethod
    async def dissolve_team(db: AsyncSession, team: Team) -> None:
        """Delete ``team`` after detaching its players and their users."""
        team_id = team.id
        async with relationship_edit(db):
            await db.execute(update(Player).where(Player.team_id == team_id).values(team_id=None))
            await db.execute(update(User).where(User.team_id == team_id).values(team_id=None))
            await db.delete(team)
        logger.info(f"Dissolved team {team_id}")
