"""User accounts and credentials."""
import logging
from typing import Optional
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from courtside.models import User, Player, ROLES
from courtside.core.exceptions import ConflictError, NotAuthenticated, ValidationFailed
from courtside.core.security import hash_password, verify_password
from courtside.services.serializers import user_to_dict, team_summary

logger = logging.getLogger(__name__)


class UserService:
    """Service for user-related operations."""
    
    @staticmethod
    async def get_user_by_email(db: AsyncSession, email: str) -> Optional[User]:
        result = await db.execute(select(User).where(User.email == email.lower()))
        return result.scalar_one_or_none()
    
    @staticmethod
    async def create_user(
        db: AsyncSession,
        name: str,
        email: str,
        password: str,
        role: str = "player",
    ) -> User:
        if role not in ROLES:
            raise ValidationFailed(f"Role must be one of {', '.join(ROLES)}")
        
        if await UserService.get_user_by_email(db, email):
            raise ConflictError("User already exists")
        
        user = User(
            name=name,
            email=email.lower(),
            password_hash=hash_password(password),
            role=role,
        )
        db.add(user)
        try:
            await db.commit()
        except IntegrityError as e:
            await db.rollback()
            raise ConflictError("User already exists") from e
        await db.refresh(user)
        
        logger.info(f"Registered {role} account {user.email}")
        return user
    
    @staticmethod
    async def authenticate(db: AsyncSession, email: str, password: str) -> User:
        user = await UserService.get_user_by_email(db, email)
        if not user or not verify_password(password, user.password_hash):
            raise NotAuthenticated("Invalid credentials")
        return user
    
    @staticmethod
    async def get_profile(db: AsyncSession, user_id: int) -> dict:
        """Account details plus managed teams (coaches) and player profile."""
        result = await db.execute(
            select(User)
            .options(selectinload(User.managed_teams))
            .where(User.id == user_id)
            .execution_options(populate_existing=True)
        )
        user = result.scalar_one()
        
        profile = user_to_dict(user)
        profile["managedTeams"] = [team_summary(t) for t in user.managed_teams]
        
        if user.player_profile_id is not None:
            result = await db.execute(
                select(Player).options(selectinload(Player.team)).where(Player.id == user.player_profile_id)
            )
            player = result.scalar_one_or_none()
            if player:
                profile["playerProfile"] = {
                    "id": player.id,
                    "name": player.name,
                    "position": player.position,
                    "jerseyNumber": player.jersey_number,
                    "team": team_summary(player.team),
                }
        return profile
