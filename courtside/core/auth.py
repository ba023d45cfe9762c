"""Authentication and authorization gates.

``get_current_user`` resolves the bearer token to a user (401 otherwise),
``require_roles`` gates a route by role (403), and the ``ensure_*`` helpers run
the resource-level ownership checks inside handlers once the target is loaded.
"""
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession

from courtside.database import get_db
from courtside.models import User, Team, Game
from courtside.core.exceptions import NotAuthenticated, ForbiddenError
from courtside.core.security import decode_access_token

bearer_scheme = HTTPBearer(auto_error=False)


def token_from_header(authorization: Optional[str]) -> Optional[str]:
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token:
        return None
    return token.strip()


async def authenticate_token(db: AsyncSession, token: Optional[str]) -> User:
    """Resolve an access token to its user. Shared by HTTP and WebSocket."""
    if not token:
        raise NotAuthenticated("No token provided")
    
    payload = decode_access_token(token)
    user = await db.get(User, int(payload["sub"]))
    if not user:
        raise NotAuthenticated("User not found")
    return user


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: AsyncSession = Depends(get_db),
) -> User:
    token = credentials.credentials if credentials else None
    return await authenticate_token(db, token)


def require_roles(*roles: str):
    """Dependency factory: the acting user must hold one of ``roles``."""
    
    async def dependency(user: User = Depends(get_current_user)) -> User:
        if user.role not in roles:
            raise ForbiddenError(f"User role {user.role} is not authorized to access this route")
        return user
    
    return dependency


def can_manage_team(user: User, team: Optional[Team]) -> bool:
    if user.role == "admin":
        return True
    return team is not None and user.role == "coach" and team.coach_id == user.id


def ensure_team_manager(user: User, team: Optional[Team], action: str = "manage this team") -> None:
    if not can_manage_team(user, team):
        raise ForbiddenError(f"Not authorized to {action}")


def ensure_game_manager(user: User, game: Game, action: str = "manage this game") -> None:
    """Admins, or the coach of either team playing in the game."""
    if user.role == "admin":
        return
    coached = {game.home_team.coach_id, game.away_team.coach_id}
    if user.role != "coach" or user.id not in coached:
        raise ForbiddenError(f"Not authorized to {action}")
