"""Auth API endpoints."""
from typing import Literal
from fastapi import APIRouter, Depends, Request
from pydantic import EmailStr, Field
from sqlalchemy.ext.asyncio import AsyncSession

from courtside.api.base import CamelModel, ok
from courtside.config import get_settings
from courtside.core.auth import get_current_user
from courtside.core.limiter import limiter
from courtside.core.security import create_access_token
from courtside.database import get_db
from courtside.models import User
from courtside.services import UserService
from courtside.services.serializers import user_to_dict

router = APIRouter()
settings = get_settings()


# ============ Pydantic Models ============

class RegisterRequest(CamelModel):
    name: str = Field(..., min_length=1, max_length=50)
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=72)
    # Admin accounts come from scripts/create_admin.py
    role: Literal["player", "coach"] = "player"


class LoginRequest(CamelModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


def token_response(user: User) -> dict:
    return {"token": create_access_token(user.id, user.role), "user": user_to_dict(user)}


# ============ Endpoints ============

@router.post("/register", status_code=201)
@limiter.limit(settings.auth_rate_limit)
async def register(request: Request, body: RegisterRequest, db: AsyncSession = Depends(get_db)):
    """Create an account and return an access token."""
    user = await UserService.create_user(
        db,
        name=body.name,
        email=body.email,
        password=body.password,
        role=body.role,
    )
    return ok(token_response(user))


@router.post("/login")
@limiter.limit(settings.auth_rate_limit)
async def login(request: Request, body: LoginRequest, db: AsyncSession = Depends(get_db)):
    """Exchange email and password for an access token."""
    user = await UserService.authenticate(db, body.email, body.password)
    return ok(token_response(user))


@router.get("/me")
async def me(user: User = Depends(get_current_user), db: AsyncSession = Depends(get_db)):
    """The acting user, with managed teams or player profile."""
    return ok(await UserService.get_profile(db, user.id))
