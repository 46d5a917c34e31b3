from __future__ import annotations
from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
import structlog
from scavenger.auth_deps import get_current_user
from scavenger.config import settings
from scavenger.db import get_session
from scavenger.models.user import User
from scavenger.schemas.auth import RegisterRequest, LoginRequest, UserPublic
from scavenger.security import hash_password, verify_password, make_access_token

router = APIRouter(prefix="/api/auth", tags=["auth"])
log = structlog.get_logger()

def _set_auth_cookie(response: Response, user: User) -> None:
    response.set_cookie(
        settings.auth_cookie_name,
        make_access_token(str(user.id)),
        max_age=settings.access_ttl_min * 60,
        httponly=True,
        samesite="lax",
        secure=settings.cookie_secure,
    )

@router.post("/register", status_code=201, response_model=UserPublic)
async def register(payload: RegisterRequest, response: Response, session: AsyncSession = Depends(get_session)):
    exists = await session.scalar(select(User).where(User.username == payload.username))
    if exists:
        raise HTTPException(status_code=409, detail="Username already exists")
    user = User(username=payload.username, password_hash=hash_password(payload.password), is_admin=False)
    session.add(user)
    try:
        await session.commit()
    except IntegrityError:
        await session.rollback()
        raise HTTPException(status_code=409, detail="Username already exists")
    await session.refresh(user)
    log.info("user_registered", user_id=user.id)
    _set_auth_cookie(response, user)
    return UserPublic.model_validate(user)

@router.post("/login", response_model=UserPublic)
async def login(payload: LoginRequest, response: Response, session: AsyncSession = Depends(get_session)):
    user = await session.scalar(select(User).where(User.username == payload.username))
    if not user or not verify_password(payload.password, user.password_hash):
        log.info("login_failed", username=payload.username)
        raise HTTPException(status_code=401, detail="Invalid credentials")
    _set_auth_cookie(response, user)
    return UserPublic.model_validate(user)

@router.post("/logout")
async def logout(response: Response):
    response.delete_cookie(settings.auth_cookie_name, httponly=True, samesite="lax", secure=settings.cookie_secure)
    return {"message": "Logged out successfully"}

@router.get("/me", response_model=UserPublic)
async def me(user: User = Depends(get_current_user)):
    return UserPublic.model_validate(user)
