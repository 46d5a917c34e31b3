from __future__ import annotations
from fastapi import Depends, HTTPException, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession
import jwt
from scavenger.config import settings
from scavenger.db import get_session
from scavenger.security import decode_token
from scavenger.models.user import User

security = HTTPBearer(auto_error=False)

def _token(request: Request, credentials: HTTPAuthorizationCredentials | None) -> str | None:
    # Browser clients carry the cookie; API clients may send a bearer header
    if credentials and credentials.credentials:
        return credentials.credentials
    return request.cookies.get(settings.auth_cookie_name)

async def _resolve_user(token: str, session: AsyncSession) -> User:
    try:
        data = decode_token(token)
    except jwt.PyJWTError:
        raise HTTPException(status_code=401, detail="Invalid token")
    if data.get("type") != "access":
        raise HTTPException(status_code=401, detail="Wrong token type")
    try:
        user_id = int(data.get("sub"))
    except (TypeError, ValueError):
        raise HTTPException(status_code=401, detail="Invalid token")
    user = await session.get(User, user_id)
    if not user:
        raise HTTPException(status_code=401, detail="User not found")
    return user

async def get_current_user(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    session: AsyncSession = Depends(get_session),
) -> User:
    token = _token(request, credentials)
    if not token:
        raise HTTPException(status_code=401, detail="Not authenticated")
    return await _resolve_user(token, session)

async def get_optional_user(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    session: AsyncSession = Depends(get_session),
) -> User | None:
    token = _token(request, credentials)
    if not token:
        return None
    try:
        return await _resolve_user(token, session)
    except HTTPException:
        return None

async def require_admin(user: User = Depends(get_current_user)) -> User:
    if not user.is_admin:
        raise HTTPException(status_code=403, detail="Forbidden: Admin access required")
    return user
