"""
Auth endpoint — password login.

Flow:
  1) POST /auth/login {username, password}
  2) Server checks the bcrypt hash and returns a JWT access token
  3) Client sends `Authorization: Bearer <token>` on protected endpoints
"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from config import settings
from database import get_db
from domain.responses import StandardErrorResponse
from middleware.auth import issue_access_token
from middleware.rate_limit import rate_limit
from models import LoginRequest, TokenResponse
from services import auth_service

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/auth", tags=["auth"])


@router.post(
    "/login",
    response_model=TokenResponse,
    responses={401: {"model": StandardErrorResponse}, 429: {"model": StandardErrorResponse}},
)
async def login(
    request: LoginRequest,
    db: AsyncSession = Depends(get_db),
    _rate=Depends(rate_limit(
        max_requests=settings.login_rate_limit,
        window_seconds=settings.login_rate_window_seconds,
    )),
):
    user = await auth_service.authenticate(db, username=request.username, password=request.password)
    token = issue_access_token(user_id=user.id, username=user.email, role=user.role)
    logger.info(f"Issued access token for {user.email} (role={user.role})")

    return TokenResponse(
        accessToken=token,
        expiresInSeconds=settings.jwt_access_ttl_minutes * 60,
        role=user.role,
    )
