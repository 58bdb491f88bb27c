"""
User endpoints.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from database import get_db
from deps import require
from domain.enums import Operation
from domain.policy import Principal
from models import UserResponse
from services import auth_service

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/me", response_model=UserResponse)
async def get_me(
    principal: Principal = Depends(require(Operation.READ_PROFILE)),
    db: AsyncSession = Depends(get_db),
):
    """Profile of the authenticated caller."""
    user = await auth_service.get_user(db, principal.user_id)
    return UserResponse.model_validate(user)
