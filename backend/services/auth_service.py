"""
Auth service — password hashing and credential checks.
"""
import logging

import bcrypt
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from config import settings
from db_models import User
from domain.errors import NotFoundError, UnauthenticatedError

logger = logging.getLogger(__name__)


def hash_password(password: str, rounds: int | None = None) -> str:
    """Hash password using bcrypt."""
    salt = bcrypt.gensalt(rounds=rounds or settings.bcrypt_rounds)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, hashed: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError:
        # Stored value is not a bcrypt hash
        logger.error("Stored password hash is not a valid bcrypt hash")
        return False


async def get_user_by_email(db: AsyncSession, email: str) -> User | None:
    res = await db.execute(select(User).where(User.email == email))
    return res.scalar_one_or_none()


async def get_user(db: AsyncSession, user_id: int) -> User:
    user = await db.get(User, user_id)
    if not user:
        raise NotFoundError("User", user_id)
    return user


async def authenticate(db: AsyncSession, *, username: str, password: str) -> User:
    """
    Check credentials. Unknown user and wrong password are reported the same
    way so the endpoint does not reveal which accounts exist.
    """
    user = await get_user_by_email(db, username)
    if not user or not verify_password(password, user.password_hash):
        logger.warning(f"Failed login for {username}")
        raise UnauthenticatedError("Bad credentials.")
    return user
