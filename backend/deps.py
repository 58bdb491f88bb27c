"""
Shared FastAPI dependencies.

Routers import from here: pagination parameters and the authorization
guard that combines token resolution (middleware/auth.py) with the role
policy (domain/policy.py).
"""

from __future__ import annotations

from typing import Optional, TypedDict

from fastapi import Depends, Query

from config import settings
from domain.enums import Operation
from domain.policy import Principal, authorize
from middleware.auth import get_optional_principal


class Pagination(TypedDict):
    page: int
    size: int


def pagination_params(
    page: int = Query(0, ge=0, le=100_000),
    size: int = Query(settings.default_page_size, ge=1, le=settings.max_page_size),
) -> Pagination:
    return {"page": page, "size": size}


def require(operation: Operation):
    """
    Dependency factory: resolve the caller and enforce the policy for
    `operation`. Yields the Principal (None only for anonymous-allowed ops).

    Sub-dependencies resolve before the body model is validated, so a
    denied caller gets 401/403 rather than 422.
    """
    async def _guard(
        principal: Optional[Principal] = Depends(get_optional_principal),
    ) -> Optional[Principal]:
        return authorize(principal, operation)

    return _guard
