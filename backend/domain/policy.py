"""
Authorization policy: which role may perform which operation.

allow() is a pure function so the rules can be tested without an HTTP
context. authorize() turns a denial into the right error: no principal is
an authentication problem (401), a principal with the wrong role is a
permission problem (403).
"""
import logging
from dataclasses import dataclass
from typing import Optional

from domain.enums import Operation, Role
from domain.errors import ForbiddenError, UnauthenticatedError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Principal:
    """Authenticated caller, as recovered from a verified access token."""
    user_id: int
    username: str
    role: Role

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN


# role=None stands for an anonymous caller
_POLICY: dict[Operation, frozenset] = {
    Operation.READ: frozenset({None, Role.CLIENT, Role.ADMIN}),
    Operation.INSERT: frozenset({Role.ADMIN}),
    Operation.UPDATE: frozenset({Role.ADMIN}),
    Operation.DELETE: frozenset({Role.ADMIN}),
    Operation.PLACE_ORDER: frozenset({Role.CLIENT}),
    Operation.READ_ORDER: frozenset({Role.CLIENT, Role.ADMIN}),
    Operation.READ_PROFILE: frozenset({Role.CLIENT, Role.ADMIN}),
}


def allow(role: Optional[Role], operation: Operation) -> bool:
    """Return True if `role` (None = anonymous) may perform `operation`."""
    return role in _POLICY.get(operation, frozenset())


def authorize(principal: Optional[Principal], operation: Operation) -> Optional[Principal]:
    """
    Enforce the policy for a resolved principal.

    Raises:
        UnauthenticatedError: operation needs a principal and there is none
        ForbiddenError: principal's role is not allowed
    """
    role = principal.role if principal else None
    if allow(role, operation):
        return principal
    if principal is None:
        raise UnauthenticatedError()
    logger.warning(f"Denied {operation.value} for {principal.username} (role={principal.role.value})")
    raise ForbiddenError(f"Role {principal.role.value} may not perform {operation.value}")


def ensure_self_or_admin(principal: Principal, owner_id: int) -> None:
    """Owner-or-admin check for per-user resources such as orders."""
    if principal.is_admin or principal.user_id == owner_id:
        return
    logger.warning(f"Denied access by {principal.username} to resource owned by user {owner_id}")
    raise ForbiddenError()
