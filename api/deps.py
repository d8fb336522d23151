"""
api/deps.py — Request Dependencies
====================================
Resolves the signed-in user behind a request:

    Authorization: Bearer <token> → verify → citizen_id → citizen row → role

Usage in any route:
    async def my_endpoint(user: CurrentUser = Depends(get_current_user)): ...
    async def staff_only(user: CurrentUser = Depends(require_roles(Role.EMPLOYEE))): ...
"""

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from core.crypto import crypto_engine
from core.roles import Role, require_role
from db.session import get_db
from modules.accounts import CurrentUser, resolve_user

bearer_scheme = HTTPBearer(auto_error=False)

# Aadhar ID: exactly twelve ASCII digits
AADHAR_PATTERN = r"^[0-9]{12}$"


def _unauthorized(detail: str = "Not signed in") -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme),
    db: AsyncSession = Depends(get_db),
) -> CurrentUser:
    if credentials is None:
        raise _unauthorized()

    subject = crypto_engine.token_subject(credentials.credentials)
    try:
        citizen_id = int(subject)
    except (TypeError, ValueError):
        raise _unauthorized("Invalid or expired session")

    user = await resolve_user(db, citizen_id)
    if not user:
        raise _unauthorized("User not found")
    return user


def require_roles(*allowed: Role):
    """Dependency factory: the current user, provided their role is in `allowed`."""

    async def dependency(user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
        require_role(user.citizen_id, user.role, allowed)
        return user

    return dependency
