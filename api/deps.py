"""FastAPI dependencies for authentication and database."""

from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

import config
from api.division import DivisionContext, require_active_admin
from api.errors import AuthenticationError, ErrorCode
from auth.admin_token import AdminTokenError, verify_admin_token
from auth.schemas import AdminTokenPayload
from db import get_db as get_db_session


async def get_db() -> AsyncSession:
    """
    Dependency to get database session.
    Reuses the get_db function from db.py.
    """
    async for session in get_db_session():
        yield session


def get_token_secret() -> str:
    """Dependency returning the server secret the admin tokens are signed with."""
    return config.settings.ADMIN_TOKEN_SECRET


async def get_admin_identity(
    x_admin_token: str | None = Header(None, alias="x-admin-token"),
    secret: str = Depends(get_token_secret),
) -> AdminTokenPayload:
    """
    Dependency to verify the admin token sent in the x-admin-token header.

    Returns:
        AdminTokenPayload: The verified token claims

    Raises:
        AuthenticationError: 401 if the header is missing or the token is rejected
    """
    if not x_admin_token:
        raise AuthenticationError("Admin token required", code=ErrorCode.MISSING_TOKEN)

    try:
        return verify_admin_token(x_admin_token, secret)
    except AdminTokenError as e:
        raise AuthenticationError("Invalid or expired token", code=ErrorCode(e.reason.value))


async def get_division_context(
    identity: AdminTokenPayload = Depends(get_admin_identity),
    db: AsyncSession = Depends(get_db),
) -> DivisionContext:
    """
    Dependency to get the division context of an authenticated, active admin.

    Args:
        identity: Verified token claims
        db: Database session

    Returns:
        DivisionContext: Admin, user and division of the caller

    Raises:
        AuthenticationError / AccountInactiveError: 401
    """
    admin = await require_active_admin(db, identity)
    return DivisionContext.from_admin(admin, identity)
