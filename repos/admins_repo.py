"""Repository for Admin database operations."""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from models.admin import Admin


async def get_by_id(session: AsyncSession, *, admin_id: UUID) -> Admin | None:
    """
    Get an admin by ID.

    Args:
        session: Database session
        admin_id: Admin ID to fetch

    Returns:
        Admin if found, None otherwise
    """
    result = await session.execute(select(Admin).where(Admin.id == admin_id))
    return result.scalar_one_or_none()
