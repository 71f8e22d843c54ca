"""Repository for Panchayath database operations."""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from models.panchayath import Panchayath


async def get_by_id(session: AsyncSession, *, panchayath_id: UUID) -> Panchayath | None:
    """Get a panchayath by ID."""
    result = await session.execute(select(Panchayath).where(Panchayath.id == panchayath_id))
    return result.scalar_one_or_none()


async def list_active(session: AsyncSession) -> list[Panchayath]:
    """
    List active panchayaths.

    Args:
        session: Database session

    Returns:
        Active panchayaths ordered by name
    """
    query = (
        select(Panchayath)
        .where(Panchayath.is_active.is_(True))
        .order_by(Panchayath.name.asc())
    )
    result = await session.execute(query)
    return list(result.scalars().all())
