"""Repository for Program database operations."""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from models.program import Program


async def get_by_id(session: AsyncSession, *, program_id: UUID) -> Program | None:
    """
    Get a program by ID.

    Args:
        session: Database session
        program_id: Program ID to fetch

    Returns:
        Program if found, None otherwise
    """
    result = await session.execute(select(Program).where(Program.id == program_id))
    return result.scalar_one_or_none()
