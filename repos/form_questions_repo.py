"""Repository for ProgramFormQuestion database operations."""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from models.program_form_question import ProgramFormQuestion


async def get_by_id(
    session: AsyncSession,
    *,
    question_id: UUID,
) -> ProgramFormQuestion | None:
    """
    Get a form question by ID.

    Args:
        session: Database session
        question_id: Question ID to fetch

    Returns:
        ProgramFormQuestion if found, None otherwise
    """
    result = await session.execute(
        select(ProgramFormQuestion).where(ProgramFormQuestion.id == question_id)
    )
    return result.scalar_one_or_none()


async def list_by_program(
    session: AsyncSession,
    *,
    program_id: UUID,
) -> list[ProgramFormQuestion]:
    """
    List the questions of a program in display order.

    Args:
        session: Database session
        program_id: Program ID to fetch questions for

    Returns:
        Questions ordered by sort_order ascending
    """
    query = (
        select(ProgramFormQuestion)
        .where(ProgramFormQuestion.program_id == program_id)
        .order_by(ProgramFormQuestion.sort_order.asc(), ProgramFormQuestion.created_at.asc())
    )
    result = await session.execute(query)
    return list(result.scalars().all())


async def create(session: AsyncSession, question: ProgramFormQuestion) -> ProgramFormQuestion:
    """Insert a new form question."""
    session.add(question)
    await session.flush()
    await session.refresh(question)
    return question


async def save(session: AsyncSession, question: ProgramFormQuestion) -> ProgramFormQuestion:
    """Flush pending changes to an existing form question."""
    await session.flush()
    await session.refresh(question)
    return question


async def delete(session: AsyncSession, question: ProgramFormQuestion) -> None:
    """Delete a form question."""
    await session.delete(question)
    await session.flush()
