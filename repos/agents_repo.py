"""Repository for Agent database operations."""

from uuid import UUID

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from models.agent import Agent, AgentFilters, AgentRole


async def get_by_id(session: AsyncSession, *, agent_id: UUID) -> Agent | None:
    """Get an agent by ID."""
    result = await session.execute(select(Agent).where(Agent.id == agent_id))
    return result.scalar_one_or_none()


async def list_agents(session: AsyncSession, *, filters: AgentFilters) -> list[Agent]:
    """
    List agents matching the given filters.

    Args:
        session: Database session
        filters: Optional panchayath, ward, role and free-text search

    Returns:
        Matching agents ordered by name
    """
    query = select(Agent)

    if filters.panchayath_id is not None:
        query = query.where(Agent.panchayath_id == filters.panchayath_id)
    if filters.ward:
        query = query.where(Agent.ward == filters.ward)
    if filters.role is not None:
        query = query.where(Agent.role == filters.role.value)
    if filters.search:
        pattern = f"%{filters.search}%"
        query = query.where(or_(Agent.name.ilike(pattern), Agent.mobile.ilike(pattern)))

    result = await session.execute(query.order_by(Agent.name.asc()))
    return list(result.scalars().all())


async def list_wards(session: AsyncSession, *, panchayath_id: UUID) -> list[str]:
    """
    List the distinct wards agents of a panchayath are assigned to.

    Returns:
        Ward values sorted as strings
    """
    result = await session.execute(
        select(Agent.ward).where(Agent.panchayath_id == panchayath_id).distinct()
    )
    return sorted(result.scalars().all())


async def list_active_by_role(
    session: AsyncSession,
    *,
    panchayath_id: UUID,
    role: AgentRole,
) -> list[Agent]:
    """List active agents holding a role in a panchayath, ordered by name."""
    query = (
        select(Agent)
        .where(
            Agent.panchayath_id == panchayath_id,
            Agent.role == role.value,
            Agent.is_active.is_(True),
        )
        .order_by(Agent.name.asc())
    )
    result = await session.execute(query)
    return list(result.scalars().all())


async def create_many(session: AsyncSession, agents: list[Agent]) -> list[Agent]:
    """
    Insert agents in a single flush.

    Args:
        session: Database session
        agents: Agent instances to insert

    Returns:
        Created agents
    """
    session.add_all(agents)
    await session.flush()
    for agent in agents:
        await session.refresh(agent)
    return agents


async def save(session: AsyncSession, agent: Agent) -> Agent:
    """Flush pending changes to an existing agent."""
    await session.flush()
    await session.refresh(agent)
    return agent


async def delete(session: AsyncSession, agent: Agent) -> None:
    """Delete an agent."""
    await session.delete(agent)
    await session.flush()
