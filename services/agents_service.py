"""Service layer for the agent hierarchy and panchayath lookups."""

from datetime import datetime, UTC
from uuid import UUID

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from api.errors import ConflictError, NotFoundError, StoreError, ValidationFailedError
from models.agent import (
    Agent,
    AgentChildTemplate,
    AgentCreate,
    AgentFilters,
    AgentRole,
    AgentStats,
    BulkAgentCreate,
)
from models.panchayath import Panchayath, PanchayathResponse
from repos import agents_repo, panchayaths_repo
from services.agent_hierarchy import (
    child_role,
    normalize_assignment,
    parent_role,
    summarize_agents,
    ward_options,
)


def _is_unique_violation(error: IntegrityError) -> bool:
    # 23505 is PostgreSQL's unique_violation
    return getattr(error.orig, "sqlstate", None) == "23505" or "unique" in str(error.orig).lower()


async def _persist(session: AsyncSession, write, duplicate_message: str = "Mobile number already exists"):
    """Run a repository write and commit, translating store failures."""
    try:
        result = await write
        await session.commit()
    except IntegrityError as e:
        await session.rollback()
        if _is_unique_violation(e):
            raise ConflictError(duplicate_message)
        raise StoreError(str(e.orig))
    except SQLAlchemyError as e:
        await session.rollback()
        raise StoreError(str(getattr(e, "orig", None) or e))
    return result


async def _require_agent(session: AsyncSession, agent_id: UUID) -> Agent:
    agent = await agents_repo.get_by_id(session, agent_id=agent_id)
    if not agent:
        raise NotFoundError("Agent not found")
    return agent


async def _require_panchayath(session: AsyncSession, panchayath_id: UUID) -> Panchayath:
    panchayath = await panchayaths_repo.get_by_id(session, panchayath_id=panchayath_id)
    if not panchayath or not panchayath.is_active:
        raise NotFoundError("Panchayath not found")
    return panchayath


def _check_ward(panchayath: Panchayath, ward: str) -> None:
    options = ward_options(panchayath.ward)
    if options and ward not in options:
        raise ValidationFailedError(f"Ward must be between 1 and {options[-1]}")


async def _check_parent(
    session: AsyncSession,
    *,
    role: AgentRole,
    panchayath_id: UUID,
    parent_agent_id: UUID | None,
    agent_id: UUID | None = None,
) -> None:
    """
    Verify a parent assignment follows the hierarchy.

    The parent must be an active agent holding the role directly above
    ``role`` in the same panchayath.
    """
    if parent_agent_id is None:
        return
    if agent_id is not None and parent_agent_id == agent_id:
        raise ValidationFailedError("An agent cannot be its own parent")

    expected_role = parent_role(role)
    parent = await agents_repo.get_by_id(session, agent_id=parent_agent_id)
    if (
        expected_role is None
        or parent is None
        or not parent.is_active
        or parent.role != expected_role.value
        or parent.panchayath_id != panchayath_id
    ):
        raise ValidationFailedError(
            f"Parent agent must be an active {expected_role.value if expected_role else 'agent'} "
            "in the same panchayath"
        )


async def list_agents(session: AsyncSession, *, filters: AgentFilters) -> list[Agent]:
    """List agents matching the filters, ordered by name."""
    return await agents_repo.list_agents(session, filters=filters)


async def get_agent_stats(session: AsyncSession, *, filters: AgentFilters) -> AgentStats:
    """Per-role counts and PRO customer totals for the agents matching the filters."""
    agents = await agents_repo.list_agents(session, filters=filters)
    return summarize_agents(agents)


async def list_agent_wards(session: AsyncSession, *, panchayath_id: UUID) -> list[str]:
    """Distinct wards in use by agents of a panchayath."""
    return await agents_repo.list_wards(session, panchayath_id=panchayath_id)


async def list_potential_parents(
    session: AsyncSession,
    *,
    role: AgentRole,
    panchayath_id: UUID,
) -> list[Agent]:
    """
    Agents an agent of ``role`` in a panchayath may report to.

    Returns:
        Active agents of the parent role ordered by name; empty for team leaders
    """
    expected_role = parent_role(role)
    if expected_role is None:
        return []
    return await agents_repo.list_active_by_role(
        session,
        panchayath_id=panchayath_id,
        role=expected_role,
    )


async def get_child_template(session: AsyncSession, *, agent_id: UUID) -> AgentChildTemplate:
    """
    Defaults for adding an agent directly under an existing one.

    Raises:
        NotFoundError: 404 if the agent does not exist
        ValidationFailedError: 400 if the agent is a PRO
    """
    parent = await _require_agent(session, agent_id)
    role = child_role(parent.role)
    if role is None:
        raise ValidationFailedError("PROs cannot have child agents")
    return AgentChildTemplate(
        role=role,
        parent_agent_id=parent.id,
        panchayath_id=parent.panchayath_id,
    )


async def create_agent(session: AsyncSession, *, payload: AgentCreate) -> Agent:
    """
    Create a single agent.

    Args:
        session: Database session
        payload: Agent data

    Returns:
        Created agent

    Raises:
        NotFoundError: 404 if the panchayath does not exist
        ValidationFailedError: 400 if the ward or parent breaks the hierarchy rules
        ConflictError: 409 if the mobile number is already registered
    """
    panchayath = await _require_panchayath(session, payload.panchayath_id)
    _check_ward(panchayath, payload.ward)

    parent_agent_id, customer_count = normalize_assignment(
        payload.role, payload.parent_agent_id, payload.customer_count
    )
    await _check_parent(
        session,
        role=payload.role,
        panchayath_id=payload.panchayath_id,
        parent_agent_id=parent_agent_id,
    )

    agent = Agent(
        name=payload.name,
        mobile=payload.mobile,
        role=payload.role.value,
        panchayath_id=payload.panchayath_id,
        ward=payload.ward,
        parent_agent_id=parent_agent_id,
        customer_count=customer_count,
        is_active=True,
    )
    created = await _persist(session, agents_repo.create_many(session, [agent]))
    return created[0]


async def create_agents_bulk(session: AsyncSession, *, payload: BulkAgentCreate) -> list[Agent]:
    """
    Create several agents sharing a panchayath, role and parent in one transaction.

    Raises:
        NotFoundError: 404 if the panchayath does not exist
        ValidationFailedError: 400 if a ward or the parent breaks the hierarchy rules
        ConflictError: 409 if any mobile number is already registered
    """
    panchayath = await _require_panchayath(session, payload.panchayath_id)
    for entry in payload.agents:
        _check_ward(panchayath, entry.ward)

    parent_agent_id, _ = normalize_assignment(payload.role, payload.parent_agent_id, 0)
    await _check_parent(
        session,
        role=payload.role,
        panchayath_id=payload.panchayath_id,
        parent_agent_id=parent_agent_id,
    )

    agents = []
    for entry in payload.agents:
        _, customer_count = normalize_assignment(payload.role, None, entry.customer_count)
        agents.append(
            Agent(
                name=entry.name,
                mobile=entry.mobile,
                role=payload.role.value,
                panchayath_id=payload.panchayath_id,
                ward=entry.ward,
                parent_agent_id=parent_agent_id,
                customer_count=customer_count,
                is_active=True,
            )
        )

    return await _persist(
        session,
        agents_repo.create_many(session, agents),
        "One or more mobile numbers already exist",
    )


async def update_agent(session: AsyncSession, *, agent_id: UUID, payload: AgentCreate) -> Agent:
    """
    Replace the editable fields of an agent.

    Raises:
        NotFoundError: 404 if the agent or panchayath does not exist
        ValidationFailedError: 400 if the ward or parent breaks the hierarchy rules
        ConflictError: 409 if the mobile number belongs to another agent
    """
    agent = await _require_agent(session, agent_id)
    panchayath = await _require_panchayath(session, payload.panchayath_id)
    _check_ward(panchayath, payload.ward)

    parent_agent_id, customer_count = normalize_assignment(
        payload.role, payload.parent_agent_id, payload.customer_count
    )
    await _check_parent(
        session,
        role=payload.role,
        panchayath_id=payload.panchayath_id,
        parent_agent_id=parent_agent_id,
        agent_id=agent.id,
    )

    agent.name = payload.name
    agent.mobile = payload.mobile
    agent.role = payload.role.value
    agent.panchayath_id = payload.panchayath_id
    agent.ward = payload.ward
    agent.parent_agent_id = parent_agent_id
    agent.customer_count = customer_count
    agent.updated_at = datetime.now(UTC)

    return await _persist(session, agents_repo.save(session, agent))


async def delete_agent(session: AsyncSession, *, agent_id: UUID) -> None:
    """
    Delete an agent. Agents reporting to it are detached by the store.

    Raises:
        NotFoundError: 404 if the agent does not exist
    """
    agent = await _require_agent(session, agent_id)
    await _persist(session, agents_repo.delete(session, agent))


async def list_panchayaths(session: AsyncSession) -> list[PanchayathResponse]:
    """Active panchayaths ordered by name, each with its ward choices."""
    panchayaths = await panchayaths_repo.list_active(session)
    return [
        PanchayathResponse(
            id=p.id,
            name=p.name,
            ward=p.ward,
            ward_options=ward_options(p.ward),
        )
        for p in panchayaths
    ]


async def get_ward_options(session: AsyncSession, *, panchayath_id: UUID) -> list[str]:
    """
    Ward choices for one panchayath.

    Raises:
        NotFoundError: 404 if the panchayath does not exist
    """
    panchayath = await _require_panchayath(session, panchayath_id)
    return ward_options(panchayath.ward)
