"""Agent hierarchy endpoints - manage team leaders, coordinators, group leaders and PROs."""

from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from api.deps import get_db, get_division_context
from api.division import DivisionContext
from models.agent import (
    AgentChildTemplate,
    AgentCreate,
    AgentFilters,
    AgentResponse,
    AgentRole,
    AgentStats,
    BulkAgentCreate,
    BulkAgentCreateResponse,
)
from services import agents_service

router = APIRouter()


def get_agent_filters(
    panchayath_id: UUID | None = Query(None),
    ward: str | None = Query(None),
    role: AgentRole | None = Query(None),
    search: str | None = Query(None),
) -> AgentFilters:
    """Dependency collecting the agent list filters from the query string."""
    return AgentFilters(panchayath_id=panchayath_id, ward=ward, role=role, search=search)


@router.get("/agents", response_model=List[AgentResponse])
async def list_agents_endpoint(
    filters: AgentFilters = Depends(get_agent_filters),
    division_ctx: DivisionContext = Depends(get_division_context),
    db: AsyncSession = Depends(get_db),
):
    """List agents, optionally filtered by panchayath, ward, role or a name/mobile search."""
    return await agents_service.list_agents(db, filters=filters)


@router.get("/agents/stats", response_model=AgentStats)
async def agent_stats_endpoint(
    filters: AgentFilters = Depends(get_agent_filters),
    division_ctx: DivisionContext = Depends(get_division_context),
    db: AsyncSession = Depends(get_db),
):
    """Agent counts per role and total PRO customers for the filtered agents."""
    return await agents_service.get_agent_stats(db, filters=filters)


@router.get("/agents/wards", response_model=List[str])
async def agent_wards_endpoint(
    panchayath_id: UUID,
    division_ctx: DivisionContext = Depends(get_division_context),
    db: AsyncSession = Depends(get_db),
):
    """Distinct wards used by agents of a panchayath."""
    return await agents_service.list_agent_wards(db, panchayath_id=panchayath_id)


@router.get("/agents/potential-parents", response_model=List[AgentResponse])
async def potential_parents_endpoint(
    role: AgentRole,
    panchayath_id: UUID,
    division_ctx: DivisionContext = Depends(get_division_context),
    db: AsyncSession = Depends(get_db),
):
    """Active agents an agent of `role` in the panchayath can report to."""
    return await agents_service.list_potential_parents(db, role=role, panchayath_id=panchayath_id)


@router.post(
    "/agents",
    response_model=AgentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_agent_endpoint(
    agent_data: AgentCreate,
    division_ctx: DivisionContext = Depends(get_division_context),
    db: AsyncSession = Depends(get_db),
):
    """
    Create a single agent.

    Team leaders are stored without a parent and only PROs keep a customer count.

    Raises:
        404 if the panchayath is unknown, 400 if the ward or parent is invalid,
        409 if the mobile number is already registered.
    """
    return await agents_service.create_agent(db, payload=agent_data)


@router.post(
    "/agents/bulk",
    response_model=BulkAgentCreateResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_agents_bulk_endpoint(
    bulk_data: BulkAgentCreate,
    division_ctx: DivisionContext = Depends(get_division_context),
    db: AsyncSession = Depends(get_db),
):
    """Create several agents sharing a panchayath, role and parent."""
    agents = await agents_service.create_agents_bulk(db, payload=bulk_data)
    return BulkAgentCreateResponse(
        created=len(agents),
        agents=[AgentResponse.model_validate(agent) for agent in agents],
    )


@router.get("/agents/{agent_id}/child-template", response_model=AgentChildTemplate)
async def child_template_endpoint(
    agent_id: UUID,
    division_ctx: DivisionContext = Depends(get_division_context),
    db: AsyncSession = Depends(get_db),
):
    """Role, parent and panchayath to pre-fill when adding an agent under `agent_id`."""
    return await agents_service.get_child_template(db, agent_id=agent_id)


@router.put("/agents/{agent_id}", response_model=AgentResponse)
async def update_agent_endpoint(
    agent_id: UUID,
    agent_data: AgentCreate,
    division_ctx: DivisionContext = Depends(get_division_context),
    db: AsyncSession = Depends(get_db),
):
    """
    Update an agent.

    Raises:
        404 if the agent is not found.
    """
    return await agents_service.update_agent(db, agent_id=agent_id, payload=agent_data)


@router.delete(
    "/agents/{agent_id}",
    status_code=status.HTTP_204_NO_CONTENT,
)
async def delete_agent_endpoint(
    agent_id: UUID,
    division_ctx: DivisionContext = Depends(get_division_context),
    db: AsyncSession = Depends(get_db),
):
    """
    Delete an agent.

    Raises:
        404 if the agent is not found.
    """
    await agents_service.delete_agent(db, agent_id=agent_id)
    return None
