"""Agent model - members of the sales-agent hierarchy."""

from datetime import datetime, UTC
from typing import Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy import Boolean, Integer, String, ForeignKey, DateTime, Uuid
from sqlalchemy.orm import Mapped, mapped_column
import enum

from db import Base


class AgentRole(str, enum.Enum):
    """Agent role enum, declared in hierarchy order."""

    TEAM_LEADER = "team_leader"
    COORDINATOR = "coordinator"
    GROUP_LEADER = "group_leader"
    PRO = "pro"


MOBILE_PATTERN = r"^[0-9]{10}$"


class Agent(Base):
    """Agent ORM model."""

    __tablename__ = "pennyekart_agents"

    id: Mapped[UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid4,
        index=True,
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    mobile: Mapped[str] = mapped_column(String(10), nullable=False, unique=True)
    role: Mapped[str] = mapped_column(String(50), nullable=False, index=True)
    panchayath_id: Mapped[UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("panchayaths.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    ward: Mapped[str] = mapped_column(String(50), nullable=False)
    parent_agent_id: Mapped[Optional[UUID]] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("pennyekart_agents.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    customer_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(UTC),
    )
    updated_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )


# Pydantic schemas
class AgentCreate(BaseModel):
    """Schema for creating or editing a single agent."""

    name: str = Field(min_length=2, max_length=100)
    mobile: str = Field(pattern=MOBILE_PATTERN)
    role: AgentRole
    panchayath_id: UUID
    ward: str = Field(min_length=1)
    parent_agent_id: UUID | None = None
    customer_count: int = Field(default=0, ge=0)


class BulkAgentEntry(BaseModel):
    """One row of a bulk agent submission."""

    name: str = Field(min_length=2, max_length=100)
    mobile: str = Field(pattern=MOBILE_PATTERN)
    ward: str = Field(min_length=1)
    customer_count: int = Field(default=0, ge=0)


class BulkAgentCreate(BaseModel):
    """Schema for creating several agents sharing panchayath, role and parent."""

    panchayath_id: UUID
    role: AgentRole
    parent_agent_id: UUID | None = None
    agents: list[BulkAgentEntry] = Field(min_length=1)


class AgentFilters(BaseModel):
    """Filters accepted by the agent listing."""

    panchayath_id: UUID | None = None
    ward: str | None = None
    role: AgentRole | None = None
    search: str | None = None


class AgentResponse(BaseModel):
    """Schema for agent response."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    mobile: str
    role: AgentRole
    panchayath_id: UUID
    ward: str
    parent_agent_id: UUID | None = None
    customer_count: int
    is_active: bool
    created_at: datetime
    updated_at: datetime | None = None


class BulkAgentCreateResponse(BaseModel):
    """Schema for bulk create response."""

    created: int
    agents: list[AgentResponse]


class AgentStats(BaseModel):
    """Aggregate counts over a set of agents."""

    total_agents: int
    by_role: dict[AgentRole, int]
    total_customers: int


class AgentChildTemplate(BaseModel):
    """Defaults for adding a child under an existing agent."""

    role: AgentRole
    parent_agent_id: UUID
    panchayath_id: UUID
