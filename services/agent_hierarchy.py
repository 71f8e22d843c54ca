"""Role hierarchy and ward helpers for the agent network.

Roles form a single chain, team leader at the top and PRO at the bottom;
an agent's parent always holds the role directly above its own.
"""

import re
from typing import Iterable
from uuid import UUID

from models.agent import Agent, AgentRole, AgentStats

ROLE_HIERARCHY: tuple[AgentRole, ...] = (
    AgentRole.TEAM_LEADER,
    AgentRole.COORDINATOR,
    AgentRole.GROUP_LEADER,
    AgentRole.PRO,
)

_LEADING_INT = re.compile(r"\s*([+-]?)(\d+)")

# Upper bound on ward choices; larger stored counts are treated as this many
MAX_WARDS = 100


def parent_role(role: AgentRole | str) -> AgentRole | None:
    """Role directly above ``role``, or None for team leaders."""
    index = ROLE_HIERARCHY.index(AgentRole(role))
    return ROLE_HIERARCHY[index - 1] if index > 0 else None


def child_role(role: AgentRole | str) -> AgentRole | None:
    """Role directly below ``role``, or None for PROs."""
    index = ROLE_HIERARCHY.index(AgentRole(role))
    return ROLE_HIERARCHY[index + 1] if index + 1 < len(ROLE_HIERARCHY) else None


def ward_options(ward: str | None) -> list[str]:
    """
    Ward choices for a panchayath.

    The stored ward value is a ward count; its leading integer is used, so
    ``"12"`` and ``"12 wards"`` both give ``["1", ..., "12"]``. Missing,
    non-numeric and non-positive values give no choices, and counts above
    ``MAX_WARDS`` are capped at ``MAX_WARDS``.

    Args:
        ward: Stored ward count of the panchayath

    Returns:
        Ward numbers as strings
    """
    if not ward:
        return []
    match = _LEADING_INT.match(ward)
    if not match:
        return []
    sign, digits = match.groups()
    digits = digits.lstrip("0")
    if sign == "-" or not digits:
        return []
    # Very long digit strings are over the cap without converting them
    count = MAX_WARDS if len(digits) > len(str(MAX_WARDS)) else min(int(digits), MAX_WARDS)
    return [str(number) for number in range(1, count + 1)]


def normalize_assignment(
    role: AgentRole,
    parent_agent_id: UUID | None,
    customer_count: int,
) -> tuple[UUID | None, int]:
    """
    Apply the hierarchy rules to an agent assignment.

    Team leaders never have a parent, and only PROs keep a customer count.

    Returns:
        (parent_agent_id, customer_count) to store
    """
    if role == AgentRole.TEAM_LEADER:
        parent_agent_id = None
    if role != AgentRole.PRO:
        customer_count = 0
    return parent_agent_id, customer_count


def summarize_agents(agents: Iterable[Agent]) -> AgentStats:
    """Count agents per role and total the customers held by PROs."""
    by_role = {role: 0 for role in ROLE_HIERARCHY}
    total_agents = 0
    total_customers = 0
    for agent in agents:
        total_agents += 1
        role = AgentRole(agent.role)
        by_role[role] += 1
        if role == AgentRole.PRO:
            total_customers += agent.customer_count or 0
    return AgentStats(
        total_agents=total_agents,
        by_role=by_role,
        total_customers=total_customers,
    )
