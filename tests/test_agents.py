"""Integration tests for the agent and panchayath endpoints."""

from uuid import uuid4

import pytest
from fastapi import status
from sqlalchemy import func, select

from models.agent import Agent

AGENTS_URL = "/api/v1/agents"


def _agent_body(panchayath_id, **overrides) -> dict:
    body = {
        "name": "Team Leader",
        "mobile": "9000000001",
        "role": "team_leader",
        "panchayath_id": str(panchayath_id),
        "ward": "1",
    }
    body.update(overrides)
    return body


async def _create(client, headers, body) -> dict:
    response = await client.post(AGENTS_URL, json=body, headers=headers)
    assert response.status_code == status.HTTP_201_CREATED, response.text
    return response.json()


@pytest.mark.asyncio
async def test_agents_require_admin_token(client):
    response = await client.get(AGENTS_URL)

    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.json()["code"] == "MISSING_TOKEN"


@pytest.mark.asyncio
async def test_agents_refuse_inactive_admin(client, inactive_admin, admin_headers):
    response = await client.get(AGENTS_URL, headers=admin_headers(inactive_admin))

    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.json()["code"] == "ACCOUNT_INACTIVE_OR_MISSING"


@pytest.mark.asyncio
async def test_create_and_list_hierarchy(client, admin_a, panchayath, admin_headers):
    """Test: Agents created down the chain are listed by name with their parents."""
    headers = admin_headers(admin_a)
    leader = await _create(client, headers, _agent_body(panchayath.id, name="Leela"))
    coordinator = await _create(
        client,
        headers,
        _agent_body(
            panchayath.id,
            name="Cyril",
            mobile="9000000002",
            role="coordinator",
            parent_agent_id=leader["id"],
        ),
    )

    assert leader["parent_agent_id"] is None
    assert coordinator["parent_agent_id"] == leader["id"]

    response = await client.get(AGENTS_URL, headers=headers)

    assert response.status_code == status.HTTP_200_OK
    assert [a["name"] for a in response.json()] == ["Cyril", "Leela"]


@pytest.mark.asyncio
async def test_list_agents_filtered_by_role(client, admin_a, panchayath, admin_headers):
    headers = admin_headers(admin_a)
    leader = await _create(client, headers, _agent_body(panchayath.id))
    await _create(
        client,
        headers,
        _agent_body(
            panchayath.id,
            name="Coordinator",
            mobile="9000000002",
            role="coordinator",
            parent_agent_id=leader["id"],
        ),
    )

    response = await client.get(AGENTS_URL, params={"role": "coordinator"}, headers=headers)

    assert response.status_code == status.HTTP_200_OK
    assert [a["role"] for a in response.json()] == ["coordinator"]


@pytest.mark.asyncio
async def test_create_agent_invalid_mobile(client, admin_a, panchayath, admin_headers):
    response = await client.post(
        AGENTS_URL,
        json=_agent_body(panchayath.id, mobile="12345"),
        headers=admin_headers(admin_a),
    )

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    body = response.json()
    assert body["code"] == "VALIDATION_ERROR"
    assert body["error"].startswith("mobile")


@pytest.mark.asyncio
async def test_create_agent_duplicate_mobile(client, db_session, admin_a, panchayath, admin_headers):
    headers = admin_headers(admin_a)
    panchayath_id = panchayath.id
    await _create(client, headers, _agent_body(panchayath_id))

    response = await client.post(
        AGENTS_URL,
        json=_agent_body(panchayath_id, name="Someone Else"),
        headers=headers,
    )

    assert response.status_code == status.HTTP_409_CONFLICT
    assert response.json() == {"error": "Mobile number already exists", "code": "CONFLICT"}

    result = await db_session.execute(select(func.count()).select_from(Agent))
    assert result.scalar_one() == 1


@pytest.mark.asyncio
async def test_bulk_create_agents(client, admin_a, panchayath, admin_headers):
    response = await client.post(
        f"{AGENTS_URL}/bulk",
        json={
            "panchayath_id": str(panchayath.id),
            "role": "team_leader",
            "agents": [
                {"name": "Anu", "mobile": "9000000031", "ward": "1"},
                {"name": "Babu", "mobile": "9000000032", "ward": "2"},
            ],
        },
        headers=admin_headers(admin_a),
    )

    assert response.status_code == status.HTTP_201_CREATED
    body = response.json()
    assert body["created"] == 2
    assert sorted(a["mobile"] for a in body["agents"]) == ["9000000031", "9000000032"]


@pytest.mark.asyncio
async def test_bulk_create_requires_agents(client, admin_a, panchayath, admin_headers):
    response = await client.post(
        f"{AGENTS_URL}/bulk",
        json={"panchayath_id": str(panchayath.id), "role": "pro", "agents": []},
        headers=admin_headers(admin_a),
    )

    assert response.status_code == status.HTTP_400_BAD_REQUEST


@pytest.mark.asyncio
async def test_agent_stats_and_wards(client, admin_a, panchayath, admin_headers):
    headers = admin_headers(admin_a)
    await _create(client, headers, _agent_body(panchayath.id, ward="2"))
    await _create(client, headers, _agent_body(panchayath.id, name="Second Leader", mobile="9000000002", ward="5"))

    stats = await client.get(f"{AGENTS_URL}/stats", params={"panchayath_id": str(panchayath.id)}, headers=headers)
    assert stats.status_code == status.HTTP_200_OK
    assert stats.json() == {
        "total_agents": 2,
        "by_role": {"team_leader": 2, "coordinator": 0, "group_leader": 0, "pro": 0},
        "total_customers": 0,
    }

    wards = await client.get(f"{AGENTS_URL}/wards", params={"panchayath_id": str(panchayath.id)}, headers=headers)
    assert wards.status_code == status.HTTP_200_OK
    assert wards.json() == ["2", "5"]


@pytest.mark.asyncio
async def test_potential_parents_and_child_template(client, admin_a, panchayath, admin_headers):
    headers = admin_headers(admin_a)
    leader = await _create(client, headers, _agent_body(panchayath.id))

    parents = await client.get(
        f"{AGENTS_URL}/potential-parents",
        params={"role": "coordinator", "panchayath_id": str(panchayath.id)},
        headers=headers,
    )
    assert parents.status_code == status.HTTP_200_OK
    assert [p["id"] for p in parents.json()] == [leader["id"]]

    template = await client.get(f"{AGENTS_URL}/{leader['id']}/child-template", headers=headers)
    assert template.status_code == status.HTTP_200_OK
    assert template.json() == {
        "role": "coordinator",
        "parent_agent_id": leader["id"],
        "panchayath_id": str(panchayath.id),
    }


@pytest.mark.asyncio
async def test_update_and_delete_agent(client, admin_a, panchayath, admin_headers):
    headers = admin_headers(admin_a)
    agent = await _create(client, headers, _agent_body(panchayath.id))

    updated = await client.put(
        f"{AGENTS_URL}/{agent['id']}",
        json=_agent_body(panchayath.id, name="Renamed", ward="3"),
        headers=headers,
    )
    assert updated.status_code == status.HTTP_200_OK
    assert updated.json()["name"] == "Renamed"
    assert updated.json()["ward"] == "3"

    deleted = await client.delete(f"{AGENTS_URL}/{agent['id']}", headers=headers)
    assert deleted.status_code == status.HTTP_204_NO_CONTENT

    missing = await client.delete(f"{AGENTS_URL}/{agent['id']}", headers=headers)
    assert missing.status_code == status.HTTP_404_NOT_FOUND
    assert missing.json() == {"error": "Agent not found", "code": "NOT_FOUND"}


@pytest.mark.asyncio
async def test_update_unknown_agent(client, admin_a, panchayath, admin_headers):
    response = await client.put(
        f"{AGENTS_URL}/{uuid4()}",
        json=_agent_body(panchayath.id),
        headers=admin_headers(admin_a),
    )

    assert response.status_code == status.HTTP_404_NOT_FOUND


@pytest.mark.asyncio
async def test_list_panchayaths_with_ward_options(client, admin_a, panchayath, other_panchayath, admin_headers):
    response = await client.get("/api/v1/panchayaths", headers=admin_headers(admin_a))

    assert response.status_code == status.HTTP_200_OK
    assert response.json() == [
        {"id": str(other_panchayath.id), "name": "Anakkayam", "ward": None, "ward_options": []},
        {"id": str(panchayath.id), "name": "Kodur", "ward": "5", "ward_options": ["1", "2", "3", "4", "5"]},
    ]


@pytest.mark.asyncio
async def test_ward_options_endpoint(client, admin_a, panchayath, admin_headers):
    headers = admin_headers(admin_a)

    response = await client.get(f"/api/v1/panchayaths/{panchayath.id}/ward-options", headers=headers)
    assert response.status_code == status.HTTP_200_OK
    assert response.json() == ["1", "2", "3", "4", "5"]

    missing = await client.get(f"/api/v1/panchayaths/{uuid4()}/ward-options", headers=headers)
    assert missing.status_code == status.HTTP_404_NOT_FOUND
