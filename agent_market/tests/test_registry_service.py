"""Agent registry: creation, lookups by internal and on-chain ID, listings."""

from decimal import Decimal
from unittest.mock import AsyncMock

import pytest
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from agent_market.core.exceptions import AgentNotFoundError, ExternalIdConflictError
from agent_market.models.agent import Agent
from agent_market.models.ownership import AgentOwnership
from agent_market.services import identity_service, marketplace_service, registry_service

CREATOR = "0x" + "B" * 40
OTHER = "0x" + "C" * 40


# ---------------------------------------------------------------------------
# Creation
# ---------------------------------------------------------------------------

async def test_create_agent_defaults(db: AsyncSession, make_agent):
    agent = await make_agent(CREATOR, price=None, is_for_sale=None)

    assert agent.id
    assert agent.external_id is None
    assert agent.capabilities == ["search", "summarize"]
    assert agent.price == Decimal("0")
    assert agent.is_for_sale is False
    assert agent.creator.wallet_address == CREATOR


async def test_create_agent_keeps_capability_order(db: AsyncSession, make_agent):
    agent = await make_agent(CREATOR, capabilities=["translate", "search", "code"])

    reloaded = await registry_service.get_agent(db, agent.id)
    assert reloaded.capabilities == ["translate", "search", "code"]


async def test_create_agent_with_external_id(db: AsyncSession, make_agent):
    agent = await make_agent(CREATOR, external_id=42)

    found = await registry_service.get_agent_by_external_id(db, 42)
    assert found is not None
    assert found.id == agent.id
    assert await registry_service.external_id_exists(db, 42) == agent.id


async def test_duplicate_external_id_conflicts(db: AsyncSession, make_agent, count_rows):
    await make_agent(CREATOR, external_id=7)

    with pytest.raises(ExternalIdConflictError) as exc_info:
        await make_agent(OTHER, external_id=7)

    assert exc_info.value.status_code == 409
    assert await count_rows(Agent, Agent.external_id == 7) == 1


async def test_external_id_race_caught_by_unique_index(
    db: AsyncSession, make_agent, count_rows, monkeypatch,
):
    """When the advisory lookup misses a concurrent insert, the index still decides."""
    await make_agent(CREATOR, external_id=9)
    monkeypatch.setattr(registry_service, "external_id_exists", AsyncMock(return_value=None))

    with pytest.raises(ExternalIdConflictError):
        await make_agent(OTHER, external_id=9)

    assert await count_rows(Agent) == 1
    assert await count_rows(AgentOwnership) == 1


async def test_agents_without_external_id_do_not_collide(db: AsyncSession, make_agent, count_rows):
    await make_agent(CREATOR)
    await make_agent(CREATOR)

    assert await count_rows(Agent) == 2


# ---------------------------------------------------------------------------
# Request validation
# ---------------------------------------------------------------------------

@pytest.mark.parametrize(
    "overrides",
    [
        {"name": ""},
        {"name": "x" * 256},
        {"description": ""},
        {"description": "x" * 1001},
        {"model": ""},
        {"model": "x" * 101},
        {"capabilities": []},
        {"price": Decimal("-1")},
        {"external_id": 0},
        {"external_id": 2**31},
        {"creator_wallet_address": "0x1234"},
        {"creator_wallet_address": "0x" + "G" * 40},
    ],
)
async def test_invalid_create_requests_rejected(make_agent_request, overrides):
    with pytest.raises(ValidationError):
        make_agent_request(**overrides)


# ---------------------------------------------------------------------------
# Lookups and listings
# ---------------------------------------------------------------------------

async def test_get_agent_missing_raises(db: AsyncSession):
    with pytest.raises(AgentNotFoundError) as exc_info:
        await registry_service.get_agent(db, "does-not-exist")
    assert exc_info.value.status_code == 404


async def test_get_agent_by_external_id_missing_returns_none(db: AsyncSession):
    assert await registry_service.get_agent_by_external_id(db, 999) is None
    assert await registry_service.external_id_exists(db, 999) is None


async def test_list_agents_includes_creator(db: AsyncSession, make_agent):
    await make_agent(CREATOR, name="one")
    await make_agent(OTHER, name="two")

    agents = await registry_service.list_agents(db)

    assert {a.name for a in agents} == {"one", "two"}
    assert {a.creator.wallet_address for a in agents} == {CREATOR, OTHER}


async def test_list_agents_by_creator(db: AsyncSession, make_agent):
    await make_agent(CREATOR, name="mine")
    await make_agent(OTHER, name="theirs")

    creator = await identity_service.get_user_by_wallet(db, CREATOR)
    agents = await registry_service.list_agents_by_creator(db, creator.id)

    assert [a.name for a in agents] == ["mine"]


async def test_update_sale_state(db: AsyncSession, make_agent):
    agent = await make_agent(CREATOR)

    updated = await marketplace_service.set_sale_state(
        db, agent.id, CREATOR, True, Decimal("12.50")
    )

    assert updated.is_for_sale is True
    assert updated.price == Decimal("12.50")
