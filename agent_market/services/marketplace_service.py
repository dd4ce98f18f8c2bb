"""Marketplace operations: one unit of work per request.

Resolves wallet identities, then drives the agent registry and the ownership
ledger inside a single transaction.  Neither of those services commits; this
module does, and rolls back everything on any failure so that partial state
(an agent without its creator's ownership row, a buyer created for a failed
purchase) is never observable.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from datetime import datetime
from decimal import Decimal
from typing import AsyncIterator

from sqlalchemy.ext.asyncio import AsyncSession

from agent_market.core.exceptions import (
    AgentNotFoundError,
    NotAgentCreatorError,
    UserNotFoundError,
)
from agent_market.models.agent import Agent
from agent_market.models.ownership import AgentOwnership
from agent_market.models.user import User
from agent_market.schemas.agent import AgentCreateRequest
from agent_market.services import identity_service, ownership_service, registry_service

logger = logging.getLogger(__name__)


@asynccontextmanager
async def unit_of_work(db: AsyncSession) -> AsyncIterator[AsyncSession]:
    """Commit on success, roll back and re-raise on any error."""
    try:
        yield db
        await db.commit()
    except Exception:
        await db.rollback()
        raise


# ---------------------------------------------------------------------------
# Users
# ---------------------------------------------------------------------------

async def create_user(db: AsyncSession, wallet_address: str) -> User:
    async with unit_of_work(db):
        user = await identity_service.create_user(db, wallet_address)
    return user


async def user_exists(db: AsyncSession, wallet_address: str) -> tuple[bool, User | None]:
    user = await identity_service.get_user_by_wallet(db, wallet_address)
    return user is not None, user


async def _require_user(db: AsyncSession, wallet_address: str) -> User:
    user = await identity_service.get_user_by_wallet(db, wallet_address)
    if user is None:
        raise UserNotFoundError(wallet_address)
    return user


async def list_created_agents(db: AsyncSession, wallet_address: str) -> list[Agent]:
    user = await _require_user(db, wallet_address)
    return await registry_service.list_agents_by_creator(db, user.id)


async def list_owned_agents(
    db: AsyncSession, wallet_address: str
) -> list[tuple[Agent, datetime]]:
    user = await _require_user(db, wallet_address)
    return await ownership_service.list_owned_by(db, user.id)


# ---------------------------------------------------------------------------
# Agents
# ---------------------------------------------------------------------------

async def create_agent(db: AsyncSession, req: AgentCreateRequest) -> Agent:
    """Create an agent and record its creator as first owner, atomically."""
    async with unit_of_work(db):
        creator = await identity_service.resolve_user(db, req.creator_wallet_address)
        agent = await registry_service.create_agent(db, req, creator)
        await ownership_service.grant_creator_ownership(db, agent, creator)

    logger.info("Agent created: %s '%s' by %s", agent.id, agent.name, creator.wallet_address)
    return agent


async def list_agents(db: AsyncSession) -> list[Agent]:
    return await registry_service.list_agents(db)


async def get_agent(db: AsyncSession, agent_id: str) -> Agent:
    return await registry_service.get_agent(db, agent_id)


async def get_agent_by_external_id(db: AsyncSession, external_id: int) -> Agent:
    agent = await registry_service.get_agent_by_external_id(db, external_id)
    if agent is None:
        raise AgentNotFoundError(f"with smart contract ID {external_id}")
    return agent


async def external_id_exists(db: AsyncSession, external_id: int) -> tuple[bool, str | None]:
    agent_id = await registry_service.external_id_exists(db, external_id)
    return agent_id is not None, agent_id


async def set_sale_state(
    db: AsyncSession,
    agent_id: str,
    creator_wallet_address: str,
    is_for_sale: bool,
    price: Decimal | None = None,
) -> Agent:
    """Open or close an agent's sale gate on behalf of its creator."""
    async with unit_of_work(db):
        agent = await registry_service.get_agent(db, agent_id)
        user = await identity_service.get_user_by_wallet(db, creator_wallet_address)
        if user is None or agent.creator_id != user.id:
            raise NotAgentCreatorError(agent_id)
        await registry_service.update_sale_state(db, agent, is_for_sale, price)

    logger.info("Agent %s sale state: for_sale=%s price=%s", agent.id, agent.is_for_sale, agent.price)
    return agent


# ---------------------------------------------------------------------------
# Ownership
# ---------------------------------------------------------------------------

async def purchase_agent(
    db: AsyncSession, agent_id: str, buyer_wallet_address: str
) -> tuple[AgentOwnership, Agent]:
    """Resolve the buyer and grant ownership, in one transaction."""
    async with unit_of_work(db):
        buyer = await identity_service.resolve_user(db, buyer_wallet_address)
        ownership, agent = await ownership_service.purchase(db, agent_id, buyer)
    return ownership, agent


async def check_ownership(
    db: AsyncSession, agent_id: str, wallet_address: str
) -> tuple[bool, AgentOwnership | None]:
    """Ownership gate for feature access; an unknown wallet simply does not own."""
    user = await identity_service.get_user_by_wallet(db, wallet_address)
    if user is None:
        return False, None
    ownership = await ownership_service.get_ownership(db, agent_id, user.id)
    return ownership is not None, ownership
