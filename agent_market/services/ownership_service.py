"""Ownership ledger: which users hold which agents.

Ownership is a non-exclusive grant: any number of users may each own the
same agent, but a given user holds at most one record per agent.  That rule
lives in the ``uq_ownership_agent_user`` constraint, and purchases go through
a conditional insert against it rather than a separate existence check.

Key design decisions:
- **Canonical reference**: rows always point at ``agents.id`` (internal ID),
  never at the on-chain ``external_id``.
- **Ordered preconditions**: a purchase fails with *not found*, then *not
  for sale*, then *already owned*, in that order.
- **Shared lock on PostgreSQL**: the agent row is read ``FOR SHARE`` so the
  sale gate cannot close between the check and the insert.  SQLite
  serialises writers and needs no lock.
- **No commits**: the caller owns the transaction boundary.
"""

from __future__ import annotations

import logging
from datetime import datetime

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from agent_market.core.conditional_insert import insert_if_absent
from agent_market.core.exceptions import (
    AgentNotForSaleError,
    AgentNotFoundError,
    AlreadyOwnedError,
)
from agent_market.models.agent import Agent
from agent_market.models.ownership import AgentOwnership
from agent_market.models.user import User

logger = logging.getLogger(__name__)


async def _load_agent_for_purchase(db: AsyncSession, agent_id: str) -> Agent | None:
    stmt = select(Agent).where(Agent.id == agent_id)
    if db.get_bind().dialect.name != "sqlite":
        stmt = stmt.with_for_update(read=True)
    result = await db.execute(stmt)
    return result.scalar_one_or_none()


async def grant_creator_ownership(db: AsyncSession, agent: Agent, creator: User) -> AgentOwnership:
    """Stage the creator's first-owner record for a freshly created agent."""
    ownership = AgentOwnership(agent_id=agent.id, user_id=creator.id)
    db.add(ownership)
    await db.flush()
    return ownership


async def purchase(
    db: AsyncSession, agent_id: str, buyer: User
) -> tuple[AgentOwnership, Agent]:
    """Grant ``buyer`` ownership of a listed agent.

    Returns the new ownership together with the agent's current state.
    """
    agent = await _load_agent_for_purchase(db, agent_id)
    if agent is None:
        raise AgentNotFoundError(agent_id)
    if not agent.is_for_sale:
        raise AgentNotForSaleError(agent_id)

    ownership_id = await insert_if_absent(
        db,
        AgentOwnership,
        {"agent_id": agent.id, "user_id": buyer.id},
        ["agent_id", "user_id"],
    )
    if ownership_id is None:
        logger.info("Duplicate purchase rejected: agent=%s buyer=%s", agent.id, buyer.id)
        raise AlreadyOwnedError(agent_id)

    ownership = await db.get(AgentOwnership, ownership_id)
    logger.info("Agent purchased: agent=%s buyer=%s", agent.id, buyer.id)
    return ownership, agent


async def get_ownership(db: AsyncSession, agent_id: str, user_id: str) -> AgentOwnership | None:
    result = await db.execute(
        select(AgentOwnership).where(
            AgentOwnership.agent_id == agent_id,
            AgentOwnership.user_id == user_id,
        )
    )
    return result.scalar_one_or_none()


async def list_owned_by(db: AsyncSession, user_id: str) -> list[tuple[Agent, datetime]]:
    """Agents held by ``user_id`` with the time each was acquired, newest first."""
    result = await db.execute(
        select(Agent, AgentOwnership.purchased_at)
        .join(AgentOwnership, AgentOwnership.agent_id == Agent.id)
        .where(AgentOwnership.user_id == user_id)
        .order_by(AgentOwnership.purchased_at.desc())
    )
    return [(agent, purchased_at) for agent, purchased_at in result.all()]
