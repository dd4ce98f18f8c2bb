"""Agent registry: canonical agent records keyed by internal and on-chain id.

Functions here only stage changes (``flush``); the caller owns the commit so
that agent creation and the creator's ownership grant land atomically.
"""

import logging
from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from agent_market.core.exceptions import AgentNotFoundError, ExternalIdConflictError
from agent_market.models.agent import Agent
from agent_market.models.user import User
from agent_market.schemas.agent import AgentCreateRequest

logger = logging.getLogger(__name__)


async def find_agent(db: AsyncSession, agent_id: str) -> Agent | None:
    result = await db.execute(select(Agent).where(Agent.id == agent_id))
    return result.scalar_one_or_none()


async def get_agent(db: AsyncSession, agent_id: str) -> Agent:
    """Get an agent by internal ID or raise 404."""
    agent = await find_agent(db, agent_id)
    if agent is None:
        raise AgentNotFoundError(agent_id)
    return agent


async def get_agent_by_external_id(db: AsyncSession, external_id: int) -> Agent | None:
    result = await db.execute(select(Agent).where(Agent.external_id == external_id))
    return result.scalar_one_or_none()


async def external_id_exists(db: AsyncSession, external_id: int) -> str | None:
    """Return the internal ID of the agent holding ``external_id``, if any."""
    result = await db.execute(select(Agent.id).where(Agent.external_id == external_id))
    return result.scalar_one_or_none()


async def create_agent(db: AsyncSession, req: AgentCreateRequest, creator: User) -> Agent:
    """Stage a new agent owned by ``creator``.

    The external-ID lookup gives a clean conflict for the common case; the
    unique index on ``agents.external_id`` settles concurrent inserts, and
    the resulting ``IntegrityError`` is reported as the same conflict.
    """
    if req.external_id is not None and await external_id_exists(db, req.external_id):
        raise ExternalIdConflictError(req.external_id)

    agent = Agent(
        name=req.name,
        description=req.description,
        model=req.model,
        capabilities=list(req.capabilities),
        price=req.price if req.price is not None else Decimal("0"),
        is_for_sale=bool(req.is_for_sale),
        creator=creator,
        external_id=req.external_id,
    )
    db.add(agent)
    try:
        await db.flush()
    except IntegrityError as exc:
        if req.external_id is None:
            raise
        logger.warning("Lost external ID race for %s: %s", req.external_id, exc.orig)
        raise ExternalIdConflictError(req.external_id) from exc
    return agent


async def list_agents(db: AsyncSession) -> list[Agent]:
    """All agents, newest first, with their creator loaded."""
    result = await db.execute(select(Agent).order_by(Agent.created_at.desc()))
    return list(result.scalars().all())


async def list_agents_by_creator(db: AsyncSession, user_id: str) -> list[Agent]:
    result = await db.execute(
        select(Agent).where(Agent.creator_id == user_id).order_by(Agent.created_at.desc())
    )
    return list(result.scalars().all())


async def update_sale_state(
    db: AsyncSession,
    agent: Agent,
    is_for_sale: bool,
    price: Decimal | None = None,
) -> Agent:
    """Open or close the for-sale gate, optionally repricing."""
    agent.is_for_sale = is_for_sale
    if price is not None:
        agent.price = price
    agent.updated_at = datetime.now(timezone.utc)
    await db.flush()
    return agent
