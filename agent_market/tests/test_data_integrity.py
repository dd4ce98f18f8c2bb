"""Store-level constraints: the backstop behind every "at most one" rule.

Rows are inserted directly through the ORM to bypass the service layer.
"""

import uuid

import pytest
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from agent_market.models.agent import Agent
from agent_market.models.ownership import AgentOwnership
from agent_market.models.user import User


def _id() -> str:
    return str(uuid.uuid4())


async def _user(db: AsyncSession, char: str = "A") -> User:
    user = User(id=_id(), wallet_address="0x" + char * 40)
    db.add(user)
    await db.commit()
    return user


def _agent(creator_id: str, external_id: int | None = None) -> Agent:
    return Agent(
        id=_id(),
        name="agent",
        description="desc",
        model="model",
        capabilities=["search"],
        creator_id=creator_id,
        external_id=external_id,
    )


async def test_wallet_address_unique(db: AsyncSession):
    await _user(db, "A")

    db.add(User(id=_id(), wallet_address="0x" + "A" * 40))
    with pytest.raises(IntegrityError):
        await db.commit()
    await db.rollback()


async def test_external_id_unique(db: AsyncSession):
    user = await _user(db)
    user_id = user.id
    db.add(_agent(user_id, external_id=1))
    await db.commit()

    db.add(_agent(user_id, external_id=1))
    with pytest.raises(IntegrityError):
        await db.commit()
    await db.rollback()


async def test_null_external_ids_do_not_collide(db: AsyncSession, count_rows):
    user = await _user(db)
    db.add(_agent(user.id))
    db.add(_agent(user.id))
    await db.commit()

    assert await count_rows(Agent) == 2


async def test_ownership_pair_unique(db: AsyncSession):
    user = await _user(db)
    user_id = user.id
    agent = _agent(user_id)
    db.add(agent)
    await db.commit()
    agent_id = agent.id

    db.add(AgentOwnership(id=_id(), agent_id=agent_id, user_id=user_id))
    await db.commit()

    db.add(AgentOwnership(id=_id(), agent_id=agent_id, user_id=user_id))
    with pytest.raises(IntegrityError):
        await db.commit()
    await db.rollback()


async def test_ownership_requires_existing_agent(db: AsyncSession):
    user = await _user(db)

    db.add(AgentOwnership(id=_id(), agent_id=_id(), user_id=user.id))
    with pytest.raises(IntegrityError):
        await db.commit()
    await db.rollback()
