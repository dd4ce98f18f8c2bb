"""Identity resolution: wallet address to User, created on first sight."""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from agent_market.core.conditional_insert import insert_if_absent
from agent_market.core.exceptions import UserAlreadyExistsError
from agent_market.models.user import User

logger = logging.getLogger(__name__)


async def get_user_by_wallet(db: AsyncSession, wallet_address: str) -> User | None:
    result = await db.execute(select(User).where(User.wallet_address == wallet_address))
    return result.scalar_one_or_none()


async def resolve_user(db: AsyncSession, wallet_address: str) -> User:
    """Return the user for ``wallet_address``, creating it if needed.

    Idempotent: concurrent first-time calls for the same address race on the
    unique wallet index and exactly one insert wins; the losers read back the
    winner's row.  An existing user is returned unchanged.
    """
    created_id = await insert_if_absent(
        db, User, {"wallet_address": wallet_address}, ["wallet_address"]
    )
    if created_id is not None:
        logger.info("User created: %s (%s)", created_id, wallet_address)

    result = await db.execute(select(User).where(User.wallet_address == wallet_address))
    return result.scalar_one()


async def create_user(db: AsyncSession, wallet_address: str) -> User:
    """Create a user, raising a conflict if the wallet is already registered."""
    created_id = await insert_if_absent(
        db, User, {"wallet_address": wallet_address}, ["wallet_address"]
    )
    if created_id is None:
        raise UserAlreadyExistsError(wallet_address)

    logger.info("User created: %s (%s)", created_id, wallet_address)
    return await db.get(User, created_id)
