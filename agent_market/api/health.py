import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from agent_market import __version__
from agent_market.database import get_db
from agent_market.models.agent import Agent
from agent_market.models.ownership import AgentOwnership
from agent_market.models.user import User
from agent_market.schemas.common import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])

_VERSION = __version__


@router.get("/")
async def root() -> dict:
    return {
        "status": "ok",
        "message": "Agents API is running",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@router.get("/health", response_model=HealthResponse)
async def health_check(db: AsyncSession = Depends(get_db)):
    users = (await db.execute(select(func.count(User.id)))).scalar() or 0
    agents = (await db.execute(select(func.count(Agent.id)))).scalar() or 0
    ownerships = (await db.execute(select(func.count(AgentOwnership.id)))).scalar() or 0

    return HealthResponse(
        status="healthy",
        version=_VERSION,
        users_count=users,
        agents_count=agents,
        ownerships_count=ownerships,
    )


@router.get("/health/ready")
async def readiness_check(request: Request):
    """Readiness probe: verifies DB connectivity."""
    try:
        await request.app.state.database.ping()
        return {"status": "ready", "database": "connected"}
    except Exception:
        logger.exception("Readiness check failed, database unreachable")
        return JSONResponse(
            status_code=503,
            content={"status": "not_ready", "database": "unavailable"},
        )
