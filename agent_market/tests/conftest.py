"""Shared test fixtures for the agent market test suite.

Uses an in-memory SQLite database with StaticPool so all sessions share the
same connection (committed data is visible across sessions).
"""

from decimal import Decimal

import pytest
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.pool import StaticPool

from agent_market.database import Database
from agent_market.main import app
from agent_market.models import *  # noqa: ensure all models are loaded for create_all


# ---------------------------------------------------------------------------
# In-memory SQLite test database (shared via StaticPool)
# ---------------------------------------------------------------------------

test_database = Database(
    "sqlite+aiosqlite:///:memory:",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)


def _wallet(char: str) -> str:
    """Build a valid wallet address from a single repeated hex digit."""
    return "0x" + char * 40


# ---------------------------------------------------------------------------
# Auto-use: create/drop tables for every test
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
async def _setup_db():
    """Create all tables before each test, drop after."""
    await test_database.create_all()
    yield
    await test_database.drop_all()


# ---------------------------------------------------------------------------
# Core fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
async def db():
    """Yield a fresh AsyncSession for direct service-layer tests."""
    async with test_database.session() as session:
        yield session


@pytest.fixture
async def client():
    """httpx AsyncClient wired to the FastAPI app with the test database."""
    import httpx

    previous = app.state.database
    app.state.database = test_database

    async with httpx.AsyncClient(
        transport=httpx.ASGITransport(app=app),
        base_url="http://test",
    ) as c:
        yield c

    app.state.database = previous


# ---------------------------------------------------------------------------
# Seeding helpers
# ---------------------------------------------------------------------------

@pytest.fixture
def make_agent_request():
    """Factory fixture: build an AgentCreateRequest with sensible defaults."""
    from agent_market.schemas.agent import AgentCreateRequest

    def _make(creator_wallet_address: str = None, **overrides):
        fields = {
            "name": "Research Assistant",
            "description": "Searches and summarises sources",
            "model": "gpt-4o",
            "capabilities": ["search", "summarize"],
            "price": Decimal("0"),
            "is_for_sale": False,
            "creator_wallet_address": creator_wallet_address or _wallet("B"),
        }
        fields.update(overrides)
        return AgentCreateRequest(**fields)

    return _make


@pytest.fixture
def make_agent(db: AsyncSession, make_agent_request):
    """Factory fixture: create an agent (and its creator ownership) through the service layer."""
    from agent_market.services import marketplace_service

    async def _make(creator_wallet_address: str = None, **overrides):
        req = make_agent_request(creator_wallet_address, **overrides)
        return await marketplace_service.create_agent(db, req)

    return _make


@pytest.fixture
def count_rows(db: AsyncSession):
    """Return a callable that counts rows of a model, optionally filtered."""

    async def _count(model, *criteria) -> int:
        stmt = select(func.count(model.id))
        for criterion in criteria:
            stmt = stmt.where(criterion)
        return (await db.execute(stmt)).scalar() or 0

    return _count
