import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, ForeignKey, Index, String, UniqueConstraint

from agent_market.database import Base


def utcnow():
    return datetime.now(timezone.utc)


class AgentOwnership(Base):
    """Non-exclusive grant: one row per (agent, user), never transferred."""

    __tablename__ = "agent_ownerships"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    agent_id = Column(String(36), ForeignKey("agents.id"), nullable=False)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False)
    purchased_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    __table_args__ = (
        UniqueConstraint("agent_id", "user_id", name="uq_ownership_agent_user"),
        Index("idx_ownership_user", "user_id"),
    )
