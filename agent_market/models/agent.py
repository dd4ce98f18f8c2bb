import uuid
from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import JSON, Boolean, Column, DateTime, ForeignKey, Index, Integer, Numeric, String, Text
from sqlalchemy.orm import relationship

from agent_market.database import Base


def utcnow():
    return datetime.now(timezone.utc)


class Agent(Base):
    __tablename__ = "agents"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    # Smart contract agent ID; NULL for agents created off-chain
    external_id = Column(Integer, unique=True, nullable=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    model = Column(String(100), nullable=False)
    capabilities = Column(JSON, nullable=False)  # ordered list of strings
    price = Column(Numeric(10, 2), nullable=False, default=Decimal("0"))
    is_for_sale = Column(Boolean, nullable=False, default=False)
    creator_id = Column(String(36), ForeignKey("users.id"), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    # Relationships
    creator = relationship("User", lazy="selectin")

    __table_args__ = (
        Index("idx_agents_creator", "creator_id"),
        Index("idx_agents_for_sale", "is_for_sale"),
    )
