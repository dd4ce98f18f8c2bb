from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field

from agent_market.core.wallet import WALLET_ADDRESS_LENGTH, WALLET_ADDRESS_PATTERN

# agents.external_id is a 32-bit INTEGER column on PostgreSQL
EXTERNAL_ID_MAX = 2_147_483_647


class AgentCreateRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: str = Field(..., min_length=1, max_length=1000)
    model: str = Field(..., min_length=1, max_length=100)
    capabilities: list[str] = Field(..., min_length=1)
    price: Decimal | None = Field(default=None, ge=0, max_digits=10, decimal_places=2)
    is_for_sale: bool | None = None
    creator_wallet_address: str = Field(
        ...,
        min_length=WALLET_ADDRESS_LENGTH,
        max_length=WALLET_ADDRESS_LENGTH,
        pattern=WALLET_ADDRESS_PATTERN,
    )
    # Smart contract agent ID
    external_id: int | None = Field(default=None, gt=0, le=EXTERNAL_ID_MAX)


class AgentSaleUpdateRequest(BaseModel):
    creator_wallet_address: str = Field(
        ...,
        min_length=WALLET_ADDRESS_LENGTH,
        max_length=WALLET_ADDRESS_LENGTH,
        pattern=WALLET_ADDRESS_PATTERN,
    )
    is_for_sale: bool
    price: Decimal | None = Field(default=None, ge=0, max_digits=10, decimal_places=2)


class CreatorSummary(BaseModel):
    id: str
    wallet_address: str


class AgentResponse(BaseModel):
    id: str
    external_id: int | None = None
    name: str
    description: str
    model: str
    capabilities: list[str]
    price: float
    is_for_sale: bool
    creator_id: str
    creator: CreatorSummary | None = None
    created_at: datetime
    updated_at: datetime


class OwnedAgentResponse(AgentResponse):
    purchased_at: datetime


class AgentListResponse(BaseModel):
    total: int
    agents: list[AgentResponse]


class OwnedAgentListResponse(BaseModel):
    total: int
    agents: list[OwnedAgentResponse]


class ExternalIdExistsResponse(BaseModel):
    exists: bool
    agent_id: str | None = None
