from datetime import datetime

from pydantic import BaseModel, Field

from agent_market.core.wallet import WALLET_ADDRESS_LENGTH, WALLET_ADDRESS_PATTERN
from agent_market.schemas.agent import AgentResponse


class PurchaseRequest(BaseModel):
    agent_id: str = Field(..., min_length=1, max_length=36)
    buyer_wallet_address: str = Field(
        ...,
        min_length=WALLET_ADDRESS_LENGTH,
        max_length=WALLET_ADDRESS_LENGTH,
        pattern=WALLET_ADDRESS_PATTERN,
    )


class OwnershipResponse(BaseModel):
    id: str
    agent_id: str
    user_id: str
    purchased_at: datetime

    model_config = {"from_attributes": True}


class PurchaseResponse(BaseModel):
    message: str = "Agent purchased successfully"
    ownership: OwnershipResponse
    agent: AgentResponse


class OwnershipCheckResponse(BaseModel):
    owns: bool
    ownership: OwnershipResponse | None = None
