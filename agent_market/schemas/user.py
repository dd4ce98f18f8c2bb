from datetime import datetime

from pydantic import BaseModel, Field

from agent_market.core.wallet import WALLET_ADDRESS_LENGTH, WALLET_ADDRESS_PATTERN


class UserCreateRequest(BaseModel):
    wallet_address: str = Field(
        ...,
        min_length=WALLET_ADDRESS_LENGTH,
        max_length=WALLET_ADDRESS_LENGTH,
        pattern=WALLET_ADDRESS_PATTERN,
    )


class UserResponse(BaseModel):
    id: str
    wallet_address: str
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class UserExistsResponse(BaseModel):
    exists: bool
    user: UserResponse | None = None
