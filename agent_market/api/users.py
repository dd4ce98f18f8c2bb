from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from agent_market.api.agents import agent_to_response, owned_agent_to_response
from agent_market.core.wallet import require_wallet_address
from agent_market.database import get_db
from agent_market.schemas.agent import AgentListResponse, OwnedAgentListResponse
from agent_market.schemas.user import UserCreateRequest, UserExistsResponse, UserResponse
from agent_market.services import marketplace_service

router = APIRouter(prefix="/users", tags=["users"])


@router.post("", response_model=UserResponse, status_code=201)
async def create_user(
    req: UserCreateRequest,
    db: AsyncSession = Depends(get_db),
):
    user = await marketplace_service.create_user(db, req.wallet_address)
    return UserResponse.model_validate(user)


@router.get("/{wallet_address}/exists", response_model=UserExistsResponse)
async def user_exists(
    wallet_address: str,
    db: AsyncSession = Depends(get_db),
):
    require_wallet_address(wallet_address)
    exists, user = await marketplace_service.user_exists(db, wallet_address)
    return UserExistsResponse(
        exists=exists,
        user=UserResponse.model_validate(user) if user else None,
    )


@router.get("/{wallet_address}/created-agents", response_model=AgentListResponse)
async def list_created_agents(
    wallet_address: str,
    db: AsyncSession = Depends(get_db),
):
    require_wallet_address(wallet_address)
    agents = await marketplace_service.list_created_agents(db, wallet_address)
    return AgentListResponse(
        total=len(agents),
        agents=[agent_to_response(a) for a in agents],
    )


@router.get("/{wallet_address}/owned-agents", response_model=OwnedAgentListResponse)
async def list_owned_agents(
    wallet_address: str,
    db: AsyncSession = Depends(get_db),
):
    require_wallet_address(wallet_address)
    owned = await marketplace_service.list_owned_agents(db, wallet_address)
    return OwnedAgentListResponse(
        total=len(owned),
        agents=[owned_agent_to_response(agent, purchased_at) for agent, purchased_at in owned],
    )
