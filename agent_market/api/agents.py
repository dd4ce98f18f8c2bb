from datetime import datetime

from fastapi import APIRouter, Depends, Path
from sqlalchemy.ext.asyncio import AsyncSession

from agent_market.core.wallet import require_wallet_address
from agent_market.database import get_db
from agent_market.models.agent import Agent
from agent_market.schemas.agent import (
    AgentCreateRequest,
    AgentListResponse,
    AgentResponse,
    AgentSaleUpdateRequest,
    EXTERNAL_ID_MAX,
    CreatorSummary,
    ExternalIdExistsResponse,
    OwnedAgentResponse,
)
from agent_market.schemas.ownership import (
    OwnershipCheckResponse,
    OwnershipResponse,
    PurchaseRequest,
    PurchaseResponse,
)
from agent_market.services import marketplace_service

router = APIRouter(prefix="/agents", tags=["agents"])


@router.post("", response_model=AgentResponse, status_code=201)
async def create_agent(
    req: AgentCreateRequest,
    db: AsyncSession = Depends(get_db),
):
    agent = await marketplace_service.create_agent(db, req)
    return agent_to_response(agent)


@router.get("", response_model=AgentListResponse)
async def list_agents(db: AsyncSession = Depends(get_db)):
    agents = await marketplace_service.list_agents(db)
    return AgentListResponse(
        total=len(agents),
        agents=[agent_to_response(a) for a in agents],
    )


@router.post("/buy", response_model=PurchaseResponse)
async def purchase_agent(
    req: PurchaseRequest,
    db: AsyncSession = Depends(get_db),
):
    ownership, agent = await marketplace_service.purchase_agent(
        db, req.agent_id, req.buyer_wallet_address
    )
    return PurchaseResponse(
        ownership=OwnershipResponse.model_validate(ownership),
        agent=agent_to_response(agent),
    )


@router.get("/by-contract/{external_id}", response_model=AgentResponse)
async def get_agent_by_external_id(
    external_id: int = Path(..., gt=0, le=EXTERNAL_ID_MAX),
    db: AsyncSession = Depends(get_db),
):
    agent = await marketplace_service.get_agent_by_external_id(db, external_id)
    return agent_to_response(agent)


@router.get("/contract-id/{external_id}/exists", response_model=ExternalIdExistsResponse)
async def external_id_exists(
    external_id: int = Path(..., gt=0, le=EXTERNAL_ID_MAX),
    db: AsyncSession = Depends(get_db),
):
    exists, agent_id = await marketplace_service.external_id_exists(db, external_id)
    return ExternalIdExistsResponse(exists=exists, agent_id=agent_id)


@router.get("/{agent_id}", response_model=AgentResponse)
async def get_agent(
    agent_id: str,
    db: AsyncSession = Depends(get_db),
):
    agent = await marketplace_service.get_agent(db, agent_id)
    return agent_to_response(agent)


@router.get("/{agent_id}/ownership/{wallet_address}", response_model=OwnershipCheckResponse)
async def check_ownership(
    agent_id: str,
    wallet_address: str,
    db: AsyncSession = Depends(get_db),
):
    require_wallet_address(wallet_address)
    owns, ownership = await marketplace_service.check_ownership(db, agent_id, wallet_address)
    return OwnershipCheckResponse(
        owns=owns,
        ownership=OwnershipResponse.model_validate(ownership) if ownership else None,
    )


@router.patch("/{agent_id}/sale", response_model=AgentResponse)
async def set_sale_state(
    agent_id: str,
    req: AgentSaleUpdateRequest,
    db: AsyncSession = Depends(get_db),
):
    agent = await marketplace_service.set_sale_state(
        db, agent_id, req.creator_wallet_address, req.is_for_sale, req.price
    )
    return agent_to_response(agent)


def agent_to_response(agent: Agent) -> AgentResponse:
    creator = agent.creator
    return AgentResponse(
        id=agent.id,
        external_id=agent.external_id,
        name=agent.name,
        description=agent.description,
        model=agent.model,
        capabilities=list(agent.capabilities or []),
        price=float(agent.price),
        is_for_sale=agent.is_for_sale,
        creator_id=agent.creator_id,
        creator=CreatorSummary(id=creator.id, wallet_address=creator.wallet_address) if creator else None,
        created_at=agent.created_at,
        updated_at=agent.updated_at,
    )


def owned_agent_to_response(agent: Agent, purchased_at: datetime) -> OwnedAgentResponse:
    return OwnedAgentResponse(
        **agent_to_response(agent).model_dump(),
        purchased_at=purchased_at,
    )
