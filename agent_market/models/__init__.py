from agent_market.models.user import User
from agent_market.models.agent import Agent
from agent_market.models.ownership import AgentOwnership

__all__ = [
    "User",
    "Agent",
    "AgentOwnership",
]
