"""API router registry used by the app factory.

This keeps route module imports and inclusion order in one place so
`agent_market.main` stays focused on startup wiring.
"""

from __future__ import annotations

from fastapi import APIRouter

from . import agents, users

API_PREFIX = "/api"

API_ROUTERS: tuple[APIRouter, ...] = (
    users.router,
    agents.router,
)

__all__ = ["API_PREFIX", "API_ROUTERS"]
