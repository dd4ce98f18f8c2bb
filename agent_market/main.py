import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from agent_market import __version__
from agent_market.config import Settings, settings
from agent_market.database import Database
from agent_market.models import *  # noqa: F403

APP_VERSION = __version__
logger = logging.getLogger(__name__)


def configure_logging(cfg: Settings) -> None:
    logging.basicConfig(
        level=cfg.log_level.upper(),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    # Startup: open the connection pool (unless one was injected) and create tables
    owns_database = getattr(app.state, "database", None) is None
    if owns_database:
        app.state.database = Database.from_settings(settings)
    await app.state.database.create_all()
    logger.info("Agent market started (environment=%s)", settings.environment)

    yield

    # Shutdown: dispose connection pool
    if owns_database:
        await app.state.database.dispose()
        app.state.database = None


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        response: Response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"
        return response


async def _database_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.exception("Database error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


def create_app(database: Database | None = None) -> FastAPI:
    configure_logging(settings)

    app = FastAPI(
        title="Agent Market",
        description="Create, list and purchase AI agents identified by wallet address",
        version=APP_VERSION,
        lifespan=lifespan,
    )
    app.state.database = database

    # CORS configurable via CORS_ORIGINS env var
    allowed_origins = [o.strip() for o in settings.cors_origins.split(",") if o.strip()]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Security headers
    app.add_middleware(SecurityHeadersMiddleware)

    # Infrastructure failures are logged and surfaced without internals
    app.add_exception_handler(SQLAlchemyError, _database_error_handler)

    from agent_market.api import API_PREFIX, API_ROUTERS
    from agent_market.api import health

    app.include_router(health.router)
    for router in API_ROUTERS:
        app.include_router(router, prefix=API_PREFIX)

    return app


app = create_app()


def run() -> None:
    import uvicorn

    uvicorn.run("agent_market.main:app", host=settings.host, port=settings.port)
