import logging
import warnings

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Environment
    environment: str = "development"  # development | test | production

    # Server
    host: str = "0.0.0.0"
    port: int = 3000

    # Database (sqlite for local dev, postgresql+asyncpg for production)
    database_url: str = "sqlite+aiosqlite:///./data/agent_market.db"
    db_echo: bool = False
    db_pool_size: int = 20
    db_max_overflow: int = 10
    db_pool_timeout: int = 10
    db_pool_recycle: int = 1800  # Recycle connections every 30 min

    # CORS
    cors_origins: str = "http://localhost:5173,http://localhost:3000"

    # Logging
    log_level: str = "INFO"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}

    @property
    def is_production(self) -> bool:
        return self.environment.lower() in {"production", "prod"}


settings = Settings()

_logger = logging.getLogger("agent_market.config")


def validate_security_posture(cfg: Settings) -> None:
    if cfg.cors_origins == "*":
        if cfg.is_production:
            raise RuntimeError(
                "FATAL: CORS_ORIGINS cannot be '*' in production. "
                "Set explicit trusted origins via the CORS_ORIGINS environment variable."
            )
        _logger.warning(
            "CORS_ORIGINS is set to '*' (allow all). "
            "Configure specific origins for production via the CORS_ORIGINS environment variable."
        )

    if cfg.is_production and cfg.database_url.startswith("sqlite"):
        warnings.warn(
            "DATABASE_URL points at SQLite in production. "
            "Use postgresql+asyncpg:// for concurrent workloads.",
            stacklevel=1,
        )


validate_security_posture(settings)
