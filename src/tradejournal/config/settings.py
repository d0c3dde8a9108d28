"""Application settings using Pydantic."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Default paths
DEFAULT_DATA_DIR = Path.home() / ".tradejournal"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Storage settings
    data_dir: Path = Field(default=DEFAULT_DATA_DIR)
    data_file: Path | None = Field(default=None)  # Defaults to data_dir/trades.json

    # HTTP server settings
    host: str = Field(default="127.0.0.1")
    port: int = Field(default=3000, ge=1, le=65535)
    cors_origins: list[str] = Field(default=["*"])
    frontend_dir: Path | None = Field(default=None)

    # Logging settings
    log_level: str = Field(default="INFO")
    log_to_file: bool = Field(default=True)
    log_dir: Path | None = Field(default=None)  # Defaults to data_dir/logs
    log_retention_days: int = Field(default=30)

    @property
    def trades_path(self) -> Path:
        """Get the trades document path."""
        if self.data_file:
            return self.data_file
        return self.data_dir / "trades.json"

    @property
    def index_path(self) -> Path | None:
        """Get the front-end entry document, if a front-end is configured."""
        if self.frontend_dir is None:
            return None
        return self.frontend_dir / "index.html"

    @property
    def logs_path(self) -> Path:
        """Get the logs directory path."""
        if self.log_dir:
            return self.log_dir
        return self.data_dir / "logs"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


def setup_logging(settings: Settings | None = None) -> None:
    """Configure loguru for file and console logging.

    Args:
        settings: Optional settings instance. Uses default if not provided.
    """
    import sys

    from loguru import logger

    if settings is None:
        settings = get_settings()

    # Remove default handler
    logger.remove()

    logger.add(
        sys.stderr,
        level=settings.log_level,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>",
    )

    if settings.log_to_file:
        log_path = settings.logs_path
        log_path.mkdir(parents=True, exist_ok=True)

        logger.add(
            log_path / "tradejournal_{time:YYYY-MM-DD}.log",
            level=settings.log_level,
            format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}",
            rotation="00:00",  # Rotate at midnight
            retention=f"{settings.log_retention_days} days",
            compression="gz",
        )

        logger.info(f"Logging to {log_path}")
