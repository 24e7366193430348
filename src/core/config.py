"""Configuration management for the PostgreSQL MCP gateway."""

import logging
import os
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from dotenv import load_dotenv

from core.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


def load_env_file(env_file: Optional[str] = None) -> Optional[Path]:
    """Load a .env file into the process environment.

    Lookup order: explicit path, ENV_FILE_PATH, current directory, project root.
    Variables already present in the environment are never overridden.

    Returns:
        Path of the file that was loaded, or None
    """
    candidates = []
    explicit = env_file or os.getenv("ENV_FILE_PATH")
    if explicit:
        candidates.append(Path(explicit))
    candidates.extend([
        Path.cwd() / ".env",
        Path(__file__).parent.parent.parent / ".env",
    ])

    for env_path in candidates:
        if env_path.exists():
            load_dotenv(str(env_path), override=False)
            logger.debug(f"Loaded environment from {env_path}")
            return env_path

    if explicit:
        logger.warning(f"Env file not found: {explicit}")
    return None


def _env_int(name: str, default: int) -> int:
    """Read an integer environment variable, falling back on unset or blank values."""
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw.strip())
    except ValueError:
        raise ConfigurationError(
            f"{name} must be an integer, got {raw!r}",
            {"variable": name, "value": raw},
        )


class DatabaseConfig(BaseModel):
    """PostgreSQL connection and pool configuration."""

    model_config = ConfigDict(frozen=True)

    host: str = Field(default="localhost", description="Database server hostname or IP")
    port: int = Field(default=5432, description="Database server port")
    database: str = Field(default="postgres", description="Database name")
    user: str = Field(default="postgres", description="Database user")
    password: str = Field(default="", description="Database password")
    pool_min_size: int = Field(default=0, ge=0, description="Connections kept open when idle")
    pool_max_size: int = Field(default=20, ge=1, description="Maximum pooled connections")
    idle_timeout_ms: int = Field(default=30000, ge=0, description="Idle connection lifetime")
    connect_timeout_ms: int = Field(default=2000, ge=0, description="Connection establishment timeout")

    @classmethod
    def from_env(cls) -> "DatabaseConfig":
        """Create configuration from environment variables."""
        return cls(
            host=os.getenv("POSTGRES_HOST") or "localhost",
            port=_env_int("POSTGRES_PORT", 5432),
            database=os.getenv("POSTGRES_DB") or "postgres",
            user=os.getenv("POSTGRES_USER") or "postgres",
            password=os.getenv("POSTGRES_PASSWORD", ""),
            pool_min_size=_env_int("POSTGRES_POOL_MIN_SIZE", 0),
            pool_max_size=_env_int("POSTGRES_POOL_MAX_SIZE", 20),
            idle_timeout_ms=_env_int("POSTGRES_IDLE_TIMEOUT", 30000),
            connect_timeout_ms=_env_int("POSTGRES_CONNECT_TIMEOUT", 2000),
        )

    def describe(self) -> str:
        """Connection target without credentials, for logs."""
        return f"{self.user}@{self.host}:{self.port}/{self.database}"


class ToolDefaults(BaseModel):
    """Fallback values applied when a tool call omits an optional argument."""

    model_config = ConfigDict(frozen=True)

    schema_name: str = Field(default="public", description="Default schema")
    context: str = Field(default="", description="Default free-text context")
    max_rows: int = Field(default=100, description="Default automatic LIMIT")
    timeout_ms: int = Field(default=30000, ge=0, description="Per-call deadline, 0 disables it")

    @classmethod
    def from_env(cls) -> "ToolDefaults":
        """Create tool defaults from environment variables."""
        return cls(
            schema_name=os.getenv("POSTGRES_DEFAULT_SCHEMA") or "public",
            context=os.getenv("POSTGRES_DEFAULT_CONTEXT", ""),
            max_rows=_env_int("POSTGRES_MAX_ROWS", 100),
            timeout_ms=_env_int("POSTGRES_TIMEOUT", 30000),
        )

    @property
    def timeout_seconds(self) -> Optional[float]:
        if self.timeout_ms <= 0:
            return None
        return self.timeout_ms / 1000


class AppConfig(BaseModel):
    """Application configuration combining all configs."""

    model_config = ConfigDict(frozen=True)

    database: DatabaseConfig
    defaults: ToolDefaults
    server_name: str = Field(default="postgres-mcp-server", description="MCP server name identifier")
    log_level: str = Field(default="INFO", description="Root log level")

    @classmethod
    def from_env(cls) -> "AppConfig":
        """Create full application configuration from environment variables."""
        return cls(
            database=DatabaseConfig.from_env(),
            defaults=ToolDefaults.from_env(),
            server_name=os.getenv("MCP_SERVER_NAME") or "postgres-mcp-server",
            log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
        )
