"""Process-wide asyncpg connection pool."""

import logging
from contextlib import asynccontextmanager
from typing import Any, Dict, Optional

import asyncpg

from core.config import DatabaseConfig
from core.exceptions import DatabaseConnectionError

logger = logging.getLogger(__name__)


class ConnectionPool:
    """
    Bounded pool of reusable PostgreSQL connections.

    Concurrency safety is asyncpg's; this class only fixes the pool settings
    and exposes scoped acquisition so every connection handed out is returned
    exactly once.
    """

    def __init__(self, config: DatabaseConfig):
        """
        Initialize pool wrapper.

        Note: Call initialize() (or use create_and_initialize) before acquiring.
        """
        self.config = config
        self._pool: Optional[asyncpg.Pool] = None

    @property
    def is_initialized(self) -> bool:
        return self._pool is not None

    async def initialize(self):
        """Create the asyncpg pool."""
        if self._pool is not None:
            logger.warning("ConnectionPool already initialized")
            return

        try:
            self._pool = await asyncpg.create_pool(
                host=self.config.host,
                port=self.config.port,
                database=self.config.database,
                user=self.config.user,
                password=self.config.password or None,
                min_size=self.config.pool_min_size,
                max_size=self.config.pool_max_size,
                max_inactive_connection_lifetime=self.config.idle_timeout_ms / 1000,
                timeout=self.config.connect_timeout_ms / 1000,
            )
        except (OSError, asyncpg.PostgresError, asyncpg.InterfaceError) as e:
            logger.error(f"Failed to initialize PostgreSQL pool for {self.config.describe()}: {e}")
            raise DatabaseConnectionError(
                f"Could not create connection pool: {e}",
                {"target": self.config.describe()},
            ) from e

        logger.info(
            f"✅ PostgreSQL connection pool initialized for {self.config.describe()} "
            f"(size: {self.config.pool_min_size}-{self.config.pool_max_size})"
        )

    @asynccontextmanager
    async def acquire(self):
        """Borrow one connection for the duration of the ``async with`` block."""
        if self._pool is None:
            await self.initialize()

        async with self._pool.acquire() as conn:
            yield conn

    async def test_connection(self) -> Dict[str, Any]:
        """Run a trivial statement to confirm the server is reachable."""
        try:
            async with self.acquire() as conn:
                version = await conn.fetchval("SELECT version()")
                return {
                    "success": True,
                    "message": "Connection successful",
                    "server_info": {
                        "server_version": version,
                        "database": self.config.database,
                    }
                }
        except (OSError, asyncpg.PostgresError, asyncpg.InterfaceError, DatabaseConnectionError) as e:
            logger.warning(f"PostgreSQL connection test failed: {e}")
            return {
                "success": False,
                "error": str(e),
                "message": f"Connection test failed: {e}",
            }

    async def close(self):
        """Close all pooled connections."""
        if self._pool is not None:
            await self._pool.close()
            self._pool = None
            logger.info("PostgreSQL connection pool closed")

    @classmethod
    async def create_and_initialize(cls, config: DatabaseConfig) -> "ConnectionPool":
        """Factory method to create and initialize a pool."""
        pool = cls(config)
        await pool.initialize()
        return pool
