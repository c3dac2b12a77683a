"""PostgreSQL async connection pool lifecycle."""

import logging

from psycopg_pool import AsyncConnectionPool

logger = logging.getLogger(__name__)

POOL_NAME = "tenantrbac"


def create_pool(conninfo: str, min_size: int = 2, max_size: int = 10) -> AsyncConnectionPool:
    """Create the pool closed. open_pool() opens it from the ASGI lifespan or the CLI."""
    return AsyncConnectionPool(
        conninfo=conninfo,
        min_size=min_size,
        max_size=max_size,
        name=POOL_NAME,
        open=False,
    )


async def open_pool(pool: AsyncConnectionPool, wait_timeout: float = 10.0) -> None:
    """Open the pool and wait until min_size connections are established.

    Raises psycopg_pool.PoolTimeout if the database is unreachable.
    """
    await pool.open(wait=True, timeout=wait_timeout)
    logger.info(
        "Database pool opened",
        extra={"pool": pool.name, "min_size": pool.min_size, "max_size": pool.max_size},
    )


async def close_pool(pool: AsyncConnectionPool) -> None:
    await pool.close()
    logger.info("Database pool closed", extra={"pool": pool.name})
