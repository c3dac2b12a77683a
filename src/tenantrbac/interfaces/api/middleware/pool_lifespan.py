"""ASGI lifespan hooks for the database pool."""

from typing import Any

from psycopg_pool import AsyncConnectionPool

from tenantrbac.infrastructure.persistence.postgres.connection import close_pool, open_pool


class PoolLifespanMiddleware:
    """Open the pool before the first request is served, close it on shutdown."""

    def __init__(self, pool: AsyncConnectionPool, wait_timeout: float = 10.0) -> None:
        self._pool = pool
        self._wait_timeout = wait_timeout

    async def process_startup(self, scope: dict[str, Any], event: dict[str, Any]) -> None:
        await open_pool(self._pool, self._wait_timeout)

    async def process_shutdown(self, scope: dict[str, Any], event: dict[str, Any]) -> None:
        await close_pool(self._pool)
