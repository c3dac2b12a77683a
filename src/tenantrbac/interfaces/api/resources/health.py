"""Health check endpoints."""

import logging

import falcon
import falcon.asgi
import psycopg

logger = logging.getLogger(__name__)


class HealthResource:
    """Liveness and readiness endpoints."""

    def __init__(self, unit_of_work_factory: type | None = None) -> None:
        self._uow_factory = unit_of_work_factory

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """GET /v1/health - liveness."""
        resp.media = {"success": True, "status": "ok"}
        resp.status = falcon.HTTP_200

    async def on_get_ready(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """GET /v1/health/ready - the tenant table is reachable."""
        if self._uow_factory is not None:
            try:
                async with self._uow_factory() as uow:
                    await uow.tenants.get_by_slug("")
            except psycopg.Error:
                logger.exception("Readiness check failed")
                resp.media = {"success": False, "status": "unavailable"}
                resp.status = falcon.HTTP_503
                return
        resp.media = {"success": True, "status": "ready"}
        resp.status = falcon.HTTP_200
