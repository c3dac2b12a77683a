"""Auth middleware - resolves the bearer token to an Actor once per request."""

import logging

import falcon.asgi

from tenantrbac.application.services.actor_loader import load_actor
from tenantrbac.domain.exceptions import Unauthenticated
from tenantrbac.infrastructure.auth.keycloak_provider import KeycloakProvider

logger = logging.getLogger(__name__)


class AuthMiddleware:
    """Middleware that validates the token and sets req.context.actor.

    The actor is None when no usable token is present; resources then
    answer 401.
    """

    def __init__(self, keycloak_provider: KeycloakProvider | None, unit_of_work_factory: type) -> None:
        self._keycloak = keycloak_provider
        self._uow_factory = unit_of_work_factory

    async def process_request(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """Extract the subject from the Authorization header and load the actor."""
        req.context.actor = None
        auth = req.get_header("Authorization")
        if not auth or not auth.startswith("Bearer ") or not self._keycloak:
            return
        user = self._keycloak.decode_token(auth[7:])
        if not user:
            return
        try:
            async with self._uow_factory() as uow:
                req.context.actor = await load_actor(uow, subject=user.subject)
        except Unauthenticated:
            logger.info("Token subject has no active user", extra={"subject": user.subject})
