"""Fixtures for API tests."""

import pytest
from falcon.testing import TestClient

from tenantrbac.config import Settings
from tenantrbac.interfaces.api.app import create_app
from tenantrbac.main import build_resources


class ActorBypassMiddleware:
    """Middleware that sets context.actor to whatever the test selected."""

    def __init__(self) -> None:
        self.actor = None

    async def process_request(self, req, resp):
        req.context.actor = self.actor


@pytest.fixture
def auth() -> ActorBypassMiddleware:
    return ActorBypassMiddleware()


@pytest.fixture
def app(uow_factory, audit, auth):
    """Falcon ASGI app over the in-memory unit of work."""
    settings = Settings(_env_file=None, default_per_page=15, max_per_page=100)
    return create_app(build_resources(uow_factory, audit, settings), middleware=[auth])


@pytest.fixture
def client(app):
    """Falcon ASGI test client."""
    return TestClient(app)
