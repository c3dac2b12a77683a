"""Map domain exceptions to HTTP responses."""

import logging

import falcon
import falcon.asgi

from tenantrbac.domain.exceptions import (
    HasDependents,
    Immutable,
    NotFound,
    PermissionDenied,
    TenantRBACError,
    TenantRequired,
    Unauthenticated,
    ValidationError,
)

logger = logging.getLogger(__name__)

_STATUS: list[tuple[type[TenantRBACError], str]] = [
    (Unauthenticated, falcon.HTTP_401),
    (TenantRequired, falcon.HTTP_403),
    (PermissionDenied, falcon.HTTP_403),
    (Immutable, falcon.HTTP_403),
    (NotFound, falcon.HTTP_404),
    (HasDependents, falcon.HTTP_409),
    (ValidationError, falcon.HTTP_422),
]


def status_for(error: TenantRBACError) -> str:
    for exc_type, status in _STATUS:
        if isinstance(error, exc_type):
            return status
    return falcon.HTTP_400


def error_body(error: TenantRBACError) -> dict:
    body = {"success": False, "error": error.code, "message": str(error)}
    if isinstance(error, ValidationError) and error.errors:
        body["errors"] = error.errors
    return body


async def handle_domain_error(
    req: falcon.asgi.Request, resp: falcon.asgi.Response, ex: TenantRBACError, params: dict
) -> None:
    """Falcon error handler for TenantRBACError and subclasses."""
    resp.status = status_for(ex)
    resp.media = error_body(ex)


async def handle_unexpected_error(
    req: falcon.asgi.Request, resp: falcon.asgi.Response, ex: Exception, params: dict
) -> None:
    """Log and hide anything the domain did not anticipate."""
    logger.exception(
        "Unhandled error", extra={"method": req.method, "path": req.path}
    )
    resp.status = falcon.HTTP_500
    resp.media = {
        "success": False,
        "error": "internal_error",
        "message": "Internal server error",
    }


def register_error_handlers(app: falcon.asgi.App) -> None:
    app.add_error_handler(Exception, handle_unexpected_error)
    app.add_error_handler(TenantRBACError, handle_domain_error)
