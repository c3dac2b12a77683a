"""Load the per-request Actor from the identity context."""

import logging
from uuid import UUID

from tenantrbac.application.ports import UnitOfWork
from tenantrbac.domain.entities import Actor, Identity, User
from tenantrbac.domain.exceptions import Unauthenticated
from tenantrbac.domain.services import build_actor

logger = logging.getLogger(__name__)


async def identity_for_user(uow: UnitOfWork, user: User) -> Identity:
    """Build an Identity snapshot, loading the assigned role if any."""
    role = await uow.roles.get_by_id(user.role_id) if user.role_id else None
    return Identity(
        id=user.id,
        tenant_id=user.tenant_id,
        role=role,
        is_super_admin=user.is_super_admin,
        is_system_admin=user.is_system_admin,
        is_system_manager=user.is_system_manager,
        email=user.email,
    )


async def load_actor(uow: UnitOfWork, *, subject: str | None = None, user_id: UUID | None = None) -> Actor:
    """Resolve a token subject or user id to a classified Actor."""
    user = None
    if subject is not None:
        user = await uow.users.get_by_subject(subject)
    elif user_id is not None:
        user = await uow.users.get_by_id(user_id)
    if user is None or not user.active:
        logger.info("Identity not resolved", extra={"subject": subject, "user_id": str(user_id)})
        raise Unauthenticated("Unauthorized")
    actor = build_actor(await identity_for_user(uow, user))
    logger.debug(
        "Actor resolved",
        extra={"actor_id": str(actor.id), "actor_class": actor.actor_class.value},
    )
    return actor
