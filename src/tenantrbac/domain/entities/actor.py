"""Classified actor threaded through every decision."""

from dataclasses import dataclass
from uuid import UUID

from tenantrbac.domain.value_objects import ActorClass


@dataclass(frozen=True)
class Actor:
    """Actor snapshot with its class computed once."""

    id: UUID
    actor_class: ActorClass
    tenant_id: UUID | None = None
    role_id: UUID | None = None
    email: str | None = None

    @property
    def is_super_admin(self) -> bool:
        return self.actor_class is ActorClass.SUPER_ADMIN

    @property
    def is_system_operator(self) -> bool:
        return self.actor_class is ActorClass.SYSTEM_OPERATOR

    @property
    def is_tenant_admin(self) -> bool:
        return self.actor_class is ActorClass.TENANT_ADMIN

    @property
    def is_tenant_scoped(self) -> bool:
        return self.actor_class in (ActorClass.TENANT_ADMIN, ActorClass.TENANT_USER)

    @property
    def is_orphan(self) -> bool:
        return self.actor_class is ActorClass.ORPHAN
