"""Actor classifier - turns an identity snapshot into an ActorClass."""

from tenantrbac.domain.entities import ADMINISTRATOR_ROLE_NAME, Actor, Identity
from tenantrbac.domain.value_objects import ActorClass


def classify(identity: Identity) -> ActorClass:
    """Classify identity.

    Precedence: SuperAdmin flag, then either system operator flag, then the
    tenant-assigned role name, then Orphan.
    """
    if identity.is_super_admin:
        return ActorClass.SUPER_ADMIN
    if identity.is_system_admin or identity.is_system_manager:
        return ActorClass.SYSTEM_OPERATOR
    if identity.tenant_id is not None:
        role = identity.role
        if role is not None and role.name == ADMINISTRATOR_ROLE_NAME:
            return ActorClass.TENANT_ADMIN
        return ActorClass.TENANT_USER
    return ActorClass.ORPHAN


def build_actor(identity: Identity) -> Actor:
    """Build the per-request Actor, classifying exactly once."""
    return Actor(
        id=identity.id,
        actor_class=classify(identity),
        tenant_id=identity.tenant_id,
        role_id=identity.role.id if identity.role else None,
        email=identity.email,
    )
