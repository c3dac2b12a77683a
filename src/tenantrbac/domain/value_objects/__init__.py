"""Domain value objects."""

from tenantrbac.domain.value_objects.actor_class import ActorClass
from tenantrbac.domain.value_objects.mutation_action import MutationAction
from tenantrbac.domain.value_objects.resource_kind import ResourceKind

__all__ = [
    "ActorClass",
    "MutationAction",
    "ResourceKind",
]
