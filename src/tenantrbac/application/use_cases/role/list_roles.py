"""List roles use case."""

import logging

from tenantrbac.application.dto.listing import ListQuery, Page
from tenantrbac.application.ports import AuditSink
from tenantrbac.application.services.audit import audit_denials
from tenantrbac.domain.entities import Actor, Role
from tenantrbac.domain.services import role_scope
from tenantrbac.domain.value_objects import ResourceKind

logger = logging.getLogger(__name__)


class ListRolesUseCase:
    """List roles visible to the actor, filtered, sorted and paginated."""

    def __init__(self, unit_of_work_factory: type, audit_sink: AuditSink) -> None:
        self._uow_factory = unit_of_work_factory
        self._audit = audit_sink

    async def execute(self, actor: Actor, query: ListQuery) -> Page[Role]:
        """Roles ordered by level ascending, newest first within a level."""
        with audit_denials(self._audit, "list", actor, ResourceKind.ROLE):
            scope = role_scope(actor)

        if not actor.is_super_admin:
            query.include_deleted = False

        async with self._uow_factory() as uow:
            items, total = await uow.roles.list(scope, query)

        logger.debug(
            "Roles listed",
            extra={
                "actor_id": str(actor.id),
                "actor_class": actor.actor_class.value,
                "tenant_id": str(actor.tenant_id),
                "total": total,
            },
        )
        return Page.build(items, total, query)
