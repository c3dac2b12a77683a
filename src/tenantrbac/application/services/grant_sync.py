"""Replace-the-set sync of a role's permissions."""

import logging
from uuid import UUID

from tenantrbac.application.ports import UnitOfWork
from tenantrbac.domain.exceptions import ValidationError
from tenantrbac.domain.services import GrantDiff, dedupe, diff_grants

logger = logging.getLogger(__name__)


async def sync_role_permissions(
    uow: UnitOfWork, role_id: UUID, permission_ids: list[UUID]
) -> GrantDiff:
    """Make the role's permission set exactly permission_ids.

    Every id must reference a live permission, otherwise nothing is written.
    No authorization here; callers authorize first.
    """
    desired = dedupe(permission_ids)
    found = {p.id for p in await uow.permissions.get_many(desired)}
    missing = [str(pid) for pid in desired if pid not in found]
    if missing:
        raise ValidationError(
            "Validation failed",
            {"permission_ids": [f"The selected permission id {pid} is invalid." for pid in missing]},
        )

    current = await uow.roles.get_permission_ids(role_id)
    diff = diff_grants(current, desired)
    if diff.to_remove:
        await uow.roles.remove_permissions(role_id, sorted(diff.to_remove))
    if diff.to_add:
        await uow.roles.add_permissions(role_id, sorted(diff.to_add))
    logger.debug(
        "Role permissions synced",
        extra={
            "role_id": str(role_id),
            "added": len(diff.to_add),
            "revoked": len(diff.to_remove),
        },
    )
    return diff
