"""Write actions gated by the mutation authorizer."""

from enum import StrEnum


class MutationAction(StrEnum):
    """Actions that change a Role or Permission row or its grants."""

    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"
    ACTIVATE = "activate"
    DEACTIVATE = "deactivate"
    RESTORE = "restore"
    ASSIGN = "assign"
    REMOVE = "remove"
    BULK_GRANT = "bulk_grant"

    @property
    def is_status_change(self) -> bool:
        return self in (
            MutationAction.ACTIVATE,
            MutationAction.DEACTIVATE,
            MutationAction.RESTORE,
        )
