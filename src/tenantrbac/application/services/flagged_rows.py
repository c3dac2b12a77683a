"""At most one flagged row per owner."""

from uuid import UUID

from tenantrbac.application.ports.repositories import FlaggedRowStore


async def set_exclusive_flag(store: FlaggedRowStore, owner_id: UUID, row_id: UUID) -> None:
    """Clear the flag on every other row of owner, then set it on row_id.

    Must run inside the caller's unit of work so both writes commit together.
    """
    await store.clear_flag(owner_id, except_id=row_id)
    await store.set_flag(row_id)
