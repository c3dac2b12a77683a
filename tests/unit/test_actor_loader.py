"""Unit tests for per-request actor loading."""

from uuid import uuid4

import pytest

from tenantrbac.application.services.actor_loader import load_actor
from tenantrbac.domain.exceptions import Unauthenticated
from tenantrbac.domain.value_objects import ActorClass


@pytest.mark.asyncio
async def test_administrator_by_subject(db, uow_factory, catalog, tenant) -> None:
    user = db.add_user(tenant.id, catalog["admin_role"].id, subject="kc-admin")
    async with uow_factory() as uow:
        actor = await load_actor(uow, subject="kc-admin")
    assert actor.id == user.id
    assert actor.actor_class is ActorClass.TENANT_ADMIN
    assert actor.role_id == catalog["admin_role"].id


@pytest.mark.asyncio
async def test_tenant_user_by_id(db, uow_factory, catalog, tenant) -> None:
    user = db.add_user(tenant.id, catalog["alpha_role"].id)
    async with uow_factory() as uow:
        actor = await load_actor(uow, user_id=user.id)
    assert actor.actor_class is ActorClass.TENANT_USER


@pytest.mark.asyncio
async def test_system_manager_without_tenant(db, uow_factory) -> None:
    user = db.add_user(is_system_manager=True, subject="ops")
    async with uow_factory() as uow:
        actor = await load_actor(uow, subject="ops")
    assert actor.actor_class is ActorClass.SYSTEM_OPERATOR
    assert actor.tenant_id is None
    assert actor.id == user.id


@pytest.mark.asyncio
async def test_user_without_tenant_or_flags_is_orphan(db, uow_factory) -> None:
    db.add_user(subject="lost")
    async with uow_factory() as uow:
        actor = await load_actor(uow, subject="lost")
    assert actor.actor_class is ActorClass.ORPHAN


@pytest.mark.asyncio
async def test_unknown_or_inactive_user_is_unauthenticated(db, uow_factory, tenant) -> None:
    db.add_user(tenant.id, active=False, subject="gone")
    for kwargs in ({"subject": "gone"}, {"subject": "nobody"}, {"user_id": uuid4()}, {}):
        with pytest.raises(Unauthenticated):
            async with uow_factory() as uow:
                await load_actor(uow, **kwargs)
