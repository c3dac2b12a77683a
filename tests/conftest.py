"""Pytest fixtures for TenantRBAC tests."""

from __future__ import annotations

import copy
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass, field, replace
from datetime import UTC, datetime, timedelta
from uuid import UUID, uuid4

import pytest

from tenantrbac.application.dto.listing import ListQuery
from tenantrbac.domain.entities import (
    ADMINISTRATOR_ROLE_NAME,
    Actor,
    AuditEvent,
    Permission,
    Role,
    Tenant,
    User,
)
from tenantrbac.domain.exceptions import DuplicateName
from tenantrbac.domain.services import VisibilityScope, scope_allows
from tenantrbac.domain.value_objects import ActorClass

NOW = datetime(2026, 1, 1, tzinfo=UTC)


# --- In-memory storage ---


@dataclass
class FakeDatabase:
    """Rows shared by every unit of work of one test."""

    tenants: dict[UUID, Tenant] = field(default_factory=dict)
    roles: dict[UUID, Role] = field(default_factory=dict)
    permissions: dict[UUID, Permission] = field(default_factory=dict)
    users: dict[UUID, User] = field(default_factory=dict)
    role_permission: set[tuple[UUID, UUID]] = field(default_factory=set)
    user_permission: set[tuple[UUID, UUID]] = field(default_factory=set)

    def snapshot(self) -> FakeDatabase:
        return copy.deepcopy(self)

    def restore(self, snap: FakeDatabase) -> None:
        self.__dict__.update(snap.__dict__)

    # helpers for arranging tests

    def add_tenant(self, name: str = "Parish") -> Tenant:
        tenant = Tenant(id=uuid4(), name=name, slug=f"{name.lower()}-{uuid4().hex[:6]}", active=True, created_at=NOW)
        self.tenants[tenant.id] = tenant
        return tenant

    def add_role(
        self,
        name: str,
        tenant_id: UUID | None = None,
        is_custom: bool = True,
        level: int = 5,
        created_at: datetime = NOW,
    ) -> Role:
        role = Role(
            id=uuid4(),
            name=name,
            description=f"{name} role",
            level=level,
            tenant_id=tenant_id,
            is_custom=is_custom,
            active=True,
            created_at=created_at,
            updated_at=created_at,
        )
        self.roles[role.id] = role
        return role

    def add_permission(
        self,
        name: str,
        tenant_id: UUID | None = None,
        is_custom: bool = False,
        module: str | None = "Core",
        category: str | None = "general",
        active: bool = True,
    ) -> Permission:
        permission = Permission(
            id=uuid4(),
            name=name,
            display_name=name.replace(".", " ").title(),
            description=None,
            module=module,
            category=category,
            tenant_id=tenant_id,
            is_custom=is_custom,
            active=active,
            created_at=NOW,
            updated_at=NOW,
        )
        self.permissions[permission.id] = permission
        return permission

    def add_user(
        self,
        tenant_id: UUID | None = None,
        role_id: UUID | None = None,
        active: bool = True,
        subject: str | None = None,
        **flags: bool,
    ) -> User:
        user = User(
            id=uuid4(),
            name="Test User",
            email=f"{uuid4().hex[:8]}@example.com",
            tenant_id=tenant_id,
            role_id=role_id,
            active=active,
            created_at=NOW,
            subject=subject,
            **flags,
        )
        self.users[user.id] = user
        return user

    def role_permission_ids(self, role_id: UUID) -> set[UUID]:
        return {pid for rid, pid in self.role_permission if rid == role_id}


def _paginate(items: list, query: ListQuery) -> list:
    if query.is_all:
        return items
    return items[query.offset : query.offset + query.limit]


def _matches(row, scope: VisibilityScope, query: ListQuery) -> bool:
    if not scope_allows(scope, row.tenant_id, row.is_custom):
        return False
    if not query.include_deleted and row.deleted_at is not None:
        return False
    if query.active is not None and row.active != query.active:
        return False
    if query.is_custom is not None and row.is_custom != query.is_custom:
        return False
    if query.tenant_id is not None and scope.allow_tenant_override and row.tenant_id != query.tenant_id:
        return False
    return True


def _contains(term: str, *values: str | None) -> bool:
    return any(v is not None and term.lower() in v.lower() for v in values)


class FakeFlaggedRows:
    """In-memory primary-admin flag on users."""

    def __init__(self, db: FakeDatabase) -> None:
        self._db = db

    async def clear_flag(self, owner_id: UUID, except_id: UUID | None = None) -> None:
        for user in self._db.users.values():
            if user.tenant_id == owner_id and user.id != except_id:
                user.is_primary_admin = False

    async def set_flag(self, row_id: UUID) -> None:
        user = self._db.users[row_id]
        for other in self._db.users.values():
            if other.tenant_id == user.tenant_id and other.is_primary_admin and other.id != row_id:
                raise DuplicateName("User", "primary admin")
        user.is_primary_admin = True


class FakeRoleRepository:
    """In-memory role repository honouring the live-name and Administrator indexes."""

    def __init__(self, db: FakeDatabase) -> None:
        self._db = db

    def _check_unique(self, role: Role) -> None:
        for other in self._db.roles.values():
            if other.id == role.id or other.deleted_at is not None:
                continue
            if other.tenant_id == role.tenant_id and other.name == role.name:
                raise DuplicateName("Role", role.name)
            if (
                role.is_tenant_administrator
                and other.is_tenant_administrator
                and other.tenant_id == role.tenant_id
            ):
                raise DuplicateName("Role", role.name)

    async def get_by_id(self, role_id: UUID, include_deleted: bool = False) -> Role | None:
        role = self._db.roles.get(role_id)
        if not role or (not include_deleted and role.deleted_at):
            return None
        return replace(role)

    async def get_by_name(self, tenant_id: UUID | None, name: str) -> Role | None:
        for role in self._db.roles.values():
            if role.tenant_id == tenant_id and role.name == name and role.deleted_at is None:
                return replace(role)
        return None

    async def list(self, scope: VisibilityScope, query: ListQuery) -> tuple[list[Role], int]:
        items = [
            r
            for r in self._db.roles.values()
            if _matches(r, scope, query)
            and (not query.search or _contains(query.search, r.name, r.description))
        ]
        items.sort(key=lambda r: r.created_at, reverse=True)
        items.sort(key=lambda r: r.level)
        return [replace(r) for r in _paginate(items, query)], len(items)

    async def list_administrator_roles(self, tenant_id: UUID | None = None) -> list[Role]:
        return [
            replace(r)
            for r in self._db.roles.values()
            if r.is_tenant_administrator
            and r.deleted_at is None
            and (tenant_id is None or r.tenant_id == tenant_id)
        ]

    async def create(self, role: Role) -> Role:
        self._check_unique(role)
        self._db.roles[role.id] = replace(role)
        return role

    async def update(self, role: Role) -> None:
        self._check_unique(role)
        self._db.roles[role.id] = replace(role)

    async def soft_delete(self, role_id: UUID, deleted_at: datetime) -> None:
        self._db.roles[role_id].deleted_at = deleted_at

    async def restore(self, role_id: UUID, restored_at: datetime) -> None:
        role = self._db.roles[role_id]
        role.deleted_at = None
        role.updated_at = restored_at

    async def count_users(self, role_id: UUID) -> tuple[int, int]:
        users = [u for u in self._db.users.values() if u.role_id == role_id]
        return len(users), sum(1 for u in users if u.active)

    async def get_permission_ids(self, role_id: UUID) -> list[UUID]:
        return list(self._db.role_permission_ids(role_id))

    async def add_permissions(self, role_id: UUID, permission_ids: list[UUID]) -> None:
        for pid in permission_ids:
            self._db.role_permission.add((role_id, pid))

    async def remove_permissions(self, role_id: UUID, permission_ids: list[UUID]) -> None:
        for pid in permission_ids:
            self._db.role_permission.discard((role_id, pid))


class FakePermissionRepository:
    """In-memory permission repository with globally unique live names."""

    def __init__(self, db: FakeDatabase) -> None:
        self._db = db

    def _check_unique(self, permission: Permission) -> None:
        for other in self._db.permissions.values():
            if (
                other.id != permission.id
                and other.deleted_at is None
                and other.name == permission.name
            ):
                raise DuplicateName("Permission", permission.name)

    async def get_by_id(
        self, permission_id: UUID, include_deleted: bool = False
    ) -> Permission | None:
        permission = self._db.permissions.get(permission_id)
        if not permission or (not include_deleted and permission.deleted_at):
            return None
        return replace(permission)

    async def get_by_name(self, name: str) -> Permission | None:
        for permission in self._db.permissions.values():
            if permission.name == name and permission.deleted_at is None:
                return replace(permission)
        return None

    async def get_many(self, permission_ids: list[UUID]) -> list[Permission]:
        return [
            replace(self._db.permissions[pid])
            for pid in permission_ids
            if pid in self._db.permissions and self._db.permissions[pid].deleted_at is None
        ]

    async def list(
        self, scope: VisibilityScope, query: ListQuery
    ) -> tuple[list[Permission], int]:
        items = [
            p
            for p in self._db.permissions.values()
            if _matches(p, scope, query)
            and (query.module is None or p.module == query.module)
            and (query.category is None or p.category == query.category)
            and (
                not query.search
                or _contains(query.search, p.name, p.display_name, p.description)
            )
        ]
        items.sort(
            key=lambda p: (
                p.module is None,
                p.module or "",
                p.category is None,
                p.category or "",
                p.name,
            )
        )
        return [replace(p) for p in _paginate(items, query)], len(items)

    async def list_for_role(self, role_id: UUID) -> list[Permission]:
        ids = self._db.role_permission_ids(role_id)
        return sorted(
            (
                replace(p)
                for p in self._db.permissions.values()
                if p.id in ids and p.deleted_at is None
            ),
            key=lambda p: p.name,
        )

    async def list_active_system_ids(self) -> list[UUID]:
        return [
            p.id
            for p in sorted(self._db.permissions.values(), key=lambda p: p.name)
            if p.is_system and p.active and p.deleted_at is None
        ]

    async def create(self, permission: Permission) -> Permission:
        self._check_unique(permission)
        self._db.permissions[permission.id] = replace(permission)
        return permission

    async def update(self, permission: Permission) -> None:
        self._check_unique(permission)
        self._db.permissions[permission.id] = replace(permission)

    async def soft_delete(self, permission_id: UUID, deleted_at: datetime) -> None:
        self._db.permissions[permission_id].deleted_at = deleted_at

    async def restore(self, permission_id: UUID, restored_at: datetime) -> None:
        permission = self._db.permissions[permission_id]
        permission.deleted_at = None
        permission.updated_at = restored_at

    async def count_assignments(self, permission_id: UUID) -> tuple[int, int]:
        roles = sum(1 for _, pid in self._db.role_permission if pid == permission_id)
        users = sum(1 for _, pid in self._db.user_permission if pid == permission_id)
        return roles, users

    async def grant_to_user(self, user_id: UUID, permission_id: UUID) -> None:
        self._db.user_permission.add((user_id, permission_id))

    async def revoke_from_user(self, user_id: UUID, permission_id: UUID) -> None:
        self._db.user_permission.discard((user_id, permission_id))


class FakeUserRepository:
    """In-memory user repository."""

    def __init__(self, db: FakeDatabase) -> None:
        self._db = db
        self.primary_admin_flags = FakeFlaggedRows(db)

    async def get_by_id(self, user_id: UUID) -> User | None:
        return self._db.users.get(user_id)

    async def get_by_subject(self, subject: str) -> User | None:
        for user in self._db.users.values():
            if user.subject == subject:
                return user
        return None

    async def get_by_email(self, email: str) -> User | None:
        for user in self._db.users.values():
            if user.email.lower() == email.lower():
                return user
        return None

    async def create(self, user: User) -> User:
        self._db.users[user.id] = user
        return user


class FakeTenantRepository:
    """In-memory tenant repository."""

    def __init__(self, db: FakeDatabase) -> None:
        self._db = db

    async def get_by_id(self, tenant_id: UUID) -> Tenant | None:
        return self._db.tenants.get(tenant_id)

    async def get_by_slug(self, slug: str) -> Tenant | None:
        for tenant in self._db.tenants.values():
            if tenant.slug == slug:
                return tenant
        return None

    async def create(self, tenant: Tenant) -> Tenant:
        self._db.tenants[tenant.id] = tenant
        return tenant


# --- Fake UnitOfWork ---


class FakeUnitOfWork:
    """In-memory Unit of Work over a shared FakeDatabase."""

    def __init__(self, db: FakeDatabase) -> None:
        self.db = db
        self.roles = FakeRoleRepository(db)
        self.permissions = FakePermissionRepository(db)
        self.users = FakeUserRepository(db)
        self.tenants = FakeTenantRepository(db)
        self.committed = False
        self.rolled_back = False

    async def commit(self) -> None:
        self.committed = True

    async def rollback(self) -> None:
        self.rolled_back = True


def make_uow_factory(db: FakeDatabase):
    """Factory with the same commit-or-rollback contract as the Postgres one."""

    @asynccontextmanager
    async def _factory() -> AsyncIterator[FakeUnitOfWork]:
        snap = db.snapshot()
        uow = FakeUnitOfWork(db)
        try:
            yield uow
            await uow.commit()
        except BaseException:
            db.restore(snap)
            await uow.rollback()
            raise

    return _factory


class RecordingAuditSink:
    """Collects audit events for assertions."""

    def __init__(self) -> None:
        self.events: list[AuditEvent] = []

    def emit(self, event: AuditEvent) -> None:
        self.events.append(event)

    @property
    def denied(self) -> list[AuditEvent]:
        return [e for e in self.events if e.outcome == AuditEvent.DENIED]

    @property
    def succeeded(self) -> list[AuditEvent]:
        return [e for e in self.events if e.outcome == AuditEvent.SUCCESS]


# --- Actors ---


def make_actor(actor_class: ActorClass, tenant_id: UUID | None = None) -> Actor:
    return Actor(id=uuid4(), actor_class=actor_class, tenant_id=tenant_id)


# --- Fixtures ---


@pytest.fixture
def db() -> FakeDatabase:
    """Fresh in-memory database for each test."""
    return FakeDatabase()


@pytest.fixture
def uow_factory(db: FakeDatabase):
    return make_uow_factory(db)


@pytest.fixture
def audit() -> RecordingAuditSink:
    return RecordingAuditSink()


@pytest.fixture
def tenant(db: FakeDatabase) -> Tenant:
    return db.add_tenant("Alpha")


@pytest.fixture
def other_tenant(db: FakeDatabase) -> Tenant:
    return db.add_tenant("Beta")


@pytest.fixture
def super_admin() -> Actor:
    return make_actor(ActorClass.SUPER_ADMIN)


@pytest.fixture
def system_operator() -> Actor:
    return make_actor(ActorClass.SYSTEM_OPERATOR)


@pytest.fixture
def tenant_admin(tenant: Tenant) -> Actor:
    return make_actor(ActorClass.TENANT_ADMIN, tenant.id)


@pytest.fixture
def tenant_user(tenant: Tenant) -> Actor:
    return make_actor(ActorClass.TENANT_USER, tenant.id)


@pytest.fixture
def orphan() -> Actor:
    return make_actor(ActorClass.ORPHAN)


@pytest.fixture
def catalog(db: FakeDatabase, tenant: Tenant, other_tenant: Tenant) -> dict[str, object]:
    """Global roles, both tenants' Administrator roles, system and custom permissions."""
    return {
        "super_role": db.add_role("SuperAdmin", is_custom=False, level=1),
        "global_custom_role": db.add_role("Auditor", is_custom=True, level=4),
        "admin_role": db.add_role(ADMINISTRATOR_ROLE_NAME, tenant.id, is_custom=False, level=1),
        "alpha_role": db.add_role("Catechist", tenant.id, level=6, created_at=NOW + timedelta(hours=1)),
        "beta_admin_role": db.add_role(ADMINISTRATOR_ROLE_NAME, other_tenant.id, is_custom=False, level=1),
        "beta_role": db.add_role("Choir", other_tenant.id),
        "users_view": db.add_permission("users.view", module="Authentication", category="users"),
        "roles_view": db.add_permission("roles.view", module="RolesAndPermissions", category="roles"),
        "inactive_system": db.add_permission("reports.legacy", module="Reports", active=False),
        "global_custom_perm": db.add_permission("global.custom", is_custom=True, module=None),
        "alpha_perm": db.add_permission("alpha.export", tenant.id, is_custom=True, module="Custom"),
        "beta_perm": db.add_permission("beta.export", other_tenant.id, is_custom=True, module="Custom"),
    }
