"""Unit tests for role and user grant use cases."""

from uuid import uuid4

import pytest

from tenantrbac.application.use_cases.permission.bulk_assign_to_role import BulkAssignToRoleUseCase
from tenantrbac.application.use_cases.permission.list_role_permissions import (
    ListRolePermissionsUseCase,
)
from tenantrbac.application.use_cases.permission.role_grants import (
    AssignPermissionToRoleUseCase,
    RemovePermissionFromRoleUseCase,
)
from tenantrbac.application.use_cases.permission.user_grants import (
    AssignPermissionToUserUseCase,
    RemovePermissionFromUserUseCase,
)
from tenantrbac.domain.exceptions import (
    NotFound,
    PermissionDenied,
    TenantRequired,
    ValidationError,
)


class TestBulkAssign:
    @pytest.mark.asyncio
    async def test_replaces_the_set(self, db, uow_factory, audit, catalog, tenant_admin) -> None:
        role = catalog["alpha_role"]
        p1, p2, p3 = catalog["users_view"], catalog["roles_view"], catalog["alpha_perm"]
        p4 = catalog["inactive_system"]
        use_case = BulkAssignToRoleUseCase(uow_factory, audit)

        await use_case.execute(tenant_admin, role.id, [p1.id, p2.id, p3.id])
        result = await use_case.execute(tenant_admin, role.id, [p2.id, p4.id])

        assert db.role_permission_ids(role.id) == {p2.id, p4.id}
        assert (result.granted_count, result.added, result.revoked) == (2, 1, 2)

    @pytest.mark.asyncio
    async def test_idempotent(self, db, uow_factory, audit, catalog, tenant_admin) -> None:
        role = catalog["alpha_role"]
        ids = [catalog["users_view"].id, catalog["alpha_perm"].id, catalog["users_view"].id]
        use_case = BulkAssignToRoleUseCase(uow_factory, audit)

        await use_case.execute(tenant_admin, role.id, ids)
        rows_before = {row for row in db.role_permission if row[0] == role.id}
        result = await use_case.execute(tenant_admin, role.id, ids)

        assert {row for row in db.role_permission if row[0] == role.id} == rows_before
        assert len(rows_before) == 2
        assert (result.added, result.revoked) == (0, 0)

    @pytest.mark.asyncio
    async def test_empty_list_revokes_all(self, db, uow_factory, audit, catalog, tenant_admin) -> None:
        role = catalog["alpha_role"]
        db.role_permission.add((role.id, catalog["users_view"].id))
        await BulkAssignToRoleUseCase(uow_factory, audit).execute(tenant_admin, role.id, [])
        assert db.role_permission_ids(role.id) == set()

    @pytest.mark.asyncio
    async def test_invisible_permission_fails_whole_call(self, db, uow_factory, audit, catalog, tenant_admin) -> None:
        """Another tenant's custom permission is rejected and nothing changes."""
        role = catalog["alpha_role"]
        db.role_permission.add((role.id, catalog["users_view"].id))
        with pytest.raises(ValidationError) as exc:
            await BulkAssignToRoleUseCase(uow_factory, audit).execute(
                tenant_admin, role.id, [catalog["roles_view"].id, catalog["beta_perm"].id]
            )
        assert "permission_ids" in exc.value.errors
        assert db.role_permission_ids(role.id) == {catalog["users_view"].id}

    @pytest.mark.asyncio
    async def test_unknown_permission_fails(self, db, uow_factory, audit, catalog, super_admin) -> None:
        role = catalog["alpha_role"]
        with pytest.raises(ValidationError):
            await BulkAssignToRoleUseCase(uow_factory, audit).execute(
                super_admin, role.id, [catalog["users_view"].id, uuid4()]
            )
        assert db.role_permission_ids(role.id) == set()

    @pytest.mark.asyncio
    async def test_tenant_admin_cannot_grant_on_global_role(self, uow_factory, audit, catalog, tenant_admin) -> None:
        with pytest.raises(PermissionDenied):
            await BulkAssignToRoleUseCase(uow_factory, audit).execute(
                tenant_admin, catalog["global_custom_role"].id, [catalog["users_view"].id]
            )
        assert audit.denied[-1].action == "role.bulk_grant"

    @pytest.mark.asyncio
    async def test_foreign_role_is_not_found(self, uow_factory, audit, catalog, tenant_admin) -> None:
        with pytest.raises(NotFound):
            await BulkAssignToRoleUseCase(uow_factory, audit).execute(
                tenant_admin, catalog["beta_role"].id, [catalog["users_view"].id]
            )

    @pytest.mark.asyncio
    async def test_system_operator_limited_to_own_tenant(self, uow_factory, audit, catalog, system_operator) -> None:
        with pytest.raises(PermissionDenied):
            await BulkAssignToRoleUseCase(uow_factory, audit).execute(
                system_operator, catalog["alpha_role"].id, [catalog["users_view"].id]
            )

    @pytest.mark.asyncio
    async def test_super_admin_grants_anywhere(self, db, uow_factory, audit, catalog, super_admin) -> None:
        role = catalog["beta_role"]
        await BulkAssignToRoleUseCase(uow_factory, audit).execute(
            super_admin, role.id, [catalog["beta_perm"].id, catalog["global_custom_perm"].id]
        )
        assert db.role_permission_ids(role.id) == {catalog["beta_perm"].id, catalog["global_custom_perm"].id}

    @pytest.mark.asyncio
    async def test_tenant_user_forbidden(self, uow_factory, audit, catalog, tenant_user) -> None:
        with pytest.raises(PermissionDenied):
            await BulkAssignToRoleUseCase(uow_factory, audit).execute(
                tenant_user, catalog["alpha_role"].id, []
            )


class TestSingleRoleGrants:
    @pytest.mark.asyncio
    async def test_assign_twice_then_remove(self, db, uow_factory, audit, catalog, tenant_admin) -> None:
        role, permission = catalog["alpha_role"], catalog["alpha_perm"]
        assign = AssignPermissionToRoleUseCase(uow_factory, audit)
        await assign.execute(tenant_admin, role.id, permission.id)
        await assign.execute(tenant_admin, role.id, permission.id)
        assert db.role_permission_ids(role.id) == {permission.id}

        await RemovePermissionFromRoleUseCase(uow_factory, audit).execute(tenant_admin, role.id, permission.id)
        assert db.role_permission_ids(role.id) == set()
        assert [e.action for e in audit.succeeded] == ["role.assign", "role.assign", "role.remove"]

    @pytest.mark.asyncio
    async def test_foreign_permission_is_not_found(self, db, uow_factory, audit, catalog, tenant_admin) -> None:
        with pytest.raises(NotFound):
            await AssignPermissionToRoleUseCase(uow_factory, audit).execute(
                tenant_admin, catalog["alpha_role"].id, catalog["beta_perm"].id
            )
        assert db.role_permission_ids(catalog["alpha_role"].id) == set()


class TestUserGrants:
    @pytest.mark.asyncio
    async def test_assign_and_remove(self, db, uow_factory, audit, catalog, tenant_admin, tenant) -> None:
        user = db.add_user(tenant.id)
        permission = catalog["users_view"]
        await AssignPermissionToUserUseCase(uow_factory, audit).execute(tenant_admin, user.id, permission.id)
        assert (user.id, permission.id) in db.user_permission

        await RemovePermissionFromUserUseCase(uow_factory, audit).execute(tenant_admin, user.id, permission.id)
        assert (user.id, permission.id) not in db.user_permission

    @pytest.mark.asyncio
    async def test_foreign_user_is_not_found(self, db, uow_factory, audit, catalog, tenant_admin, other_tenant) -> None:
        user = db.add_user(other_tenant.id)
        with pytest.raises(NotFound):
            await AssignPermissionToUserUseCase(uow_factory, audit).execute(
                tenant_admin, user.id, catalog["users_view"].id
            )
        assert not db.user_permission

    @pytest.mark.asyncio
    async def test_orphan_refused(self, db, uow_factory, audit, catalog, orphan, tenant) -> None:
        user = db.add_user(tenant.id)
        with pytest.raises(TenantRequired):
            await AssignPermissionToUserUseCase(uow_factory, audit).execute(
                orphan, user.id, catalog["users_view"].id
            )


class TestListRolePermissions:
    @pytest.mark.asyncio
    async def test_lists_granted_permissions(self, db, uow_factory, audit, catalog, tenant_user) -> None:
        role = catalog["admin_role"]
        db.role_permission.add((role.id, catalog["users_view"].id))
        db.role_permission.add((role.id, catalog["alpha_perm"].id))
        permissions = await ListRolePermissionsUseCase(uow_factory, audit).execute(tenant_user, role.id)
        assert [p.name for p in permissions] == ["alpha.export", "users.view"]

    @pytest.mark.asyncio
    async def test_global_role_hidden_from_tenant(self, uow_factory, audit, catalog, tenant_admin) -> None:
        with pytest.raises(NotFound):
            await ListRolePermissionsUseCase(uow_factory, audit).execute(
                tenant_admin, catalog["super_role"].id
            )
