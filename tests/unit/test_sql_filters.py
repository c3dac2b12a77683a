"""Unit tests for the SQL condition builders of role and permission listings."""

from uuid import uuid4

from tenantrbac.application.dto.listing import PER_PAGE_ALL, ListQuery
from tenantrbac.domain.services import VisibilityScope
from tenantrbac.infrastructure.persistence.postgres.filters import (
    build_permission_conditions,
    build_role_conditions,
    page_clause,
    where_clause,
)


class TestRoleConditions:
    """Tests for build_role_conditions."""

    def test_unrestricted_defaults(self) -> None:
        conditions, params = build_role_conditions(VisibilityScope(unrestricted=True), ListQuery())
        assert conditions == ["r.deleted_at IS NULL"]
        assert params == []

    def test_tenant_scope(self) -> None:
        tenant_id = uuid4()
        scope = VisibilityScope(unrestricted=False, tenant_id=tenant_id)
        conditions, params = build_role_conditions(scope, ListQuery())
        assert conditions[0] == "r.tenant_id = %s"
        assert params == [tenant_id]

    def test_tenant_override_only_when_allowed(self) -> None:
        tenant_id = uuid4()
        query = ListQuery(tenant_id=tenant_id)
        conditions, params = build_role_conditions(VisibilityScope(unrestricted=True), query)
        assert params == []

        scope = VisibilityScope(unrestricted=True, allow_tenant_override=True)
        conditions, params = build_role_conditions(scope, query)
        assert "r.tenant_id = %s" in conditions
        assert params == [tenant_id]

    def test_include_deleted_drops_condition(self) -> None:
        conditions, _ = build_role_conditions(
            VisibilityScope(unrestricted=True), ListQuery(include_deleted=True)
        )
        assert conditions == []

    def test_search_escapes_wildcards(self) -> None:
        conditions, params = build_role_conditions(
            VisibilityScope(unrestricted=True), ListQuery(search="50%_off")
        )
        assert conditions[-1] == "(r.name ILIKE %s OR r.description ILIKE %s)"
        assert params == ["%50\\%\\_off%", "%50\\%\\_off%"]


class TestPermissionConditions:
    """Tests for build_permission_conditions."""

    def test_tenant_scope_includes_system_rows(self) -> None:
        tenant_id = uuid4()
        scope = VisibilityScope(
            unrestricted=False, tenant_id=tenant_id, include_system=True, own_custom_only=True
        )
        conditions, params = build_permission_conditions(scope, ListQuery())
        assert conditions[0] == (
            "((p.tenant_id IS NULL AND p.is_custom = false) OR "
            "(p.tenant_id = %s AND p.is_custom = true))"
        )
        assert params == [tenant_id]

    def test_filters_in_order(self) -> None:
        query = ListQuery(active=True, is_custom=False, module="Core", category="users", search="view")
        conditions, params = build_permission_conditions(VisibilityScope(unrestricted=True), query)
        assert conditions == [
            "p.deleted_at IS NULL",
            "p.active = %s",
            "p.is_custom = %s",
            "p.module = %s",
            "p.category = %s",
            "(p.name ILIKE %s OR p.display_name ILIKE %s OR p.description ILIKE %s)",
        ]
        assert params == [True, False, "Core", "users", "%view%", "%view%", "%view%"]


def test_where_clause() -> None:
    assert where_clause([]) == ""
    assert where_clause(["a = 1", "b = 2"]) == " WHERE a = 1 AND b = 2"


def test_page_clause() -> None:
    assert page_clause(ListQuery(page=2, per_page=10)) == (" LIMIT %s OFFSET %s", [10, 10])
    assert page_clause(ListQuery(per_page=PER_PAGE_ALL)) == ("", [])
