"""SQL WHERE builders for scoped, filtered Role and Permission listings."""

from tenantrbac.application.dto.listing import ListQuery
from tenantrbac.domain.services import VisibilityScope

ROLE_ORDER_BY = "ORDER BY r.level ASC, r.created_at DESC"
PERMISSION_ORDER_BY = (
    "ORDER BY p.module ASC NULLS LAST, p.category ASC NULLS LAST, p.name ASC"
)


def _scope_conditions(alias: str, scope: VisibilityScope) -> tuple[list[str], list[object]]:
    """Translate a visibility scope into SQL. Returns (conditions, params)."""
    if scope.unrestricted:
        return [], []
    tenant_cond = f"{alias}.tenant_id = %s"
    if scope.own_custom_only:
        tenant_cond += f" AND {alias}.is_custom = true"
    if scope.include_system:
        return [
            f"(({alias}.tenant_id IS NULL AND {alias}.is_custom = false) OR ({tenant_cond}))"
        ], [scope.tenant_id]
    return [tenant_cond], [scope.tenant_id]


def _common_conditions(
    alias: str, scope: VisibilityScope, query: ListQuery
) -> tuple[list[str], list[object]]:
    conditions, params = _scope_conditions(alias, scope)
    if not query.include_deleted:
        conditions.append(f"{alias}.deleted_at IS NULL")
    if query.active is not None:
        conditions.append(f"{alias}.active = %s")
        params.append(query.active)
    if query.is_custom is not None:
        conditions.append(f"{alias}.is_custom = %s")
        params.append(query.is_custom)
    if query.tenant_id is not None and scope.allow_tenant_override:
        conditions.append(f"{alias}.tenant_id = %s")
        params.append(query.tenant_id)
    return conditions, params


def _like(term: str) -> str:
    escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def build_role_conditions(
    scope: VisibilityScope, query: ListQuery
) -> tuple[list[str], list[object]]:
    """Build SQL AND conditions and params for a role listing (alias r)."""
    conditions, params = _common_conditions("r", scope, query)
    if query.search:
        conditions.append("(r.name ILIKE %s OR r.description ILIKE %s)")
        term = _like(query.search)
        params.extend([term, term])
    return conditions, params


def build_permission_conditions(
    scope: VisibilityScope, query: ListQuery
) -> tuple[list[str], list[object]]:
    """Build SQL AND conditions and params for a permission listing (alias p)."""
    conditions, params = _common_conditions("p", scope, query)
    if query.module:
        conditions.append("p.module = %s")
        params.append(query.module)
    if query.category:
        conditions.append("p.category = %s")
        params.append(query.category)
    if query.search:
        conditions.append(
            "(p.name ILIKE %s OR p.display_name ILIKE %s OR p.description ILIKE %s)"
        )
        term = _like(query.search)
        params.extend([term, term, term])
    return conditions, params


def where_clause(conditions: list[str]) -> str:
    return (" WHERE " + " AND ".join(conditions)) if conditions else ""


def page_clause(query: ListQuery) -> tuple[str, list[object]]:
    """LIMIT/OFFSET for the query, empty for per_page=all."""
    if query.is_all:
        return "", []
    return " LIMIT %s OFFSET %s", [query.limit, query.offset]
