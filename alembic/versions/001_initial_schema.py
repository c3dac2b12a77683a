"""Initial schema - tenants, roles, permissions, users and grants.

Revision ID: 001
Revises:
Create Date: 2026-10-17

"""

import uuid
from collections.abc import Sequence

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

NIL_UUID = "00000000-0000-0000-0000-000000000000"

SYSTEM_ROLES = [
    ("SuperAdmin", "Platform owner with unrestricted access", 1),
    ("SystemAdmin", "Platform administrator", 2),
    ("SystemManager", "Platform manager", 3),
]

SYSTEM_PERMISSIONS = [
    ("users.view", "View Users", "Can view user list and details", "Authentication", "users"),
    ("users.create", "Create Users", "Can create new users", "Authentication", "users"),
    ("users.update", "Update Users", "Can update existing users", "Authentication", "users"),
    ("users.delete", "Delete Users", "Can delete users", "Authentication", "users"),
    ("users.activate", "Activate/Deactivate Users", "Can activate or deactivate users", "Authentication", "users"),
    ("tenants.view", "View Tenants", "Can view tenant list and details", "Tenants", "tenants"),
    ("tenants.create", "Create Tenants", "Can create new tenants", "Tenants", "tenants"),
    ("tenants.update", "Update Tenants", "Can update existing tenants", "Tenants", "tenants"),
    ("tenants.delete", "Delete Tenants", "Can delete tenants", "Tenants", "tenants"),
    ("tenants.activate", "Activate/Deactivate Tenants", "Can activate or deactivate tenants", "Tenants", "tenants"),
    ("roles.view", "View Roles", "Can view role list and details", "RolesAndPermissions", "roles"),
    ("roles.create", "Create Roles", "Can create new custom roles", "RolesAndPermissions", "roles"),
    ("roles.update", "Update Roles", "Can update existing custom roles", "RolesAndPermissions", "roles"),
    ("roles.delete", "Delete Roles", "Can delete custom roles", "RolesAndPermissions", "roles"),
    ("roles.activate", "Activate/Deactivate Roles", "Can activate or deactivate roles", "RolesAndPermissions", "roles"),
    ("permissions.view", "View Permissions", "Can view permission list and details", "RolesAndPermissions", "permissions"),
    ("permissions.create", "Create Permissions", "Can create new custom permissions", "RolesAndPermissions", "permissions"),
    ("permissions.update", "Update Permissions", "Can update existing custom permissions", "RolesAndPermissions", "permissions"),
    ("permissions.delete", "Delete Permissions", "Can delete custom permissions", "RolesAndPermissions", "permissions"),
    ("permissions.assign", "Assign Permissions", "Can assign permissions to roles and users", "RolesAndPermissions", "permissions"),
]


def _seed_id(kind: str, name: str) -> uuid.UUID:
    """Stable ids so seeded rows match across environments."""
    return uuid.uuid5(uuid.NAMESPACE_URL, f"tenantrbac:{kind}:{name}")


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True),
    ]


def upgrade() -> None:
    op.create_table(
        "tenants",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("slug", sa.String(255), nullable=False),
        sa.Column("active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_tenants_slug", "tenants", ["slug"], unique=True)

    op.create_table(
        "roles",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("level", sa.SmallInteger(), nullable=False, server_default="5"),
        sa.Column("tenant_id", sa.UUID(), sa.ForeignKey("tenants.id", ondelete="CASCADE"), nullable=True),
        sa.Column("is_custom", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("active", sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
        sa.CheckConstraint("level BETWEEN 1 AND 10", name="role_level_range"),
    )
    op.create_index("ix_roles_tenant_id", "roles", ["tenant_id"])
    op.execute(f"""
        CREATE UNIQUE INDEX role_name_tenant_active_unique
        ON roles (COALESCE(tenant_id, '{NIL_UUID}'::uuid), name)
        WHERE deleted_at IS NULL
    """)
    op.execute("""
        CREATE UNIQUE INDEX role_one_administrator_per_tenant
        ON roles (tenant_id)
        WHERE name = 'Administrator' AND is_custom = false AND deleted_at IS NULL
    """)

    op.create_table(
        "permissions",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("display_name", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("module", sa.String(255), nullable=True),
        sa.Column("category", sa.String(255), nullable=True),
        sa.Column("tenant_id", sa.UUID(), sa.ForeignKey("tenants.id", ondelete="CASCADE"), nullable=True),
        sa.Column("is_custom", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("active", sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
    )
    op.create_index("ix_permissions_tenant_id", "permissions", ["tenant_id"])
    op.create_index("ix_permissions_module_category", "permissions", ["module", "category"])
    op.execute("""
        CREATE UNIQUE INDEX permission_name_active_unique
        ON permissions (name)
        WHERE deleted_at IS NULL
    """)

    op.create_table(
        "users",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("subject", sa.String(255), nullable=True),
        sa.Column("tenant_id", sa.UUID(), sa.ForeignKey("tenants.id", ondelete="CASCADE"), nullable=True),
        sa.Column("role_id", sa.UUID(), sa.ForeignKey("roles.id", ondelete="SET NULL"), nullable=True),
        sa.Column("active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("is_primary_admin", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("is_super_admin", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("is_system_admin", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("is_system_manager", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.execute("CREATE UNIQUE INDEX ix_users_email ON users (lower(email))")
    op.create_index("ix_users_subject", "users", ["subject"], unique=True)
    op.create_index("ix_users_role_id", "users", ["role_id"])
    op.execute("""
        CREATE UNIQUE INDEX user_primary_admin_per_tenant
        ON users (tenant_id)
        WHERE is_primary_admin
    """)

    op.create_table(
        "role_permission",
        sa.Column("role_id", sa.UUID(), sa.ForeignKey("roles.id", ondelete="CASCADE"), primary_key=True),
        sa.Column("permission_id", sa.UUID(), sa.ForeignKey("permissions.id", ondelete="CASCADE"), primary_key=True),
    )
    op.create_index("ix_role_permission_permission_id", "role_permission", ["permission_id"])

    op.create_table(
        "user_permission",
        sa.Column("user_id", sa.UUID(), sa.ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
        sa.Column("permission_id", sa.UUID(), sa.ForeignKey("permissions.id", ondelete="CASCADE"), primary_key=True),
    )
    op.create_index("ix_user_permission_permission_id", "user_permission", ["permission_id"])

    roles = sa.table(
        "roles",
        sa.column("id", sa.UUID()),
        sa.column("name", sa.String()),
        sa.column("description", sa.Text()),
        sa.column("level", sa.SmallInteger()),
        sa.column("is_custom", sa.Boolean()),
    )
    op.bulk_insert(
        roles,
        [
            {"id": _seed_id("role", name), "name": name, "description": desc, "level": level, "is_custom": False}
            for name, desc, level in SYSTEM_ROLES
        ],
    )

    permissions = sa.table(
        "permissions",
        sa.column("id", sa.UUID()),
        sa.column("name", sa.String()),
        sa.column("display_name", sa.String()),
        sa.column("description", sa.Text()),
        sa.column("module", sa.String()),
        sa.column("category", sa.String()),
        sa.column("is_custom", sa.Boolean()),
    )
    op.bulk_insert(
        permissions,
        [
            {
                "id": _seed_id("permission", name),
                "name": name,
                "display_name": display_name,
                "description": desc,
                "module": module,
                "category": category,
                "is_custom": False,
            }
            for name, display_name, desc, module, category in SYSTEM_PERMISSIONS
        ],
    )


def downgrade() -> None:
    op.drop_table("user_permission")
    op.drop_table("role_permission")
    op.drop_table("users")
    op.drop_table("permissions")
    op.drop_table("roles")
    op.drop_table("tenants")
