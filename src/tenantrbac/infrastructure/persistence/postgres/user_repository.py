"""PostgreSQL user repository implementation."""

from uuid import UUID

from psycopg import AsyncConnection, sql

from tenantrbac.domain.entities import User

_COLUMNS = (
    "id, name, email, tenant_id, role_id, active, created_at, is_primary_admin, "
    "is_super_admin, is_system_admin, is_system_manager, subject"
)


def _row_to_user(r: tuple) -> User:
    return User(
        id=r[0],
        name=r[1],
        email=r[2],
        tenant_id=r[3],
        role_id=r[4],
        active=r[5],
        created_at=r[6],
        is_primary_admin=r[7],
        is_super_admin=r[8],
        is_system_admin=r[9],
        is_system_manager=r[10],
        subject=r[11],
    )


class PostgresFlaggedRows:
    """Boolean column with at most one true row per owner column value."""

    def __init__(
        self, conn: AsyncConnection, table: str, owner_column: str, flag_column: str
    ) -> None:
        self._conn = conn
        self._table = sql.Identifier(table)
        self._owner = sql.Identifier(owner_column)
        self._flag = sql.Identifier(flag_column)

    async def clear_flag(self, owner_id: UUID, except_id: UUID | None = None) -> None:
        """Unset the flag on every row of owner except except_id."""
        q = sql.SQL("UPDATE {table} SET {flag} = false WHERE {owner} = %s AND {flag}").format(
            table=self._table, flag=self._flag, owner=self._owner
        )
        params: list[object] = [owner_id]
        if except_id is not None:
            q = q + sql.SQL(" AND id <> %s")
            params.append(except_id)
        await self._conn.execute(q, params)

    async def set_flag(self, row_id: UUID) -> None:
        """Set the flag on one row."""
        await self._conn.execute(
            sql.SQL("UPDATE {table} SET {flag} = true WHERE id = %s").format(
                table=self._table, flag=self._flag
            ),
            (row_id,),
        )


class PostgresUserRepository:
    """User repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn
        self._primary_admin_flags = PostgresFlaggedRows(
            conn, "users", "tenant_id", "is_primary_admin"
        )

    @property
    def primary_admin_flags(self) -> PostgresFlaggedRows:
        return self._primary_admin_flags

    async def get_by_id(self, user_id: UUID) -> User | None:
        """Get user by id."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM users WHERE id = %s", (user_id,)
        )
        r = await cur.fetchone()
        return _row_to_user(r) if r else None

    async def get_by_subject(self, subject: str) -> User | None:
        """Get user by identity provider subject."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM users WHERE subject = %s", (subject,)
        )
        r = await cur.fetchone()
        return _row_to_user(r) if r else None

    async def get_by_email(self, email: str) -> User | None:
        """Get user by email (case-insensitive)."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM users WHERE lower(email) = lower(%s)", (email,)
        )
        r = await cur.fetchone()
        return _row_to_user(r) if r else None

    async def create(self, user: User) -> User:
        """Create user."""
        await self._conn.execute(
            f"INSERT INTO users ({_COLUMNS}) "
            "VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s)",
            (
                user.id,
                user.name,
                user.email,
                user.tenant_id,
                user.role_id,
                user.active,
                user.created_at,
                user.is_primary_admin,
                user.is_super_admin,
                user.is_system_admin,
                user.is_system_manager,
                user.subject,
            ),
        )
        return user
