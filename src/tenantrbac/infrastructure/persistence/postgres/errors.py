"""Translation of storage constraint violations into domain errors."""

from collections.abc import Iterator
from contextlib import contextmanager

from psycopg import errors as pg_errors

from tenantrbac.domain.exceptions import DuplicateName


@contextmanager
def unique_name_guard(resource: str, name: str) -> Iterator[None]:
    """Raise DuplicateName when a partial unique index rejects the write.

    The check-then-insert in the use case covers the normal path; this
    catches the race where a concurrent transaction took the name first.
    """
    try:
        yield
    except pg_errors.UniqueViolation as e:
        raise DuplicateName(resource, name) from e
