"""Replace-the-set diff for many-to-many grants."""

from collections.abc import Iterable
from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True)
class GrantDiff:
    """Rows to insert and delete so that current becomes desired."""

    to_add: frozenset[UUID]
    to_remove: frozenset[UUID]

    @property
    def is_noop(self) -> bool:
        return not self.to_add and not self.to_remove


def dedupe(ids: Iterable[UUID]) -> list[UUID]:
    """Drop duplicates, keeping first-seen order."""
    return list(dict.fromkeys(ids))


def diff_grants(current: Iterable[UUID], desired: Iterable[UUID]) -> GrantDiff:
    current_set = frozenset(current)
    desired_set = frozenset(desired)
    return GrantDiff(
        to_add=desired_set - current_set,
        to_remove=current_set - desired_set,
    )
