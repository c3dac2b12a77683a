"""Listing DTOs - caller filters and paginated results."""

from dataclasses import dataclass
from math import ceil
from typing import Generic, Literal, TypeVar
from uuid import UUID

T = TypeVar("T")

PER_PAGE_ALL: Literal["all"] = "all"
DEFAULT_PER_PAGE = 15
MAX_PER_PAGE = 100


@dataclass
class ListQuery:
    """Caller filters for listing roles or permissions.

    module and category apply to permissions only. tenant_id is honoured only
    for SuperAdmin; include_deleted only for SuperAdmin.
    """

    active: bool | None = None
    is_custom: bool | None = None
    module: str | None = None
    category: str | None = None
    tenant_id: UUID | None = None
    search: str | None = None
    page: int = 1
    per_page: int | Literal["all"] = DEFAULT_PER_PAGE
    include_deleted: bool = False

    def __post_init__(self) -> None:
        self.page = max(self.page, 1)
        if self.per_page != PER_PAGE_ALL:
            self.per_page = min(max(int(self.per_page), 1), MAX_PER_PAGE)
        if self.search is not None:
            self.search = self.search.strip() or None

    @property
    def is_all(self) -> bool:
        return self.per_page == PER_PAGE_ALL

    @property
    def offset(self) -> int:
        return 0 if self.is_all else (self.page - 1) * self.per_page

    @property
    def limit(self) -> int | None:
        return None if self.is_all else self.per_page


@dataclass
class Page(Generic[T]):
    """One page of a filtered listing plus its metadata."""

    items: list[T]
    total: int
    current_page: int = 1
    last_page: int = 1
    per_page: int | None = None
    from_: int | None = None
    to: int | None = None

    @classmethod
    def build(cls, items: list[T], total: int, query: ListQuery) -> "Page[T]":
        if query.is_all:
            return cls(
                items=items,
                total=total,
                from_=1 if items else None,
                to=len(items) if items else None,
            )
        per_page = int(query.per_page)
        first = query.offset + 1 if items else None
        return cls(
            items=items,
            total=total,
            current_page=query.page,
            last_page=max(ceil(total / per_page), 1),
            per_page=per_page,
            from_=first,
            to=query.offset + len(items) if items else None,
        )

    def meta(self) -> dict[str, int | None]:
        return {
            "total": self.total,
            "current_page": self.current_page,
            "last_page": self.last_page,
            "per_page": self.per_page,
            "from": self.from_,
            "to": self.to,
        }

