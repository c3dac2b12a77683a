"""Unit tests for grant diffing and the flagged-row helper."""

from uuid import uuid4

import pytest

from tenantrbac.application.services.flagged_rows import set_exclusive_flag
from tenantrbac.domain.services import dedupe, diff_grants

from tests.conftest import FakeFlaggedRows


def test_dedupe_keeps_first_seen_order() -> None:
    a, b, c = uuid4(), uuid4(), uuid4()
    assert dedupe([b, a, b, c, a]) == [b, a, c]


def test_diff_replaces_the_set() -> None:
    p1, p2, p3, p4 = uuid4(), uuid4(), uuid4(), uuid4()
    diff = diff_grants([p1, p2, p3], [p2, p4])
    assert diff.to_add == {p4}
    assert diff.to_remove == {p1, p3}


def test_diff_same_set_is_noop() -> None:
    p1, p2 = uuid4(), uuid4()
    assert diff_grants([p1, p2], [p2, p1, p2]).is_noop


def test_diff_empty_desired_revokes_everything() -> None:
    p1 = uuid4()
    diff = diff_grants([p1], [])
    assert diff.to_remove == {p1}
    assert not diff.to_add


@pytest.mark.asyncio
async def test_exclusive_flag_moves_between_rows(db, tenant, other_tenant) -> None:
    """Only one primary admin per tenant; other tenants are untouched."""
    first = db.add_user(tenant.id, is_primary_admin=True)
    second = db.add_user(tenant.id)
    foreign = db.add_user(other_tenant.id, is_primary_admin=True)

    await set_exclusive_flag(FakeFlaggedRows(db), tenant.id, second.id)

    assert not db.users[first.id].is_primary_admin
    assert db.users[second.id].is_primary_admin
    assert db.users[foreign.id].is_primary_admin
