"""Tests for the ordered equipment link list."""

import random

import pytest

from conftest import InMemoryCatalogRepository
from catalog_console.core.enums import LinkListState
from catalog_console.core.exceptions import ConflictError, NotFoundError, TransportError, ValidationError
from catalog_console.services.ordered_links import OrderedLinkList

pytestmark = pytest.mark.anyio


@pytest.fixture
async def link_list(four_links):
    repo = InMemoryCatalogRepository(links=four_links)
    link_list = OrderedLinkList(repo, "ex-1")
    await link_list.load()
    return link_list


def ids(link_list):
    return [link.id for link in link_list.links]


def orders(link_list):
    return [link.order for link in link_list.links]


class TestLoad:
    async def test_sorted_by_order_and_clean(self, link_list):
        assert ids(link_list) == ["L1", "L2", "L3", "L4"]
        assert link_list.state is LinkListState.CLEAN

    async def test_summary(self, link_list):
        summary = link_list.summary
        assert (summary.required, summary.optional, summary.total) == (2, 2, 4)


class TestMove:
    async def test_move_forward(self, link_list):
        link_list.move(0, 2)
        assert ids(link_list) == ["L2", "L3", "L1", "L4"]
        assert orders(link_list) == [1, 2, 3, 4]
        assert link_list.state is LinkListState.DIRTY

    async def test_move_is_local_only(self, link_list):
        calls_before = len(link_list.repository.calls)
        link_list.move(3, 0)
        assert ids(link_list) == ["L4", "L1", "L2", "L3"]
        assert len(link_list.repository.calls) == calls_before

    async def test_same_index_is_a_no_op(self, link_list):
        link_list.move(1, 1)
        assert ids(link_list) == ["L1", "L2", "L3", "L4"]
        assert link_list.state is LinkListState.CLEAN

    async def test_out_of_range_rejected(self, link_list):
        with pytest.raises(ValidationError):
            link_list.move(0, 4)
        with pytest.raises(ValidationError):
            link_list.move(-1, 0)
        assert link_list.state is LinkListState.CLEAN

    async def test_any_sequence_renumbers_contiguously(self, link_list):
        rng = random.Random(3)
        for _ in range(25):
            link_list.move(rng.randrange(4), rng.randrange(4))
            assert sorted(orders(link_list)) == [1, 2, 3, 4]
            assert orders(link_list) == [1, 2, 3, 4]

    async def test_drop_on_self_is_a_no_op(self, link_list):
        link_list.drop("L2", 1, "L2", 1)
        assert link_list.state is LinkListState.CLEAN
        link_list.drop("L1", 0, "L3", 2)
        assert ids(link_list) == ["L2", "L3", "L1", "L4"]


class TestCommit:
    async def test_commit_sends_full_order_and_cleans(self, link_list):
        link_list.move(0, 2)
        await link_list.commit()

        repo = link_list.repository
        parent, payload = repo.commits[-1]
        assert parent == "ex-1"
        assert [(o.id, o.order) for o in payload] == [("L2", 1), ("L3", 2), ("L1", 3), ("L4", 4)]
        assert link_list.state is LinkListState.CLEAN
        assert not link_list.is_committing

    async def test_commit_twice_sends_same_payload(self, link_list):
        link_list.move(2, 0)
        await link_list.commit()
        await link_list.commit()
        first, second = link_list.repository.commits
        assert first == second

    async def test_failed_commit_stays_dirty_and_can_retry(self, link_list):
        repo = link_list.repository
        link_list.move(0, 3)
        repo.fail_on.add("commit_order")

        with pytest.raises(TransportError) as exc_info:
            await link_list.commit()
        assert exc_info.value.operation == "commit_order"
        assert link_list.state is LinkListState.DIRTY
        assert ids(link_list) == ["L2", "L3", "L4", "L1"]
        assert not link_list.is_committing

        repo.fail_on.clear()
        await link_list.commit()
        assert link_list.state is LinkListState.CLEAN
        assert [o.id for o in repo.commits[-1][1]] == ["L2", "L3", "L4", "L1"]

    async def test_discard_restores_stored_order(self, link_list):
        link_list.move(0, 3)
        await link_list.discard()
        assert ids(link_list) == ["L1", "L2", "L3", "L4"]
        assert link_list.state is LinkListState.CLEAN


class TestWriteThrough:
    async def test_add_appends_after_max_order(self, link_list):
        link = await link_list.add("eq-band", is_required=False, setup_notes="Light band")
        assert link.order == 5
        assert ids(link_list)[-1] == link.id
        assert link_list.summary.optional == 3
        assert link_list.state is LinkListState.CLEAN

    async def test_add_on_empty_list_starts_at_one(self, repository):
        link_list = OrderedLinkList(repository, "ex-9")
        await link_list.load()
        link = await link_list.add("eq-mat")
        assert link.order == 1

    async def test_add_duplicate_child_conflicts(self, link_list):
        calls_before = len(link_list.repository.calls)
        with pytest.raises(ConflictError):
            await link_list.add("eq-bench")
        assert len(link_list.repository.calls) == calls_before

    async def test_orders_grow_past_gaps(self, link_list):
        await link_list.remove("L4")
        assert orders(link_list) == [1, 2, 3]
        link = await link_list.add("eq-rings")
        assert link.order == 4
        await link_list.remove("L2")
        assert orders(link_list) == [1, 3, 4]

    async def test_remove_does_not_renumber(self, link_list):
        await link_list.remove("L2")
        assert ids(link_list) == ["L1", "L3", "L4"]
        assert orders(link_list) == [1, 3, 4]

    async def test_remove_unknown(self, link_list):
        with pytest.raises(NotFoundError):
            await link_list.remove("nope")

    async def test_toggle_required_updates_summary(self, link_list):
        link = await link_list.toggle_required("L3")
        assert link.is_required is True
        assert link_list.summary.required == 3
        assert link_list.repository.links["L3"].is_required is True

    async def test_toggle_keeps_dirty_local_order(self, link_list):
        link_list.move(0, 3)
        await link_list.toggle_required("L1")
        assert ids(link_list) == ["L2", "L3", "L4", "L1"]
        assert orders(link_list) == [1, 2, 3, 4]
        assert link_list.state is LinkListState.DIRTY

    async def test_failed_toggle_leaves_list_unchanged(self, link_list):
        link_list.repository.fail_on.add("update_link")
        with pytest.raises(TransportError):
            await link_list.toggle_required("L1")
        assert link_list.links[0].is_required is True
        assert link_list.summary.required == 2

    async def test_update_setup_notes(self, link_list):
        link = await link_list.update_setup_notes("L1", "Set pins at chest height")
        assert link.setup_notes == "Set pins at chest height"

    async def test_available_children(self, link_list):
        assert link_list.available(["eq-barbell", "eq-rings", "eq-mat", "eq-box"]) == ["eq-rings", "eq-box"]
