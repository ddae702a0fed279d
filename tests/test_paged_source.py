"""Tests for PagedSource: cursor traversal, exhaustion and invalidation."""

import asyncio

import pytest

from helpers import GatedDataService, make_notes, note_ids
from mynotes.domains.notes.entities import Note
from mynotes.paging.source import PagedSource, SourceState
from mynotes.services.memory import InMemoryDataService


async def traverse(source: PagedSource, page_size: int):
    page = await source.load_initial(page_size)
    collected = list(page.items)
    while source.next_token is not None:
        page = await source.load_next(page_size, source.next_token)
        collected.extend(page.items)
    return collected


class TestTraversal:

    @pytest.mark.asyncio
    @pytest.mark.parametrize("store_size", [0, 1, 5, 30])
    @pytest.mark.parametrize("page_size", [1, 2, 3, 7, 20, 100])
    async def test_full_traversal_yields_every_note_once(self, store_size, page_size):
        service = InMemoryDataService(seed=store_size)
        expected = note_ids((await service.load_page(100)).items) if store_size else []

        collected = await traverse(PagedSource(service), page_size)

        assert note_ids(collected) == expected
        assert len(set(note_ids(collected))) == store_size

    @pytest.mark.asyncio
    async def test_concrete_pages(self, abcde_service):
        source = PagedSource(abcde_service)

        first = await source.load_initial(2)
        assert (note_ids(first.items), first.next_token) == (["A", "B"], "B")

        second = await source.load_next(2, "B")
        assert (note_ids(second.items), second.next_token) == (["C", "D"], "D")

        third = await source.load_next(2, "D")
        assert (note_ids(third.items), third.next_token) == (["E"], None)

    @pytest.mark.asyncio
    async def test_exhaustion_is_not_invalidation(self, abcde_service):
        source = PagedSource(abcde_service)
        await source.load_initial(10)

        assert source.is_exhausted
        assert source.state is SourceState.ACTIVE
        assert not source.can_load_next

    @pytest.mark.asyncio
    async def test_no_request_after_exhaustion(self):
        service = GatedDataService(notes=make_notes("AB"), hold=0)
        source = PagedSource(service)
        await source.load_initial(5)

        assert await source.load_next(5, "B") is None
        assert service.page_requests == 1


class TestStateMachine:

    @pytest.mark.asyncio
    async def test_initial_load_only_once(self, abcde_service):
        source = PagedSource(abcde_service)
        await source.load_initial(2)

        with pytest.raises(RuntimeError):
            await source.load_initial(2)

    @pytest.mark.asyncio
    async def test_next_requires_initial(self, abcde_service):
        source = PagedSource(abcde_service)
        with pytest.raises(RuntimeError):
            await source.load_next(2, "B")

    @pytest.mark.asyncio
    async def test_foreign_token_is_rejected(self, abcde_service):
        source = PagedSource(abcde_service)
        await source.load_initial(2)

        with pytest.raises(ValueError):
            await source.load_next(2, "D")

    @pytest.mark.asyncio
    async def test_old_token_of_same_source_is_rejected(self, abcde_service):
        source = PagedSource(abcde_service)
        await source.load_initial(2)
        await source.load_next(2, "B")

        with pytest.raises(ValueError):
            await source.load_next(2, "B")

    @pytest.mark.asyncio
    async def test_overlapping_requests_are_refused(self):
        service = GatedDataService(notes=make_notes("ABCDE"), hold=1)
        source = PagedSource(service)

        pending = asyncio.create_task(source.load_initial(2))
        await asyncio.sleep(0)
        assert source.is_loading

        with pytest.raises(RuntimeError):
            await source._request(2, None)

        service.gate.set()
        page = await pending
        assert note_ids(page.items) == ["A", "B"]
        assert not source.is_loading

    @pytest.mark.asyncio
    async def test_invalidate_is_idempotent_and_notifies_once(self, abcde_service):
        source = PagedSource(abcde_service)
        calls = []
        source.add_invalidated_callback(calls.append)

        source.invalidate()
        source.invalidate()

        assert source.is_invalid
        assert calls == [source]

    @pytest.mark.asyncio
    async def test_removed_callback_is_not_called(self, abcde_service):
        source = PagedSource(abcde_service)
        calls = []
        source.add_invalidated_callback(calls.append)
        source.remove_invalidated_callback(calls.append)

        source.invalidate()
        assert calls == []

    @pytest.mark.asyncio
    async def test_invalidated_source_issues_no_pages(self, abcde_service):
        source = PagedSource(abcde_service)
        await source.load_initial(2)
        source.invalidate()

        assert await source.load_next(2, "B") is None

        fresh = PagedSource(abcde_service)
        fresh.invalidate()
        assert await fresh.load_initial(2) is None

    @pytest.mark.asyncio
    async def test_stale_result_is_dropped(self):
        service = GatedDataService(notes=make_notes("ABCDE"), hold=1)
        source = PagedSource(service)

        pending = asyncio.create_task(source.load_initial(2))
        await asyncio.sleep(0)
        source.invalidate()
        service.gate.set()

        assert await pending is None
        assert source.next_token is None
        assert not source.is_exhausted

    @pytest.mark.asyncio
    async def test_stale_next_page_is_dropped(self):
        service = GatedDataService(notes=make_notes("ABCDE"), hold=0)
        source = PagedSource(service)
        await source.load_initial(2)

        service.hold = 1
        pending = asyncio.create_task(source.load_next(2, "B"))
        await asyncio.sleep(0)
        assert source.is_loading

        source.invalidate()
        service.gate.set()

        assert await pending is None
        assert source.next_token == "B"
        assert not source.is_loading
        assert not source.can_load_next

    @pytest.mark.asyncio
    async def test_backward_paging_invalidates(self, abcde_service):
        source = PagedSource(abcde_service)
        await source.load_initial(2)

        assert await source.load_before(2, "B") is None
        assert source.is_invalid


class TestItemOperations:

    @pytest.mark.asyncio
    async def test_get_does_not_invalidate(self, abcde_service):
        source = PagedSource(abcde_service)

        first = await source.get_item("A")
        second = await source.get_item("A")

        assert (first.note_id, first.title, first.content) == (second.note_id, second.title, second.content)
        assert not source.is_invalid

    @pytest.mark.asyncio
    async def test_successful_writes_invalidate(self, abcde_service):
        for operation in (
            lambda s: s.create_item("T", "C"),
            lambda s: s.update_item(Note(note_id="A", title="A2", content="")),
            lambda s: s.delete_item("B"),
        ):
            source = PagedSource(abcde_service)
            await operation(source)
            assert source.is_invalid

    @pytest.mark.asyncio
    async def test_not_found_writes_keep_source(self, abcde_service):
        source = PagedSource(abcde_service)

        assert await source.update_item(Note(note_id="Z", title="Z", content="")) is None
        assert await source.delete_item("Z") is False
        assert not source.is_invalid

    @pytest.mark.asyncio
    async def test_late_write_notifies_callbacks(self, abcde_service):
        source = PagedSource(abcde_service)
        late = []
        source.add_late_write_callback(late.append)

        source.invalidate()
        await source.delete_item("A")

        assert late == [source]
