"""Tests for NotesRepository: CRUD routing and invalidate-and-reload."""

import asyncio

import pytest

from helpers import make_notes, note_ids
from mynotes.domains.notes.entities import Note
from mynotes.repository import NotesRepository
from mynotes.services.memory import InMemoryDataService


async def observe(repository):
    received = []
    page_list = repository.observable_page_list()
    page_list.subscribe(received.append)
    await page_list.wait_idle()
    return page_list, received


async def load_everything(page_list):
    while await page_list.load_more():
        pass
    return note_ids(page_list.items)


class TestObservableList:

    def test_page_list_is_built_once(self, repository):
        assert repository.observable_page_list() is repository.observable_page_list()

    def test_default_page_size_from_settings(self):
        repository = NotesRepository(InMemoryDataService())
        assert repository.observable_page_list().page_size == 20

    @pytest.mark.parametrize("page_size", [0, 101])
    def test_out_of_range_page_size_fails_at_construction(self, page_size):
        with pytest.raises(ValueError):
            NotesRepository(InMemoryDataService(seed=5), page_size=page_size)

    @pytest.mark.asyncio
    async def test_first_observation_creates_source(self, repository):
        assert repository.current_source() is None

        page_list, received = await observe(repository)

        assert repository.current_source() is page_list.source
        assert note_ids(received[0]) == ["A", "B"]


class TestMutations:

    @pytest.mark.asyncio
    async def test_create_invalidates_and_reloads(self, repository):
        page_list, received = await observe(repository)
        first_source = repository.current_source()

        note = await repository.create("T", "C")
        await page_list.wait_idle()

        assert first_source.is_invalid
        assert repository.current_source() is not first_source
        assert received[-1].change == "replace"

        ids = await load_everything(page_list)
        assert ids == ["A", "B", "C", note.note_id]
        assert ids.count(note.note_id) == 1

    @pytest.mark.asyncio
    async def test_delete_excludes_note_from_reload(self, repository):
        page_list, _ = await observe(repository)

        assert await repository.delete("B") is True
        await page_list.wait_idle()

        assert await load_everything(page_list) == ["A", "C"]

    @pytest.mark.asyncio
    async def test_update_reloads_with_new_content(self, repository):
        page_list, _ = await observe(repository)

        updated = await repository.update(Note(note_id="A", title="Renamed", content="x"))
        await page_list.wait_idle()

        assert updated.title == "Renamed"
        assert page_list.items[0].title == "Renamed"

    @pytest.mark.asyncio
    async def test_update_absent_returns_none_and_keeps_epoch(self, repository):
        page_list, _ = await observe(repository)
        source = repository.current_source()

        result = await repository.update(Note(note_id="Z", title="Ghost", content=""))

        assert result is None
        assert not source.is_invalid
        assert await repository.get("Z") is None
        assert await load_everything(page_list) == ["A", "B", "C"]

    @pytest.mark.asyncio
    async def test_delete_absent_returns_false(self, repository):
        await observe(repository)
        source = repository.current_source()

        assert await repository.delete("Z") is False
        assert not source.is_invalid

    @pytest.mark.asyncio
    async def test_caller_errors_propagate(self, repository):
        await observe(repository)
        source = repository.current_source()

        with pytest.raises(ValueError):
            await repository.create("", "content")
        with pytest.raises(ValueError):
            await repository.delete("")

        assert not source.is_invalid

    @pytest.mark.asyncio
    async def test_write_completing_after_reload_invalidates_again(self):
        service = InMemoryDataService(notes=make_notes("AB"))
        repository = NotesRepository(service, page_size=10)
        page_list, _ = await observe(repository)

        pending = asyncio.create_task(repository.create("late", ""))
        await asyncio.sleep(0)

        page_list.refresh()
        reloading_source = repository.current_source()

        note = await pending
        await page_list.wait_idle()

        assert reloading_source.is_invalid
        assert note_ids(page_list.items) == ["A", "B", note.note_id]


class TestGet:

    @pytest.mark.asyncio
    async def test_get_never_invalidates(self, repository):
        await observe(repository)
        source = repository.current_source()

        first = await repository.get("B")
        second = await repository.get("B")

        assert repository.current_source() is source
        assert not source.is_invalid
        assert (first.note_id, first.title, first.content) == (second.note_id, second.title, second.content)

    @pytest.mark.asyncio
    async def test_get_missing(self, repository):
        assert await repository.get("missing") is None


class TestWithoutObservation:

    @pytest.mark.asyncio
    async def test_crud_before_list_is_observed(self, repository):
        note = await repository.create("T", "C")
        assert repository.current_source() is None

        fetched = await repository.get(note.note_id)
        assert fetched.title == "T"

        fetched.title = "T2"
        assert (await repository.update(fetched)).title == "T2"
        assert await repository.delete(note.note_id) is True

        page_list, received = await observe(repository)
        assert note_ids(received[0]) == ["A", "B"]
