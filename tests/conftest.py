import pytest

from helpers import make_notes
from mynotes.repository import NotesRepository
from mynotes.services.memory import InMemoryDataService


@pytest.fixture
def abcde_service():
    return InMemoryDataService(notes=make_notes("ABCDE"))


@pytest.fixture
def empty_service():
    return InMemoryDataService()


@pytest.fixture
def repository():
    return NotesRepository(InMemoryDataService(notes=make_notes("ABC")), page_size=2)
