"""Fixtures for API integration tests."""

from collections.abc import Generator, Iterator
from contextlib import contextmanager

import pytest
from fastapi.testclient import TestClient

from wanderai.api.deps import NoteWriterScope, get_itinerary_repository, get_note_writer_scope
from wanderai.db.inmemory import InMemoryItineraryRepository, InMemoryNoteStore
from wanderai.editing.notes import LocalNoteStore, NoteWriter
from wanderai.llm.client import MockItineraryClient, get_itinerary_client
from wanderai.main import app


@pytest.fixture
def repo() -> InMemoryItineraryRepository:
    """Fresh itinerary repository per test."""
    return InMemoryItineraryRepository()


@pytest.fixture
def note_store(repo: InMemoryItineraryRepository) -> InMemoryNoteStore:
    """Synced note store backed by the test repository."""
    return InMemoryNoteStore(repo)


@pytest.fixture
def client(
    repo: InMemoryItineraryRepository, note_store: InMemoryNoteStore
) -> Generator[TestClient, None, None]:
    """Test client with in-memory storage and the mock generator."""

    @contextmanager
    def scope() -> Iterator[NoteWriter]:
        yield NoteWriter(remote=note_store, local=LocalNoteStore(repo))

    def note_writer_scope() -> NoteWriterScope:
        return scope

    app.dependency_overrides[get_itinerary_repository] = lambda: repo
    app.dependency_overrides[get_note_writer_scope] = note_writer_scope
    app.dependency_overrides[get_itinerary_client] = MockItineraryClient

    yield TestClient(app)

    app.dependency_overrides.clear()
