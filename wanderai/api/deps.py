"""Storage dependencies.

Without DATABASE_URL the API keeps itineraries and synced notes in process
memory; with it, both live in the SQL database.
"""

from collections.abc import Callable, Generator, Iterator
from contextlib import AbstractContextManager, contextmanager

from wanderai.config import get_settings
from wanderai.db.engine import session_scope
from wanderai.db.inmemory import InMemoryItineraryRepository, InMemoryNoteStore
from wanderai.db.repositories import ItineraryRepository
from wanderai.db.sql_repositories import SqlItineraryRepository, SqlNoteStore
from wanderai.editing.notes import LocalNoteStore, NoteWriter

NoteWriterScope = Callable[[], AbstractContextManager[NoteWriter]]

_memory_itineraries = InMemoryItineraryRepository()
_memory_notes = InMemoryNoteStore(_memory_itineraries)


def get_itinerary_repository() -> Generator[ItineraryRepository, None, None]:
    """FastAPI dependency for the itinerary repository.

    Yields:
        Repository for the configured storage backend
    """
    if not get_settings().database_url:
        yield _memory_itineraries
        return

    with session_scope() as session:
        yield SqlItineraryRepository(session)


@contextmanager
def note_writer_scope() -> Iterator[NoteWriter]:
    """Open a NoteWriter with its own storage session.

    Background tasks run after the request's session is closed, so note
    writes get a session of their own.
    """
    if not get_settings().database_url:
        yield NoteWriter(remote=_memory_notes, local=LocalNoteStore(_memory_itineraries))
        return

    with session_scope() as session:
        yield NoteWriter(
            remote=SqlNoteStore(session),
            local=LocalNoteStore(SqlItineraryRepository(session)),
        )


def get_note_writer_scope() -> NoteWriterScope:
    """FastAPI dependency for opening note writers."""
    return note_writer_scope
