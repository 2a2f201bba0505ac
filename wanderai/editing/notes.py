"""Day note persistence with a local fallback.

Notes are written to the synced store first. When that fails the note goes
to the locally saved itinerary instead. The two stores are never merged.
"""

from enum import Enum

from wanderai.db.context import RequestContext
from wanderai.db.repositories import ItineraryRepository, NoteStore, PersistenceError
from wanderai.editing.mutations import set_day_notes
from wanderai.utils.logging import StructuredEventLogger
from wanderai.utils.metrics import record_note_write

event_logger = StructuredEventLogger(__name__)


class NoteWriteTarget(str, Enum):
    """Store that accepted a note write."""

    remote = "remote"
    local = "local"
    failed = "failed"


class LocalNoteStore:
    """NoteStore writing into the saved itinerary snapshot."""

    def __init__(self, repository: ItineraryRepository) -> None:
        self._repository = repository

    def upsert_day_notes(
        self, itinerary_id: str, day: int, notes: str | None, ctx: RequestContext
    ) -> None:
        """Replace the notes of one day in the saved itinerary.

        Raises:
            PersistenceError: If the itinerary or the day is not saved locally
        """
        saved = self._repository.get(itinerary_id, ctx)
        if saved is None:
            raise PersistenceError(f"itinerary {itinerary_id} not saved locally")
        if saved.get_day(day) is None:
            raise PersistenceError(f"itinerary {itinerary_id} has no day {day}")

        self._repository.save(set_day_notes(saved, day, notes), ctx)


class NoteWriter:
    """Write day notes remote-first, falling back to the local store."""

    def __init__(self, remote: NoteStore, local: NoteStore) -> None:
        self._remote = remote
        self._local = local

    def write(
        self, itinerary_id: str, day: int, notes: str | None, ctx: RequestContext
    ) -> NoteWriteTarget:
        """Persist one day's notes.

        Failures are logged, never raised: the in-memory edit already
        happened and the caller has nothing to roll back.

        Args:
            itinerary_id: Itinerary the day belongs to
            day: 1-based day number
            notes: Note text (None clears it)
            ctx: Request context

        Returns:
            The store that accepted the write, or ``failed``
        """
        target = self._try_write(itinerary_id, day, notes, ctx)
        record_note_write(target.value)
        event_logger.log_event(
            "day_notes_write",
            target.value,
            itinerary_id=itinerary_id,
            day=day,
        )
        return target

    def _try_write(
        self, itinerary_id: str, day: int, notes: str | None, ctx: RequestContext
    ) -> NoteWriteTarget:
        try:
            self._remote.upsert_day_notes(itinerary_id, day, notes, ctx)
            return NoteWriteTarget.remote
        except PersistenceError as e:
            event_logger.log_event(
                "day_notes_remote_write",
                "error",
                error_reason=str(e),
                itinerary_id=itinerary_id,
                day=day,
            )

        try:
            self._local.upsert_day_notes(itinerary_id, day, notes, ctx)
            return NoteWriteTarget.local
        except PersistenceError as e:
            event_logger.log_event(
                "day_notes_local_write",
                "error",
                error_reason=str(e),
                itinerary_id=itinerary_id,
                day=day,
            )
            return NoteWriteTarget.failed
