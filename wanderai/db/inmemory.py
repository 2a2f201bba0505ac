"""In-memory implementations of repository interfaces."""

import uuid

from wanderai.db.context import RequestContext
from wanderai.db.repositories import PersistenceError
from wanderai.models.itinerary import Itinerary


class InMemoryItineraryRepository:
    """In-memory implementation of ItineraryRepository."""

    def __init__(self) -> None:
        self._itineraries: dict[tuple[uuid.UUID, str], Itinerary] = {}

    def list(self, ctx: RequestContext) -> list[Itinerary]:
        """List saved itineraries, newest first."""
        results = [
            itinerary
            for (user_id, _), itinerary in self._itineraries.items()
            if user_id == ctx.user_id
        ]
        results.sort(key=lambda x: x.created_at, reverse=True)
        return results

    def get(self, itinerary_id: str, ctx: RequestContext) -> Itinerary | None:
        """Get a saved itinerary by ID."""
        return self._itineraries.get((ctx.user_id, itinerary_id))

    def save(self, itinerary: Itinerary, ctx: RequestContext) -> None:
        """Insert or replace an itinerary."""
        self._itineraries[(ctx.user_id, itinerary.id)] = itinerary

    def delete(self, itinerary_id: str, ctx: RequestContext) -> bool:
        """Delete a saved itinerary."""
        return self._itineraries.pop((ctx.user_id, itinerary_id), None) is not None


class InMemoryNoteStore:
    """In-memory implementation of NoteStore.

    Mirrors the synced store: notes can only be written for itineraries that
    have been registered with ``track`` or are saved in ``itineraries``.
    """

    def __init__(self, itineraries: InMemoryItineraryRepository | None = None) -> None:
        self._itineraries = itineraries
        self._tracked: set[tuple[uuid.UUID, str]] = set()
        self._notes: dict[tuple[uuid.UUID, str, int], str | None] = {}

    def track(self, itinerary_id: str, ctx: RequestContext) -> None:
        """Register an itinerary as synced."""
        self._tracked.add((ctx.user_id, itinerary_id))

    def _is_synced(self, itinerary_id: str, ctx: RequestContext) -> bool:
        if (ctx.user_id, itinerary_id) in self._tracked:
            return True
        return (
            self._itineraries is not None
            and self._itineraries.get(itinerary_id, ctx) is not None
        )

    def get_day_notes(self, itinerary_id: str, day: int, ctx: RequestContext) -> str | None:
        """Get the stored notes of one day."""
        return self._notes.get((ctx.user_id, itinerary_id, day))

    def upsert_day_notes(
        self, itinerary_id: str, day: int, notes: str | None, ctx: RequestContext
    ) -> None:
        """Insert or replace the notes of one day."""
        if not self._is_synced(itinerary_id, ctx):
            raise PersistenceError(f"itinerary {itinerary_id} not found")
        self._notes[(ctx.user_id, itinerary_id, day)] = notes
