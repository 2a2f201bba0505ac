"""Repository protocol interfaces for data access."""

from typing import Protocol

from wanderai.db.context import RequestContext
from wanderai.models.itinerary import Itinerary


class PersistenceError(Exception):
    """A store could not persist or locate the requested record."""

    pass


class ItineraryRepository(Protocol):
    """Repository for saved itineraries."""

    def list(self, ctx: RequestContext) -> list[Itinerary]:
        """List saved itineraries, newest first.

        Args:
            ctx: Request context (scopes to the user)

        Returns:
            Saved itineraries
        """
        ...

    def get(self, itinerary_id: str, ctx: RequestContext) -> Itinerary | None:
        """Get a saved itinerary by ID.

        Args:
            itinerary_id: Itinerary ID
            ctx: Request context (scopes to the user)

        Returns:
            Itinerary or None if not found
        """
        ...

    def save(self, itinerary: Itinerary, ctx: RequestContext) -> None:
        """Insert or replace an itinerary, keyed by its ID.

        Args:
            itinerary: Itinerary snapshot to store
            ctx: Request context
        """
        ...

    def delete(self, itinerary_id: str, ctx: RequestContext) -> bool:
        """Delete a saved itinerary.

        Args:
            itinerary_id: Itinerary ID
            ctx: Request context (scopes to the user)

        Returns:
            True if an itinerary was deleted
        """
        ...


class NoteStore(Protocol):
    """Store for per-day notes."""

    def upsert_day_notes(
        self, itinerary_id: str, day: int, notes: str | None, ctx: RequestContext
    ) -> None:
        """Insert or replace the notes of one day.

        Args:
            itinerary_id: Itinerary the day belongs to
            day: 1-based day number
            notes: Note text (None clears it)
            ctx: Request context

        Raises:
            PersistenceError: If the record cannot be written or does not exist
        """
        ...
