"""SQL implementations of repository interfaces."""

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from wanderai.db.context import RequestContext
from wanderai.db.models import DayNote, SavedItinerary
from wanderai.db.queries import select_day_notes, select_itineraries
from wanderai.db.repositories import PersistenceError
from wanderai.models.itinerary import Itinerary


class SqlItineraryRepository:
    """SQL implementation of ItineraryRepository."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def list(self, ctx: RequestContext) -> list[Itinerary]:
        """List saved itineraries, newest first."""
        rows = self._session.scalars(
            select_itineraries(ctx).order_by(SavedItinerary.created_at.desc())
        ).all()
        return [Itinerary.model_validate(row.data) for row in rows]

    def get(self, itinerary_id: str, ctx: RequestContext) -> Itinerary | None:
        """Get a saved itinerary by ID."""
        row = self._session.get(
            SavedItinerary, {"user_id": ctx.user_id, "itinerary_id": itinerary_id}
        )

        if row is None:
            return None

        return Itinerary.model_validate(row.data)

    def save(self, itinerary: Itinerary, ctx: RequestContext) -> None:
        """Insert or replace an itinerary."""
        data = itinerary.model_dump(mode="json", by_alias=True)
        row = self._session.get(
            SavedItinerary, {"user_id": ctx.user_id, "itinerary_id": itinerary.id}
        )

        if row is None:
            row = SavedItinerary(
                user_id=ctx.user_id,
                itinerary_id=itinerary.id,
                destination=itinerary.destination,
                data=data,
                created_at=itinerary.created_at,
            )
            self._session.add(row)
        else:
            row.destination = itinerary.destination
            row.data = data

        self._session.commit()

    def delete(self, itinerary_id: str, ctx: RequestContext) -> bool:
        """Delete a saved itinerary and its synced notes."""
        row = self._session.get(
            SavedItinerary, {"user_id": ctx.user_id, "itinerary_id": itinerary_id}
        )

        if row is None:
            return False

        self._session.delete(row)
        self._session.commit()
        return True


class SqlNoteStore:
    """SQL implementation of NoteStore (the synced note store)."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def get_day_notes(self, itinerary_id: str, ctx: RequestContext) -> dict[int, str | None]:
        """Get synced notes of an itinerary keyed by day number."""
        rows = self._session.scalars(select_day_notes(ctx, itinerary_id)).all()
        return {row.day: row.notes for row in rows}

    def upsert_day_notes(
        self, itinerary_id: str, day: int, notes: str | None, ctx: RequestContext
    ) -> None:
        """Insert or replace the notes of one day.

        Raises:
            PersistenceError: If the itinerary is not synced or the write fails
        """
        try:
            itinerary = self._session.get(
                SavedItinerary, {"user_id": ctx.user_id, "itinerary_id": itinerary_id}
            )
            if itinerary is None:
                raise PersistenceError(f"itinerary {itinerary_id} not found")

            row = self._session.get(
                DayNote, {"user_id": ctx.user_id, "itinerary_id": itinerary_id, "day": day}
            )
            if row is None:
                self._session.add(
                    DayNote(user_id=ctx.user_id, itinerary_id=itinerary_id, day=day, notes=notes)
                )
            else:
                row.notes = notes

            self._session.commit()
        except SQLAlchemyError as e:
            self._session.rollback()
            raise PersistenceError(f"failed to save notes for day {day}: {e}") from e
