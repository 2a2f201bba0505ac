"""User-scoped query helpers."""

from sqlalchemy import Select, select

from wanderai.db.context import RequestContext
from wanderai.db.models import DayNote, SavedItinerary


def select_itineraries(ctx: RequestContext) -> Select[tuple[SavedItinerary]]:
    """Select saved itineraries with user scoping enforced.

    Args:
        ctx: Request context with user_id

    Returns:
        Select filtered by user_id
    """
    return select(SavedItinerary).where(SavedItinerary.user_id == ctx.user_id)


def select_day_notes(ctx: RequestContext, itinerary_id: str) -> Select[tuple[DayNote]]:
    """Select synced day notes of one itinerary with user scoping enforced.

    Args:
        ctx: Request context with user_id
        itinerary_id: Itinerary ID

    Returns:
        Select filtered by user_id and itinerary_id
    """
    return select(DayNote).where(
        DayNote.user_id == ctx.user_id, DayNote.itinerary_id == itinerary_id
    )
