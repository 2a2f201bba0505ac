"""Itinerary mutation engine.

Every operation is a pure function: it returns a new itinerary snapshot and
never mutates its input. Callers persist the snapshot they get back.
"""

from pydantic import BaseModel, ConfigDict, model_validator
from pydantic.alias_generators import to_camel

from wanderai.models.itinerary import Activity, DayItinerary, Itinerary


class ActivityChange(BaseModel):
    """Change requested for one day's activity list.

    - default: toggle the matching activities, or add ``activity`` if none match
    - ``remove``: delete the matching activities outright
    - ``batch_remove``: replace the day's list with ``selected_activities``
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    activity: Activity | None = None
    remove: bool = False
    batch_remove: bool = False
    selected_activities: list[Activity] | None = None

    @model_validator(mode="after")
    def validate_payload(self) -> "ActivityChange":
        """Ensure each change kind carries what it needs."""
        if self.batch_remove:
            if self.selected_activities is None:
                raise ValueError("batch_remove requires selected_activities")
        elif self.activity is None:
            raise ValueError("activity is required unless batch_remove is set")
        return self


def _replace_day(itinerary: Itinerary, day: DayItinerary) -> Itinerary:
    days = [day if d.day == day.day else d for d in itinerary.days]
    return itinerary.model_copy(update={"days": days})


def find_matches(day: DayItinerary, ref: Activity) -> list[int]:
    """Indexes of the activities ``ref`` refers to.

    A matching stable id identifies exactly one activity. Without one, the
    legacy (title, time) pair is used and every equal pair matches.
    """
    by_id = [i for i, a in enumerate(day.activities) if a.id == ref.id]
    if by_id:
        return by_id
    return [i for i, a in enumerate(day.activities) if a.same_slot(ref)]


def set_day_notes(itinerary: Itinerary, day_number: int, notes: str | None) -> Itinerary:
    """Replace the notes of one day.

    Returns the input itinerary unchanged if no day has ``day_number``.
    """
    day = itinerary.get_day(day_number)
    if day is None:
        return itinerary
    return _replace_day(itinerary, day.model_copy(update={"notes": notes}))


def _changed_activities(day: DayItinerary, change: ActivityChange) -> list[Activity]:
    if change.batch_remove:
        return list(change.selected_activities or [])

    ref = change.activity
    if ref is None:
        return list(day.activities)
    matches = set(find_matches(day, ref))

    if change.remove:
        return [a for i, a in enumerate(day.activities) if i not in matches]

    if not matches:
        return [*day.activities, ref.model_copy(update={"selected": True})]

    return [
        a.model_copy(update={"selected": not a.is_included}) if i in matches else a
        for i, a in enumerate(day.activities)
    ]


def apply_activity_change(
    itinerary: Itinerary, day_number: int, change: ActivityChange
) -> Itinerary:
    """Apply an activity change to a single day.

    Returns the input itinerary unchanged if no day has ``day_number``.
    """
    day = itinerary.get_day(day_number)
    if day is None:
        return itinerary
    activities = _changed_activities(day, change)
    return _replace_day(itinerary, day.model_copy(update={"activities": activities}))


def toggle_activity(itinerary: Itinerary, day_number: int, activity: Activity) -> Itinerary:
    """Flip selection of an activity, or add it if the day has no match."""
    return apply_activity_change(itinerary, day_number, ActivityChange(activity=activity))


def add_activity(itinerary: Itinerary, day_number: int, activity: Activity) -> Itinerary:
    """Add a new activity to a day (selected)."""
    return toggle_activity(itinerary, day_number, activity)


def remove_activity(itinerary: Itinerary, day_number: int, activity: Activity) -> Itinerary:
    """Delete the matching activities from a day."""
    return apply_activity_change(
        itinerary, day_number, ActivityChange(activity=activity, remove=True)
    )


def remove_unselected(itinerary: Itinerary, day_number: int) -> Itinerary:
    """Permanently drop soft-deleted activities from a day."""
    day = itinerary.get_day(day_number)
    if day is None:
        return itinerary
    kept = [a for a in day.activities if a.is_included]
    return apply_activity_change(
        itinerary,
        day_number,
        ActivityChange(batch_remove=True, selected_activities=kept),
    )


def count_included(day: DayItinerary) -> int:
    """Number of activities currently included in a day."""
    return sum(1 for a in day.activities if a.is_included)
