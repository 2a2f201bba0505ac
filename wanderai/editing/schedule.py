"""Day activity scheduling - chronological display order and manage mode."""

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum

from wanderai.editing.mutations import (
    ActivityChange,
    add_activity,
    apply_activity_change,
    remove_unselected,
    toggle_activity,
)
from wanderai.models.itinerary import Activity, DayItinerary, Itinerary

RANGE_SEPARATOR = " - "


def parse_start_minutes(time_str: str) -> int | None:
    """Convert the start of a clock time to minutes since midnight.

    Accepts "9:00 AM" or a range "9:00 AM - 11:30 AM" (only the start is
    used). Returns None for anything that does not have that shape.

    Examples:
        "12:15 AM" -> 15
        "12:00 PM" -> 720
        "2:30 PM"  -> 870
    """
    start = time_str.split(RANGE_SEPARATOR, 1)[0].strip()
    parts = start.split(" ")
    if len(parts) != 2:
        return None

    clock, marker = parts
    marker = marker.upper()
    if marker not in ("AM", "PM"):
        return None

    hour_minute = clock.split(":")
    if len(hour_minute) != 2 or not all(p.isdigit() for p in hour_minute):
        return None

    hour, minute = int(hour_minute[0]), int(hour_minute[1])
    if not 1 <= hour <= 12 or not 0 <= minute <= 59:
        return None

    if hour == 12:
        hour = 12 if marker == "PM" else 0
    elif marker == "PM":
        hour += 12

    return hour * 60 + minute


def _sort_key(activity: Activity) -> tuple[bool, int]:
    minutes = parse_start_minutes(activity.time)
    # Unparseable times sort last
    return (minutes is None, minutes or 0)


def derive_display_activities(day: DayItinerary, manage_mode: bool = False) -> list[Activity]:
    """Activities of a day in chronological order.

    Viewing shows only included activities; manage mode shows all of them so
    excluded ones can be re-included. Ties keep their stored order.
    """
    activities = day.activities if manage_mode else [a for a in day.activities if a.is_included]
    return sorted(activities, key=_sort_key)


class ViewMode(str, Enum):
    """Day view state."""

    viewing = "viewing"
    managing = "managing"


class InvalidTransitionError(Exception):
    """Operation not allowed in the current view mode."""

    pass


class UnknownDayError(LookupError):
    """The view is bound to a day the itinerary does not have."""

    pass


@dataclass
class DayActivityView:
    """Viewing/managing state machine for one day of an itinerary.

    ``customize()`` enters manage mode; ``done()`` leaves it and always
    commits removal of unselected activities. There is no cancel path.
    Each new snapshot is passed to ``on_update`` for the owner to persist.
    """

    itinerary: Itinerary
    day_number: int
    on_update: Callable[[Itinerary], None] | None = None
    mode: ViewMode = field(default=ViewMode.viewing)

    @property
    def day(self) -> DayItinerary:
        """The day this view is bound to.

        Raises:
            UnknownDayError: If the itinerary has no such day
        """
        day = self.itinerary.get_day(self.day_number)
        if day is None:
            raise UnknownDayError(f"day {self.day_number} not in itinerary {self.itinerary.id}")
        return day

    @property
    def activities(self) -> list[Activity]:
        """Activities as currently displayed."""
        return derive_display_activities(self.day, manage_mode=self.mode is ViewMode.managing)

    def customize(self) -> None:
        """Enter manage mode."""
        if self.mode is not ViewMode.viewing:
            raise InvalidTransitionError("already managing activities")
        self.mode = ViewMode.managing

    def toggle(self, activity: Activity) -> Itinerary:
        """Flip inclusion of an activity while managing."""
        self._require_managing("toggle")
        return self._commit(toggle_activity(self.itinerary, self.day_number, activity))

    def add(self, activity: Activity) -> Itinerary:
        """Add a new activity while managing."""
        self._require_managing("add")
        return self._commit(add_activity(self.itinerary, self.day_number, activity))

    def apply(self, change: ActivityChange) -> Itinerary:
        """Apply any activity change while managing."""
        self._require_managing("change activities")
        return self._commit(apply_activity_change(self.itinerary, self.day_number, change))

    def done(self) -> Itinerary:
        """Leave manage mode, permanently removing unselected activities."""
        self._require_managing("done")
        self.mode = ViewMode.viewing
        return self._commit(remove_unselected(self.itinerary, self.day_number))

    def _require_managing(self, action: str) -> None:
        if self.mode is not ViewMode.managing:
            raise InvalidTransitionError(f"cannot {action} while {self.mode.value}")

    def _commit(self, updated: Itinerary) -> Itinerary:
        self.itinerary = updated
        if self.on_update is not None:
            self.on_update(updated)
        return updated
