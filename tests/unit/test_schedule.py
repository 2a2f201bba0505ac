"""Tests for activity ordering and the day manage-mode state machine."""

import pytest

from wanderai.editing.mutations import ActivityChange
from wanderai.editing.schedule import (
    DayActivityView,
    InvalidTransitionError,
    UnknownDayError,
    ViewMode,
    derive_display_activities,
    parse_start_minutes,
)
from wanderai.models import Activity, DayItinerary, Itinerary


class TestParseStartMinutes:
    """Clock time parsing."""

    @pytest.mark.parametrize(
        ("time_str", "expected"),
        [
            ("9:00 AM", 540),
            ("9:00 AM - 11:30 AM", 540),
            ("12:15 AM", 15),
            ("12:00 PM", 720),
            ("2:30 PM", 870),
            ("11:59 pm", 1439),
            ("01:05 AM", 65),
        ],
    )
    def test_valid_times(self, time_str: str, expected: int) -> None:
        """Start times convert to minutes since midnight."""
        assert parse_start_minutes(time_str) == expected

    @pytest.mark.parametrize(
        "time_str",
        ["", "Morning", "14:00", "13:00 PM", "9:60 AM", "9 AM", "9:00AM", "9:00 XM", "TBD - 5:00 PM"],
    )
    def test_invalid_times(self, time_str: str) -> None:
        """Anything else is unparseable."""
        assert parse_start_minutes(time_str) is None


def _day(*activities: Activity) -> DayItinerary:
    return DayItinerary(day=1, date="Day 1", activities=list(activities))


class TestDeriveDisplayActivities:
    """Display order."""

    def test_sorted_by_start_time(self, sample_itinerary: Itinerary) -> None:
        """Activities display chronologically."""
        day = sample_itinerary.days[0]
        shown = derive_display_activities(day)
        assert [a.id for a in shown] == ["a-castle", "a-lunch"]

    def test_manage_mode_includes_excluded(self, sample_itinerary: Itinerary) -> None:
        """Manage mode also shows soft-deleted activities."""
        day = sample_itinerary.days[0]
        shown = derive_display_activities(day, manage_mode=True)
        assert [a.id for a in shown] == ["a-castle", "a-lunch", "a-fado"]

    def test_unparseable_times_sort_last_in_stored_order(self) -> None:
        """Unknown times keep their relative order after the timed ones."""
        day = _day(
            Activity(id="x", time="Evening", title="x"),
            Activity(id="b", time="2:00 PM", title="b"),
            Activity(id="y", time="Flexible", title="y"),
            Activity(id="a", time="8:00 AM", title="a"),
        )
        assert [a.id for a in derive_display_activities(day)] == ["a", "b", "x", "y"]

    def test_equal_times_keep_stored_order(self) -> None:
        """The sort is stable."""
        day = _day(
            Activity(id="first", time="9:00 AM", title="first"),
            Activity(id="second", time="9:00 AM - 10:00 AM", title="second"),
        )
        assert [a.id for a in derive_display_activities(day)] == ["first", "second"]

    def test_does_not_reorder_stored_list(self, sample_itinerary: Itinerary) -> None:
        """Ordering is derived, never written back."""
        day = sample_itinerary.days[0]
        derive_display_activities(day)
        assert [a.id for a in day.activities] == ["a-lunch", "a-castle", "a-fado"]


class TestDayActivityView:
    """Viewing/managing state machine."""

    def test_starts_viewing(self, sample_itinerary: Itinerary) -> None:
        """Views start in viewing mode and hide excluded activities."""
        view = DayActivityView(sample_itinerary, 1)
        assert view.mode is ViewMode.viewing
        assert [a.id for a in view.activities] == ["a-castle", "a-lunch"]

    def test_customize_enters_manage_mode(self, sample_itinerary: Itinerary) -> None:
        """Customize shows every activity."""
        view = DayActivityView(sample_itinerary, 1)
        view.customize()
        assert view.mode is ViewMode.managing
        assert len(view.activities) == 3

    def test_customize_twice_rejected(self, sample_itinerary: Itinerary) -> None:
        """Customize is only valid while viewing."""
        view = DayActivityView(sample_itinerary, 1)
        view.customize()
        with pytest.raises(InvalidTransitionError):
            view.customize()

    @pytest.mark.parametrize("action", ["toggle", "add", "done"])
    def test_edits_require_manage_mode(self, sample_itinerary: Itinerary, action: str) -> None:
        """Toggle, add and done are rejected while viewing."""
        view = DayActivityView(sample_itinerary, 1)
        activity = Activity(time="1:00 PM", title="x")
        with pytest.raises(InvalidTransitionError):
            if action == "done":
                view.done()
            else:
                getattr(view, action)(activity)

    def test_apply_requires_manage_mode(self, sample_itinerary: Itinerary) -> None:
        """Arbitrary changes are rejected while viewing."""
        view = DayActivityView(sample_itinerary, 1)
        change = ActivityChange(activity=Activity(time="1:00 PM", title="x"))
        with pytest.raises(InvalidTransitionError):
            view.apply(change)

    def test_every_snapshot_is_published(self, sample_itinerary: Itinerary) -> None:
        """Each edit hands the new itinerary to the owner."""
        published: list[Itinerary] = []
        view = DayActivityView(sample_itinerary, 1, on_update=published.append)
        view.customize()

        lunch = sample_itinerary.days[0].activities[0]
        after_toggle = view.toggle(lunch)
        after_add = view.add(Activity(time="6:00 PM", title="Sunset at Miradouro"))

        assert published == [after_toggle, after_add]
        assert view.itinerary is after_add

    def test_full_cycle(self, sample_itinerary: Itinerary) -> None:
        """Customize, toggle, add and done leave exactly the included activities."""
        view = DayActivityView(sample_itinerary, 1)
        view.customize()

        lunch = sample_itinerary.days[0].activities[0]
        view.toggle(lunch)
        view.add(Activity(id="a-sunset", time="6:00 PM", title="Sunset at Miradouro"))
        result = view.done()

        assert view.mode is ViewMode.viewing
        day = result.get_day(1)
        assert day is not None
        assert [a.id for a in day.activities] == ["a-castle", "a-sunset"]
        assert [a.id for a in view.activities] == ["a-castle", "a-sunset"]
        assert result.get_day(2) == sample_itinerary.get_day(2)

    def test_done_without_changes_commits_removal(self, sample_itinerary: Itinerary) -> None:
        """Leaving manage mode always drops unselected activities."""
        view = DayActivityView(sample_itinerary, 1)
        view.customize()
        result = view.done()
        assert [a.id for a in result.days[0].activities] == ["a-lunch", "a-castle"]

    def test_missing_day(self, sample_itinerary: Itinerary) -> None:
        """Views on a missing day fail on access with a module error."""
        view = DayActivityView(sample_itinerary, 9)
        with pytest.raises(UnknownDayError, match="day 9"):
            _ = view.day
        with pytest.raises(UnknownDayError):
            _ = view.activities
