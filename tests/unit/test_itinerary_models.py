"""Tests for itinerary and trip request models."""

from datetime import date

import pytest
from pydantic import ValidationError

from wanderai.models import (
    Activity,
    BudgetLevel,
    DayItinerary,
    Itinerary,
    TravelPreferences,
    TripRequest,
)


def _prefs() -> TravelPreferences:
    return TravelPreferences(budget=BudgetLevel.budget, interests=["Food"])


class TestActivity:
    """Activity identity and inclusion."""

    def test_selection_absent_means_included(self) -> None:
        """Activities without a selection flag are shown."""
        activity = Activity(time="9:00 AM", title="Walk")
        assert activity.selected is None
        assert activity.is_included

    def test_explicit_false_is_soft_deleted(self) -> None:
        """Only an explicit False excludes the activity."""
        assert not Activity(time="9:00 AM", title="Walk", selected=False).is_included
        assert Activity(time="9:00 AM", title="Walk", selected=True).is_included

    def test_generated_ids_are_unique(self) -> None:
        """Each activity gets its own synthetic id."""
        first = Activity(time="9:00 AM", title="Walk")
        second = Activity(time="9:00 AM", title="Walk")
        assert first.id != second.id
        assert first.same_slot(second)

    def test_camel_case_wire_format(self) -> None:
        """Activities parse and dump camelCase keys."""
        activity = Activity.model_validate(
            {"time": "9:00 AM", "title": "Walk", "costEstimate": "Free"}
        )
        assert activity.cost_estimate == "Free"
        assert "costEstimate" in activity.model_dump(by_alias=True)

    def test_models_are_immutable(self) -> None:
        """Snapshots cannot be changed in place."""
        activity = Activity(time="9:00 AM", title="Walk")
        with pytest.raises(ValidationError):
            activity.title = "Run"  # type: ignore[misc]


class TestItinerary:
    """Itinerary validation."""

    def test_days_are_ordered_by_number(self) -> None:
        """Days given out of order are sorted."""
        itinerary = Itinerary(
            destination="Rome",
            start_date="2025-01-01",
            end_date="2025-01-02",
            preferences=_prefs(),
            days=[DayItinerary(day=2, date="Day 2"), DayItinerary(day=1, date="Day 1")],
        )
        assert [d.day for d in itinerary.days] == [1, 2]

    def test_duplicate_day_numbers_rejected(self) -> None:
        """Day numbers must be unique."""
        with pytest.raises(ValidationError, match="duplicate day number"):
            Itinerary(
                destination="Rome",
                start_date="2025-01-01",
                end_date="2025-01-02",
                preferences=_prefs(),
                days=[DayItinerary(day=1, date="a"), DayItinerary(day=1, date="b")],
            )

    def test_end_before_start_rejected(self) -> None:
        """ISO dates must be in order."""
        with pytest.raises(ValidationError, match="endDate must be after startDate"):
            Itinerary(
                destination="Rome",
                start_date="2025-01-05",
                end_date="2025-01-01",
                preferences=_prefs(),
            )

    def test_non_iso_dates_are_not_checked(self) -> None:
        """Shared previews may carry free-form or empty dates."""
        itinerary = Itinerary(destination="Rome", start_date="", end_date="", preferences=_prefs())
        assert itinerary.start_date == ""

    def test_day_number_must_be_positive(self) -> None:
        """Day numbers start at 1."""
        with pytest.raises(ValidationError):
            DayItinerary(day=0, date="Day 0")

    def test_get_day(self, sample_itinerary: Itinerary) -> None:
        """Days are looked up by number."""
        day = sample_itinerary.get_day(2)
        assert day is not None
        assert day.activities[0].title == "Belém Tower"
        assert sample_itinerary.get_day(9) is None

    def test_json_round_trip_keeps_ids(self, sample_itinerary: Itinerary) -> None:
        """A saved snapshot reloads with the same identity."""
        data = sample_itinerary.model_dump(mode="json", by_alias=True)
        assert "startDate" in data and "createdAt" in data
        assert Itinerary.model_validate(data) == sample_itinerary


class TestTripRequest:
    """Form input validation."""

    def _request(self, **overrides: object) -> dict[str, object]:
        data: dict[str, object] = {
            "destinations": ["Paris", "Lyon"],
            "startDate": "2025-06-10",
            "endDate": "2025-06-13",
            "budget": "Luxury",
            "interests": ["Art"],
        }
        data.update(overrides)
        return data

    def test_valid_request(self) -> None:
        """A complete form validates."""
        request = TripRequest.model_validate(self._request())
        assert request.destination_text == "Paris, Lyon"
        assert request.trip_days == 4
        assert request.budget is BudgetLevel.luxury
        assert request.currency == "USD"

    def test_blank_destinations_rejected(self) -> None:
        """At least one non-blank destination is required."""
        with pytest.raises(ValidationError, match="At least one destination is required"):
            TripRequest.model_validate(self._request(destinations=["  ", ""]))

    def test_destinations_are_stripped(self) -> None:
        """Whitespace around destinations is dropped."""
        request = TripRequest.model_validate(self._request(destinations=[" Paris ", ""]))
        assert request.destinations == ["Paris"]

    @pytest.mark.parametrize("end", ["2025-06-10", "2025-06-01"])
    def test_end_must_follow_start(self, end: str) -> None:
        """Same-day and reversed ranges are rejected."""
        with pytest.raises(ValidationError, match="End date must be after start date"):
            TripRequest.model_validate(self._request(endDate=end))

    def test_interests_required(self) -> None:
        """At least one interest is required."""
        with pytest.raises(ValidationError):
            TripRequest.model_validate(self._request(interests=[]))

    def test_unknown_budget_rejected(self) -> None:
        """Budget must be one of the three tiers."""
        with pytest.raises(ValidationError):
            TripRequest.model_validate(self._request(budget="Cheap"))

    def test_currency_code_format(self) -> None:
        """Currency must be a three-letter code."""
        with pytest.raises(ValidationError):
            TripRequest.model_validate(self._request(currency="euro"))

    def test_from_itinerary_prefills_form(self, sample_itinerary: Itinerary) -> None:
        """Editing an itinerary rebuilds its form input."""
        itinerary = sample_itinerary.model_copy(update={"destination": "Lisbon, Porto"})
        request = TripRequest.from_itinerary(itinerary, currency="EUR")
        assert request.destinations == ["Lisbon", "Porto"]
        assert request.start_date == date(2025, 6, 10)
        assert request.budget is BudgetLevel.mid_range
        assert request.currency == "EUR"


class TestBudgetLevel:
    """Share codes for budget tiers."""

    def test_codes_round_trip(self) -> None:
        """Every tier has a single-letter code."""
        for level in BudgetLevel:
            assert BudgetLevel.from_code(level.code) is level

    def test_unknown_code(self) -> None:
        """Unknown codes resolve to None."""
        assert BudgetLevel.from_code("X") is None
