"""Itinerary models - the trip plan the user views, edits, saves and shares."""

import uuid
from datetime import date, datetime, timezone

from pydantic import Field, field_validator, model_validator

from wanderai.models.common import BudgetLevel, CamelModel


def new_activity_id() -> str:
    """Generate a stable synthetic activity identifier."""
    return uuid.uuid4().hex[:12]


def new_itinerary_id() -> str:
    """Generate an opaque itinerary identifier."""
    return uuid.uuid4().hex


class TravelPreferences(CamelModel):
    """Budget tier and interests the itinerary was generated for."""

    budget: BudgetLevel
    interests: list[str] = Field(default_factory=list)


class Activity(CamelModel):
    """Single scheduled item within a day."""

    id: str = Field(default_factory=new_activity_id)
    time: str = Field(..., description="Clock time or range, e.g. '9:00 AM - 11:30 AM'")
    title: str
    description: str = ""
    location: str = ""
    cost_estimate: str = ""
    tips: str = ""
    category: str = ""
    selected: bool | None = None

    @property
    def is_included(self) -> bool:
        """Absent or True selection means included; explicit False is a soft delete."""
        return self.selected is not False

    def same_slot(self, other: "Activity") -> bool:
        """Legacy identity: two activities with equal title and time are the same."""
        return self.title == other.title and self.time == other.time


class DayItinerary(CamelModel):
    """Itinerary for a single day."""

    day: int = Field(..., ge=1)
    date: str
    activities: list[Activity] = Field(default_factory=list)
    total_estimated_cost: str = ""
    notes: str | None = None


class Itinerary(CamelModel):
    """Complete trip plan."""

    id: str = Field(default_factory=new_itinerary_id)
    destination: str
    start_date: str
    end_date: str
    preferences: TravelPreferences
    days: list[DayItinerary] = Field(default_factory=list)
    total_budget: str = ""
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    currency: str = "USD"

    @field_validator("days")
    @classmethod
    def validate_days_unique_and_ordered(cls, v: list[DayItinerary]) -> list[DayItinerary]:
        """Order days by number and reject duplicate day numbers."""
        ordered = sorted(v, key=lambda d: d.day)
        for prev, curr in zip(ordered, ordered[1:]):
            if prev.day == curr.day:
                raise ValueError(f"duplicate day number {curr.day}")
        return ordered

    @model_validator(mode="after")
    def validate_date_range(self) -> "Itinerary":
        """Ensure start date precedes end date when both are known."""
        try:
            start = date.fromisoformat(self.start_date)
            end = date.fromisoformat(self.end_date)
        except ValueError:
            return self
        if end <= start:
            raise ValueError("endDate must be after startDate")
        return self

    def get_day(self, day_number: int) -> DayItinerary | None:
        """Return the day with the given number, if any."""
        for day in self.days:
            if day.day == day_number:
                return day
        return None
