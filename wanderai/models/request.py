"""Trip request models - form input sent to the itinerary generator."""

from datetime import date
from typing import Annotated

from pydantic import Field, ValidationInfo, field_validator

from wanderai.config import get_settings
from wanderai.models.common import BudgetLevel, CamelModel
from wanderai.models.itinerary import Itinerary


class TripRequest(CamelModel):
    """User input for itinerary generation.

    Validation runs before any remote call is made, so a request that fails
    here never reaches the generator.
    """

    destinations: Annotated[list[str], Field(min_length=1)]
    start_date: date
    end_date: date
    budget: BudgetLevel
    interests: Annotated[list[str], Field(min_length=1)]
    currency: str = Field(
        default_factory=lambda: get_settings().default_currency, pattern=r"^[A-Z]{3}$"
    )

    @field_validator("destinations")
    @classmethod
    def validate_destinations(cls, v: list[str]) -> list[str]:
        """Strip blanks; at least one destination must remain."""
        cleaned = [d.strip() for d in v if d.strip()]
        if not cleaned:
            raise ValueError("At least one destination is required")
        return cleaned

    @field_validator("end_date")
    @classmethod
    def validate_end_after_start(cls, v: date, info: ValidationInfo) -> date:
        """Ensure end > start."""
        if "start_date" in info.data and v <= info.data["start_date"]:
            raise ValueError("End date must be after start date")
        return v

    @property
    def destination_text(self) -> str:
        """Destinations joined the way itineraries display them."""
        return ", ".join(self.destinations)

    @property
    def trip_days(self) -> int:
        """Number of calendar days covered, both ends inclusive."""
        return (self.end_date - self.start_date).days + 1

    @classmethod
    def from_itinerary(cls, itinerary: Itinerary, currency: str | None = None) -> "TripRequest":
        """Rebuild the form input an itinerary was generated from (for edit/regenerate)."""
        return cls(
            destinations=itinerary.destination.split(", "),
            start_date=date.fromisoformat(itinerary.start_date),
            end_date=date.fromisoformat(itinerary.end_date),
            budget=itinerary.preferences.budget,
            interests=list(itinerary.preferences.interests),
            currency=currency or itinerary.currency,
        )
