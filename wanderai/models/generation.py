"""Generator response models - the itinerary shape the model is asked to return."""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from wanderai.models.itinerary import (
    Activity,
    DayItinerary,
    Itinerary,
    TravelPreferences,
    new_itinerary_id,
)
from wanderai.models.request import TripRequest

DEFAULT_COST_ESTIMATE = "Free"


class _GeneratedModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class GeneratedActivity(_GeneratedModel):
    """Activity as returned by the generator."""

    time: str
    title: str
    description: str = ""
    location: str = ""
    cost_estimate: str | None = None
    tips: str = ""
    category: str = ""


class GeneratedDay(_GeneratedModel):
    """Day as returned by the generator."""

    day: int = Field(..., ge=1)
    date: str
    activities: list[GeneratedActivity] = Field(default_factory=list)
    total_estimated_cost: str = ""


class GeneratedItinerary(_GeneratedModel):
    """Itinerary payload as returned by the generator (no id or timestamps)."""

    destination: str
    days: list[GeneratedDay] = Field(..., min_length=1)
    total_budget: str = ""

    def to_itinerary(self, request: TripRequest) -> Itinerary:
        """Assign identity and request context to the generated payload."""
        return Itinerary(
            id=new_itinerary_id(),
            destination=self.destination or request.destination_text,
            start_date=request.start_date.isoformat(),
            end_date=request.end_date.isoformat(),
            preferences=TravelPreferences(
                budget=request.budget, interests=list(request.interests)
            ),
            days=[
                DayItinerary(
                    day=day.day,
                    date=day.date,
                    total_estimated_cost=day.total_estimated_cost,
                    activities=[
                        Activity(
                            time=a.time,
                            title=a.title,
                            description=a.description,
                            location=a.location,
                            cost_estimate=a.cost_estimate or DEFAULT_COST_ESTIMATE,
                            tips=a.tips,
                            category=a.category,
                        )
                        for a in day.activities
                    ],
                )
                for day in self.days
            ],
            total_budget=self.total_budget,
            currency=request.currency,
        )
