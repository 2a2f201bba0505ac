"""Itinerary generation with OpenAI integration.

Security: Reads API key from environment only, never hardcoded.
Provides a deterministic mock generator when no key is present.
"""

import json
import logging
import re
import time
from datetime import date, timedelta
from typing import Protocol

from openai import AsyncOpenAI, OpenAIError
from pydantic import ValidationError

from wanderai.config import get_settings
from wanderai.models.common import BudgetLevel
from wanderai.models.generation import GeneratedItinerary
from wanderai.models.itinerary import (
    Activity,
    DayItinerary,
    Itinerary,
    TravelPreferences,
    new_itinerary_id,
)
from wanderai.models.request import TripRequest
from wanderai.utils.currency import convert_currency_range, round_half_up
from wanderai.utils.logging import StructuredEventLogger
from wanderai.utils.metrics import record_generation

logger = logging.getLogger(__name__)
event_logger = StructuredEventLogger(__name__)


class GenerationError(Exception):
    """The generator failed or returned an unusable itinerary."""

    pass


class ItineraryGenerator(Protocol):
    """Protocol for itinerary generator implementations."""

    source: str

    async def generate_itinerary(self, request: TripRequest) -> Itinerary:
        """Generate a day-by-day itinerary for a trip request.

        Args:
            request: Validated trip request

        Returns:
            Itinerary with a fresh id and creation time

        Raises:
            GenerationError: If no usable itinerary could be produced
        """
        ...


# Mock generator tables (USD)
_DAY_COST_RANGES: dict[BudgetLevel, tuple[int, int]] = {
    BudgetLevel.budget: (50, 80),
    BudgetLevel.mid_range: (100, 150),
    BudgetLevel.luxury: (200, 300),
}

_DAILY_BUDGET: dict[BudgetLevel, int] = {
    BudgetLevel.budget: 65,
    BudgetLevel.mid_range: 125,
    BudgetLevel.luxury: 250,
}

_ACTIVITY_BASE_COSTS: dict[BudgetLevel, dict[str, int]] = {
    BudgetLevel.budget: {"low": 12, "medium": 15, "high": 20},
    BudgetLevel.mid_range: {"low": 20, "medium": 25, "high": 35},
    BudgetLevel.luxury: {"low": 35, "medium": 40, "high": 60},
}


def _format_day_date(value: date) -> str:
    return f"{value:%A}, {value:%B} {value.day}, {value.year}"


class MockItineraryClient:
    """Deterministic generator for development and tests (no API key required)."""

    source = "mock"

    async def generate_itinerary(self, request: TripRequest) -> Itinerary:
        """Generate a fixed-shape itinerary from the request."""
        currency = request.currency
        budget = request.budget

        def activity_cost(level: str) -> str:
            cost = _ACTIVITY_BASE_COSTS[budget][level]
            return convert_currency_range(cost, cost + round_half_up(cost * 0.5), currency)

        days: list[DayItinerary] = []
        for offset in range(request.trip_days):
            number = offset + 1
            current = request.start_date + timedelta(days=offset)
            place = request.destinations[min(offset, len(request.destinations) - 1)]

            activities = [
                Activity(
                    time="9:00 AM - 11:30 AM",
                    title=f"Morning Exploration of {place}",
                    description=(
                        f"Start your day exploring the historic center of {place}, "
                        "visiting its main landmarks and squares."
                    ),
                    location=f"{place} Historic Center",
                    cost_estimate=activity_cost("medium"),
                    tips="Arrive early to avoid crowds and get the best photos.",
                    category="Culture",
                    selected=True,
                ),
                Activity(
                    time="12:30 PM - 2:00 PM",
                    title=f"Local Cuisine in {place}",
                    description=f"Lunch at a well-reviewed restaurant serving {place} specialties.",
                    location=f"Downtown {place}",
                    cost_estimate=activity_cost("high"),
                    tips="Ask for the daily specials and try the regional dishes.",
                    category="Food",
                    selected=True,
                ),
                Activity(
                    time="2:30 PM - 4:30 PM",
                    title=f"{place} Museum Visit",
                    description=f"Discover the art and history of {place} at its main museum.",
                    location=f"{place} Museum District",
                    cost_estimate=activity_cost("low"),
                    tips="Check for free admission days and guided tours.",
                    category="Culture",
                    selected=True,
                ),
                Activity(
                    time="5:00 PM - 6:30 PM",
                    title=f"Sunset Walk in {place}",
                    description=f"Evening stroll through the parks and waterfront of {place}.",
                    location=f"{place} Waterfront",
                    cost_estimate="Free",
                    tips="Bring a camera for the golden hour views.",
                    category="Nature",
                    selected=True,
                ),
            ]

            low, high = _DAY_COST_RANGES[budget]
            days.append(
                DayItinerary(
                    day=number,
                    date=_format_day_date(current),
                    activities=activities[: 4 if number == 1 else 3],
                    total_estimated_cost=convert_currency_range(low, high, currency),
                )
            )

        total = _DAILY_BUDGET[budget] * request.trip_days
        return Itinerary(
            id=new_itinerary_id(),
            destination=request.destination_text,
            start_date=request.start_date.isoformat(),
            end_date=request.end_date.isoformat(),
            preferences=TravelPreferences(budget=budget, interests=list(request.interests)),
            days=days,
            total_budget=convert_currency_range(total - 50, total + 50, currency),
            currency=currency,
        )


SYSTEM_PROMPT = (
    "You are an expert travel planner who creates detailed, practical itineraries. "
    "Always respond with valid JSON only, no additional text or formatting."
)

_FENCED_JSON = re.compile(r"```json\s*([\s\S]*?)\s*```")
_FENCED_ANY = re.compile(r"```\s*([\s\S]*?)\s*```")


def build_prompt(request: TripRequest) -> str:
    """Build the user prompt for a trip request."""
    destination = request.destination_text
    lines = [
        f"Create a detailed {request.trip_days}-day travel itinerary for {destination}.",
        "",
        "Trip details:",
        f"- Dates: {request.start_date.isoformat()} to {request.end_date.isoformat()}",
        f"- Budget level: {request.budget.value}",
        f"- Interests: {', '.join(request.interests)}",
        f"- Currency for all costs: {request.currency}",
    ]

    if len(request.destinations) > 1:
        lines.extend(
            [
                "",
                "This is a multi-city trip. Split the days between the cities in the order "
                "given and include travel time between them.",
            ]
        )

    lines.extend(
        [
            "",
            "Respond with JSON in exactly this shape:",
            "{",
            f'  "destination": "{destination}",',
            '  "days": [',
            "    {",
            '      "day": 1,',
            '      "date": "Monday, January 1, 2024",',
            '      "activities": [',
            "        {",
            '          "time": "9:00 AM - 11:00 AM",',
            '          "title": "Activity name",',
            '          "description": "What the traveler will do",',
            '          "location": "Where it happens",',
            f'          "costEstimate": "Cost in {request.currency}",',
            '          "tips": "Practical advice",',
            '          "category": "Food | Culture | Nature | Adventure | Shopping"',
            "        }",
            "      ],",
            f'      "totalEstimatedCost": "Daily total in {request.currency}"',
            "    }",
            "  ],",
            f'  "totalBudget": "Trip total in {request.currency}"',
            "}",
            "",
            "Include 4-6 activities per day with realistic times, ordered through the day.",
            "Times must use the format H:MM AM - H:MM PM.",
        ]
    )
    return "\n".join(lines)


def extract_json_text(content: str) -> str:
    """Extract the JSON object from model output.

    Handles ```json fences, bare fences and prose around a single object.
    """
    for pattern in (_FENCED_JSON, _FENCED_ANY):
        match = pattern.search(content)
        if match:
            return match.group(1).strip()

    start = content.find("{")
    end = content.rfind("}")
    if start != -1 and end > start:
        return content[start : end + 1]
    return content.strip()


def parse_generated_itinerary(content: str, request: TripRequest) -> Itinerary:
    """Parse model output into an Itinerary.

    Raises:
        GenerationError: If the output is not a valid itinerary
    """
    try:
        data = json.loads(extract_json_text(content))
    except json.JSONDecodeError as e:
        raise GenerationError("Invalid JSON response from the model") from e

    try:
        generated = GeneratedItinerary.model_validate(data)
        return generated.to_itinerary(request)
    except ValidationError as e:
        raise GenerationError(f"Model returned an invalid itinerary: {e}") from e


class OpenAIItineraryClient:
    """OpenAI-backed itinerary generator."""

    source = "openai"

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4o-mini",
        max_tokens: int = 4000,
        temperature: float = 0.7,
        timeout_s: float = 60.0,
    ):
        """Initialize OpenAI client.

        Args:
            api_key: OpenAI API key (read from environment)
            model: Model name to use
            max_tokens: Completion token limit
            temperature: Sampling temperature
            timeout_s: Request timeout in seconds
        """
        self.client = AsyncOpenAI(api_key=api_key, timeout=timeout_s)
        self.model = model
        self.max_tokens = max_tokens
        self.temperature = temperature

    async def generate_itinerary(self, request: TripRequest) -> Itinerary:
        """Generate an itinerary using the OpenAI API."""
        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": build_prompt(request)},
                ],
                temperature=self.temperature,
                max_tokens=self.max_tokens,
            )
        except OpenAIError as e:
            raise GenerationError(f"OpenAI API call failed: {e}") from e

        content = response.choices[0].message.content if response.choices else None
        if not content or not content.strip():
            raise GenerationError("No content received from the model")

        return parse_generated_itinerary(content, request)


def get_itinerary_client() -> ItineraryGenerator:
    """Factory function to get appropriate generator based on config.

    Returns:
        OpenAIItineraryClient if API key is configured, MockItineraryClient otherwise
    """
    settings = get_settings()
    api_key = settings.openai_api_key

    if api_key and api_key.get_secret_value():
        logger.info("Using OpenAI client for itinerary generation")
        return OpenAIItineraryClient(
            api_key=api_key.get_secret_value(),
            model=settings.openai_model,
            max_tokens=settings.openai_max_tokens,
            temperature=settings.openai_temperature,
            timeout_s=settings.generation_timeout_s,
        )
    else:
        logger.warning("No OpenAI API key configured, using mock itinerary client")
        return MockItineraryClient()


async def generate_itinerary(
    request: TripRequest, client: ItineraryGenerator | None = None
) -> Itinerary:
    """Main entry point for itinerary generation.

    Args:
        request: Validated trip request
        client: Generator to use (defaults to the configured one)

    Returns:
        Generated itinerary

    Raises:
        GenerationError: If generation fails
    """
    client = client or get_itinerary_client()
    start = time.perf_counter()

    try:
        itinerary = await client.generate_itinerary(request)
    except GenerationError as e:
        latency_ms = (time.perf_counter() - start) * 1000
        record_generation(client.source, "error", latency_ms)
        event_logger.log_event(
            "generate_itinerary",
            "error",
            error_reason=str(e),
            source=client.source,
            destination=request.destination_text,
        )
        raise

    latency_ms = (time.perf_counter() - start) * 1000
    record_generation(client.source, "success", latency_ms)
    event_logger.log_event(
        "generate_itinerary",
        "success",
        source=client.source,
        destination=itinerary.destination,
        days=len(itinerary.days),
        latency_ms=round(latency_ms, 1),
    )
    return itinerary


async def regenerate_itinerary(
    existing: Itinerary, request: TripRequest, client: ItineraryGenerator | None = None
) -> Itinerary:
    """Regenerate an itinerary, keeping its id and creation time."""
    regenerated = await generate_itinerary(request, client)
    return regenerated.model_copy(
        update={"id": existing.id, "created_at": existing.created_at}
    )
