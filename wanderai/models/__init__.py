"""Models package - re-exports for convenience."""

from wanderai.models.common import BudgetLevel, CamelModel
from wanderai.models.generation import GeneratedActivity, GeneratedDay, GeneratedItinerary
from wanderai.models.itinerary import (
    Activity,
    DayItinerary,
    Itinerary,
    TravelPreferences,
    new_activity_id,
    new_itinerary_id,
)
from wanderai.models.request import TripRequest
from wanderai.models.share import (
    CompactActivity,
    CompactDay,
    CompactPayload,
    LegacyPayload,
    MinimalPayload,
    PayloadKind,
    detect_payload_kind,
)

__all__ = [
    # Common
    "BudgetLevel",
    "CamelModel",
    # Itinerary
    "Itinerary",
    "DayItinerary",
    "Activity",
    "TravelPreferences",
    "new_activity_id",
    "new_itinerary_id",
    # Generation
    "GeneratedItinerary",
    "GeneratedDay",
    "GeneratedActivity",
    # Request
    "TripRequest",
    # Share payloads
    "PayloadKind",
    "CompactActivity",
    "CompactDay",
    "CompactPayload",
    "MinimalPayload",
    "LegacyPayload",
    "detect_payload_kind",
]
