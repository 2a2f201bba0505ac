"""Share-link payload models.

Three payload shapes travel inside share tokens:

- compact: short keys, days as a list of truncated day objects
- minimal: short keys, days reduced to a count (used when compact is too large)
- legacy: long field names, as produced by builds that shared the full itinerary

The fallback payload used when encoding fails is a minimal payload carrying
only destination, day count and total budget.
"""

from enum import Enum
from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field


class PayloadKind(str, Enum):
    """Share payload variant."""

    compact = "compact"
    minimal = "minimal"
    legacy = "legacy"


LEGACY_KEYS = frozenset(
    {"destination", "startDate", "endDate", "preferences", "days", "totalBudget", "budget"}
)

# Longest trip a share token may describe
MAX_SHARED_DAYS = 365

SharedDayCount = Annotated[int, Field(ge=0, le=MAX_SHARED_DAYS)]
SharedDayList = Annotated[list[dict[str, Any]], Field(max_length=MAX_SHARED_DAYS)]


class _Payload(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class CompactActivity(_Payload):
    """Truncated activity."""

    t: str = ""
    n: str = ""
    l: str = ""  # noqa: E741
    c: str = ""
    cat: str = ""


class CompactDay(_Payload):
    """Truncated day with at most a few activities."""

    d: int
    dt: str = ""
    c: str = ""
    a: list[CompactActivity] = Field(default_factory=list)


class CompactPayload(_Payload):
    """Short-key itinerary summary with per-day detail."""

    d: str | None = None
    s: str | None = None
    e: str | None = None
    b: str | None = None
    i: list[str] = Field(default_factory=list)
    dy: list[CompactDay] = Field(default_factory=list, max_length=MAX_SHARED_DAYS)


class MinimalPayload(_Payload):
    """Short-key itinerary summary with only a day count."""

    d: str | None = None
    s: str | None = None
    e: str | None = None
    b: str | None = None
    dy: SharedDayCount = 0
    tb: str | None = None


class LegacyPayload(_Payload):
    """Long-key payload; days may be full day objects or a count."""

    id: str | None = None
    destination: str | None = None
    start_date: str | None = Field(None, alias="startDate")
    end_date: str | None = Field(None, alias="endDate")
    budget: str | None = None
    interests: list[str] | None = None
    preferences: dict[str, Any] | None = None
    days: SharedDayList | SharedDayCount | None = None
    total_budget: str | None = Field(None, alias="totalBudget")


def detect_payload_kind(data: dict[str, Any]) -> PayloadKind:
    """Classify a decoded share payload by its shape."""
    if LEGACY_KEYS.intersection(data):
        return PayloadKind.legacy
    if isinstance(data.get("dy"), list):
        return PayloadKind.compact
    return PayloadKind.minimal
