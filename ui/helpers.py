"""Helper functions for UI - API client calls and pure view helpers."""

from datetime import date
from typing import Any
from urllib.parse import urlsplit

import httpx

INTEREST_OPTIONS = [
    "Culture",
    "Nature",
    "Food",
    "Adventure",
    "Relaxation",
    "History",
    "Art",
    "Shopping",
    "Nightlife",
    "Photography",
    "Architecture",
    "Music",
]

BUDGET_OPTIONS = ["Budget", "Mid-range", "Luxury"]

CATEGORY_ICONS = {
    "food": "🍽️",
    "culture": "🎨",
    "nature": "⛰️",
    "adventure": "📸",
    "shopping": "🛍️",
}

CATEGORY_COLORS = {
    "food": "orange",
    "culture": "violet",
    "nature": "green",
    "adventure": "red",
    "shopping": "blue",
}

DEFAULT_ICON = "📍"
DEFAULT_COLOR = "blue"


def get_auth_header() -> dict[str, str]:
    """Get auth header for API calls (development user)."""
    user_id = "00000000-0000-0000-0000-000000000002"
    return {"Authorization": f"Bearer {user_id}"}


# --- Pure view helpers ---


def category_icon(category: str) -> str:
    """Icon for an activity category (case-insensitive)."""
    return CATEGORY_ICONS.get(category.lower(), DEFAULT_ICON)


def category_color(category: str) -> str:
    """Badge color for an activity category (case-insensitive)."""
    return CATEGORY_COLORS.get(category.lower(), DEFAULT_COLOR)


def parse_destinations(raw: str) -> list[str]:
    """Split comma-separated form input into destinations."""
    return [d.strip() for d in raw.split(",") if d.strip()]


def collect_form_errors(
    destinations: list[str],
    start_date: date | None,
    end_date: date | None,
    interests: list[str],
    budget: str | None,
) -> dict[str, str]:
    """Validate the trip form.

    Returns:
        Field name -> message for every invalid field (empty if valid)
    """
    errors: dict[str, str] = {}

    if not destinations:
        errors["destinations"] = "At least one destination is required"
    if start_date is None:
        errors["start_date"] = "Start date is required"
    if end_date is None:
        errors["end_date"] = "End date is required"
    if start_date is not None and end_date is not None and end_date <= start_date:
        errors["end_date"] = "End date must be after start date"
    if not interests:
        errors["interests"] = "Please select at least one interest"
    if not budget:
        errors["budget"] = "Please select a budget level"

    return errors


def share_token_from_url(url: str) -> str | None:
    """Token of a ``.../share/<token>`` link, or None for any other URL."""
    path = urlsplit(url.strip()).path
    if "/share/" not in path:
        return None
    token = path.split("/share/", 1)[1].strip("/")
    return token or None


def format_interests(interests: list[str], limit: int = 2) -> str:
    """Short interests summary, e.g. ``Food, Art +1 more``."""
    shown = ", ".join(interests[:limit])
    hidden = len(interests) - limit
    return f"{shown} +{hidden} more" if hidden > 0 else shown


def build_trip_request(
    destinations: list[str],
    start_date: date,
    end_date: date,
    budget: str,
    interests: list[str],
    currency: str = "USD",
) -> dict[str, Any]:
    """Build the JSON body for itinerary generation."""
    return {
        "destinations": destinations,
        "startDate": start_date.isoformat(),
        "endDate": end_date.isoformat(),
        "budget": budget,
        "interests": interests,
        "currency": currency,
    }


def form_defaults(itinerary: dict[str, Any]) -> dict[str, Any]:
    """Prefill the trip form from an itinerary (edit/regenerate)."""
    return {
        "destinations": itinerary["destination"].split(", "),
        "start_date": date.fromisoformat(itinerary["startDate"]),
        "end_date": date.fromisoformat(itinerary["endDate"]),
        "budget": itinerary["preferences"]["budget"],
        "interests": list(itinerary["preferences"].get("interests", [])),
        "currency": itinerary.get("currency", "USD"),
    }


# --- API client ---


def _request(method: str, url: str, **kwargs: Any) -> Any:
    response = httpx.request(method, url, headers=get_auth_header(), **kwargs)
    response.raise_for_status()
    if response.status_code == 204:
        return None
    return response.json()


def generate_itinerary(backend_url: str, trip_request: dict[str, Any]) -> dict[str, Any]:
    """Call POST /itineraries/generate.

    Raises:
        httpx.HTTPStatusError: If request fails
    """
    result: dict[str, Any] = _request(
        "POST",
        f"{backend_url}/itineraries/generate",
        json=trip_request,
        timeout=90.0,  # Allow up to 90s for generation
    )
    return result


def regenerate_itinerary(
    backend_url: str, itinerary_id: str, trip_request: dict[str, Any]
) -> dict[str, Any]:
    """Call POST /itineraries/{id}/regenerate."""
    result: dict[str, Any] = _request(
        "POST",
        f"{backend_url}/itineraries/{itinerary_id}/regenerate",
        json=trip_request,
        timeout=90.0,
    )
    return result


def list_itineraries(backend_url: str) -> list[dict[str, Any]]:
    """Call GET /itineraries."""
    result: list[dict[str, Any]] = _request("GET", f"{backend_url}/itineraries", timeout=10.0)
    return result


def save_itinerary(backend_url: str, itinerary: dict[str, Any]) -> dict[str, Any]:
    """Call PUT /itineraries/{id}."""
    result: dict[str, Any] = _request(
        "PUT", f"{backend_url}/itineraries/{itinerary['id']}", json=itinerary, timeout=10.0
    )
    return result


def delete_itinerary(backend_url: str, itinerary_id: str) -> None:
    """Call DELETE /itineraries/{id}."""
    _request("DELETE", f"{backend_url}/itineraries/{itinerary_id}", timeout=10.0)


def update_day_notes(
    backend_url: str, itinerary_id: str, day: int, notes: str | None
) -> dict[str, Any]:
    """Call PUT /itineraries/{id}/days/{day}/notes."""
    result: dict[str, Any] = _request(
        "PUT",
        f"{backend_url}/itineraries/{itinerary_id}/days/{day}/notes",
        json={"notes": notes},
        timeout=10.0,
    )
    return result


def get_day_activities(
    backend_url: str, itinerary_id: str, day: int, manage: bool = False
) -> list[dict[str, Any]]:
    """Call GET /itineraries/{id}/days/{day}/activities."""
    result: list[dict[str, Any]] = _request(
        "GET",
        f"{backend_url}/itineraries/{itinerary_id}/days/{day}/activities",
        params={"manage": str(manage).lower()},
        timeout=10.0,
    )
    return result


def change_day_activity(
    backend_url: str, itinerary_id: str, day: int, change: dict[str, Any]
) -> dict[str, Any]:
    """Call POST /itineraries/{id}/days/{day}/activities."""
    result: dict[str, Any] = _request(
        "POST",
        f"{backend_url}/itineraries/{itinerary_id}/days/{day}/activities",
        json=change,
        timeout=10.0,
    )
    return result


def commit_day_activities(backend_url: str, itinerary_id: str, day: int) -> dict[str, Any]:
    """Call POST /itineraries/{id}/days/{day}/activities/commit."""
    result: dict[str, Any] = _request(
        "POST",
        f"{backend_url}/itineraries/{itinerary_id}/days/{day}/activities/commit",
        timeout=10.0,
    )
    return result


def create_share_link(backend_url: str, itinerary: dict[str, Any]) -> dict[str, Any]:
    """Call POST /share."""
    result: dict[str, Any] = _request(
        "POST", f"{backend_url}/share", json=itinerary, timeout=10.0
    )
    return result


def open_share_link(backend_url: str, token: str) -> dict[str, Any]:
    """Call GET /share/{token}."""
    result: dict[str, Any] = _request("GET", f"{backend_url}/share/{token}", timeout=10.0)
    return result
