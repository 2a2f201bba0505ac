"""Share-link codec.

Encoding compacts an itinerary into a small JSON payload, percent-encodes it
and wraps it in URL-safe base64 so it fits in a single path segment:

    <origin>/share/<token>

The payload is lossy. Decoding reconstructs a best-effort itinerary for
preview and fills anything the token does not carry with defaults.
"""

import base64
import json
import logging
import uuid
from datetime import datetime, timezone
from typing import Any
from urllib.parse import quote, unquote

from wanderai.config import settings
from wanderai.models.common import BudgetLevel
from wanderai.models.itinerary import Activity, DayItinerary, Itinerary, TravelPreferences
from wanderai.models.share import (
    CompactActivity,
    CompactDay,
    CompactPayload,
    LegacyPayload,
    MinimalPayload,
    PayloadKind,
    detect_payload_kind,
)
from wanderai.utils.metrics import record_share_decode, record_share_link

logger = logging.getLogger(__name__)

SHARE_PATH_PREFIX = "/share/"

MAX_SHARED_INTERESTS = 3
MAX_SHARED_ACTIVITIES = 3
MAX_DATE_CHARS = 30
MAX_TITLE_CHARS = 50
MAX_LOCATION_CHARS = 40

UNKNOWN_DESTINATION = "Unknown Destination"
DEFAULT_TOTAL_BUDGET = "Contact for details"
PLACEHOLDER_DAY_COST = "Varies"
SHARED_CURRENCY = "USD"

# Characters encodeURIComponent leaves unescaped (besides alphanumerics and "-_.~")
_URI_COMPONENT_SAFE = "!'()*"
_URLSAFE_TO_STANDARD = str.maketrans("-_", "+/")


class DecodeError(Exception):
    """Share token cannot be decoded or parsed."""

    pass


# --- Encoding ---


def build_compact_payload(itinerary: Itinerary) -> dict[str, Any]:
    """Build the short-key payload with truncated per-day detail."""
    payload = CompactPayload(
        d=itinerary.destination,
        s=itinerary.start_date,
        e=itinerary.end_date,
        b=itinerary.preferences.budget.code,
        i=itinerary.preferences.interests[:MAX_SHARED_INTERESTS],
        dy=[
            CompactDay(
                d=day.day,
                dt=day.date[:MAX_DATE_CHARS],
                c=day.total_estimated_cost,
                a=[
                    CompactActivity(
                        t=activity.time,
                        n=activity.title[:MAX_TITLE_CHARS],
                        l=activity.location[:MAX_LOCATION_CHARS],
                        c=activity.cost_estimate,
                        cat=activity.category,
                    )
                    for activity in day.activities[:MAX_SHARED_ACTIVITIES]
                ],
            )
            for day in itinerary.days
        ],
    )
    return payload.model_dump(mode="json")


def build_minimal_payload(itinerary: Itinerary) -> dict[str, Any]:
    """Build the short-key payload that keeps only a day count."""
    payload = MinimalPayload(
        d=itinerary.destination,
        s=itinerary.start_date,
        e=itinerary.end_date,
        b=itinerary.preferences.budget.code,
        dy=len(itinerary.days),
        tb=itinerary.total_budget,
    )
    return payload.model_dump(mode="json")


def build_fallback_payload(itinerary: Itinerary) -> dict[str, Any]:
    """Build the smallest payload: destination, day count and total budget."""
    return {"d": itinerary.destination, "dy": len(itinerary.days), "tb": itinerary.total_budget}


def _serialize(payload: dict[str, Any]) -> str:
    return json.dumps(payload, separators=(",", ":"), ensure_ascii=False)


def _to_token(text: str) -> str:
    percent_encoded = quote(text, safe=_URI_COMPONENT_SAFE)
    return base64.urlsafe_b64encode(percent_encoded.encode("ascii")).decode("ascii").rstrip("=")


def encode_share_token(itinerary: Itinerary, max_chars: int | None = None) -> str:
    """Encode an itinerary into a URL-safe share token.

    Uses the compact payload unless its serialized form exceeds ``max_chars``
    (default ``settings.share_max_chars``), in which case the minimal payload
    is used. Any failure while encoding falls back to the smallest payload.
    """
    limit = max_chars if max_chars is not None else settings.share_max_chars

    try:
        text = _serialize(build_compact_payload(itinerary))
        kind = PayloadKind.compact.value
        if len(text) > limit:
            text = _serialize(build_minimal_payload(itinerary))
            kind = PayloadKind.minimal.value
        token = _to_token(text)
    except Exception:
        logger.warning(
            "Share payload encoding failed for itinerary %s, using fallback payload",
            itinerary.id,
            exc_info=True,
        )
        token = _to_token(_serialize(build_fallback_payload(itinerary)))
        kind = "fallback"

    record_share_link(kind)
    return token


def build_share_url(itinerary: Itinerary, origin: str | None = None) -> str | None:
    """Build ``<origin>/share/<token>`` for an itinerary.

    Returns:
        The share URL, or None if even the fallback payload could not be encoded
    """
    try:
        token = encode_share_token(itinerary)
    except Exception:
        logger.exception("Could not create share link for itinerary %s", itinerary.id)
        return None

    base = (origin or settings.share_origin).rstrip("/")
    return f"{base}{SHARE_PATH_PREFIX}{token}"


def build_share_text(itinerary: Itinerary) -> str:
    """Plain-text blurb to accompany a shared link."""
    return (
        f"Check out my travel itinerary for {itinerary.destination}!\n"
        f"{len(itinerary.days)} days of amazing activities from "
        f"{itinerary.start_date} to {itinerary.end_date}.\n"
        f"Estimated budget: {itinerary.total_budget}"
    )


# --- Decoding ---


def _b64decode(token: str) -> bytes:
    token = token.strip()
    if not token:
        raise ValueError("empty token")
    padded = token + "=" * (-len(token) % 4)
    # Accepts both the URL-safe and the standard alphabet
    return base64.b64decode(padded.translate(_URLSAFE_TO_STANDARD), validate=True)


def _token_to_text(token: str) -> str:
    try:
        raw = _b64decode(token)
    except ValueError:
        # Older links percent-encoded the token itself
        try:
            raw = _b64decode(unquote(token))
        except ValueError as e:
            raise DecodeError("share token is not valid base64") from e

    try:
        return unquote(raw.decode("utf-8"), errors="strict")
    except UnicodeDecodeError as e:
        raise DecodeError("share token does not contain UTF-8 text") from e


def _resolve_budget(value: str | None) -> BudgetLevel:
    if value:
        from_code = BudgetLevel.from_code(value)
        if from_code is not None:
            return from_code
        try:
            return BudgetLevel(value)
        except ValueError:
            logger.debug("Unknown shared budget %r, using default", value)
    return BudgetLevel.mid_range


def _fallback_id() -> str:
    return f"shared-{uuid.uuid4().hex[:12]}"


def placeholder_days(count: int) -> list[DayItinerary]:
    """Synthesize day entries for payloads that only carry a day count."""
    return [
        DayItinerary(
            day=n,
            date=f"Day {n}",
            activities=[],
            total_estimated_cost=PLACEHOLDER_DAY_COST,
            notes="",
        )
        for n in range(1, count + 1)
    ]


def _from_compact(payload: CompactPayload, now: datetime) -> Itinerary:
    return Itinerary(
        id=_fallback_id(),
        destination=payload.d or UNKNOWN_DESTINATION,
        start_date=payload.s or "",
        end_date=payload.e or "",
        preferences=TravelPreferences(budget=_resolve_budget(payload.b), interests=payload.i),
        days=[
            DayItinerary(
                day=day.d,
                date=day.dt,
                total_estimated_cost=day.c,
                activities=[
                    Activity(
                        time=a.t,
                        title=a.n,
                        location=a.l,
                        cost_estimate=a.c,
                        category=a.cat,
                    )
                    for a in day.a
                ],
            )
            for day in payload.dy
        ],
        total_budget=DEFAULT_TOTAL_BUDGET,
        created_at=now,
        currency=SHARED_CURRENCY,
    )


def _from_minimal(payload: MinimalPayload, now: datetime) -> Itinerary:
    return Itinerary(
        id=_fallback_id(),
        destination=payload.d or UNKNOWN_DESTINATION,
        start_date=payload.s or "",
        end_date=payload.e or "",
        preferences=TravelPreferences(budget=_resolve_budget(payload.b), interests=[]),
        days=placeholder_days(payload.dy),
        total_budget=payload.tb or DEFAULT_TOTAL_BUDGET,
        created_at=now,
        currency=SHARED_CURRENCY,
    )


def _from_legacy(payload: LegacyPayload, now: datetime) -> Itinerary:
    prefs = payload.preferences or {}

    if isinstance(payload.days, int):
        days = placeholder_days(payload.days)
    elif payload.days:
        days = [DayItinerary.model_validate(day) for day in payload.days]
    else:
        days = []

    interests = payload.interests if payload.interests is not None else prefs.get("interests")

    return Itinerary(
        id=payload.id or _fallback_id(),
        destination=payload.destination or UNKNOWN_DESTINATION,
        start_date=payload.start_date or "",
        end_date=payload.end_date or "",
        preferences=TravelPreferences(
            budget=_resolve_budget(payload.budget or prefs.get("budget")),
            interests=interests or [],
        ),
        days=days,
        total_budget=payload.total_budget or DEFAULT_TOTAL_BUDGET,
        created_at=now,
        currency=SHARED_CURRENCY,
    )


def reconstruct_itinerary(data: dict[str, Any], now: datetime | None = None) -> Itinerary:
    """Rebuild an itinerary from a decoded payload of any known variant.

    Raises:
        ValueError: If the payload does not fit the detected variant
    """
    now = now or datetime.now(timezone.utc)
    kind = detect_payload_kind(data)

    if kind is PayloadKind.legacy:
        return _from_legacy(LegacyPayload.model_validate(data), now)
    if kind is PayloadKind.compact:
        return _from_compact(CompactPayload.model_validate(data), now)
    return _from_minimal(MinimalPayload.model_validate(data), now)


def decode_share_token(token: str, now: datetime | None = None) -> Itinerary:
    """Decode a share token into a preview itinerary.

    Raises:
        DecodeError: If the token cannot be decoded, parsed or reconstructed
    """
    text = _token_to_text(token)

    try:
        data = json.loads(text)
    except (ValueError, RecursionError) as e:
        raise DecodeError("share token does not contain JSON") from e

    if not isinstance(data, dict):
        raise DecodeError(f"share payload must be an object, got {type(data).__name__}")

    try:
        itinerary = reconstruct_itinerary(data, now=now)
    except (ValueError, TypeError, RecursionError) as e:
        raise DecodeError(f"share payload has an invalid shape: {e}") from e

    record_share_decode(detect_payload_kind(data).value)
    return itinerary


def extract_share_token(path: str) -> str | None:
    """Return the token of a ``/share/<token>`` path, or None for other paths."""
    if not path.startswith(SHARE_PATH_PREFIX):
        return None
    token = path[len(SHARE_PATH_PREFIX) :].strip("/")
    return token or None


def load_shared_itinerary(path: str) -> Itinerary | None:
    """Resolve the itinerary a share path points at.

    Returns None for non-share paths and for tokens that fail to decode, in
    which case the caller shows the default planning form.
    """
    token = extract_share_token(path)
    if token is None:
        return None

    try:
        return decode_share_token(token)
    except DecodeError as e:
        logger.warning("Error decoding shared itinerary: %s", e)
        record_share_decode("error")
        return None
    except Exception:
        logger.exception("Unexpected error loading shared itinerary")
        record_share_decode("error")
        return None
