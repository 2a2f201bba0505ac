"""Request context for per-user data scoping."""

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True)
class RequestContext:
    """Request context containing the signed-in user.

    Used to scope every saved itinerary and synced note to its owner.
    """

    user_id: UUID
