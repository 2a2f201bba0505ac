"""Share link endpoints."""

from typing import Any
from urllib.parse import urlsplit

from fastapi import APIRouter, HTTPException, status
from pydantic import BaseModel

from wanderai.models.itinerary import Itinerary
from wanderai.sharing.codec import (
    SHARE_PATH_PREFIX,
    build_share_text,
    build_share_url,
    extract_share_token,
    load_shared_itinerary,
)

router = APIRouter(prefix="/share", tags=["share"])


class ShareLinkResponse(BaseModel):
    """Response for POST /share."""

    url: str
    token: str
    text: str


@router.post("", response_model=ShareLinkResponse)
def create_share_link(itinerary: Itinerary) -> ShareLinkResponse:
    """Encode an itinerary into a self-contained share link.

    Raises:
        HTTPException: 500 if no payload variant could be encoded
    """
    url = build_share_url(itinerary)
    token = extract_share_token(urlsplit(url).path) if url else None
    if url is None or token is None:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Could not create share link",
        )

    return ShareLinkResponse(url=url, token=token, text=build_share_text(itinerary))


@router.get("/{token}")
def open_share_link(token: str) -> dict[str, Any]:
    """Resolve a share token.

    Returns:
        ``{"view": "shared", "itinerary": ...}`` for a valid token, otherwise
        ``{"view": "form"}`` so the client falls back to the planning form
    """
    itinerary = load_shared_itinerary(f"{SHARE_PATH_PREFIX}{token}")
    if itinerary is None:
        return {"view": "form"}

    return {"view": "shared", "itinerary": itinerary.model_dump(mode="json", by_alias=True)}
