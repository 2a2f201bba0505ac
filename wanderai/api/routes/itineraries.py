"""Itinerary endpoints - generation, saved itineraries, notes and activities."""

import logging
from typing import Annotated

from fastapi import APIRouter, BackgroundTasks, Body, Depends, HTTPException, Query, Response, status
from fastapi.concurrency import run_in_threadpool
from pydantic import BaseModel

from wanderai.api.auth import get_current_context
from wanderai.api.deps import NoteWriterScope, get_itinerary_repository, get_note_writer_scope
from wanderai.db.context import RequestContext
from wanderai.db.repositories import ItineraryRepository
from wanderai.editing.mutations import ActivityChange, set_day_notes
from wanderai.editing.schedule import (
    DayActivityView,
    InvalidTransitionError,
    ViewMode,
    derive_display_activities,
)
from wanderai.llm.client import (
    GenerationError,
    ItineraryGenerator,
    generate_itinerary,
    get_itinerary_client,
    regenerate_itinerary,
)
from wanderai.models.itinerary import Activity, DayItinerary, Itinerary
from wanderai.models.request import TripRequest

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/itineraries", tags=["itineraries"])


class DayNotesUpdate(BaseModel):
    """Request body for PUT /itineraries/{id}/days/{day}/notes."""

    notes: str | None = None


def _load(repo: ItineraryRepository, itinerary_id: str, ctx: RequestContext) -> Itinerary:
    itinerary = repo.get(itinerary_id, ctx)
    if itinerary is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Itinerary {itinerary_id} not found",
        )
    return itinerary


def _load_day(itinerary: Itinerary, day: int) -> DayItinerary:
    found = itinerary.get_day(day)
    if found is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Day {day} not found in itinerary {itinerary.id}",
        )
    return found


def _request_from(itinerary: Itinerary) -> TripRequest:
    try:
        return TripRequest.from_itinerary(itinerary)
    except ValueError as e:
        # Shared previews carry no dates or interests
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="Itinerary lacks the input needed to regenerate; send a request body",
        ) from e


def write_day_notes(
    scope: NoteWriterScope, itinerary_id: str, day: int, notes: str | None, ctx: RequestContext
) -> None:
    """Background task: persist one day's notes to the synced store."""
    with scope() as writer:
        writer.write(itinerary_id, day, notes, ctx)


@router.post("/generate", response_model=Itinerary, response_model_by_alias=True)
async def generate(
    request: TripRequest,
    client: Annotated[ItineraryGenerator, Depends(get_itinerary_client)],
) -> Itinerary:
    """Generate a new itinerary (not saved).

    Raises:
        HTTPException: 502 if the generator fails
    """
    try:
        return await generate_itinerary(request, client)
    except GenerationError as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e)) from e


@router.post("/{itinerary_id}/regenerate", response_model=Itinerary, response_model_by_alias=True)
async def regenerate(
    itinerary_id: str,
    ctx: Annotated[RequestContext, Depends(get_current_context)],
    repo: Annotated[ItineraryRepository, Depends(get_itinerary_repository)],
    client: Annotated[ItineraryGenerator, Depends(get_itinerary_client)],
    request: Annotated[TripRequest | None, Body()] = None,
) -> Itinerary:
    """Regenerate a saved itinerary from edited form input.

    The result keeps the original id and creation time and replaces the
    saved copy. Without a body the saved itinerary's own input is reused.

    Raises:
        HTTPException: 422 if there is no body and the saved itinerary lacks
            dates or interests, 502 if the generator fails
    """
    existing = await run_in_threadpool(_load, repo, itinerary_id, ctx)
    trip_request = request or _request_from(existing)

    try:
        regenerated = await regenerate_itinerary(existing, trip_request, client)
    except GenerationError as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e)) from e

    await run_in_threadpool(repo.save, regenerated, ctx)
    return regenerated


@router.get("", response_model=list[Itinerary], response_model_by_alias=True)
def list_itineraries(
    ctx: Annotated[RequestContext, Depends(get_current_context)],
    repo: Annotated[ItineraryRepository, Depends(get_itinerary_repository)],
) -> list[Itinerary]:
    """List saved itineraries, newest first."""
    return repo.list(ctx)


@router.get("/{itinerary_id}", response_model=Itinerary, response_model_by_alias=True)
def get_itinerary(
    itinerary_id: str,
    ctx: Annotated[RequestContext, Depends(get_current_context)],
    repo: Annotated[ItineraryRepository, Depends(get_itinerary_repository)],
) -> Itinerary:
    """Get a saved itinerary."""
    return _load(repo, itinerary_id, ctx)


@router.put("/{itinerary_id}", response_model=Itinerary, response_model_by_alias=True)
def save_itinerary(
    itinerary_id: str,
    itinerary: Itinerary,
    ctx: Annotated[RequestContext, Depends(get_current_context)],
    repo: Annotated[ItineraryRepository, Depends(get_itinerary_repository)],
) -> Itinerary:
    """Save (insert or replace) an itinerary snapshot."""
    if itinerary.id != itinerary_id:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="Itinerary id does not match the path",
        )
    repo.save(itinerary, ctx)
    return itinerary


@router.delete("/{itinerary_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_itinerary(
    itinerary_id: str,
    ctx: Annotated[RequestContext, Depends(get_current_context)],
    repo: Annotated[ItineraryRepository, Depends(get_itinerary_repository)],
) -> Response:
    """Delete a saved itinerary."""
    if not repo.delete(itinerary_id, ctx):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Itinerary {itinerary_id} not found",
        )
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.put(
    "/{itinerary_id}/days/{day}/notes",
    response_model=Itinerary,
    response_model_by_alias=True,
)
def update_day_notes(
    itinerary_id: str,
    day: int,
    body: DayNotesUpdate,
    background_tasks: BackgroundTasks,
    ctx: Annotated[RequestContext, Depends(get_current_context)],
    repo: Annotated[ItineraryRepository, Depends(get_itinerary_repository)],
    note_scope: Annotated[NoteWriterScope, Depends(get_note_writer_scope)],
) -> Itinerary:
    """Replace one day's notes.

    The updated snapshot is saved and returned right away; the synced note
    write runs afterwards and falls back to the saved snapshot on failure.
    """
    itinerary = _load(repo, itinerary_id, ctx)
    _load_day(itinerary, day)

    updated = set_day_notes(itinerary, day, body.notes)
    repo.save(updated, ctx)

    background_tasks.add_task(write_day_notes, note_scope, itinerary_id, day, body.notes, ctx)
    return updated


@router.get(
    "/{itinerary_id}/days/{day}/activities",
    response_model=list[Activity],
    response_model_by_alias=True,
)
def list_day_activities(
    itinerary_id: str,
    day: int,
    ctx: Annotated[RequestContext, Depends(get_current_context)],
    repo: Annotated[ItineraryRepository, Depends(get_itinerary_repository)],
    manage: Annotated[bool, Query(description="Include excluded activities")] = False,
) -> list[Activity]:
    """Activities of one day in display order."""
    itinerary = _load(repo, itinerary_id, ctx)
    return derive_display_activities(_load_day(itinerary, day), manage_mode=manage)


@router.post(
    "/{itinerary_id}/days/{day}/activities",
    response_model=Itinerary,
    response_model_by_alias=True,
)
def change_day_activity(
    itinerary_id: str,
    day: int,
    change: ActivityChange,
    ctx: Annotated[RequestContext, Depends(get_current_context)],
    repo: Annotated[ItineraryRepository, Depends(get_itinerary_repository)],
    mode: Annotated[ViewMode, Query(description="Day view mode of the caller")] = ViewMode.managing,
) -> Itinerary:
    """Toggle, add or remove activities of one day.

    Raises:
        HTTPException: 409 unless the caller is managing the day
    """
    itinerary = _load(repo, itinerary_id, ctx)
    _load_day(itinerary, day)

    view = DayActivityView(itinerary, day, on_update=lambda it: repo.save(it, ctx), mode=mode)
    try:
        return view.apply(change)
    except InvalidTransitionError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e)) from e


@router.post(
    "/{itinerary_id}/days/{day}/activities/commit",
    response_model=Itinerary,
    response_model_by_alias=True,
)
def commit_day_activities(
    itinerary_id: str,
    day: int,
    ctx: Annotated[RequestContext, Depends(get_current_context)],
    repo: Annotated[ItineraryRepository, Depends(get_itinerary_repository)],
) -> Itinerary:
    """Leave manage mode: permanently remove the day's unselected activities."""
    itinerary = _load(repo, itinerary_id, ctx)
    _load_day(itinerary, day)

    view = DayActivityView(
        itinerary, day, on_update=lambda it: repo.save(it, ctx), mode=ViewMode.managing
    )
    updated = view.done()
    logger.info(
        "Committed activities",
        extra={"itinerary_id": itinerary_id, "day": day},
    )
    return updated
