"""
HTTP routes for the events API.
"""

from __future__ import annotations

import logging
from datetime import date as Date
from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response

from eventra import __version__
from eventra.dependencies import get_storage
from eventra.schemas import (
    EventCreate,
    EventResponse,
    EventUpdate,
    HealthResponse,
    ValidationErrorResponse,
    combine_date_time,
)
from eventra.storage import EventRecord, Storage

logger = logging.getLogger(__name__)

router = APIRouter()

EVENT_NOT_FOUND = "Event not found"

_validation_responses = {400: {"model": ValidationErrorResponse}}


def _to_response(event: EventRecord) -> EventResponse:
    return EventResponse(**event.as_dict())


def _reconcile_date_time(existing: EventRecord, changes: dict) -> dict:
    """Recompute ``dateTime`` when a patch moves the date or time alone."""
    if "dateTime" in changes or not ({"date", "time"} & changes.keys()):
        return changes
    day = changes.get("date", existing.date)
    clock = changes.get("time", existing.time)
    return {**changes, "dateTime": combine_date_time(day, clock)}


@router.get("/health", response_model=HealthResponse)
async def health_check():
    return HealthResponse(
        status="ok",
        version=__version__,
        timestamp=datetime.now(timezone.utc).isoformat(),
    )


@router.get(
    "/events",
    response_model=list[EventResponse],
    responses=_validation_responses,
)
async def list_events(
    date: Optional[Date] = Query(None, description="Only events on this day"),
    storage: Storage = Depends(get_storage),
):
    try:
        events = storage.get_events_on(date) if date else storage.get_events()
    except Exception:
        logger.exception("Failed to fetch events")
        raise HTTPException(status_code=500, detail="Failed to fetch events")
    return [_to_response(event) for event in events]


@router.get("/events/{event_id}", response_model=EventResponse)
async def get_event(event_id: str, storage: Storage = Depends(get_storage)):
    try:
        event = storage.get_event(event_id)
    except Exception:
        logger.exception("Failed to fetch event %s", event_id)
        raise HTTPException(status_code=500, detail="Failed to fetch event")
    if not event:
        raise HTTPException(status_code=404, detail=EVENT_NOT_FOUND)
    return _to_response(event)


@router.post(
    "/events",
    response_model=EventResponse,
    status_code=201,
    responses=_validation_responses,
)
async def create_event(
    payload: EventCreate, storage: Storage = Depends(get_storage)
):
    try:
        event = storage.create_event(payload.model_dump())
    except Exception:
        logger.exception("Failed to create event")
        raise HTTPException(status_code=500, detail="Failed to create event")
    return _to_response(event)


@router.patch(
    "/events/{event_id}",
    response_model=EventResponse,
    responses=_validation_responses,
)
async def update_event(
    event_id: str,
    payload: EventUpdate,
    storage: Storage = Depends(get_storage),
):
    try:
        existing = storage.get_event(event_id)
        if existing:
            changes = _reconcile_date_time(
                existing, payload.model_dump(exclude_unset=True)
            )
            event = storage.update_event(event_id, changes)
        else:
            event = None
    except Exception:
        logger.exception("Failed to update event %s", event_id)
        raise HTTPException(status_code=500, detail="Failed to update event")
    if not event:
        raise HTTPException(status_code=404, detail=EVENT_NOT_FOUND)
    return _to_response(event)


@router.delete("/events/{event_id}", status_code=204)
async def delete_event(event_id: str, storage: Storage = Depends(get_storage)):
    try:
        removed = storage.delete_event(event_id)
    except Exception:
        logger.exception("Failed to delete event %s", event_id)
        raise HTTPException(status_code=500, detail="Failed to delete event")
    if not removed:
        raise HTTPException(status_code=404, detail=EVENT_NOT_FOUND)
    return Response(status_code=204)
