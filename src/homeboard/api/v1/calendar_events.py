# Calendar events router — local (non-integration) events.
# Created: 2026-10-04

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException

from homeboard.api.deps import get_store
from homeboard.api.v1.schemas.common import SuccessResponse
from homeboard.models import CalendarEvent, CalendarEventCreate, CalendarEventPatch
from homeboard.store import FileHouseholdStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Calendar"])


@router.get("/calendar-events", response_model=list[CalendarEvent])
async def list_calendar_events(store: FileHouseholdStore = Depends(get_store)):
    return await store.list_calendar_events()


@router.post("/calendar-events", response_model=CalendarEvent)
async def create_calendar_event(
    body: CalendarEventCreate, store: FileHouseholdStore = Depends(get_store)
):
    if body.end < body.start:
        raise HTTPException(status_code=400, detail="Event end must not be before its start")
    return await store.create_calendar_event(body)


@router.put("/calendar-events/{event_id}", response_model=CalendarEvent)
async def update_calendar_event(
    event_id: str,
    body: CalendarEventPatch,
    store: FileHouseholdStore = Depends(get_store),
):
    current = await store.get_calendar_event(event_id)
    if current is None:
        raise HTTPException(status_code=404, detail="Calendar event not found")
    start = body.start or current.start
    end = body.end or current.end
    if end < start:
        raise HTTPException(status_code=400, detail="Event end must not be before its start")
    return await store.update_calendar_event(event_id, body)


@router.delete("/calendar-events/{event_id}", response_model=SuccessResponse)
async def delete_calendar_event(event_id: str, store: FileHouseholdStore = Depends(get_store)):
    if not await store.delete_calendar_event(event_id):
        raise HTTPException(status_code=404, detail="Calendar event not found")
    return SuccessResponse()
