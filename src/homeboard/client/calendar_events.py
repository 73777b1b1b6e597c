# Calendar events client — local events with optimistic mutations.
# Created: 2026-10-07

from __future__ import annotations

import logging

from homeboard.client.base import CollectionClient
from homeboard.client.cache import new_temp_id
from homeboard.models import CalendarEvent, CalendarEventCreate, CalendarEventPatch

logger = logging.getLogger(__name__)


class CalendarEventsClient(CollectionClient[CalendarEvent]):
    """Locally stored calendar events.

    The server derives ``color`` from the attached users, so the cached
    entity is always replaced with the server's copy after a write.
    Successful writes show a success toast.
    """

    resource = "calendar-events"
    label = "calendar event"
    model = CalendarEvent

    async def _fetch(self) -> list[CalendarEvent]:
        data = await self.api.get("/calendar-events")
        return [CalendarEvent.model_validate(e) for e in data]

    async def add_event(self, data: CalendarEventCreate) -> CalendarEvent:
        optimistic = CalendarEvent(id=new_temp_id(), **data.model_dump())
        event = await self._create(
            optimistic,
            lambda: self.api.post("/calendar-events", json=data.model_dump(mode="json")),
            "Failed to create event",
            title="Failed to Create Event",
        )
        self.toasts.show_success("Event Created", f"{event.title} was added to the calendar")
        return event

    async def update_event(self, event_id: str, patch: CalendarEventPatch) -> CalendarEvent:
        event = await self._update(
            event_id,
            patch,
            lambda: self.api.put(
                f"/calendar-events/{event_id}",
                json=patch.model_dump(mode="json", exclude_unset=True),
            ),
            "Failed to update event",
            title="Failed to Update Event",
        )
        self.toasts.show_success("Event Updated", f"{event.title} was updated")
        return event

    async def delete_event(self, event_id: str) -> bool:
        event = self.get(event_id)
        if event is None:
            self.toasts.show_error("Event Not Found", "The event you are deleting no longer exists")
            return False
        await self._delete(
            event_id,
            lambda: self.api.delete(f"/calendar-events/{event_id}"),
            "Failed to delete event",
            title="Failed to Delete Event",
        )
        self.toasts.show_success("Event Deleted", f"{event.title} was removed from the calendar")
        return True
