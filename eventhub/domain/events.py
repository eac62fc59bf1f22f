"""Domain events emitted when the event and notification collections change."""

from __future__ import annotations

from pydantic import BaseModel


class EventCreated(BaseModel):
    """Fired when a new Event is added to the repository."""

    event_id: str


class EventUpdated(BaseModel):
    """Fired when an organizer edits an existing Event."""

    event_id: str


class EventDeleted(BaseModel):
    """Fired after an Event has been removed."""

    event_id: str


class AttendeeRegistered(BaseModel):
    """Fired when an attendee is appended to an event."""

    event_id: str
    attendee: str


class NotificationRecorded(BaseModel):
    """Fired when a notification is sent or scheduled."""

    notification_id: str
    event_id: str
