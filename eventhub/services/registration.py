"""Service for registering attendees against event capacity."""

from __future__ import annotations

from eventhub.domain.errors import CapacityError
from eventhub.domain.models import Event


def format_attendee(name: str, email: str) -> str:
    return f"{name} ({email})"


def register(event: Event, name: str, email: str) -> Event:
    """Append an attendee to *event* and return it.

    Raises ``CapacityError`` without touching the attendee list when the event
    already holds ``max_attendees`` people. The same email may register twice.
    """
    if event.max_attendees is not None and len(event.attendees) >= event.max_attendees:
        raise CapacityError(event.id, event.max_attendees)
    event.attendees.append(format_attendee(name, email))
    return event
