"""Service for detecting scheduling conflicts and suggesting free slots."""

from __future__ import annotations

from datetime import date

from eventhub.domain.models import Event

FIRST_SLOT_HOUR = 9
LAST_SLOT_HOUR = 17
DEFAULT_SLOT_LIMIT = 5


def _normalize_date(value: date | str) -> str:
    if isinstance(value, date):
        return value.isoformat()
    return date.fromisoformat(value).isoformat()


def find_conflicts(
    events: list[Event],
    on_date: date | str,
    at_time: str,
    exclude_id: str | None = None,
) -> list[Event]:
    """Return events booked at exactly the given date and time.

    Events carry no duration, so only an identical ``YYYY-MM-DD`` / ``HH:MM``
    pair is a conflict. The event with id *exclude_id* is never returned,
    which lets an edited event be checked against everything but itself.
    """
    day = _normalize_date(on_date)
    return [
        event
        for event in events
        if event.id != exclude_id
        and event.date.isoformat() == day
        and event.time == at_time
    ]


def suggest_slots(
    events: list[Event],
    on_date: date | str,
    limit: int = DEFAULT_SLOT_LIMIT,
) -> list[str]:
    """Return up to *limit* free hour slots between 09:00 and 17:00, ascending."""
    free: list[str] = []
    for hour in range(FIRST_SLOT_HOUR, LAST_SLOT_HOUR + 1):
        slot = f"{hour:02d}:00"
        if not find_conflicts(events, on_date, slot):
            free.append(slot)
    return free[:limit]
