"""In-process repositories for events and notifications.

Each repository is the single in-process source of truth for its collection:
it reads the backing store once on ``load`` and writes the whole collection
back on ``save``.
"""

from __future__ import annotations

from eventhub.domain.models import Event, Notification
from eventhub.repos.storage import (
    EVENTS_KEY,
    NOTIFICATIONS_KEY,
    InMemoryKeyValueStore,
    KeyValueStore,
    dump_collection,
    load_collection,
)


class EventRepository:
    """Insertion-ordered store for Event instances, keyed by id."""

    def __init__(self, store: KeyValueStore | None = None) -> None:
        self.store = store or InMemoryKeyValueStore()
        self._store: dict[str, Event] = {}

    def load(self) -> list[Event]:
        self._store = {e.id: e for e in load_collection(self.store, EVENTS_KEY, Event)}
        return self.list_all()

    def save(self) -> None:
        self.store.set(EVENTS_KEY, dump_collection(self.list_all()))

    def add(self, event: Event) -> None:
        self._store[event.id] = event

    def get(self, event_id: str) -> Event | None:
        return self._store.get(event_id)

    def list_all(self) -> list[Event]:
        return list(self._store.values())

    def replace(self, event: Event) -> None:
        """Swap in an edited event, keeping its position in the collection."""
        if event.id not in self._store:
            raise KeyError(event.id)
        self._store[event.id] = event

    def delete(self, event_id: str) -> bool:
        return self._store.pop(event_id, None) is not None

    def clear(self) -> None:
        self._store.clear()


class NotificationRepository:
    """Append-only notification history, newest first."""

    def __init__(self, store: KeyValueStore | None = None) -> None:
        self.store = store or InMemoryKeyValueStore()
        self._items: list[Notification] = []

    def load(self) -> list[Notification]:
        self._items = load_collection(self.store, NOTIFICATIONS_KEY, Notification)
        return self.list_all()

    def save(self) -> None:
        self.store.set(NOTIFICATIONS_KEY, dump_collection(self._items))

    def add(self, notification: Notification) -> None:
        self._items.insert(0, notification)

    def get(self, notification_id: str) -> Notification | None:
        for item in self._items:
            if item.id == notification_id:
                return item
        return None

    def list_all(self) -> list[Notification]:
        return list(self._items)

    def list_for_event(self, event_id: str) -> list[Notification]:
        return [n for n in self._items if n.event_id == event_id]

    def clear(self) -> None:
        self._items.clear()


# ---------------------------------------------------------------------------
# Seed data – a few events useful for trying out scheduling and the assistant
# ---------------------------------------------------------------------------


def seed_demo_events(repo: EventRepository) -> None:
    """Add a couple of sample events that share a morning."""
    repo.add(
        Event(
            name="Python Meetup",
            date="2025-03-01",
            time="09:00",
            venue="Community Hall",
            description="Monthly meetup for local Python developers.",
            speakers=["Ada Lovelace", "Guido van Rossum"],
            agenda=["Welcome", "Lightning talks", "Networking"],
            max_attendees=50,
        )
    )
    repo.add(
        Event(
            name="Data Workshop",
            date="2025-03-01",
            time="10:00",
            venue="Lab 2",
            agenda=["Setup", "Hands-on session"],
            max_attendees=2,
        )
    )
