"""Domain event handlers — wired up at application startup."""

from __future__ import annotations

from eventhub.core.logging import get_logger
from eventhub.domain.bus import EventBus
from eventhub.domain.events import (
    AttendeeRegistered,
    EventCreated,
    EventDeleted,
    EventUpdated,
    NotificationRecorded,
)
from eventhub.repos.memory import EventRepository, NotificationRepository
from eventhub.services.conflicts import find_conflicts

logger = get_logger(__name__)


class HandlerRegistry:
    """Wires persistence and conflict logging to the bus."""

    def __init__(
        self,
        bus: EventBus,
        event_repo: EventRepository,
        notification_repo: NotificationRepository,
    ) -> None:
        self.bus = bus
        self.event_repo = event_repo
        self.notification_repo = notification_repo
        self._register()

    def _register(self) -> None:
        self.bus.subscribe(EventCreated, self.on_event_created)
        self.bus.subscribe(EventUpdated, self.on_event_updated)
        self.bus.subscribe(EventDeleted, self.on_event_deleted)
        self.bus.subscribe(AttendeeRegistered, self.on_attendee_registered)
        self.bus.subscribe(NotificationRecorded, self.on_notification_recorded)

    # ------------------------------------------------------------------
    # Handlers
    # ------------------------------------------------------------------

    def on_event_created(self, event: EventCreated) -> None:
        self.event_repo.save()
        logger.info("event_created", event_id=event.event_id)
        self._warn_on_conflicts(event.event_id)

    def on_event_updated(self, event: EventUpdated) -> None:
        self.event_repo.save()
        logger.info("event_updated", event_id=event.event_id)
        self._warn_on_conflicts(event.event_id)

    def on_event_deleted(self, event: EventDeleted) -> None:
        self.event_repo.save()
        logger.info("event_deleted", event_id=event.event_id)

    def on_attendee_registered(self, event: AttendeeRegistered) -> None:
        self.event_repo.save()
        logger.info(
            "attendee_registered", event_id=event.event_id, attendee=event.attendee
        )

    def on_notification_recorded(self, event: NotificationRecorded) -> None:
        self.notification_repo.save()
        logger.info(
            "notification_recorded",
            notification_id=event.notification_id,
            event_id=event.event_id,
        )

    # ------------------------------------------------------------------

    def _warn_on_conflicts(self, event_id: str) -> None:
        """Log a same-slot clash. Conflicts are advisory and never block a save."""
        stored = self.event_repo.get(event_id)
        if stored is None:
            return
        conflicts = find_conflicts(
            self.event_repo.list_all(), stored.date, stored.time, exclude_id=event_id
        )
        if conflicts:
            logger.warning(
                "schedule_conflict_detected",
                event_id=event_id,
                date=stored.date.isoformat(),
                time=stored.time,
                conflicting_event_ids=[c.id for c in conflicts],
            )
