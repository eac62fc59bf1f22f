"""FastAPI application — entry point for the event management service."""

from __future__ import annotations

from contextlib import asynccontextmanager
from datetime import date

from fastapi import FastAPI, HTTPException, Query, status
from fastapi.responses import JSONResponse

from eventhub.core.config import get_settings
from eventhub.core.logging import get_logger, setup_logging
from eventhub.domain.bus import EventBus
from eventhub.domain.errors import (
    CapacityError,
    NotificationValidationError,
    ReplySuperseded,
)
from eventhub.domain.events import (
    AttendeeRegistered,
    EventCreated,
    EventDeleted,
    EventUpdated,
    NotificationRecorded,
)
from eventhub.domain.handlers import HandlerRegistry
from eventhub.domain.models import (
    AnalyticsResponse,
    AssistantReply,
    AssistantRequest,
    ChatRequest,
    ChatResponse,
    DateFilter,
    Event,
    EventDetail,
    EventInput,
    Notification,
    RegistrationRequest,
    ScheduleAdvice,
    SendNotificationRequest,
    TemplateKind,
    TemplateResponse,
    TIME_PATTERN,
)
from eventhub.repos.memory import (
    EventRepository,
    NotificationRepository,
    seed_demo_events,
)
from eventhub.repos.storage import (
    InMemoryKeyValueStore,
    JsonFileKeyValueStore,
    KeyValueStore,
)
from eventhub.services.assistant import ReplyDispatcher
from eventhub.services.catalog import build_analytics, filter_events, is_upcoming
from eventhub.services.chat import complete_chat
from eventhub.services.conflicts import find_conflicts, suggest_slots
from eventhub.services.notifications import build_notification, render_template
from eventhub.services.registration import format_attendee, register

settings = get_settings()
logger = get_logger(__name__)

EVENT_NOT_FOUND = "Event not found"
EVENT_FULL = "Sorry, this event is full!"
EVENT_PAST = "This event has already taken place"


def _build_store() -> KeyValueStore:
    if settings.STORE_BACKEND == "memory":
        return InMemoryKeyValueStore()
    return JsonFileKeyValueStore(settings.DATA_DIR)


# ── Singletons (created at import time for simplicity) ────────────────
store = _build_store()
event_bus = EventBus()
event_repo = EventRepository(store)
notification_repo = NotificationRepository(store)
reply_dispatcher = ReplyDispatcher(settings.ASSISTANT_REPLY_DELAY_SECONDS)

handler_registry = HandlerRegistry(
    bus=event_bus,
    event_repo=event_repo,
    notification_repo=notification_repo,
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Configure logging and read the stored collections once."""
    setup_logging()
    # A corrupt store raises CorruptStoreError here and the app refuses to start.
    events = event_repo.load()
    notifications = notification_repo.load()
    if not events and settings.SEED_DEMO_DATA:
        seed_demo_events(event_repo)
        event_repo.save()
    logger.info(
        "application_starting",
        app=settings.APP_NAME,
        version=settings.APP_VERSION,
        store=settings.STORE_BACKEND,
        events=len(event_repo.list_all()),
        notifications=len(notifications),
    )
    yield
    logger.info("application_shutdown")


app = FastAPI(title=settings.APP_NAME, version=settings.APP_VERSION, lifespan=lifespan)


def _get_event_or_404(event_id: str) -> Event:
    event = event_repo.get(event_id)
    if event is None:
        raise HTTPException(status_code=404, detail=EVENT_NOT_FOUND)
    return event


# ── Routes ────────────────────────────────────────────────────────────


@app.get("/health")
def health() -> dict:
    return {"status": "ok", "events": len(event_repo.list_all())}


@app.get("/events", response_model=list[Event])
def list_events(search: str = "", when: DateFilter = DateFilter.ALL) -> list[Event]:
    """Return events whose name or venue matches *search*."""
    return filter_events(event_repo.list_all(), search=search, when=when)


@app.post("/events", response_model=Event, status_code=status.HTTP_201_CREATED)
def create_event(body: EventInput) -> Event:
    """Create an event. Same-slot conflicts are logged, never rejected."""
    event = Event(**body.model_dump())
    event_repo.add(event)
    event_bus.publish(EventCreated(event_id=event.id))
    return event


@app.get("/events/{event_id}", response_model=EventDetail)
def get_event(event_id: str) -> EventDetail:
    """Return a single event with its capacity and past/upcoming flags."""
    event = _get_event_or_404(event_id)
    is_full = (
        event.max_attendees is not None
        and len(event.attendees) >= event.max_attendees
    )
    return EventDetail(
        **event.model_dump(),
        is_full=is_full,
        is_past=not is_upcoming(event, date.today()),
    )


@app.put("/events/{event_id}", response_model=Event)
def update_event(event_id: str, body: EventInput) -> Event:
    """Replace an event's details, keeping its id and attendee list."""
    existing = _get_event_or_404(event_id)
    updated = Event(id=existing.id, attendees=existing.attendees, **body.model_dump())
    event_repo.replace(updated)
    event_bus.publish(EventUpdated(event_id=event_id))
    return updated


@app.delete("/events/{event_id}")
def delete_event(event_id: str) -> dict:
    if not event_repo.delete(event_id):
        raise HTTPException(status_code=404, detail=EVENT_NOT_FOUND)
    event_bus.publish(EventDeleted(event_id=event_id))
    return {"status": "deleted"}


@app.post("/events/{event_id}/attendees", response_model=Event)
def register_attendee(event_id: str, body: RegistrationRequest) -> Event:
    """Register an attendee, refusing past events and events at capacity."""
    event = _get_event_or_404(event_id)
    if not is_upcoming(event, date.today()):
        logger.info("registration_rejected_past", event_id=event_id)
        raise HTTPException(status_code=409, detail=EVENT_PAST)
    try:
        register(event, body.name, body.email)
    except CapacityError:
        logger.info("registration_rejected_full", event_id=event_id)
        raise HTTPException(status_code=409, detail=EVENT_FULL)
    event_bus.publish(
        AttendeeRegistered(
            event_id=event_id, attendee=format_attendee(body.name, body.email)
        )
    )
    return event


@app.get("/events/{event_id}/templates/{kind}", response_model=TemplateResponse)
def get_template(event_id: str, kind: str) -> TemplateResponse:
    event = _get_event_or_404(event_id)
    try:
        template_kind = TemplateKind(kind)
    except ValueError:
        raise HTTPException(status_code=404, detail=f"Unknown template {kind!r}")
    return TemplateResponse(
        kind=template_kind, message=render_template(event, template_kind)
    )


@app.get("/schedule", response_model=ScheduleAdvice)
def schedule_advice(
    on_date: date | None = Query(None, alias="date"),
    at_time: str | None = Query(None, alias="time", pattern=TIME_PATTERN),
    exclude_id: str | None = None,
) -> ScheduleAdvice:
    """Advise on a date/time being edited in the event form.

    Slots are suggested as soon as a date is known; conflicting event names
    are only reported once both date and time are filled in.
    """
    events = event_repo.list_all()
    advice = ScheduleAdvice()
    if on_date is not None:
        advice.suggested_slots = suggest_slots(
            events, on_date, limit=settings.SLOT_SUGGESTION_LIMIT
        )
        if at_time:
            advice.conflicts = [
                e.name for e in find_conflicts(events, on_date, at_time, exclude_id)
            ]
    return advice


@app.get("/analytics", response_model=AnalyticsResponse)
def analytics() -> AnalyticsResponse:
    return build_analytics(event_repo.list_all())


@app.get("/notifications", response_model=list[Notification])
def list_notifications() -> list[Notification]:
    """Return notification history, newest first."""
    return notification_repo.list_all()


@app.post(
    "/notifications",
    response_model=Notification,
    status_code=status.HTTP_201_CREATED,
)
def send_notification(body: SendNotificationRequest) -> Notification:
    """Record a notification as sent now, or as scheduled when a time is given."""
    event = None
    if body.event_id:
        event = _get_event_or_404(body.event_id)
    try:
        notification = build_notification(
            event, body.type, body.message, body.schedule_time
        )
    except NotificationValidationError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    notification_repo.add(notification)
    event_bus.publish(
        NotificationRecorded(
            notification_id=notification.id, event_id=notification.event_id
        )
    )
    return notification


@app.post("/assistant/messages", response_model=AssistantReply)
async def ask_assistant(body: AssistantRequest) -> AssistantReply:
    """Answer after the configured delay; a newer message cancels this one."""
    try:
        content = await reply_dispatcher.submit(body.message, event_repo.list_all())
    except ReplySuperseded:
        raise HTTPException(
            status_code=409, detail="Superseded by a newer message"
        )
    return AssistantReply(content=content)


@app.post("/api/ai-chat", response_model=ChatResponse)
def ai_chat(body: ChatRequest):
    """Stubbed chat completion endpoint."""
    if not body.message:
        return JSONResponse(status_code=400, content={"error": "Message is required"})
    try:
        return complete_chat(body.message, settings)
    except Exception:
        logger.exception("ai_chat_failed")
        return JSONResponse(
            status_code=500, content={"error": "Internal server error"}
        )
