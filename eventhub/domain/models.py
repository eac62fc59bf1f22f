"""Domain models for the event management service."""

from __future__ import annotations

import uuid
import datetime as dt
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator

try:
    from enum import StrEnum
except ImportError:  # pragma: no cover - fallback for older Python runtimes

    class StrEnum(str, Enum):
        pass


TIME_PATTERN = r"^([01]\d|2[0-3]):[0-5]\d$"


class NotificationType(StrEnum):
    EMAIL = "email"
    SMS = "sms"
    WHATSAPP = "whatsapp"


class NotificationStatus(StrEnum):
    SENT = "sent"
    PENDING = "pending"
    SCHEDULED = "scheduled"


class TemplateKind(StrEnum):
    REMINDER = "reminder"
    CONFIRMATION = "confirmation"
    UPDATE = "update"
    FOLLOWUP = "followup"


class DateFilter(StrEnum):
    ALL = "all"
    UPCOMING = "upcoming"
    PAST = "past"


def _new_id() -> str:
    return str(uuid.uuid4())


def split_speakers(value: object) -> object:
    """Accept the admin form's comma-separated speaker string."""
    if isinstance(value, str):
        return [s.strip() for s in value.split(",") if s.strip()]
    return value


def split_agenda(value: object) -> object:
    """Accept the admin form's one-item-per-line agenda string."""
    if isinstance(value, str):
        return [line for line in value.split("\n") if line.strip()]
    return value


# ---------------------------------------------------------------------------
# Core domain models
# ---------------------------------------------------------------------------


class Event(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(default_factory=_new_id)
    name: str
    date: dt.date
    time: str = Field(pattern=TIME_PATTERN)
    description: str = ""
    venue: str = ""
    speakers: list[str] = Field(default_factory=list)
    agenda: list[str] = Field(default_factory=list)
    attendees: list[str] = Field(default_factory=list)
    max_attendees: int | None = Field(default=None, gt=0, alias="maxAttendees")


class Notification(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: str = Field(default_factory=_new_id)
    event_id: str = Field(alias="eventId")
    event_name: str = Field(alias="eventName")
    type: NotificationType
    status: NotificationStatus
    recipients: int = Field(ge=0)
    message: str
    sent_at: str | None = Field(default=None, alias="sentAt")
    scheduled_for: str | None = Field(default=None, alias="scheduledFor")


# ---------------------------------------------------------------------------
# Request / Response DTOs
# ---------------------------------------------------------------------------


class EventInput(BaseModel):
    """Body for creating or editing an event."""

    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(min_length=1)
    date: dt.date
    time: str = Field(pattern=TIME_PATTERN)
    description: str = ""
    venue: str = ""
    speakers: list[str] = Field(default_factory=list)
    agenda: list[str] = Field(default_factory=list)
    max_attendees: int | None = Field(default=None, gt=0, alias="maxAttendees")

    @field_validator("speakers", mode="before")
    @classmethod
    def _split_speakers(cls, value: object) -> object:
        return split_speakers(value)

    @field_validator("agenda", mode="before")
    @classmethod
    def _split_agenda(cls, value: object) -> object:
        return split_agenda(value)


class EventDetail(Event):
    """Event plus the flags the detail view renders."""

    is_full: bool = False
    is_past: bool = False


class RegistrationRequest(BaseModel):
    name: str = Field(min_length=1)
    email: str = Field(min_length=3)


class ScheduleAdvice(BaseModel):
    conflicts: list[str] = Field(default_factory=list)
    suggested_slots: list[str] = Field(default_factory=list)


class SendNotificationRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    event_id: str | None = Field(default=None, alias="eventId")
    type: NotificationType = NotificationType.EMAIL
    message: str | None = None
    schedule_time: str | None = Field(default=None, alias="scheduleTime")


class TemplateResponse(BaseModel):
    kind: TemplateKind
    message: str


class AttendanceBar(BaseModel):
    name: str
    attendees: int


class MonthlySummary(BaseModel):
    month: str
    events: int
    attendees: int


class AnalyticsResponse(BaseModel):
    total_events: int
    upcoming_events: int
    total_attendees: int
    attendance: list[AttendanceBar]
    monthly: list[MonthlySummary]


class AssistantRequest(BaseModel):
    message: str = Field(min_length=1)


class AssistantReply(BaseModel):
    role: str = "assistant"
    content: str


class ChatRequest(BaseModel):
    message: str | None = None


class ChatResponse(BaseModel):
    content: str
    timestamp: str
