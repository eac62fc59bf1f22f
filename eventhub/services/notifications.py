"""Service for composing notification records and message templates.

Nothing is delivered: a notification is a record of the intent to contact an
event's attendees, stamped either as sent now or scheduled for later.
"""

from __future__ import annotations

from datetime import datetime, timezone

import dateparser

from eventhub.domain.errors import NotificationValidationError
from eventhub.domain.models import (
    Event,
    Notification,
    NotificationStatus,
    NotificationType,
    TemplateKind,
)

MISSING_FIELDS_MESSAGE = "Please select an event and enter a message"


def _long_date(event: Event) -> str:
    return event.date.strftime("%B %d, %Y")


def render_template(event: Event, kind: TemplateKind) -> str:
    """Return the prefilled message body for one of the stock templates."""
    if kind == TemplateKind.REMINDER:
        return (
            "Hi there! 👋\n\n"
            f'This is a friendly reminder about "{event.name}" scheduled for '
            f"{_long_date(event)} at {event.time}.\n\n"
            "We're looking forward to seeing you there!\n\n"
            "Venue: Check your registration email for details.\n\n"
            "Best regards,\nEvent Management Team"
        )
    if kind == TemplateKind.CONFIRMATION:
        return (
            "Thank you for registering! ✅\n\n"
            f'Your registration for "{event.name}" has been confirmed.\n\n'
            f"📅 Date: {_long_date(event)}\n"
            f"🕐 Time: {event.time}\n\n"
            "You'll receive a reminder 24 hours before the event.\n\n"
            "See you there!"
        )
    if kind == TemplateKind.UPDATE:
        return (
            "Important Update 🔔\n\n"
            f'There has been an update to "{event.name}".\n\n'
            "Please check the event page for the latest information.\n\n"
            "If you have any questions, feel free to reach out.\n\n"
            "Thank you!"
        )
    return (
        "Thank you for attending! 🎉\n\n"
        f'We hope you enjoyed "{event.name}".\n\n'
        "We'd love to hear your feedback! Please take a moment to share your thoughts.\n\n"
        "Stay tuned for more upcoming events.\n\n"
        "Best regards,\nEvent Management Team"
    )


def parse_schedule_time(raw: str, now: datetime) -> datetime:
    """Parse an ISO or natural-language schedule time into a UTC datetime.

    Raises ``NotificationValidationError`` when nothing can be parsed.
    """
    settings = {
        "PREFER_DATES_FROM": "future",
        "RELATIVE_BASE": now.astimezone(timezone.utc).replace(tzinfo=None),
        "TIMEZONE": "UTC",
        "TO_TIMEZONE": "UTC",
        "RETURN_AS_TIMEZONE_AWARE": True,
    }
    result = dateparser.parse(raw, settings=settings)
    if result is None:
        raise NotificationValidationError(f"Could not understand schedule time {raw!r}")
    if result.tzinfo is not None:
        return result.astimezone(timezone.utc)
    # No offset given: the wall-clock time is taken as UTC.
    return result.replace(tzinfo=timezone.utc)


def build_notification(
    event: Event | None,
    type: NotificationType,
    message: str | None,
    schedule_time: str | None = None,
    now: datetime | None = None,
) -> Notification:
    """Create the notification record for *event*.

    Exactly one of ``sent_at`` / ``scheduled_for`` is set, depending on whether
    a schedule time was given. ``recipients`` snapshots the attendee count.
    """
    if event is None or not message or not message.strip():
        raise NotificationValidationError(MISSING_FIELDS_MESSAGE)

    now = now or datetime.now(timezone.utc)
    if schedule_time and schedule_time.strip():
        scheduled = parse_schedule_time(schedule_time.strip(), now)
        return Notification(
            event_id=event.id,
            event_name=event.name,
            type=type,
            status=NotificationStatus.SCHEDULED,
            recipients=len(event.attendees),
            message=message,
            scheduled_for=scheduled.isoformat(),
        )

    return Notification(
        event_id=event.id,
        event_name=event.name,
        type=type,
        status=NotificationStatus.SENT,
        recipients=len(event.attendees),
        message=message,
        sent_at=now.isoformat(),
    )
