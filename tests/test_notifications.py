"""Tests for notification records and message templates."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from eventhub.domain.errors import NotificationValidationError
from eventhub.domain.models import (
    Event,
    NotificationStatus,
    NotificationType,
    TemplateKind,
)
from eventhub.services.notifications import (
    MISSING_FIELDS_MESSAGE,
    build_notification,
    parse_schedule_time,
    render_template,
)

# Fixed reference time: Sunday 2025-06-01 12:00 UTC
NOW = datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture()
def event() -> Event:
    return Event(
        name="Python Meetup",
        date="2025-06-14",
        time="18:30",
        attendees=["Ada (ada@x.io)", "Grace (grace@x.io)"],
    )


def test_send_now_records_sent_at(event: Event):
    notification = build_notification(
        event, NotificationType.EMAIL, "See you soon", now=NOW
    )

    assert notification.status == NotificationStatus.SENT
    assert notification.sent_at == NOW.isoformat()
    assert notification.scheduled_for is None
    assert notification.recipients == 2
    assert notification.event_id == event.id
    assert notification.event_name == "Python Meetup"


def test_schedule_time_records_scheduled_for(event: Event):
    notification = build_notification(
        event,
        NotificationType.SMS,
        "Doors open at 18:00",
        schedule_time="2025-06-13T09:00:00",
        now=NOW,
    )

    assert notification.status == NotificationStatus.SCHEDULED
    assert notification.sent_at is None
    assert notification.scheduled_for == "2025-06-13T09:00:00+00:00"


def test_recipients_is_a_snapshot(event: Event):
    notification = build_notification(event, NotificationType.WHATSAPP, "Hi", now=NOW)
    event.attendees.append("Linus (linus@x.io)")

    assert notification.recipients == 2


@pytest.mark.parametrize("message", [None, "", "   "])
def test_blank_message_is_rejected(event: Event, message):
    with pytest.raises(NotificationValidationError, match=MISSING_FIELDS_MESSAGE):
        build_notification(event, NotificationType.EMAIL, message, now=NOW)


def test_missing_event_is_rejected():
    with pytest.raises(NotificationValidationError, match=MISSING_FIELDS_MESSAGE):
        build_notification(None, NotificationType.EMAIL, "Hello", now=NOW)


def test_natural_language_schedule_time():
    parsed = parse_schedule_time("tomorrow at 9am", NOW)

    assert parsed == datetime(2025, 6, 2, 9, 0, tzinfo=timezone.utc)


def test_schedule_time_with_offset_is_converted_to_utc():
    parsed = parse_schedule_time("2030-01-01T08:00:00+02:00", NOW)

    assert parsed == datetime(2030, 1, 1, 6, 0, tzinfo=timezone.utc)
    assert parsed.isoformat() == "2030-01-01T06:00:00+00:00"


def test_unparseable_schedule_time():
    with pytest.raises(NotificationValidationError):
        parse_schedule_time("banana", NOW)


# ---------------------------------------------------------------------------
# Templates
# ---------------------------------------------------------------------------


def test_reminder_template_names_event_date_and_time(event: Event):
    body = render_template(event, TemplateKind.REMINDER)

    assert '"Python Meetup" scheduled for June 14, 2025 at 18:30' in body


def test_confirmation_template(event: Event):
    body = render_template(event, TemplateKind.CONFIRMATION)

    assert 'Your registration for "Python Meetup" has been confirmed.' in body
    assert "Date: June 14, 2025" in body
    assert "Time: 18:30" in body


@pytest.mark.parametrize("kind", [TemplateKind.UPDATE, TemplateKind.FOLLOWUP])
def test_other_templates_mention_event(event: Event, kind: TemplateKind):
    assert '"Python Meetup"' in render_template(event, kind)
