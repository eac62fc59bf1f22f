"""Tests for attendee registration and capacity."""

from __future__ import annotations

import pytest

from eventhub.domain.errors import CapacityError
from eventhub.domain.models import Event
from eventhub.services.registration import register


def _event(attendees: list[str], max_attendees: int | None) -> Event:
    return Event(
        name="Workshop",
        date="2025-05-05",
        time="10:00",
        attendees=attendees,
        max_attendees=max_attendees,
    )


def test_full_event_rejects_and_leaves_attendees_untouched():
    event = _event(["A (a@x.io)", "B (b@x.io)"], max_attendees=2)

    with pytest.raises(CapacityError):
        register(event, "C", "c@x.io")

    assert event.attendees == ["A (a@x.io)", "B (b@x.io)"]


def test_last_seat_can_be_taken():
    event = _event(["A (a@x.io)"], max_attendees=2)

    updated = register(event, "Grace Hopper", "grace@navy.mil")

    assert len(updated.attendees) == 2
    assert updated.attendees[-1] == "Grace Hopper (grace@navy.mil)"


def test_unlimited_capacity():
    event = _event([f"P{i} (p{i}@x.io)" for i in range(100)], max_attendees=None)

    register(event, "Late", "late@x.io")

    assert len(event.attendees) == 101


def test_same_email_registers_twice():
    event = _event([], max_attendees=None)

    register(event, "Ada", "ada@x.io")
    register(event, "Ada", "ada@x.io")

    assert event.attendees == ["Ada (ada@x.io)", "Ada (ada@x.io)"]


def test_capacity_lowered_below_attendee_count_blocks_new_registrations():
    event = _event(["A (a@x.io)", "B (b@x.io)", "C (c@x.io)"], max_attendees=2)

    with pytest.raises(CapacityError) as excinfo:
        register(event, "D", "d@x.io")

    assert excinfo.value.max_attendees == 2
    assert len(event.attendees) == 3
