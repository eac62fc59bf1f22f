"""Tests for the keyword assistant and its delayed reply dispatcher."""

from __future__ import annotations

import asyncio
from datetime import date

import pytest

from eventhub.domain.errors import ReplySuperseded
from eventhub.domain.models import Event
from eventhub.services.assistant import (
    HELP_REPLY,
    RULES,
    ReplyDispatcher,
    average_attendees,
    match_rule,
    respond,
)

TODAY = date(2025, 6, 1)


def _event(name: str, on: str, attendee_count: int, at: str = "10:00") -> Event:
    return Event(
        name=name,
        date=on,
        time=at,
        attendees=[f"P{i} (p{i}@x.io)" for i in range(attendee_count)],
    )


@pytest.fixture()
def three_events() -> list[Event]:
    return [
        _event("Kickoff", "2025-05-01", 2),
        _event("Hackathon", "2025-07-01", 5),
        _event("Retro", "2025-08-01", 0),
    ]


# ---------------------------------------------------------------------------
# Statistics
# ---------------------------------------------------------------------------


def test_statistics_reply_counts_events(three_events):
    reply = respond("Show me event statistics", three_events, today=TODAY)

    assert "Total Events: 3" in reply
    assert "Total Attendees: 7" in reply
    assert "Average Attendees per Event: 2" in reply
    assert "Upcoming Events: 2" in reply
    assert 'Your most recent event: "Retro"' in reply


def test_statistics_with_no_events():
    reply = respond("how many events do I have?", [], today=TODAY)

    assert "Total Events: 0" in reply
    assert "Average Attendees per Event: 0" in reply
    assert "No events yet. Create your first event!" in reply


def test_average_rounds_half_up():
    events = [_event("A", "2025-01-01", 1), _event("B", "2025-01-01", 2)]

    assert average_attendees(events) == 2


# ---------------------------------------------------------------------------
# Rule priority
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    ("utterance", "rule_name"),
    [
        ("Help me create a new event", "create_event"),
        ("What's the best time for a meetup?", "time_slot"),
        ("Write a blurb for my launch", "description"),
        ("stats please", "statistics"),
        ("Who should I invite?", "speaker"),
        ("Any venue ideas?", "venue"),
        ("Draft an agenda", "agenda"),
        ("Remind people about it", "notification"),
        ("What events do I have?", "list_events"),
    ],
)
def test_each_keyword_group_is_reachable(utterance: str, rule_name: str):
    rule = match_rule(utterance)

    assert rule is not None
    assert rule.name == rule_name


def test_earlier_group_wins_over_later_one():
    # "show" (list) and "statistics" both match; statistics comes first.
    assert match_rule("Show me event statistics").name == "statistics"
    # "generate" (description) beats "agenda".
    assert match_rule("Generate an agenda").name == "description"
    # "where" is inside "anywhere", so venue beats list.
    assert match_rule("Show anywhere").name == "venue"


def test_matching_is_case_insensitive():
    assert match_rule("CREATE EVENT now").name == "create_event"


def test_rules_are_in_documented_priority_order():
    assert [rule.name for rule in RULES] == [
        "create_event",
        "time_slot",
        "description",
        "statistics",
        "speaker",
        "venue",
        "agenda",
        "notification",
        "list_events",
    ]


def test_unmatched_utterance_gets_help_text(three_events):
    assert respond("hello there", three_events) == HELP_REPLY


# ---------------------------------------------------------------------------
# Computed replies
# ---------------------------------------------------------------------------


def test_list_reply_numbers_every_event(three_events):
    reply = respond("list my events", three_events)

    assert "1. **Kickoff** - 2025-05-01 at 10:00 (2 attendees)" in reply
    assert "2. **Hackathon** - 2025-07-01 at 10:00 (5 attendees)" in reply
    assert "3. **Retro** - 2025-08-01 at 10:00 (0 attendees)" in reply


def test_list_reply_without_events():
    assert respond("list my events", []).startswith("You don't have any events yet.")


def test_time_slot_reply_lists_busy_slots(three_events):
    reply = respond("When should I hold it?", three_events)

    assert "Currently busy slots: 2025-05-01 at 10:00, 2025-07-01 at 10:00" in reply


def test_time_slot_reply_with_free_calendar():
    assert "Currently busy slots: None" in respond("best time?", [])


# ---------------------------------------------------------------------------
# ReplyDispatcher
# ---------------------------------------------------------------------------


def test_dispatcher_returns_reply_after_delay(three_events):
    dispatcher = ReplyDispatcher(delay_seconds=0)

    reply = asyncio.run(dispatcher.submit("stats", three_events))

    assert "Total Events: 3" in reply


def test_newer_message_supersedes_pending_one(three_events):
    dispatcher = ReplyDispatcher(delay_seconds=0.05)

    async def scenario():
        first = asyncio.ensure_future(dispatcher.submit("stats", three_events))
        await asyncio.sleep(0)
        second = await dispatcher.submit("list my events", three_events)
        with pytest.raises(ReplySuperseded):
            await first
        return second

    reply = asyncio.run(scenario())

    assert reply.startswith("Here are your current events:")
