"""Keyword-matched event assistant.

Replies are canned templates chosen by the first matching rule in
``RULES``; only the statistics and event-list replies read the collection.
"""

from __future__ import annotations

import asyncio
import math
from dataclasses import dataclass
from datetime import date
from typing import Callable

from eventhub.core.logging import get_logger
from eventhub.domain.errors import ReplySuperseded
from eventhub.domain.models import Event
from eventhub.services.catalog import count_upcoming, total_attendees

logger = get_logger(__name__)

GREETING = """\
Hello! I'm your AI event assistant. I can help you with:

• Creating and managing events
• Finding the best time slots for your events
• Generating event descriptions and agendas
• Answering questions about your events
• Suggesting speakers and venues
• Providing event statistics and insights

How can I help you today?"""


@dataclass(frozen=True)
class Rule:
    name: str
    keywords: tuple[str, ...]
    reply: Callable[[list[Event], date], str]

    def matches(self, lowered: str) -> bool:
        return any(keyword in lowered for keyword in self.keywords)


# ---------------------------------------------------------------------------
# Replies
# ---------------------------------------------------------------------------


def _create_event_reply(events: list[Event], today: date) -> str:
    return """\
I can help you create a new event! Here's what you should consider:

**Event Planning Checklist:**
1. Choose a compelling event name
2. Select a date and time (I can suggest optimal time slots)
3. Pick a suitable venue
4. Define your target audience
5. Outline the event agenda
6. Invite relevant speakers

Would you like me to suggest some available time slots? Or would you like help with generating an event description?"""


def _time_slot_reply(events: list[Event], today: date) -> str:
    busy = [f"{e.date.isoformat()} at {e.time}" for e in events]
    return f"""\
Based on your current schedule, here are some recommended time slots:

**Available Time Slots:**
• Monday-Friday: 9:00 AM - 11:00 AM (Morning sessions work well for professional events)
• Monday-Friday: 2:00 PM - 4:00 PM (Afternoon slots for workshops)
• Weekends: 10:00 AM - 3:00 PM (Great for community events)

Currently busy slots: {", ".join(busy) if busy else "None"}

Would you like me to check for conflicts on a specific date?"""


def _description_reply(events: list[Event], today: date) -> str:
    return """\
I can generate compelling event descriptions! Here's a template:

**Sample Event Description:**
"Join us for an engaging [EVENT TYPE] that brings together industry leaders and innovators. This event will feature:

✨ Keynote presentations from renowned experts
🤝 Networking opportunities with peers
📚 Hands-on workshops and learning sessions
🎯 Actionable insights and takeaways

Whether you're a seasoned professional or just starting out, this event offers valuable content for everyone. Don't miss this opportunity to learn, connect, and grow!"

Would you like me to customize this for your specific event?"""


def average_attendees(events: list[Event]) -> int:
    """Mean attendees per event, rounded half up; 0 for no events."""
    if not events:
        return 0
    return math.floor(total_attendees(events) / len(events) + 0.5)


def _statistics_reply(events: list[Event], today: date) -> str:
    if events:
        latest = f'Your most recent event: "{events[-1].name}"'
    else:
        latest = "No events yet. Create your first event!"
    return f"""\
Here are your event statistics:

📊 **Event Statistics**
• Total Events: {len(events)}
• Upcoming Events: {count_upcoming(events, today)}
• Total Attendees: {total_attendees(events)}
• Average Attendees per Event: {average_attendees(events)}

{latest}"""


def _speaker_reply(events: list[Event], today: date) -> str:
    return """\
Here are some suggestions for finding great speakers:

🎤 **Speaker Sourcing Tips:**
1. Industry experts and thought leaders
2. Previous successful event speakers
3. Authors and researchers in your field
4. Company executives and innovators
5. Community leaders and activists

**Popular Speaker Topics:**
• Technology and Innovation
• Leadership and Management
• Marketing and Sales
• Personal Development
• Industry Trends and Future Outlook

Would you like suggestions for speakers in a specific field?"""


def _venue_reply(events: list[Event], today: date) -> str:
    return """\
Let me help you choose the perfect venue!

🏢 **Venue Considerations:**
• **Capacity**: Ensure it fits your expected attendance
• **Location**: Accessible by public transport and parking
• **Amenities**: WiFi, AV equipment, catering facilities
• **Ambiance**: Matches your event's tone and style
• **Budget**: Fits within your allocated budget

**Popular Venue Types:**
• Conference Centers (professional events)
• Hotels (multi-day conferences)
• Co-working Spaces (workshops and meetups)
• Universities (academic events)
• Outdoor Venues (casual gatherings)

What type of event are you planning?"""


def _agenda_reply(events: list[Event], today: date) -> str:
    return """\
Here's a sample event agenda structure:

📋 **Recommended Event Timeline:**

**Morning Session**
• 09:00 - 09:30: Registration & Welcome Coffee
• 09:30 - 10:00: Opening Remarks
• 10:00 - 11:00: Keynote Presentation
• 11:00 - 11:15: Break

**Mid-Day**
• 11:15 - 12:30: Panel Discussion
• 12:30 - 13:30: Lunch & Networking

**Afternoon Session**
• 13:30 - 14:30: Workshop Session A
• 14:30 - 15:30: Workshop Session B
• 15:30 - 16:00: Closing Remarks & Q&A

Would you like me to customize this for your event duration?"""


def _notification_reply(events: list[Event], today: date) -> str:
    return """\
I can help you set up event notifications!

📧 **Notification Types:**
• Registration confirmation emails
• Event reminder (24 hours before)
• Day-of event SMS alerts
• Post-event follow-up messages
• Schedule change updates

**Best Practices:**
• Send reminders 1 week, 1 day, and 1 hour before
• Include event details and venue information
• Add calendar invite attachments
• Provide contact information for questions

Would you like help crafting a notification message?"""


def _list_events_reply(events: list[Event], today: date) -> str:
    if not events:
        return (
            "You don't have any events yet. Would you like to create your first "
            "event? I can help guide you through the process!"
        )
    lines = "\n".join(
        f"{idx}. **{e.name}** - {e.date.isoformat()} at {e.time} "
        f"({len(e.attendees)} attendees)"
        for idx, e in enumerate(events, start=1)
    )
    return (
        f"Here are your current events:\n\n{lines}\n\n"
        "Would you like more details about any specific event?"
    )


HELP_REPLY = """\
That's a great question! While I'm an AI assistant, I can help you with various aspects of event management:

• **Event Creation**: Help plan and organize events
• **Scheduling**: Find optimal time slots
• **Content Generation**: Create descriptions, agendas, and materials
• **Analytics**: Provide insights on your events
• **Recommendations**: Suggest speakers, venues, and improvements

Try asking me things like:
- "Help me create a new event"
- "What time slots are available?"
- "Generate an event description"
- "Show me event statistics"
- "Suggest speakers for my tech conference"

What would you like help with?"""


# Evaluated top to bottom; the first match wins.
RULES: tuple[Rule, ...] = (
    Rule("create_event", ("create event", "new event"), _create_event_reply),
    Rule("time_slot", ("time slot", "when should", "best time"), _time_slot_reply),
    Rule("description", ("description", "write", "generate"), _description_reply),
    Rule("statistics", ("how many", "statistics", "stats"), _statistics_reply),
    Rule("speaker", ("speaker", "who should"), _speaker_reply),
    Rule("venue", ("venue", "location", "where"), _venue_reply),
    Rule("agenda", ("agenda", "schedule", "timeline"), _agenda_reply),
    Rule("notification", ("notification", "remind", "alert"), _notification_reply),
    Rule("list_events", ("list", "show", "what events"), _list_events_reply),
)


def match_rule(utterance: str) -> Rule | None:
    lowered = utterance.lower()
    for rule in RULES:
        if rule.matches(lowered):
            return rule
    return None


def respond(utterance: str, events: list[Event], today: date | None = None) -> str:
    """Return the canned reply for *utterance*, or the help text if nothing matches."""
    rule = match_rule(utterance)
    if rule is None:
        return HELP_REPLY
    return rule.reply(events, today or date.today())


# ---------------------------------------------------------------------------
# Delayed delivery
# ---------------------------------------------------------------------------


class ReplyDispatcher:
    """Delivers assistant replies after a fixed delay, one at a time.

    Submitting a new message cancels whichever reply is still waiting, and
    that earlier caller gets ``ReplySuperseded`` instead of a stale answer.
    """

    def __init__(self, delay_seconds: float = 1.0) -> None:
        self.delay_seconds = delay_seconds
        self._pending: asyncio.Task | None = None

    async def _deliver(self, utterance: str, events: list[Event]) -> str:
        await asyncio.sleep(self.delay_seconds)
        return respond(utterance, events)

    async def submit(self, utterance: str, events: list[Event]) -> str:
        if self._pending is not None and not self._pending.done():
            logger.info("assistant_reply_superseded")
            self._pending.cancel()

        task = asyncio.ensure_future(self._deliver(utterance, events))
        self._pending = task
        try:
            return await task
        except asyncio.CancelledError:
            if task.cancelled() and self._pending is not task:
                raise ReplySuperseded() from None
            raise
        finally:
            if self._pending is task:
                self._pending = None
