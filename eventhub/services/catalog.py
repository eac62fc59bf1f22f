"""Search, filtering and dashboard aggregates over the event collection."""

from __future__ import annotations

from datetime import date

from eventhub.domain.models import (
    AnalyticsResponse,
    AttendanceBar,
    DateFilter,
    Event,
    MonthlySummary,
)

CHART_NAME_LENGTH = 15


def is_upcoming(event: Event, today: date) -> bool:
    return event.date >= today


def filter_events(
    events: list[Event],
    search: str = "",
    when: DateFilter = DateFilter.ALL,
    today: date | None = None,
) -> list[Event]:
    """Match *search* against name or venue, then keep upcoming/past events."""
    today = today or date.today()
    term = search.lower()
    matched = [
        e for e in events if term in e.name.lower() or term in e.venue.lower()
    ]
    if when == DateFilter.UPCOMING:
        return [e for e in matched if is_upcoming(e, today)]
    if when == DateFilter.PAST:
        return [e for e in matched if not is_upcoming(e, today)]
    return matched


def total_attendees(events: list[Event]) -> int:
    return sum(len(e.attendees) for e in events)


def count_upcoming(events: list[Event], today: date) -> int:
    return sum(1 for e in events if is_upcoming(e, today))


def _chart_label(name: str) -> str:
    if len(name) > CHART_NAME_LENGTH:
        return name[:CHART_NAME_LENGTH] + "..."
    return name


def attendance_chart(events: list[Event]) -> list[AttendanceBar]:
    return [
        AttendanceBar(name=_chart_label(e.name), attendees=len(e.attendees))
        for e in events
    ]


def monthly_summary(events: list[Event]) -> list[MonthlySummary]:
    """Group events by "Mon YYYY", in the order each month first appears."""
    months: dict[str, MonthlySummary] = {}
    for event in events:
        month = event.date.strftime("%b %Y")
        summary = months.get(month)
        if summary is None:
            months[month] = MonthlySummary(
                month=month, events=1, attendees=len(event.attendees)
            )
        else:
            summary.events += 1
            summary.attendees += len(event.attendees)
    return list(months.values())


def build_analytics(events: list[Event], today: date | None = None) -> AnalyticsResponse:
    today = today or date.today()
    return AnalyticsResponse(
        total_events=len(events),
        upcoming_events=count_upcoming(events, today),
        total_attendees=total_attendees(events),
        attendance=attendance_chart(events),
        monthly=monthly_summary(events),
    )
