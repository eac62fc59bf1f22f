"""Domain errors raised by services and translated to HTTP responses in main."""

from __future__ import annotations


class CapacityError(Exception):
    """Raised when registering for an event that is already full."""

    def __init__(self, event_id: str, max_attendees: int) -> None:
        super().__init__(f"Event {event_id} is full ({max_attendees} attendees)")
        self.event_id = event_id
        self.max_attendees = max_attendees


class NotificationValidationError(ValueError):
    """Raised when a notification is missing its event or message."""


class CorruptStoreError(Exception):
    """Raised when a persisted collection cannot be decoded."""

    def __init__(self, key: str, reason: str) -> None:
        super().__init__(f"Stored value for {key!r} is corrupt: {reason}")
        self.key = key
        self.reason = reason


class ReplySuperseded(Exception):
    """Raised to the caller whose pending assistant reply was replaced."""
