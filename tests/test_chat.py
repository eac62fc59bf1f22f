"""Tests for the chat completion boundary."""

from __future__ import annotations

from datetime import datetime, timezone
from unittest.mock import patch

from eventhub.core.config import Settings
from eventhub.services.chat import complete_chat

NOW = datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc)


def test_echo_provider_wraps_message():
    response = complete_chat("Plan a meetup", Settings(CHAT_PROVIDER="echo"), now=NOW)

    assert response.content.startswith('This is a simulated AI response to: "Plan a meetup".')
    assert response.timestamp == NOW.isoformat()


def test_openai_provider_forwards_message():
    settings = Settings(CHAT_PROVIDER="openai", OPENAI_API_KEY="sk-test")
    with patch(
        "eventhub.services.chat._complete_with_llm", return_value="Try Tuesday at 10:00."
    ) as llm:
        response = complete_chat("When should I meet?", settings, now=NOW)

    llm.assert_called_once_with("When should I meet?", settings)
    assert response.content == "Try Tuesday at 10:00."


def test_openai_provider_without_key_falls_back_to_echo():
    settings = Settings(CHAT_PROVIDER="openai", OPENAI_API_KEY=None)
    with patch("eventhub.services.chat._complete_with_llm") as llm:
        response = complete_chat("hello", settings, now=NOW)

    llm.assert_not_called()
    assert "simulated AI response" in response.content
