"""Chat completion boundary.

The default provider echoes the message back inside a fixed sentence. With
``CHAT_PROVIDER=openai`` the message is forwarded to OpenAI instead.
"""

from __future__ import annotations

from datetime import datetime, timezone

from eventhub.core.config import Settings
from eventhub.domain.models import ChatResponse

_SYSTEM_PROMPT = """\
You are an assistant for an event management tool. Help organizers plan \
events, pick time slots, write descriptions and agendas, choose venues and \
speakers, and word attendee notifications. Keep answers short and practical.
"""


def echo_completion(message: str) -> str:
    return (
        f'This is a simulated AI response to: "{message}". In production, this '
        "would connect to an AI API for intelligent responses about event management."
    )


def _complete_with_llm(message: str, settings: Settings) -> str:
    """Call OpenAI for a completion of *message*."""
    from openai import OpenAI

    client = OpenAI(api_key=settings.OPENAI_API_KEY)
    response = client.chat.completions.create(
        model=settings.OPENAI_MODEL,
        messages=[
            {"role": "system", "content": _SYSTEM_PROMPT},
            {"role": "user", "content": message},
        ],
        temperature=0.3,
    )
    return response.choices[0].message.content or ""


def complete_chat(
    message: str, settings: Settings, now: datetime | None = None
) -> ChatResponse:
    if settings.CHAT_PROVIDER == "openai" and settings.OPENAI_API_KEY:
        content = _complete_with_llm(message, settings)
    else:
        content = echo_completion(message)
    timestamp = (now or datetime.now(timezone.utc)).isoformat()
    return ChatResponse(content=content, timestamp=timestamp)
