# app/voice/intents.py
"""Intent detection and entity extraction for voice commands.

Detection is a fixed sequence of keyword checks where the first hit wins.
Entity extraction runs independently of the detected intent.
"""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass
from typing import Any, Mapping

from app.voice.classifier import Priority


class Intent(str, enum.Enum):
    """Closed set of voice command intents."""

    CHECK_TICKET_STATUS = "check_ticket_status"
    CREATE_COMPLAINT = "create_complaint"
    EVENT_FEEDBACK = "event_feedback"
    EVENT_INQUIRY = "event_inquiry"
    HELP_REQUEST = "help_request"
    GENERAL_INQUIRY = "general_inquiry"  # fallback

    @classmethod
    def parse(cls, value: Any) -> "Intent | None":
        try:
            return cls(value)
        except ValueError:
            return None


COMPLAINT_KEYWORDS: tuple[str, ...] = (
    "broken",
    "leaking",
    "not working",
    "problem",
    "issue",
    "repair",
    "maintenance",
    "fix",
    "damaged",
    "faulty",
    "complaint",
    "help",
    "urgent",
    "emergency",
    "water",
    "electrical",
    "plumbing",
    "heating",
    "air conditioning",
    "door",
    "window",
    "light",
    "noise",
)
EVENT_KEYWORDS: tuple[str, ...] = ("event", "activity")
FEEDBACK_KEYWORDS: tuple[str, ...] = ("feedback", "rating", "rate", "star")

TICKET_ID_PATTERN = re.compile(r"ticket\s+(\d+)", re.IGNORECASE)
RATING_PATTERN = re.compile(r"(\d+)\s*star", re.IGNORECASE)
LOCATION_PATTERN = re.compile(
    r"(?:unit|room|apartment|floor)\s+(\d+[a-z]?)", re.IGNORECASE
)

PRIORITY_HINTS: tuple[tuple[tuple[str, ...], Priority], ...] = (
    (("urgent", "emergency"), Priority.P1),
    (("important", "asap"), Priority.P2),
)


@dataclass
class ExtractedEntities:
    """Structured values pulled out of a command.

    Attributes:
        ticket_id: Digits following the word "ticket"
        rating: Number of stars, as said (not clamped)
        location: The matched "unit 204" style phrase
        priority: Priority hint from urgency words
    """

    ticket_id: str | None = None
    rating: int | None = None
    location: str | None = None
    priority: Priority | None = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None) -> "ExtractedEntities":
        """Read provider entities, accepting camelCase or snake_case keys."""
        data = data or {}
        ticket_id = data.get("ticketId", data.get("ticket_id"))
        rating = data.get("rating")
        try:
            rating = int(rating) if rating is not None else None
        except (TypeError, ValueError):
            rating = None
        priority = data.get("priority")
        try:
            priority = Priority(priority) if priority else None
        except ValueError:
            priority = None
        return cls(
            ticket_id=str(ticket_id) if ticket_id is not None else None,
            rating=rating,
            location=data.get("location") or None,
            priority=priority,
        )

    def merged_with(self, override: "ExtractedEntities") -> "ExtractedEntities":
        """Values from ``override`` win where they are set."""
        return ExtractedEntities(
            ticket_id=override.ticket_id or self.ticket_id,
            rating=override.rating if override.rating is not None else self.rating,
            location=override.location or self.location,
            priority=override.priority or self.priority,
        )


def is_complaint(text: str) -> bool:
    lowered = text.lower()
    return any(keyword in lowered for keyword in COMPLAINT_KEYWORDS)


def extract_ticket_id(text: str) -> str | None:
    match = TICKET_ID_PATTERN.search(text)
    return match.group(1) if match else None


def extract_rating(text: str) -> int | None:
    match = RATING_PATTERN.search(text)
    return int(match.group(1)) if match else None


def detect_basic_intent(text: str) -> Intent:
    lowered = text.lower()

    if "ticket" in lowered and "status" in lowered:
        return Intent.CHECK_TICKET_STATUS

    if is_complaint(lowered):
        return Intent.CREATE_COMPLAINT

    mentions_event = any(word in lowered for word in EVENT_KEYWORDS)
    mentions_feedback = any(word in lowered for word in FEEDBACK_KEYWORDS)
    if mentions_feedback and (mentions_event or extract_rating(lowered) is not None):
        return Intent.EVENT_FEEDBACK

    if mentions_event:
        return Intent.EVENT_INQUIRY

    if "help" in lowered:
        return Intent.HELP_REQUEST

    return Intent.GENERAL_INQUIRY


def extract_basic_entities(text: str) -> ExtractedEntities:
    lowered = text.lower()
    entities = ExtractedEntities(
        ticket_id=extract_ticket_id(text),
        rating=extract_rating(text),
    )

    location = LOCATION_PATTERN.search(text)
    if location:
        entities.location = location.group(0)

    for words, priority in PRIORITY_HINTS:
        if any(word in lowered for word in words):
            entities.priority = priority
            break

    return entities
