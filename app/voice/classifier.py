# app/voice/classifier.py
"""Rule-based classification of a maintenance transcript.

Every function lower-cases the transcript and walks an ordered keyword table;
the first keyword found as a substring decides the result. Table order is the
tie-break, so the tables are tuples rather than dicts.
"""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass


class IssueType(str, enum.Enum):
    PLUMBING = "Plumbing"
    ELECTRICAL = "Electrical"
    INTERNET = "Internet"
    HOUSEKEEPING = "Housekeeping"
    GENERAL = "General"


class Priority(str, enum.Enum):
    P1 = "P1"
    P2 = "P2"
    P3 = "P3"
    P4 = "P4"


DEFAULT_PRIORITY = Priority.P3
DEFAULT_TITLE = "General Service Request"
UNKNOWN_LOCATION = "Not specified"

ISSUE_TYPE_KEYWORDS: tuple[tuple[str, IssueType], ...] = (
    ("water", IssueType.PLUMBING),
    ("leak", IssueType.PLUMBING),
    ("plumbing", IssueType.PLUMBING),
    ("toilet", IssueType.PLUMBING),
    ("bathroom", IssueType.PLUMBING),
    ("kitchen", IssueType.PLUMBING),
    ("electrical", IssueType.ELECTRICAL),
    ("power", IssueType.ELECTRICAL),
    ("light", IssueType.ELECTRICAL),
    ("switch", IssueType.ELECTRICAL),
    ("internet", IssueType.INTERNET),
    ("wifi", IssueType.INTERNET),
    ("network", IssueType.INTERNET),
    ("cleaning", IssueType.HOUSEKEEPING),
    ("housekeeping", IssueType.HOUSEKEEPING),
    ("maintenance", IssueType.HOUSEKEEPING),
)

PRIORITY_TIERS: tuple[tuple[Priority, tuple[str, ...]], ...] = (
    (
        Priority.P1,
        ("fire", "gas", "flooding", "power outage", "emergency", "urgent", "danger"),
    ),
    (
        Priority.P2,
        ("water leakage", "leak", "ac not working", "heating", "no water", "broken"),
    ),
    (Priority.P3, ("slow internet", "lift issue", "elevator", "noise", "maintenance")),
    (Priority.P4, ("cleaning", "bulb replacement", "light", "minor repair", "request")),
)

TITLE_KEYWORDS: tuple[tuple[tuple[str, ...], str], ...] = (
    (("leak",), "Water Leak Issue"),
    (("electrical", "power"), "Electrical Problem"),
    (("internet", "wifi"), "Internet Connectivity Issue"),
    (("cleaning",), "Cleaning Request"),
    (("maintenance",), "Maintenance Request"),
    (("noise",), "Noise Complaint"),
    (("heating", "ac"), "HVAC Issue"),
)

AREAS: tuple[str, ...] = (
    "kitchen",
    "bathroom",
    "bedroom",
    "living room",
    "balcony",
    "terrace",
)

ROOM_PATTERN = re.compile(r"(?:room|unit|apartment)\s+(\d+[a-z]?)", re.IGNORECASE)
FLOOR_PATTERN = re.compile(r"(?:floor|level)\s+(\d+)", re.IGNORECASE)


@dataclass(frozen=True)
class Classification:
    title: str
    issue_type: IssueType
    priority: Priority
    location: str


def detect_issue_type(text: str) -> IssueType:
    lowered = text.lower()
    for keyword, issue_type in ISSUE_TYPE_KEYWORDS:
        if keyword in lowered:
            return issue_type
    return IssueType.GENERAL


def assign_priority(text: str) -> Priority:
    lowered = text.lower()
    for priority, keywords in PRIORITY_TIERS:
        if any(keyword in lowered for keyword in keywords):
            return priority
    return DEFAULT_PRIORITY


def extract_location(text: str, fallback_location: str | None = None) -> str:
    """Pull a location out of the transcript.

    Checked in order: a room/unit/apartment number, a floor/level number, then
    an area of the home qualified by ``fallback_location``.
    """
    lowered = text.lower()

    room = ROOM_PATTERN.search(lowered)
    if room:
        return f"Room {room.group(1)}"

    floor = FLOOR_PATTERN.search(lowered)
    if floor:
        return f"Floor {floor.group(1)}"

    for area in AREAS:
        if area in lowered:
            label = area[0].upper() + area[1:]
            return f"{fallback_location} - {label}" if fallback_location else label

    return fallback_location or UNKNOWN_LOCATION


def generate_title(text: str) -> str:
    lowered = text.lower()
    for keywords, title in TITLE_KEYWORDS:
        if any(keyword in lowered for keyword in keywords):
            return title
    return DEFAULT_TITLE


def classify(text: str, fallback_location: str | None = None) -> Classification:
    return Classification(
        title=generate_title(text),
        issue_type=detect_issue_type(text),
        priority=assign_priority(text),
        location=extract_location(text, fallback_location),
    )
