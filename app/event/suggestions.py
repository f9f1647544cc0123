# app/event/suggestions.py
"""Heuristic event suggestions.

Suggestions are recomputed from scratch from the calendar, facility
availability and the record of past events; nothing here keeps state.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta

FESTIVAL_MONTHS = frozenset({3, 10, 12})
GOOD_WEATHER_MONTHS = frozenset({2, 3, 4, 10, 11, 12})

SATURDAY = 5
FRIDAY = 4


@dataclass(frozen=True)
class Facility:
    name: str
    capacity: int
    available: bool = True


@dataclass(frozen=True)
class PastEvent:
    name: str
    attendance: int
    rating: float
    engagement: str
    facility: str


@dataclass(frozen=True)
class SuggestionDraft:
    title: str
    description: str
    facility: str
    reason: str
    estimated_attendance: int
    suggested_date: date
    category: str


DEFAULT_FACILITIES: tuple[Facility, ...] = (
    Facility("Terrace", 50),
    Facility("Lounge", 30),
    Facility("Garden", 40),
    Facility("Community Hall", 80),
    Facility("Gym", 20),
)

PAST_EVENTS: tuple[PastEvent, ...] = (
    PastEvent("Movie Night", 45, 4.6, "High", "Terrace"),
    PastEvent("Yoga Morning", 28, 4.2, "Medium", "Garden"),
    PastEvent("Board Games Evening", 22, 4.4, "Medium", "Lounge"),
    PastEvent("BBQ Party", 52, 4.8, "High", "Terrace"),
    PastEvent("Fitness Boot Camp", 35, 4.3, "High", "Gym"),
)


def is_weekend(day: date) -> bool:
    return day.weekday() >= SATURDAY


def is_festival_season(day: date) -> bool:
    return day.month in FESTIVAL_MONTHS


def is_good_weather_season(day: date) -> bool:
    return day.month in GOOD_WEATHER_MONTHS


def next_weekday_named(day: date, weekday: int) -> date:
    """The next given weekday strictly after ``day`` (a full week ahead if today is that day)."""
    days = (weekday - day.weekday()) % 7
    return day + timedelta(days=days or 7)


def next_saturday(day: date) -> date:
    return next_weekday_named(day, SATURDAY)


def next_friday(day: date) -> date:
    return next_weekday_named(day, FRIDAY)


def next_weekend(day: date) -> date:
    return next_saturday(day)


def next_weekday(day: date) -> date:
    if day.weekday() == SATURDAY:
        return day + timedelta(days=2)
    return day + timedelta(days=1)


def is_facility_available(facilities: tuple[Facility, ...], name: str) -> bool:
    return any(f.name == name and f.available for f in facilities)


def build_suggestions(
    today: date,
    facilities: tuple[Facility, ...] = DEFAULT_FACILITIES,
    past_events: tuple[PastEvent, ...] = PAST_EVENTS,
) -> list[SuggestionDraft]:
    suggestions: list[SuggestionDraft] = []

    if is_weekend(today):
        suggestions.append(
            SuggestionDraft(
                title="Weekend Movie Night",
                description="Outdoor movie screening in the garden area",
                facility="Garden",
                reason="High past engagement + Weekend timing + Garden available",
                estimated_attendance=40,
                suggested_date=next_weekend(today),
                category="Entertainment",
            )
        )

    fitness_history = [
        e for e in past_events if "Fitness" in e.name or "Yoga" in e.name
    ]
    if fitness_history and is_facility_available(facilities, "Gym"):
        suggestions.append(
            SuggestionDraft(
                title="Morning Fitness Session",
                description="Community fitness workout in the gym",
                facility="Gym",
                reason="Past fitness events had high engagement + Gym available",
                estimated_attendance=25,
                suggested_date=next_weekday(today),
                category="Fitness",
            )
        )

    if is_festival_season(today):
        suggestions.append(
            SuggestionDraft(
                title="Cultural Celebration",
                description="Community cultural event in the hall",
                facility="Community Hall",
                reason="Festival season + Large venue available",
                estimated_attendance=60,
                suggested_date=next_weekend(today),
                category="Cultural",
            )
        )

    if is_facility_available(facilities, "Lounge"):
        suggestions.append(
            SuggestionDraft(
                title="Community Game Night",
                description="Board games and social interaction in the lounge",
                facility="Lounge",
                reason="Past board game events were successful + Lounge available",
                estimated_attendance=20,
                suggested_date=next_friday(today),
                category="Social",
            )
        )

    if is_good_weather_season(today) and is_facility_available(facilities, "Terrace"):
        suggestions.append(
            SuggestionDraft(
                title="Terrace BBQ Evening",
                description="Community BBQ and socializing on the terrace",
                facility="Terrace",
                reason="BBQ events have highest ratings + Good weather + Terrace available",
                estimated_attendance=50,
                suggested_date=next_saturday(today),
                category="Food & Social",
            )
        )

    return suggestions
