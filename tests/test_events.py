# tests/test_events.py
from datetime import date, datetime, timedelta

import pytest

from app.core.schemas import Source
from app.event.models import Sentiment
from app.event.repository import EventRepository, FeedbackRepository, SuggestionRepository
from app.event.schemas import EventCreate
from app.event.sentiment import analyze_sentiment
from app.event.services import EventStore
from app.event.suggestions import (
    DEFAULT_FACILITIES,
    Facility,
    build_suggestions,
    next_friday,
    next_saturday,
    next_weekday,
)

# Saturday in October: weekend, festival month and good weather all at once
SATURDAY_IN_OCTOBER = datetime(2026, 10, 17, 9, 0)
# Wednesday in July: none of the calendar rules fire
WEDNESDAY_IN_JULY = datetime(2026, 7, 15, 9, 0)


def make_store(db, now, facilities=DEFAULT_FACILITIES):
    return EventStore(
        EventRepository(db),
        SuggestionRepository(db),
        FeedbackRepository(db),
        facilities=facilities,
        now=lambda: now,
    )


@pytest.fixture
def store(db):
    return make_store(db, SATURDAY_IN_OCTOBER)


def test_sentiment_rules():
    assert analyze_sentiment("meh", 5) == Sentiment.POSITIVE
    assert analyze_sentiment("loved it", 1) == Sentiment.NEGATIVE
    assert analyze_sentiment("it was fine", 3) == Sentiment.NEUTRAL
    assert analyze_sentiment("absolutely amazing", 3) == Sentiment.POSITIVE
    assert analyze_sentiment("boring and bad", 3) == Sentiment.NEGATIVE
    assert analyze_sentiment("great food, boring music", 3) == Sentiment.NEUTRAL


def test_date_helpers():
    saturday = date(2026, 10, 17)
    assert next_saturday(saturday) == date(2026, 10, 24)
    assert next_friday(saturday) == date(2026, 10, 23)
    assert next_weekday(saturday) == date(2026, 10, 19)
    assert next_weekday(date(2026, 10, 18)) == date(2026, 10, 19)
    assert next_weekday(date(2026, 10, 14)) == date(2026, 10, 15)


def test_suggestions_on_saturday_in_october():
    titles = [s.title for s in build_suggestions(SATURDAY_IN_OCTOBER.date())]
    assert titles == [
        "Weekend Movie Night",
        "Morning Fitness Session",
        "Cultural Celebration",
        "Community Game Night",
        "Terrace BBQ Evening",
    ]


def test_suggestions_on_plain_midweek_day():
    titles = [s.title for s in build_suggestions(WEDNESDAY_IN_JULY.date())]
    assert titles == ["Morning Fitness Session", "Community Game Night"]


def test_unavailable_facilities_suppress_suggestions():
    facilities = (
        Facility("Gym", 20, available=False),
        Facility("Lounge", 30, available=False),
        Facility("Terrace", 50),
    )
    titles = [s.title for s in build_suggestions(WEDNESDAY_IN_JULY.date(), facilities)]
    assert titles == []


def test_generate_suggestions_replaces_previous_set(store):
    first = store.generate_suggestions()
    second = store.generate_suggestions()

    assert [s.title for s in first] == [s.title for s in second]
    assert [s.facility for s in first] == [s.facility for s in second]
    assert len(store.list_suggestions()) == len(second)
    # the earlier set is gone from the store but still readable
    assert all(store.suggestions.find_by_id(s.id) is None for s in first)
    assert store.approve_suggestion(first[0].id) is None


def test_approve_suggestion_creates_event_and_removes_it(store):
    suggestions = store.generate_suggestions()
    bbq = next(s for s in suggestions if s.title == "Terrace BBQ Evening")

    event = store.approve_suggestion(bbq.id, approved_by="admin@example.com")
    assert event.status == "Approved"
    assert event.facility == "Terrace"
    assert event.date == datetime(2026, 10, 24)
    assert bbq.id not in {s.id for s in store.list_suggestions()}

    # a second approval of the same suggestion finds nothing
    assert store.approve_suggestion(bbq.id) is None


def test_create_event_defaults(store):
    event = store.create_event(
        EventCreate(title="Book Club", description="Monthly read", date=datetime(2026, 11, 1), location="Lounge"),
        created_by="admin@example.com",
    )
    assert event.status == "Planned"
    assert event.estimated_attendance == 20
    assert event.category == "General"
    assert event.facility == "Lounge"
    assert event.promotions == {}


def test_upcoming_events_only_future(store):
    store.create_event(EventCreate(title="Past", description="x", date=datetime(2026, 1, 1), facility="Gym"))
    store.create_event(EventCreate(title="Later", description="x", date=datetime(2026, 12, 1), facility="Gym"))
    store.create_event(EventCreate(title="Sooner", description="x", date=datetime(2026, 11, 1), facility="Gym"))

    assert [e.title for e in store.upcoming_events()] == ["Sooner", "Later"]


def test_collect_feedback_tags_sentiment(store):
    feedback = store.collect_feedback(None, 101, 3, "absolutely amazing", Source.WEB)
    assert feedback.event_id is None
    assert feedback.sentiment == Sentiment.POSITIVE
    assert feedback.rating == 3


def test_collect_feedback_clamps_rating(store):
    assert store.collect_feedback(None, 101, 10, "ok").rating == 5
    assert store.collect_feedback(None, 101, 0, "ok").rating == 1


def test_generate_promotions(store):
    event = store.create_event(
        EventCreate(title="Movie Night", description="Films outside", date=datetime(2026, 10, 24, 19), facility="Garden")
    )
    promotions = store.generate_promotions(event.id)

    assert set(promotions) == {"whatsapp", "bulletin", "voice"}
    assert "Saturday, October 24, 2026" in promotions["whatsapp"]
    assert "MOVIE NIGHT" in promotions["bulletin"]
    assert "Garden" in promotions["voice"]
    assert store.get_event(event.id).promotions == promotions
    assert store.generate_promotions("missing") is None


def test_analytics(store):
    store.create_event(EventCreate(title="Later", description="x", date=datetime(2026, 12, 1), facility="Gym"))
    store.collect_feedback(None, 101, 5, "great")
    store.collect_feedback(None, 102, 1, "awful")
    store.collect_feedback(None, 103, 3, "it was fine")

    analytics = store.analytics()
    assert analytics.total_events == 1
    assert analytics.upcoming_events == 1
    assert analytics.past_events == 5
    assert analytics.average_attendance == 36
    assert analytics.average_rating == 4.5
    assert [f.facility for f in analytics.popular_facilities] == ["Terrace", "Garden", "Lounge"]
    assert analytics.popular_facilities[0].count == 2
    assert analytics.feedback_summary.total == 3
    assert analytics.feedback_summary.positive == 1
    assert analytics.feedback_summary.neutral == 1
    assert analytics.feedback_summary.negative == 1


def test_event_routes(client, admin_headers, resident_headers):
    when = (datetime.now() + timedelta(days=10)).isoformat()
    r = client.post(
        "/events/",
        json={"title": "Garden Party", "description": "Snacks", "date": when, "location": "Garden"},
        headers=admin_headers,
    )
    assert r.status_code == 201
    event = r.json()
    assert event["estimatedAttendance"] == 20
    assert event["createdBy"] == "admin@example.com"

    overview = client.get("/events/", headers=resident_headers).json()
    assert [e["id"] for e in overview["upcomingEvents"]] == [event["id"]]
    assert overview["analytics"]["totalEvents"] == 1

    forbidden = client.post(
        "/events/",
        json={"title": "X", "description": "Y", "date": when, "location": "Lounge"},
        headers=resident_headers,
    )
    assert forbidden.status_code == 403


def test_create_event_requires_a_place(client, admin_headers):
    r = client.post(
        "/events/",
        json={"title": "Nowhere", "description": "x", "date": "2026-12-01T10:00:00"},
        headers=admin_headers,
    )
    assert r.status_code == 422


def test_feedback_routes(client, admin_headers, resident_headers):
    when = (datetime.now() + timedelta(days=3)).isoformat()
    event_id = client.post(
        "/events/",
        json={"title": "Yoga", "description": "Stretch", "date": when, "facility": "Garden"},
        headers=admin_headers,
    ).json()["id"]

    r = client.post(
        f"/events/{event_id}/feedback",
        json={"rating": 3, "comment": "absolutely amazing"},
        headers=resident_headers,
    )
    assert r.status_code == 201
    assert r.json()["sentiment"] == "positive"
    assert r.json()["eventId"] == event_id
    assert r.json()["source"] == "Web"

    missing = client.post(
        "/events/nope/feedback", json={"rating": 3, "comment": "hm"}, headers=resident_headers
    )
    assert missing.status_code == 404

    invalid = client.post(
        f"/events/{event_id}/feedback", json={"rating": 6, "comment": "hm"}, headers=resident_headers
    )
    assert invalid.status_code == 422

    voice = client.post(
        "/events/feedback/voice",
        json={"voiceInput": "I give it 2 stars, boring"},
        headers=resident_headers,
    )
    assert voice.status_code == 201
    assert voice.json()["rating"] == 2
    assert voice.json()["eventId"] is None
    assert voice.json()["sentiment"] == "negative"

    listed = client.get("/events/feedback", headers=admin_headers).json()
    assert len(listed) == 2

    report = client.get("/events/analytics", headers=admin_headers).json()
    assert report["analytics"]["feedbackSummary"]["total"] == 2
    assert len(report["pastEvents"]) == 5


def test_suggestion_routes(client, admin_headers):
    suggestions = client.get("/events/suggestions", headers=admin_headers).json()
    assert suggestions
    first = suggestions[0]

    r = client.post(f"/events/suggestions/{first['id']}/approve", headers=admin_headers)
    assert r.status_code == 201
    assert r.json()["status"] == "Approved"
    assert r.json()["title"] == first["title"]

    again = client.post(f"/events/suggestions/{first['id']}/approve", headers=admin_headers)
    assert again.status_code == 404


def test_promotion_route(client, admin_headers):
    when = (datetime.now() + timedelta(days=3)).isoformat()
    event_id = client.post(
        "/events/",
        json={"title": "Quiz", "description": "Trivia", "date": when, "facility": "Lounge"},
        headers=admin_headers,
    ).json()["id"]

    r = client.post(f"/events/{event_id}/promotions", headers=admin_headers)
    assert r.status_code == 200
    assert "QUIZ" in r.json()["bulletin"]

    assert client.post("/events/missing/promotions", headers=admin_headers).status_code == 404
