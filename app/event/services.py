# app/event/services.py
from collections import Counter
from collections.abc import Callable
from datetime import datetime

from sqlalchemy.orm import Session

from app.core.clock import to_naive_utc, utcnow
from app.core.ids import next_id
from app.core.logging import logger
from app.core.schemas import Source
from app.event.models import Event, EventSuggestion, Feedback, Sentiment
from app.event.promotions import build_promotions
from app.event.repository import EventRepository, FeedbackRepository, SuggestionRepository
from app.event.schemas import (
    EventAnalytics,
    EventCreate,
    FacilityCount,
    FeedbackSummary,
    SuggestionOut,
)
from app.event.sentiment import analyze_sentiment
from app.event.suggestions import (
    DEFAULT_FACILITIES,
    PAST_EVENTS,
    Facility,
    PastEvent,
    build_suggestions,
)

DEFAULT_ATTENDANCE = 20
MIN_RATING = 1
MAX_RATING = 5


class EventStore:
    """Community events, pending suggestions and resident feedback."""

    def __init__(
        self,
        events: EventRepository,
        suggestions: SuggestionRepository,
        feedback: FeedbackRepository,
        facilities: tuple[Facility, ...] = DEFAULT_FACILITIES,
        past_events: tuple[PastEvent, ...] = PAST_EVENTS,
        now: Callable[[], datetime] = utcnow,
    ):
        self.events = events
        self.suggestions = suggestions
        self.feedback = feedback
        self.facilities = facilities
        self.past = past_events
        self.now = now

    def create_event(self, data: EventCreate, created_by: str | None = None) -> Event:
        event = Event(
            id=next_id(),
            title=data.title,
            description=data.description,
            date=to_naive_utc(data.date),
            location=data.location or data.facility,
            facility=data.facility or data.location,
            category=data.category or "General",
            status=data.status or "Planned",
            estimated_attendance=data.estimated_attendance or DEFAULT_ATTENDANCE,
            created_at=self.now(),
            created_by=created_by,
            promotions={},
        )
        self.events.create(event)
        logger.info(f"Event {event.id} '{event.title}' created by {created_by}")
        return event

    def get_event(self, event_id: str) -> Event | None:
        return self.events.find_by_id(event_id)

    def list_events(self) -> list[Event]:
        return self.events.list()

    def upcoming_events(self) -> list[Event]:
        return self.events.list_after(self.now())

    def generate_suggestions(self) -> list[SuggestionOut]:
        """Replace the pending suggestions with a fresh set.

        Returns detached copies, so a list kept from an earlier call stays readable.
        """
        drafts = build_suggestions(self.now().date(), self.facilities, self.past)
        rows = [
            EventSuggestion(
                id=next_id(),
                title=d.title,
                description=d.description,
                facility=d.facility,
                reason=d.reason,
                estimated_attendance=d.estimated_attendance,
                suggested_date=d.suggested_date,
                category=d.category,
            )
            for d in drafts
        ]
        logger.info(f"Generated {len(rows)} event suggestions")
        return [SuggestionOut.model_validate(row) for row in self.suggestions.replace_all(rows)]

    def list_suggestions(self) -> list[EventSuggestion]:
        return self.suggestions.list()

    def approve_suggestion(
        self, suggestion_id: str, approved_by: str | None = None
    ) -> Event | None:
        suggestion = self.suggestions.find_by_id(suggestion_id)
        if not suggestion:
            return None

        event = Event(
            id=next_id(),
            title=suggestion.title,
            description=suggestion.description,
            date=datetime.combine(suggestion.suggested_date, datetime.min.time()),
            location=suggestion.facility,
            facility=suggestion.facility,
            category=suggestion.category,
            status="Approved",
            estimated_attendance=suggestion.estimated_attendance,
            created_at=self.now(),
            created_by=approved_by,
            promotions={},
        )
        self.events.create(event)
        self.suggestions.delete(suggestion)
        logger.info(f"Suggestion {suggestion_id} approved as event {event.id}")
        return event

    def generate_promotions(self, event_id: str) -> dict[str, str] | None:
        event = self.get_event(event_id)
        if not event:
            return None
        promotions = build_promotions(event)
        self.events.update(event, promotions=promotions)
        return promotions

    def collect_feedback(
        self,
        event_id: str | None,
        user_id: int,
        rating: int,
        comment: str,
        source: Source = Source.VOICE,
    ) -> Feedback:
        rating = min(max(int(rating), MIN_RATING), MAX_RATING)
        feedback = Feedback(
            id=next_id(),
            event_id=event_id,
            user_id=user_id,
            rating=rating,
            comment=comment,
            source=source,
            sentiment=analyze_sentiment(comment, rating),
            created_at=self.now(),
        )
        self.feedback.create(feedback)
        logger.info(
            f"Feedback {feedback.id} from user {user_id}: {rating} stars, {feedback.sentiment.value}"
        )
        return feedback

    def list_feedback(self) -> list[Feedback]:
        return self.feedback.list()

    def past_events(self) -> tuple[PastEvent, ...]:
        return self.past

    def analytics(self) -> EventAnalytics:
        past = self.past
        average_attendance = round(sum(e.attendance for e in past) / len(past)) if past else 0
        average_rating = round(sum(e.rating for e in past) / len(past), 1) if past else 0.0

        facility_counts = Counter(e.facility for e in past)
        popular = [
            FacilityCount(facility=name, count=count)
            for name, count in facility_counts.most_common(3)
        ]

        sentiments = Counter(f.sentiment for f in self.feedback.list())
        summary = FeedbackSummary(
            total=sum(sentiments.values()),
            positive=sentiments[Sentiment.POSITIVE],
            neutral=sentiments[Sentiment.NEUTRAL],
            negative=sentiments[Sentiment.NEGATIVE],
        )

        return EventAnalytics(
            total_events=len(self.events.list()),
            upcoming_events=len(self.upcoming_events()),
            past_events=len(past),
            average_attendance=average_attendance,
            average_rating=average_rating,
            popular_facilities=popular,
            feedback_summary=summary,
        )


def get_event_store(db: Session) -> EventStore:
    return EventStore(EventRepository(db), SuggestionRepository(db), FeedbackRepository(db))
