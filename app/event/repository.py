# app/event/repository.py
from __future__ import annotations

from datetime import datetime

from app.core.repository import SqlRepository
from app.event.models import Event, EventSuggestion, Feedback


class EventRepository(SqlRepository[Event]):
    model = Event

    def list(self) -> list[Event]:
        return self.db.query(Event).order_by(Event.created_at, Event.id).all()

    def list_after(self, moment: datetime) -> list[Event]:
        return (
            self.db.query(Event)
            .filter(Event.date > moment)
            .order_by(Event.date, Event.id)
            .all()
        )


class SuggestionRepository(SqlRepository[EventSuggestion]):
    model = EventSuggestion

    def replace_all(self, suggestions: list[EventSuggestion]) -> list[EventSuggestion]:
        self.db.query(EventSuggestion).delete(synchronize_session=False)
        self.db.add_all(suggestions)
        self.db.commit()
        return self.list()


class FeedbackRepository(SqlRepository[Feedback]):
    model = Feedback

    def list(self) -> list[Feedback]:
        return self.db.query(Feedback).order_by(Feedback.created_at, Feedback.id).all()

