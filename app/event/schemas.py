# app/event/schemas.py
from datetime import date, datetime

from pydantic import Field, model_validator

from app.core.schemas import CamelModel, Source
from app.event.models import Sentiment


class EventCreate(CamelModel):
    title: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    date: datetime
    location: str | None = None
    facility: str | None = None
    category: str | None = None
    status: str | None = None
    estimated_attendance: int | None = Field(default=None, ge=0)

    @model_validator(mode="after")
    def require_place(self):
        if not (self.location or self.facility):
            raise ValueError("location or facility is required")
        return self


class EventOut(CamelModel):
    id: str
    title: str
    description: str
    date: datetime
    location: str | None = None
    facility: str | None = None
    category: str
    status: str
    estimated_attendance: int
    created_at: datetime
    created_by: str | None = None
    promotions: dict[str, str] = Field(default_factory=dict)


class SuggestionOut(CamelModel):
    id: str
    title: str
    description: str
    facility: str
    reason: str
    estimated_attendance: int
    suggested_date: date
    category: str


class FeedbackCreate(CamelModel):
    rating: int = Field(..., ge=1, le=5)
    comment: str = Field(..., min_length=1)
    source: Source = Source.WEB


class VoiceFeedbackCreate(CamelModel):
    voice_input: str = Field(..., min_length=1)


class FeedbackOut(CamelModel):
    id: str
    event_id: str | None = None
    user_id: int
    rating: int
    comment: str
    source: Source
    sentiment: Sentiment
    created_at: datetime


class PastEventOut(CamelModel):
    name: str
    attendance: int
    rating: float
    engagement: str
    facility: str


class FacilityCount(CamelModel):
    facility: str
    count: int


class FeedbackSummary(CamelModel):
    total: int
    positive: int
    neutral: int
    negative: int


class EventAnalytics(CamelModel):
    total_events: int
    upcoming_events: int
    past_events: int
    average_attendance: int
    average_rating: float
    popular_facilities: list[FacilityCount]
    feedback_summary: FeedbackSummary


class EventOverview(CamelModel):
    events: list[EventOut]
    upcoming_events: list[EventOut]
    analytics: EventAnalytics


class AnalyticsReport(CamelModel):
    analytics: EventAnalytics
    past_events: list[PastEventOut]
    feedback: list[FeedbackOut]
