# app/event/models.py
import enum

from sqlalchemy import JSON, Column, Date, DateTime, ForeignKey, Integer, String, Text
from app.core.database import Base, enum_column
from app.core.schemas import Source


class Sentiment(str, enum.Enum):
    POSITIVE = "positive"
    NEUTRAL = "neutral"
    NEGATIVE = "negative"


class Event(Base):
    __tablename__ = "events"

    id = Column(String, primary_key=True, index=True)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=False, default="")
    date = Column(DateTime, nullable=False, index=True)
    location = Column(String, nullable=True)
    facility = Column(String, nullable=True)
    category = Column(String, nullable=False, default="General")
    status = Column(String, nullable=False, default="Planned")
    estimated_attendance = Column(Integer, nullable=False, default=20)
    created_at = Column(DateTime, nullable=False)
    created_by = Column(String, nullable=True)
    promotions = Column(JSON, nullable=False, default=dict)


class EventSuggestion(Base):
    __tablename__ = "event_suggestions"

    id = Column(String, primary_key=True, index=True)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=False)
    facility = Column(String, nullable=False)
    reason = Column(String, nullable=False)
    estimated_attendance = Column(Integer, nullable=False)
    suggested_date = Column(Date, nullable=False)
    category = Column(String, nullable=False)


class Feedback(Base):
    __tablename__ = "feedback"

    id = Column(String, primary_key=True, index=True)
    # NULL means general feedback that is not about a particular event
    event_id = Column(String, ForeignKey("events.id"), nullable=True, index=True)
    user_id = Column(Integer, nullable=False, index=True)
    rating = Column(Integer, nullable=False)
    comment = Column(Text, nullable=False)
    source = Column(enum_column(Source), nullable=False, default=Source.VOICE)
    sentiment = Column(enum_column(Sentiment), nullable=False)
    created_at = Column(DateTime, nullable=False)
