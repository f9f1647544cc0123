# app/event/routes.py
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from app.core.database import get_db
from app.core.deps import AuthContext, get_current_user, require_admin
from app.core.schemas import Source
from app.event.schemas import (
    AnalyticsReport,
    EventCreate,
    EventOut,
    EventOverview,
    FeedbackCreate,
    FeedbackOut,
    SuggestionOut,
    VoiceFeedbackCreate,
)
from app.event.services import EventStore, get_event_store
from app.voice.intents import extract_rating
router = APIRouter(prefix="/events", tags=["Events"])

DEFAULT_VOICE_RATING = 3


def event_store(db: Session = Depends(get_db)) -> EventStore:
    return get_event_store(db)


@router.get("/", response_model=EventOverview)
def list_all(
    _: AuthContext = Depends(get_current_user),
    store: EventStore = Depends(event_store),
):
    return {
        "events": store.list_events(),
        "upcoming_events": store.upcoming_events(),
        "analytics": store.analytics(),
    }


@router.post("/", response_model=EventOut, status_code=201)
def create(
    payload: EventCreate,
    user: AuthContext = Depends(require_admin),
    store: EventStore = Depends(event_store),
):
    return store.create_event(payload, created_by=user.email)


@router.get("/upcoming", response_model=list[EventOut])
def upcoming(
    _: AuthContext = Depends(get_current_user),
    store: EventStore = Depends(event_store),
):
    return store.upcoming_events()


@router.get("/suggestions", response_model=list[SuggestionOut])
def suggestions(
    _: AuthContext = Depends(require_admin),
    store: EventStore = Depends(event_store),
):
    return store.generate_suggestions()


@router.post("/suggestions/{suggestion_id}/approve", response_model=EventOut, status_code=201)
def approve_suggestion(
    suggestion_id: str,
    user: AuthContext = Depends(require_admin),
    store: EventStore = Depends(event_store),
):
    event = store.approve_suggestion(suggestion_id, approved_by=user.email)
    if not event:
        raise HTTPException(status_code=404, detail="Event suggestion not found")
    return event


@router.get("/analytics", response_model=AnalyticsReport)
def analytics(
    _: AuthContext = Depends(require_admin),
    store: EventStore = Depends(event_store),
):
    return {
        "analytics": store.analytics(),
        "past_events": store.past_events(),
        "feedback": store.list_feedback(),
    }


@router.get("/feedback", response_model=list[FeedbackOut])
def all_feedback(
    _: AuthContext = Depends(require_admin),
    store: EventStore = Depends(event_store),
):
    return store.list_feedback()


@router.post("/feedback/voice", response_model=FeedbackOut, status_code=201)
def voice_feedback(
    payload: VoiceFeedbackCreate,
    user: AuthContext = Depends(get_current_user),
    store: EventStore = Depends(event_store),
):
    rating = extract_rating(payload.voice_input) or DEFAULT_VOICE_RATING
    return store.collect_feedback(None, user.user_id, rating, payload.voice_input, Source.VOICE)


@router.post("/{event_id}/promotions", response_model=dict[str, str])
def promotions(
    event_id: str,
    _: AuthContext = Depends(require_admin),
    store: EventStore = Depends(event_store),
):
    generated = store.generate_promotions(event_id)
    if not generated:
        raise HTTPException(status_code=404, detail="Event not found")
    return generated


@router.post("/{event_id}/feedback", response_model=FeedbackOut, status_code=201)
def feedback(
    event_id: str,
    payload: FeedbackCreate,
    user: AuthContext = Depends(get_current_user),
    store: EventStore = Depends(event_store),
):
    if not store.get_event(event_id):
        raise HTTPException(status_code=404, detail="Event not found")
    return store.collect_feedback(
        event_id, user.user_id, payload.rating, payload.comment, payload.source
    )
