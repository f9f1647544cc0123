# app/voice/routes.py
from functools import lru_cache

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session
from app.core.config import get_settings
from app.core.database import get_db
from app.core.deps import AuthContext, get_current_user
from app.event.services import get_event_store
from app.ticket.services import get_ticket_store
from app.voice.nlp import NLPProvider, build_nlp_provider
from app.voice.schemas import VoiceCommandRequest, VoiceCommandResponse
from app.voice.services import VoiceCommandOrchestrator
router = APIRouter(prefix="/voice", tags=["Voice"])


@lru_cache
def get_nlp_provider() -> NLPProvider | None:
    return build_nlp_provider(get_settings())


def get_orchestrator(
    db: Session = Depends(get_db),
    provider: NLPProvider | None = Depends(get_nlp_provider),
) -> VoiceCommandOrchestrator:
    return VoiceCommandOrchestrator(
        get_ticket_store(db),
        get_event_store(db),
        provider=provider,
        min_confidence=get_settings().NLP_MIN_CONFIDENCE,
    )


@router.post("/process", response_model=VoiceCommandResponse)
def process(
    payload: VoiceCommandRequest,
    response: Response,
    user: AuthContext = Depends(get_current_user),
    orchestrator: VoiceCommandOrchestrator = Depends(get_orchestrator),
):
    result = orchestrator.process(payload.voice_input, user, payload.context)
    if not result.success:
        response.status_code = 500
    return result
