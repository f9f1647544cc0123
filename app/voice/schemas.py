# app/voice/schemas.py
from pydantic import BaseModel, Field, model_serializer

from app.core.schemas import CamelModel
from app.event.schemas import EventOut, FeedbackOut
from app.ticket.schemas import TicketOut


class VoiceContext(CamelModel):
    location: str | None = None
    current_page: str | None = None


class VoiceCommandRequest(CamelModel):
    voice_input: str
    context: VoiceContext = Field(default_factory=VoiceContext)


class VoiceCommandData(BaseModel):
    """Payload of a voice reply; only the parts the action produced are sent."""

    ticket: TicketOut | None = None
    tickets: list[TicketOut] | None = None
    events: list[EventOut] | None = None
    feedback: FeedbackOut | None = None

    @model_serializer(mode="wrap")
    def drop_unset(self, handler):
        return {key: value for key, value in handler(self).items() if value is not None}


class VoiceCommandResponse(BaseModel):
    success: bool
    action: str
    response: str
    confidence: float
    intent: str | None = None
    data: VoiceCommandData = Field(default_factory=VoiceCommandData)
