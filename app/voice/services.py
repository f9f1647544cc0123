# app/voice/services.py
"""Voice command orchestration.

Resolves the intent of a transcript (optionally with help from an external
NLP provider) and dispatches it to the ticket or event store.
"""

from __future__ import annotations

from dataclasses import dataclass

from app.core.deps import AuthContext
from app.core.errors import ValidationError
from app.core.logging import logger
from app.core.schemas import Source
from app.event.schemas import EventOut, FeedbackOut
from app.event.services import EventStore
from app.ticket.models import Ticket, TicketStatus
from app.ticket.schemas import TicketOut
from app.ticket.services import TicketStore
from app.voice.intents import (
    ExtractedEntities,
    Intent,
    detect_basic_intent,
    extract_basic_entities,
)
from app.voice.nlp import NLPProvider
from app.voice.schemas import VoiceCommandData, VoiceCommandResponse, VoiceContext

LOCAL_CONFIDENCE = 0.7
DEFAULT_FEEDBACK_RATING = 3
MAX_LISTED_EVENTS = 3

HELP_MESSAGE = (
    "I can help you with: reporting issues or complaints, checking ticket status, "
    "giving event feedback, and finding information about upcoming events. "
    "Just speak naturally!"
)
UNKNOWN_MESSAGE = (
    "I heard you, but I'm not sure how to help with that. Try asking about ticket "
    "status, reporting a complaint, giving event feedback, or asking about upcoming events."
)
ERROR_MESSAGE = "Sorry, I encountered an error processing your request. Please try again."

STATUS_MESSAGES = {
    TicketStatus.OPEN: "We have received your request and will assign a technician soon.",
    TicketStatus.ASSIGNED: "A technician has been assigned and will contact you shortly.",
    TicketStatus.IN_PROGRESS: "Our technician is currently working on your request.",
    TicketStatus.RESOLVED: (
        "Your request has been completed. Please let us know if you need any follow-up."
    ),
}


@dataclass
class ResolvedCommand:
    intent: Intent
    entities: ExtractedEntities
    text: str
    confidence: float


@dataclass
class Outcome:
    action: str
    message: str
    data: VoiceCommandData


class VoiceCommandOrchestrator:
    def __init__(
        self,
        tickets: TicketStore,
        events: EventStore,
        provider: NLPProvider | None = None,
        min_confidence: float = 0.6,
    ):
        self.tickets = tickets
        self.events = events
        self.provider = provider
        self.min_confidence = min_confidence

    def process(
        self, transcript: str, user: AuthContext, context: VoiceContext | None = None
    ) -> VoiceCommandResponse:
        if not transcript or not transcript.strip():
            raise ValidationError("Voice input is required")
        context = context or VoiceContext()

        try:
            command = self.resolve(transcript, user, context)
            outcome = self.dispatch(command, user, context)
        except Exception:
            logger.exception(f"Error processing voice command for user {user.user_id}")
            return VoiceCommandResponse(
                success=False, action="error", response=ERROR_MESSAGE, confidence=0.0
            )

        logger.info(
            f"Voice interaction - user: {user.email}, action: {outcome.action}, "
            f"intent: {command.intent.value}"
        )
        return VoiceCommandResponse(
            success=True,
            action=outcome.action,
            response=outcome.message,
            confidence=command.confidence,
            intent=command.intent.value,
            data=outcome.data,
        )

    def resolve(
        self, transcript: str, user: AuthContext, context: VoiceContext
    ) -> ResolvedCommand:
        """Pick the provider's reading when it is confident, the local one otherwise."""
        local = ResolvedCommand(
            intent=detect_basic_intent(transcript),
            entities=extract_basic_entities(transcript),
            text=transcript,
            confidence=LOCAL_CONFIDENCE,
        )
        if self.provider is None:
            return local

        provider_context = {
            "userId": user.user_id,
            "userRole": user.role,
            "location": context.location or user.unit_number,
            "currentPage": context.current_page,
        }
        try:
            result = self.provider.classify(transcript, provider_context)
        except Exception as e:
            logger.warning(f"NLP provider failed, using local rules: {e}")
            return local

        if not result.success:
            logger.warning(f"NLP provider unsuccessful, using local rules: {result.error}")
            return local

        intent = Intent.parse(result.intent)
        confidence = result.confidence or 0.0
        if intent is None or confidence < self.min_confidence:
            logger.info(
                f"NLP provider intent {result.intent!r} at {confidence} not used, "
                "falling back to local rules"
            )
            return local

        text = result.processed_text or transcript
        entities = extract_basic_entities(text).merged_with(
            ExtractedEntities.from_mapping(result.entities)
        )
        return ResolvedCommand(intent=intent, entities=entities, text=text, confidence=confidence)

    def dispatch(
        self, command: ResolvedCommand, user: AuthContext, context: VoiceContext
    ) -> Outcome:
        if command.intent == Intent.CHECK_TICKET_STATUS:
            return self._ticket_lookup(command, user)
        if command.intent == Intent.CREATE_COMPLAINT:
            return self._create_ticket(command, user, context)
        if command.intent == Intent.EVENT_FEEDBACK:
            return self._event_feedback(command, user)
        if command.intent == Intent.EVENT_INQUIRY:
            return self._event_inquiry()
        if command.intent == Intent.HELP_REQUEST:
            return Outcome("help", HELP_MESSAGE, VoiceCommandData())
        return self._general_inquiry(command, user)

    def _ticket_lookup(self, command: ResolvedCommand, user: AuthContext) -> Outcome:
        ticket_id = command.entities.ticket_id
        if ticket_id:
            ticket = self.tickets.get_ticket(ticket_id)
            if ticket and (user.is_admin or ticket.user_id == user.user_id):
                message = (
                    f"Ticket #{ticket_id} is currently {ticket.status.value}. "
                    f"{STATUS_MESSAGES[ticket.status]}"
                )
                return Outcome("ticket_status", message, VoiceCommandData(ticket=_ticket_out(ticket)))
            message = f"I couldn't find ticket #{ticket_id} or you don't have access to it."
            return Outcome("ticket_status", message, VoiceCommandData())

        tickets = (
            self.tickets.list_tickets()
            if user.is_admin
            else self.tickets.get_user_tickets(user.user_id)
        )
        open_tickets = [t for t in tickets if t.status != TicketStatus.RESOLVED]
        if open_tickets:
            follow_up = "Would you like me to check a specific ticket number?"
        else:
            follow_up = "All your tickets are resolved."
        message = f"You have {len(open_tickets)} open tickets. {follow_up}"
        return Outcome(
            "ticket_inquiry",
            message,
            VoiceCommandData(tickets=[_ticket_out(t) for t in open_tickets]),
        )

    def _create_ticket(
        self, command: ResolvedCommand, user: AuthContext, context: VoiceContext
    ) -> Outcome:
        fallback_location = command.entities.location or context.location or user.unit_number
        ticket = self.tickets.create_from_voice(
            command.text,
            user.user_id,
            fallback_location,
            source=Source.VOICE,
            priority=command.entities.priority,
        )
        if ticket.technician:
            assignment = f"Assigned to {ticket.technician}."
        else:
            assignment = "A technician will be assigned shortly."
        message = (
            f"Complaint received! Your ticket ID is #{ticket.id}. "
            f"Priority: {ticket.priority.value}. {assignment} "
            f'You can check status anytime by saying "Check ticket {ticket.id}".'
        )
        return Outcome("create_ticket", message, VoiceCommandData(ticket=_ticket_out(ticket)))

    def _event_feedback(self, command: ResolvedCommand, user: AuthContext) -> Outcome:
        rating = command.entities.rating
        feedback = self.events.collect_feedback(
            None,
            user.user_id,
            rating or DEFAULT_FEEDBACK_RATING,
            command.text,
            Source.VOICE,
        )
        stars = f"{feedback.rating}-star " if rating else ""
        message = (
            f"Thank you for your {stars}feedback! "
            "Your input helps us improve our community events."
        )
        return Outcome(
            "event_feedback",
            message,
            VoiceCommandData(feedback=FeedbackOut.model_validate(feedback)),
        )

    def _event_inquiry(self) -> Outcome:
        upcoming = self.events.upcoming_events()
        if not upcoming:
            message = (
                "There are no upcoming events scheduled at the moment. "
                "Check back later for new community activities!"
            )
            return Outcome("event_inquiry", message, VoiceCommandData(events=[]))

        following = upcoming[0]
        message = (
            f'The next event is "{following.title}" on '
            f"{following.date:%B} {following.date.day}, {following.date.year}. "
            f"{following.description}"
        )
        events = [EventOut.model_validate(e) for e in upcoming[:MAX_LISTED_EVENTS]]
        return Outcome("event_inquiry", message, VoiceCommandData(events=events))

    def _general_inquiry(self, command: ResolvedCommand, user: AuthContext) -> Outcome:
        lowered = command.text.lower()
        if "ticket" in lowered or "status" in lowered:
            return self._ticket_lookup(command, user)
        if "what can you do" in lowered:
            return Outcome("help", HELP_MESSAGE, VoiceCommandData())
        return Outcome("unknown", UNKNOWN_MESSAGE, VoiceCommandData())


def _ticket_out(ticket: Ticket) -> TicketOut:
    return TicketOut.model_validate(ticket)
