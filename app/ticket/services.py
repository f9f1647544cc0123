# app/ticket/services.py
from collections.abc import Callable
from datetime import datetime

from sqlalchemy.orm import Session

from app.core.clock import utcnow
from app.core.errors import InvalidTransitionError
from app.core.ids import next_id
from app.core.logging import logger
from app.core.schemas import Source
from app.ticket.models import Technician, Ticket, TicketStatus
from app.ticket.repository import TechnicianRepository, TicketRepository
from app.ticket.schemas import IssueTrend, TicketStats
from app.voice.classifier import Priority, classify

HIGH_PRIORITIES = (Priority.P1, Priority.P2)


class TicketStore:
    """Ticket lifecycle and technician allocation.

    Status only moves forward through Open, Assigned, In Progress, Resolved.
    Steps may be skipped; moving backwards raises InvalidTransitionError.
    """

    def __init__(
        self,
        tickets: TicketRepository,
        technicians: TechnicianRepository,
        now: Callable[[], datetime] = utcnow,
    ):
        self.tickets = tickets
        self.technicians = technicians
        self.now = now

    def create_from_voice(
        self,
        transcript: str,
        user_id: int,
        fallback_location: str | None = None,
        source: Source = Source.VOICE,
        priority: Priority | None = None,
    ) -> Ticket:
        result = classify(transcript, fallback_location)
        ticket = Ticket(
            id=next_id(),
            title=result.title,
            description=transcript,
            issue_type=result.issue_type,
            priority=priority or result.priority,
            status=TicketStatus.OPEN,
            location=result.location,
            user_id=user_id,
            source=source,
            created_at=self.now(),
        )
        self.tickets.create(ticket)
        logger.info(
            f"Ticket {ticket.id} created: {ticket.issue_type.value}/{ticket.priority.value} "
            f"at '{ticket.location}' for user {user_id}"
        )
        self.auto_assign(ticket)
        return ticket

    def auto_assign(self, ticket: Ticket) -> Technician | None:
        """Give the ticket to the first free technician with a matching specialization."""
        for technician in self.technicians.list_available(ticket.issue_type):
            if not self.technicians.claim_if_available(technician.id):
                # claimed by a concurrent request between the read and the update
                continue
            self.tickets.update(
                ticket,
                technician=technician.name,
                technician_id=technician.id,
                status=TicketStatus.ASSIGNED,
                assigned_at=self.now(),
            )
            logger.info(f"Ticket {ticket.id} auto-assigned to {technician.name}")
            return technician

        logger.info(f"No {ticket.issue_type.value} technician free for ticket {ticket.id}")
        return None

    def get_ticket(self, ticket_id: str) -> Ticket | None:
        return self.tickets.find_by_id(ticket_id)

    def get_user_tickets(self, user_id: int) -> list[Ticket]:
        return self.tickets.find_by_owner(user_id)

    def list_tickets(self, status: TicketStatus | None = None) -> list[Ticket]:
        return self.tickets.list(status)

    def update_status(self, ticket_id: str, status: TicketStatus) -> Ticket | None:
        ticket = self.get_ticket(ticket_id)
        if not ticket:
            return None
        if status.rank < ticket.status.rank:
            raise InvalidTransitionError(
                f"Ticket #{ticket.id} cannot move from {ticket.status.value} back to {status.value}"
            )
        if status == ticket.status:
            return ticket

        fields = {"status": status}
        if status == TicketStatus.RESOLVED:
            fields["resolved_at"] = self.now()
            if ticket.technician_id is not None:
                self.technicians.release(ticket.technician_id)
        self.tickets.update(ticket, **fields)
        logger.info(f"Ticket {ticket.id} moved to {status.value}")
        return ticket

    def assign_manually(self, ticket_id: str, technician_id: int) -> Ticket | None:
        ticket = self.get_ticket(ticket_id)
        technician = self.technicians.find_by_id(technician_id)
        if not ticket or not technician:
            return None
        if ticket.status.rank > TicketStatus.ASSIGNED.rank:
            raise InvalidTransitionError(
                f"Ticket #{ticket.id} is already {ticket.status.value} and cannot be reassigned"
            )

        # the previous technician, if any, is not released
        self.tickets.update(
            ticket,
            technician=technician.name,
            technician_id=technician.id,
            status=TicketStatus.ASSIGNED,
            assigned_at=self.now(),
        )
        self.technicians.mark_unavailable(technician)
        logger.info(f"Ticket {ticket.id} manually assigned to {technician.name}")
        return ticket

    def list_technicians(self) -> list[Technician]:
        return self.technicians.list()

    def available_technicians(self) -> list[Technician]:
        return self.technicians.list_available()

    def stats(self) -> TicketStats:
        tickets = self.tickets.list()

        def count(status: TicketStatus) -> int:
            return sum(1 for t in tickets if t.status == status)

        return TicketStats(
            total=len(tickets),
            open=count(TicketStatus.OPEN),
            assigned=count(TicketStatus.ASSIGNED),
            in_progress=count(TicketStatus.IN_PROGRESS),
            resolved=count(TicketStatus.RESOLVED),
            high_priority=sum(
                1
                for t in tickets
                if t.priority in HIGH_PRIORITIES and t.status != TicketStatus.RESOLVED
            ),
        )

    def issue_trends(self) -> dict[str, IssueTrend]:
        trends: dict[str, IssueTrend] = {}
        for ticket in self.tickets.list():
            trend = trends.setdefault(
                ticket.issue_type.value, IssueTrend(count=0, locations={})
            )
            trend.count += 1
            trend.locations[ticket.location] = trend.locations.get(ticket.location, 0) + 1
        return trends


def get_ticket_store(db: Session) -> TicketStore:
    return TicketStore(TicketRepository(db), TechnicianRepository(db))
