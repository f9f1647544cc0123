# app/ticket/repository.py
from __future__ import annotations

from app.core.repository import SqlRepository
from app.ticket.models import Technician, Ticket, TicketStatus
from app.voice.classifier import IssueType


class TicketRepository(SqlRepository[Ticket]):
    model = Ticket

    def list(self, status: TicketStatus | None = None) -> list[Ticket]:
        query = self.db.query(Ticket)
        if status is not None:
            query = query.filter(Ticket.status == status)
        return query.order_by(Ticket.created_at, Ticket.id).all()

    def find_by_owner(self, user_id: int) -> list[Ticket]:
        return (
            self.db.query(Ticket)
            .filter(Ticket.user_id == user_id)
            .order_by(Ticket.created_at, Ticket.id)
            .all()
        )


class TechnicianRepository(SqlRepository[Technician]):
    model = Technician

    def list_available(self, specialization: IssueType | None = None) -> list[Technician]:
        query = self.db.query(Technician).filter(Technician.available.is_(True))
        if specialization is not None:
            query = query.filter(Technician.specialization == specialization)
        return query.order_by(Technician.id).all()

    def claim_if_available(self, technician_id: int) -> bool:
        """Atomically flip a technician to unavailable; False if someone else got there first."""
        claimed = (
            self.db.query(Technician)
            .filter(Technician.id == technician_id, Technician.available.is_(True))
            .update({Technician.available: False}, synchronize_session=False)
        )
        self.db.commit()
        return claimed == 1

    def mark_unavailable(self, technician: Technician) -> Technician:
        return self.update(technician, available=False)

    def release(self, technician_id: int) -> None:
        self.db.query(Technician).filter(Technician.id == technician_id).update(
            {Technician.available: True}, synchronize_session=False
        )
        self.db.commit()
