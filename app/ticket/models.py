# app/ticket/models.py
import enum

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, Text
from app.core.database import Base, enum_column
from app.core.schemas import Source
from app.voice.classifier import IssueType, Priority


class TicketStatus(str, enum.Enum):
    OPEN = "Open"
    ASSIGNED = "Assigned"
    IN_PROGRESS = "In Progress"
    RESOLVED = "Resolved"

    @property
    def rank(self) -> int:
        return list(TicketStatus).index(self)


class Technician(Base):
    __tablename__ = "technicians"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    specialization = Column(enum_column(IssueType), nullable=False, index=True)
    available = Column(Boolean, nullable=False, default=True)


class Ticket(Base):
    __tablename__ = "tickets"

    id = Column(String, primary_key=True, index=True)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=False)
    issue_type = Column(enum_column(IssueType), nullable=False, default=IssueType.GENERAL)
    priority = Column(enum_column(Priority), nullable=False, default=Priority.P3)
    status = Column(enum_column(TicketStatus), nullable=False, default=TicketStatus.OPEN, index=True)
    location = Column(String, nullable=False)
    user_id = Column(Integer, nullable=False, index=True)
    technician = Column(String, nullable=True)
    technician_id = Column(Integer, ForeignKey("technicians.id"), nullable=True)
    source = Column(enum_column(Source), nullable=False, default=Source.VOICE)
    created_at = Column(DateTime, nullable=False)
    assigned_at = Column(DateTime, nullable=True)
    resolved_at = Column(DateTime, nullable=True)

    def __repr__(self) -> str:
        return f"<Ticket(id={self.id}, status='{self.status.value}')>"
