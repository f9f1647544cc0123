# app/ticket/schemas.py
from datetime import datetime

from pydantic import Field

from app.core.schemas import CamelModel, Source
from app.ticket.models import TicketStatus
from app.voice.classifier import IssueType, Priority


class VoiceTicketCreate(CamelModel):
    voice_input: str = Field(..., min_length=1)
    location: str | None = None


class TicketStatusUpdate(CamelModel):
    status: TicketStatus


class TicketAssign(CamelModel):
    technician_id: int


class TechnicianOut(CamelModel):
    id: int
    name: str
    specialization: IssueType
    available: bool


class TicketOut(CamelModel):
    id: str
    title: str
    description: str
    issue_type: IssueType
    priority: Priority
    status: TicketStatus
    location: str
    user_id: int
    technician: str | None = None
    technician_id: int | None = None
    source: Source
    created_at: datetime
    assigned_at: datetime | None = None
    resolved_at: datetime | None = None


class TicketStats(CamelModel):
    total: int
    open: int
    assigned: int
    in_progress: int
    resolved: int
    high_priority: int


class IssueTrend(CamelModel):
    count: int
    locations: dict[str, int]


class TicketListOut(CamelModel):
    tickets: list[TicketOut]
    stats: TicketStats


class TicketStatsOverview(CamelModel):
    stats: TicketStats
    trends: dict[str, IssueTrend]
