# app/ticket/routes.py
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session
from app.core.database import get_db
from app.core.deps import AuthContext, get_current_user, require_admin
from app.core.schemas import Source
from app.ticket.models import TicketStatus
from app.ticket.schemas import (
    TechnicianOut,
    TicketAssign,
    TicketListOut,
    TicketOut,
    TicketStatsOverview,
    TicketStatusUpdate,
    VoiceTicketCreate,
)
from app.ticket.services import TicketStore, get_ticket_store
router = APIRouter(prefix="/tickets", tags=["Tickets"])


def ticket_store(db: Session = Depends(get_db)) -> TicketStore:
    return get_ticket_store(db)


@router.get("/", response_model=TicketListOut)
def list_all(
    status: TicketStatus | None = Query(default=None, description="Filter by status, e.g. Open or Resolved"),
    user: AuthContext = Depends(get_current_user),
    store: TicketStore = Depends(ticket_store),
):
    items = store.list_tickets() if user.is_admin else store.get_user_tickets(user.user_id)
    if status:
        items = [t for t in items if t.status == status]
    return {"tickets": items, "stats": store.stats()}


@router.post("/voice", response_model=TicketOut, status_code=201)
def create_from_voice(
    payload: VoiceTicketCreate,
    user: AuthContext = Depends(get_current_user),
    store: TicketStore = Depends(ticket_store),
):
    return store.create_from_voice(
        payload.voice_input,
        user.user_id,
        payload.location or user.unit_number,
        source=Source.WEB,
    )


@router.get("/technicians/available", response_model=list[TechnicianOut])
def available_technicians(
    _: AuthContext = Depends(require_admin),
    store: TicketStore = Depends(ticket_store),
):
    return store.available_technicians()


@router.get("/technicians/all", response_model=list[TechnicianOut])
def all_technicians(
    _: AuthContext = Depends(require_admin),
    store: TicketStore = Depends(ticket_store),
):
    return store.list_technicians()


@router.get("/stats/overview", response_model=TicketStatsOverview)
def stats_overview(
    _: AuthContext = Depends(require_admin),
    store: TicketStore = Depends(ticket_store),
):
    return {"stats": store.stats(), "trends": store.issue_trends()}


@router.get("/{ticket_id}", response_model=TicketOut)
def get(
    ticket_id: str,
    user: AuthContext = Depends(get_current_user),
    store: TicketStore = Depends(ticket_store),
):
    ticket = store.get_ticket(ticket_id)
    if not ticket:
        raise HTTPException(status_code=404, detail="Ticket not found")
    if not user.is_admin and ticket.user_id != user.user_id:
        raise HTTPException(status_code=403, detail="Access denied")
    return ticket


@router.put("/{ticket_id}/status", response_model=TicketOut)
def update_status(
    ticket_id: str,
    payload: TicketStatusUpdate,
    _: AuthContext = Depends(require_admin),
    store: TicketStore = Depends(ticket_store),
):
    updated = store.update_status(ticket_id, payload.status)
    if not updated:
        raise HTTPException(status_code=404, detail="Ticket not found")
    return updated


@router.put("/{ticket_id}/assign", response_model=TicketOut)
def assign(
    ticket_id: str,
    payload: TicketAssign,
    _: AuthContext = Depends(require_admin),
    store: TicketStore = Depends(ticket_store),
):
    updated = store.assign_manually(ticket_id, payload.technician_id)
    if not updated:
        raise HTTPException(status_code=404, detail="Ticket or technician not found")
    return updated
