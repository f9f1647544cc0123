# tests/test_tickets.py
import pytest

from app.core.errors import InvalidTransitionError
from app.ticket.models import Technician, TicketStatus
from app.ticket.services import get_ticket_store
from app.voice.classifier import IssueType, Priority

RESIDENT_ID = 101
OTHER_RESIDENT_ID = 102


@pytest.fixture
def store(db):
    return get_ticket_store(db)


@pytest.fixture
def single_plumber(db):
    # leave exactly one free plumber
    db.query(Technician).filter(Technician.id == 5).update({"available": False})
    db.commit()


def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json()["status"] == "ok"


def test_create_from_voice_classifies_and_assigns(store):
    ticket = store.create_from_voice("Water leak in unit 205, urgent!", RESIDENT_ID, "Unit 5")

    assert ticket.priority == Priority.P1
    assert ticket.issue_type == IssueType.PLUMBING
    assert "205" in ticket.location
    assert ticket.title == "Water Leak Issue"
    assert ticket.description == "Water leak in unit 205, urgent!"
    assert ticket.status == TicketStatus.ASSIGNED
    assert ticket.technician == "John Smith"
    assert ticket.technician_id == 1
    assert ticket.assigned_at is not None


def test_second_ticket_stays_open_when_no_technician_free(store, single_plumber):
    first = store.create_from_voice("kitchen sink leak", RESIDENT_ID, "Unit 5")
    assert first.status == TicketStatus.ASSIGNED
    assert store.technicians.find_by_id(1).available is False

    second = store.create_from_voice("toilet leak", RESIDENT_ID, "Unit 5")
    assert second.status == TicketStatus.OPEN
    assert second.technician is None
    assert second.technician_id is None
    assert second.assigned_at is None


def test_general_ticket_is_never_auto_assigned(store):
    ticket = store.create_from_voice("the mailbox lock feels odd", RESIDENT_ID, "Unit 5")
    assert ticket.issue_type == IssueType.GENERAL
    assert ticket.status == TicketStatus.OPEN


def test_priority_hint_is_applied_at_creation(store):
    ticket = store.create_from_voice(
        "light bulb replacement please", RESIDENT_ID, "Unit 5", priority=Priority.P2
    )
    assert ticket.priority == Priority.P2


def test_claim_if_available_only_succeeds_once(store):
    assert store.technicians.claim_if_available(3) is True
    assert store.technicians.claim_if_available(3) is False


def test_repository_listings(store):
    mine = store.create_from_voice("wifi is down", RESIDENT_ID, "Unit 5")
    store.create_from_voice("noise at night", OTHER_RESIDENT_ID, "Unit 9")

    assert [t.id for t in store.tickets.find_by_owner(RESIDENT_ID)] == [mine.id]
    assert len(store.tickets.list()) == 2
    assert [t.id for t in store.tickets.list(TicketStatus.ASSIGNED)] == [mine.id]
    assert [t.id for t in store.technicians.list_available(IssueType.INTERNET)] == []


def test_resolving_frees_technician(store, single_plumber):
    ticket = store.create_from_voice("bathroom tap leak", RESIDENT_ID, "Unit 5")
    assert store.technicians.find_by_id(1).available is False

    resolved = store.update_status(ticket.id, TicketStatus.RESOLVED)
    assert resolved.status == TicketStatus.RESOLVED
    assert resolved.resolved_at is not None
    assert store.technicians.find_by_id(1).available is True

    # the freed plumber picks up the next leak
    follow_up = store.create_from_voice("another leak under the sink", RESIDENT_ID, "Unit 5")
    assert follow_up.technician_id == 1


def test_status_only_moves_forward(store):
    ticket = store.create_from_voice("wifi is down", RESIDENT_ID, "Unit 5")
    assert ticket.status == TicketStatus.ASSIGNED

    store.update_status(ticket.id, TicketStatus.IN_PROGRESS)
    with pytest.raises(InvalidTransitionError):
        store.update_status(ticket.id, TicketStatus.OPEN)

    # skipping ahead is allowed, repeating the current status is a no-op
    assert store.update_status(ticket.id, TicketStatus.IN_PROGRESS).status == TicketStatus.IN_PROGRESS
    assert store.update_status(ticket.id, TicketStatus.RESOLVED).status == TicketStatus.RESOLVED


def test_update_status_unknown_ticket_returns_none(store):
    assert store.update_status("does-not-exist", TicketStatus.RESOLVED) is None


def test_assign_manually_ignores_specialization(store):
    ticket = store.create_from_voice("the mailbox lock feels odd", RESIDENT_ID, "Unit 5")
    assigned = store.assign_manually(ticket.id, 4)

    assert assigned.status == TicketStatus.ASSIGNED
    assert assigned.technician == "David Brown"
    assert store.technicians.find_by_id(4).available is False


def test_assign_manually_unknown_ids(store):
    ticket = store.create_from_voice("the mailbox lock feels odd", RESIDENT_ID, "Unit 5")
    assert store.assign_manually(ticket.id, 999) is None
    assert store.assign_manually("nope", 1) is None


def test_user_tickets_read_is_pure(store):
    assert store.get_user_tickets(RESIDENT_ID) == []
    assert store.get_user_tickets(RESIDENT_ID) == []
    assert store.list_tickets() == []


def test_stats_and_trends(store):
    store.create_from_voice("fire alarm beeping in the kitchen", RESIDENT_ID, "Unit 5")
    store.create_from_voice("the mailbox lock feels odd", RESIDENT_ID, "Unit 5")
    done = store.create_from_voice("wifi is down", RESIDENT_ID, "Unit 5")
    store.update_status(done.id, TicketStatus.RESOLVED)

    stats = store.stats()
    assert stats.total == 3
    assert stats.open == 1
    assert stats.assigned == 1
    assert stats.resolved == 1
    assert stats.high_priority == 1

    trends = store.issue_trends()
    assert trends["Plumbing"].count == 1
    assert trends["Plumbing"].locations == {"Unit 5 - Kitchen": 1}
    assert trends["General"].count == 1


def test_voice_ticket_route(client, resident_headers):
    r = client.post(
        "/tickets/voice",
        json={"voiceInput": "Water leak in unit 205, urgent!"},
        headers=resident_headers,
    )
    assert r.status_code == 201
    data = r.json()
    assert data["priority"] == "P1"
    assert data["issueType"] == "Plumbing"
    assert data["status"] == "Assigned"
    assert data["userId"] == RESIDENT_ID
    assert data["source"] == "Web"

    r2 = client.get(f"/tickets/{data['id']}", headers=resident_headers)
    assert r2.status_code == 200
    assert r2.json()["technicianId"] == 1


def test_voice_ticket_uses_unit_number_as_fallback(client, resident_headers):
    r = client.post("/tickets/voice", json={"voiceInput": "broken handle"}, headers=resident_headers)
    assert r.status_code == 201
    assert r.json()["location"] == "Unit 5"


def test_create_validation_errors(client, resident_headers):
    # missing voice input
    r1 = client.post("/tickets/voice", json={}, headers=resident_headers)
    assert r1.status_code == 422

    # empty string (fails min_length=1)
    r2 = client.post("/tickets/voice", json={"voiceInput": ""}, headers=resident_headers)
    assert r2.status_code == 422


def test_get_not_found_returns_404(client, resident_headers):
    r = client.get("/tickets/9999999", headers=resident_headers)
    assert r.status_code == 404
    assert r.json()["detail"] == "Ticket not found"


def test_other_residents_ticket_is_forbidden(client, resident_headers, other_resident_headers):
    tid = client.post(
        "/tickets/voice", json={"voiceInput": "noise at night"}, headers=resident_headers
    ).json()["id"]

    r = client.get(f"/tickets/{tid}", headers=other_resident_headers)
    assert r.status_code == 403


def test_list_scoped_by_role(client, resident_headers, other_resident_headers, admin_headers):
    client.post("/tickets/voice", json={"voiceInput": "noise at night"}, headers=resident_headers)
    client.post("/tickets/voice", json={"voiceInput": "wifi down"}, headers=other_resident_headers)

    mine = client.get("/tickets/", headers=resident_headers).json()
    assert [t["userId"] for t in mine["tickets"]] == [RESIDENT_ID]

    everything = client.get("/tickets/", headers=admin_headers).json()
    assert {t["userId"] for t in everything["tickets"]} == {RESIDENT_ID, OTHER_RESIDENT_ID}
    assert everything["stats"]["total"] == 2


def test_filter_by_status_open_only(client, resident_headers, admin_headers):
    a = client.post("/tickets/voice", json={"voiceInput": "noise at night"}, headers=resident_headers).json()
    b = client.post("/tickets/voice", json={"voiceInput": "door squeaks"}, headers=resident_headers).json()

    # resolve one of them
    client.put(f"/tickets/{b['id']}/status", json={"status": "Resolved"}, headers=admin_headers)

    r = client.get("/tickets/?status=Open", headers=resident_headers)
    assert r.status_code == 200
    ids = {t["id"] for t in r.json()["tickets"]}
    assert a["id"] in ids
    assert b["id"] not in ids


def test_status_update_requires_admin(client, resident_headers):
    tid = client.post("/tickets/voice", json={"voiceInput": "noise at night"}, headers=resident_headers).json()["id"]
    r = client.put(f"/tickets/{tid}/status", json={"status": "Resolved"}, headers=resident_headers)
    assert r.status_code == 403


def test_status_cannot_go_backwards_over_http(client, resident_headers, admin_headers):
    tid = client.post("/tickets/voice", json={"voiceInput": "wifi down"}, headers=resident_headers).json()["id"]
    client.put(f"/tickets/{tid}/status", json={"status": "Resolved"}, headers=admin_headers)

    r = client.put(f"/tickets/{tid}/status", json={"status": "Open"}, headers=admin_headers)
    assert r.status_code == 409


def test_assign_route(client, resident_headers, admin_headers):
    tid = client.post("/tickets/voice", json={"voiceInput": "noise at night"}, headers=resident_headers).json()["id"]

    r = client.put(f"/tickets/{tid}/assign", json={"technicianId": 2}, headers=admin_headers)
    assert r.status_code == 200
    assert r.json()["technician"] == "Mike Johnson"

    available = client.get("/tickets/technicians/available", headers=admin_headers).json()
    assert 2 not in {t["id"] for t in available}
    assert len(client.get("/tickets/technicians/all", headers=admin_headers).json()) == 6

    missing = client.put(f"/tickets/{tid}/assign", json={"technicianId": 42}, headers=admin_headers)
    assert missing.status_code == 404


def test_stats_overview(client, resident_headers, admin_headers):
    client.post("/tickets/voice", json={"voiceInput": "gas smell in kitchen"}, headers=resident_headers)
    r = client.get("/tickets/stats/overview", headers=admin_headers)
    assert r.status_code == 200
    body = r.json()
    assert body["stats"]["highPriority"] == 1
    assert body["trends"]["Plumbing"]["count"] == 1
