# app/core/seed.py
"""Startup data: the technician roster, a few sample events and the admin account.

Only fills empty tables, so it is safe to run on every start.
"""

from datetime import timedelta

from sqlalchemy.orm import Session

from app.auth.models import User
from app.core.clock import utcnow
from app.core.config import get_settings
from app.core.ids import next_id
from app.core.logging import logger
from app.core.security import hash_password
from app.event.models import Event
from app.ticket.models import Technician
from app.voice.classifier import IssueType

TECHNICIANS = (
    (1, "John Smith", IssueType.PLUMBING),
    (2, "Mike Johnson", IssueType.ELECTRICAL),
    (3, "Sarah Wilson", IssueType.INTERNET),
    (4, "David Brown", IssueType.HOUSEKEEPING),
    (5, "Lisa Garcia", IssueType.PLUMBING),
    (6, "Tom Anderson", IssueType.ELECTRICAL),
)


def seed_technicians(db: Session) -> None:
    if db.query(Technician).first():
        return
    db.add_all(
        Technician(id=tid, name=name, specialization=specialization, available=True)
        for tid, name, specialization in TECHNICIANS
    )
    db.commit()
    logger.info(f"Seeded {len(TECHNICIANS)} technicians")


def seed_events(db: Session) -> None:
    if db.query(Event).first():
        return
    now = utcnow()
    samples = (
        ("Community BBQ", "Join us for a fun BBQ event at the terrace", 7, "Terrace", "Food & Social", "Planned", 50),
        ("Yoga Session", "Morning yoga in the garden", 3, "Garden", "Fitness", "Active", 25),
        ("Movie Night", "Outdoor movie screening under the stars", 5, "Garden", "Entertainment", "Planned", 40),
    )
    db.add_all(
        Event(
            id=next_id(),
            title=title,
            description=description,
            date=now + timedelta(days=days_ahead),
            location=facility,
            facility=facility,
            category=category,
            status=status,
            estimated_attendance=attendance,
            created_at=now,
            created_by="admin",
            promotions={},
        )
        for title, description, days_ahead, facility, category, status, attendance in samples
    )
    db.commit()
    logger.info(f"Seeded {len(samples)} sample events")


def seed_admin(db: Session) -> None:
    settings = get_settings()
    if db.query(User).filter(User.role == "admin").first():
        return
    db.add(
        User(
            email=settings.ADMIN_EMAIL.lower(),
            password_hash=hash_password(settings.ADMIN_PASSWORD),
            first_name="Admin",
            last_name="User",
            unit_number="ADMIN",
            role="admin",
            created_at=utcnow(),
        )
    )
    db.commit()
    logger.info(f"Seeded admin account {settings.ADMIN_EMAIL}")


def seed_defaults(db: Session, demo_data: bool = True) -> None:
    seed_technicians(db)
    if demo_data:
        seed_events(db)
        seed_admin(db)
