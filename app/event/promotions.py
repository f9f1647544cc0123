# app/event/promotions.py
from datetime import datetime

from app.event.models import Event


def _long_date(value: datetime) -> str:
    return f"{value:%A}, {value:%B} {value.day}, {value.year}"


def _short_date(value: datetime) -> str:
    return f"{value.month}/{value.day}/{value.year}"


def whatsapp_message(event: Event) -> str:
    return (
        f"🎉 *{event.title}* 🎉\n\n"
        "Join us for an amazing community event!\n\n"
        f"📅 *When:* {_long_date(event.date)}\n"
        f"📍 *Where:* {event.facility}\n"
        f"👥 *Expected:* {event.estimated_attendance} residents\n\n"
        f"{event.description}\n\n"
        "Don't miss out on the fun! See you there! 🌟\n\n"
        "_Reply with ✅ if you're attending_"
    )


def bulletin_text(event: Event) -> str:
    return (
        "COMMUNITY EVENT ANNOUNCEMENT\n\n"
        f"{event.title.upper()}\n\n"
        f"{event.description}\n\n"
        f"Date: {_short_date(event.date)}\n"
        f"Venue: {event.facility}\n"
        f"Expected Attendance: {event.estimated_attendance} residents\n\n"
        "Come together with your neighbors for a wonderful time!\n\n"
        "For more information, contact the management office.\n\n"
        "- Community Management Team"
    )


def voice_script(event: Event) -> str:
    when = f"{event.date:%A}, {event.date:%B} {event.date.day}"
    return (
        "Attention residents! We have an exciting community event coming up.\n\n"
        f"Join us for {event.title} on {when} at our {event.facility}.\n\n"
        f"{event.description}\n\n"
        "This is a great opportunity to connect with your neighbors.\n\n"
        f"We expect around {event.estimated_attendance} residents to participate.\n\n"
        "Mark your calendars and we'll see you there!"
    )


def build_promotions(event: Event) -> dict[str, str]:
    return {
        "whatsapp": whatsapp_message(event),
        "bulletin": bulletin_text(event),
        "voice": voice_script(event),
    }
